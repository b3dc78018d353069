"""
Monitoring for dtlearn.

- Health check: DB connectivity
- Metrics: dataset and evaluation counts, mean held-out accuracy
"""

import logging
from typing import Any

from sqlalchemy import func, text
from sqlalchemy.orm import Session

from dtlearn.database import engine
from dtlearn.models_db import DatasetModel, EvaluationRunModel

logger = logging.getLogger(__name__)


def check_db() -> tuple[bool, str]:
    """Check database connectivity. Returns (ok, message)."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, "ok"
    except Exception as e:
        logger.warning("Database check failed: %s", e)
        return False, str(e)


def get_health() -> dict[str, Any]:
    """Return health status for /api/health."""
    db_ok, db_msg = check_db()
    return {
        "status": "healthy" if db_ok else "unhealthy",
        "checks": {
            "database": {"status": "up" if db_ok else "down", "message": db_msg},
        },
    }


def get_metrics(db: Session) -> dict[str, Any]:
    """Aggregate metrics for /api/metrics."""
    datasets = db.query(func.count(DatasetModel.id)).scalar() or 0
    examples = db.query(func.coalesce(func.sum(DatasetModel.example_count), 0)).scalar() or 0
    runs = db.query(func.count(EvaluationRunModel.id)).scalar() or 0
    mean_accuracy = db.query(func.avg(EvaluationRunModel.accuracy)).scalar()
    return {
        "datasets_total": datasets,
        "examples_total": int(examples),
        "evaluation_runs_total": runs,
        "mean_accuracy": float(mean_accuracy) if mean_accuracy is not None else None,
    }
