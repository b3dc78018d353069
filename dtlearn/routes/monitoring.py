"""Health and metrics endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dtlearn.database import get_db
from dtlearn.services.monitoring_service import get_health, get_metrics

router = APIRouter(tags=["monitoring"])


@router.get("/health", summary="Health check")
def health():
    """Health check for load balancers and orchestration."""
    return get_health()


@router.get("/metrics", summary="Aggregate metrics")
def metrics(db: Session = Depends(get_db)):
    """Datasets stored, examples, evaluation runs and mean held-out accuracy."""
    return get_metrics(db)
