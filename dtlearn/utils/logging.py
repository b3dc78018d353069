"""
Structured logging for dtlearn.

- Configurable level (DEBUG, INFO, WARN, ERROR)
- Writes to a logs/ directory (file handler) plus a console handler
- Helpers for learning steps, validation results and evaluation runs
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

# Default: project root / logs
LOG_DIR = Path(os.getenv("DTLEARN_LOG_DIR", str(Path(__file__).resolve().parent.parent.parent / "logs")))
LOG_LEVEL = os.getenv("DTLEARN_LOG_LEVEL", "INFO").upper()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def configure_logging(
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = None,
    log_to_console: bool = True,
) -> None:
    """Configure root and dtlearn loggers. Call once at app startup."""
    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    level_value = getattr(logging, level, logging.INFO)

    file_handler = logging.FileHandler(log_dir / "dtlearn.log", encoding="utf-8")
    file_handler.setLevel(level_value)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root = logging.getLogger()
    root.setLevel(level_value)
    # Avoid duplicate handlers when reloading
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(file_handler)
    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level_value)
        console.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        root.addHandler(console)

    logging.getLogger("dtlearn").setLevel(level_value)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module (e.g. dtlearn.services.learning_service)."""
    return logging.getLogger(name)


def log_learning_step(
    logger: logging.Logger,
    step: str,
    dataset: str,
    duration_sec: Optional[float] = None,
    success: bool = True,
    error: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Log a learning step (e.g. validate_inputs, build_tree, check_structure)."""
    payload = {
        "event": "learning_step",
        "step": step,
        "dataset": dataset,
        "duration_sec": duration_sec,
        "success": success,
        "error": error,
        "ts": _timestamp(),
    }
    if extra:
        payload.update(extra)
    if success:
        logger.info("Learning: %s", json.dumps(payload, default=str))
    else:
        logger.warning("Learning: %s", json.dumps(payload, default=str))


def log_validation_result(
    logger: logging.Logger,
    dataset: str,
    input_issues: int,
    structure_issues: int = 0,
) -> None:
    """Log a validation run result."""
    payload = {
        "event": "validation",
        "dataset": dataset,
        "input_issues": input_issues,
        "structure_issues": structure_issues,
        "ts": _timestamp(),
    }
    level = logging.WARNING if (input_issues or structure_issues) else logging.INFO
    logger.log(level, "Validation: %s", json.dumps(payload, default=str))


def log_evaluation(
    logger: logging.Logger,
    dataset: str,
    total: int,
    correct: int,
    duration_sec: Optional[float] = None,
) -> None:
    """Log the accuracy of an evaluation run."""
    payload = {
        "event": "evaluation",
        "dataset": dataset,
        "total": total,
        "correct": correct,
        "accuracy": (correct / total) if total else None,
        "duration_sec": duration_sec,
        "ts": _timestamp(),
    }
    logger.info("Evaluation: %s", json.dumps(payload, default=str))
