"""
SQLAlchemy ORM models for dtlearn (persisted in SQLite).

Stores parsed datasets and the metrics of evaluation runs.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from dtlearn.database import Base


class DatasetModel(Base):
    """Parsed dataset: variables, output variable and examples as JSON."""

    __tablename__ = "datasets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Problem.model_dump(mode="json"): name, variables, output, examples
    problem_json: Mapped[dict] = mapped_column(JSON, nullable=False)
    example_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class EvaluationRunModel(Base):
    """Held-out accuracy of one learning run on a dataset."""

    __tablename__ = "evaluation_runs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    dataset_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    criterion: Mapped[str] = mapped_column(String(32), nullable=False)
    purity_check: Mapped[str] = mapped_column(String(32), nullable=False)
    train_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accuracy: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    tree_depth: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tree_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    run_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
