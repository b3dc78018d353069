"""
Dataset ingestion pipeline: CSV text -> Problem (variables, output, examples) -> DB.

The header row names the columns; one column (the last by default) holds the
output label. Attribute domains are taken from the values in order of first
appearance unless explicit domains are supplied.
"""

import csv
import io
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from dtlearn.database import SessionLocal
from dtlearn.errors import InvalidInputError
from dtlearn.models.learning import Example, Problem, Variable
from dtlearn.models_db import DatasetModel
from dtlearn.validation import find_input_issues, raise_for_issues

logger = logging.getLogger(__name__)


class DatasetRecord(BaseModel):
    """Summary of a stored dataset."""

    id: str = Field(..., description="Unique dataset ID")
    name: str = Field(..., description="Dataset name")
    description: Optional[str] = Field(None, description="Free-text description")
    variables: list[str] = Field(default_factory=list, description="Input attribute names")
    output: str = Field(..., description="Output variable name")
    example_count: int = Field(0, description="Number of examples")
    created_at: Optional[datetime] = Field(None, description="When stored")


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def _read_rows(text: str) -> list[list[str]]:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    rows = []
    for row in csv.reader(io.StringIO(text)):
        cells = [c.strip() for c in row]
        if not any(cells):
            continue
        if not rows and cells[0].startswith("#"):
            continue
        rows.append(cells)
    return rows


def parse_examples_csv(
    text: str,
    output_column: Optional[str] = None,
    domains: Optional[dict[str, list[str]]] = None,
    name: str = "dataset",
) -> Problem:
    """
    Parse CSV text into a Problem.

    Blank lines are skipped, as are lines starting with '#' before the
    header; after the header a leading '#' is an ordinary value. Raises
    InvalidInputError for a missing header, ragged rows, an unknown output
    column or values outside explicitly given domains.
    """
    rows = _read_rows(text)
    if not rows:
        raise InvalidInputError("Dataset has no header row")
    header, body = rows[0], rows[1:]
    if len(set(header)) != len(header):
        raise InvalidInputError(f"Duplicate column names in header: {header}")
    if len(header) < 2:
        raise InvalidInputError("Dataset needs at least one attribute column and an output column")

    output_name = output_column or header[-1]
    if output_name not in header:
        raise InvalidInputError(f"Output column '{output_name}' is not in the header")
    out_idx = header.index(output_name)

    observed: dict[str, dict[str, None]] = {col: {} for col in header}
    examples: list[Example] = []
    for line_no, row in enumerate(body, start=2):
        if len(row) != len(header):
            raise InvalidInputError(f"Row {line_no} has {len(row)} cells, expected {len(header)}")
        for col, cell in zip(header, row):
            observed[col].setdefault(cell, None)
        values = {col: cell for i, (col, cell) in enumerate(zip(header, row)) if i != out_idx}
        examples.append(Example(values=values, output=row[out_idx]))

    domains = domains or {}
    unknown = set(domains) - set(header)
    if unknown:
        raise InvalidInputError(f"Domains given for unknown columns: {sorted(unknown)}")

    def variable(col: str) -> Variable:
        return Variable(name=col, domain=tuple(domains.get(col) or observed[col]))

    problem = Problem(
        name=name,
        variables=tuple(variable(col) for col in header if col != output_name),
        output=variable(output_name),
        examples=tuple(examples),
    )
    raise_for_issues(find_input_issues(problem.examples, problem.variables, problem.output))
    logger.info(
        "Parsed dataset '%s': %d examples, %d attributes, output=%s",
        name, len(examples), len(problem.variables), output_name,
    )
    return problem


def ingest_csv(
    file_path: str,
    output_column: Optional[str] = None,
    domains: Optional[dict[str, list[str]]] = None,
    name: Optional[str] = None,
) -> Problem:
    """Read and parse a CSV dataset file."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {file_path}")
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_examples_csv(text, output_column=output_column, domains=domains, name=name or path.stem)


# -----------------------------------------------------------------------------
# Storage
# -----------------------------------------------------------------------------


def _to_record(row: DatasetModel) -> DatasetRecord:
    problem = row.problem_json or {}
    return DatasetRecord(
        id=row.id,
        name=row.name,
        description=row.description,
        variables=[v["name"] for v in problem.get("variables", [])],
        output=(problem.get("output") or {}).get("name", ""),
        example_count=row.example_count,
        created_at=row.created_at,
    )


def store_dataset(
    problem: Problem,
    db: Optional[Session] = None,
    dataset_id: Optional[str] = None,
    description: Optional[str] = None,
) -> DatasetRecord:
    """Insert or overwrite a dataset. Returns its summary."""
    own_session = db is None
    if own_session:
        db = SessionLocal()
    dataset_id = dataset_id or str(uuid.uuid4())[:12]
    payload = problem.model_dump(mode="json")
    try:
        row = db.query(DatasetModel).filter(DatasetModel.id == dataset_id).first()
        if row:
            row.name = problem.name
            row.description = description
            row.problem_json = payload
            row.example_count = len(problem.examples)
        else:
            row = DatasetModel(
                id=dataset_id,
                name=problem.name,
                description=description,
                problem_json=payload,
                example_count=len(problem.examples),
            )
            db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Stored dataset %s (%s, %d examples)", row.id, row.name, row.example_count)
        return _to_record(row)
    finally:
        if own_session:
            db.close()


def get_dataset(dataset_id: str, db: Optional[Session] = None) -> Optional[Problem]:
    """Load a stored dataset as a Problem, or None."""
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        row = db.query(DatasetModel).filter(DatasetModel.id == dataset_id).first()
        if not row:
            return None
        return Problem.model_validate(row.problem_json)
    finally:
        if own_session:
            db.close()


def get_dataset_record(dataset_id: str, db: Session) -> Optional[DatasetRecord]:
    row = db.query(DatasetModel).filter(DatasetModel.id == dataset_id).first()
    return _to_record(row) if row else None


def list_datasets(db: Session) -> list[DatasetRecord]:
    rows = db.query(DatasetModel).order_by(DatasetModel.created_at.desc()).all()
    return [_to_record(r) for r in rows]


def delete_dataset(dataset_id: str, db: Session) -> bool:
    row = db.query(DatasetModel).filter(DatasetModel.id == dataset_id).first()
    if not row:
        return False
    db.delete(row)
    db.commit()
    logger.info("Deleted dataset %s", dataset_id)
    return True
