"""
Dataset API: create from CSV (JSON body or upload), list, get, delete, evaluate.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from dtlearn.database import get_db
from dtlearn.errors import InvalidInputError
from dtlearn.models_db import EvaluationRunModel
from dtlearn.services.evaluation_service import evaluate_problem, record_evaluation
from dtlearn.services.ingestion_service import (
    DatasetRecord,
    delete_dataset,
    get_dataset,
    get_dataset_record,
    list_datasets,
    parse_examples_csv,
    store_dataset,
)
from dtlearn.services.learning_service import LearnerOptions

router = APIRouter()


class DatasetCreate(BaseModel):
    name: str = Field(..., description="Dataset name")
    csv_text: str = Field(..., description="CSV with a header row; output column last unless output_column is set")
    output_column: Optional[str] = Field(None, description="Name of the output column")
    domains: Optional[dict[str, list[str]]] = Field(None, description="Explicit ordered domains per column")
    description: Optional[str] = Field(None, description="Free-text description")


class EvaluateRequest(BaseModel):
    options: Optional[LearnerOptions] = Field(None, description="Learner options")
    test_fraction: float = Field(0.25, gt=0.0, lt=1.0, description="Share of examples held out for testing")
    seed: Optional[int] = Field(None, description="Shuffle seed for a reproducible split")


@router.post("/", status_code=201, response_model=DatasetRecord)
def create_dataset(body: DatasetCreate, db: Session = Depends(get_db)):
    """Parse CSV text into a dataset and store it."""
    try:
        problem = parse_examples_csv(body.csv_text, output_column=body.output_column, domains=body.domains, name=body.name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=f"Invalid dataset: {e}") from e
    return store_dataset(problem, db, description=body.description)


@router.post("/upload", status_code=201, response_model=DatasetRecord)
async def upload_dataset(
    file: UploadFile,
    name: Optional[str] = Form(None),
    output_column: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Upload a CSV file and store it as a dataset."""
    if not file.filename or not file.filename.lower().endswith((".csv", ".txt")):
        raise HTTPException(status_code=400, detail="Only .csv or .txt files are supported")
    content = (await file.read()).decode("utf-8", errors="replace")
    dataset_name = name or file.filename.rsplit(".", 1)[0]
    try:
        problem = parse_examples_csv(content, output_column=output_column, name=dataset_name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=f"Invalid dataset: {e}") from e
    return store_dataset(problem, db)


@router.get("/", response_model=list[DatasetRecord])
def get_datasets(db: Session = Depends(get_db)):
    """List stored datasets, newest first."""
    return list_datasets(db)


@router.get("/{dataset_id}")
def get_dataset_detail(dataset_id: str, db: Session = Depends(get_db)):
    """Return a dataset summary together with its variables and examples."""
    record = get_dataset_record(dataset_id, db)
    if not record:
        raise HTTPException(status_code=404, detail=f"Dataset '{dataset_id}' not found")
    problem = get_dataset(dataset_id, db)
    return {**record.model_dump(mode="json"), "problem": problem.model_dump(mode="json")}


@router.delete("/{dataset_id}", status_code=204)
def remove_dataset(dataset_id: str, db: Session = Depends(get_db)):
    if not delete_dataset(dataset_id, db):
        raise HTTPException(status_code=404, detail=f"Dataset '{dataset_id}' not found")


@router.post("/{dataset_id}/evaluate")
def evaluate_dataset(dataset_id: str, body: Optional[EvaluateRequest] = None, db: Session = Depends(get_db)):
    """Learn on a training split, classify the held-out examples and store the accuracy."""
    body = body or EvaluateRequest()
    problem = get_dataset(dataset_id, db)
    if problem is None:
        raise HTTPException(status_code=404, detail=f"Dataset '{dataset_id}' not found")
    options = body.options or LearnerOptions()
    try:
        suite = evaluate_problem(problem, options, test_fraction=body.test_fraction, seed=body.seed)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    row = record_evaluation(dataset_id, suite, options, db)
    return {"run_id": row.id, "dataset_id": dataset_id, **suite.to_dict()}


@router.get("/{dataset_id}/evaluations")
def list_evaluations(dataset_id: str, db: Session = Depends(get_db)):
    """List stored evaluation runs for a dataset, newest first."""
    rows = (
        db.query(EvaluationRunModel)
        .filter(EvaluationRunModel.dataset_id == dataset_id)
        .order_by(EvaluationRunModel.run_at.desc(), EvaluationRunModel.id.desc())
        .all()
    )
    return [
        {
            "run_id": r.id,
            "criterion": r.criterion,
            "purity_check": r.purity_check,
            "train_size": r.train_size,
            "total": r.total,
            "correct": r.correct,
            "accuracy": r.accuracy,
            "tree_depth": r.tree_depth,
            "tree_size": r.tree_size,
            "run_at": r.run_at.isoformat(),
        }
        for r in rows
    ]
