"""
Learning API: build a tree from a stored or inline dataset, classify with a
tree, validate a dataset. Trees are returned to the caller, not stored.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from dtlearn.database import get_db
from dtlearn.errors import InvalidInputError
from dtlearn.models.learning import DecisionTree, Problem
from dtlearn.services.evaluation_service import classify_example
from dtlearn.services.ingestion_service import get_dataset
from dtlearn.services.learning_service import (
    LearnerOptions,
    learn_problem,
    render_tree,
    tree_to_view,
    validate_problem,
)

router = APIRouter()


class LearnRequest(BaseModel):
    dataset_id: Optional[str] = Field(None, description="ID of a stored dataset")
    problem: Optional[Problem] = Field(None, description="Inline dataset (used when dataset_id is not set)")
    options: Optional[LearnerOptions] = Field(None, description="Learner options")


class ClassifyRequest(BaseModel):
    tree: DecisionTree = Field(..., description="Tree as returned by POST /api/learn")
    values: dict[str, str] = Field(default_factory=dict, description="Attribute name -> value")


@router.post("/")
def learn_tree(body: LearnRequest, db: Session = Depends(get_db)):
    """Learn a decision tree. Returns the tree, a view for rendering and a text dump."""
    if body.dataset_id:
        problem = get_dataset(body.dataset_id, db)
        if problem is None:
            raise HTTPException(status_code=404, detail=f"Dataset '{body.dataset_id}' not found")
    elif body.problem is not None:
        problem = body.problem
    else:
        raise HTTPException(status_code=400, detail="Provide dataset_id or problem")

    try:
        result = learn_problem(problem, body.options or LearnerOptions())
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {
        **result.model_dump(mode="json"),
        "view": tree_to_view(result.tree).model_dump(mode="json"),
        "rendered": render_tree(result.tree),
    }


@router.post("/classify")
def classify(body: ClassifyRequest):
    """Walk the tree with the given attribute values and return the predicted label."""
    try:
        label, path = classify_example(body.tree, body.values)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"label": label, "path": [{"attribute": a, "value": v} for a, v in path]}


@router.post("/validate")
def validate(problem: Problem):
    """Report every issue with a dataset's variables and examples."""
    issues = validate_problem(problem)
    return {"issues": [i.model_dump() for i in issues], "valid": len(issues) == 0}
