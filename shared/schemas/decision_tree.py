"""
Decision tree view schema (Pydantic models).

Rendering contract between the API and a frontend: a learned tree flattened
into labeled nodes with explicit branch values.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class NodeKind(str, Enum):
    """Kind of node in a tree view."""

    LEAF = "leaf"
    SPLIT = "split"


class Branch(BaseModel):
    """Edge from a split to the subtree for one attribute value."""

    value: str = Field(..., description="Attribute value selecting this branch (e.g. 'Full')")
    node: "TreeNodeView" = Field(..., description="Subtree reached on this value")


class TreeNodeView(BaseModel):
    """Single node in the rendered tree."""

    id: str = Field(..., description="Path-derived node ID (e.g. 'root/Patrons=Full')")
    kind: NodeKind = Field(..., description="Leaf or split")
    label: str = Field(..., description="Predicted label (leaf) or tested attribute (split)")
    attribute: Optional[str] = Field(None, description="Tested attribute for split nodes")
    branches: list[Branch] = Field(default_factory=list, description="One branch per domain value, in domain order")


Branch.model_rebuild()
