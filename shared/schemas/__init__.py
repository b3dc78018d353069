"""Shared schemas for dtlearn (API and frontend contract)."""

from shared.schemas.decision_tree import (
    Branch,
    NodeKind,
    TreeNodeView,
)

__all__ = [
    "Branch",
    "NodeKind",
    "TreeNodeView",
]
