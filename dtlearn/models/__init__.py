"""
dtlearn core data models.

These models define examples, attribute descriptors and learned trees. For the
API rendering contract (tree views for a frontend), see also shared.schemas.
"""

from dtlearn.models.learning import (
    DecisionTree,
    Example,
    Leaf,
    Problem,
    Split,
    Variable,
    get_learning_json_schema,
    write_learning_schema_to_file,
)

__all__ = [
    "DecisionTree",
    "Example",
    "Leaf",
    "Problem",
    "Split",
    "Variable",
    "get_learning_json_schema",
    "write_learning_schema_to_file",
]
