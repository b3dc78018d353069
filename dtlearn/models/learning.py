"""
Data model for decision-tree learning over discrete-valued examples.

Variables describe attributes and their ordered domains, examples pair an
attribute->value mapping with an output label, and a learned tree is either
a Leaf or a Split with one child per domain value. All models are Pydantic v2,
frozen once constructed, and support JSON schema generation.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from dtlearn.errors import InvalidInputError


# -----------------------------------------------------------------------------
# Variables and examples
# -----------------------------------------------------------------------------


class Variable(BaseModel):
    """A named attribute with a finite, ordered domain of values."""

    name: str = Field(..., description="Attribute name (e.g. 'Patrons')")
    domain: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Ordered possible values; children of a Split follow this order",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    def __str__(self) -> str:
        return self.name


class FrozenValues(dict):
    """Read-only attribute name -> value mapping held by an Example."""

    def _readonly(self, *args, **kwargs):
        raise TypeError("Example values are read-only")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __hash__(self) -> int:
        return hash(frozenset(self.items()))

    def __reduce__(self):
        return (type(self), (dict(self),))


class Example(BaseModel):
    """One labeled training instance."""

    values: dict[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Attribute name -> observed value (read-only)",
    )
    output: str = Field(..., description="Output label (classification)")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("values", mode="after")
    @classmethod
    def _freeze_values(cls, values: dict[str, str]) -> FrozenValues:
        return FrozenValues(values)

    def value(self, attribute: Union[Variable, str]) -> str:
        name = attribute.name if isinstance(attribute, Variable) else attribute
        try:
            return self.values[name]
        except KeyError:
            raise InvalidInputError(f"Example has no value for attribute '{name}'") from None


def _lookup(values: Union[Example, Mapping[str, str]], name: str) -> str:
    if isinstance(values, Example):
        return values.value(name)
    if name not in values:
        raise InvalidInputError(f"No value given for attribute '{name}'")
    return values[name]


# -----------------------------------------------------------------------------
# Decision tree (Leaf | Split)
# -----------------------------------------------------------------------------


class Leaf(BaseModel):
    """Terminal node predicting a fixed output label."""

    kind: Literal["leaf"] = "leaf"
    label: str = Field(..., description="Predicted output label")

    model_config = {"frozen": True, "extra": "forbid"}

    def classify(self, values: Union[Example, Mapping[str, str]]) -> str:
        return self.label

    def depth(self) -> int:
        return 0

    def size(self) -> int:
        return 1


class Split(BaseModel):
    """
    Internal node testing one attribute.

    children[i] is the subtree for attribute.domain[i]; the two sequences
    always have the same length.
    """

    kind: Literal["split"] = "split"
    attribute: Variable = Field(..., description="Attribute tested at this node")
    children: tuple["DecisionTree", ...] = Field(
        default_factory=tuple,
        description="One subtree per domain value, in domain order",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _one_child_per_value(self) -> "Split":
        if len(self.children) != len(self.attribute.domain):
            raise ValueError(
                f"Split on '{self.attribute.name}' has {len(self.children)} children "
                f"for {len(self.attribute.domain)} domain values"
            )
        return self

    def child_for(self, value: str) -> "DecisionTree":
        """Return the subtree for the given value of the tested attribute."""
        try:
            index = self.attribute.domain.index(value)
        except ValueError:
            raise InvalidInputError(
                f"Value '{value}' is not in the domain of '{self.attribute.name}'"
            ) from None
        return self.children[index]

    def classify(self, values: Union[Example, Mapping[str, str]]) -> str:
        node: DecisionTree = self
        while isinstance(node, Split):
            node = node.child_for(_lookup(values, node.attribute.name))
        return node.label

    def depth(self) -> int:
        return 1 + max((c.depth() for c in self.children), default=0)

    def size(self) -> int:
        return 1 + sum(c.size() for c in self.children)


DecisionTree = Annotated[Union[Leaf, Split], Field(discriminator="kind")]

Split.model_rebuild()


# -----------------------------------------------------------------------------
# Problem (parsed dataset)
# -----------------------------------------------------------------------------


class Problem(BaseModel):
    """An already-parsed dataset: input variables, output variable and examples."""

    name: str = Field(default="dataset", description="Human-readable dataset name")
    variables: tuple[Variable, ...] = Field(default_factory=tuple, description="Input attributes, in definition order")
    output: Variable = Field(..., description="Output variable; its domain lists the possible labels")
    examples: tuple[Example, ...] = Field(default_factory=tuple, description="Labeled examples, in input order")

    model_config = {"frozen": True, "extra": "forbid"}

    def variable(self, name: str) -> Optional[Variable]:
        return next((v for v in self.variables if v.name == name), None)


# -----------------------------------------------------------------------------
# JSON Schema
# -----------------------------------------------------------------------------

SCHEMA_VERSION = "1.0.0"


class _TreeDocument(BaseModel):
    tree: DecisionTree


def get_learning_json_schema() -> dict[str, Any]:
    """
    Return a JSON schema whose root is a Problem and whose $defs also cover
    the DecisionTree union (Leaf, Split).
    """
    problem_schema = Problem.model_json_schema()
    tree_schema = _TreeDocument.model_json_schema()
    defs = {**(problem_schema.get("$defs", {})), **(tree_schema.get("$defs", {}))}
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": "dtlearn Problem and Decision Tree Schema",
        "version": SCHEMA_VERSION,
        **{k: v for k, v in problem_schema.items() if k not in ("$defs", "$schema", "title")},
        "$defs": defs,
    }


def write_learning_schema_to_file(path: Union[str, Path]) -> Path:
    """Write the current schema to `path` (parents are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(get_learning_json_schema(), indent=2), encoding="utf-8")
    return path
