"""
Input and tree validation.

find_input_issues and validate_tree_structure report every problem they find
as a list; raise_for_issues turns a report into the matching exception.
"""

from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, Field

from dtlearn.errors import ConfigurationError, InvalidInputError
from dtlearn.models.learning import DecisionTree, Example, Split, Variable

# Codes describing malformed attribute descriptors (ConfigurationError)
DESCRIPTOR_CODES = frozenset({"duplicate_attribute", "empty_domain", "duplicate_domain_value"})


class ValidationIssue(BaseModel):
    """A single validation issue."""

    code: str = Field(..., description="Issue code (e.g. empty_domain, value_out_of_domain)")
    message: str = Field(..., description="Human-readable message")
    attribute: Optional[str] = Field(None, description="Relevant attribute name if applicable")
    example_index: Optional[int] = Field(None, description="Index of the offending example if applicable")


# -----------------------------------------------------------------------------
# Examples and attributes
# -----------------------------------------------------------------------------


def _descriptor_issues(variable: Variable, seen: set[str]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if variable.name in seen:
        issues.append(
            ValidationIssue(
                code="duplicate_attribute",
                message=f"Attribute '{variable.name}' is declared more than once",
                attribute=variable.name,
            )
        )
    seen.add(variable.name)
    if not variable.domain:
        issues.append(
            ValidationIssue(code="empty_domain", message=f"Attribute '{variable.name}' has an empty domain", attribute=variable.name)
        )
    elif len(set(variable.domain)) != len(variable.domain):
        issues.append(
            ValidationIssue(
                code="duplicate_domain_value",
                message=f"Domain of '{variable.name}' repeats a value",
                attribute=variable.name,
            )
        )
    return issues


def find_input_issues(
    examples: Sequence[Example],
    attributes: Sequence[Variable],
    output: Optional[Variable] = None,
) -> list[ValidationIssue]:
    """
    Check attribute descriptors, then every example against them: each
    attribute must have a value and the value must be in its domain. When
    `output` is given, labels must be in its domain too.
    """
    issues: list[ValidationIssue] = []
    seen: set[str] = set()
    for variable in attributes:
        issues.extend(_descriptor_issues(variable, seen))
    if output is not None and not output.domain:
        issues.append(ValidationIssue(code="empty_domain", message="Output variable has an empty domain", attribute=output.name))

    domains = {v.name: set(v.domain) for v in attributes}
    for i, example in enumerate(examples):
        for name, domain in domains.items():
            if name not in example.values:
                issues.append(
                    ValidationIssue(
                        code="missing_value",
                        message=f"Example {i} has no value for '{name}'",
                        attribute=name,
                        example_index=i,
                    )
                )
            elif example.values[name] not in domain:
                issues.append(
                    ValidationIssue(
                        code="value_out_of_domain",
                        message=f"Example {i} has value '{example.values[name]}' outside the domain of '{name}'",
                        attribute=name,
                        example_index=i,
                    )
                )
        if output is not None and output.domain and example.output not in output.domain:
            issues.append(
                ValidationIssue(
                    code="output_out_of_domain",
                    message=f"Example {i} has label '{example.output}' outside the output domain",
                    attribute=output.name,
                    example_index=i,
                )
            )
    return issues


def raise_for_issues(issues: Sequence[ValidationIssue]) -> None:
    """Raise ConfigurationError or InvalidInputError for the first issue, if any."""
    if not issues:
        return
    descriptor = [i for i in issues if i.code in DESCRIPTOR_CODES]
    if descriptor:
        raise ConfigurationError("; ".join(i.message for i in descriptor))
    raise InvalidInputError("; ".join(i.message for i in issues[:5]) + (" ..." if len(issues) > 5 else ""))


# -----------------------------------------------------------------------------
# Tree structure
# -----------------------------------------------------------------------------


def validate_tree_structure(
    tree: DecisionTree,
    attributes: Optional[Sequence[Variable]] = None,
) -> list[ValidationIssue]:
    """
    Check: one child per domain value, no attribute tested twice on a
    root-to-leaf path, and (when `attributes` is given) only known attributes.

    Splits built through normal validation always have one child per value;
    the child count check matters for trees made with `model_construct`.
    """
    issues: list[ValidationIssue] = []
    known = {v.name for v in attributes} if attributes is not None else None
    stack: list[tuple[DecisionTree, frozenset[str]]] = [(tree, frozenset())]

    while stack:
        node, path = stack.pop()
        if not isinstance(node, Split):
            continue
        name = node.attribute.name
        if known is not None and name not in known:
            issues.append(ValidationIssue(code="unknown_attribute", message=f"Split tests unknown attribute '{name}'", attribute=name))
        if name in path:
            issues.append(
                ValidationIssue(
                    code="attribute_repeated_on_path",
                    message=f"Attribute '{name}' is tested more than once on one path",
                    attribute=name,
                )
            )
        if len(node.children) != len(node.attribute.domain):
            issues.append(
                ValidationIssue(
                    code="child_count_mismatch",
                    message=f"Split on '{name}' has {len(node.children)} children for {len(node.attribute.domain)} values",
                    attribute=name,
                )
            )
        for child in node.children:
            stack.append((child, path | {name}))
    return issues
