"""
Queries over example sequences used by the learner and the attribute selectors.

All functions are pure: they never mutate the examples they are given, and
results preserve input order.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Optional, Union

from dtlearn.errors import PreconditionViolation
from dtlearn.models.learning import Example, Variable


def plurality_value(examples: Iterable[Example]) -> str:
    """
    Return the most common output label among the examples.

    Ties go to the label encountered first. Raises PreconditionViolation for
    an empty input.
    """
    counts = Counter(e.output for e in examples)
    if not counts:
        raise PreconditionViolation("plurality_value requires at least one example")
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0]


def unique_output_value(examples: Iterable[Example]) -> Optional[str]:
    """
    Return the first label that occurs in exactly one example, else None.

    This is the literal termination test of the original learner; it is not a
    homogeneity check. See homogeneous_output_value.
    """
    counts = Counter(e.output for e in examples)
    for label, count in counts.items():
        if count == 1:
            return label
    return None


def homogeneous_output_value(examples: Iterable[Example]) -> Optional[str]:
    """Return the shared label when every example has the same output, else None."""
    labels = {e.output for e in examples}
    if len(labels) == 1:
        return labels.pop()
    return None


def examples_with_value_for_attribute(
    examples: Iterable[Example],
    attribute: Union[Variable, str],
    value: str,
) -> list[Example]:
    """Return the examples whose value for `attribute` equals `value`."""
    return [e for e in examples if e.value(attribute) == value]


def count_examples_with_value_for_attribute(
    examples: Iterable[Example],
    attribute: Union[Variable, str],
    value: str,
) -> int:
    return sum(1 for e in examples if e.value(attribute) == value)


def count_examples_with_value_for_output(examples: Iterable[Example], value: str) -> int:
    return sum(1 for e in examples if e.output == value)


def output_labels(examples: Sequence[Example]) -> list[str]:
    """Distinct output labels in first-appearance order."""
    return list(dict.fromkeys(e.output for e in examples))
