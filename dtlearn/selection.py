"""
Attribute selection: choose the most important variable to split on.

The learner only depends on the AttributeSelector protocol. Two criteria are
provided: information gain (ID3, the default) and gain ratio (C4.5), which
divides the gain by the split information to penalize many-valued attributes.
Ties are broken by attribute definition order. Scores within SCORE_TOLERANCE
of each other count as tied.
"""

import math
from collections.abc import Sequence
from typing import Protocol

from dtlearn.errors import ConfigurationError, PreconditionViolation
from dtlearn.models.learning import Example, Variable
from dtlearn.utils.examples import (
    count_examples_with_value_for_attribute,
    count_examples_with_value_for_output,
    examples_with_value_for_attribute,
    output_labels,
)

SCORE_TOLERANCE = 1e-12


class AttributeSelector(Protocol):
    """Anything that can pick the best attribute for a set of examples."""

    def select_best(self, attributes: Sequence[Variable], examples: Sequence[Example]) -> Variable:
        ...


# -----------------------------------------------------------------------------
# Scores
# -----------------------------------------------------------------------------


def entropy(examples: Sequence[Example]) -> float:
    """Shannon entropy (bits) of the output labels."""
    total = len(examples)
    if total == 0:
        return 0.0
    result = 0.0
    for label in output_labels(examples):
        p = count_examples_with_value_for_output(examples, label) / total
        result -= p * math.log2(p)
    return result


def remainder(attribute: Variable, examples: Sequence[Example]) -> float:
    """Expected entropy left after splitting on `attribute`."""
    total = len(examples)
    if total == 0:
        return 0.0
    result = 0.0
    for value in attribute.domain:
        subset = examples_with_value_for_attribute(examples, attribute, value)
        if subset:
            result += len(subset) / total * entropy(subset)
    return result


def information_gain(attribute: Variable, examples: Sequence[Example]) -> float:
    return entropy(examples) - remainder(attribute, examples)


def split_information(attribute: Variable, examples: Sequence[Example]) -> float:
    """Entropy of the partition itself (intrinsic information of the attribute)."""
    total = len(examples)
    if total == 0:
        return 0.0
    result = 0.0
    for value in attribute.domain:
        count = count_examples_with_value_for_attribute(examples, attribute, value)
        if count:
            p = count / total
            result -= p * math.log2(p)
    return result


def gain_ratio(attribute: Variable, examples: Sequence[Example]) -> float:
    info = split_information(attribute, examples)
    if info == 0.0:
        return 0.0
    return information_gain(attribute, examples) / info


# -----------------------------------------------------------------------------
# Selectors
# -----------------------------------------------------------------------------


class _ScoringSelector:
    """Pick the attribute with the highest score; earliest wins on ties."""

    criterion = ""

    def score(self, attribute: Variable, examples: Sequence[Example]) -> float:
        raise NotImplementedError

    def select_best(self, attributes: Sequence[Variable], examples: Sequence[Example]) -> Variable:
        if not attributes:
            raise PreconditionViolation("select_best requires at least one attribute")
        best = None
        best_score = -math.inf
        for attribute in attributes:
            if not attribute.domain:
                raise ConfigurationError(f"Attribute '{attribute.name}' has an empty domain")
            s = self.score(attribute, examples)
            tied = math.isclose(s, best_score, rel_tol=SCORE_TOLERANCE, abs_tol=SCORE_TOLERANCE)
            if s > best_score and not tied:
                best, best_score = attribute, s
        return best

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class InformationGainSelector(_ScoringSelector):
    criterion = "information_gain"

    def score(self, attribute: Variable, examples: Sequence[Example]) -> float:
        return information_gain(attribute, examples)


class GainRatioSelector(_ScoringSelector):
    criterion = "gain_ratio"

    def score(self, attribute: Variable, examples: Sequence[Example]) -> float:
        return gain_ratio(attribute, examples)


SELECTORS = {
    InformationGainSelector.criterion: InformationGainSelector,
    GainRatioSelector.criterion: GainRatioSelector,
}


def get_selector(criterion: str) -> AttributeSelector:
    try:
        return SELECTORS[criterion]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown selection criterion '{criterion}'. Must be one of {sorted(SELECTORS)}"
        ) from None
