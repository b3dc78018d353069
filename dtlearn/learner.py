"""
Decision-tree learning (ID3, AIMA Fig. 18.5).

    function DECISION-TREE-LEARNING(examples, attributes, parent_examples)
        if examples is empty then return PLURALITY-VALUE(parent_examples)
        else if all examples have the same classification then return it
        else if attributes is empty then return PLURALITY-VALUE(examples)
        else
            A <- most important attribute
            tree <- a new decision tree with root test A
            for each value vk of A do
                exs <- examples with A = vk
                subtree <- DECISION-TREE-LEARNING(exs, attributes - A, examples)
                add a branch to tree with label (A = vk) and subtree
            return tree
"""

import logging
from collections.abc import Sequence
from typing import Callable, Literal, Optional

from dtlearn.errors import ConfigurationError, InvalidInputError
from dtlearn.models.learning import DecisionTree, Example, Leaf, Problem, Split, Variable
from dtlearn.selection import AttributeSelector, InformationGainSelector
from dtlearn.utils.examples import (
    examples_with_value_for_attribute,
    homogeneous_output_value,
    plurality_value,
    unique_output_value,
)
from dtlearn.validation import find_input_issues, raise_for_issues

logger = logging.getLogger(__name__)

PurityCheck = Literal["homogeneous", "unique_label"]

PURITY_CHECKS: dict[str, Callable[[Sequence[Example]], Optional[str]]] = {
    "homogeneous": homogeneous_output_value,
    "unique_label": unique_output_value,
}


class AbstractDecisionTreeLearner:
    """
    Holds the attribute selector and the termination test; subclasses supply
    the recursive procedure.

    purity_check chooses how "all examples have the same classification" is
    decided: "homogeneous" returns a leaf only when a single label remains;
    "unique_label" reproduces the original learner, which stops as soon as
    some label occurs in exactly one example.
    """

    def __init__(
        self,
        selector: Optional[AttributeSelector] = None,
        purity_check: PurityCheck = "homogeneous",
    ):
        if purity_check not in PURITY_CHECKS:
            raise ConfigurationError(
                f"Invalid purity_check '{purity_check}'. Must be one of {sorted(PURITY_CHECKS)}"
            )
        self.selector = selector or InformationGainSelector()
        self.purity_check = purity_check
        self._pure_label = PURITY_CHECKS[purity_check]

    def learn(
        self,
        examples: Sequence[Example],
        attributes: Sequence[Variable],
        parent_examples: Sequence[Example] = (),
    ) -> DecisionTree:
        """
        Validate the inputs, then build a tree. The caller's sequences are
        never modified.
        """
        examples = tuple(examples)
        attributes = tuple(attributes)
        parent_examples = tuple(parent_examples)
        raise_for_issues(find_input_issues(examples, attributes))
        if not examples and not parent_examples:
            raise InvalidInputError("Cannot learn from an empty example set with no parent examples")
        logger.debug("Learning from %d examples over %d attributes", len(examples), len(attributes))
        return self._learn(examples, attributes, parent_examples)

    def train(self, problem: Problem) -> DecisionTree:
        """Learn a tree from all of a problem's examples and input variables."""
        raise_for_issues(find_input_issues(problem.examples, problem.variables, problem.output))
        return self.learn(problem.examples, problem.variables)

    def _learn(
        self,
        examples: tuple[Example, ...],
        attributes: tuple[Variable, ...],
        parent_examples: tuple[Example, ...],
    ) -> DecisionTree:
        raise NotImplementedError

    def most_important_variable(self, attributes: Sequence[Variable], examples: Sequence[Example]) -> Variable:
        return self.selector.select_best(attributes, examples)


class DecisionTreeLearner(AbstractDecisionTreeLearner):
    """Recursive ID3 learner."""

    def _learn(
        self,
        examples: tuple[Example, ...],
        attributes: tuple[Variable, ...],
        parent_examples: tuple[Example, ...],
    ) -> DecisionTree:
        if not examples:
            return Leaf(label=plurality_value(parent_examples))

        label = self._pure_label(examples)
        if label is not None:
            return Leaf(label=label)

        if not attributes:
            return Leaf(label=plurality_value(examples))

        best = self.most_important_variable(attributes, examples)
        # Every sibling branch recurses on the same reduced tuple
        remaining = tuple(a for a in attributes if a.name != best.name)
        logger.debug(
            "Split on '%s' (%d examples, %d attributes left)", best.name, len(examples), len(remaining)
        )
        children = []
        for value in best.domain:
            exs = tuple(examples_with_value_for_attribute(examples, best, value))
            children.append(self._learn(exs, remaining, examples))
        return Split(attribute=best, children=tuple(children))
