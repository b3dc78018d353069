"""
Evaluation of learned trees against labeled examples.

- classify_example: walk the tree, recording the (attribute, value) path.
- run_evaluation: classify every example and aggregate accuracy.
- evaluate_problem: hold out part of a dataset, learn on the rest, evaluate.
"""

import logging
import random
import time
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from sqlalchemy.orm import Session

from dtlearn.errors import InvalidInputError
from dtlearn.models.learning import DecisionTree, Example, Problem, Split
from dtlearn.models_db import EvaluationRunModel
from dtlearn.services.learning_service import LearnerOptions, learn_problem
from dtlearn.utils.logging import log_evaluation

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Result types
# -----------------------------------------------------------------------------


class EvaluationResult:
    """Result of classifying a single example."""

    __slots__ = ("index", "expected", "actual", "path", "correct", "error_message")

    def __init__(
        self,
        index: int,
        expected: str,
        actual: Optional[str],
        path: list[tuple[str, str]],
        error_message: Optional[str] = None,
    ):
        self.index = index
        self.expected = expected
        self.actual = actual
        self.path = path
        self.correct = error_message is None and actual == expected
        self.error_message = error_message

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "expected": self.expected,
            "actual": self.actual,
            "path": [{"attribute": a, "value": v} for a, v in self.path],
            "correct": self.correct,
            "error_message": self.error_message,
        }


class EvaluationSuite:
    """Aggregated results over a set of examples."""

    def __init__(self, results: list[EvaluationResult], train_size: int = 0, tree: Optional[DecisionTree] = None):
        self.results = results
        self.train_size = train_size
        self.tree = tree
        self.total = len(results)
        self.correct = sum(1 for r in results if r.correct)

    @property
    def accuracy(self) -> Optional[float]:
        return self.correct / self.total if self.total else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "correct": self.correct,
            "accuracy": self.accuracy,
            "train_size": self.train_size,
            "results": [r.to_dict() for r in self.results],
        }


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------


def classify_example(
    tree: DecisionTree,
    values: Union[Example, Mapping[str, str]],
) -> tuple[str, list[tuple[str, str]]]:
    """Return (label, path) where path lists the (attribute, value) tests taken."""
    if isinstance(values, Example):
        values = values.values
    path: list[tuple[str, str]] = []
    node = tree
    while isinstance(node, Split):
        name = node.attribute.name
        if name not in values:
            raise InvalidInputError(f"No value given for attribute '{name}'")
        value = values[name]
        path.append((name, value))
        node = node.child_for(value)
    return node.label, path


def run_evaluation(tree: DecisionTree, examples: Sequence[Example], train_size: int = 0) -> EvaluationSuite:
    """Classify each example; unclassifiable examples count as wrong and keep their error."""
    results: list[EvaluationResult] = []
    for i, example in enumerate(examples):
        try:
            label, path = classify_example(tree, example)
            results.append(EvaluationResult(i, example.output, label, path))
        except InvalidInputError as e:
            results.append(EvaluationResult(i, example.output, None, [], error_message=str(e)))
    return EvaluationSuite(results, train_size=train_size, tree=tree)


def train_test_split(
    examples: Sequence[Example],
    test_fraction: float = 0.25,
    seed: Optional[int] = None,
) -> tuple[list[Example], list[Example]]:
    """Shuffle (deterministically for a given seed) and split into train and test lists."""
    if not 0.0 < test_fraction < 1.0:
        raise InvalidInputError(f"test_fraction must be between 0 and 1, got {test_fraction}")
    shuffled = list(examples)
    random.Random(seed).shuffle(shuffled)
    n_test = max(1, round(len(shuffled) * test_fraction)) if shuffled else 0
    n_test = min(n_test, max(len(shuffled) - 1, 0))
    return shuffled[n_test:], shuffled[:n_test]


def evaluate_problem(
    problem: Problem,
    options: Optional[LearnerOptions] = None,
    test_fraction: float = 0.25,
    seed: Optional[int] = None,
) -> EvaluationSuite:
    """Learn on a training split of the problem and evaluate on the held-out rest."""
    options = options or LearnerOptions()
    start = time.perf_counter()
    train, test = train_test_split(problem.examples, test_fraction=test_fraction, seed=seed)
    if not train:
        raise InvalidInputError("Need at least two examples to evaluate")
    result = learn_problem(problem.model_copy(update={"examples": tuple(train)}), options)
    suite = run_evaluation(result.tree, test, train_size=len(train))
    log_evaluation(logger, problem.name, suite.total, suite.correct, duration_sec=time.perf_counter() - start)
    return suite


def record_evaluation(
    dataset_id: str,
    suite: EvaluationSuite,
    options: LearnerOptions,
    db: Session,
) -> EvaluationRunModel:
    """Store the metrics of an evaluation run (the tree itself is not stored)."""
    row = EvaluationRunModel(
        dataset_id=dataset_id,
        criterion=options.criterion,
        purity_check=options.purity_check,
        train_size=suite.train_size,
        total=suite.total,
        correct=suite.correct,
        accuracy=suite.accuracy,
        tree_depth=suite.tree.depth() if suite.tree is not None else None,
        tree_size=suite.tree.size() if suite.tree is not None else None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
