"""
Learning service: Problem -> decision tree, with validation, logging and rendering.

Wraps the recursive learner with per-request options, reports input and
structure issues, and converts trees into text or the shared view schema.
"""

import logging
import time
from typing import Literal, Optional

from pydantic import BaseModel, Field

from dtlearn.errors import InvalidInputError
from dtlearn.learner import DecisionTreeLearner
from dtlearn.models.learning import DecisionTree, Leaf, Problem, Split
from dtlearn.selection import get_selector
from dtlearn.utils.logging import log_learning_step, log_validation_result
from dtlearn.validation import ValidationIssue, find_input_issues, raise_for_issues, validate_tree_structure
from shared.schemas import Branch, NodeKind, TreeNodeView

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# LearnerOptions
# -----------------------------------------------------------------------------


class LearnerOptions(BaseModel):
    """Options for a learning run."""

    criterion: Literal["information_gain", "gain_ratio"] = Field(
        default="information_gain",
        description="Attribute selection criterion",
    )
    purity_check: Literal["homogeneous", "unique_label"] = Field(
        default="homogeneous",
        description="Leaf test: all labels equal (homogeneous) or some label seen exactly once (unique_label)",
    )
    max_examples: Optional[int] = Field(
        default=None,
        ge=1,
        description="Use only the first N examples (None = all)",
    )


class LearningResult(BaseModel):
    """A learned tree plus summary figures."""

    tree: DecisionTree
    depth: int
    size: int
    example_count: int
    duration_sec: float
    issues: list[ValidationIssue] = Field(default_factory=list)


def build_learner(options: Optional[LearnerOptions] = None) -> DecisionTreeLearner:
    options = options or LearnerOptions()
    return DecisionTreeLearner(selector=get_selector(options.criterion), purity_check=options.purity_check)


def validate_problem(problem: Problem) -> list[ValidationIssue]:
    issues = find_input_issues(problem.examples, problem.variables, problem.output)
    log_validation_result(logger, problem.name, input_issues=len(issues))
    return issues


def learn_problem(problem: Problem, options: Optional[LearnerOptions] = None) -> LearningResult:
    """
    Full workflow:
    1. Validate variables and examples (raises on the first kind of problem)
    2. Build the tree
    3. Check the tree structure (one child per value, no repeated attribute)
    """
    options = options or LearnerOptions()
    examples = problem.examples
    if options.max_examples is not None:
        examples = examples[: options.max_examples]

    start = time.perf_counter()
    issues = find_input_issues(examples, problem.variables, problem.output)
    log_validation_result(logger, problem.name, input_issues=len(issues))
    try:
        raise_for_issues(issues)
    except InvalidInputError as e:
        log_learning_step(logger, "validate_inputs", problem.name, success=False, error=str(e))
        raise

    learner = build_learner(options)
    tree = learner.learn(examples, problem.variables)
    duration = time.perf_counter() - start
    log_learning_step(
        logger,
        "build_tree",
        problem.name,
        duration_sec=duration,
        extra={"criterion": options.criterion, "purity_check": options.purity_check, "examples": len(examples)},
    )

    structure_issues = validate_tree_structure(tree, problem.variables)
    for issue in structure_issues:
        logger.warning("Structure: %s", issue.message)
    return LearningResult(
        tree=tree,
        depth=tree.depth(),
        size=tree.size(),
        example_count=len(examples),
        duration_sec=duration,
        issues=structure_issues,
    )


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------


def render_tree(tree: DecisionTree, indent: str = "  ") -> str:
    """
    Render a tree as indented text, one line per branch:

        Patrons = None: No
        Patrons = Some: Yes
        Patrons = Full:
          Hungry = Yes: ...
    """
    if isinstance(tree, Leaf):
        return tree.label
    lines: list[str] = []

    def walk(node: Split, level: int) -> None:
        pad = indent * level
        for value, child in zip(node.attribute.domain, node.children):
            if isinstance(child, Leaf):
                lines.append(f"{pad}{node.attribute.name} = {value}: {child.label}")
            else:
                lines.append(f"{pad}{node.attribute.name} = {value}:")
                walk(child, level + 1)

    walk(tree, 0)
    return "\n".join(lines)


def tree_to_view(tree: DecisionTree, node_id: str = "root") -> TreeNodeView:
    """Convert a learned tree into the shared view schema."""
    if isinstance(tree, Leaf):
        return TreeNodeView(id=node_id, kind=NodeKind.LEAF, label=tree.label)
    name = tree.attribute.name
    return TreeNodeView(
        id=node_id,
        kind=NodeKind.SPLIT,
        label=name,
        attribute=name,
        branches=[
            Branch(value=value, node=tree_to_view(child, f"{node_id}/{name}={value}"))
            for value, child in zip(tree.attribute.domain, tree.children)
        ],
    )
