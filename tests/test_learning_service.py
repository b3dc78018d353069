"""Tests for the learning service: options, rendering and tree views."""

import pytest
from pydantic import ValidationError

from dtlearn.errors import InvalidInputError
from dtlearn.models.learning import Example, Leaf, Problem, Split, Variable
from dtlearn.services.learning_service import (
    LearnerOptions,
    build_learner,
    learn_problem,
    render_tree,
    tree_to_view,
    validate_problem,
)
from shared.schemas import NodeKind

EXPECTED_RESTAURANT = """\
Pat = Some: Yes
Pat = Full:
  Hun = Yes:
    Type = French: No
    Type = Thai:
      Fri = No: No
      Fri = Yes: Yes
    Type = Burger: Yes
    Type = Italian: No
  Hun = No: No
Pat = None: No"""


def test_learn_problem_restaurant(restaurant):
    result = learn_problem(restaurant)
    assert result.depth == 4
    assert result.size == 12
    assert result.example_count == 12
    assert result.issues == []
    assert render_tree(result.tree) == EXPECTED_RESTAURANT


def test_max_examples_limits_training_set(restaurant):
    result = learn_problem(restaurant, LearnerOptions(max_examples=1))
    assert result.example_count == 1
    assert result.tree == Leaf(label="Yes")


def test_invalid_problem_raises(weather):
    problem = Problem(
        name="bad",
        variables=(weather,),
        output=Variable(name="Play", domain=("Yes", "No")),
        examples=(Example(values={"Weather": "Foggy"}, output="Yes"),),
    )
    with pytest.raises(InvalidInputError):
        learn_problem(problem)
    codes = [i.code for i in validate_problem(problem)]
    assert codes == ["value_out_of_domain"]


def test_options_validation():
    with pytest.raises(ValidationError):
        LearnerOptions(criterion="gini")
    with pytest.raises(ValidationError):
        LearnerOptions(max_examples=0)


def test_build_learner_uses_options():
    learner = build_learner(LearnerOptions(criterion="gain_ratio", purity_check="unique_label"))
    assert learner.selector.criterion == "gain_ratio"
    assert learner.purity_check == "unique_label"


def test_render_leaf():
    assert render_tree(Leaf(label="Yes")) == "Yes"


def test_tree_to_view(weather):
    tree = Split(attribute=weather, children=(Leaf(label="Yes"), Leaf(label="No")))
    view = tree_to_view(tree)
    assert view.kind == NodeKind.SPLIT
    assert view.attribute == "Weather"
    assert [b.value for b in view.branches] == ["Sunny", "Rainy"]
    assert view.branches[0].node.kind == NodeKind.LEAF
    assert view.branches[1].node.label == "No"
    assert view.branches[1].node.id == "root/Weather=Rainy"
