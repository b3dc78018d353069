"""Unit tests for input and tree-structure validation."""

import pytest

from dtlearn.errors import ConfigurationError, InvalidInputError
from dtlearn.learner import DecisionTreeLearner
from dtlearn.models.learning import Example, Leaf, Split, Variable
from dtlearn.validation import find_input_issues, raise_for_issues, validate_tree_structure


def test_learned_tree_has_no_structure_issues(restaurant):
    tree = DecisionTreeLearner().train(restaurant)
    assert validate_tree_structure(tree, restaurant.variables) == []


def test_child_count_mismatch_on_unvalidated_split(weather):
    tree = Split.model_construct(attribute=weather, children=(Leaf(label="Yes"),))
    issues = validate_tree_structure(tree)
    assert [i.code for i in issues] == ["child_count_mismatch"]
    assert issues[0].attribute == "Weather"


def test_repeated_and_unknown_attributes(weather):
    inner = Split(attribute=weather, children=(Leaf(label="Yes"), Leaf(label="No")))
    tree = Split(attribute=weather, children=(inner, Leaf(label="No")))
    codes = [i.code for i in validate_tree_structure(tree, attributes=[])]
    assert "attribute_repeated_on_path" in codes
    assert codes.count("unknown_attribute") == 2


def test_input_issue_codes(weather):
    output = Variable(name="Play", domain=("Yes", "No"))
    examples = [
        Example(values={"Weather": "Snowy"}, output="Yes"),
        Example(values={}, output="Maybe"),
    ]
    codes = {i.code for i in find_input_issues(examples, [weather], output)}
    assert codes == {"value_out_of_domain", "missing_value", "output_out_of_domain"}
    with pytest.raises(InvalidInputError):
        raise_for_issues(find_input_issues(examples, [weather], output))


def test_descriptor_issues_raise_configuration_error():
    empty = Variable(name="Empty", domain=())
    with pytest.raises(ConfigurationError):
        raise_for_issues(find_input_issues([], [empty]))
