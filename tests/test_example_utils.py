"""Unit tests for plurality, purity, partition and count helpers."""

import pytest

from dtlearn.errors import PreconditionViolation
from dtlearn.models.learning import Example, Variable
from dtlearn.utils.examples import (
    count_examples_with_value_for_attribute,
    count_examples_with_value_for_output,
    examples_with_value_for_attribute,
    homogeneous_output_value,
    output_labels,
    plurality_value,
    unique_output_value,
)


def _labels(*outputs: str) -> list[Example]:
    return [Example(values={}, output=o) for o in outputs]


def test_plurality_majority():
    assert plurality_value(_labels("Yes", "Yes", "No")) == "Yes"


def test_plurality_tie_goes_to_first_seen():
    assert plurality_value(_labels("A", "B", "A", "B")) == "A"
    assert plurality_value(_labels("B", "A", "A", "B")) == "B"


def test_plurality_empty_is_precondition_violation():
    with pytest.raises(PreconditionViolation):
        plurality_value([])


@pytest.mark.parametrize(
    "outputs, expected",
    [
        ((), None),
        (("Yes", "Yes", "Yes"), None),
        (("Yes", "No", "No", "No"), "Yes"),
        (("A", "B", "C"), "A"),
        (("A", "A", "B", "B"), None),
    ],
)
def test_unique_output_value(outputs, expected):
    assert unique_output_value(_labels(*outputs)) == expected


@pytest.mark.parametrize(
    "outputs, expected",
    [
        ((), None),
        (("Yes", "Yes", "Yes"), "Yes"),
        (("Yes", "No", "No", "No"), None),
        (("No",), "No"),
    ],
)
def test_homogeneous_output_value(outputs, expected):
    assert homogeneous_output_value(_labels(*outputs)) == expected


def test_partition_is_complete_and_disjoint(restaurant):
    examples = list(restaurant.examples)
    for attribute in restaurant.variables:
        parts = [examples_with_value_for_attribute(examples, attribute, v) for v in attribute.domain]
        assert sum(len(p) for p in parts) == len(examples)
        ids = [id(e) for p in parts for e in p]
        assert len(ids) == len(set(ids))
        assert set(ids) == {id(e) for e in examples}


def test_count_matches_partition(restaurant):
    examples = list(restaurant.examples)
    for attribute in restaurant.variables:
        for value in attribute.domain + ("not-a-value",):
            assert count_examples_with_value_for_attribute(examples, attribute, value) == len(
                examples_with_value_for_attribute(examples, attribute, value)
            )


def test_partition_accepts_attribute_name():
    examples = [Example(values={"Pat": "Full"}, output="No"), Example(values={"Pat": "Some"}, output="Yes")]
    pat = Variable(name="Pat", domain=("Some", "Full"))
    assert examples_with_value_for_attribute(examples, "Pat", "Full") == examples_with_value_for_attribute(
        examples, pat, "Full"
    ) == [examples[0]]


def test_count_output(restaurant):
    assert count_examples_with_value_for_output(restaurant.examples, "Yes") == 6
    assert count_examples_with_value_for_output(restaurant.examples, "No") == 6
    assert count_examples_with_value_for_output(restaurant.examples, "Maybe") == 0


def test_output_labels_first_appearance():
    assert output_labels(_labels("b", "a", "b", "c")) == ["b", "a", "c"]
