"""Unit tests for classification and held-out evaluation."""

import pytest

from dtlearn.errors import InvalidInputError
from dtlearn.learner import DecisionTreeLearner
from dtlearn.models.learning import Example
from dtlearn.services.evaluation_service import (
    classify_example,
    evaluate_problem,
    record_evaluation,
    run_evaluation,
    train_test_split,
)
from dtlearn.services.learning_service import LearnerOptions


@pytest.fixture
def restaurant_tree(restaurant):
    return DecisionTreeLearner().train(restaurant)


def test_classify_records_path(restaurant_tree):
    values = {"Pat": "Full", "Hun": "Yes", "Type": "Thai", "Fri": "Yes"}
    label, path = classify_example(restaurant_tree, values)
    assert label == "Yes"
    assert path == [("Pat", "Full"), ("Hun", "Yes"), ("Type", "Thai"), ("Fri", "Yes")]


def test_classify_stops_at_first_leaf(restaurant_tree):
    label, path = classify_example(restaurant_tree, {"Pat": "None"})
    assert label == "No"
    assert path == [("Pat", "None")]


def test_classify_rejects_missing_and_unknown_values(restaurant_tree):
    with pytest.raises(InvalidInputError):
        classify_example(restaurant_tree, {"Hun": "Yes"})
    with pytest.raises(InvalidInputError):
        classify_example(restaurant_tree, {"Pat": "Crowded"})


def test_run_evaluation_on_training_data(restaurant, restaurant_tree):
    suite = run_evaluation(restaurant_tree, restaurant.examples)
    assert suite.total == 12
    assert suite.correct == 12
    assert suite.accuracy == 1.0


def test_run_evaluation_counts_errors_as_wrong(restaurant_tree):
    suite = run_evaluation(restaurant_tree, [Example(values={"Pat": "Crowded"}, output="No")])
    assert suite.correct == 0
    assert suite.results[0].error_message
    assert suite.to_dict()["results"][0]["correct"] is False


def test_train_test_split_deterministic(restaurant):
    train1, test1 = train_test_split(restaurant.examples, 0.25, seed=7)
    train2, test2 = train_test_split(restaurant.examples, 0.25, seed=7)
    assert train1 == train2 and test1 == test2
    assert len(test1) == 3 and len(train1) == 9


def test_train_test_split_bad_fraction(restaurant):
    with pytest.raises(InvalidInputError):
        train_test_split(restaurant.examples, 1.5)


def test_evaluate_problem(restaurant):
    suite = evaluate_problem(restaurant, LearnerOptions(), test_fraction=0.25, seed=1)
    assert suite.total == 3
    assert suite.train_size == 9
    assert 0.0 <= suite.accuracy <= 1.0


def test_record_evaluation(db_session, restaurant):
    options = LearnerOptions(criterion="gain_ratio")
    suite = evaluate_problem(restaurant, options, seed=3)
    row = record_evaluation("rest", suite, options, db_session)
    assert row.id is not None
    assert row.criterion == "gain_ratio"
    assert row.total == suite.total
    assert row.tree_size == suite.tree.size()
