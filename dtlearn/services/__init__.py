"""Services (ingestion, learning, evaluation, monitoring)."""

from dtlearn.services.ingestion_service import (
    DatasetRecord,
    delete_dataset,
    get_dataset,
    get_dataset_record,
    ingest_csv,
    list_datasets,
    parse_examples_csv,
    store_dataset,
)
from dtlearn.services.learning_service import (
    LearnerOptions,
    LearningResult,
    build_learner,
    learn_problem,
    render_tree,
    tree_to_view,
    validate_problem,
)
from dtlearn.services.evaluation_service import (
    EvaluationResult,
    EvaluationSuite,
    classify_example,
    evaluate_problem,
    record_evaluation,
    run_evaluation,
    train_test_split,
)

__all__ = [
    "DatasetRecord",
    "delete_dataset",
    "get_dataset",
    "get_dataset_record",
    "ingest_csv",
    "list_datasets",
    "parse_examples_csv",
    "store_dataset",
    "LearnerOptions",
    "LearningResult",
    "build_learner",
    "learn_problem",
    "render_tree",
    "tree_to_view",
    "validate_problem",
    "EvaluationResult",
    "EvaluationSuite",
    "classify_example",
    "evaluate_problem",
    "record_evaluation",
    "run_evaluation",
    "train_test_split",
]
