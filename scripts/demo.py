#!/usr/bin/env python3
"""
Run the restaurant example: learn a tree from tests/fixtures/restaurant.csv,
print it, and report training and held-out accuracy.

Usage (from project root):
  python scripts/demo.py [path/to/dataset.csv] [--criterion gain_ratio] [--seed 0]

Output: the learned tree and a short evaluation table.
"""
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DATASET_PATH = ROOT / "tests" / "fixtures" / "restaurant.csv"


def main() -> int:
    parser = argparse.ArgumentParser(description="Learn and evaluate an ID3 decision tree")
    parser.add_argument("dataset", nargs="?", default=str(DATASET_PATH))
    parser.add_argument("--criterion", choices=["information_gain", "gain_ratio"], default="information_gain")
    parser.add_argument("--purity-check", choices=["homogeneous", "unique_label"], default="homogeneous")
    parser.add_argument("--test-fraction", type=float, default=0.25)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    from dtlearn.errors import InvalidInputError
    from dtlearn.services.evaluation_service import evaluate_problem, run_evaluation
    from dtlearn.services.ingestion_service import ingest_csv
    from dtlearn.services.learning_service import LearnerOptions, learn_problem, render_tree
    from dtlearn.utils.logging import configure_logging

    configure_logging(level="WARNING")
    try:
        problem = ingest_csv(args.dataset)
    except (FileNotFoundError, InvalidInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = LearnerOptions(criterion=args.criterion, purity_check=args.purity_check)
    result = learn_problem(problem, options)
    print(f"Dataset: {problem.name} ({len(problem.examples)} examples, {len(problem.variables)} attributes)")
    print(f"Criterion: {options.criterion}, purity check: {options.purity_check}\n")
    print(render_tree(result.tree))
    print(f"\nDepth {result.depth}, {result.size} nodes, learned in {result.duration_sec * 1000:.1f} ms\n")

    training = run_evaluation(result.tree, problem.examples)
    held_out = evaluate_problem(problem, options, test_fraction=args.test_fraction, seed=args.seed)

    header = f"{'Evaluation':<22} {'Correct':<9} {'Total':<7} {'Accuracy':<8}"
    print(header)
    print("-" * len(header))
    for label, suite in (("Training set", training), (f"Held out ({args.test_fraction:.0%})", held_out)):
        accuracy = f"{suite.accuracy:.2f}" if suite.accuracy is not None else "-"
        print(f"{label:<22} {suite.correct:<9} {suite.total:<7} {accuracy:<8}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
