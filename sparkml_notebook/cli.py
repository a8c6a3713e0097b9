# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to run the notebook.
#
# COMMANDS:
# ---------
# 1. Run notebook sections:
#    python -m sparkml_notebook.cli demo            # all sections
#    python -m sparkml_notebook.cli demo ml
#
# 2. Fit the text classifier (and optionally save it):
#    python -m sparkml_notebook.cli train --save
#
# 3. Predict with the saved model:
#    python -m sparkml_notebook.cli predict "spark is fast" "hadoop jobs"
#
# 4. Describe a JSON / CSV file:
#    python -m sparkml_notebook.cli describe data/people.csv
#
# IMPLEMENTATION:
# ---------------
# - argparse subcommands
# - Instantiates SparkMLNotebook and closes it on exit
# - Any failure prints "❌ Error: ..." and returns exit code 1
#
# ==============================================

import argparse
import dataclasses
import sys
from typing import List, Optional

from sparkml_notebook.config import get_config
from sparkml_notebook.notebook import SECTIONS, SparkMLNotebook


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparkml-notebook",
        description="Spark DataFrame and ML pipeline walk-through",
    )
    parser.add_argument("--quiet", action="store_true", help="don't show() intermediate DataFrames")
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="run notebook sections")
    demo.add_argument("section", nargs="?", default="all", choices=[*SECTIONS, "all"])
    demo.add_argument("--save", action="store_true", help="save the fitted model")

    train = subparsers.add_parser("train", help="fit the text classification pipeline")
    train.add_argument("--save", action="store_true", help="save the fitted model")

    predict = subparsers.add_parser("predict", help="predict with the saved model")
    predict.add_argument("texts", nargs="+", help="documents to classify")
    predict.add_argument("--model-dir", help="override MODEL_DIR")

    describe = subparsers.add_parser("describe", help="describe a JSON or CSV file")
    describe.add_argument("path")
    describe.add_argument("--format", dest="file_format", choices=["json", "csv"])

    return parser


def _print_predictions(predictions) -> None:
    for row in predictions:
        # The text column is named by the saved model's settings
        text = next(v for k, v in row.items() if k not in ("id", "probability", "prediction"))
        print(f"   ({row['id']}, {text}) --> prediction={row['prediction']} "
              f"(p1={row['probability'][1]:.4f})")


def _print_description(description) -> None:
    summary = description["summary"]
    print(f"📊 {summary['row_count']} rows, columns: {summary['dtypes']}")
    for column, stats in description["stats"].items():
        print(f"   → {column}: {stats}")


def run(args: argparse.Namespace) -> None:
    config = get_config()
    if getattr(args, "model_dir", None):
        config = dataclasses.replace(config, model_dir=args.model_dir)

    with SparkMLNotebook(config, verbose=not args.quiet) as notebook:
        if args.command == "demo":
            notebook.run_section(args.section, save_model=args.save)
        elif args.command == "train":
            notebook.run_ml_pipeline(save_model=args.save)
        elif args.command == "predict":
            _print_predictions(notebook.predict_texts(args.texts))
        elif args.command == "describe":
            _print_description(notebook.describe_file(args.path, args.file_format))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
