# ==============================================
# Sample Datasets
# ==============================================
#
# PURPOSE:
#   The in-memory tuples that seed the notebook's examples,
#   the schemas used to turn them into DataFrames, and a helper
#   that writes the example input files to disk.
#
# SEED COLLECTIONS:
# -----------------
# - TRAINING_ROWS → (id, text, label) triples for the classifier
# - TEST_ROWS     → (id, text) pairs to predict on
# - PEOPLE_ROWS   → (name, age) rows for the DataFrame basics section
#
# FUNCTIONS:
# ----------
# - create_training_frame(spark, rows=None) -> DataFrame
# - create_test_frame(spark, rows=None) -> DataFrame
# - create_people_frame(spark, rows=None) -> DataFrame
# - write_sample_files(target_dir, ..., overwrite=True) -> dict[str, Path]
#
# ==============================================

import csv
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import DoubleType, LongType, StringType, StructField, StructType


TRAINING_SCHEMA = StructType([
    StructField("id", LongType(), False),
    StructField("text", StringType(), True),
    StructField("label", DoubleType(), False),
])

TEST_SCHEMA = StructType([
    StructField("id", LongType(), False),
    StructField("text", StringType(), True),
])

PEOPLE_SCHEMA = StructType([
    StructField("name", StringType(), True),
    StructField("age", LongType(), True),
])

# Documents mentioning "spark" are labelled 1.0, everything else 0.0
TRAINING_ROWS: List[Tuple[int, str, float]] = [
    (0, "a b c d e spark", 1.0),
    (1, "b d", 0.0),
    (2, "spark f g h", 1.0),
    (3, "hadoop mapreduce", 0.0),
    (4, "b spark who", 1.0),
    (5, "g d a y", 0.0),
    (6, "spark fly", 1.0),
    (7, "was mapreduce", 0.0),
    (8, "e spark program", 1.0),
    (9, "a e c l", 0.0),
    (10, "spark compile", 1.0),
    (11, "hadoop software", 0.0),
]

TEST_ROWS: List[Tuple[int, str]] = [
    (12, "spark i j k"),
    (13, "l m n"),
    (14, "mapreduce spark"),
    (15, "apache hadoop"),
]

PEOPLE_ROWS: List[Tuple[str, Optional[int]]] = [
    ("Michael", None),
    ("Andy", 30),
    ("Justin", 19),
    ("Berta", 30),
    ("Lena", 25),
]

SAMPLE_TEXT = """# Apache Spark

Spark is a unified analytics engine for large-scale data processing.
It provides high-level APIs in Scala, Java, Python, and R, and an optimized engine
that supports general computation graphs for data analysis.

## Online Documentation

You can find the latest Spark documentation, including a programming
guide, on the project web page.

## Building Spark

Spark is built using Apache Maven.
To build Spark and its example programs, run the build command from the project root.

## Interactive Python Shell

The easiest way to start using Spark through Python is the Python shell.
And run the following command, which should also return 1,000,000,000:

    spark.range(1000 * 1000 * 1000).count()

## Example Programs

Spark also comes with several sample programs in the examples directory.
"""


def _check_arity(rows: Sequence[tuple], schema: StructType) -> None:
    expected = len(schema.fields)
    for index, row in enumerate(rows):
        if len(row) != expected:
            raise ValueError(
                f"Row {index} has {len(row)} values, expected {expected} "
                f"({', '.join(schema.fieldNames())})"
            )


def _create_frame(spark: SparkSession, rows: Sequence[tuple], schema: StructType) -> DataFrame:
    _check_arity(rows, schema)
    return spark.createDataFrame(list(rows), schema)


def create_training_frame(spark: SparkSession, rows: Optional[Sequence[tuple]] = None) -> DataFrame:
    """Build the id/text/label training DataFrame."""
    return _create_frame(spark, TRAINING_ROWS if rows is None else rows, TRAINING_SCHEMA)


def create_test_frame(spark: SparkSession, rows: Optional[Sequence[tuple]] = None) -> DataFrame:
    """Build the id/text DataFrame to predict on."""
    return _create_frame(spark, TEST_ROWS if rows is None else rows, TEST_SCHEMA)


def create_people_frame(spark: SparkSession, rows: Optional[Sequence[tuple]] = None) -> DataFrame:
    """Build the name/age DataFrame."""
    return _create_frame(spark, PEOPLE_ROWS if rows is None else rows, PEOPLE_SCHEMA)


def _write_people_json(path: Path) -> None:
    with open(path, "w") as f:
        for name, age in PEOPLE_ROWS:
            record = {"name": name}
            # Missing keys become nulls when Spark infers the schema
            if age is not None:
                record["age"] = age
            f.write(json.dumps(record) + "\n")


def _write_people_csv(path: Path) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["name", "age"])
        for name, age in PEOPLE_ROWS:
            writer.writerow([name, "" if age is None else age])


def write_sample_files(
    target_dir,
    json_name: str = "people.json",
    csv_name: str = "people.csv",
    text_name: str = "README.md",
    overwrite: bool = True
) -> Dict[str, Path]:
    """
    Write the example input files used by the notebook.

    Files created:
    - <json_name>  → one JSON object per line (Spark's default JSON layout)
    - <csv_name>   → header row + one row per person
    - <text_name>  → a short plain-text document

    Args:
        target_dir: Directory to write into (created if missing)
        json_name / csv_name / text_name: File names to use
        overwrite: When False, files that already exist are left alone

    Returns:
        Mapping of "json" / "csv" / "text" to the file paths
    """
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)

    paths = {
        "json": target / json_name,
        "csv": target / csv_name,
        "text": target / text_name,
    }
    writers = {
        "json": _write_people_json,
        "csv": _write_people_csv,
        "text": lambda path: path.write_text(SAMPLE_TEXT),
    }

    for kind, path in paths.items():
        if path.exists() and not overwrite:
            continue
        writers[kind](path)

    return paths
