# ==============================================
# Text File Actions
# ==============================================
#
# PURPOSE:
#   The "quick start" walk-through over a plain-text file read
#   with spark.read.text(): one row per line in a "value" column.
#
# FUNCTIONS:
# ----------
# - line_count(lines) -> int
# - first_line(lines) -> str | None
# - lines_containing(lines, keyword) -> DataFrame
# - max_words_per_line(lines) -> int
# - word_counts(lines, top=None) -> list[tuple[str, int]]
#
# ==============================================

from typing import List, Optional, Tuple

from pyspark.sql import DataFrame
from pyspark.sql import functions as F

VALUE_COL = "value"


def line_count(lines: DataFrame) -> int:
    return lines.count()


def first_line(lines: DataFrame) -> Optional[str]:
    row = lines.first()
    return row[VALUE_COL] if row is not None else None


def lines_containing(lines: DataFrame, keyword: str) -> DataFrame:
    """Lines whose text contains `keyword` (case-sensitive)."""
    return lines.filter(F.col(VALUE_COL).contains(keyword))


def _words(lines: DataFrame) -> DataFrame:
    return (
        lines
        .select(F.explode(F.split(F.trim(F.col(VALUE_COL)), r"\s+")).alias("word"))
        .filter(F.col("word") != "")
    )


def max_words_per_line(lines: DataFrame) -> int:
    """Largest number of whitespace-separated words on any line; 0 for no lines."""
    # trim() only strips spaces, so drop the empty tokens left by tabs
    per_line = lines.select(
        F.size(F.filter(F.split(F.col(VALUE_COL), r"\s+"), lambda word: word != ""))
        .alias("num_words")
    )
    row = per_line.agg(F.max("num_words").alias("max_words")).first()
    if row is None or row["max_words"] is None:
        return 0
    return int(row["max_words"])


def word_counts(lines: DataFrame, top: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Count word occurrences across all lines.

    Args:
        lines: DataFrame with a "value" column
        top: Only return the `top` most frequent words (all when None)

    Returns:
        (word, count) pairs sorted by count descending, then word ascending
    """
    counts = (
        _words(lines)
        .groupBy("word")
        .count()
        .orderBy(F.col("count").desc(), F.col("word").asc())
    )
    if top is not None:
        counts = counts.limit(top)
    return [(row["word"], row["count"]) for row in counts.collect()]
