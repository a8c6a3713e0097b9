# ==============================================
# DataFrame Operations
# ==============================================
#
# PURPOSE:
#   The query operators the notebook demonstrates on the people
#   dataset: select, filter, groupBy, orderBy, describe, plus a
#   SQL query over a temporary view.
#
#   These are plain functions over DataFrames. Transformations
#   stay lazy; only describe_columns() and frame_summary() run
#   an action.
#
# FUNCTIONS:
# ----------
# - select_columns(df, *columns) -> DataFrame
# - increment_column(df, column, by=1, alias=None) -> DataFrame
# - filter_rows(df, condition) -> DataFrame
# - count_by(df, column) -> DataFrame
# - order_by(df, column, ascending=True) -> DataFrame
# - describe_columns(df, *columns) -> dict[str, dict[str, str | None]]
# - run_sql(df, view_name, query) -> DataFrame
# - frame_summary(df) -> dict
#
# ==============================================

from typing import Any, Dict, Optional, Union

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F


def _require_columns(df: DataFrame, columns) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"Unknown column(s) {missing}; available: {df.columns}"
        )


def select_columns(df: DataFrame, *columns: str) -> DataFrame:
    """
    Project the given columns.

    Raises:
        ValueError: If no columns are given or any name is unknown
    """
    if not columns:
        raise ValueError("select_columns() needs at least one column")
    _require_columns(df, columns)
    return df.select(*columns)


def increment_column(
    df: DataFrame,
    column: str,
    by: Union[int, float] = 1,
    alias: Optional[str] = None
) -> DataFrame:
    """Replace `column` with `column + by`, keeping the other columns (the "age + 1" example)."""
    _require_columns(df, [column])
    return df.select(
        *[F.col(c) for c in df.columns if c != column],
        (F.col(column) + by).alias(alias or f"({column} + {by})")
    )


def filter_rows(df: DataFrame, condition: Union[Column, str]) -> DataFrame:
    return df.filter(condition)


def count_by(df: DataFrame, column: str) -> DataFrame:
    """groupBy(column).count(), ordered by the grouping column (nulls first)."""
    _require_columns(df, [column])
    return df.groupBy(column).count().orderBy(F.col(column).asc_nulls_first())


def order_by(df: DataFrame, column: str, ascending: bool = True) -> DataFrame:
    _require_columns(df, [column])
    ordering = F.col(column).asc_nulls_last() if ascending else F.col(column).desc_nulls_last()
    return df.orderBy(ordering)


def describe_columns(df: DataFrame, *columns: str) -> Dict[str, Dict[str, Optional[str]]]:
    """
    Collect df.describe() into a nested dict.

    Args:
        df: DataFrame to summarise
        columns: Columns to describe (all columns when empty)

    Returns:
        {column: {"count": ..., "mean": ..., "stddev": ..., "min": ..., "max": ...}}
        Values are strings as returned by Spark; stats that don't apply are None.
    """
    if columns:
        _require_columns(df, columns)
    described = df.describe(*columns)
    rows = described.collect()

    result: Dict[str, Dict[str, Optional[str]]] = {}
    for column in described.columns:
        if column == "summary":
            continue
        result[column] = {row["summary"]: row[column] for row in rows}
    return result


def run_sql(df: DataFrame, view_name: str, query: str) -> DataFrame:
    """Register df as a temporary view and run a SQL query against it."""
    df.createOrReplaceTempView(view_name)
    return df.sparkSession.sql(query)


def frame_summary(df: DataFrame) -> Dict[str, Any]:
    return {
        "columns": list(df.columns),
        "dtypes": dict(df.dtypes),
        "row_count": df.count(),
    }
