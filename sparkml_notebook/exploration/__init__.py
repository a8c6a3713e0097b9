# ==============================================
# SECTION 2: EXPLORATION
# ==============================================
#
# This package holds the transformations and actions the
# notebook runs over its datasets.
#
# Modules:
# --------
# - frame_ops.py    → select / filter / groupBy / orderBy / describe / SQL
# - text_actions.py → count / first / contains / word counts over text lines
#
# ==============================================

from .frame_ops import (
    count_by,
    describe_columns,
    filter_rows,
    frame_summary,
    increment_column,
    order_by,
    run_sql,
    select_columns,
)
from .text_actions import (
    first_line,
    line_count,
    lines_containing,
    max_words_per_line,
    word_counts,
)

__all__ = [
    "count_by",
    "describe_columns",
    "filter_rows",
    "frame_summary",
    "increment_column",
    "order_by",
    "run_sql",
    "select_columns",
    "first_line",
    "line_count",
    "lines_containing",
    "max_words_per_line",
    "word_counts",
]
