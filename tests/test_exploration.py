# ==============================================
# Tests for Exploration Module
# ==============================================

import pytest
from pyspark.sql import functions as F

from sparkml_notebook.datasets import create_people_frame
from sparkml_notebook.exploration import (
    count_by,
    describe_columns,
    filter_rows,
    first_line,
    frame_summary,
    increment_column,
    line_count,
    lines_containing,
    max_words_per_line,
    order_by,
    run_sql,
    select_columns,
    word_counts,
)


@pytest.fixture
def people(spark):
    return create_people_frame(spark)


@pytest.fixture
def lines(spark):
    return spark.createDataFrame(
        [("Spark is fast",), ("",), ("spark and Spark and spark",), ("Hadoop",)],
        ["value"],
    )


class TestFrameOps:
    """Tests for select / filter / groupBy / orderBy / describe."""

    def test_select_columns(self, people):
        assert select_columns(people, "name").columns == ["name"]

    def test_select_unknown_column(self, people):
        with pytest.raises(ValueError, match="salary"):
            select_columns(people, "name", "salary")

    def test_select_needs_columns(self, people):
        with pytest.raises(ValueError):
            select_columns(people)

    def test_increment_column(self, people):
        df = increment_column(people, "age", alias="next_age")
        assert df.columns == ["name", "next_age"]
        andy = df.filter(F.col("name") == "Andy").first()
        assert andy["next_age"] == 31

    def test_filter_with_column(self, people):
        names = {row["name"] for row in filter_rows(people, F.col("age") > 21).collect()}
        assert names == {"Andy", "Berta", "Lena"}

    def test_filter_with_sql_string(self, people):
        assert filter_rows(people, "age < 20").count() == 1

    def test_count_by(self, people):
        counts = [(row["age"], row["count"]) for row in count_by(people, "age").collect()]
        assert counts == [(None, 1), (19, 1), (25, 1), (30, 2)]

    def test_order_by_descending_puts_nulls_last(self, people):
        ages = [row["age"] for row in order_by(people, "age", ascending=False).collect()]
        assert ages == [30, 30, 25, 19, None]

    def test_describe_columns(self, people):
        stats = describe_columns(people, "age")
        assert set(stats) == {"age"}
        assert stats["age"]["count"] == "4"
        assert stats["age"]["min"] == "19"
        assert stats["age"]["max"] == "30"
        assert float(stats["age"]["mean"]) == pytest.approx(26.0)

    def test_describe_all_columns(self, people):
        stats = describe_columns(people)
        assert set(stats) == {"name", "age"}
        assert stats["name"]["count"] == "5"

    def test_run_sql(self, people):
        teenagers = run_sql(people, "people", "SELECT name FROM people WHERE age BETWEEN 13 AND 19")
        assert [row["name"] for row in teenagers.collect()] == ["Justin"]

    def test_frame_summary(self, people):
        summary = frame_summary(people)
        assert summary["columns"] == ["name", "age"]
        assert summary["dtypes"] == {"name": "string", "age": "bigint"}
        assert summary["row_count"] == 5


class TestTextActions:
    """Tests for the text-file quick start actions."""

    def test_line_count_and_first(self, lines):
        assert line_count(lines) == 4
        assert first_line(lines) == "Spark is fast"

    def test_first_line_of_empty(self, spark):
        empty = spark.createDataFrame([], "value string")
        assert first_line(empty) is None

    def test_lines_containing_is_case_sensitive(self, lines):
        assert lines_containing(lines, "Spark").count() == 2
        assert lines_containing(lines, "Hadoop").count() == 1
        assert lines_containing(lines, "hadoop").count() == 0

    def test_max_words_per_line(self, lines):
        assert max_words_per_line(lines) == 5

    def test_max_words_ignores_tabs(self, spark):
        tabbed = spark.createDataFrame([("\tone",), ("\t",), ("two\tthree ",)], "value string")
        assert max_words_per_line(tabbed) == 2

    def test_max_words_of_tab_only_lines(self, spark):
        tabbed = spark.createDataFrame([("\t",), ("\t\t",)], "value string")
        assert max_words_per_line(tabbed) == 0

    def test_max_words_of_empty(self, spark):
        empty = spark.createDataFrame([], "value string")
        assert max_words_per_line(empty) == 0

    def test_word_counts_skip_blank_lines(self, lines):
        counts = dict(word_counts(lines))
        assert counts["and"] == 2
        assert counts["Hadoop"] == 1
        assert "" not in counts
        assert sum(counts.values()) == 9

    def test_word_counts_ties_break_by_word(self, lines):
        top = word_counts(lines, top=3)
        # "Spark", "and", "spark" all occur twice
        assert top == [("Spark", 2), ("and", 2), ("spark", 2)]
