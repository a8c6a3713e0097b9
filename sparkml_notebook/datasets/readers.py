# ==============================================
# DataReader
# ==============================================
#
# PURPOSE:
#   Thin wrapper over spark.read for the three file formats
#   the notebook loads: JSON lines, CSV and plain text.
#
# CLASS: DataReader
# -----------------
#   Constructor:
#   ------------
#   - __init__(spark: SparkSession)
#
#   Methods:
#   --------
#   - read_json(path) -> DataFrame
#   - read_csv(path, header=True, infer_schema=True) -> DataFrame
#   - read_text(path) -> DataFrame       (single "value" column)
#
#   Every reader checks the path exists first so a typo fails
#   with FileNotFoundError instead of a Spark analysis error.
#
# ==============================================

from pathlib import Path

from pyspark.sql import DataFrame, SparkSession


class DataReader:
    """Loads example files into DataFrames."""

    def __init__(self, spark: SparkSession):
        self.spark = spark

    def read_json(self, path) -> DataFrame:
        return self.spark.read.json(self._existing(path))

    def read_csv(self, path, header: bool = True, infer_schema: bool = True) -> DataFrame:
        return self.spark.read.csv(self._existing(path), header=header, inferSchema=infer_schema)

    def read_text(self, path) -> DataFrame:
        return self.spark.read.text(self._existing(path))

    @staticmethod
    def _existing(path) -> str:
        resolved = Path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Input file not found: {resolved}")
        return str(resolved)
