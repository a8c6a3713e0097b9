# ==============================================
# SparkMLNotebook: Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that runs the notebook sections in
#   order. Users interact with this class (or the CLI) only.
#
# HOW IT CONNECTS THE SECTIONS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     SparkMLNotebook                      │
#   │                                                          │
#   │            SessionManager ──▶ SparkSession               │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ SECTION 1: DATASETS                          │        │
#   │  │  samples (tuples) + DataReader (json/csv/txt)│        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ DataFrames                             │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ SECTION 2: EXPLORATION                       │        │
#   │  │  frame_ops + text_actions                    │        │
#   │  └──────────────────────────────────────────────┘        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ SECTION 3: MACHINE LEARNING                  │        │
#   │  │  Tokenizer → StopWordsRemover → HashingTF →  │        │
#   │  │  LogisticRegression  (Pipeline.fit)          │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ PipelineModel                          │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ SECTION 4: PERSISTENCE                       │        │
#   │  │  ModelStore.save(...) / load()               │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: SparkMLNotebook
# ----------------------
#
#   Constructor:
#   ------------
#   - __init__(config=None, spark=None, verbose=True)
#       When `spark` is given the caller owns it and close() leaves
#       it running; otherwise a SessionManager builds one lazily.
#
#   Public Methods:
#   ---------------
#   - run_dataframe_basics() -> dict
#   - run_text_actions() -> dict
#   - run_ml_pipeline(save_model=False) -> dict
#   - run_all(save_model=False) -> dict
#   - predict_texts(texts) -> list[dict]      (uses the saved model)
#   - describe_file(path, file_format) -> dict
#   - close() / context manager
#
# ==============================================

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F

from sparkml_notebook.config import AppConfig, get_config
from sparkml_notebook.datasets import (
    DataReader,
    create_test_frame,
    create_training_frame,
    write_sample_files,
)
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
from sparkml_notebook.ml import (
    StageSettings,
    TextClassificationPipeline,
    build_tokenizer,
    transform_stage,
)
from sparkml_notebook.persistence import ModelStore
from sparkml_notebook.session import SessionManager

SECTIONS = ("dataframes", "text", "ml")


class SparkMLNotebook:
    """
    Runs the notebook sections against one SparkSession:
    1. DataFrame basics (JSON / CSV, query operators)
    2. Text file actions
    3. Text classification pipeline
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        spark: Optional[SparkSession] = None,
        verbose: bool = True
    ):
        """
        Initialize the notebook.

        Args:
            config: Application configuration. If None, loads from environment.
            spark: Existing SparkSession to use instead of building one.
            verbose: Print DataFrames with show() while running sections.
        """
        self._config = config or get_config()
        self._verbose = verbose

        self._session_manager: Optional[SessionManager] = None
        if spark is None:
            self._session_manager = SessionManager(self._config.spark)
        self._spark = spark

        self._settings = StageSettings.from_config(self._config.pipeline)
        self._model_store = ModelStore(self._config.model_dir)
        self._pipeline: Optional[TextClassificationPipeline] = None

    @property
    def spark(self) -> SparkSession:
        if self._spark is None:
            self._spark = self._session_manager.spark
        return self._spark

    @property
    def reader(self) -> DataReader:
        return DataReader(self.spark)

    @property
    def pipeline(self) -> Optional[TextClassificationPipeline]:
        return self._pipeline

    # ======================================
    # Section 1: DataFrame basics
    # ======================================
    def run_dataframe_basics(self) -> Dict[str, Any]:
        """
        Load people.json / people.csv and run the query operators.

        Returns:
            Results of each step (collected to plain Python values)
        """
        self._banner("DataFrame basics")
        paths = self._ensure_data_files()

        people = self.reader.read_json(paths["json"])
        if self._verbose:
            people.printSchema()
            people.show()

        names = [row["name"] for row in select_columns(people, "name").collect()]
        print(f"   → Names: {', '.join(names)}")

        older = increment_column(people, "age", alias="age_plus_one")
        self._show(older)

        adults = filter_rows(people, F.col("age") > 21)
        adult_names = sorted(row["name"] for row in adults.collect())
        print(f"   → Older than 21: {', '.join(adult_names)}")

        age_counts = [(row["age"], row["count"]) for row in count_by(people, "age").collect()]
        print(f"   → Count by age: {age_counts}")

        by_age_desc = order_by(people, "age", ascending=False)
        self._show(by_age_desc)
        oldest = by_age_desc.first()

        teenagers = run_sql(
            people,
            "people",
            "SELECT name FROM people WHERE age BETWEEN 13 AND 19"
        )
        teenager_names = [row["name"] for row in teenagers.collect()]

        age_stats = describe_columns(people, "age")
        print(f"   → age stats: {age_stats['age']}")

        people_csv = self.reader.read_csv(paths["csv"])
        csv_summary = frame_summary(people_csv)
        csv_stats = describe_columns(people_csv)
        print(f"   → CSV columns: {csv_summary['dtypes']} ({csv_summary['row_count']} rows)")

        print("✓ DataFrame basics complete")
        return {
            "summary": frame_summary(people),
            "names": names,
            "adults": adult_names,
            "age_counts": age_counts,
            "oldest": oldest["name"] if oldest is not None else None,
            "teenagers": teenager_names,
            "age_stats": age_stats["age"],
            "csv_summary": csv_summary,
            "csv_stats": csv_stats,
        }

    # ======================================
    # Section 2: Text file actions
    # ======================================
    def run_text_actions(self, keyword: str = "Spark", top: int = 10) -> Dict[str, Any]:
        """
        Count, first, filter and word counts over the text file.

        Args:
            keyword: Word to filter lines by (case-sensitive)
            top: How many of the most frequent words to return
        """
        self._banner("Text file actions")
        paths = self._ensure_data_files()

        lines = self.reader.read_text(paths["text"]).cache()
        try:
            result = {
                "line_count": line_count(lines),
                "first_line": first_line(lines),
                "keyword": keyword,
                "keyword_lines": lines_containing(lines, keyword).count(),
                "max_words": max_words_per_line(lines),
                "top_words": word_counts(lines, top=top),
            }
        finally:
            lines.unpersist()

        print(f"   → Lines: {result['line_count']}")
        print(f"   → First line: {result['first_line']!r}")
        print(f"   → Lines with '{keyword}': {result['keyword_lines']}")
        print(f"   → Most words in a line: {result['max_words']}")
        print(f"   → Top words: {result['top_words']}")
        print("✓ Text actions complete")
        return result

    # ======================================
    # Section 3: ML pipeline
    # ======================================
    def run_ml_pipeline(self, save_model: bool = False) -> Dict[str, Any]:
        """
        Fit the text classification pipeline and predict on the test rows.

        Args:
            save_model: Also persist the fitted model with ModelStore

        Returns:
            Predictions, training AUC, model summary and saved path (or None)
        """
        self._banner("ML pipeline")
        training = self._with_pipeline_columns(create_training_frame(self.spark))
        test = self._with_pipeline_columns(create_test_frame(self.spark))

        # A single Transformer on its own, before chaining
        tokenized = transform_stage(build_tokenizer(self._settings), training)
        self._show(tokenized.select("id", self._settings.text_col, self._settings.words_col))

        self._pipeline = TextClassificationPipeline(self._settings)
        print(f"🚀 Fitting pipeline on {training.count()} documents...")
        self._pipeline.fit(training)

        predictions = self._pipeline.predictions_as_dicts(test)
        for row in predictions:
            probability = ", ".join(f"{p:.4f}" for p in row["probability"])
            print(f"   ({row['id']}, {row[self._settings.text_col]}) --> "
                  f"prob=[{probability}], prediction={row['prediction']}")

        training_auc = self._pipeline.evaluate(training)
        summary = self._pipeline.model_summary()
        print(f"📊 Training areaUnderROC: {training_auc:.4f}")
        print(f"   → Stages: {' → '.join(summary['stages'])}")

        saved_to = None
        if save_model:
            self._model_store.save(self._pipeline.model, self._settings, self._pipeline.training_rows)
            saved_to = str(self._model_store.pipeline_path)

        print("✓ ML pipeline complete")
        return {
            "predictions": predictions,
            "training_auc": training_auc,
            "model_summary": summary,
            "saved_to": saved_to,
        }

    def run_all(self, save_model: bool = False) -> Dict[str, Any]:
        return {
            "dataframes": self.run_dataframe_basics(),
            "text": self.run_text_actions(),
            "ml": self.run_ml_pipeline(save_model=save_model),
        }

    def run_section(self, section: str, save_model: bool = False) -> Dict[str, Any]:
        """
        Run one section by name ("dataframes", "text", "ml" or "all").

        Raises:
            ValueError: If the section name is unknown
        """
        if section == "all":
            return self.run_all(save_model=save_model)
        if section == "dataframes":
            return self.run_dataframe_basics()
        if section == "text":
            return self.run_text_actions()
        if section == "ml":
            return self.run_ml_pipeline(save_model=save_model)
        raise ValueError(f"Unknown section {section!r}; choose from {', '.join(SECTIONS)} or all")

    # ======================================
    # Saved model / ad-hoc files
    # ======================================
    def predict_texts(self, texts: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Predict labels for free text with the saved model.

        Raises:
            ValueError: If no texts are given
            FileNotFoundError: If no model was saved to model_dir
        """
        if not texts:
            raise ValueError("predict_texts() needs at least one text")

        model, metadata = self._model_store.load()
        settings = StageSettings.from_dict(metadata.get("settings", {}))
        pipeline = TextClassificationPipeline.from_model(model, settings)

        frame = self.spark.createDataFrame(
            [(index, text) for index, text in enumerate(texts)],
            ["id", settings.text_col],
        )
        return pipeline.predictions_as_dicts(frame)

    def describe_file(self, path, file_format: Optional[str] = None) -> Dict[str, Any]:
        """
        Load a JSON or CSV file and describe every column.

        Args:
            path: File to read
            file_format: "json" or "csv"; guessed from the suffix when None

        Raises:
            ValueError: If the format is not json or csv
        """
        file_format = (file_format or Path(path).suffix.lstrip(".")).lower()
        if file_format == "json":
            df = self.reader.read_json(path)
        elif file_format == "csv":
            df = self.reader.read_csv(path)
        else:
            raise ValueError(f"Unsupported format {file_format!r}; expected json or csv")

        return {
            "summary": frame_summary(df),
            "stats": describe_columns(df),
        }

    # ======================================
    # Helpers
    # ======================================
    def _ensure_data_files(self) -> Dict[str, Path]:
        data = self._config.data
        paths = {
            "json": data.path_for(data.people_json),
            "csv": data.path_for(data.people_csv),
            "text": data.path_for(data.text_file),
        }
        missing = [str(p) for p in paths.values() if not p.exists()]
        if missing:
            print(f"⚠ Missing input files {missing}; writing sample data to {data.data_dir}")
            write_sample_files(
                data.data_dir,
                json_name=data.people_json,
                csv_name=data.people_csv,
                text_name=data.text_file,
                overwrite=False,
            )
        return paths

    def _with_pipeline_columns(self, df: DataFrame) -> DataFrame:
        """Rename the seed text/label columns to the configured names."""
        renames = {"text": self._settings.text_col, "label": self._settings.label_col}
        return df.select(*[F.col(c).alias(renames.get(c, c)) for c in df.columns])

    def _show(self, df: DataFrame) -> None:
        if self._verbose:
            df.show(truncate=False)

    @staticmethod
    def _banner(title: str) -> None:
        print("=" * 60)
        print(title)
        print("=" * 60)

    def close(self) -> None:
        """Stop the SparkSession if this notebook created it."""
        if self._session_manager is not None:
            self._session_manager.stop()
            self._spark = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
