# ==============================================
# TextClassificationPipeline
# ==============================================
#
# PURPOSE:
#   Chains the configured stages into a Spark ML Pipeline, fits it
#   on id/text/label rows and uses the fitted PipelineModel to
#   predict labels for id/text rows.
#
#   Pipeline.fit() runs the stages in order: transformers call
#   transform(), the estimator (LogisticRegression) calls fit() and
#   its model becomes the last stage of the PipelineModel.
#
# CLASS: TextClassificationPipeline
# ---------------------------------
#   Stateful: holds the fitted PipelineModel after fit().
#
#   Constructor:
#   ------------
#   - __init__(settings: StageSettings | None = None)
#
#   Methods:
#   --------
#   - build() -> Pipeline
#   - fit(training_df) -> PipelineModel
#   - predict(df) -> DataFrame          (id, text, probability, prediction)
#   - evaluate(df) -> float             (area under ROC)
#   - predictions_as_dicts(df) -> list[dict]
#   - model_summary() -> dict
#   - from_model(model, settings) -> TextClassificationPipeline (classmethod)
#
# FUNCTION:
# ---------
# - transform_stage(stage, df) -> DataFrame
#     Run one Transformer on its own (e.g. only the Tokenizer).
#
# ==============================================

from typing import Any, Dict, List, Optional

from pyspark.ml import Pipeline, PipelineModel, Transformer
from pyspark.ml.evaluation import BinaryClassificationEvaluator
from pyspark.sql import DataFrame

from .stages import StageSettings, build_stages

ID_COL = "id"
OUTPUT_COLS = ("probability", "prediction")


def transform_stage(stage: Transformer, df: DataFrame) -> DataFrame:
    """
    Apply a single Transformer stage.

    Raises:
        TypeError: If the stage is an Estimator that still needs fit()
    """
    if not isinstance(stage, Transformer):
        raise TypeError(
            f"{type(stage).__name__} is not a Transformer; fit it first"
        )
    return stage.transform(df)


class TextClassificationPipeline:
    """
    Tokenizer → StopWordsRemover → HashingTF → LogisticRegression.

    All algorithms come from pyspark.ml; this class only wires the
    stages together and checks inputs before handing them to Spark.
    """

    def __init__(self, settings: Optional[StageSettings] = None):
        self.settings = settings or StageSettings()
        self.settings.validate()
        self.model: Optional[PipelineModel] = None
        self.training_rows = 0

    @classmethod
    def from_model(cls, model: PipelineModel, settings: Optional[StageSettings] = None) -> "TextClassificationPipeline":
        """Wrap an already fitted (e.g. loaded) PipelineModel."""
        pipeline = cls(settings)
        pipeline.model = model
        return pipeline

    @property
    def is_fitted(self) -> bool:
        return self.model is not None

    def build(self) -> Pipeline:
        return Pipeline(stages=build_stages(self.settings))

    def fit(self, training_df: DataFrame) -> PipelineModel:
        """
        Fit the pipeline on labelled documents.

        Args:
            training_df: DataFrame with the text and label columns

        Returns:
            The fitted PipelineModel (also kept on self.model)

        Raises:
            ValueError: If a required column is missing or there are no rows
        """
        self._require_columns(training_df, [self.settings.text_col, self.settings.label_col])
        if not training_df.head(1):
            raise ValueError("Cannot fit the pipeline on an empty training DataFrame")

        self.model = self.build().fit(training_df)
        self.training_rows = training_df.count()
        return self.model

    def predict(self, df: DataFrame) -> DataFrame:
        """
        Run the fitted model and keep only the interesting columns.

        Raises:
            RuntimeError: If fit() has not been called
            ValueError: If the text column is missing
        """
        model = self._fitted_model()
        self._require_columns(df, [self.settings.text_col])

        keep = [c for c in (ID_COL, self.settings.text_col) if c in df.columns]
        return model.transform(df).select(*keep, *OUTPUT_COLS)

    def evaluate(self, df: DataFrame) -> float:
        """Area under the ROC curve on labelled data."""
        model = self._fitted_model()
        self._require_columns(df, [self.settings.text_col, self.settings.label_col])

        evaluator = BinaryClassificationEvaluator(
            rawPredictionCol="rawPrediction",
            labelCol=self.settings.label_col,
            metricName="areaUnderROC",
        )
        return float(evaluator.evaluate(model.transform(df)))

    def predictions_as_dicts(self, df: DataFrame) -> List[Dict[str, Any]]:
        results = []
        for row in self.predict(df).collect():
            record = row.asDict()
            record["probability"] = row["probability"].toArray().tolist()
            record["prediction"] = float(row["prediction"])
            results.append(record)
        return results

    def model_summary(self) -> Dict[str, Any]:
        model = self._fitted_model()
        lr_model = model.stages[-1]
        return {
            "stages": [type(stage).__name__ for stage in model.stages],
            "num_features": lr_model.numFeatures,
            "num_coefficients": len(lr_model.coefficients),
            "intercept": float(lr_model.intercept),
            "training_rows": self.training_rows,
        }

    def _fitted_model(self) -> PipelineModel:
        if self.model is None:
            raise RuntimeError("Pipeline has not been fitted; call fit() first")
        return self.model

    @staticmethod
    def _require_columns(df: DataFrame, columns) -> None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing required column(s): {missing}")
