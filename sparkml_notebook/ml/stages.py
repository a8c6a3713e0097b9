# ==============================================
# Pipeline Stages
# ==============================================
#
# PURPOSE:
#   Configure the pre-built Spark ML stages the text classifier
#   chains together. Nothing here implements an algorithm; each
#   builder only wires column names and parameters.
#
#       text ──Tokenizer──▶ words ──StopWordsRemover──▶ filtered
#            ──HashingTF──▶ features ──LogisticRegression──▶ prediction
#
# CLASSES:
# --------
# - StageSettings (dataclass)
#     Column names and parameters for every stage.
#
#     Methods:
#     --------
#     - from_config(config: PipelineConfig) -> StageSettings (classmethod)
#     - validate() -> None
#     - to_dict() / from_dict()  → for model metadata persistence
#
# FUNCTIONS:
# ----------
# - build_tokenizer(settings) -> Tokenizer
# - build_stop_words_remover(settings) -> StopWordsRemover
# - build_hashing_tf(settings) -> HashingTF
# - build_logistic_regression(settings) -> LogisticRegression
# - build_stages(settings) -> list
#
# ==============================================

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Union

from pyspark.ml import Estimator, Transformer
from pyspark.ml.classification import LogisticRegression
from pyspark.ml.feature import HashingTF, StopWordsRemover, Tokenizer

from sparkml_notebook.config import PipelineConfig


@dataclass
class StageSettings:
    """
    Column wiring and parameters for the text classification stages.

    The output column of each stage is the input column of the next one.
    When remove_stop_words is False, HashingTF reads words_col directly.
    """

    # --- Columns ---
    text_col: str = "text"
    words_col: str = "words"
    filtered_col: str = "filtered"
    features_col: str = "features"
    label_col: str = "label"

    # --- Parameters ---
    num_features: int = 1000
    max_iter: int = 10
    reg_param: float = 0.001
    remove_stop_words: bool = True

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "StageSettings":
        return cls(
            text_col=config.text_col,
            label_col=config.label_col,
            num_features=config.num_features,
            max_iter=config.max_iter,
            reg_param=config.reg_param,
            remove_stop_words=config.remove_stop_words,
        )

    @property
    def hashing_input_col(self) -> str:
        return self.filtered_col if self.remove_stop_words else self.words_col

    def validate(self) -> None:
        """
        Raises:
            ValueError: If a parameter is out of range or column names collide
        """
        if self.num_features <= 0:
            raise ValueError(f"num_features must be positive, got {self.num_features}")
        if self.max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}")
        if self.reg_param < 0:
            raise ValueError(f"reg_param must be non-negative, got {self.reg_param}")

        columns = [self.text_col, self.words_col, self.features_col, self.label_col]
        if self.remove_stop_words:
            columns.append(self.filtered_col)
        if len(set(columns)) != len(columns):
            raise ValueError(f"Stage column names must be distinct, got {columns}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StageSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def build_tokenizer(settings: StageSettings) -> Tokenizer:
    return Tokenizer(inputCol=settings.text_col, outputCol=settings.words_col)


def build_stop_words_remover(settings: StageSettings) -> StopWordsRemover:
    return StopWordsRemover(inputCol=settings.words_col, outputCol=settings.filtered_col)


def build_hashing_tf(settings: StageSettings) -> HashingTF:
    return HashingTF(
        inputCol=settings.hashing_input_col,
        outputCol=settings.features_col,
        numFeatures=settings.num_features,
    )


def build_logistic_regression(settings: StageSettings) -> LogisticRegression:
    return LogisticRegression(
        featuresCol=settings.features_col,
        labelCol=settings.label_col,
        maxIter=settings.max_iter,
        regParam=settings.reg_param,
    )


def build_stages(settings: StageSettings) -> List[Union[Estimator, Transformer]]:
    """Return the configured stages in pipeline order."""
    settings.validate()

    stages: List[Union[Estimator, Transformer]] = [build_tokenizer(settings)]
    if settings.remove_stop_words:
        stages.append(build_stop_words_remover(settings))
    stages.append(build_hashing_tf(settings))
    stages.append(build_logistic_regression(settings))
    return stages
