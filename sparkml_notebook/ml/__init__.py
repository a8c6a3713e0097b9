# ==============================================
# SECTION 3: MACHINE LEARNING
# ==============================================
#
# This package chains feature extraction and classification
# stages through the Spark ML Pipeline abstraction.
#
# Modules:
# --------
# - stages.py        → StageSettings + builders for each pre-built stage
# - text_pipeline.py → Fit / predict / evaluate the chained pipeline
#
# ==============================================

from .stages import (
    StageSettings,
    build_hashing_tf,
    build_logistic_regression,
    build_stages,
    build_stop_words_remover,
    build_tokenizer,
)
from .text_pipeline import TextClassificationPipeline, transform_stage

__all__ = [
    "StageSettings",
    "build_hashing_tf",
    "build_logistic_regression",
    "build_stages",
    "build_stop_words_remover",
    "build_tokenizer",
    "TextClassificationPipeline",
    "transform_stage",
]
