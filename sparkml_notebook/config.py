# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - SparkConfig (dataclass)
#     app_name: str            (default "SparkMLNotebook")
#     master: str              (default "local[*]")
#     shuffle_partitions: int  (default 4)
#     log_level: str           (default "WARN")
#
# - DataConfig (dataclass)
#     data_dir: str            (default "data/")
#     people_json: str         (default "people.json")
#     people_csv: str          (default "people.csv")
#     text_file: str           (default "README.md")
#
# - PipelineConfig (dataclass)
#     text_col: str            (default "text")
#     label_col: str           (default "label")
#     num_features: int        (default 1000)
#     max_iter: int            (default 10)
#     reg_param: float         (default 0.001)
#     remove_stop_words: bool  (default True)
#
# - AppConfig (dataclass)
#     spark: SparkConfig
#     data: DataConfig
#     pipeline: PipelineConfig
#     model_dir: str           (default "models/text_classifier")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton so the next get_config() re-reads the environment.
#
# USAGE:
# ------
#   from sparkml_notebook.config import get_config
#   config = get_config()
#   print(config.spark.master)
#   print(config.pipeline.num_features)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class SparkConfig:
    """Spark session configuration."""
    app_name: str = "SparkMLNotebook"
    master: str = "local[*]"
    shuffle_partitions: int = 4
    log_level: str = "WARN"


@dataclass
class DataConfig:
    """Locations of the example input files."""
    data_dir: str = "data/"
    people_json: str = "people.json"
    people_csv: str = "people.csv"
    text_file: str = "README.md"

    def path_for(self, file_name: str) -> Path:
        """Resolve a data file name against data_dir."""
        return Path(self.data_dir) / file_name


@dataclass
class PipelineConfig:
    """Parameters for the text classification pipeline stages."""
    text_col: str = "text"
    label_col: str = "label"
    num_features: int = 1000
    max_iter: int = 10
    reg_param: float = 0.001
    remove_stop_words: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    spark: SparkConfig = field(default_factory=SparkConfig)
    data: DataConfig = field(default_factory=DataConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    model_dir: str = "models/text_classifier"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got {raw!r}")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If a numeric or boolean variable cannot be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build Spark configuration
    spark_config = SparkConfig(
        app_name=os.getenv("SPARK_APP_NAME", "SparkMLNotebook"),
        master=os.getenv("SPARK_MASTER", "local[*]"),
        shuffle_partitions=_env_int("SPARK_SHUFFLE_PARTITIONS", "4"),
        log_level=os.getenv("SPARK_LOG_LEVEL", "WARN").upper()
    )

    # Build data file configuration
    data_config = DataConfig(
        data_dir=os.getenv("DATA_DIR", "data/"),
        people_json=os.getenv("PEOPLE_JSON", "people.json"),
        people_csv=os.getenv("PEOPLE_CSV", "people.csv"),
        text_file=os.getenv("TEXT_FILE", "README.md")
    )

    # Build pipeline configuration
    pipeline_config = PipelineConfig(
        text_col=os.getenv("PIPELINE_TEXT_COL", "text"),
        label_col=os.getenv("PIPELINE_LABEL_COL", "label"),
        num_features=_env_int("PIPELINE_NUM_FEATURES", "1000"),
        max_iter=_env_int("PIPELINE_MAX_ITER", "10"),
        reg_param=_env_float("PIPELINE_REG_PARAM", "0.001"),
        remove_stop_words=_env_bool("PIPELINE_REMOVE_STOP_WORDS", "true")
    )

    # Build main application configuration
    _config_instance = AppConfig(
        spark=spark_config,
        data=data_config,
        pipeline=pipeline_config,
        model_dir=os.getenv("MODEL_DIR", "models/text_classifier")
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config_instance
    _config_instance = None
