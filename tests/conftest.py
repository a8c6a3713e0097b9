# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - spark          → one local SparkSession for the whole test run
# - app_config     → AppConfig pointing data/model dirs at tmp_path
# - sample_files   → people.json / people.csv / README.md in tmp_path
# - clean_config   → (autouse) drop the cached config between tests
#
# ==============================================

import pytest

from sparkml_notebook.config import AppConfig, DataConfig, SparkConfig, reset_config
from sparkml_notebook.datasets import write_sample_files
from sparkml_notebook.session import SessionManager


@pytest.fixture(scope="session")
def spark():
    """Provide a local SparkSession shared by every test."""
    manager = SessionManager(SparkConfig(
        app_name="sparkml-notebook-tests",
        master="local[1]",
        shuffle_partitions=1,
        log_level="ERROR",
    ))
    yield manager.spark
    manager.stop()


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Configuration with data and model directories under tmp_path."""
    return AppConfig(
        data=DataConfig(data_dir=str(tmp_path / "data")),
        model_dir=str(tmp_path / "models" / "text_classifier"),
    )


@pytest.fixture
def sample_files(tmp_path):
    """Write the sample input files and return their paths."""
    return write_sample_files(tmp_path / "data")
