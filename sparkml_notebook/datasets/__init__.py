# ==============================================
# SECTION 1: DATASETS
# ==============================================
#
# This package builds the tabular datasets the notebook works on,
# either from in-memory tuples or from files on disk.
#
# Modules:
# --------
# - samples.py → Seed tuples, schemas, DataFrame builders, sample files
# - readers.py → JSON / CSV / text readers over spark.read
#
# ==============================================

from .readers import DataReader
from .samples import (
    PEOPLE_ROWS,
    TEST_ROWS,
    TRAINING_ROWS,
    create_people_frame,
    create_test_frame,
    create_training_frame,
    write_sample_files,
)

__all__ = [
    "DataReader",
    "PEOPLE_ROWS",
    "TEST_ROWS",
    "TRAINING_ROWS",
    "create_people_frame",
    "create_test_frame",
    "create_training_frame",
    "write_sample_files",
]
