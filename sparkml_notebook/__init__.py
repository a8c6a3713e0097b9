# ==============================================
# Spark ML Notebook
# ==============================================
#
# Package Structure (4 Sections + Orchestrator):
#
# sparkml_notebook/
# ├── datasets/       # Section 1: Build DataFrames from tuples and files
# ├── exploration/    # Section 2: Transformations and actions
# ├── ml/             # Section 3: Feature extraction + classification pipeline
# ├── persistence/    # Section 4: Save / load the fitted pipeline
# ├── config.py       # Configuration management
# ├── session.py      # SparkSession lifecycle
# ├── notebook.py     # Orchestrator class running the sections
# └── cli.py          # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
