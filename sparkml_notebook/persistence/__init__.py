# ==============================================
# SECTION 4: PERSISTENCE (Fitted models across runs)
# ==============================================
#
# This package saves the fitted pipeline so that later runs
# can predict without fitting again.
#
# Modules:
# --------
# - model_store.py  → Save/load the PipelineModel and its settings
#
# ==============================================

from .model_store import ModelStore

__all__ = ["ModelStore"]
