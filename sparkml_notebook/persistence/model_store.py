import json
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Tuple

import pyspark
from pyspark.ml import PipelineModel

from sparkml_notebook.ml.stages import StageSettings


# ==============================================
# ModelStore
# ==============================================
#
# PURPOSE:
#   Persist a fitted PipelineModel to disk together with the
#   settings it was trained with, so predictions can be made
#   later without re-fitting.
#
# WHAT IS PERSISTED:
#   1. The PipelineModel   → Spark's own ML writer (a directory)
#   2. StageSettings       → Column names and parameters
#   3. Training info       → Row count, save time, pyspark version
#
# CLASS: ModelStore
# -----------------
#   Stateful: holds a reference to the storage directory.
#
#   Constructor:
#   ------------
#   - __init__(model_dir: str = "models/text_classifier")
#       Store paths only; the directory is created on save().
#
class ModelStore:
    """
    Handles persistence of the fitted text classification pipeline.

    Files created:
    - <model_dir>/pipeline_model/  → PipelineModel (written by Spark)
    - <model_dir>/metadata.json    → Settings and training info
    """

    def __init__(self, model_dir: str = "models/text_classifier"):
        """
        Initialize the model store.

        Args:
            model_dir: Directory to store the model in
        """
        self.model_dir = Path(model_dir)

        # Define file paths
        self.pipeline_path = self.model_dir / "pipeline_model"
        self.metadata_file = self.model_dir / "metadata.json"
#   Methods:
#   --------
#   - save(model, settings, training_rows) -> None
#       Overwrite any previous model and write metadata.json.
#
#   - load() -> (PipelineModel, dict)
#       Raise FileNotFoundError if nothing was saved.
#
#   - load_metadata() -> dict
#
    def save(self, model: PipelineModel, settings: StageSettings, training_rows: int) -> None:
        """
        Save a fitted pipeline and its metadata.

        Args:
            model: Fitted PipelineModel
            settings: The StageSettings used to build the pipeline
            training_rows: Number of rows the model was fitted on
        """
        self.model_dir.mkdir(parents=True, exist_ok=True)
        model.write().overwrite().save(str(self.pipeline_path))

        metadata = {
            "settings": settings.to_dict(),
            "training_rows": training_rows,
            "stages": [type(stage).__name__ for stage in model.stages],
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "pyspark_version": pyspark.__version__,
        }
        with open(self.metadata_file, 'w') as f:
            json.dump(metadata, f, indent=2)

        print(f"✓ Saved pipeline model ({len(model.stages)} stages) to {self.pipeline_path}")

    def load(self) -> Tuple[PipelineModel, Dict[str, Any]]:
        """
        Load the saved pipeline and its metadata.

        Returns:
            Tuple of (PipelineModel, metadata dict)

        Raises:
            FileNotFoundError: If no model has been saved in model_dir
        """
        if not self.pipeline_path.exists():
            raise FileNotFoundError(f"No saved pipeline model at {self.pipeline_path}")

        model = PipelineModel.load(str(self.pipeline_path))
        metadata = self.load_metadata()

        print(f"✓ Loaded pipeline model from {self.pipeline_path}")
        return model, metadata

    def load_metadata(self) -> Dict[str, Any]:
        """
        Returns:
            The saved metadata, or an empty dict if metadata.json is missing
        """
        if not self.metadata_file.exists():
            print(f"⚠ No metadata file found at {self.metadata_file}")
            return {}

        with open(self.metadata_file, 'r') as f:
            return json.load(f)

    def load_settings(self) -> StageSettings:
        """Rebuild StageSettings from metadata (defaults if none were saved)."""
        return StageSettings.from_dict(self.load_metadata().get("settings", {}))
#   UTILITY:
#   - exists() -> bool
#       Check if a model has been saved.
#
#   - clear() -> None
#       Delete the saved model and metadata.
#
    def exists(self) -> bool:
        return self.pipeline_path.exists()

    def clear(self) -> None:
        """
        Delete the saved model and metadata (for testing or reset).
        """
        if self.pipeline_path.exists():
            shutil.rmtree(self.pipeline_path)
            print(f"🗑️  Deleted {self.pipeline_path}")
        if self.metadata_file.exists():
            self.metadata_file.unlink()
            print(f"🗑️  Deleted {self.metadata_file}")
# FILE STRUCTURE:
# ---------------
#   models/text_classifier/
#   ├── pipeline_model/     → metadata/ + stages/ (Spark ML format)
#   └── metadata.json       → {settings, training_rows, stages, saved_at, ...}
#
# ==============================================
