# ==============================================
# SessionManager
# ==============================================
#
# PURPOSE:
#   Owns the SparkSession used by every notebook section.
#   The session is the entry point to DataFrames, readers,
#   SQL and the ML pipeline API.
#
# CLASS: SessionManager
# ---------------------
#   Stateful: holds the SparkSession once built.
#
#   Constructor:
#   ------------
#   - __init__(config: SparkConfig | None = None)
#       Store settings. Don't start Spark yet.
#
#   Properties / Methods:
#   ---------------------
#   - spark -> SparkSession
#       Build (or reuse) the session on first access.
#
#   - stop() -> None
#       Stop the session if this manager started one. A session
#       that was already running when spark was first accessed
#       belongs to someone else and is left alone.
#
#   Context Manager:
#   ----------------
#   - with SessionManager() as spark: ...
#
# FUNCTION:
# ---------
# - get_spark(config=None) -> SparkSession
#     Shared session for scripts that don't manage lifecycle.
#
# ==============================================

from typing import Optional

from pyspark.sql import SparkSession

from sparkml_notebook.config import SparkConfig, get_config


class SessionManager:
    """Builds and stops a SparkSession from SparkConfig."""

    def __init__(self, config: Optional[SparkConfig] = None):
        self.config = config or get_config().spark
        self._spark: Optional[SparkSession] = None
        self._owns_session = False

    @property
    def spark(self) -> SparkSession:
        if self._spark is None:
            self._spark = self._build()
        return self._spark

    @property
    def is_active(self) -> bool:
        return self._spark is not None

    def _build(self) -> SparkSession:
        # getOrCreate() hands back a running session if there is one
        self._owns_session = SparkSession.getActiveSession() is None
        spark = (
            SparkSession.builder
            .master(self.config.master)
            .appName(self.config.app_name)
            .config("spark.sql.shuffle.partitions", str(self.config.shuffle_partitions))
            .config("spark.ui.showConsoleProgress", "false")
            .getOrCreate()
        )
        spark.sparkContext.setLogLevel(self.config.log_level)
        print(f"✓ Spark {spark.version} session '{self.config.app_name}' on {self.config.master}")
        return spark

    def stop(self) -> None:
        if self._spark is None:
            return
        if self._owns_session:
            self._spark.stop()
            print("✓ Spark session stopped")
        self._spark = None
        self._owns_session = False

    def __enter__(self) -> SparkSession:
        return self.spark

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False


_shared_manager: Optional[SessionManager] = None


def get_spark(config: Optional[SparkConfig] = None) -> SparkSession:
    """
    Return a shared SparkSession, building it on first use.

    Args:
        config: Optional Spark settings. Only used on the first call.
    """
    global _shared_manager
    if _shared_manager is None:
        _shared_manager = SessionManager(config)
    return _shared_manager.spark
