# ==============================================
# Tests for SparkMLNotebook and the CLI
# ==============================================
#
# These run every notebook section end to end against the shared
# local SparkSession, with data and models under tmp_path.
# ==============================================

import pytest

from sparkml_notebook import cli
from sparkml_notebook.config import AppConfig, DataConfig, PipelineConfig, SparkConfig, get_config
from sparkml_notebook.notebook import SparkMLNotebook
from sparkml_notebook.session import get_spark

TEST_SPARK = SparkConfig(master="local[1]", shuffle_partitions=1, log_level="ERROR")


@pytest.fixture
def notebook(spark, app_config):
    nb = SparkMLNotebook(app_config, spark=spark, verbose=False)
    yield nb
    nb.close()


class TestNotebookSections:
    """Tests for the notebook sections."""

    def test_missing_files_are_generated(self, notebook, app_config, capsys):
        notebook.run_dataframe_basics()
        data = app_config.data
        assert data.path_for(data.people_json).exists()
        assert data.path_for(data.people_csv).exists()
        assert data.path_for(data.text_file).exists()
        assert "writing sample data" in capsys.readouterr().out

    def test_dataframe_basics(self, notebook):
        result = notebook.run_dataframe_basics()
        assert result["summary"]["row_count"] == 5
        assert result["adults"] == ["Andy", "Berta", "Lena"]
        assert result["age_counts"] == [(None, 1), (19, 1), (25, 1), (30, 2)]
        assert result["oldest"] in ("Andy", "Berta")
        assert result["teenagers"] == ["Justin"]
        assert result["age_stats"]["count"] == "4"
        assert result["csv_summary"]["row_count"] == 5
        assert set(result["csv_stats"]) == {"name", "age"}

    def test_text_actions(self, notebook):
        result = notebook.run_text_actions()
        assert result["first_line"] == "# Apache Spark"
        assert result["keyword_lines"] == 8
        assert result["line_count"] > result["keyword_lines"]
        assert len(result["top_words"]) == 10

    def test_ml_pipeline_without_save(self, notebook):
        result = notebook.run_ml_pipeline()
        assert len(result["predictions"]) == 4
        assert result["saved_to"] is None
        assert notebook.pipeline.is_fitted

    def test_ml_pipeline_save_then_predict(self, notebook):
        result = notebook.run_ml_pipeline(save_model=True)
        assert result["saved_to"] is not None

        predictions = notebook.predict_texts(["spark spark spark", "hadoop mapreduce"])
        assert [row["id"] for row in predictions] == [0, 1]
        assert predictions[0]["prediction"] == 1.0
        assert predictions[1]["prediction"] == 0.0

    def test_predict_without_saved_model(self, notebook):
        with pytest.raises(FileNotFoundError):
            notebook.predict_texts(["spark"])

    def test_predict_needs_texts(self, notebook):
        with pytest.raises(ValueError):
            notebook.predict_texts([])

    def test_unknown_section(self, notebook):
        with pytest.raises(ValueError, match="Unknown section"):
            notebook.run_section("graphs")

    def test_describe_file_guesses_format(self, notebook, sample_files):
        result = notebook.describe_file(sample_files["csv"])
        assert result["summary"]["row_count"] == 5
        assert result["stats"]["age"]["max"] == "30"

    def test_describe_file_rejects_text(self, notebook, sample_files):
        with pytest.raises(ValueError, match="Unsupported format"):
            notebook.describe_file(sample_files["text"])

    def test_close_keeps_injected_session(self, spark, app_config):
        with SparkMLNotebook(app_config, spark=spark, verbose=False) as nb:
            assert nb.spark is spark
        assert spark.range(3).count() == 3

    def test_close_keeps_session_it_did_not_start(self, spark, tmp_path):
        config = AppConfig(
            spark=TEST_SPARK,
            data=DataConfig(data_dir=str(tmp_path / "data")),
            model_dir=str(tmp_path / "models"),
        )
        with SparkMLNotebook(config, verbose=False) as nb:
            assert nb.spark.range(1).count() == 1
        assert spark.range(2).count() == 2
        assert get_spark(TEST_SPARK).range(2).count() == 2

    def test_custom_text_and_label_columns(self, spark, tmp_path):
        config = AppConfig(
            data=DataConfig(data_dir=str(tmp_path / "data")),
            pipeline=PipelineConfig(text_col="content", label_col="target"),
            model_dir=str(tmp_path / "models"),
        )
        nb = SparkMLNotebook(config, spark=spark, verbose=False)
        result = nb.run_ml_pipeline(save_model=True)
        assert {row["content"] for row in result["predictions"]} >= {"spark i j k", "apache hadoop"}

        predictions = nb.predict_texts(["spark spark spark"])
        assert predictions[0]["content"] == "spark spark spark"
        assert predictions[0]["prediction"] == 1.0


class TestCli:
    """Tests for argument parsing and error reporting."""

    def test_demo_defaults_to_all(self):
        args = cli.build_parser().parse_args(["demo"])
        assert args.section == "all"
        assert args.save is False

    def test_predict_collects_texts(self):
        args = cli.build_parser().parse_args(["predict", "a b", "c", "--model-dir", "m"])
        assert args.texts == ["a b", "c"]
        assert args.model_dir == "m"

    def test_invalid_section_exits(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["demo", "graphs"])

    def test_errors_return_exit_code(self, monkeypatch, tmp_path, capsys):
        def failing_run(args):
            raise FileNotFoundError("No saved pipeline model")

        monkeypatch.setattr(cli, "run", failing_run)

        assert cli.main(["predict", "spark"]) == 1
        assert "❌ Error: No saved pipeline model" in capsys.readouterr().out

    def test_model_dir_override(self, monkeypatch, tmp_path):
        seen = {}

        class FakeNotebook:
            def __init__(self, config, verbose=True):
                seen["model_dir"] = config.model_dir

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def predict_texts(self, texts):
                return [{"id": 0, "text": texts[0], "prediction": 1.0, "probability": [0.1, 0.9]}]

        monkeypatch.setattr(cli, "SparkMLNotebook", FakeNotebook)
        model_dir = str(tmp_path / "elsewhere")

        assert cli.main(["--quiet", "predict", "spark", "--model-dir", model_dir]) == 0
        assert seen["model_dir"] == model_dir
        assert get_config().model_dir != model_dir

    def test_print_predictions_uses_saved_text_column(self, capsys):
        cli._print_predictions([{"id": 0, "content": "spark", "prediction": 1.0, "probability": [0.2, 0.8]}])
        assert "(0, spark) --> prediction=1.0 (p1=0.8000)" in capsys.readouterr().out


@pytest.fixture
def cli_env(spark, monkeypatch, tmp_path):
    """Point the CLI's environment config at tmp_path and the test session."""
    monkeypatch.setenv("SPARK_MASTER", "local[1]")
    monkeypatch.setenv("SPARK_SHUFFLE_PARTITIONS", "1")
    monkeypatch.setenv("SPARK_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MODEL_DIR", str(tmp_path / "models"))
    return tmp_path


class TestCliCommands:
    """Run the CLI commands end to end against the local session."""

    def test_demo_text(self, cli_env, capsys):
        assert cli.main(["--quiet", "demo", "text"]) == 0
        out = capsys.readouterr().out
        assert "Text actions complete" in out
        assert (cli_env / "data" / "README.md").exists()

    def test_train_save_then_predict(self, spark, cli_env, capsys):
        assert cli.main(["--quiet", "train", "--save"]) == 0
        assert (cli_env / "models" / "pipeline_model").exists()
        assert "ML pipeline complete" in capsys.readouterr().out

        assert cli.main(["predict", "spark spark spark", "hadoop mapreduce"]) == 0
        out = capsys.readouterr().out
        assert "(0, spark spark spark) --> prediction=1.0" in out
        assert "(1, hadoop mapreduce) --> prediction=0.0" in out
        assert spark.range(2).count() == 2

    def test_predict_with_empty_model_dir(self, cli_env, capsys):
        empty_dir = str(cli_env / "nothing_here")
        assert cli.main(["predict", "spark", "--model-dir", empty_dir]) == 1
        assert "❌ Error: No saved pipeline model" in capsys.readouterr().out
        assert get_config().model_dir == str(cli_env / "models")

    def test_describe_csv(self, cli_env, sample_files, capsys):
        assert cli.main(["describe", str(sample_files["csv"])]) == 0
        out = capsys.readouterr().out
        assert "📊 5 rows" in out
        assert "→ age:" in out
