"""Tests for the crowdin-export command line."""

from pathlib import Path
from unittest.mock import patch

import pytest

from crowdin_export.core.exceptions import (
    ConfigInvalidError,
    DownloadFailedError,
    InvalidCredentialsError,
)
from crowdin_export.core.models import EXTRACT_MODE, TransferResult
from crowdin_export.main import EXIT_CONFIG, EXIT_FAILED, EXIT_OK, build_parser, main


@pytest.fixture(autouse=True)
def clean_env():
    with patch.multiple(
        "crowdin_export.config.env",
        CROWDIN_PROJECT_ID=None,
        CROWDIN_API_KEY=None,
        CROWDIN_OUTPUT=None,
        CROWDIN_EXTRACT=True,
        OFFLINE=False,
    ):
        yield


@pytest.fixture
def mock_sync():
    with patch("crowdin_export.main.sync_translations") as sync:
        sync.return_value = TransferResult(
            mode=EXTRACT_MODE, output_path=Path("out"), entries_written=3, entries_skipped=1
        )
        yield sync


class TestParser:
    def test_repackage_sets_extract_false(self):
        args = build_parser().parse_args(["--repackage"])
        assert args.extract is False

    def test_extract_unset_by_default(self):
        args = build_parser().parse_args([])
        assert args.extract is None

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--extract", "--repackage"])


class TestMain:
    def test_runs_sync(self, mock_sync, capsys):
        code = main(["--project-id", "forge", "--api-key", "k", "-o", "out"])

        assert code == EXIT_OK
        settings = mock_sync.call_args[0][0]
        assert settings.project_id == "forge"
        assert settings.output == Path("out")
        assert settings.extract is True
        assert "3 file(s) written" in capsys.readouterr().out

    def test_repackage_defaults_to_zip_output(self, mock_sync):
        assert main(["--project-id", "forge", "--api-key", "k", "--repackage"]) == EXIT_OK

        settings = mock_sync.call_args[0][0]
        assert settings.extract is False
        assert settings.output == Path("translations.zip")

    def test_extract_defaults_to_directory_output(self, mock_sync):
        assert main(["--project-id", "forge", "--api-key", "k"]) == EXIT_OK
        assert mock_sync.call_args[0][0].output == Path("translations")

    def test_skips_without_api_key(self, mock_sync):
        assert main(["--project-id", "forge"]) == EXIT_OK
        mock_sync.assert_not_called()

    def test_skips_offline(self, mock_sync):
        assert main(["--project-id", "forge", "--api-key", "k", "--offline"]) == EXIT_OK
        mock_sync.assert_not_called()

    def test_config_error_exit_code(self, mock_sync):
        mock_sync.side_effect = ConfigInvalidError("Project ID must be set for Crowdin")
        assert main(["--api-key", "k"]) == EXIT_CONFIG

    @pytest.mark.parametrize(
        "error",
        [InvalidCredentialsError("Invalid Crowdin API key"), DownloadFailedError("HTTP 500")],
    )
    def test_pipeline_error_exit_code(self, mock_sync, error):
        mock_sync.side_effect = error
        assert main(["--project-id", "forge", "--api-key", "k"]) == EXIT_FAILED
