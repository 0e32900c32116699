"""Tests for the CLI entry point."""

from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from peerreview_cli.cli import EXIT_INTERRUPTED, main
from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.models import ReviewStatus
from peerreview_core.reviewer import ReviewSummary


def _make_config():
    return {
        "base_url": "http://localhost:4000/v1",
        "api_key": "sk-test",
        "timeout_seconds": 300,
        "max_tokens": 4096,
        "plans_dir": "/tmp/plans",
    }


def _summary(status=ReviewStatus.SUCCESS):
    return ReviewSummary(job=MagicMock(), results=[], status=status)


@pytest.fixture
def patched(mocker):
    """Patch load_config and run_review where main() imports them from."""
    cfg = _make_config()
    load = mocker.patch("peerreview_core.config.load_config", return_value=cfg)
    run = mocker.patch("peerreview_core.reviewer.run_review", return_value=_summary())
    return cfg, load, run


class TestHelp:
    def test_help_lists_types_and_models(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Review types & models:" in result.output
        assert "security" in result.output
        assert "GPT-5.1, Gemini 3 Pro, Gemini 2.5 Pro" in result.output
        assert "GPT-5.1 Codex" in result.output
        assert "LITELLM_API_KEY" in result.output

    def test_short_help_flag(self):
        result = CliRunner().invoke(main, ["-h"])
        assert result.exit_code == 0
        assert "--type" in result.output
        assert "--mode" in result.output


class TestUsageErrors:
    def test_unknown_option_exits_1(self, patched):
        _, _, run = patched
        result = CliRunner().invoke(main, ["--frobnicate"])
        assert result.exit_code == 1
        run.assert_not_called()

    def test_unknown_review_type_exits_1(self, patched):
        _, _, run = patched
        result = CliRunner().invoke(main, ["--type", "style"])
        assert result.exit_code == 1
        assert "style" in result.output
        run.assert_not_called()

    def test_unknown_mode_exits_1(self, patched):
        result = CliRunner().invoke(main, ["--mode", "svn"])
        assert result.exit_code == 1

    def test_extra_positional_exits_1(self, patched):
        result = CliRunner().invoke(main, ["a.py", "b.py"])
        assert result.exit_code == 1


class TestRunReview:
    def test_passes_arguments_through(self, patched):
        cfg, load, run = patched

        result = CliRunner().invoke(main, ["src/auth.ts", "--type", "security"])

        assert result.exit_code == 0
        load.assert_called_once_with(".peerreview.yml")
        run.assert_called_once_with(cfg, file_path="src/auth.ts", review_type="security", mode=None)

    def test_no_arguments_means_auto_detection(self, patched):
        cfg, _, run = patched
        CliRunner().invoke(main, [])
        run.assert_called_once_with(cfg, file_path=None, review_type=None, mode=None)

    def test_type_and_mode_are_case_insensitive(self, patched):
        _, _, run = patched
        result = CliRunner().invoke(main, ["-t", "SECURITY", "-m", "PLAN"])
        assert result.exit_code == 0
        assert run.call_args.kwargs["review_type"] == "security"
        assert run.call_args.kwargs["mode"] == "plan"

    def test_config_path_option(self, patched):
        _, load, _ = patched
        CliRunner().invoke(main, ["--config", "custom.yml"])
        load.assert_called_once_with("custom.yml")

    def test_config_path_from_env(self, patched):
        _, load, _ = patched
        CliRunner().invoke(main, [], env={"PEERREVIEW_CONFIG": "from-env.yml"})
        load.assert_called_once_with("from-env.yml")


class TestExitCodes:
    @pytest.mark.parametrize(
        "status, code",
        [
            (ReviewStatus.SUCCESS, 0),
            (ReviewStatus.PARTIAL_FAILURE, 2),
            (ReviewStatus.TOTAL_FAILURE, 1),
        ],
    )
    def test_exit_code_follows_status(self, patched, status, code):
        _, _, run = patched
        run.return_value = _summary(status)
        result = CliRunner().invoke(main, ["plan.md"])
        assert result.exit_code == code

    def test_review_error_exits_1_with_kind(self, patched):
        _, _, run = patched
        run.side_effect = ReviewError(ErrorKind.IO, "File not found: nope.py")

        result = CliRunner().invoke(main, ["nope.py"])

        assert result.exit_code == 1
        assert "IO Error: File not found: nope.py" in result.output

    def test_review_error_details_are_shown(self, patched):
        _, _, run = patched
        run.side_effect = ReviewError(ErrorKind.VALIDATION, "File is empty", details="empty.py")

        result = CliRunner().invoke(main, ["empty.py"])

        assert result.exit_code == 1
        assert "Validation Error: File is empty" in result.output
        assert "Details: empty.py" in result.output

    def test_config_error_from_load_config(self, patched):
        _, load, run = patched
        load.side_effect = ReviewError(ErrorKind.CONFIG, "LITELLM_API_KEY is not set")

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
        assert "Config Error" in result.output
        run.assert_not_called()

    def test_keyboard_interrupt(self, patched):
        _, _, run = patched
        run.side_effect = KeyboardInterrupt

        result = CliRunner().invoke(main, [])

        assert result.exit_code == EXIT_INTERRUPTED
