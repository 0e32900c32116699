"""Tests for the read-only git helpers."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from peerreview_core.git import get_changed_files, get_git_root


def _completed(stdout="", returncode=0):
    return MagicMock(returncode=returncode, stdout=stdout, stderr="")


class TestGetGitRoot:
    def test_returns_toplevel(self):
        with patch("subprocess.run", return_value=_completed("/home/me/repo\n")) as mock_run:
            assert get_git_root("/home/me/repo/src") == Path("/home/me/repo")
        assert mock_run.call_args.args[0] == ["git", "rev-parse", "--show-toplevel"]
        assert mock_run.call_args.kwargs["cwd"] == "/home/me/repo/src"

    def test_none_outside_repository(self):
        with patch("subprocess.run", return_value=_completed("", returncode=128)):
            assert get_git_root() is None

    def test_none_when_git_not_installed(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert get_git_root() is None

    def test_none_when_git_times_out(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="git", timeout=10)):
            assert get_git_root() is None


class TestGetChangedFiles:
    def test_union_of_unstaged_and_staged_in_first_seen_order(self):
        outputs = [_completed("b.py\0a.py\0"), _completed("a.py\0c.sql\0")]
        with patch("subprocess.run", side_effect=outputs) as mock_run:
            assert get_changed_files("/repo") == ["b.py", "a.py", "c.sql"]
        commands = [c.args[0] for c in mock_run.call_args_list]
        assert commands == [
            ["git", "diff", "--name-only", "-z"],
            ["git", "diff", "--cached", "--name-only", "-z"],
        ]

    def test_names_are_taken_verbatim(self):
        outputs = [_completed("café.py\0with space.py\0"), _completed("")]
        with patch("subprocess.run", side_effect=outputs):
            assert get_changed_files("/repo") == ["café.py", "with space.py"]

    def test_empty_entries_are_dropped(self):
        outputs = [_completed("\0a.py\0"), _completed("")]
        with patch("subprocess.run", side_effect=outputs):
            assert get_changed_files("/repo") == ["a.py"]

    def test_one_failing_query_keeps_the_other(self):
        outputs = [_completed("", returncode=1), _completed("staged.py\0")]
        with patch("subprocess.run", side_effect=outputs):
            assert get_changed_files("/repo") == ["staged.py"]

    def test_both_failing_returns_empty(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert get_changed_files("/repo") == []
