"""Read-only queries against the local git working tree.

Every call shells out to the git binary and never writes to the repository.
Failures (git missing, not a repository, timeout) are logged and reported as
"nothing found" so the locator can fall back to plan discovery.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

_GIT_TIMEOUT_SECONDS = 10


def _run_git(args: list[str], cwd: str | Path | None = None) -> str | None:
    """Run a git command and return stdout, or None if it failed."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=_GIT_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("git %s failed: %s", " ".join(args), e)
        return None
    if result.returncode != 0:
        logger.debug("git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip())
        return None
    return result.stdout


def get_git_root(cwd: str | Path | None = None) -> Path | None:
    """Return the top-level directory of the enclosing repository, or None."""
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    if not out or not out.strip():
        return None
    return Path(out.strip())


def get_changed_files(root: str | Path) -> list[str]:
    """Return repo-relative paths with unstaged or staged modifications.

    Unstaged paths come first, then staged ones not already listed. Deleted
    files are still reported here; callers check existence on disk. Output is
    NUL-separated so git never C-quotes unusual file names.
    """
    unstaged = _run_git(["diff", "--name-only", "-z"], cwd=root)
    staged = _run_git(["diff", "--cached", "--name-only", "-z"], cwd=root)
    if unstaged is None and staged is None:
        logger.warning("Git change detection failed in %s", root)
        return []

    seen: set[str] = set()
    files: list[str] = []
    for name in (unstaged or "").split("\0") + (staged or "").split("\0"):
        if name.strip() and name not in seen:
            seen.add(name)
            files.append(name)
    return files
