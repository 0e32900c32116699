"""Review target discovery.

Resolution order, first match wins:
  1. an explicit path
  2. mode "plan"        → newest plan document in the plans directory
  3. mode "git" / None  → staged and unstaged changes in the working tree
  4. fallback           → plan discovery when git finds nothing

Files are read exactly once here; everything downstream works on that
snapshot.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.git import get_changed_files, get_git_root
from peerreview_core.models import ReviewFile
from peerreview_core.utils.code import is_reviewable_file, language_for

console = Console()
logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024
MAX_TOTAL_SIZE = 20 * 1024 * 1024
MAX_FILES = 15

PLAN_GLOB = "*.md"

MODES = ("git", "plan")


def read_file_content(path: Path) -> str:
    """Read a file as UTF-8, rejecting empty or whitespace-only content."""
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReviewError(ErrorKind.IO, f"Failed to read file: {path}", details=str(e)) from e
    if not content.strip():
        raise ReviewError(ErrorKind.VALIDATION, f"File is empty or contains only whitespace: {path}")
    return content


def _display_name(path: Path, git_root: Path | None) -> str:
    if git_root is not None:
        try:
            return path.relative_to(git_root).as_posix()
        except ValueError:
            pass
    return path.name


def load_review_file(path: Path, git_root: Path | None = None) -> ReviewFile:
    path = path.resolve()
    return ReviewFile(
        path=str(path),
        display_name=_display_name(path, git_root),
        language=language_for(path.name),
        content=read_file_content(path),
    )


def find_most_recent_plan(plans_dir: str | Path) -> Path | None:
    """Return the plan document with the newest mtime, or None.

    Ties on mtime are broken by file name so repeated runs agree.
    """
    directory = Path(plans_dir)
    if not directory.is_dir():
        return None
    plans = [p for p in directory.glob(PLAN_GLOB) if p.is_file()]
    if not plans:
        return None
    return max(plans, key=lambda p: (p.stat().st_mtime, p.name))


def select_within_limits(
    candidates: list[tuple[Path, int]],
    max_files: int = MAX_FILES,
    max_total_size: int = MAX_TOTAL_SIZE,
) -> list[Path]:
    """Return the longest prefix of ``candidates`` that fits both limits.

    Selection stops at the first file that would push the running total over
    ``max_total_size``; a smaller file further down is never pulled forward.
    """
    selected: list[Path] = []
    total = 0
    for path, size in candidates[:max_files]:
        if total + size > max_total_size:
            break
        total += size
        selected.append(path)
    return selected


def discover_git_files(git_root: Path, max_file_size: int = MAX_FILE_SIZE) -> list[tuple[Path, int]]:
    """Return reviewable changed files that still exist, with their sizes.

    The existence check runs after the diff query so files deleted in the
    working tree drop out here.
    """
    found: list[tuple[Path, int]] = []
    for rel in get_changed_files(git_root):
        if not is_reviewable_file(rel):
            continue
        path = git_root / rel
        if not path.is_file():
            logger.debug("Skipping %s: no longer on disk", rel)
            continue
        size = path.stat().st_size
        if size > max_file_size:
            logger.debug("Skipping %s: %d bytes exceeds per-file limit", rel, size)
            continue
        found.append((path, size))
    return found


def _resolve_explicit(explicit_path: str, cwd: Path, max_file_size: int) -> Path:
    path = Path(explicit_path).expanduser()
    if not path.is_absolute():
        path = cwd / path
    path = path.resolve()

    if not path.exists():
        raise ReviewError(ErrorKind.IO, f"File not found: {explicit_path}")
    if not path.is_file():
        raise ReviewError(ErrorKind.VALIDATION, f"Not a regular file: {explicit_path}")

    size = path.stat().st_size
    if size == 0:
        raise ReviewError(ErrorKind.VALIDATION, f"File is empty: {explicit_path}")
    if size > max_file_size:
        raise ReviewError(
            ErrorKind.VALIDATION,
            f"File exceeds {max_file_size // (1024 * 1024)}MB limit: {explicit_path}",
        )
    return path


def _print_git_listing(selected: list[Path], total_found: int, git_root: Path) -> None:
    console.print(f"Auto-detected {len(selected)} changed file(s) from git:")
    for path in selected:
        console.print(f"   • {escape(_display_name(path, git_root))}", soft_wrap=True)
    skipped = total_found - len(selected)
    if skipped:
        console.print(f"   [dim]({skipped} of {total_found} files skipped due to size/count limits)[/dim]")


def locate(
    explicit_path: str | None = None,
    mode: str | None = None,
    *,
    plans_dir: str | Path,
    cwd: str | Path | None = None,
    max_file_size: int = MAX_FILE_SIZE,
    max_total_size: int = MAX_TOTAL_SIZE,
    max_files: int = MAX_FILES,
) -> list[ReviewFile]:
    """Discover the files to review.

    Raises ReviewError (IO or Validation) when nothing usable is found or a
    selected file breaks the size/emptiness rules.
    """
    if mode is not None and mode not in MODES:
        raise ReviewError(ErrorKind.VALIDATION, f"Invalid mode: {mode}. Available modes: {', '.join(MODES)}")

    base = Path(cwd) if cwd is not None else Path.cwd()
    plans_dir = Path(plans_dir).expanduser()
    if not plans_dir.is_absolute():
        plans_dir = base / plans_dir
    git_root = get_git_root(base)

    if explicit_path:
        return [load_review_file(_resolve_explicit(explicit_path, base, max_file_size), git_root)]

    if mode == "plan":
        plan = find_most_recent_plan(plans_dir)
        if plan is None:
            raise ReviewError(ErrorKind.IO, f"No plans found in {plans_dir}")
        return [load_review_file(plan, git_root)]

    if git_root is not None:
        candidates = discover_git_files(git_root, max_file_size=max_file_size)
        selected = select_within_limits(candidates, max_files=max_files, max_total_size=max_total_size)
        if selected:
            _print_git_listing(selected, len(candidates), git_root)
            return [load_review_file(path, git_root) for path in selected]

    console.print("[yellow]No git changes detected, falling back to plans directory...[/yellow]")
    plan = find_most_recent_plan(plans_dir)
    if plan is None:
        raise ReviewError(
            ErrorKind.IO,
            f"No files to review. Make changes in a git repo or create a plan in {plans_dir}",
        )
    return [load_review_file(plan, git_root)]
