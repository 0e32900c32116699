"""CLI entry point for aipeerreview.

Exit codes:
  0  every model returned a review
  1  every model failed, or setup failed before any model was called
     (bad arguments, missing credentials, nothing to review)
  2  some models failed; the successful reviews are still printed
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from peerreview_core.errors import ReviewError
from peerreview_core.locator import MODES
from peerreview_core.models import ReviewStatus
from peerreview_core.registry import REVIEW_TYPE_MODELS, model_display_name, review_types

console = Console()
err_console = Console(stderr=True)

EXIT_INTERRUPTED = 130


class _ReviewCommand(click.Command):
    """click.Command whose usage errors exit with 1 instead of click's 2.

    Exit code 2 means "partial failure" for this tool.
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = ReviewStatus.SETUP_FAILURE.exit_code
            raise


def _help_epilog() -> str:
    lines = ["\b", "Review types & models:"]
    for name, type_config in REVIEW_TYPE_MODELS.items():
        models = ", ".join(model_display_name(m) for m in type_config.models)
        lines.append(f"  {name:<12} → {models}")
    lines += [
        "",
        "\b",
        "File selection:",
        "  (default)      Auto-detect git changes, fall back to plans",
        "  --mode git     Review staged and unstaged git changes",
        "  --mode plan    Review the most recent file in ~/.claude/plans/",
        "  FILE           Review a specific file (overrides --mode)",
        "",
        "\b",
        "Environment variables:",
        "  LITELLM_BASE_URL   LiteLLM proxy URL (default: http://localhost:4000/v1)",
        "  LITELLM_API_KEY    LiteLLM API key (required)",
        "  Or set litellm.base_url / litellm.api_key in ~/.claude/secrets.json",
    ]
    return "\n".join(lines)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@click.command(
    "aipeerreview",
    cls=_ReviewCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_help_epilog(),
)
@click.argument("file_path", required=False, metavar="[FILE]")
@click.option(
    "-t",
    "--type",
    "review_type",
    type=click.Choice(review_types(), case_sensitive=False),
    default=None,
    help="Review type. Auto-detected from the content when omitted.",
)
@click.option(
    "-m",
    "--mode",
    type=click.Choice(list(MODES), case_sensitive=False),
    default=None,
    help="File selection when no FILE is given: git (default) or plan.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    default=".peerreview.yml",
    show_default=True,
    envvar="PEERREVIEW_CONFIG",
    help="Path to the configuration file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(package_name="peerreview", prog_name="aipeerreview")
@click.pass_context
def main(
    ctx: click.Context,
    file_path: str | None,
    review_type: str | None,
    mode: str | None,
    config_path: str,
    verbose: bool,
):
    """Smart multi-model peer review via a LiteLLM proxy.

    Sends the document to the three models best suited to its review type in
    parallel and prints every answer.
    """
    from peerreview_core.config import load_config
    from peerreview_core.reviewer import run_review

    _configure_logging(verbose)

    try:
        config = load_config(config_path)
        summary = run_review(config, file_path=file_path, review_type=review_type, mode=mode)
    except ReviewError as e:
        err_console.print(f"[red]✗ {e.kind.value} Error: {escape(e.message)}[/red]", soft_wrap=True)
        if e.details:
            err_console.print(f"   Details: {escape(str(e.details))}", soft_wrap=True)
        ctx.exit(ReviewStatus.SETUP_FAILURE.exit_code)
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted.[/yellow]")
        ctx.exit(EXIT_INTERRUPTED)

    ctx.exit(summary.exit_code)
