"""Rich terminal output for evaluation summaries.

Renders a prompt x provider results table and a one-line stats
headline, and configures logging through rich's handler.
"""

from __future__ import annotations

import logging

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from promptgrid.models.result import EvaluateSummary

MAX_CELL_CHARS = 200


def _truncate(text: str, limit: int = MAX_CELL_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route promptgrid logs through a RichHandler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def render_results_table(summary: EvaluateSummary, console: Console) -> None:
    """Render one row per result with its prompt, vars, and outcome.

    Args:
        summary: The EvaluateSummary to display.
        console: Rich Console for output.
    """
    table = Table(box=box.SIMPLE_HEAVY, show_lines=True)
    table.add_column("Provider", style="bold")
    table.add_column("Prompt")
    table.add_column("Vars", style="dim")
    table.add_column("Output")

    for r in summary.results:
        vars_text = ", ".join(f"{k}={v}" for k, v in r.vars.items())
        if r.success:
            outcome = _truncate(r.output or "")
            if r.cached:
                outcome += " [dim](cached)[/dim]"
        else:
            outcome = f"[bold red]✗ {_truncate(r.error or '')}[/bold red]"
        table.add_row(
            r.provider_label,
            _truncate(r.prompt.display),
            _truncate(vars_text),
            outcome,
        )
    console.print(table)


def render_headline(summary: EvaluateSummary, console: Console) -> None:
    """Print success/failure counts and token usage."""
    stats = summary.stats
    style = "bold green" if stats.failures == 0 else "bold red"
    console.print(
        f"[{style}]Successes: {stats.successes}  Failures: {stats.failures}[/{style}]"
        f"  Tokens: {stats.token_usage.total}"
        f" (prompt {stats.token_usage.prompt},"
        f" completion {stats.token_usage.completion},"
        f" cached {stats.token_usage.cached})"
    )
