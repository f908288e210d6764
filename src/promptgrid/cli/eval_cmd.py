"""promptgrid eval -- run a suite config and display results.

Loads a suite config file, runs evaluate(), renders a Rich results
table, and exits with 0 (all cells succeeded), 1 (some failed) or
2 (configuration error).
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from promptgrid.cli.output import configure_logging, render_headline, render_results_table
from promptgrid.models.config import find_config_file, load_suite_config
from promptgrid.models.suite import EvaluateOptions
from promptgrid.orchestrator import evaluate

console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2


def eval_cmd(
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Path to suite config file"),
    output: Optional[list[str]] = typer.Option(None, "-o", "--output", help="Output file (.json, .yaml, .csv); repeatable"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Do not reuse cached provider responses"),
    write_latest: bool = typer.Option(False, "--write-latest", help="Store results as the latest run"),
    max_concurrency: int = typer.Option(4, "-j", "--max-concurrency", min=1, help="Max concurrent provider calls"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
) -> None:
    """Evaluate a suite config against its providers."""
    configure_logging(verbose)

    config_path = config or find_config_file()
    if config_path is None:
        console.print("[bold red]No config file found.[/bold red] Pass one with --config.")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        suite = load_suite_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    updates: dict = {}
    if output:
        updates["output_path"] = output if len(output) > 1 else output[0]
    if write_latest:
        updates["write_latest_results"] = True
    if updates:
        suite = suite.model_copy(update=updates)

    options = EvaluateOptions(cache=not no_cache, max_concurrency=max_concurrency)

    try:
        summary = asyncio.run(evaluate(suite, options))
    except (ValueError, TypeError, ImportError, AttributeError, OSError) as exc:
        console.print(f"[bold red]Setup error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    output_console = Console()
    render_results_table(summary, output_console)
    render_headline(summary, output_console)

    if summary.stats.failures:
        raise typer.Exit(code=EXIT_FAILURES)
