"""promptgrid CLI entry point."""

import typer

from promptgrid import __version__
from promptgrid.cli.eval_cmd import eval_cmd

app = typer.Typer(
    name="promptgrid",
    help="Evaluate prompts against LLM providers and test cases",
    no_args_is_help=True,
)

# Register subcommands
app.command(name="eval")(eval_cmd)


@app.command()
def version() -> None:
    """Print the promptgrid version."""
    typer.echo(f"promptgrid {__version__}")


@app.callback()
def main() -> None:
    """Evaluate prompts against LLM providers and test cases."""
