"""Command-line interface for relnamer.

This package provides the Typer app and global console for all CLI commands and
user-facing output.

- app: The Typer application object; commands are registered on it by
  relnamer.cli.commands, which also exposes the ``main`` entry point.
- console: Rich Console instance for consistent, styled output.
"""

import os

import typer
from rich.console import Console
from rich.traceback import install

from relnamer.cli.console import ENV_DISABLE_RICH

# Install rich traceback handler for all CLI commands
install(show_locals=True)

# Reason: a single module-level console keeps styling consistent across
# commands and lets tests patch one object.
console = Console()

app = typer.Typer(
    name="relnamer",
    help="Infer canonical release names and tracker tags from media names and reports.",
    add_completion=True,
)


@app.callback()
def callback(
    ctx: typer.Context,  # noqa: D401 – Typer requires ctx param first
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            f"Can also be set with the {ENV_DISABLE_RICH} environment variable."
        ),
    ),
) -> None:
    """Top-level CLI callback adding global options.

    The *--no-rich* flag is implemented by setting ``RELNAMER_NO_RICH`` so
    that :class:`~relnamer.cli.console.ConsoleManager` behaves the same whether
    the flag is passed or the variable is set externally.
    """
    if no_rich:
        os.environ[ENV_DISABLE_RICH] = "1"
