"""Main CLI entry point for missive."""

from enum import Enum

import typer
from typing_extensions import Annotated

from missive import __version__
from missive.cli import commands
from missive.logging import setup_logging

app = typer.Typer(
    name="missive",
    help="Read email from local Maildir folders",
    no_args_is_help=True,
)

# Register commands
app.command(name="read")(commands.read.read)
app.add_typer(commands.config.app, name="config")


class LogLevel(str, Enum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


@app.callback()
def main_callback(
    log_level: Annotated[
        LogLevel, typer.Option("--log-level", case_sensitive=False, help="Log level")
    ] = LogLevel.warning,
    log_json: Annotated[
        bool, typer.Option("--log-json", help="Write logs as JSON lines")
    ] = False,
):
    """Read email from local Maildir folders."""
    setup_logging(json=log_json, level=log_level.value)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"missive version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
