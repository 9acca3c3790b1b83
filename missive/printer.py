"""Command output.

Everything a command prints goes through a Printer so the same value
can be shown as text or as JSON for scripts.
"""

import json
from enum import Enum

import typer


class OutputFormat(str, Enum):
    """Output formats accepted by --output."""

    plain = "plain"
    json = "json"


class Printer:
    """Writes command results to stdout.

    Values must provide to_dict() for JSON output and __str__ for
    plain output.
    """

    def __init__(self, output: OutputFormat = OutputFormat.plain):
        self.output = output

    def out(self, value) -> None:
        if self.output is OutputFormat.json:
            typer.echo(json.dumps(value.to_dict(), indent=2, ensure_ascii=False))
        else:
            typer.echo(str(value))
