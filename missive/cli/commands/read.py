"""Read command implementation."""

import asyncio

import typer
from typing_extensions import Annotated

from missive.config import load_config
from missive.errors import MissiveError
from missive.printer import OutputFormat, Printer
from missive.read.models import HeaderFilterPolicy
from missive.read.pipeline import resolve_and_read


def read(
    ids: Annotated[list[str], typer.Argument(help="Envelope id(s) of the message(s) to read")],
    folder: Annotated[
        str | None,
        typer.Option("--folder", "-f", help="Folder to read from (default: account's default folder)"),
    ] = None,
    preview: Annotated[
        bool,
        typer.Option("--preview", "-p", help="Read without marking the message(s) as seen"),
    ] = False,
    no_headers: Annotated[
        bool, typer.Option("--no-headers", help="Don't show any header")
    ] = False,
    headers: Annotated[
        list[str] | None,
        typer.Option(
            "--header",
            "-H",
            metavar="NAME",
            help="Header to show (repeatable, default: read_headers from config)",
        ),
    ] = None,
    account: Annotated[
        str | None, typer.Option("--account", "-a", help="Account to read from")
    ] = None,
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Output format: plain or json")
    ] = OutputFormat.plain,
):
    """Read the message(s) with the given envelope id(s).

    Reading marks the messages as seen. Use --preview to leave their
    flags untouched.
    """
    try:
        policy = HeaderFilterPolicy.from_flags(no_headers, headers)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        messages = asyncio.run(
            resolve_and_read(
                load_config(),
                account,
                folder,
                ids,
                preview=preview,
                policy=policy,
            )
        )
    except MissiveError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    Printer(output).out(messages)
