"""Config command implementation.

Manages the missive configuration file.
"""

import typer
from typing_extensions import Annotated

from missive.config import (
    CONFIG_FILE,
    init_config,
    load_config,
    set_config_value,
)
from missive.config.schema import AccountConfig
from missive.errors import ConfigError

app = typer.Typer(help="Manage configuration")


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config")
    ] = False,
):
    """Create a template config file."""
    created = init_config(overwrite=force)

    if created:
        typer.echo(f"Created config file: {CONFIG_FILE}")
        typer.echo()
        typer.echo("Edit the config file to add your account settings.")
    else:
        typer.echo(f"Config already exists at {CONFIG_FILE}")
        typer.echo("Use --force to overwrite.")


@app.command()
def show(
    account: Annotated[
        str | None, typer.Option("--account", "-a", help="Show specific account")
    ] = None,
):
    """Display current configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not config:
        typer.echo("No configuration found.")
        typer.echo(f"Run 'missive config init' to create {CONFIG_FILE}")
        return

    if "defaults" in config:
        typer.echo("[defaults]")
        for key, value in config["defaults"].items():
            typer.echo(f"  {key} = {value}")
        typer.echo()

    accounts = config.get("accounts", {})

    if not accounts:
        typer.echo("No accounts configured.")
        return

    if account:
        if account in accounts:
            _display_account(account, accounts[account])
        else:
            typer.echo(f"Account '{account}' not found.", err=True)
            raise typer.Exit(1)
    else:
        for name, acct in accounts.items():
            _display_account(name, acct)


def _display_account(name: str, account: AccountConfig) -> None:
    """Display a single account configuration."""
    typer.echo(f"[accounts.{name}]")
    for key, value in account.items():
        if isinstance(value, list):
            value = ", ".join(value)
        typer.echo(f"  {key} = {value}")
    typer.echo()


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (dot notation, e.g., 'defaults.folder')"),
    ],
    value: Annotated[str, typer.Argument(help="Configuration value")],
):
    """Set a configuration value using dot notation.

    Examples:
        missive config set defaults.folder Archive
        missive config set accounts.work.read_headers From,Subject,Date
    """
    try:
        set_config_value(key, value)
        typer.echo(f"Set {key} = {value}")
    except ValueError as e:
        typer.echo(f"Invalid value: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
