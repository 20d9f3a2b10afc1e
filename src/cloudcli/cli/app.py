"""
Main Typer application for cloudcli.

This module defines the root CLI application and registers all command groups.
"""

from typing import Annotated

import typer

from cloudcli import __version__
from cloudcli.cli.commands import profile, status
from cloudcli.cli.context import AppContext
from cloudcli.cli.output import configure_logging, print_info

# Create the main Typer app
app = typer.Typer(
    name="cloudcli",
    help="Command-line client for the cloud API, with named profiles.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"cloudcli version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    profile_name: Annotated[
        str | None,
        typer.Option(
            "--profile",
            "-p",
            envvar="CLOUDCLI_PROFILE",
            help="Use a specific profile instead of the active one.",
        ),
    ] = None,
    public_key: Annotated[
        str | None,
        typer.Option(
            "--public-key",
            envvar="CLOUDCLI_PUBLIC_KEY",
            help="Public key overriding the profile's key.",
        ),
    ] = None,
    private_key: Annotated[
        str | None,
        typer.Option(
            "--private-key",
            envvar="CLOUDCLI_PRIVATE_KEY",
            help="Private key overriding the profile's key.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]cloudcli[/bold blue] - Cloud API CLI

    Keeps several named profiles (keys, region, zone, project) and uses the
    active one unless [bold]--profile[/bold] selects another.
    """
    configure_logging(debug)
    ctx.obj = AppContext(
        profile_name=profile_name,
        public_key=public_key,
        private_key=private_key,
        debug=debug,
    )


# Register command groups
app.add_typer(profile.app, name="profile")
app.add_typer(status.app, name="status")


if __name__ == "__main__":
    app()
