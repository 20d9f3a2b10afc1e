"""
cloudcli status - Show the profile and client settings of this invocation.

Usage:
    cloudcli status
    cloudcli --profile staging status --json
"""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cloudcli.cli.context import get_app_context
from cloudcli.cli.output import print_error, print_info, print_json, print_warning
from cloudcli.profiles import ProfileError, mask_secret
from cloudcli.profiles.masking import LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS

app = typer.Typer(
    name="status",
    help="Show the resolved profile and client configuration.",
    invoke_without_command=True,
)

console = Console()


@app.callback(invoke_without_command=True)
def status_overview(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the resolved profile and client configuration."""
    app_ctx = get_app_context(ctx)
    try:
        profile = app_ctx.resolve_profile()
    except ProfileError as e:
        print_error(str(e))
        raise typer.Exit(1)

    client_config = app_ctx.client_config(profile)
    credential = app_ctx.credential(profile)
    overview = {
        "profile": profile.name,
        "active": profile.active,
        "client": client_config.model_dump(),
        "credential": {
            "public_key": mask_secret(credential.public_key, LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS),
            "private_key": mask_secret(
                credential.private_key, LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS
            ),
            "source": "override" if app_ctx.public_key and app_ctx.private_key else "profile",
        },
    }

    if json_output:
        print_json(overview)
        return

    table = Table(title=f"Profile: {profile.name}", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Active", "[green]yes[/green]" if profile.active else "no")
    for key, value in overview["client"].items():
        table.add_row(key, str(value))
    for key, value in overview["credential"].items():
        table.add_row(key, str(value))
    console.print(table)

    if overview["credential"]["source"] == "profile" and not profile.has_keys():
        print_warning(f"Profile '{profile.name}' has no keys yet.")
        print_info(f"Set them with 'cloudcli profile update {profile.name}'.")
