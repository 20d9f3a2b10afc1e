"""
cloudcli profile - Profile management commands.

Usage:
    cloudcli profile list
    cloudcli profile show dev
    cloudcli profile create staging --region cn-bj2
    cloudcli profile update staging --zone cn-bj2-05
    cloudcli profile use dev
    cloudcli profile delete staging
"""

from typing import Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from cloudcli.cli.context import get_app_context
from cloudcli.cli.output import print_error, print_info, print_json, print_success, print_warning
from cloudcli.profiles import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRY_TIMES,
    DEFAULT_TIMEOUT_SEC,
    PersistError,
    Profile,
    ProfileError,
    ProfileFilesMissing,
    ProfileStore,
    mask_secret,
)
from cloudcli.profiles.masking import LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS
from cloudcli.storage.paths import get_credential_path, get_settings_path

app = typer.Typer(
    name="profile",
    help="Profile management.",
    no_args_is_help=True,
)

console = Console()

TABLE_COLUMNS = [
    ("Profile", "profile"),
    ("Active", "active"),
    ("ProjectID", "project_id"),
    ("Region", "region"),
    ("Zone", "zone"),
    ("BaseURL", "base_url"),
    ("TimeoutSec", "timeout_sec"),
    ("PublicKey", "public_key"),
    ("PrivateKey", "private_key"),
    ("MaxRetryTimes", "max_retry_times"),
]


def complete_profile_name(incomplete: str) -> list[str]:
    """Shell completion for profile names; never migrates or writes."""
    store = ProfileStore(get_settings_path(), get_credential_path())
    try:
        store.load()
    except (ProfileError, ProfileFilesMissing):
        return []
    return [name for name in store.profile_names() if name.startswith(incomplete)]


def masked_profile(profile: Profile) -> dict[str, Any]:
    """Profile as a dict with both keys masked, for display."""
    data = profile.model_dump(by_alias=True)
    data["public_key"] = mask_secret(profile.public_key, LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS)
    data["private_key"] = mask_secret(profile.private_key, LIST_PREFIX_CHARS, LIST_SUFFIX_CHARS)
    return data


def _fail(error: ProfileError) -> NoReturn:
    print_error(str(error))
    if isinstance(error, PersistError):
        print_warning("Saved profiles may differ from this session, check the files above.")
    raise typer.Exit(1)


def _open_store(ctx: typer.Context) -> ProfileStore:
    try:
        return get_app_context(ctx).store
    except ProfileError as e:
        _fail(e)


def _prompt_keys(public_key: str | None, private_key: str | None) -> tuple[str, str]:
    if not public_key:
        public_key = typer.prompt("Your public-key")
    if not private_key:
        private_key = typer.prompt("Your private-key", hide_input=True)
    return public_key.strip(), private_key.strip()


@app.command("list")
def list_profiles(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List all profiles with masked keys."""
    store = _open_store(ctx)
    rows = [masked_profile(profile) for profile in store.profiles()]

    if json_output:
        print_json(rows)
        return

    if not rows:
        console.print("[dim]No profiles configured.[/dim]")
        console.print("[dim]Use 'cloudcli profile create <name>' to add one.[/dim]")
        return

    table = Table(title="Profiles")
    for header, _ in TABLE_COLUMNS:
        table.add_column(header, style="cyan" if header == "Profile" else None)
    for row in rows:
        table.add_row(*[str(row[key]) for _, key in TABLE_COLUMNS])
    console.print(table)


@app.command()
def names(ctx: typer.Context) -> None:
    """Print profile names, one per line."""
    store = _open_store(ctx)
    for name in store.profile_names():
        typer.echo(name)


@app.command()
def show(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Profile name.",
            autocompletion=complete_profile_name,
        ),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show profile details."""
    store = _open_store(ctx)
    profile = store.get(name)
    if profile is None:
        print_error(f"Profile '{name}' does not exist")
        raise typer.Exit(1)

    data = masked_profile(profile)
    if json_output:
        print_json(data)
        return

    table = Table(title=f"Profile: {name}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for header, key in TABLE_COLUMNS:
        table.add_row(header, str(data[key]))
    console.print(table)


@app.command()
def create(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Profile name.",
        ),
    ],
    public_key: Annotated[
        str | None,
        typer.Option(
            "--public-key",
            help="Public key (prompted if not provided).",
        ),
    ] = None,
    private_key: Annotated[
        str | None,
        typer.Option(
            "--private-key",
            help="Private key (prompted if not provided).",
        ),
    ] = None,
    project_id: Annotated[
        str,
        typer.Option(
            "--project-id",
            help="Default project ID.",
        ),
    ] = "",
    region: Annotated[
        str,
        typer.Option(
            "--region",
            help="Default region.",
        ),
    ] = "",
    zone: Annotated[
        str,
        typer.Option(
            "--zone",
            help="Default zone.",
        ),
    ] = "",
    base_url: Annotated[
        str,
        typer.Option(
            "--base-url",
            help="API endpoint.",
        ),
    ] = DEFAULT_BASE_URL,
    timeout_sec: Annotated[
        int,
        typer.Option(
            "--timeout-sec",
            min=0,
            help="Request timeout in seconds.",
        ),
    ] = DEFAULT_TIMEOUT_SEC,
    max_retry_times: Annotated[
        int,
        typer.Option(
            "--max-retry-times",
            min=0,
            help="Maximum retries of a failed request.",
        ),
    ] = DEFAULT_MAX_RETRY_TIMES,
    active: Annotated[
        bool,
        typer.Option(
            "--active",
            help="Make the new profile the active one.",
        ),
    ] = False,
) -> None:
    """Create a new profile."""
    store = _open_store(ctx)
    if name in store:
        print_error(f"Profile '{name}' already exists")
        print_info(f"Use 'cloudcli profile update {name}' to change it.")
        raise typer.Exit(1)

    public_key, private_key = _prompt_keys(public_key, private_key)
    profile = Profile(
        name=name,
        active=active,
        project_id=project_id,
        region=region,
        zone=zone,
        base_url=base_url,
        timeout_sec=timeout_sec,
        public_key=public_key,
        private_key=private_key,
        max_retry_times=max_retry_times,
    )

    try:
        store.append(profile)
    except ProfileError as e:
        _fail(e)

    suffix = " and set as active" if profile.active else ""
    print_success(f"Profile '{name}' created{suffix}")


@app.command()
def update(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Profile name.",
            autocompletion=complete_profile_name,
        ),
    ],
    public_key: Annotated[
        str | None,
        typer.Option(
            "--public-key",
            help="Public key.",
        ),
    ] = None,
    private_key: Annotated[
        str | None,
        typer.Option(
            "--private-key",
            help="Private key.",
        ),
    ] = None,
    project_id: Annotated[
        str | None,
        typer.Option(
            "--project-id",
            help="Default project ID.",
        ),
    ] = None,
    region: Annotated[
        str | None,
        typer.Option(
            "--region",
            help="Default region.",
        ),
    ] = None,
    zone: Annotated[
        str | None,
        typer.Option(
            "--zone",
            help="Default zone.",
        ),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option(
            "--base-url",
            help="API endpoint.",
        ),
    ] = None,
    timeout_sec: Annotated[
        int | None,
        typer.Option(
            "--timeout-sec",
            min=0,
            help="Request timeout in seconds.",
        ),
    ] = None,
    max_retry_times: Annotated[
        int | None,
        typer.Option(
            "--max-retry-times",
            min=0,
            help="Maximum retries of a failed request.",
        ),
    ] = None,
    active: Annotated[
        bool | None,
        typer.Option(
            "--active/--inactive",
            help="Activate or deactivate the profile.",
        ),
    ] = None,
) -> None:
    """Update a profile, creating it if it does not exist."""
    store = _open_store(ctx)
    changes = {
        key: value
        for key, value in {
            "public_key": public_key,
            "private_key": private_key,
            "project_id": project_id,
            "region": region,
            "zone": zone,
            "base_url": base_url,
            "timeout_sec": timeout_sec,
            "max_retry_times": max_retry_times,
            "active": active,
        }.items()
        if value is not None
    }

    current = store.get(name)
    if current is None:
        print_info(f"Profile '{name}' does not exist, creating it")
        changes["public_key"], changes["private_key"] = _prompt_keys(public_key, private_key)
        profile = Profile(name=name, **changes)
    else:
        profile = current.model_copy(update=changes)

    try:
        store.update(profile)
    except ProfileError as e:
        _fail(e)

    print_success(f"Profile '{name}' updated")


@app.command()
def use(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Profile name.",
            autocompletion=complete_profile_name,
        ),
    ],
) -> None:
    """Switch the active profile."""
    store = _open_store(ctx)
    try:
        store.switch_active(name)
    except ProfileError as e:
        _fail(e)

    print_success(f"Active profile is now '{name}'")


@app.command()
def delete(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Profile name.",
            autocompletion=complete_profile_name,
        ),
    ],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation.",
        ),
    ] = False,
) -> None:
    """Delete a profile."""
    store = _open_store(ctx)
    if not yes and name in store:
        if not typer.confirm(f"Delete profile '{name}'?"):
            print_info("Cancelled.")
            raise typer.Exit(0)

    try:
        store.delete(name)
    except ProfileError as e:
        _fail(e)

    print_success(f"Profile '{name}' deleted")
