"""
Per-invocation state shared by the CLI commands.

The root callback stores an AppContext on typer.Context.obj; commands reach
the profile store through it instead of a module-level instance.
"""

from dataclasses import dataclass
from functools import cached_property

import typer

from cloudcli.api.config import ClientConfig, Credential, build_client_config, build_credential
from cloudcli.profiles import Profile, ProfileStore, resolve_profile


@dataclass
class AppContext:
    """Global options of one invocation plus the lazily opened store."""

    profile_name: str | None = None
    public_key: str | None = None
    private_key: str | None = None
    debug: bool = False

    @cached_property
    def store(self) -> ProfileStore:
        """Profile store, opened (and migrated if needed) on first use."""
        return ProfileStore.open()

    def resolve_profile(self) -> Profile:
        return resolve_profile(self.store, self.profile_name)

    def client_config(self, profile: Profile | None = None) -> ClientConfig:
        return build_client_config(profile or self.resolve_profile(), debug=self.debug)

    def credential(self, profile: Profile | None = None) -> Credential:
        return build_credential(
            profile or self.resolve_profile(),
            public_key=self.public_key,
            private_key=self.private_key,
        )


def get_app_context(ctx: typer.Context) -> AppContext:
    """Return the AppContext of the running command, creating it if absent."""
    return ctx.ensure_object(AppContext)
