"""CLI command modules."""

from cloudcli.cli.commands import profile, status

__all__ = ["profile", "status"]
