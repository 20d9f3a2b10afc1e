"""Command-line interface for cloudcli."""
