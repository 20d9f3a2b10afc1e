"""
cloudcli - Cloud API command-line client

Manages named connection profiles (settings plus credentials) and resolves
the one used to configure the API client for each invocation.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cloudcli")
except PackageNotFoundError:
    __version__ = "0.1.23"

__all__ = [
    "__version__",
]
