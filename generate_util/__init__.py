"""generate-util: Name and module resolution helpers for generators."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version('generate-util')
except PackageNotFoundError:
    # Fallback for development environment
    __version__ = 'unknown'
