"""
Errors raised while building a bundle.

Every failure is fatal for the current run. The library raises, the CLI
reports the message (which always names the offending path) and exits
non-zero.
"""

from pathlib import Path


class BundleError(Exception):
    """Base class for all bundling failures."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


class PatternResolutionError(BundleError):
    """Raised when a source glob pattern cannot be expanded."""
    pass


class FileReadError(BundleError):
    """Raised when a resolved source file cannot be read."""
    pass


class FileWriteError(BundleError):
    """Raised when the bundle cannot be written to its destination."""
    pass


class ConfigError(BundleError):
    """Raised when a build definition is malformed."""
    pass
