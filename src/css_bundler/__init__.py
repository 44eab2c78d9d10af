"""
CSS Bundler - Concatenate and minify stylesheets into a single file.

Usage:
    from css_bundler import bundle, MinifyOptions

    result = bundle(["_css/*.css"], "all.min.css", Path("public/css"))
"""

__version__ = "0.1.0"

# Public API exports
from .api import (
    bundle,
    bundle_from_config,
    BundleResult,
)

from .config import BundleConfig, MinifyOptions, load_config
from .errors import (
    BundleError,
    ConfigError,
    FileReadError,
    FileWriteError,
    PatternResolutionError,
)
from .sources.resolver import ResolvedFileSet, resolve_sources

__all__ = [
    # Version
    "__version__",
    # Main functions
    "bundle",
    "bundle_from_config",
    "load_config",
    "resolve_sources",
    # Types
    "BundleConfig",
    "BundleResult",
    "MinifyOptions",
    "ResolvedFileSet",
    # Exceptions
    "BundleError",
    "ConfigError",
    "FileReadError",
    "FileWriteError",
    "PatternResolutionError",
]
