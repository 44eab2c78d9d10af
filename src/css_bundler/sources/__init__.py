"""Source file resolution."""

from .resolver import ResolvedFile, ResolvedFileSet, read_sources, resolve_sources

__all__ = ["ResolvedFile", "ResolvedFileSet", "read_sources", "resolve_sources"]
