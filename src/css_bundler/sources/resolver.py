"""
Resolve source glob patterns into an ordered list of files.

Ordering rules:
- Patterns are expanded in the order given.
- Matches of a single pattern are sorted by their path relative to the root,
  so the bundle is byte-identical across runs and platforms.
- A pattern starting with "!" removes already-resolved files that match it.
- With dedupe enabled a file matched by several patterns is kept only at its
  first position.
"""

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable, Iterator

from ..errors import FileReadError, PatternResolutionError


NEGATION_PREFIX = "!"


@dataclass(frozen=True)
class ResolvedFile:
    """A concrete source file and the pattern that selected it."""
    path: Path
    pattern: str

    @property
    def size(self) -> int:
        return self.path.stat().st_size


@dataclass(frozen=True)
class ResolvedFileSet:
    """Files in concatenation order."""
    root: Path
    files: tuple[ResolvedFile, ...]

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.files]

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ResolvedFile]:
        return iter(self.files)


def _check_pattern(pattern) -> None:
    if not isinstance(pattern, str):
        raise PatternResolutionError(f"Glob pattern must be a string, got {pattern!r}", pattern)
    body = pattern[len(NEGATION_PREFIX):] if pattern.startswith(NEGATION_PREFIX) else pattern
    if not body.strip():
        raise PatternResolutionError(f"Empty glob pattern: {pattern!r}", pattern)
    if PurePath(body).is_absolute():
        raise PatternResolutionError(
            f"Glob pattern must be relative to the source root: {pattern}", pattern
        )


def _match(root: Path, pattern: str) -> list[Path]:
    """Expand one pattern, files only, sorted."""
    try:
        matches = [p for p in root.glob(pattern) if p.is_file()]
    except (ValueError, NotImplementedError) as e:
        raise PatternResolutionError(f"Invalid glob pattern {pattern!r}: {e}", pattern) from e
    except OSError as e:
        raise PatternResolutionError(f"Failed to expand {pattern!r} under {root}: {e}", root) from e

    # All matches share the root prefix, so this orders by relative path
    return sorted(matches, key=lambda p: p.as_posix())


def resolve_sources(
    patterns: Iterable[str],
    root: Path = Path("."),
    *,
    dedupe: bool = True,
) -> ResolvedFileSet:
    """
    Expand glob patterns against `root`.

    A pattern that matches nothing contributes nothing. A missing root is
    treated as matching nothing.

    Raises:
        PatternResolutionError: If a pattern is not a usable glob.
    """
    root = Path(root)
    patterns = list(patterns)
    for pattern in patterns:
        _check_pattern(pattern)

    resolved: list[ResolvedFile] = []

    for pattern in patterns:
        if pattern.startswith(NEGATION_PREFIX):
            excluded = set(_match(root, pattern[len(NEGATION_PREFIX):]))
            resolved = [f for f in resolved if f.path not in excluded]
            continue

        seen = {f.path for f in resolved}
        for path in _match(root, pattern):
            if dedupe and path in seen:
                continue
            resolved.append(ResolvedFile(path=path, pattern=pattern))

    return ResolvedFileSet(root=root, files=tuple(resolved))


def read_sources(file_set: ResolvedFileSet) -> list[str]:
    """
    Read every resolved file as UTF-8 text, in order.

    Raises:
        FileReadError: On the first file that cannot be read or decoded.
    """
    contents = []

    for source in file_set:
        try:
            contents.append(source.path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise FileReadError(f"Failed to read {source.path}: not valid UTF-8 ({e.reason})", source.path) from e
        except OSError as e:
            raise FileReadError(f"Failed to read {source.path}: {e.strerror or e}", source.path) from e

    return contents
