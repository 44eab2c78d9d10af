"""
Public API for CSS Bundler.

This is the primary interface for programmatic use. The CLI and any other
build scripts should use these functions rather than importing internal
modules directly.

Example usage:
    from css_bundler.api import bundle
    from css_bundler.config import MinifyOptions

    result = bundle(
        ["_css/poole.css", "_css/hyde.css", "_css/**/*.css"],
        output_name="all.min.css",
        output_dir=Path("public/css"),
        options=MinifyOptions(max_line_length=80, strip_comments=True),
    )
    print(f"Wrote {result.size} bytes from {len(result.source_files)} files")
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .config import BundleConfig, MinifyOptions
from .minify.minifier import minify
from .output.writer import BundleOutput, write_bundle
from .sources.resolver import ResolvedFileSet, read_sources, resolve_sources


# Separator placed between files so the last token of one cannot fuse with
# the first token of the next
FILE_SEPARATOR = "\n"


# ============================================================================
# Public Data Classes
# ============================================================================


@dataclass
class BundleResult:
    """Result of a bundle build."""

    output_path: Path
    size: int  # bytes written
    input_size: int  # bytes of concatenated source text
    source_files: list[Path] = field(default_factory=list)

    @property
    def savings(self) -> float:
        """Fraction of the input removed by minification."""
        if not self.input_size:
            return 0.0
        return 1 - self.size / self.input_size


# ============================================================================
# Main Public API Functions
# ============================================================================


def concatenate(contents: Iterable[str]) -> str:
    """Join file contents in order."""
    return FILE_SEPARATOR.join(contents)


def build_css(file_set: ResolvedFileSet, options: MinifyOptions | None = None) -> tuple[str, int]:
    """
    Read, concatenate and minify a resolved file set without writing it.

    Returns (minified_css, input_size_in_bytes).

    Raises:
        FileReadError: If any resolved file cannot be read.
    """
    combined = concatenate(read_sources(file_set))
    return minify(combined, options), len(combined.encode("utf-8"))


def bundle(
    sources: Iterable[str],
    output_name: str,
    output_dir: Path,
    options: MinifyOptions | None = None,
    *,
    root: Path = Path("."),
    dedupe: bool = True,
    verbose: bool = False,
) -> BundleResult:
    """
    Build one minified CSS bundle.

    Resolves the glob patterns against `root` in order, concatenates the
    matched files, minifies the result and writes it to
    `output_dir/output_name`, replacing any previous bundle.

    Args:
        sources: Ordered glob patterns; "!pattern" excludes files
        output_name: File name of the bundle
        output_dir: Directory to write into (created if missing)
        options: Minifier settings (defaults: 80 columns, strip comments)
        root: Directory the patterns are relative to
        dedupe: Keep only the first occurrence of a file matched twice
        verbose: If True, print progress information

    Returns:
        BundleResult describing the written bundle

    Raises:
        PatternResolutionError: If a pattern is invalid
        FileReadError: If a matched file cannot be read (nothing is written)
        FileWriteError: If the bundle cannot be written
    """
    config = BundleConfig(
        sources=tuple(sources),
        output_name=output_name,
        output_dir=Path(output_dir),
        root=Path(root),
        options=options or MinifyOptions(),
        dedupe=dedupe,
    )
    return bundle_from_config(config, verbose=verbose)


def bundle_from_config(config: BundleConfig, *, verbose: bool = False) -> BundleResult:
    """
    Build the bundle described by `config`.

    See bundle() for behavior and errors.
    """
    # Step 1: Resolve sources
    if verbose:
        print("Resolving sources...")
    file_set = resolve_sources(config.sources, config.root, dedupe=config.dedupe)
    if verbose:
        for source in file_set:
            print(f"  {source.path}")

    # Step 2: Read, concatenate, minify
    if verbose:
        print(f"Minifying {len(file_set)} files...")
    css, input_size = build_css(file_set, config.options)

    # Step 3: Write
    if verbose:
        print(f"Writing {config.output_path}...")
    output = BundleOutput.from_text(config.output_path, css)
    path = write_bundle(output)

    return BundleResult(
        output_path=path,
        size=output.size,
        input_size=input_size,
        source_files=file_set.paths,
    )
