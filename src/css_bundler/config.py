"""
Build definition for the CSS bundle.

The defaults reproduce the theme build: poole.css, then hyde.css, then every
other stylesheet under _css/, minified into public/css/all.min.css with lines
capped at 80 characters and comments removed.

A build definition can also be read from a YAML file:

    sources:
      - _css/poole.css
      - _css/hyde.css
      - _css/**/*.css
    output_name: all.min.css
    output_dir: public/css
    minify:
      max_line_length: 80
      strip_comments: true
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError


DEFAULT_CONFIG_NAME = "cssbundle.yaml"

DEFAULT_SOURCES = (
    "_css/poole.css",
    "_css/hyde.css",
    "_css/**/*.css",
)
DEFAULT_OUTPUT_NAME = "all.min.css"
DEFAULT_OUTPUT_DIR = Path("public/css")


@dataclass(frozen=True)
class MinifyOptions:
    """Minifier settings.

    max_line_length: wrap output so no line is longer than this (0 disables).
    strip_comments: remove every comment, including /*! ... */ banners.
    """
    max_line_length: int = 80
    strip_comments: bool = True

    def __post_init__(self):
        if isinstance(self.max_line_length, bool) or not isinstance(self.max_line_length, int):
            raise ConfigError(f"max_line_length must be an integer, got {self.max_line_length!r}")
        if self.max_line_length < 0:
            raise ConfigError(f"max_line_length must be >= 0, got {self.max_line_length}")
        if not isinstance(self.strip_comments, bool):
            raise ConfigError(f"strip_comments must be a boolean, got {self.strip_comments!r}")


@dataclass(frozen=True)
class BundleConfig:
    """Immutable description of one bundle build."""
    sources: tuple[str, ...] = DEFAULT_SOURCES
    output_name: str = DEFAULT_OUTPUT_NAME
    output_dir: Path = DEFAULT_OUTPUT_DIR
    root: Path = Path(".")
    options: MinifyOptions = field(default_factory=MinifyOptions)
    dedupe: bool = True  # drop files already matched by an earlier pattern

    def __post_init__(self):
        # Accept lists and plain strings for the path fields
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "root", Path(self.root))

        if not self.output_name or not isinstance(self.output_name, str):
            raise ConfigError("output_name must be a non-empty string")
        if "/" in self.output_name or "\\" in self.output_name:
            raise ConfigError(f"output_name must be a bare file name, got {self.output_name!r}")

    @property
    def output_path(self) -> Path:
        """Full path of the bundle."""
        return self.output_dir / self.output_name


_TOP_LEVEL_KEYS = {"sources", "output_name", "output_dir", "root", "dedupe", "minify"}

# camelCase names as written in gulp-style build files
_MINIFY_KEYS = {
    "max_line_length": "max_line_length",
    "maxLineLength": "max_line_length",
    "maxLineLen": "max_line_length",
    "strip_comments": "strip_comments",
    "stripComments": "strip_comments",
}


def load_config(config_path: Path) -> BundleConfig:
    """
    Load a build definition from a YAML file.

    Relative `root` and `output_dir` values are resolved against the
    directory containing the file, so a build behaves the same wherever it
    is invoked from.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or contains
            unknown keys or invalid values.
    """
    config_path = Path(config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}", config_path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}", config_path) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping", config_path)

    try:
        return config_from_dict(raw, base_dir=config_path.parent)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}", config_path) from e


def config_from_dict(raw: dict[str, Any], base_dir: Path | None = None) -> BundleConfig:
    """Build a BundleConfig from a plain mapping (as parsed from YAML)."""
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    kwargs: dict[str, Any] = {}

    if "sources" in raw:
        sources = raw["sources"]
        if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
            raise ConfigError("sources must be a list of glob patterns")
        kwargs["sources"] = tuple(sources)

    if "output_name" in raw:
        kwargs["output_name"] = raw["output_name"]

    for key in ("root", "output_dir"):
        if key in raw:
            if not isinstance(raw[key], str):
                raise ConfigError(f"{key} must be a path string")
            path = Path(raw[key])
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            kwargs[key] = path

    if base_dir is not None:
        kwargs.setdefault("root", base_dir)
        kwargs.setdefault("output_dir", base_dir / DEFAULT_OUTPUT_DIR)

    if "dedupe" in raw:
        if not isinstance(raw["dedupe"], bool):
            raise ConfigError("dedupe must be a boolean")
        kwargs["dedupe"] = raw["dedupe"]

    if "minify" in raw:
        kwargs["options"] = _parse_minify(raw["minify"])

    return BundleConfig(**kwargs)


def _parse_minify(raw: Any) -> MinifyOptions:
    if raw is None:
        return MinifyOptions()
    if not isinstance(raw, dict):
        raise ConfigError("minify must be a mapping")

    options = {}
    for key, value in raw.items():
        if key not in _MINIFY_KEYS:
            raise ConfigError(f"Unknown minify option: {key}")
        options[_MINIFY_KEYS[key]] = value

    return MinifyOptions(**options)


def find_config(directory: Path) -> Path | None:
    """Return the default build definition in `directory`, if there is one."""
    candidate = Path(directory) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None
