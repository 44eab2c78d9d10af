"""Shared fixtures: a small theme source tree like the one the default build expects."""

from pathlib import Path

import pytest


POOLE_CSS = "body{margin:0}\n"
HYDE_CSS = "/* theme */ .sidebar{width:18em}\n"


def write_css(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def theme_dir(tmp_path) -> Path:
    """
    _css/poole.css
    _css/hyde.css
    _css/syntax.css
    _css/components/buttons.css
    """
    write_css(tmp_path, "_css/poole.css", POOLE_CSS)
    write_css(tmp_path, "_css/hyde.css", HYDE_CSS)
    write_css(tmp_path, "_css/syntax.css", "/* syntax */\n.highlight { background: #ffffff; }\n")
    write_css(tmp_path, "_css/components/buttons.css", ".btn {\n  color: red;\n}\n")
    return tmp_path
