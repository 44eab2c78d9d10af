"""
Write the bundle to disk.

The bundle is written to a temporary file next to the destination and then
renamed over it, so a failed run never leaves a half-written file and an
existing bundle stays as it was.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..errors import FileWriteError


@dataclass(frozen=True)
class BundleOutput:
    """The single artifact produced by a run."""
    path: Path
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_text(cls, path: Path, text: str) -> "BundleOutput":
        return cls(path=Path(path), content=text.encode("utf-8"))


def write_bundle(output: BundleOutput) -> Path:
    """
    Atomically create or replace `output.path`.

    Creates the parent directory if needed.

    Raises:
        FileWriteError: If the directory cannot be created or the file cannot
            be written. The destination is left untouched in that case.
    """
    path = Path(output.path)
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteError(f"Cannot create output directory {directory}: {e.strerror or e}", directory) from e

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise FileWriteError(f"Cannot write to {directory}: {e.strerror or e}", path) from e

    tmp_path = Path(tmp_name)
    committed = False
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(output.content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates the file 0600
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
        committed = True
    except OSError as e:
        raise FileWriteError(f"Failed to write {path}: {e.strerror or e}", path) from e
    finally:
        if not committed:
            tmp_path.unlink(missing_ok=True)

    return path
