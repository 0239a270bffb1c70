"""Filesystem helpers for writing extracted translation files."""

import os
import tempfile
from pathlib import Path

from crowdin_export.core.logger import setup_logger

logger = setup_logger(__name__)

# NamedTemporaryFile creates files 0600; extracted files get the usual umask-based mode.
_UMASK = os.umask(0)
os.umask(_UMASK)
_FILE_MODE = 0o666 & ~_UMASK


def ensure_parent_dirs(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_within(root: Path, name: str) -> Path:
    """Join an archive member name onto ``root``.

    Raises:
        ValueError: The name is absolute or escapes ``root``.
    """
    if "\x00" in name:
        raise ValueError(f"Entry name contains a null byte: {name!r}")

    relative = Path(name.replace("\\", "/"))
    if relative.is_absolute() or relative.drive:
        raise ValueError(f"Absolute entry name: {name!r}")

    target = root / relative
    try:
        target.resolve().relative_to(root.resolve())
    except ValueError:
        raise ValueError(f"Entry name escapes output directory: {name!r}")
    return target


def replace_file(dest_path: Path, data: bytes) -> Path:
    """Write ``data`` to ``dest_path``, replacing any existing file.

    Data is written to a temp file beside the destination first and then
    renamed over it, so readers never see a half-written file.
    """
    ensure_parent_dirs(dest_path)
    with tempfile.NamedTemporaryFile(
        dir=dest_path.parent,
        prefix=f".{dest_path.name}.",
        suffix=".tmp",
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            f.write(data)
            os.chmod(temp_path, _FILE_MODE)
        except Exception:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise
    try:
        temp_path.replace(dest_path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote {len(data)} bytes: {dest_path}")
    return dest_path
