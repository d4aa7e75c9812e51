"""File system utilities for time-tracker."""

import os
import tempfile
from pathlib import Path


def ensure_dir(path: Path) -> None:
    """Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    path.mkdir(parents=True, exist_ok=True)


def file_exists(path: Path) -> bool:
    """Check if a regular file exists at ``path``."""
    return path.is_file()


def read_file(path: Path) -> str:
    """Read text file contents.

    Args:
        path: Path to file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return path.read_text(encoding="utf-8")


def write_file_atomic(path: Path, content: str) -> None:
    """Write content so readers see either the old or the new file, never a mix.

    The content is written to a temporary file in the target directory,
    flushed to disk, then moved over ``path`` with ``os.replace``.

    Args:
        path: Path to file to write
        content: Content to write

    Raises:
        OSError: If the write or the rename fails (the original file is untouched)
    """
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def delete_file(path: Path) -> bool:
    """Delete a file if it exists.

    Args:
        path: Path to file to delete

    Returns:
        True if file was deleted, False if it didn't exist
    """
    if path.exists():
        path.unlink()
        return True
    return False
