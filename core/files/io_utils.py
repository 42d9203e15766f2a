"""Filesystem helpers for writing output documents."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_bytes_atomic(path: Path, data: bytes, overwrite: bool = False) -> Path:
    """Write ``data`` to ``path`` via a temp file in the same directory.

    The destination only appears once the full content is on disk; the temp
    file is removed on any failure, including KeyboardInterrupt.

    Args:
        path: Destination file.
        data: Bytes to write.
        overwrite: Replace an existing file when True.

    Returns:
        The destination path.

    Raises:
        FileExistsError: The destination exists and overwrite is False.
        OSError: Writing or renaming failed.
    """
    if path.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file: {path}")
    fd, tmp_name = tempfile.mkstemp(prefix=path.stem + ".tagtmp.", suffix=path.suffix, dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return path
