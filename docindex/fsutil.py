"""Filesystem helpers shared by the writers."""

from __future__ import annotations

import errno
import os
import tempfile
from pathlib import Path

from .errors import DiskFull, DocIndexError, PermissionDenied


def describe_os_error(exc: OSError, action: str, path: Path | str) -> DocIndexError:
    """Translate an OSError into the matching docindex error."""
    if isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
        return PermissionDenied(
            f"Permission denied {action} {path}\n\nPlease check file permissions."
        )
    if exc.errno == errno.ENOSPC:
        return DiskFull(
            f"Disk full: cannot write to {path}\n\nPlease free up disk space and try again."
        )
    return DocIndexError(f"Failed {action} {path}: {exc.strerror or exc}")


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and its parents, mapping failures to docindex errors."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise describe_os_error(exc, "creating directory", path) from exc
    return path


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to a sibling temp file and rename it over ``path``."""
    ensure_directory(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        _discard(tmp_name)
        raise describe_os_error(exc, "writing", path) from exc


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass


__all__ = ["describe_os_error", "ensure_directory", "write_text_atomic"]
