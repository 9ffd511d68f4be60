"""Best-effort .gitignore maintenance for the docs directory."""

from __future__ import annotations

from pathlib import Path

from .logging import get_logger

_COMMENT = "# Downloaded documentation (docindex)"

logger = get_logger("gitignore")


def _normalize(docs_dir: str) -> str:
    entry = docs_dir.replace("\\", "/")
    if entry.startswith("./"):
        entry = entry[2:]
    return entry.rstrip("/")


def _variants(entry: str) -> set[str]:
    return {entry, f"{entry}/", f"/{entry}", f"/{entry}/"}


def _read_gitignore(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def is_in_gitignore(docs_dir: str, root: Path) -> bool:
    """Return True when ``docs_dir`` is already ignored by ``root/.gitignore``.

    An unreadable or non UTF-8 file counts as not ignoring it.
    """
    try:
        content = _read_gitignore(root / ".gitignore")
    except (OSError, UnicodeDecodeError):
        return False
    variants = _variants(_normalize(docs_dir))
    return any(line.strip() in variants for line in content.splitlines())


def add_to_gitignore(docs_dir: str, root: Path) -> bool:
    """Append ``docs_dir/`` to ``root/.gitignore``; failures are logged, never raised."""
    if is_in_gitignore(docs_dir, root):
        return False

    gitignore_path = root / ".gitignore"
    try:
        content = _read_gitignore(gitignore_path)
        separator = "\n\n" if content else ""
        gitignore_path.write_text(
            f"{content.rstrip()}{separator}{_COMMENT}\n{_normalize(docs_dir)}/\n",
            encoding="utf-8",
        )
        return True
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not update .gitignore: %s", exc)
        return False


__all__ = ["add_to_gitignore", "is_in_gitignore"]
