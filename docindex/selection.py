"""Documentation path selection over a repository tree."""

from __future__ import annotations

import posixpath
from typing import Iterable, List, Optional, Sequence

from .errors import NoDocumentFiles
from .logging import get_logger
from .models import SelectionResult, TreeEntry

DOC_FOLDER_NAMES = ("docs", "doc", "documentation", "guide", "guides")
MARKDOWN_EXTENSIONS = (".md", ".mdx", ".markdown")


def is_markdown(path: str) -> bool:
    return posixpath.splitext(path)[1].lower() in MARKDOWN_EXTENSIONS


def normalize_path(path: str) -> str:
    return path.strip().strip("/")


def find_docs_folder(entries: Iterable[TreeEntry]) -> Optional[str]:
    """Return the top-level docs directory by conventional name, preserving case."""
    top_level = {}
    for entry in entries:
        if entry.is_directory and "/" not in entry.path:
            top_level.setdefault(entry.path.lower(), entry.path)
    for name in DOC_FOLDER_NAMES:
        if name in top_level:
            return top_level[name]
    return None


def filter_markdown(entries: Iterable[TreeEntry], effective_path: str) -> List[TreeEntry]:
    """Return Markdown file entries at or beneath ``effective_path``."""
    prefix = f"{effective_path}/" if effective_path else ""
    selected: List[TreeEntry] = []
    for entry in entries:
        if not entry.is_file:
            continue
        if effective_path and entry.path != effective_path and not entry.path.startswith(prefix):
            continue
        if is_markdown(entry.path):
            selected.append(entry)
    return selected


class PathSelector:
    """Picks the Markdown files to download from a tree."""

    def __init__(self) -> None:
        self.logger = get_logger("selection")

    def select(
        self,
        entries: Sequence[TreeEntry],
        requested_path: str = "",
        *,
        repository: str = "repository",
    ) -> SelectionResult:
        effective_path = normalize_path(requested_path)
        auto_detected = False
        if not effective_path:
            detected = find_docs_folder(entries)
            if detected:
                self.logger.debug("Auto-detected documentation folder %s", detected)
                effective_path = detected
                auto_detected = True

        selected = filter_markdown(entries, effective_path)
        if not selected:
            path_info = f' in path "{effective_path}"' if effective_path else ""
            raise NoDocumentFiles(
                f"No markdown files found in {repository}{path_info}\n\n"
                "The tool looks for files with extensions: .md, .mdx, .markdown\n\n"
                "Suggestions:\n"
                "  - Check that the repository contains markdown documentation\n"
                "  - Try a different --path (e.g., --path docs, --path documentation)\n"
                "  - Verify the path exists in the repository"
            )
        self.logger.debug("Selected %d markdown files under %r", len(selected), effective_path or "/")
        return SelectionResult(
            effective_path=effective_path,
            entries=tuple(selected),
            auto_detected=auto_detected,
        )


__all__ = [
    "DOC_FOLDER_NAMES",
    "MARKDOWN_EXTENSIONS",
    "PathSelector",
    "filter_markdown",
    "find_docs_folder",
    "is_markdown",
]
