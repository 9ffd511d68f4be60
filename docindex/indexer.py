"""Compressed directory index for downloaded documentation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from .errors import DirectoryNotFound, NoDocumentFiles
from .fsutil import describe_os_error
from .logging import get_logger
from .selection import is_markdown

_EXCLUDED_DIRS = {"node_modules"}
MANIFEST_FILENAMES = ("llms.txt", "llm.txt")


@dataclass(frozen=True)
class DocIndex:
    """Markdown files grouped by parent directory, ready to serialize."""

    root_name: str
    groups: Dict[str, List[str]]

    @property
    def file_count(self) -> int:
        return sum(len(names) for names in self.groups.values())

    @property
    def directory_count(self) -> int:
        return len(self.groups)

    def render(self) -> str:
        """Return one ``dir:{a.md,b.md}`` line per directory, root first."""
        lines: List[str] = []
        for key in _ordered_keys(self.groups):
            display = self.root_name if key == "" else f"{self.root_name}/{key}"
            lines.append(f"{display}:{{{','.join(self.groups[key])}}}")
        return "\n".join(lines)


def group_by_directory(paths: Iterable[str]) -> Dict[str, List[str]]:
    """Group slash-separated relative paths by parent directory, names sorted."""
    grouped: Dict[str, List[str]] = {}
    for path in paths:
        normalized = path.replace("\\", "/")
        directory, _, name = normalized.rpartition("/")
        grouped.setdefault(directory, []).append(name)
    return {key: sorted(names) for key, names in grouped.items()}


def _ordered_keys(groups: Dict[str, List[str]]) -> List[str]:
    keys = sorted(key for key in groups if key != "")
    if "" in groups:
        keys.insert(0, "")
    return keys


def _raise_walk_error(exc: OSError) -> None:
    raise describe_os_error(exc, "reading directory", exc.filename or "")


def is_indexable(filename: str) -> bool:
    return is_markdown(filename) or filename.lower() in MANIFEST_FILENAMES


def iter_markdown_files(root: Path) -> Iterator[str]:
    """Yield relative POSIX paths of Markdown and manifest files, skipping hidden entries."""
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        dirnames[:] = sorted(
            name for name in dirnames if not name.startswith(".") and name not in _EXCLUDED_DIRS
        )
        for filename in sorted(filenames):
            if filename.startswith(".") or not is_indexable(filename):
                continue
            yield f"{rel_dir}/{filename}" if rel_dir else filename


class Indexer:
    """Builds the compressed index for a local docs directory."""

    def __init__(self) -> None:
        self.logger = get_logger("indexer")

    def build(self, root: Path | str) -> DocIndex:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise DirectoryNotFound(
                f"Documentation directory not found: {root_path}\n\n"
                "Please download documentation first using:\n"
                "  docindex add <github-url>"
            )
        if not root_path.is_dir():
            raise DirectoryNotFound(
                f"Path is not a directory: {root_path}\n\n"
                "Expected a directory containing markdown files."
            )

        try:
            files = list(iter_markdown_files(root_path))
        except OSError as exc:
            raise describe_os_error(exc, "reading directory", root_path) from exc

        if not files:
            raise NoDocumentFiles(
                f"No markdown files found in {root_path}\n\n"
                "The directory exists but contains no .md, .mdx, .markdown or llms.txt files."
            )

        index = DocIndex(root_name=root_path.name, groups=group_by_directory(files))
        self.logger.debug(
            "Indexed %d files in %d directories under %s",
            index.file_count,
            index.directory_count,
            root_path,
        )
        return index

    def create_index(self, root: Path | str) -> str:
        """Return the serialized compressed index for ``root``."""
        return self.build(root).render()


__all__ = ["DocIndex", "Indexer", "group_by_directory", "is_indexable", "iter_markdown_files"]
