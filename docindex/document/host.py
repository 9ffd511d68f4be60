"""File-level operations on the host document (AGENTS.md and friends)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from ..errors import DocIndexError, DocumentNotFound, MalformedBlock
from ..fsutil import describe_os_error, write_text_atomic
from ..logging import get_logger
from .markers import BlockMerger
from .project import get_project_context

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass
class WriteOutcome:
    """How the host document changed."""

    path: Path
    created: bool
    updated: bool


def relative_root(output_path: Path, docs_root: Path) -> str:
    """Return ``./<path>`` from the host document's folder to ``docs_root``."""
    relative = os.path.relpath(docs_root.resolve(), output_path.resolve().parent)
    return "./" + relative.replace(os.sep, "/")


class HostDocument:
    """Reads, merges and writes index blocks in one host document."""

    def __init__(
        self,
        path: Path | str,
        *,
        merger: BlockMerger | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.path = Path(path).expanduser().resolve()
        self.merger = merger or BlockMerger()
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.logger = get_logger("document")

    def write_index(
        self,
        source_id: str,
        docs_root: Path,
        index_text: str,
        *,
        project_dir: Path | None = None,
    ) -> WriteOutcome:
        """Create the document or merge the block for ``source_id`` into it."""
        self.merger.validate_identifier(source_id)
        if not index_text or not index_text.strip():
            raise DocIndexError(
                "Cannot generate empty index. Please ensure documentation was downloaded."
            )
        block = self.merger.build_block(source_id, relative_root(self.path, docs_root), index_text)

        existing = self._read()
        if existing is None:
            content = self.render_new_document(project_dir or self.path.parent)
            content = self.merger.upsert(content, block)
            created, updated = True, False
        else:
            updated = self.merger.has_block(existing, source_id)
            content = self.merger.upsert(existing, block)
            created = False

        if existing is not None and content == existing:
            self.logger.debug("%s already up to date for %s", self.path, source_id)
        else:
            write_text_atomic(self.path, content)
        return WriteOutcome(path=self.path, created=created, updated=updated)

    def render_new_document(self, project_dir: Path) -> str:
        template = self._env.get_template("agents.md.j2")
        title = self.path.stem
        return template.render(title=title, project=get_project_context(project_dir))

    def list_sources(self) -> List[str]:
        """Return identifiers in document order; a missing document has none."""
        existing = self._read()
        if existing is None:
            return []
        return self.merger.identifiers(existing)

    def remove_source(self, source_id: str) -> bool:
        """Remove the block for ``source_id``; False when it is not present."""
        existing = self._read()
        if existing is None:
            raise DocumentNotFound(f"File not found: {self.path}")
        try:
            content, removed = self.merger.remove(existing, source_id)
        except MalformedBlock as exc:
            self.logger.warning("%s", exc)
            return False
        if removed:
            write_text_atomic(self.path, content)
        return removed

    def _read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise describe_os_error(exc, "reading", self.path) from exc


__all__ = ["HostDocument", "WriteOutcome", "relative_root"]
