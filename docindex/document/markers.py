"""Managed marker blocks inside a host document."""

from __future__ import annotations

import re
from typing import List, Tuple

from ..errors import InvalidIdentifier, MalformedBlock
from ..models import DocumentBlock

MAX_IDENTIFIER_LENGTH = 100

GUIDANCE_FMT = (
    "IMPORTANT: Use retrieval-led reasoning. When you need {title} information, "
    "read files from the root directory above."
)


def format_display_name(source_id: str) -> str:
    """Turn ``react-docs`` into ``React Docs``."""
    return " ".join(word[:1].upper() + word[1:] for word in source_id.split("-"))


def _excise(text: str, start: int, end: int) -> str:
    before = text[:start].rstrip("\r\n")
    after = text[end:].lstrip("\r\n")
    if before and after:
        return f"{before}\n\n{after}"
    if before:
        return f"{before}\n"
    return after


class BlockMerger:
    """Applies docindex markers for idempotent block replacement.

    Block positions are located from scratch on every call; the document may
    have been edited by hand between runs.
    """

    START_FMT = "<!-- DOCS-INDEX-START:{key} -->"
    END_FMT = "<!-- DOCS-INDEX-END:{key} -->"

    _START_PATTERN = re.compile(
        re.escape("<!-- DOCS-INDEX-START:") + r"(\S+?)" + re.escape(" -->")
    )

    def start_marker(self, source_id: str) -> str:
        return self.START_FMT.format(key=source_id)

    def end_marker(self, source_id: str) -> str:
        return self.END_FMT.format(key=source_id)

    def validate_identifier(self, source_id: str) -> str:
        """Return ``source_id`` if it can be embedded in markers."""
        if not source_id or not source_id.strip():
            raise InvalidIdentifier("Source name cannot be empty")
        if len(source_id) > MAX_IDENTIFIER_LENGTH:
            raise InvalidIdentifier(
                f"Source name is too long (max {MAX_IDENTIFIER_LENGTH} characters)"
            )
        if "<!--" in source_id or "-->" in source_id:
            raise InvalidIdentifier("Source name cannot contain HTML comment markers")
        if any(char.isspace() for char in source_id):
            raise InvalidIdentifier(f'Source name cannot contain whitespace: "{source_id}"')
        # the identifier doubles as the docs subdirectory name
        if "/" in source_id or "\\" in source_id or source_id in {".", ".."}:
            raise InvalidIdentifier(
                f'Source name must be a single directory name: "{source_id}"'
            )
        return source_id

    def build_block(self, source_id: str, root: str, index_text: str) -> DocumentBlock:
        """Return the block describing one documentation source."""
        self.validate_identifier(source_id)
        title = format_display_name(source_id)
        body = "\n".join(
            [
                f"[{title}]",
                f"root: {root}",
                GUIDANCE_FMT.format(title=title),
                "",
                index_text.strip(),
            ]
        )
        return DocumentBlock(
            source_id=source_id,
            start_marker=self.start_marker(source_id),
            end_marker=self.end_marker(source_id),
            body=body,
        )

    def locate(self, document: str, source_id: str) -> List[Tuple[int, int]]:
        """Return ``(start, end)`` offsets of every complete block for ``source_id``."""
        begin = self.start_marker(source_id)
        end = self.end_marker(source_id)
        spans: List[Tuple[int, int]] = []
        position = 0
        while True:
            start_index = document.find(begin, position)
            if start_index == -1:
                break
            end_index = document.find(end, start_index + len(begin))
            if end_index == -1:
                raise MalformedBlock(
                    f'Malformed documentation index found for "{source_id}".\n\n'
                    "Found start marker but missing end marker.\n"
                    "Please manually fix or remove the incomplete block in your output file."
                )
            position = end_index + len(end)
            spans.append((start_index, position))
        return spans

    def has_block(self, document: str, source_id: str) -> bool:
        return self.start_marker(source_id) in document

    def upsert(self, document: str, block: DocumentBlock) -> str:
        """Replace the block for ``block.source_id`` or append it.

        Later duplicates of the same identifier are removed so that exactly
        one block remains.
        """
        self.validate_identifier(block.source_id)
        rendered = block.render()
        spans = self.locate(document, block.source_id)
        if not spans:
            trimmed = document.rstrip()
            if not trimmed:
                return f"{rendered}\n"
            return f"{trimmed}\n\n{rendered}\n"

        text = document
        for start, end in reversed(spans[1:]):
            text = _excise(text, start, end)
        first_start, first_end = spans[0]
        return f"{text[:first_start]}{rendered}{text[first_end:]}"

    def identifiers(self, document: str) -> List[str]:
        """Return every block identifier in document order."""
        return [match.group(1) for match in self._START_PATTERN.finditer(document)]

    def remove(self, document: str, source_id: str) -> Tuple[str, bool]:
        """Excise every block for ``source_id``; return the new text and whether anything changed."""
        self.validate_identifier(source_id)
        spans = self.locate(document, source_id)
        if not spans:
            return document, False
        text = document
        for start, end in reversed(spans):
            text = _excise(text, start, end)
        return text, True


__all__ = ["BlockMerger", "GUIDANCE_FMT", "format_display_name"]
