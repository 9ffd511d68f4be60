"""Tests for marker block merging."""

from __future__ import annotations

import pytest

from docindex.document.markers import BlockMerger, format_display_name
from docindex.errors import InvalidIdentifier, MalformedBlock

INDEX = "react-docs:{intro.md}\nreact-docs/hooks:{use-state.md}"


@pytest.fixture()
def merger() -> BlockMerger:
    return BlockMerger()


def test_format_display_name() -> None:
    assert format_display_name("react-docs") == "React Docs"
    assert format_display_name("nextjs") == "Nextjs"


def test_build_block_layout(merger: BlockMerger) -> None:
    block = merger.build_block("react-docs", "./.docs/react-docs", INDEX)

    assert block.render() == (
        "<!-- DOCS-INDEX-START:react-docs -->\n"
        "[React Docs]\n"
        "root: ./.docs/react-docs\n"
        "IMPORTANT: Use retrieval-led reasoning. When you need React Docs information, "
        "read files from the root directory above.\n"
        "\n"
        f"{INDEX}\n"
        "<!-- DOCS-INDEX-END:react-docs -->"
    )


def test_upsert_appends_with_blank_line(merger: BlockMerger) -> None:
    block = merger.build_block("react-docs", "./.docs/react-docs", INDEX)

    result = merger.upsert("# Agents\n\nSome notes.\n\n\n", block)

    assert result == f"# Agents\n\nSome notes.\n\n{block.render()}\n"


def test_upsert_into_empty_document(merger: BlockMerger) -> None:
    block = merger.build_block("a", "./.docs/a", "a:{x.md}")
    assert merger.upsert("", block) == f"{block.render()}\n"


def test_upsert_is_idempotent(merger: BlockMerger) -> None:
    block = merger.build_block("react-docs", "./.docs/react-docs", INDEX)
    once = merger.upsert("# Agents\n", block)
    twice = merger.upsert(once, block)

    assert once == twice
    assert once.count(block.start_marker) == 1


def test_upsert_replaces_in_place_and_preserves_surroundings(merger: BlockMerger) -> None:
    old = merger.build_block("react-docs", "./.docs/react-docs", "react-docs:{old.md}")
    other = merger.build_block("vue-docs", "./.docs/vue-docs", "vue-docs:{a.md}")
    document = f"# Title\n\n{old.render()}\n\nHand-written notes.\n\n{other.render()}\n"

    new = merger.build_block("react-docs", "./.docs/react-docs", INDEX)
    result = merger.upsert(document, new)

    assert result == f"# Title\n\n{new.render()}\n\nHand-written notes.\n\n{other.render()}\n"


def test_upsert_collapses_duplicate_blocks(merger: BlockMerger) -> None:
    old = merger.build_block("react-docs", "./.docs/react-docs", "react-docs:{old.md}")
    document = f"# Title\n\n{old.render()}\n\nMiddle\n\n{old.render()}\n"

    new = merger.build_block("react-docs", "./.docs/react-docs", INDEX)
    result = merger.upsert(document, new)

    assert result.count(new.start_marker) == 1
    assert result == f"# Title\n\n{new.render()}\n\nMiddle\n"


def test_malformed_block_raises(merger: BlockMerger) -> None:
    document = "# Title\n\n<!-- DOCS-INDEX-START:react-docs -->\npartial\n"
    block = merger.build_block("react-docs", "./.docs/react-docs", INDEX)

    with pytest.raises(MalformedBlock):
        merger.upsert(document, block)
    with pytest.raises(MalformedBlock):
        merger.remove(document, "react-docs")


def test_other_identifier_markers_are_not_confused(merger: BlockMerger) -> None:
    react = merger.build_block("react", "./.docs/react", "react:{a.md}")
    react_docs = merger.build_block("react-docs", "./.docs/react-docs", "react-docs:{b.md}")
    document = merger.upsert(merger.upsert("", react_docs), react)

    updated = merger.upsert(document, merger.build_block("react", "./.docs/react", "react:{z.md}"))

    assert react_docs.render() in updated
    assert "react:{z.md}" in updated
    assert "react:{a.md}" not in updated


def test_remove_round_trip(merger: BlockMerger) -> None:
    original = "# Title\n\nNotes.\n"
    block = merger.build_block("react-docs", "./.docs/react-docs", INDEX)
    merged = merger.upsert(original, block)

    text, removed = merger.remove(merged, "react-docs")

    assert removed is True
    assert text == original


def test_remove_between_paragraphs_keeps_single_blank_line(merger: BlockMerger) -> None:
    block = merger.build_block("x", "./.docs/x", "x:{a.md}")
    document = f"Before\n\n{block.render()}\n\nAfter\n"

    text, removed = merger.remove(document, "x")

    assert removed is True
    assert text == "Before\n\nAfter\n"


def test_remove_missing_identifier(merger: BlockMerger) -> None:
    text, removed = merger.remove("# Title\n", "absent")
    assert removed is False
    assert text == "# Title\n"


def test_identifiers_in_document_order(merger: BlockMerger) -> None:
    document = ""
    for name in ["zeta", "alpha", "mid-docs"]:
        document = merger.upsert(document, merger.build_block(name, f"./.docs/{name}", f"{name}:{{a.md}}"))

    assert merger.identifiers(document) == ["zeta", "alpha", "mid-docs"]
    assert merger.identifiers("# nothing here\n") == []


@pytest.mark.parametrize(
    "source_id",
    [
        "",
        "   ",
        "a" * 101,
        "bad<!--id",
        "bad-->id",
        "has space",
        "../../elsewhere",
        "nested/name",
        "win\\name",
        "..",
        ".",
    ],
)
def test_invalid_identifiers(merger: BlockMerger, source_id: str) -> None:
    with pytest.raises(InvalidIdentifier):
        merger.validate_identifier(source_id)


def test_identifier_at_length_limit_is_accepted(merger: BlockMerger) -> None:
    assert merger.validate_identifier("a" * 100) == "a" * 100
