"""Tests for host document creation and merging."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docindex.document.host import HostDocument, relative_root
from docindex.errors import DocIndexError, DocumentNotFound, InvalidIdentifier

INDEX = "react-docs:{intro.md}"


def test_relative_root_uses_forward_slashes(tmp_path: Path) -> None:
    output = tmp_path / "AGENTS.md"
    assert relative_root(output, tmp_path / ".docs" / "react-docs") == "./.docs/react-docs"
    nested = tmp_path / "sub" / "CLAUDE.md"
    assert relative_root(nested, tmp_path / ".docs" / "x") == "./../.docs/x"


def test_write_index_creates_document_from_template(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "shop", "description": "A demo shop", "scripts": {"test": "jest"}}),
        encoding="utf-8",
    )
    host = HostDocument(tmp_path / "AGENTS.md")

    outcome = host.write_index("react-docs", tmp_path / ".docs" / "react-docs", INDEX, project_dir=tmp_path)

    assert outcome.created is True
    assert outcome.updated is False
    content = (tmp_path / "AGENTS.md").read_text(encoding="utf-8")
    assert content.startswith("# AGENTS\n")
    assert "## Project Overview\n\nA demo shop\n" in content
    assert "# Install dependencies\nnpm install\n\n# Run tests\nnpm run test\n```" in content
    assert "## Documentation Indexes" in content
    assert "<!-- DOCS-INDEX-START:react-docs -->\n[React Docs]\nroot: ./.docs/react-docs\n" in content
    assert content.endswith("<!-- DOCS-INDEX-END:react-docs -->\n")


def test_new_document_without_project_metadata(tmp_path: Path) -> None:
    host = HostDocument(tmp_path / "CLAUDE.md")

    content = host.render_new_document(tmp_path)

    assert content.startswith("# CLAUDE\n")
    assert "<!-- Add your project description here -->" in content
    assert "# Add your setup commands here" in content


def test_write_index_updates_existing_block(tmp_path: Path) -> None:
    output = tmp_path / "AGENTS.md"
    output.write_text("# My agents file\n\nKeep this.\n", encoding="utf-8")
    host = HostDocument(output)
    docs_root = tmp_path / ".docs" / "react-docs"

    first = host.write_index("react-docs", docs_root, INDEX)
    after_first = output.read_text(encoding="utf-8")
    second = host.write_index("react-docs", docs_root, INDEX)
    after_second = output.read_text(encoding="utf-8")

    assert (first.created, first.updated) == (False, False)
    assert (second.created, second.updated) == (False, True)
    assert after_first == after_second
    assert after_first.startswith("# My agents file\n\nKeep this.\n\n<!-- DOCS-INDEX-START:react-docs -->")


def test_write_index_rejects_empty_index(tmp_path: Path) -> None:
    host = HostDocument(tmp_path / "AGENTS.md")
    with pytest.raises(DocIndexError):
        host.write_index("react-docs", tmp_path / ".docs", "   ")
    assert not (tmp_path / "AGENTS.md").exists()


def test_write_index_rejects_invalid_identifier(tmp_path: Path) -> None:
    host = HostDocument(tmp_path / "AGENTS.md")
    with pytest.raises(InvalidIdentifier):
        host.write_index("bad -->", tmp_path / ".docs", INDEX)


def test_list_sources_on_missing_document(tmp_path: Path) -> None:
    assert HostDocument(tmp_path / "AGENTS.md").list_sources() == []


def test_list_and_remove_sources(tmp_path: Path) -> None:
    host = HostDocument(tmp_path / "AGENTS.md")
    host.write_index("react-docs", tmp_path / ".docs" / "react-docs", INDEX, project_dir=tmp_path)
    host.write_index("vue-docs", tmp_path / ".docs" / "vue-docs", "vue-docs:{a.md}")

    assert host.list_sources() == ["react-docs", "vue-docs"]
    assert host.remove_source("react-docs") is True
    assert host.list_sources() == ["vue-docs"]
    assert host.remove_source("react-docs") is False


def test_remove_from_missing_document_raises(tmp_path: Path) -> None:
    with pytest.raises(DocumentNotFound):
        HostDocument(tmp_path / "AGENTS.md").remove_source("react-docs")


def test_remove_with_malformed_block_leaves_document(tmp_path: Path) -> None:
    output = tmp_path / "AGENTS.md"
    broken = "# Agents\n\n<!-- DOCS-INDEX-START:react-docs -->\nno end\n"
    output.write_text(broken, encoding="utf-8")

    assert HostDocument(output).remove_source("react-docs") is False
    assert output.read_text(encoding="utf-8") == broken
