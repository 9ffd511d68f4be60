"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from docindex import cli
from docindex.cli import _build_parser
from docindex.config import load_config
from docindex.download import ManifestDownloader
from docindex.orchestrator import Orchestrator
from tests._fixtures.fake_github import FakeGitHubClient, make_tree


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "list"])
    assert args.verbose is True
    assert args.command == "list"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["list", "--verbose"])
    assert args.verbose is True
    assert args.command == "list"


def test_cli_parses_add_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "add",
            "https://github.com/acme/widget",
            "-o",
            "CLAUDE.md",
            "--docs-dir",
            "vendor",
            "--path",
            "docs",
            "-n",
            "widget",
            "-b",
            "dev",
            "--no-gitignore",
        ]
    )
    assert args.command == "add"
    assert args.source == "https://github.com/acme/widget"
    assert args.output == "CLAUDE.md"
    assert args.docs_dir == "vendor"
    assert args.path == "docs"
    assert args.source_name == "widget"
    assert args.branch == "dev"
    assert args.no_gitignore is True


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    client = FakeGitHubClient(
        trees={"main": make_tree(["docs/", "docs/intro.md"])},
        files={"docs/intro.md": "# Intro\n"},
    )

    def _factory() -> Orchestrator:
        return Orchestrator(
            tmp_path,
            config=load_config(tmp_path),
            client=client,  # type: ignore[arg-type]
            manifest_downloader=ManifestDownloader(lambda url, timeout: "# Docs\n"),
        )

    monkeypatch.setattr(cli, "Orchestrator", _factory)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_main_add_list_remove(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["add", "https://github.com/acme/widget"])
    out = capsys.readouterr().out
    assert "Downloaded 1 file to" in out
    assert "Auto-detected documentation folder: docs" in out
    assert "Indexed 1 files in 1 directories" in out
    assert "Created" in out

    cli.main(["list"])
    out = capsys.readouterr().out
    assert "Documentation sources in AGENTS.md:" in out
    assert "1. widget-docs" in out

    cli.main(["remove", "widget-docs"])
    out = capsys.readouterr().out
    assert "Removed widget-docs from AGENTS.md" in out
    assert (project / ".docs" / "widget-docs" / "intro.md").exists()


def test_main_list_without_document(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["list"])
    out = capsys.readouterr().out
    assert "No documentation sources found in AGENTS.md" in out


def test_main_remove_unknown_source_exits_nonzero(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["add", "https://example.com/llms.txt", "-n", "example"])
    capsys.readouterr()

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["remove", "missing"])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert 'Source "missing" not found in AGENTS.md' in out
    assert "  - example" in out


def test_main_reports_errors(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["add", "https://gitlab.com/acme/widget"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("docindex add failed:")
