"""Tests for docindex.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docindex.config import DocIndexConfig, GitHubConfig, TimeoutConfig, load_config
from docindex.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocIndexConfig)
    assert config.root == tmp_path.resolve()
    assert config.output == "AGENTS.md"
    assert config.docs_dir == ".docs"
    assert config.gitignore is True
    assert config.github == GitHubConfig()
    assert config.timeouts == TimeoutConfig()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docindex.yml"
    config_file.write_text(
        """
output: CLAUDE.md
docs_dir: vendor/docs
gitignore: false
github:
  api_url: "https://github.example.com/api/v3/"
  raw_url: "https://raw.github.example.com"
  token: "config-token"
timeouts:
  tree: 60
  file: 5.5
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.output == "CLAUDE.md"
    assert config.docs_dir == "vendor/docs"
    assert config.gitignore is False
    assert config.github.api_url == "https://github.example.com/api/v3"
    assert config.github.raw_url == "https://raw.github.example.com"
    assert config.github.token == "config-token"
    assert config.timeouts == TimeoutConfig(tree=60.0, file=5.5, manifest=30.0)


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".docindex.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).output == "AGENTS.md"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".docindex.yml").write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".docindex.yml").write_text("output: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize("value", ["0", "-3", "soon", "[1, 2]"])
def test_load_config_rejects_bad_timeouts(tmp_path: Path, value: str) -> None:
    (tmp_path / ".docindex.yml").write_text(f"timeouts:\n  tree: {value}\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_resolve_token_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = DocIndexConfig(root=tmp_path)
    assert config.resolve_token() is None

    monkeypatch.setenv("GITHUB_TOKEN", "env-generic")
    assert config.resolve_token() == "env-generic"

    monkeypatch.setenv("DOCINDEX_GITHUB_TOKEN", "env-specific")
    assert config.resolve_token() == "env-specific"

    config.github.token = "from-config"
    assert config.resolve_token() == "from-config"
    assert config.resolve_token("explicit") == "explicit"
