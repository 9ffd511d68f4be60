from __future__ import annotations

import logging

import pytest

from tests._fixtures.fake_github import FakeGitHubClient


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Provide an empty fake GitHub client; tests fill in trees and files."""
    return FakeGitHubClient()


@pytest.fixture(autouse=True)
def _isolate_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("DOCINDEX_GITHUB_TOKEN", raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handlers installed by configure_logging during a test."""
    logger = logging.getLogger("docindex")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
