"""Source locator parsing for GitHub repositories and llms.txt manifests."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from .errors import InvalidSource
from .models import ManifestSource, RepositorySource, SourceLocator

_GITHUB_PATTERN = re.compile(
    r"github\.com/([^/?#]+)/([^/?#]+)(?:/tree/([^/?#]+))?",
    re.IGNORECASE,
)
_MANIFEST_SUFFIXES = ("llms.txt", "llm.txt")

_REPOSITORY_FORMATS = (
    "  - https://github.com/owner/repo\n"
    "  - https://github.com/owner/repo/tree/branch\n"
    "  - github.com/owner/repo"
)


def parse_github_url(text: str) -> RepositorySource:
    """Parse a GitHub repository URL into owner, repo and optional branch."""
    cleaned = text.strip()
    if not re.match(r"^https?://", cleaned, re.IGNORECASE):
        cleaned = f"https://{cleaned}"
    cleaned = cleaned.rstrip("/")
    if cleaned.lower().endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    cleaned = cleaned.rstrip("/")

    match = _GITHUB_PATTERN.search(cleaned)
    if not match:
        raise InvalidSource(
            f'Invalid GitHub URL: "{text}"\n\nExpected formats:\n{_REPOSITORY_FORMATS}'
        )
    owner, repo, branch = match.groups()
    if repo.lower().endswith(".git"):
        repo = repo[: -len(".git")]
    return RepositorySource(owner=owner, repo=repo, branch=branch or "")


def is_manifest_url(text: str) -> bool:
    """Return True when the URL path ends with llms.txt or llm.txt."""
    candidate = text.strip()
    path = urlparse(candidate).path if "://" in candidate else candidate.split("?", 1)[0]
    return path.lower().endswith(_MANIFEST_SUFFIXES)


def parse_manifest_url(text: str) -> ManifestSource:
    """Validate an absolute manifest URL."""
    url = text.strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        raise InvalidSource(
            f'Invalid URL: "{text}"\n\n'
            "Please provide a valid llms.txt URL, e.g.:\n"
            "  https://example.com/llms.txt"
        )
    return ManifestSource(url=url)


def resolve_source(text: str) -> SourceLocator:
    """Classify free-form input as a manifest or repository source."""
    if is_manifest_url(text):
        return parse_manifest_url(text)
    if "github.com" in text.lower():
        return parse_github_url(text)
    raise InvalidSource(
        f'Invalid source: "{text}"\n\n'
        "Supported sources:\n"
        "  - GitHub URL (e.g. https://github.com/owner/repo)\n"
        "  - llms.txt URL (e.g. https://example.com/llms.txt)"
    )


def repository_source_name(owner: str, repo: str) -> str:
    """Return the default source name for a repository."""
    return re.sub(r"[^a-z0-9-]", "-", f"{repo}-docs".lower())


def manifest_source_name(url: str) -> str:
    """Return the default source name for a manifest URL."""
    host = urlparse(url).hostname or ""
    if host.startswith("www."):
        host = host[len("www."):]
    label = host.split(".")[0]
    if not label:
        return "llms-txt"
    name = re.sub(r"[^a-z0-9-]", "-", f"{label}-llms".lower())
    return re.sub(r"-+", "-", name)


def default_source_name(source: SourceLocator) -> str:
    if isinstance(source, ManifestSource):
        return manifest_source_name(source.url)
    return repository_source_name(source.owner, source.repo)


__all__ = [
    "default_source_name",
    "is_manifest_url",
    "manifest_source_name",
    "parse_github_url",
    "parse_manifest_url",
    "repository_source_name",
    "resolve_source",
]
