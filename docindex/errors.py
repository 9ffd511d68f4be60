"""Error taxonomy for docindex pipelines."""

from __future__ import annotations

from typing import Sequence


class DocIndexError(RuntimeError):
    """Base class for failures surfaced to docindex callers."""


class ConfigError(DocIndexError):
    """Raised when the configuration file cannot be parsed."""


class InvalidSource(DocIndexError):
    """Raised when a source locator matches neither a repository nor a manifest URL."""


class ResourceNotFound(DocIndexError):
    """Raised when a remote resource answers 404."""


class BranchNotFound(ResourceNotFound):
    """Raised when GitHub answers 404 for a branch reference."""


class RepositoryNotFound(DocIndexError):
    """Raised when every candidate branch for a repository was rejected."""

    def __init__(self, message: str, branches: Sequence[str]) -> None:
        super().__init__(message)
        self.branches = list(branches)


class NetworkError(DocIndexError):
    """Raised for transport failures that are not covered by a narrower type."""


class NetworkTimeout(NetworkError):
    """Raised when a request exceeds its timeout."""


class RateLimited(DocIndexError):
    """Raised when the GitHub API refuses requests due to rate limiting."""

    def __init__(self, message: str, reset_at: str = "soon") -> None:
        super().__init__(message)
        self.reset_at = reset_at


class AuthFailed(DocIndexError):
    """Raised when the supplied token is rejected."""


class NoDocumentFiles(DocIndexError):
    """Raised when no Markdown files are available for a path."""


class PathTraversal(DocIndexError):
    """Raised when a remote path would resolve outside the local docs directory."""


class DownloadFailed(DocIndexError):
    """Raised when a batch download completes without a single success."""

    def __init__(self, message: str, failed: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.failed = list(failed)


class EmptyManifest(DocIndexError):
    """Raised when a manifest URL returns an empty body."""


class MalformedBlock(DocIndexError):
    """Raised when a start marker exists without its matching end marker."""


class InvalidIdentifier(DocIndexError):
    """Raised when a block identifier cannot be embedded in markers."""


class DocumentNotFound(DocIndexError):
    """Raised when the host document is missing for an operation that needs it."""


class DirectoryNotFound(DocIndexError):
    """Raised when the docs directory to index does not exist."""


class PermissionDenied(DocIndexError):
    """Raised when the filesystem refuses a read or write."""


class DiskFull(DocIndexError):
    """Raised when a write fails because the device has no space left."""


__all__ = [
    "AuthFailed",
    "BranchNotFound",
    "ConfigError",
    "DirectoryNotFound",
    "DiskFull",
    "DocIndexError",
    "DocumentNotFound",
    "DownloadFailed",
    "EmptyManifest",
    "InvalidIdentifier",
    "InvalidSource",
    "MalformedBlock",
    "NetworkError",
    "NetworkTimeout",
    "NoDocumentFiles",
    "PathTraversal",
    "PermissionDenied",
    "RateLimited",
    "RepositoryNotFound",
    "ResourceNotFound",
]
