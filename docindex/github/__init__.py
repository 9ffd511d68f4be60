"""GitHub tree retrieval."""

from .client import GitHubClient
from .tree import FALLBACK_BRANCHES, TreeFetcher, candidate_branches

__all__ = ["FALLBACK_BRANCHES", "GitHubClient", "TreeFetcher", "candidate_branches"]
