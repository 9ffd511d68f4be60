"""Branch-fallback tree retrieval."""

from __future__ import annotations

from typing import List, Protocol, Sequence

from ..errors import BranchNotFound, RepositoryNotFound
from ..logging import get_logger
from ..models import TreeResult

FALLBACK_BRANCHES = ("main", "master", "develop", "dev")


class TreeSource(Protocol):
    """Anything able to fetch a repository tree for one branch."""

    def fetch_tree(self, owner: str, repo: str, branch: str) -> TreeResult:
        ...


def candidate_branches(preferred: str = "", fallbacks: Sequence[str] = FALLBACK_BRANCHES) -> List[str]:
    """Return the preferred branch followed by fallbacks, without duplicates."""
    ordered: List[str] = []
    for branch in (preferred, *fallbacks):
        if branch and branch not in ordered:
            ordered.append(branch)
    return ordered


class TreeFetcher:
    """Tries candidate branches in order until one resolves."""

    def __init__(self, client: TreeSource) -> None:
        self.client = client
        self.logger = get_logger("tree")

    def fetch(self, owner: str, repo: str, preferred_branch: str = "") -> TreeResult:
        """Return the tree of the first branch that exists.

        Only a missing branch moves on to the next candidate. Timeouts, rate
        limits and authentication failures propagate from the first attempt
        that hits them.
        """
        branches = candidate_branches(preferred_branch)
        for branch in branches:
            self.logger.debug("Fetching tree for %s/%s@%s", owner, repo, branch)
            try:
                result = self.client.fetch_tree(owner, repo, branch)
            except BranchNotFound:
                self.logger.debug("Branch %s not found for %s/%s", branch, owner, repo)
                continue
            if result.truncated:
                self.logger.warning(
                    "Repository %s/%s has many files; the tree was truncated and some "
                    "files may be missing. Consider using --path to target a specific directory.",
                    owner,
                    repo,
                )
            return result

        raise RepositoryNotFound(
            f"Could not find repository: {owner}/{repo}\n\n"
            f"Tried branches: {', '.join(branches)}\n\n"
            "Please check:\n"
            "  - The repository exists and is public\n"
            "  - The URL is correct\n"
            "  - Use --branch to specify the correct branch name",
            branches,
        )


__all__ = ["FALLBACK_BRANCHES", "TreeFetcher", "TreeSource", "candidate_branches"]
