"""Read-only GitHub REST and raw content access."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List
from urllib.parse import quote

from ..config import DEFAULT_API_URL, DEFAULT_RAW_URL
from ..errors import BranchNotFound, NetworkError, ResourceNotFound
from ..http import fetch_json, fetch_text
from ..logging import get_logger
from ..models import EntryKind, TreeEntry, TreeResult

_KIND_BY_TYPE = {
    "blob": EntryKind.FILE,
    "tree": EntryKind.DIRECTORY,
}


class GitHubClient:
    """Issues single tree and raw-file requests against GitHub."""

    def __init__(
        self,
        *,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        raw_url: str = DEFAULT_RAW_URL,
        tree_timeout: float = 30.0,
        file_timeout: float = 15.0,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.raw_url = raw_url.rstrip("/")
        self.tree_timeout = tree_timeout
        self.file_timeout = file_timeout
        self.logger = get_logger("github")

    def fetch_tree(self, owner: str, repo: str, branch: str) -> TreeResult:
        """Return the recursive tree for ``branch``; 404 raises BranchNotFound."""
        url = (
            f"{self.api_url}/repos/{quote(owner)}/{quote(repo)}"
            f"/git/trees/{quote(branch, safe='')}?recursive=1"
        )
        headers = {"Accept": "application/vnd.github.v3+json", **self._auth_headers()}
        try:
            payload = fetch_json(url, timeout=self.tree_timeout, headers=headers)
        except ResourceNotFound as exc:
            raise BranchNotFound(
                f"Repository or branch not found: {owner}/{repo} (branch: {branch})"
            ) from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("tree"), list):
            raise NetworkError(f"Unexpected tree response for {owner}/{repo}@{branch}")
        entries = tuple(_parse_entries(payload["tree"]))
        self.logger.debug("Fetched %d tree entries for %s/%s@%s", len(entries), owner, repo, branch)
        return TreeResult(entries=entries, branch=branch, truncated=bool(payload.get("truncated")))

    def fetch_raw(self, owner: str, repo: str, branch: str, path: str) -> str:
        """Return the raw text of ``path`` at ``branch``."""
        url = f"{self.raw_url}/{quote(owner)}/{quote(repo)}/{quote(branch)}/{quote(path)}"
        try:
            return fetch_text(url, timeout=self.file_timeout, headers=self._auth_headers())
        except ResourceNotFound as exc:
            raise ResourceNotFound(f"File not found: {path}") from exc

    def _auth_headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}


def _parse_entries(items: Iterable[Any]) -> List[TreeEntry]:
    entries: List[TreeEntry] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        kind = _KIND_BY_TYPE.get(str(item.get("type")))
        path = item.get("path")
        # submodules ("commit") and malformed items are dropped
        if kind is None or not isinstance(path, str) or not path or path in seen:
            continue
        seen.add(path)
        size = item.get("size")
        entries.append(
            TreeEntry(
                path=path,
                kind=kind,
                size=size if isinstance(size, int) and not isinstance(size, bool) else None,
            )
        )
    return entries
