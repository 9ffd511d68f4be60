"""Sequential, partial-failure tolerant download of selected tree files."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Tuple

from ..errors import DocIndexError, DownloadFailed, PathTraversal
from ..fsutil import describe_os_error, ensure_directory
from ..logging import get_logger
from ..models import DownloadOutcome, RepositorySource, SelectionResult, TreeEntry

ProgressCallback = Callable[[int, int, str], None]

_FAILURE_PREVIEW = 5


class RawSource(Protocol):
    """Anything able to return a raw file body for a branch."""

    def fetch_raw(self, owner: str, repo: str, branch: str, path: str) -> str:
        ...


def relative_target(entry_path: str, effective_path: str) -> str:
    """Return ``entry_path`` relative to the selected folder."""
    if not effective_path:
        return entry_path
    if entry_path == effective_path:
        return posixpath.basename(entry_path)
    return entry_path[len(effective_path) + 1:]


def resolve_inside(root: Path, relative: str) -> Path:
    """Resolve ``relative`` under ``root``; raise PathTraversal when it escapes."""
    base = root.resolve()
    target = (base / relative).resolve()
    if target == base or not target.is_relative_to(base):
        raise PathTraversal(f"Invalid path detected: {relative} resolves outside {base}")
    return target


class BatchDownloader:
    """Downloads every selected file one at a time."""

    def __init__(self, client: RawSource) -> None:
        self.client = client
        self.logger = get_logger("download")

    def download(
        self,
        source: RepositorySource,
        branch: str,
        selection: SelectionResult,
        local_root: Path,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DownloadOutcome:
        ensure_directory(local_root)
        # Validate every destination before the first request so a crafted
        # path never leaves partial output behind.
        plan = self._plan(selection, local_root)
        total = len(plan)
        succeeded = 0
        failed: List[str] = []

        for entry, relative, target in plan:
            try:
                content = self.client.fetch_raw(source.owner, source.repo, branch, entry.path)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8", newline="")
            except OSError as exc:
                failed.append(relative)
                self.logger.debug("Failed to write %s: %s", relative, describe_os_error(exc, "writing", target))
            except DocIndexError as exc:
                failed.append(relative)
                self.logger.debug("Failed to download %s: %s", relative, exc)
            else:
                succeeded += 1
            if on_progress is not None:
                on_progress(succeeded, total, relative)

        if succeeded == 0:
            raise DownloadFailed(self._failure_message(source, selection), failed)

        if failed:
            preview = "\n".join(f"  - {path}" for path in failed[:_FAILURE_PREVIEW])
            if len(failed) > _FAILURE_PREVIEW:
                preview += f"\n  ... and {len(failed) - _FAILURE_PREVIEW} more"
            self.logger.warning("%d file(s) failed to download:\n%s", len(failed), preview)

        return DownloadOutcome(
            total_selected=total,
            succeeded=succeeded,
            failed=tuple(failed),
            local_root=local_root,
        )

    @staticmethod
    def _plan(selection: SelectionResult, local_root: Path) -> List[Tuple[TreeEntry, str, Path]]:
        plan: List[Tuple[TreeEntry, str, Path]] = []
        for entry in selection.entries:
            relative = relative_target(entry.path, selection.effective_path)
            plan.append((entry, relative, resolve_inside(local_root, relative)))
        return plan

    @staticmethod
    def _failure_message(source: RepositorySource, selection: SelectionResult) -> str:
        message = f"Failed to download any files from {source.slug}\n\n"
        if selection.effective_path and not selection.auto_detected:
            return message + (
                "Possible causes:\n"
                f'  - The path "{selection.effective_path}" may not hold downloadable documentation;'
                " try a different --path\n"
                "  - Network problems or rate limiting; check your connection and try again"
            )
        return message + "Please check your internet connection and try again."


__all__ = ["BatchDownloader", "ProgressCallback", "relative_target", "resolve_inside"]
