"""Pipeline orchestration for the add/list/remove flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import DocIndexConfig, load_config
from .document import BlockMerger, HostDocument
from .download import BatchDownloader, ManifestDownloader, ProgressCallback
from .github import GitHubClient, TreeFetcher
from .gitignore import add_to_gitignore
from .indexer import Indexer
from .logging import get_logger
from .models import DownloadOutcome, ManifestSource, RepositorySource
from .selection import PathSelector
from .sources import default_source_name, resolve_source


@dataclass
class AddOutcome:
    """Result of downloading, indexing and merging one source."""

    source_name: str
    docs_path: Path
    output_path: Path
    download: DownloadOutcome
    branch: Optional[str]
    detected_path: Optional[str]
    file_count: int
    directory_count: int
    created: bool
    updated: bool
    gitignore_updated: bool


class Orchestrator:
    """Coordinates resolver, fetcher, selector, downloaders, indexer and merger."""

    def __init__(
        self,
        project_dir: Path | str | None = None,
        *,
        config: DocIndexConfig | None = None,
        client: GitHubClient | None = None,
        manifest_downloader: ManifestDownloader | None = None,
        selector: PathSelector | None = None,
        indexer: Indexer | None = None,
        merger: BlockMerger | None = None,
        token: str | None = None,
    ) -> None:
        self.project_dir = Path(project_dir or Path.cwd()).expanduser().resolve()
        self.config = config or load_config(self.project_dir)
        self.client = client or GitHubClient(
            token=self.config.resolve_token(token),
            api_url=self.config.github.api_url,
            raw_url=self.config.github.raw_url,
            tree_timeout=self.config.timeouts.tree,
            file_timeout=self.config.timeouts.file,
        )
        self.manifest_downloader = manifest_downloader or ManifestDownloader(
            timeout=self.config.timeouts.manifest
        )
        self.selector = selector or PathSelector()
        self.indexer = indexer or Indexer()
        self.merger = merger or BlockMerger()
        self.logger = get_logger("orchestrator")

    def run_add(
        self,
        source: str,
        *,
        output: str | None = None,
        docs_dir: str | None = None,
        path: str = "",
        source_name: str | None = None,
        branch: str | None = None,
        update_gitignore: bool | None = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AddOutcome:
        """Download a source, index it and merge the block into the output file."""
        locator = resolve_source(source)
        name = self.merger.validate_identifier(source_name or default_source_name(locator))
        docs_dir = docs_dir or self.config.docs_dir
        docs_path = self.project_dir / docs_dir / name
        output_path = self._output_path(output)

        resolved_branch: Optional[str] = None
        detected_path: Optional[str] = None
        if isinstance(locator, ManifestSource):
            self.logger.info("Fetching manifest %s", locator.url)
            download = self.manifest_downloader.download(locator, docs_path, on_progress)
        else:
            download, resolved_branch, detected_path = self._download_repository(
                locator, path, branch, docs_path, on_progress
            )

        gitignore_updated = False
        if self.config.gitignore if update_gitignore is None else update_gitignore:
            gitignore_updated = add_to_gitignore(docs_dir, self.project_dir)

        index = self.indexer.build(docs_path)
        host = HostDocument(output_path, merger=self.merger)
        written = host.write_index(name, docs_path, index.render(), project_dir=self.project_dir)
        self.logger.info(
            "Indexed %d files in %d directories into %s",
            index.file_count,
            index.directory_count,
            output_path,
        )

        return AddOutcome(
            source_name=name,
            docs_path=docs_path,
            output_path=output_path,
            download=download,
            branch=resolved_branch,
            detected_path=detected_path,
            file_count=index.file_count,
            directory_count=index.directory_count,
            created=written.created,
            updated=written.updated,
            gitignore_updated=gitignore_updated,
        )

    def run_list(self, *, output: str | None = None) -> List[str]:
        """Return the source identifiers present in the output file."""
        return HostDocument(self._output_path(output), merger=self.merger).list_sources()

    def run_remove(self, source_name: str, *, output: str | None = None) -> bool:
        """Remove a source block; downloaded files are left in place."""
        removed = HostDocument(self._output_path(output), merger=self.merger).remove_source(
            source_name
        )
        if removed:
            self.logger.info("Removed %s from %s", source_name, self._output_path(output))
        return removed

    def _download_repository(
        self,
        locator: RepositorySource,
        path: str,
        branch: str | None,
        docs_path: Path,
        on_progress: Optional[ProgressCallback],
    ) -> tuple[DownloadOutcome, str, Optional[str]]:
        preferred = branch or locator.branch
        self.logger.info("Fetching tree for %s", locator.slug)
        tree = TreeFetcher(self.client).fetch(locator.owner, locator.repo, preferred)
        selection = self.selector.select(tree.entries, path, repository=locator.slug)
        detected = selection.effective_path if selection.auto_detected else None
        if detected:
            self.logger.info("Auto-detected documentation folder: %s", detected)
        download = BatchDownloader(self.client).download(
            locator, tree.branch, selection, docs_path, on_progress
        )
        return download, tree.branch, detected

    def _output_path(self, output: str | None) -> Path:
        return self.project_dir / (output or self.config.output)


__all__ = ["AddOutcome", "Orchestrator"]
