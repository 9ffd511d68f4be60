"""Single-file download for llms.txt manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse

from ..errors import AuthFailed, EmptyManifest, ResourceNotFound
from ..fsutil import ensure_directory, write_text_atomic
from ..http import fetch_text
from ..logging import get_logger
from ..models import DownloadOutcome, ManifestSource
from .batch import ProgressCallback

TextFetcher = Callable[[str, float], str]


def manifest_filename(url: str) -> str:
    return "llms.txt" if "llms.txt" in url.lower() else "llm.txt"


def render_manifest(url: str, content: str) -> str:
    """Prefix the manifest with its source, adding a heading when it has none."""
    header = f"<!-- Source: {url} -->\n\n"
    if content.strip().startswith("#"):
        return header + content
    return f"{header}# LLMs.txt\n\n{content}"


def _default_fetcher(url: str, timeout: float) -> str:
    return fetch_text(url, timeout=timeout, headers={"Accept": "text/plain, text/markdown, */*"})


class ManifestDownloader:
    """Fetches one manifest file into the docs directory."""

    def __init__(self, fetcher: Optional[TextFetcher] = None, *, timeout: float = 30.0) -> None:
        self._fetcher = fetcher or _default_fetcher
        self.timeout = timeout
        self.logger = get_logger("manifest")

    def download(
        self,
        source: ManifestSource,
        local_root: Path,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DownloadOutcome:
        url = source.url
        ensure_directory(local_root)
        if on_progress is not None:
            on_progress(0, 1, Path(urlparse(url).path).name or url)

        try:
            content = self._fetcher(url, self.timeout)
        except ResourceNotFound as exc:
            raise ResourceNotFound(
                f"llms.txt not found at {url}\n\nMake sure the URL is correct and the file exists."
            ) from exc
        except AuthFailed as exc:
            raise AuthFailed(f"Access denied to {url}") from exc

        if not content or not content.strip():
            raise EmptyManifest(f"Empty or invalid llms.txt file at {url}")

        filename = manifest_filename(url)
        write_text_atomic(local_root / filename, render_manifest(url, content))
        self.logger.debug("Saved %s (%d characters) to %s", filename, len(content), local_root)
        if on_progress is not None:
            on_progress(1, 1, filename)

        return DownloadOutcome(total_selected=1, succeeded=1, failed=(), local_root=local_root)


__all__ = ["ManifestDownloader", "manifest_filename", "render_manifest"]
