"""Documentation download paths."""

from .batch import BatchDownloader, ProgressCallback, relative_target
from .manifest import ManifestDownloader, manifest_filename, render_manifest

__all__ = [
    "BatchDownloader",
    "ManifestDownloader",
    "ProgressCallback",
    "manifest_filename",
    "relative_target",
    "render_manifest",
]
