"""Core data models shared across docindex components."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class RepositorySource:
    """A GitHub repository locator; an empty branch requests auto-detection."""

    owner: str
    repo: str
    branch: str = ""

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class ManifestSource:
    """An absolute URL pointing at an llms.txt style manifest."""

    url: str


SourceLocator = Union[RepositorySource, ManifestSource]


class EntryKind(str, Enum):
    """Kinds of entries in a remote repository tree."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class TreeEntry:
    """A single path in a repository tree."""

    path: str
    kind: EntryKind
    size: Optional[int] = None

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class TreeResult:
    """Tree entries for the branch that resolved."""

    entries: Tuple[TreeEntry, ...]
    branch: str
    truncated: bool = False


@dataclass(frozen=True)
class SelectionResult:
    """Markdown entries picked from a tree for download."""

    effective_path: str
    entries: Tuple[TreeEntry, ...]
    auto_detected: bool = False


@dataclass(frozen=True)
class DownloadOutcome:
    """Final tally of a download run."""

    total_selected: int
    succeeded: int
    failed: Tuple[str, ...]
    local_root: Path

    @property
    def partial(self) -> bool:
        return bool(self.failed) and self.succeeded > 0


@dataclass(frozen=True)
class DocumentBlock:
    """A marker-delimited region of a host document."""

    source_id: str
    start_marker: str
    end_marker: str
    body: str

    def render(self) -> str:
        return f"{self.start_marker}\n{self.body.strip()}\n{self.end_marker}"
