"""Data models for scanned files and duplicate pairs."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class FileDescriptor:
    """A file found during discovery."""

    path: str
    size: int


@dataclass(frozen=True)
class ExactMatch:
    """Two files with byte-identical content."""

    original: str
    duplicate: str


@dataclass(frozen=True)
class SimilarMatch:
    """Two files whose text overlaps above the similarity threshold.

    ``file_a`` is always the file that was indexed first.
    """

    file_a: str
    file_b: str
    similarity: float


@dataclass(frozen=True)
class SkippedFile:
    """A file or directory left out because of an I/O error."""

    path: str
    reason: str


class ScanState(str, Enum):
    """Lifecycle of a scan."""

    IDLE = "idle"
    DISCOVERING = "discovering"
    FINGERPRINTING = "fingerprinting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class DuplicateReport:
    """Everything a scan found, appended to as files are processed."""

    root: str
    similarity_threshold: float
    size_threshold: float
    exact: list[ExactMatch] = field(default_factory=list)
    similar: list[SimilarMatch] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    total_files: int = 0
    processed_files: int = 0
    bytes_processed: int = 0
    partial: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def skipped_count(self) -> int:
        """Number of files excluded by I/O errors."""
        return len(self.skipped)

    @property
    def pair_count(self) -> int:
        """Total number of reported pairs."""
        return len(self.exact) + len(self.similar)

    @property
    def is_empty(self) -> bool:
        """True if no duplicates of either kind were found."""
        return self.pair_count == 0

    def pairs(self) -> set[frozenset[str]]:
        """All reported pairs as unordered path sets."""
        found = {frozenset((m.original, m.duplicate)) for m in self.exact}
        found.update(frozenset((m.file_a, m.file_b)) for m in self.similar)
        return found
