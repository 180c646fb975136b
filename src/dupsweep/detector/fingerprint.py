"""Content fingerprint index for exact duplicate detection."""

import hashlib
from pathlib import Path
from typing import Iterator, Optional

from ..common.constants import CRYPTOGRAPHIC_HASHES, DEFAULT_HASH_ALGORITHM
from ..common.exceptions import ConfigError
from ..common.logging import get_logger
from .models import ExactMatch, FileDescriptor

logger = get_logger(__name__)


def read_content(file: FileDescriptor) -> bytes:
    """Read a file's full content.

    Raises:
        OSError: If the file cannot be read
    """
    return Path(file.path).read_bytes()


class FingerprintIndex:
    """Maps content digests to the first file seen with that content."""

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        """Initialize an empty index.

        Args:
            algorithm: Name of a cryptographic hashlib algorithm

        Raises:
            ConfigError: If the algorithm is not an accepted cryptographic hash
        """
        algorithm = algorithm.lower()
        if algorithm not in CRYPTOGRAPHIC_HASHES:
            raise ConfigError(
                f"Unsupported hash algorithm: {algorithm}. "
                f"Use one of: {', '.join(sorted(CRYPTOGRAPHIC_HASHES))}"
            )
        self.algorithm = algorithm
        self._entries: dict[str, FileDescriptor] = {}

    def digest(self, content: bytes) -> str:
        """Compute the hex digest of some content."""
        return hashlib.new(self.algorithm, content).hexdigest()

    def ingest(self, file: FileDescriptor) -> Optional[ExactMatch]:
        """Read, hash and index a file.

        Args:
            file: File to ingest

        Returns:
            ExactMatch if an earlier file has the same content, else None

        Raises:
            OSError: If the file cannot be read
        """
        return self.ingest_content(file, read_content(file))

    def ingest_content(
        self, file: FileDescriptor, content: bytes
    ) -> Optional[ExactMatch]:
        """Index already-read content.

        The first file seen with a digest stays the canonical original;
        later files with the same digest are reported and not stored.

        Args:
            file: File the content belongs to
            content: Full file content

        Returns:
            ExactMatch if the digest is already indexed, else None
        """
        digest = self.digest(content)
        original = self._entries.get(digest)

        if original is not None:
            logger.debug(f"Exact duplicate: {file.path} == {original.path}")
            return ExactMatch(original=original.path, duplicate=file.path)

        self._entries[digest] = file
        return None

    def get(self, digest: str) -> Optional[FileDescriptor]:
        """Look up the canonical file for a digest."""
        return self._entries.get(digest)

    def entries(self) -> list[FileDescriptor]:
        """Indexed files in insertion order."""
        return list(self._entries.values())

    def __contains__(self, digest: object) -> bool:
        return digest in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
