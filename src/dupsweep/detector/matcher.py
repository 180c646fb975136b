"""Size-gated near-duplicate matching."""

from typing import Iterable, Optional

from ..common.constants import DEFAULT_SIMILARITY_THRESHOLD, DEFAULT_SIZE_THRESHOLD
from ..common.exceptions import ConfigError
from ..common.logging import get_logger
from .models import FileDescriptor, SimilarMatch
from .similarity import (
    BigramProfile,
    bigrams,
    decode_text,
    profile_similarity,
    within_size_gate,
)

logger = get_logger(__name__)


def _check_ratio(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be between 0 and 1, got {value}")
    return value


class NearDuplicateMatcher:
    """Compares each new file against previously indexed files.

    Only bigram profiles of indexed files are kept in memory. Every new file
    is compared against every indexed file within the size gate, so a scan
    is quadratic in the number of distinct files.
    """

    def __init__(
        self,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        size_threshold: float = DEFAULT_SIZE_THRESHOLD,
    ) -> None:
        """Initialize matcher.

        Args:
            similarity_threshold: Minimum score for a pair to be reported
            size_threshold: Maximum relative size difference to compare a pair

        Raises:
            ConfigError: If a threshold is outside [0, 1]
        """
        self.similarity_threshold = _check_ratio(
            "similarity_threshold", similarity_threshold
        )
        self.size_threshold = _check_ratio("size_threshold", size_threshold)
        self._profiles: dict[str, Optional[BigramProfile]] = {}
        self.comparisons = 0

    @staticmethod
    def profile(content: bytes) -> Optional[BigramProfile]:
        """Build the bigram profile of some content, None if it is not text."""
        text = decode_text(content)
        if text is None:
            return None
        return bigrams(text)

    def register(
        self, file: FileDescriptor, profile: Optional[BigramProfile]
    ) -> None:
        """Remember an indexed file's profile for later comparisons."""
        self._profiles[file.path] = profile

    def match(
        self,
        file: FileDescriptor,
        profile: Optional[BigramProfile],
        candidates: Iterable[FileDescriptor],
    ) -> list[SimilarMatch]:
        """Find all earlier files similar to a new file.

        Args:
            file: Newly read file that was not an exact duplicate
            profile: Bigram profile of the new file (None if not text)
            candidates: Indexed files, in insertion order

        Returns:
            One SimilarMatch per candidate scoring in [threshold, 1)
        """
        if profile is None:
            logger.debug(f"Not comparing {file.path}: content is not UTF-8 text")
            return []

        matches = []
        for candidate in candidates:
            if candidate.path == file.path:
                continue
            if not within_size_gate(file.size, candidate.size, self.size_threshold):
                continue

            other = self._profiles.get(candidate.path)
            if other is None:
                continue

            self.comparisons += 1
            score = profile_similarity(other, profile)
            if self.similarity_threshold <= score < 1.0:
                logger.debug(
                    f"Similar ({score:.4f}): {candidate.path} ~ {file.path}"
                )
                matches.append(
                    SimilarMatch(
                        file_a=candidate.path,
                        file_b=file.path,
                        similarity=score,
                    )
                )

        return matches
