"""Scan driver tying discovery, fingerprinting and matching together."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..common.cancel import CancelToken
from ..common.constants import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SIZE_THRESHOLD,
)
from ..common.exceptions import ScanError
from ..common.logging import get_logger
from ..scanner.discovery import FileDiscovery
from .fingerprint import FingerprintIndex, read_content
from .matcher import NearDuplicateMatcher
from .models import DuplicateReport, FileDescriptor, ScanState, SkippedFile

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


class ScanDriver:
    """Runs one scan: discover, then fingerprint and match file by file.

    Files are processed strictly one at a time in traversal order, which
    decides the original of each exact match and the order of each
    similar pair.
    """

    def __init__(
        self,
        root: Union[str, Path],
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        size_threshold: float = DEFAULT_SIZE_THRESHOLD,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> None:
        """Initialize scan driver.

        Args:
            root: Directory to scan
            similarity_threshold: Minimum score for a near-duplicate pair
            size_threshold: Size-ratio gate for near-duplicate comparison
            hash_algorithm: Cryptographic digest for exact matching
            progress_callback: Called with (processed, total) after each file
            cancel_token: Checked between directories and before each file

        Raises:
            ConfigError: If a threshold or the hash algorithm is invalid
        """
        self.root = Path(root)
        self.cancel_token = cancel_token or CancelToken()
        self.discovery = FileDiscovery(self.root, self.cancel_token)
        self.index = FingerprintIndex(hash_algorithm)
        self.matcher = NearDuplicateMatcher(similarity_threshold, size_threshold)
        self.progress_callback = progress_callback
        self.state = ScanState.IDLE
        self.report = DuplicateReport(
            root=str(self.root.resolve()),
            similarity_threshold=similarity_threshold,
            size_threshold=size_threshold,
        )

    def run(self) -> DuplicateReport:
        """Run the scan to completion or cancellation.

        Returns:
            The accumulated report, marked partial if cancelled

        Raises:
            ScanError: If the root cannot be scanned or the driver already ran
        """
        if self.state is not ScanState.IDLE:
            raise ScanError(f"Scan already {self.state.value}")

        self.state = ScanState.DISCOVERING
        logger.info(f"Discovering files under {self.root}")
        try:
            files = self.discovery.discover()
        except KeyboardInterrupt:
            logger.warning("Interrupted during discovery")
            self.cancel_token.cancel()
            files = []
        self.report.skipped.extend(self.discovery.skipped)
        self.report.total_files = len(files)

        if self.cancel_token.cancelled:
            return self._finish(ScanState.CANCELLED)

        self.state = ScanState.FINGERPRINTING
        logger.info(f"Fingerprinting and matching {len(files)} files")

        for file in files:
            if self.cancel_token.cancelled:
                return self._finish(ScanState.CANCELLED)

            try:
                self.process(file)
            except KeyboardInterrupt:
                logger.warning(f"Interrupted while processing {file.path}")
                self.cancel_token.cancel()
                return self._finish(ScanState.CANCELLED)

            self.report.processed_files += 1
            if self.progress_callback:
                self.progress_callback(self.report.processed_files, len(files))

        return self._finish(ScanState.COMPLETED)

    def process(self, file: FileDescriptor) -> None:
        """Read, hash and match a single file, appending any results."""
        try:
            content = read_content(file)
        except OSError as e:
            logger.warning(f"Skipping unreadable file {file.path}: {e}")
            self.report.skipped.append(SkippedFile(path=file.path, reason=str(e)))
            return

        self.report.bytes_processed += len(content)

        exact = self.index.ingest_content(file, content)
        if exact is not None:
            self.report.exact.append(exact)
            return

        # The new file is already in the index; compare only against earlier entries
        profile = self.matcher.profile(content)
        earlier = self.index.entries()[:-1]
        self.report.similar.extend(self.matcher.match(file, profile, earlier))
        self.matcher.register(file, profile)

    def _finish(self, state: ScanState) -> DuplicateReport:
        self.state = state
        self.report.partial = state is ScanState.CANCELLED
        self.report.finished_at = datetime.now()

        logger.info(
            f"Scan {state.value}: {self.report.processed_files}/"
            f"{self.report.total_files} files, {len(self.report.exact)} exact, "
            f"{len(self.report.similar)} similar, "
            f"{self.report.skipped_count} skipped, "
            f"{self.matcher.comparisons} comparisons"
        )
        return self.report


def find_duplicates(
    root: Union[str, Path],
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    size_threshold: float = DEFAULT_SIZE_THRESHOLD,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancelToken] = None,
) -> DuplicateReport:
    """Scan a directory and return its duplicate report.

    Args:
        root: Directory to scan
        similarity_threshold: Minimum score for a near-duplicate pair
        size_threshold: Size-ratio gate for near-duplicate comparison
        hash_algorithm: Cryptographic digest for exact matching
        progress_callback: Called with (processed, total) after each file
        cancel_token: Stops the scan early when cancelled

    Returns:
        Duplicate report, marked partial if the scan was cancelled
    """
    driver = ScanDriver(
        root,
        similarity_threshold=similarity_threshold,
        size_threshold=size_threshold,
        hash_algorithm=hash_algorithm,
        progress_callback=progress_callback,
        cancel_token=cancel_token,
    )
    return driver.run()
