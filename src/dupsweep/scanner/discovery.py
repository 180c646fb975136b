"""Local directory tree discovery."""

import os
from pathlib import Path
from typing import Iterator, Optional, Union

from ..common.cancel import CancelToken
from ..common.constants import IGNORED_DIRS, IGNORED_EXTENSIONS, IGNORED_FILES
from ..common.exceptions import ScanError
from ..common.logging import get_logger
from ..detector.models import FileDescriptor, SkippedFile

logger = get_logger(__name__)


def is_ignored(name: str) -> bool:
    """Check whether an entry name matches any exclusion rule.

    Args:
        name: Basename of a file or directory

    Returns:
        True if the entry should not be scanned
    """
    if name in IGNORED_DIRS or name in IGNORED_FILES:
        return True
    return os.path.splitext(name)[1].lower() in IGNORED_EXTENSIONS


class FileDiscovery:
    """Walks a directory tree and collects candidate files."""

    def __init__(
        self,
        root: Union[str, Path],
        cancel_token: Optional[CancelToken] = None,
    ) -> None:
        """Initialize discovery.

        Args:
            root: Directory to scan
            cancel_token: Stops the walk early when cancelled
        """
        self.root = Path(root)
        self.cancel_token = cancel_token
        self.skipped: list[SkippedFile] = []

    def validate_root(self) -> None:
        """Fail before scanning if the root cannot be walked.

        Raises:
            ScanError: If root is missing, not a directory, or unreadable
        """
        if not self.root.exists():
            raise ScanError(f"Directory does not exist: {self.root}")
        if not self.root.is_dir():
            raise ScanError(f"Not a directory: {self.root}")
        if not os.access(self.root, os.R_OK | os.X_OK):
            raise ScanError(f"Directory is not readable: {self.root}")

    def walk(self) -> Iterator[FileDescriptor]:
        """Yield files depth-first in sorted name order.

        Uses an explicit stack of directory iterators so tree depth is not
        bounded by the interpreter's recursion limit. Stops early, leaving
        the remaining tree unvisited, once the cancel token is set.

        Yields:
            FileDescriptor for each non-excluded regular file

        Raises:
            ScanError: If the root directory cannot be walked
        """
        self.validate_root()
        self.skipped = []

        try:
            root_entries = self._list(self.root)
        except OSError as e:
            raise ScanError(f"Cannot list directory {self.root}: {e}") from e

        stack = [root_entries]

        while stack:
            if self.cancel_token is not None and self.cancel_token.cancelled:
                logger.info(f"Discovery cancelled under {self.root}")
                return

            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            if is_ignored(entry.name):
                continue

            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(self._list(Path(entry.path)))
                    continue

                if not entry.is_file():
                    logger.debug(f"Skipping non-regular file: {entry.path}")
                    continue

                size = entry.stat().st_size
            except OSError as e:
                self._skip(entry.path, e)
                continue

            yield FileDescriptor(path=entry.path, size=size)

    def discover(self) -> list[FileDescriptor]:
        """Collect all files eagerly.

        Returns:
            Files in traversal order
        """
        files = list(self.walk())
        logger.info(
            f"Discovered {len(files)} files under {self.root} "
            f"({len(self.skipped)} skipped)"
        )
        return files

    @staticmethod
    def _list(directory: Path) -> Iterator[os.DirEntry]:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        return iter(entries)

    def _skip(self, path: str, error: OSError) -> None:
        logger.warning(f"Skipping {path}: {error}")
        self.skipped.append(SkippedFile(path=path, reason=str(error)))
