"""Shared pytest fixtures."""

from pathlib import Path
from typing import Callable, Iterator, Union

import pytest

from dupsweep.config.settings import reset_settings
from dupsweep.detector.models import (
    DuplicateReport,
    ExactMatch,
    FileDescriptor,
    SimilarMatch,
)

# 41 characters with no repeated bigram; changing one interior character
# to a space keeps the size and gives a coefficient of exactly 0.95
BASE_TEXT = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNO"
NEAR_TEXT = BASE_TEXT[:20] + " " + BASE_TEXT[21:]

TreeFactory = Callable[[dict[str, Union[str, bytes]]], Path]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Isolate tests from DUPSWEEP_* variables and any .env file."""
    for name in (
        "SIMILARITY_THRESHOLD",
        "SIZE_THRESHOLD",
        "HASH_ALGORITHM",
        "REPORT_DIR",
        "REPORT_FORMAT",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(f"DUPSWEEP_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Create files under a fresh root from a {relative_path: content} mapping."""

    def factory(files: dict[str, Union[str, bytes]]) -> Path:
        root = tmp_path / "tree"
        root.mkdir(exist_ok=True)
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_text(content, encoding="utf-8")
            else:
                path.write_bytes(content)
        return root

    return factory


@pytest.fixture
def sample_file() -> FileDescriptor:
    """Create a sample file descriptor."""
    return FileDescriptor(path="/folder/test.txt", size=1024)


@pytest.fixture
def sample_report() -> DuplicateReport:
    """Create a finished report with one pair of each kind."""
    report = DuplicateReport(
        root="/data",
        similarity_threshold=0.9,
        size_threshold=0.1,
        total_files=4,
        processed_files=4,
        bytes_processed=4096,
    )
    report.exact.append(ExactMatch(original="/data/a.txt", duplicate="/data/b.txt"))
    report.similar.append(
        SimilarMatch(file_a="/data/e.txt", file_b="/data/f.txt", similarity=0.95)
    )
    return report


@pytest.fixture
def near_texts() -> tuple[str, str]:
    """Two same-size texts whose bigram coefficient is 0.95."""
    return BASE_TEXT, NEAR_TEXT
