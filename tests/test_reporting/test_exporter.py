"""Tests for report export."""

import csv
import json
from datetime import datetime
from pathlib import Path

import pytest

from dupsweep.common.exceptions import ReportError
from dupsweep.detector.models import DuplicateReport, SkippedFile
from dupsweep.reporting.exporter import ReportExporter, report_path


def test_report_path_is_timestamped(tmp_path: Path) -> None:
    """Test report names embed the scan time."""
    path = report_path(tmp_path, "txt", datetime(2024, 1, 2, 3, 4, 5))

    assert path == tmp_path / "duplicate_report_20240102_030405.txt"


def test_export_text(sample_report: DuplicateReport, tmp_path: Path) -> None:
    """Test the text report lists both kinds of pairs."""
    output = tmp_path / "out" / "report.txt"

    ReportExporter().export_text(sample_report, output)
    text = output.read_text(encoding="utf-8")

    assert "Directory: /data" in text
    assert "Similarity threshold: 0.9" in text
    assert "/data/a.txt\nand\n/data/b.txt\nhave identical content" in text
    assert "Similarity: 95.00%" in text
    assert "-" * 80 in text
    assert "incomplete" not in text


def test_export_text_empty_and_partial(tmp_path: Path) -> None:
    """Test placeholders for empty sections and the partial notice."""
    report = DuplicateReport(
        root="/data", similarity_threshold=0.8, size_threshold=0.1, partial=True
    )
    report.skipped.append(SkippedFile(path="/data/secret", reason="Permission denied"))
    output = tmp_path / "report.txt"

    ReportExporter().export_text(report, output)
    text = output.read_text(encoding="utf-8")

    assert "No exact duplicates found" in text
    assert "No similar files found" in text
    assert "may be incomplete" in text
    assert "Skipped files (1):" in text
    assert "/data/secret: Permission denied" in text


def test_export_json(sample_report: DuplicateReport, tmp_path: Path) -> None:
    """Test the JSON report round-trips the pairs."""
    output = tmp_path / "report.json"

    ReportExporter().export_json(sample_report, output)
    data = json.loads(output.read_text(encoding="utf-8"))

    assert data["exact"] == [{"original": "/data/a.txt", "duplicate": "/data/b.txt"}]
    assert data["similar"][0]["similarity"] == pytest.approx(0.95)
    assert data["partial"] is False
    assert data["bytes_processed"] == 4096


def test_export_csv(sample_report: DuplicateReport, tmp_path: Path) -> None:
    """Test one CSV row per pair."""
    output = tmp_path / "report.csv"

    ReportExporter().export_csv(sample_report, output)
    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert [r["kind"] for r in rows] == ["exact", "similar"]
    assert rows[1]["file_a"] == "/data/e.txt"
    assert float(rows[1]["similarity"]) == pytest.approx(0.95)


@pytest.mark.parametrize("fmt", ["txt", "json", "CSV"])
def test_export_dispatch(sample_report: DuplicateReport, tmp_path: Path, fmt: str) -> None:
    """Test export() creates the directory and picks the writer."""
    sample_report.finished_at = datetime(2024, 5, 6, 7, 8, 9)

    path = ReportExporter().export(sample_report, tmp_path / "log", fmt)

    assert path == tmp_path / "log" / f"duplicate_report_20240506_070809.{fmt.lower()}"
    assert path.exists()


def test_export_unknown_format(sample_report: DuplicateReport, tmp_path: Path) -> None:
    """Test unsupported formats are rejected."""
    with pytest.raises(ReportError):
        ReportExporter().export(sample_report, tmp_path, "xml")


def test_export_unwritable(sample_report: DuplicateReport, tmp_path: Path) -> None:
    """Test write failures surface as ReportError."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(ReportError):
        ReportExporter().export(sample_report, blocker / "log")
