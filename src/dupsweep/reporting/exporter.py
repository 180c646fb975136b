"""Text, CSV and JSON report export."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..common.constants import REPORT_FORMATS, REPORT_PREFIX, REPORT_TIMESTAMP_FORMAT
from ..common.exceptions import ReportError
from ..common.logging import get_logger
from ..detector.models import DuplicateReport

logger = get_logger(__name__)

SEPARATOR = "-" * 80


def report_path(output_dir: Path, fmt: str = "txt", now: Optional[datetime] = None) -> Path:
    """Build a timestamped report file path.

    Args:
        output_dir: Directory receiving the report
        fmt: Report format, used as the file extension
        now: Timestamp to embed (defaults to the current time)

    Returns:
        Path like ``output_dir/duplicate_report_20240101_120000.txt``
    """
    stamp = (now or datetime.now()).strftime(REPORT_TIMESTAMP_FORMAT)
    return output_dir / f"{REPORT_PREFIX}_{stamp}.{fmt}"


class ReportExporter:
    """Writes duplicate reports to disk."""

    def export(self, report: DuplicateReport, output_dir: Path, fmt: str = "txt") -> Path:
        """Write a report in the given format to a new timestamped file.

        Args:
            report: Scan results
            output_dir: Directory receiving the report
            fmt: One of txt, json, csv

        Returns:
            Path of the written report

        Raises:
            ReportError: If the format is unknown or the file cannot be written
        """
        fmt = fmt.lower()
        if fmt not in REPORT_FORMATS:
            raise ReportError(
                f"Invalid format: {fmt}. Must be one of {', '.join(REPORT_FORMATS)}"
            )

        output_path = report_path(output_dir, fmt, report.finished_at)
        writer = {
            "txt": self.export_text,
            "json": self.export_json,
            "csv": self.export_csv,
        }[fmt]

        try:
            writer(report, output_path)
        except OSError as e:
            raise ReportError(f"Cannot write report to {output_path}: {e}") from e

        return output_path

    def export_text(self, report: DuplicateReport, output_path: Path) -> None:
        """Export a human-readable text report.

        Args:
            report: Scan results
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        checked_at = report.finished_at or report.started_at

        lines = [
            "Duplicate File Report",
            f"Checked at: {checked_at:%Y-%m-%d %H:%M:%S}",
            f"Directory: {report.root}",
            f"Similarity threshold: {report.similarity_threshold}",
            f"Files processed: {report.processed_files}/{report.total_files}",
        ]
        if report.partial:
            lines.append("Note: the scan was interrupted, this report may be incomplete")
        lines.append("")

        lines.append("Exact duplicates:")
        if not report.exact:
            lines.append("No exact duplicates found")
        for match in report.exact:
            lines.extend([
                "",
                match.original,
                "and",
                match.duplicate,
                "have identical content",
                SEPARATOR,
            ])

        lines.extend(["", "Similar files:"])
        if not report.similar:
            lines.append("No similar files found")
        for similar in report.similar:
            lines.extend([
                "",
                similar.file_a,
                "and",
                similar.file_b,
                f"Similarity: {similar.similarity * 100:.2f}%",
                SEPARATOR,
            ])

        if report.skipped:
            lines.extend(["", f"Skipped files ({report.skipped_count}):"])
            lines.extend(f"{s.path}: {s.reason}" for s in report.skipped)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

        logger.info(f"Exported text report: {output_path}")

    def export_csv(self, report: DuplicateReport, output_path: Path) -> None:
        """Export duplicate pairs to CSV.

        Args:
            report: Scan results
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)

            writer.writerow(["kind", "file_a", "file_b", "similarity"])

            for match in report.exact:
                writer.writerow(["exact", match.original, match.duplicate, 1.0])
            for similar in report.similar:
                writer.writerow([
                    "similar",
                    similar.file_a,
                    similar.file_b,
                    round(similar.similarity, 6),
                ])

        logger.info(f"Exported {report.pair_count} pairs to CSV: {output_path}")

    def export_json(self, report: DuplicateReport, output_path: Path) -> None:
        """Export the full report to JSON.

        Args:
            report: Scan results
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "root": report.root,
            "similarity_threshold": report.similarity_threshold,
            "size_threshold": report.size_threshold,
            "partial": report.partial,
            "started_at": report.started_at.isoformat(),
            "finished_at": report.finished_at.isoformat() if report.finished_at else None,
            "total_files": report.total_files,
            "processed_files": report.processed_files,
            "bytes_processed": report.bytes_processed,
            "exact": [
                {"original": m.original, "duplicate": m.duplicate}
                for m in report.exact
            ],
            "similar": [
                {"file_a": s.file_a, "file_b": s.file_b, "similarity": s.similarity}
                for s in report.similar
            ],
            "skipped": [
                {"path": s.path, "reason": s.reason}
                for s in report.skipped
            ],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {report.pair_count} pairs to JSON: {output_path}")
