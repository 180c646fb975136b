"""Scan command."""

import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from humanize import naturalsize

from ..common.cancel import CancelToken
from ..common.constants import REPORT_FORMATS
from ..common.exceptions import ConfigError, DupSweepError, ReportError, ScanError
from ..common.logging import get_logger
from ..config.settings import get_settings
from ..detector.models import DuplicateReport
from ..detector.pipeline import ScanDriver
from ..reporting.exporter import ReportExporter
from .formatters import (
    create_progress,
    print_error,
    print_info,
    print_pair_table,
    print_panel,
    print_success,
    print_warning,
)

logger = get_logger(__name__)

EXIT_CANCELLED = 130
TABLE_LIMIT = 20


@contextmanager
def cancel_on_interrupt(token: CancelToken) -> Iterator[None]:
    """Turn Ctrl+C into a cancellation request for the running scan."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: Any) -> None:
        if token.cancelled:
            raise KeyboardInterrupt
        token.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def show_summary(report: DuplicateReport) -> None:
    """Print the summary panel and the tables of found pairs."""
    summary_text = f"""
Files processed: {report.processed_files:,}/{report.total_files:,}
Data scanned: {naturalsize(report.bytes_processed)}
Exact duplicates: {len(report.exact):,}
Similar files: {len(report.similar):,}
Skipped: {report.skipped_count:,}
"""
    style = "yellow" if report.partial else "green"
    title = "Scan Summary (partial)" if report.partial else "Scan Summary"
    print_panel(title, summary_text.strip(), style=style)

    hidden = 0
    if report.exact:
        hidden += print_pair_table(
            "Exact duplicates",
            ["Original", "Duplicate"],
            ((m.original, m.duplicate) for m in report.exact),
            TABLE_LIMIT,
        )

    if report.similar:
        hidden += print_pair_table(
            "Similar files",
            ["File A", "File B", "Similarity"],
            ((s.file_a, s.file_b, f"{s.similarity:.2%}") for s in report.similar),
            TABLE_LIMIT,
        )

    if hidden:
        print_info(f"{hidden} more pairs are listed in the report file")


def scan(
    directory: Path = typer.Argument(
        Path("."), help="Directory to scan"
    ),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", "-t", min=0.0, max=1.0,
        help="Similarity threshold for near-duplicates (default 0.9)",
    ),
    size_threshold: Optional[float] = typer.Option(
        None, "--size-threshold", min=0.0, max=1.0,
        help="Maximum relative size difference to compare two files (default 0.1)",
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the report file"
    ),
    format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Report format: txt, json or csv"
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Only print the summary, do not write a report file"
    ),
) -> None:
    """Scan a directory for exact and near-duplicate files."""
    token = CancelToken()
    report: Optional[DuplicateReport] = None

    try:
        settings = get_settings()
        report_format = (format or settings.report_format).lower()
        if not no_report and report_format not in REPORT_FORMATS:
            raise ReportError(
                f"Invalid format: {report_format}. Must be one of {', '.join(REPORT_FORMATS)}"
            )

        progress = create_progress()
        task = progress.add_task("[cyan]Discovering files...", total=None)

        def on_progress(processed: int, total: int) -> None:
            progress.update(
                task,
                description="[cyan]Checking files...",
                completed=processed,
                total=total,
            )

        driver = ScanDriver(
            directory,
            similarity_threshold=(
                threshold if threshold is not None else settings.similarity_threshold
            ),
            size_threshold=(
                size_threshold if size_threshold is not None else settings.size_threshold
            ),
            hash_algorithm=settings.hash_algorithm,
            progress_callback=on_progress,
            cancel_token=token,
        )

        print_info(f"Scanning {driver.report.root}")
        with cancel_on_interrupt(token), progress:
            report = driver.run()
            progress.update(
                task,
                description="[yellow]Scan cancelled" if report.partial
                else "[green]Scan complete!",
            )

        show_summary(report)

        if report.partial:
            print_warning("Scan was interrupted, results are incomplete")
        elif report.is_empty:
            print_success("No duplicates found!")

        if not no_report:
            exporter = ReportExporter()
            path = exporter.export(
                report,
                output_dir or settings.report_dir,
                report_format,
            )
            print_success(f"Report written to: {path}")

    except ScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(1)
    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
    except ReportError as e:
        print_error(f"Report export failed: {e}")
        raise typer.Exit(1)
    except DupSweepError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(1)

    if report is not None and report.partial:
        raise typer.Exit(EXIT_CANCELLED)
