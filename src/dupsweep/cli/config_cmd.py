"""Configuration inspection commands."""

import typer

from ..config.settings import get_settings
from .formatters import console, create_table

config_app = typer.Typer(help="Inspect configuration settings")


@config_app.command()
def show() -> None:
    """Show the effective configuration.

    Values come from DUPSWEEP_* environment variables or a .env file.
    """
    settings = get_settings()

    table = create_table(title="Configuration")
    table.add_column("Setting", style="cyan", width=22)
    table.add_column("Value", style="white")

    table.add_row("Similarity threshold", str(settings.similarity_threshold))
    table.add_row("Size threshold", str(settings.size_threshold))
    table.add_row("Hash algorithm", settings.hash_algorithm)
    table.add_row("Report directory", str(settings.report_dir))
    table.add_row("Report format", settings.report_format)
    table.add_row("Log level", settings.log_level)
    table.add_row("Log file", str(settings.log_file) if settings.log_file else "None")

    console.print(table)
