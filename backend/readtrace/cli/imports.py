"""ReadTrace CLI - Import commands."""
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from readtrace.services.import_service import (
    EntryStatus,
    ImportSource,
    build_import_job,
    parse_csv_text,
)
from readtrace.utils.progress import format_chapter_display

app = typer.Typer()
console = Console()

STATUS_STYLES = {
    EntryStatus.OK: "green",
    EntryStatus.DUPLICATE: "yellow",
    EntryStatus.ERROR: "red",
}


@app.command()
def preview(
    file: Path = typer.Argument(..., help="CSV export to inspect"),
):
    """Show how a CSV file would be imported, without saving anything."""
    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {file}: {e}[/red]")
        raise typer.Exit(1)

    raw_entries = parse_csv_text(text)
    if not raw_entries:
        console.print("[red]No rows found in CSV file[/red]")
        raise typer.Exit(1)

    job = build_import_job(0, ImportSource.CSV, raw_entries)

    table = Table(title=f"Import preview: {file.name}")
    table.add_column("#", style="dim")
    table.add_column("Title")
    table.add_column("Chapter")
    table.add_column("Platform", style="cyan")
    table.add_column("Status")
    table.add_column("Notes", style="dim")

    for i, entry in enumerate(job.entries, 1):
        style = STATUS_STYLES[entry.status]
        table.add_row(
            str(i),
            entry.title or "-",
            format_chapter_display(entry.chapter, None),
            entry.platform,
            f"[{style}]{entry.status.value}[/{style}]",
            "; ".join(entry.errors),
        )

    console.print(table)
    console.print(
        f"{job.total_items} rows: {job.valid_items} valid, "
        f"{job.error_items} errors, {job.skipped_items} duplicates"
    )
