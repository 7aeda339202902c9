"""ReadTrace CLI - Main entry point."""
import typer
from rich.console import Console
from rich.table import Table

from readtrace.cli import imports, users

app = typer.Typer(
    name="readtrace",
    help="ReadTrace - Manga reading progress tracker",
    add_completion=True,
)

console = Console()

# Add subcommands
app.add_typer(imports.app, name="import", help="Library import commands")
app.add_typer(users.app, name="user", help="User management commands")


@app.command()
def version():
    """Show version information."""
    from readtrace import __version__
    console.print(f"ReadTrace v{__version__}")


@app.command()
def status():
    """Check system status."""
    from readtrace.config import settings

    table = Table(title="ReadTrace Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")

    # Check database
    try:
        from sqlalchemy import text
        from readtrace.database import engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        table.add_row("Database", "Connected")
    except Exception as e:
        table.add_row("Database", f"[red]Error: {e}[/red]")

    table.add_row("Default sites", ", ".join(settings.default_preferred_platforms))
    table.add_row("Upload limit", f"{settings.max_upload_bytes // (1024 * 1024)} MB")

    console.print(table)


if __name__ == "__main__":
    app()
