"""ReadTrace CLI - User commands."""
import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer()
console = Console()


def get_db_session():
    """Get a database session."""
    from readtrace.database import SessionLocal
    return SessionLocal()


@app.command("create")
def create_user(
    email: str = typer.Argument(..., help="Email for the new account"),
    username: str = typer.Option(None, "--username", "-u", help="Optional username"),
    password: str = typer.Option(None, "--password", "-p", help="Password (will prompt if not provided)"),
):
    """Create a new user."""
    from readtrace.services.auth import AuthService, RegistrationError

    if not password:
        password = typer.prompt("Password", hide_input=True)
        password_confirm = typer.prompt("Confirm password", hide_input=True)
        if password != password_confirm:
            console.print("[red]Passwords do not match[/red]")
            raise typer.Exit(1)

    db = get_db_session()
    try:
        try:
            user = AuthService(db).register(email, password, username)
        except RegistrationError as e:
            for error in e.errors:
                console.print(f"[red]{error}[/red]")
            raise typer.Exit(1)

        console.print(f"[green]User '{user.email}' created successfully[/green]")
    finally:
        db.close()


@app.command("list")
def list_users():
    """List all users."""
    from readtrace.models.user import User

    db = get_db_session()
    try:
        users = db.query(User).order_by(User.email).all()

        table = Table(title="Users")
        table.add_column("ID", style="dim")
        table.add_column("Email")
        table.add_column("Username")
        table.add_column("Preferred sites", style="cyan")
        table.add_column("Created")

        for u in users:
            table.add_row(
                str(u.id),
                u.email,
                u.username or "",
                ", ".join(u.preferred_platforms or []),
                str(u.created_at.date()) if u.created_at else "",
            )

        console.print(table)
    finally:
        db.close()
