"""
Command Line Interface for Bug Tracker.
"""

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import get_settings
from ..db.base import drop_database, get_session_local, init_database
from ..db.services import BugService
from ..policy import validate_for_create
from ..schemas.bug import BugStatus

app = typer.Typer(help="Bug Tracker - track bug reports from the command line")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    dev: bool = typer.Option(False, help="Run in development mode with reload"),
):
    """Start the Bug Tracker API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    rprint(Panel.fit("🐞 Starting Bug Tracker", style="bold blue"))
    console.print(f"🚀 Bug Tracker is running on http://{host}:{port}")

    uvicorn.run("bug_tracker.main:app", host=host, port=port, reload=dev)


@app.command("init-db")
def init_db():
    """Create the database tables."""
    init_database()
    console.print("✅ Database initialized")


@app.command("drop-db")
def drop_db(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt"),
):
    """Drop all database tables."""
    if not yes:
        typer.confirm("This deletes every bug report. Continue?", abort=True)
    drop_database()
    console.print("🗑️ Database tables dropped")


@app.command("list")
def list_bugs(
    status: Optional[BugStatus] = typer.Option(None, help="Only show bugs in this status"),
    limit: int = typer.Option(50, help="Maximum number of bugs to show"),
):
    """List bug reports, newest first."""
    session_local = get_session_local()
    db = session_local()
    try:
        service = BugService(db)
        bugs = service.list(status=status.value if status else None, limit=limit)
        rows = [bug.to_dict() for bug in bugs]
        total = service.count()
    finally:
        db.close()

    if not rows:
        console.print("No bugs found")
        return

    table = Table(title="Bug Reports", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Status", style="green")
    table.add_column("Priority")
    table.add_column("Reported By")

    priority_emoji = {"low": "⚪", "medium": "🟡", "high": "🟠", "critical": "🔴"}

    for row in rows:
        table.add_row(
            row["id"],
            row["title"],
            row["status"],
            f"{priority_emoji.get(row['priority'], '❓')} {row['priority']}",
            row["reportedBy"],
        )

    table.caption = f"{len(rows)} of {total} bugs"
    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="JSON file holding a bug submission"),
):
    """Check a bug submission against the creation rules."""
    try:
        submission = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"❌ Could not read {file}: {e}")
        raise typer.Exit(code=2)

    result = validate_for_create(submission)

    if result.rejected:
        console.print("❌ Submission rejected")
        for violation in result.violations:
            console.print(f"  • {violation.message} ({violation.code.value})")
        raise typer.Exit(code=1)

    console.print("✅ Submission accepted")
    console.print_json(data=result.accepted)


if __name__ == "__main__":
    app()
