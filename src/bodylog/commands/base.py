"""Shared CLI utilities."""

import asyncio
from datetime import date
from functools import wraps
from pathlib import Path

import click

from ..db import RecordStore, engine, get_db_path
from ..services import ActionResult


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def user_option(f):
    """Add the --user option (falls back to $BODYLOG_USER)."""
    return click.option(
        "--user",
        "user_id",
        envvar="BODYLOG_USER",
        help="User id to act as (default: $BODYLOG_USER)",
    )(f)


def date_option(f):
    """Add the --date option, defaulting to this machine's local date."""
    return click.option(
        "--date",
        "client_date",
        default=lambda: date.today().isoformat(),
        show_default="today",
        help="Calendar date in YYYY-MM-DD format",
    )(f)


def get_data_dir() -> Path:
    """Get the data directory path."""
    return engine.DATA_DIR


def get_store() -> RecordStore:
    """Get a record store for the default database."""
    return RecordStore(get_db_path())


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'bodylog init' first."
        )
        ctx.exit(1)


def exit_on_failure(ctx: click.Context, result: ActionResult) -> None:
    """Print a failed action result and exit with status 1."""
    if result.ok:
        return
    echo_error(result.error or "Unknown error")
    for field, messages in (result.field_errors or {}).items():
        for message in messages:
            click.echo(f"  {field}: {message}")
    if result.error_code == "unauthorized":
        click.echo("  Pass --user or set BODYLOG_USER.")
    ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)))
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(lines)
