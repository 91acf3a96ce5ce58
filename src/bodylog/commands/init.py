"""Initialize database command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize the bodylog database.

    Creates the data directory and the SQLite schema. Safe to run again on
    an existing database.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing bodylog in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Set your default measurements:")
    click.echo("     bodylog profile set --user <id> --weight 80 --height 180")
    click.echo()
    click.echo("  2. Log today's weight:")
    click.echo("     bodylog weight log 79.4 --user <id>")
