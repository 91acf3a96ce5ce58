"""Daily weight commands."""

import click

from ..services import DailyMetricRecorder, safe_action
from ..utils.units import format_weight, parse_unit
from .base import (
    async_command,
    date_option,
    echo_info,
    echo_success,
    ensure_initialized,
    exit_on_failure,
    format_table,
    get_store,
    user_option,
)


@click.group()
def weight():
    """Log and view daily body weight.

    One weight is kept per calendar date. Logging again on the same date
    replaces that day's value.
    """
    pass


@weight.command("show")
@user_option
@date_option
@click.pass_context
@async_command
async def show(ctx: click.Context, user_id: str | None, client_date: str):
    """Show the weight for a date (logged entry or profile default)."""
    ensure_initialized(ctx)

    recorder = DailyMetricRecorder(get_store())
    result = await safe_action(recorder.get_todays_weight, user_id, client_date)
    exit_on_failure(ctx, result)

    todays = result.data
    click.echo(f"{client_date}: {todays.display}")
    if todays.is_locked:
        echo_info("Logged for this date.")
    else:
        echo_info("Not logged yet; showing your profile default.")


@weight.command("log")
@click.argument("value", type=float)
@click.option(
    "--unit",
    "-u",
    type=click.Choice(["kg", "lb"], case_sensitive=False),
    default="kg",
    help="Unit of VALUE (default: kg)",
)
@user_option
@date_option
@click.pass_context
@async_command
async def log(ctx: click.Context, value: float, unit: str, user_id: str | None, client_date: str):
    """Log VALUE as the weight for a date."""
    ensure_initialized(ctx)

    recorder = DailyMetricRecorder(get_store())
    result = await safe_action(recorder.record_todays_weight, user_id, client_date, value, unit)
    exit_on_failure(ctx, result)

    echo_success(f"Logged {value:.1f} {unit.lower()} for {client_date}")


@weight.command("status")
@user_option
@date_option
@click.pass_context
@async_command
async def status(ctx: click.Context, user_id: str | None, client_date: str):
    """Check whether a weight has been logged for a date."""
    ensure_initialized(ctx)

    recorder = DailyMetricRecorder(get_store())
    result = await safe_action(recorder.is_todays_weight_logged, user_id, client_date)
    exit_on_failure(ctx, result)

    if result.data:
        echo_success(f"Weight logged for {client_date}")
    else:
        echo_info(f"No weight logged for {client_date}")


@weight.command("history")
@click.option("--limit", "-n", default=14, type=int, help="Number of entries (default: 14)")
@click.option(
    "--unit",
    "-u",
    type=click.Choice(["kg", "lb"], case_sensitive=False),
    default=None,
    help="Show every entry in this unit (default: as logged)",
)
@user_option
@click.pass_context
@async_command
async def history(ctx: click.Context, limit: int, unit: str | None, user_id: str | None):
    """List recent weight entries."""
    ensure_initialized(ctx)

    recorder = DailyMetricRecorder(get_store())
    result = await safe_action(recorder.list_weight_entries, user_id, limit)
    exit_on_failure(ctx, result)

    if not result.data:
        echo_info("No weight entries yet. Log one with 'bodylog weight log'")
        return

    display_unit = parse_unit(unit) if unit else None
    rows = []
    for entry in result.data:
        if display_unit:
            shown = format_weight(entry.weight_in(display_unit), display_unit)
        else:
            shown = format_weight(entry.weight, entry.weight_unit)
        rows.append([entry.date_logged.isoformat(), shown])
    click.echo()
    click.echo(format_table(["Date", "Weight"], rows))
