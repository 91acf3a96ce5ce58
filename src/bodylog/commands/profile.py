"""Body profile commands."""

import click

from ..services import ProfileService, safe_action
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    exit_on_failure,
    get_store,
    user_option,
)


@click.group()
def profile():
    """Manage default body measurements.

    The profile weight is shown for days without a logged weight.
    """
    pass


@profile.command("show")
@user_option
@click.pass_context
@async_command
async def show(ctx: click.Context, user_id: str | None):
    """Display the current profile."""
    ensure_initialized(ctx)

    service = ProfileService(get_store())
    result = await safe_action(service.get_profile, user_id)
    exit_on_failure(ctx, result)

    if result.data is None:
        echo_info("No profile yet. Create one with 'bodylog profile set'")
        return

    click.echo(result.data.get_summary())


@profile.command("set")
@click.option("--weight", "-w", type=float, default=None, help="Default body weight")
@click.option("--height", "-h", type=float, default=None, help="Height in cm")
@click.option(
    "--unit",
    "-u",
    type=click.Choice(["kg", "lb"], case_sensitive=False),
    default=None,
    help="Preferred weight unit",
)
@user_option
@click.pass_context
@async_command
async def set_profile(
    ctx: click.Context,
    weight: float | None,
    height: float | None,
    unit: str | None,
    user_id: str | None,
):
    """Update default weight, height or preferred unit."""
    ensure_initialized(ctx)

    service = ProfileService(get_store())
    result = await safe_action(
        service.save_profile, user_id, weight=weight, height=height, weight_unit=unit
    )
    exit_on_failure(ctx, result)

    echo_success("Profile saved")
    click.echo(result.data.get_summary())
