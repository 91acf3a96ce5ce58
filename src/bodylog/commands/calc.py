"""Body metric calculator commands."""

import click

from ..models.calculator import ActivityLevel, CalculatorCategory, Gender
from ..services import CalculatorSessionService, DailyMetricRecorder, safe_action
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

CATEGORY_CHOICE = click.Choice([c.value for c in CalculatorCategory], case_sensitive=False)
GENDER_CHOICE = click.Choice([g.value for g in Gender], case_sensitive=False)
UNIT_CHOICE = click.Choice(["kg", "lb"], case_sensitive=False)


@click.group()
def calc():
    """Run body metric calculators and log the results.

    Each run is stored as a session for the given date so progress can be
    charted over time.
    """
    pass


@calc.command("bmi")
@click.option("--weight", "-w", type=float, required=True, help="Body weight")
@click.option("--height", "-h", type=float, required=True, help="Height in cm")
@click.option("--unit", "-u", type=UNIT_CHOICE, default="kg", help="Weight unit (default: kg)")
@click.option("--save-weight", is_flag=True, help="Also make the weight your profile default")
@click.option("--save-height", is_flag=True, help="Also save the height to your profile")
@click.option("--no-log", is_flag=True, help="Only show the result; log nothing")
@user_option
@date_option
@click.pass_context
@async_command
async def bmi(
    ctx: click.Context,
    weight: float,
    height: float,
    unit: str,
    save_weight: bool,
    save_height: bool,
    no_log: bool,
    user_id: str | None,
    client_date: str,
):
    """Calculate body mass index.

    The weight is logged as the day's entry as well. Pass --no-log to only
    see the result.
    """
    ensure_initialized(ctx)

    service = CalculatorSessionService(get_store())
    if no_log:
        result = await safe_action(service.calculate_bmi, user_id, weight, height, unit)
        exit_on_failure(ctx, result)
        click.echo(f"BMI {result.data['bmi']} ({result.data['category']})")
        return

    result = await safe_action(
        service.add_bmi,
        user_id,
        client_date,
        weight,
        height,
        weight_unit=unit,
        save_new_weight=save_weight,
        update_height=save_height,
    )
    exit_on_failure(ctx, result)

    data = result.data
    echo_success(f"BMI {data['bmi']} ({data['category']}) logged for {data['date']}")


@calc.command("bmr")
@click.option("--weight", "-w", type=float, required=True, help="Body weight")
@click.option("--height", "-h", type=float, required=True, help="Height in cm")
@click.option("--age", "-a", type=int, required=True, help="Age in years")
@click.option("--gender", "-g", type=GENDER_CHOICE, required=True)
@click.option(
    "--activity",
    type=click.Choice([a.value for a in ActivityLevel], case_sensitive=False),
    default=ActivityLevel.SEDENTARY.value,
    help="Activity level (default: SEDENTARY)",
)
@click.option("--unit", "-u", type=UNIT_CHOICE, default="kg", help="Weight unit (default: kg)")
@click.option("--save-weight", is_flag=True, help="Also log the weight for this date")
@click.option("--no-log", is_flag=True, help="Only show the result; log nothing")
@user_option
@date_option
@click.pass_context
@async_command
async def bmr(
    ctx: click.Context,
    weight: float,
    height: float,
    age: int,
    gender: str,
    activity: str,
    unit: str,
    save_weight: bool,
    no_log: bool,
    user_id: str | None,
    client_date: str,
):
    """Calculate basal metabolic rate and daily calorie needs."""
    ensure_initialized(ctx)

    service = CalculatorSessionService(get_store())
    if no_log:
        result = await safe_action(
            service.calculate_bmr, user_id, weight, height, age, gender, activity, unit
        )
        exit_on_failure(ctx, result)
        data = result.data
        click.echo(f"BMR {data['bmr']:.0f} kcal/day, daily calories {data['daily_calories']:.0f} kcal")
        return

    result = await safe_action(
        service.add_bmr,
        user_id,
        client_date,
        weight,
        height,
        age,
        gender,
        activity,
        weight_unit=unit,
        save_new_weight=save_weight,
    )
    exit_on_failure(ctx, result)

    data = result.data
    echo_success(f"BMR {data['bmr']:.0f} kcal/day logged for {data['date']}")
    click.echo(f"Daily calories ({data['activity_level'].lower()}): {data['daily_calories']:.0f} kcal")


@calc.command("body-fat")
@click.option("--height", "-h", type=float, required=True, help="Height in cm")
@click.option("--waist", type=float, required=True, help="Waist circumference in cm")
@click.option("--neck", type=float, required=True, help="Neck circumference in cm")
@click.option("--hips", type=float, default=None, help="Hip circumference in cm (required for women)")
@click.option("--gender", "-g", type=GENDER_CHOICE, required=True)
@click.option("--no-log", is_flag=True, help="Only show the result; log nothing")
@user_option
@date_option
@click.pass_context
@async_command
async def body_fat(
    ctx: click.Context,
    height: float,
    waist: float,
    neck: float,
    hips: float | None,
    gender: str,
    no_log: bool,
    user_id: str | None,
    client_date: str,
):
    """Estimate body fat percentage (US Navy method)."""
    ensure_initialized(ctx)

    service = CalculatorSessionService(get_store())
    if no_log:
        result = await safe_action(
            service.calculate_body_fat, user_id, height, waist, neck, gender, hips
        )
        exit_on_failure(ctx, result)
        click.echo(f"Body fat {result.data['body_fat_percentage']}% ({result.data['category']})")
        return

    result = await safe_action(
        service.add_body_fat, user_id, client_date, height, waist, neck, gender, hips
    )
    exit_on_failure(ctx, result)

    data = result.data
    echo_success(
        f"Body fat {data['body_fat_percentage']}% ({data['category']}) logged for {data['date']}"
    )


@calc.command("logged")
@click.argument("category", type=CATEGORY_CHOICE)
@user_option
@date_option
@click.pass_context
@async_command
async def logged(ctx: click.Context, category: str, user_id: str | None, client_date: str):
    """Check whether CATEGORY was logged for a date."""
    ensure_initialized(ctx)

    recorder = DailyMetricRecorder(get_store())
    result = await safe_action(recorder.is_todays_category_logged, user_id, client_date, category)
    exit_on_failure(ctx, result)

    if result.data:
        echo_success(f"{category.upper()} logged for {client_date}")
    else:
        echo_info(f"No {category.upper()} logged for {client_date}")


@calc.command("show")
@click.argument("category", type=CATEGORY_CHOICE)
@user_option
@date_option
@click.pass_context
@async_command
async def show(ctx: click.Context, category: str, user_id: str | None, client_date: str):
    """Show the CATEGORY result logged for a date."""
    ensure_initialized(ctx)

    service = CalculatorSessionService(get_store())
    result = await safe_action(service.get_for_date, user_id, category, client_date)
    exit_on_failure(ctx, result)

    if result.data is None:
        echo_info(f"No {category.upper()} logged for {client_date}")
        return

    click.echo(f"{client_date}: {result.data['result']:g} {result.data['result_unit']}")


@calc.command("history")
@click.argument("category", type=CATEGORY_CHOICE)
@click.option("--page", default=0, type=int, help="Page number, starting at 0")
@click.option("--page-size", default=10, type=int, help="Entries per page (default: 10)")
@user_option
@click.pass_context
@async_command
async def history(ctx: click.Context, category: str, page: int, page_size: int, user_id: str | None):
    """List logged sessions for CATEGORY."""
    ensure_initialized(ctx)

    service = CalculatorSessionService(get_store())
    result = await safe_action(service.get_history, user_id, category, page, page_size)
    exit_on_failure(ctx, result)

    data = result.data
    if not data["entries"]:
        echo_info(f"No {category.upper()} sessions found.")
        return

    rows = [
        [entry["date"], f"{entry['result']:g}", entry["result_unit"]]
        for entry in data["entries"]
    ]
    click.echo()
    click.echo(format_table(["Date", "Result", "Unit"], rows))
    click.echo()
    click.echo(f"Total: {data['total']} session(s)")
