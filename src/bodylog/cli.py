"""CLI entry point for bodylog."""

import logging

import click

from . import __version__
from .commands import calc, init, profile, serve, weight


@click.group()
@click.version_option(version=__version__, prog_name="bodylog")
@click.option("--verbose", "-v", is_flag=True, help="Show informational log output")
def main(verbose: bool):
    """bodylog: daily weight and body metric tracking.

    Log one weight per day, run BMI/BMR/body fat calculators, and check
    what has already been logged for a date.

    Example usage:

        # Initialize the database
        bodylog init

        # Log today's weight
        bodylog weight log 80.2 --user alice

        # Calculate and log BMI
        bodylog calc bmi --weight 80.2 --height 180 --user alice
    """
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO if verbose else logging.WARNING,
    )


# Register commands
main.add_command(init)
main.add_command(weight)
main.add_command(calc)
main.add_command(profile)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
