"""DayBoard CLI - Command-line interface for the personal finance dashboard."""

import click

from dayboard import __version__

from .daily_commands import burn as burn_command
from .daily_commands import commute as commute_group
from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group
from .subscriptions_commands import subscriptions as subscriptions_group
from .subscriptions_commands import transactions as transactions_group
from .taxes_commands import taxes as taxes_group


@click.group()
@click.version_option(version=__version__, prog_name="dayboard")
def cli():
    """DayBoard - take-home pay, subscriptions and daily spend.

    Configuration is loaded from (in order):

    \b
    1. DAYBOARD_CONFIG_PATH environment variable
    2. ~/.config/dayboard/ (XDG default)

    Set DAYBOARD_DEMO_MODE=1 to run against seeded demo data.
    """
    pass


cli.add_command(taxes_group)
cli.add_command(subscriptions_group)
cli.add_command(transactions_group)
cli.add_command(burn_command)
cli.add_command(commute_group)
cli.add_command(profile_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
