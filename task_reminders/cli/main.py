"""Main CLI entry point for task-reminders management commands."""

import click

from task_reminders import __version__
from task_reminders.cli.commands import db, reminders, server
from task_reminders.core.settings import get_logging_settings
from task_reminders.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="task-reminders")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Task Reminders CLI.

    \b
    Command Groups:
      reminders  Run reminder sweeps
      db         Database management
      server     Run the API server

    \b
    Quick Start:
      task-reminders db create-tables
      task-reminders reminders sweep
      task-reminders server run --reload
    """
    ctx.ensure_object(dict)


cli.add_command(reminders.reminders)
cli.add_command(db.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging(log_settings=get_logging_settings())
    cli(obj={})


if __name__ == "__main__":
    main()
