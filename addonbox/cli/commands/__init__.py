"""CLI command modules."""

import typer

from addonbox.cli.commands.build import register_commands as register_build_commands
from addonbox.cli.commands.clean import register_commands as register_clean_commands
from addonbox.cli.commands.status import register_commands as register_status_commands


def version_command() -> None:
    """Display the addonbox version."""
    from addonbox.cli.app import __version__

    print(__version__)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Calling this more than once is harmless.
    """
    if any(command.name == "build" for command in app.registered_commands):
        return
    register_build_commands(app)
    register_clean_commands(app)
    register_status_commands(app)
    app.command(name="version")(version_command)
