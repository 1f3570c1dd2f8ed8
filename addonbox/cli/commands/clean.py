"""Clean command: remove build outputs, the addon and ledger records."""

from pathlib import Path
from typing import Annotated

import typer

from addonbox.cli.decorators import handle_errors
from addonbox.cli.helpers import (
    announce,
    create_project,
    get_app_context,
    resolve_modules,
    step_logger,
)


@handle_errors
def clean_command(
    ctx: typer.Context,
    modules: Annotated[
        list[str] | None,
        typer.Argument(help="Packages to clean (names under node_modules)"),
    ] = None,
    path: Annotated[
        bool,
        typer.Option("-p", "--path", help="Specify modules by path instead of name"),
    ] = False,
) -> None:
    """Remove build artifacts from an addon package."""
    app_context = get_app_context(ctx)
    cwd = Path.cwd()
    roots = resolve_modules(cwd, modules, path)
    log = step_logger()

    for root in roots:
        announce(len(roots) > 1, "cleaning", cwd, root)
        create_project(app_context, root).clean(log=log)


def register_commands(app: typer.Typer) -> None:
    """Register clean command with the main app."""
    app.command(name="clean")(clean_command)
