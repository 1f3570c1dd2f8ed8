"""Build command: (re)build the native addon of one or more packages."""

from pathlib import Path
from typing import Annotated

import typer

from addonbox.cli.decorators import handle_errors
from addonbox.cli.helpers import (
    announce,
    create_project,
    get_app_context,
    parse_cargo_args,
    resolve_modules,
    step_logger,
)
from addonbox.core.logging import get_struct_logger


logger = get_struct_logger(__name__)


@handle_errors
def build_command(
    ctx: typer.Context,
    modules: Annotated[
        list[str] | None,
        typer.Argument(help="Packages to build (names under node_modules)"),
    ] = None,
    release: Annotated[
        bool, typer.Option("-r", "--release", help="Release build")
    ] = False,
    path: Annotated[
        bool,
        typer.Option("-p", "--path", help="Specify modules by path instead of name"),
    ] = False,
    arch: Annotated[
        str | None,
        typer.Option("--arch", help="Target architecture (Node.js name, e.g. ia32)"),
    ] = None,
    cargo_args: Annotated[
        str | None,
        typer.Option(
            "--cargo-args",
            help="Extra arguments passed to cargo build, e.g. '--features simd'",
        ),
    ] = None,
) -> None:
    """(Re)build an addon package."""
    app_context = get_app_context(ctx)
    cwd = Path.cwd()
    roots = resolve_modules(cwd, modules, path)
    extra_args = parse_cargo_args(cargo_args)
    log = step_logger()

    for root in roots:
        announce(len(roots) > 1, "building", cwd, root)
        project = create_project(app_context, root)
        result = project.build(
            toolchain=app_context.toolchain,
            release=release,
            extra_args=extra_args,
            arch=arch,
            log=log,
        )
        logger.info("build_finished", root=str(root), **result.get_summary())


def register_commands(app: typer.Typer) -> None:
    """Register build command with the main app."""
    app.command(name="build")(build_command)
