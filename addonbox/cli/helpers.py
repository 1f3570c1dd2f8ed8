"""Helpers shared by the build and clean commands."""

import shlex
from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console

from addonbox.adapters.cargo_adapter import create_cargo_adapter
from addonbox.cli.app import AppContext
from addonbox.compilation.project import Project


console = Console()


def resolve_modules(cwd: Path, names: list[str] | None, by_path: bool) -> list[Path]:
    """Map module arguments to package roots.

    Names are looked up under ``node_modules``; with ``by_path`` they are
    paths relative to ``cwd``. No names means the package in ``cwd``.
    """
    if not names:
        return [cwd]
    if by_path:
        return [(cwd / name).resolve() for name in names]
    return [(cwd / "node_modules" / name).resolve() for name in names]


def parse_cargo_args(cargo_args: str | None) -> list[str]:
    return shlex.split(cargo_args) if cargo_args else []


def get_app_context(ctx: typer.Context) -> AppContext:
    app_context = ctx.obj
    if not isinstance(app_context, AppContext):
        raise RuntimeError("CLI context was not initialized")
    return app_context


def create_project(app_context: AppContext, root: Path) -> Project:
    """Create a Project using the executables and layout from user config."""
    config = app_context.user_config.config
    adapter = create_cargo_adapter(
        cargo=config.cargo, rustc=config.rustc, host_runtime=config.host_runtime
    )
    return Project(
        root,
        crate=config.crate_subdirectory,
        nodefile=config.nodefile,
        adapter=adapter,
    )


def step_logger(prefix: str = "addonbox") -> Callable[[str], None]:
    """Log callback printing build steps to the console."""

    def log(message: str) -> None:
        console.print(f"[bold cyan]{prefix}[/bold cyan] {message}")

    return log


def announce(multiple: bool, action: str, cwd: Path, module: Path) -> None:
    if multiple:
        relative = module.relative_to(cwd) if module.is_relative_to(cwd) else module
        step_logger()(f"{action} addon package at {relative}")
