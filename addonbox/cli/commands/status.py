"""Status command: show the artifacts ledger of a package."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from addonbox.cli.decorators import handle_errors
from addonbox.cli.helpers import get_app_context
from addonbox.compilation.crate import Crate


@handle_errors
def status_command(
    ctx: typer.Context,
    root: Annotated[
        Path, typer.Argument(help="Package root", show_default=False)
    ] = Path("."),
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the ledger as JSON")
    ] = False,
) -> None:
    """Show which targets have been built and which one is active."""
    user_config = get_app_context(ctx).user_config
    config = user_config.config
    config_path = user_config.loaded_path
    crate = Crate(
        root, subdirectory=config.crate_subdirectory, nodefile=config.nodefile
    )

    if as_json:
        data = crate.artifacts.to_json()
        data["addon"] = {"path": str(crate.addon), "exists": crate.addon.exists()}
        data["config"] = str(config_path) if config_path else None
        print(json.dumps(data, indent=2))
        return

    console = Console()
    table = Table(title=f"{crate.name} ({crate.addon_display_path})")
    table.add_column("Target")
    table.add_column("Active")
    table.add_column("rustc")
    table.add_column("Node.js")
    table.add_column("Environment")

    for key, settings in crate.artifacts.items():
        env = ", ".join(f"{k}={v}" for k, v in settings.env.items() if v)
        table.add_row(
            key,
            "yes" if crate.artifacts.have_activated(key) else "",
            settings.rustc_version or settings.rustc,
            settings.node_version or "-",
            env or "-",
        )

    if len(crate.artifacts):
        console.print(table)
    else:
        console.print("[yellow]No builds recorded[/yellow]")
    if not crate.addon.exists():
        console.print(f"[yellow]Addon file {crate.addon} does not exist[/yellow]")
    if config_path:
        console.print(f"Config: {config_path}")


def register_commands(app: typer.Typer) -> None:
    """Register status command with the main app."""
    app.command(name="status")(status_command)
