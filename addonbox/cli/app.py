"""Main CLI application for addonbox."""

import logging
import sys
from importlib.metadata import distribution
from typing import Annotated

import typer

from addonbox.cli.decorators.error_handling import print_stack_trace_if_verbose
from addonbox.config.user_config import UserConfig
from addonbox.core.logging import get_struct_logger, setup_logging


__all__ = ["AppContext", "app", "main", "split_toolchain_arg", "__version__"]

__version__ = distribution("addonbox").version

logger = get_struct_logger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
        toolchain: str | None = None,
    ):
        from addonbox.config.user_config import create_user_config

        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file
        self.user_config: UserConfig = create_user_config(cli_config_path=config_file)
        self.toolchain = toolchain or self.user_config.config.toolchain


app = typer.Typer(
    name="addonbox",
    help=f"""addonbox v{__version__}

Build native Node.js addons from a cargo crate.

Each build is fingerprinted (rustc, Node.js version, npm_config_* settings);
when the fingerprint changes the target is rebuilt from scratch.

Common workflows:
  • Debug build:        addonbox build
  • Release build:      addonbox build --release
  • Other toolchain:    addonbox +nightly build
  • Dependency builds:  addonbox build some-module other-module
  • Start over:         addonbox clean""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    toolchain: Annotated[
        str | None,
        typer.Option(
            "--toolchain",
            help="rustup toolchain to build with (same as a leading +TOOLCHAIN)",
        ),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """addonbox native addon builder."""
    if version:
        print(f"addonbox v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # Flags decide the level; configure before loading the config file, which logs
    flag_level: int | None = None
    if debug or verbose >= 2:
        flag_level = logging.DEBUG
    elif verbose == 1:
        flag_level = logging.INFO

    setup_logging(level=flag_level or logging.WARNING, log_file=log_file)

    app_context = AppContext(
        verbose=verbose,
        log_file=log_file,
        config_file=config_file,
        toolchain=toolchain.lstrip("+") if toolchain else None,
    )
    ctx.obj = app_context

    if flag_level is None:
        config_level = app_context.user_config.get_log_level_int()
        if config_level != logging.WARNING:
            setup_logging(level=config_level, log_file=log_file)


def split_toolchain_arg(argv: list[str]) -> list[str]:
    """Rewrite a rustup style leading ``+toolchain`` into ``--toolchain``.

    ``addonbox +nightly build`` becomes ``addonbox --toolchain nightly build``.
    """
    if argv and argv[0].strip().startswith("+"):
        return ["--toolchain", argv[0].strip()[1:], *argv[1:]]
    return list(argv)


def main() -> int:
    """Main CLI entry point."""
    from addonbox.cli.commands import register_all_commands

    register_all_commands(app)

    try:
        app(args=split_toolchain_arg(sys.argv[1:]), prog_name="addonbox")
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("unexpected_error", error=str(e))
        print_stack_trace_if_verbose()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
