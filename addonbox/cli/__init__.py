"""Command line interface."""

from addonbox.cli.app import app, main


__all__ = ["app", "main"]
