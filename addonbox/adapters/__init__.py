"""Adapters wrapping external processes."""

from addonbox.adapters.cargo_adapter import (
    CargoAdapter,
    create_cargo_adapter,
    toolchain_prefix,
)


__all__ = ["CargoAdapter", "create_cargo_adapter", "toolchain_prefix"]
