"""Protocol definitions for addonbox adapters.

These protocols use ``typing.Protocol`` with ``@runtime_checkable`` so they
serve both static type checking and ``isinstance`` checks in tests.
"""

from .toolchain_protocol import Toolchain, ToolchainAdapterProtocol


__all__ = ["Toolchain", "ToolchainAdapterProtocol"]
