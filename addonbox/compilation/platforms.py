"""Platform and architecture lookup tables.

Platform and architecture names follow Node.js (``process.platform`` and
``process.arch``) because that is what ``npm_config_arch`` carries.
"""

import platform as _platform
import sys
from pathlib import Path

from addonbox.core.errors import UnsupportedArchitectureError, UnsupportedPlatformError


LIB_PREFIX: dict[str, str] = {
    "darwin": "lib",
    "freebsd": "lib",
    "linux": "lib",
    "sunos": "lib",
    "win32": "",
}

LIB_SUFFIX: dict[str, str] = {
    "darwin": ".dylib",
    "freebsd": ".so",
    "linux": ".so",
    "sunos": ".so",
    "win32": ".dll",
}

TARGET_TRIPLES: dict[str, dict[str, str]] = {
    "win32": {
        "ia32": "i686-pc-windows-msvc",
        "x64": "x86_64-pc-windows-msvc",
        "arm64": "aarch64-pc-windows-msvc",
    },
    "darwin": {
        "x64": "x86_64-apple-darwin",
        "arm64": "aarch64-apple-darwin",
    },
    "linux": {
        "ia32": "i686-unknown-linux-gnu",
        "x64": "x86_64-unknown-linux-gnu",
        "arm": "armv7-unknown-linux-gnueabihf",
        "arm64": "aarch64-unknown-linux-gnu",
    },
    "freebsd": {
        "ia32": "i686-unknown-freebsd",
        "x64": "x86_64-unknown-freebsd",
    },
    "sunos": {
        "x64": "x86_64-pc-solaris",
    },
}

# Platforms whose builds always name the triple, even for the host arch.
EXPLICIT_TRIPLE_PLATFORMS = frozenset({"win32"})

_MACHINE_ARCH = {
    "x86_64": "x64",
    "amd64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
}


def host_platform(sys_platform: str | None = None) -> str:
    """Normalize ``sys.platform`` to a Node.js platform name.

    Raises:
        UnsupportedPlatformError: For platforms without a naming table entry
    """
    name = sys_platform or sys.platform
    if name.startswith("linux"):
        return "linux"
    if name.startswith("freebsd"):
        return "freebsd"
    if name.startswith("sunos"):
        return "sunos"
    if name in ("darwin", "win32"):
        return name
    raise UnsupportedPlatformError(
        f"Unsupported platform: {name}", {"platform": name}
    )


def host_arch(machine: str | None = None) -> str:
    """Normalize ``platform.machine()`` to a Node.js architecture name."""
    name = (machine or _platform.machine()).lower()
    return _MACHINE_ARCH.get(name, name)


def library_filename(platform: str, crate_name: str) -> str:
    """File name cargo gives the dynamic library of ``crate_name``."""
    if platform not in LIB_PREFIX:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {platform}", {"platform": platform}
        )
    return f"{LIB_PREFIX[platform]}{crate_name}{LIB_SUFFIX[platform]}"


def resolve_triple(
    platform: str,
    arch: str,
    native_arch: str,
    override: str | None = None,
) -> str:
    """Pick the cargo ``--target`` triple, or ``""`` for a native build.

    Order: explicit override, then the lookup table. Host-arch builds on
    platforms outside ``EXPLICIT_TRIPLE_PLATFORMS`` are native.

    Raises:
        UnsupportedPlatformError: If ``platform`` has no table
        UnsupportedArchitectureError: If a required triple is not in the table
    """
    if override:
        return override

    if platform not in LIB_PREFIX:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {platform}", {"platform": platform}
        )

    if arch == native_arch and platform not in EXPLICIT_TRIPLE_PLATFORMS:
        return ""

    triple = TARGET_TRIPLES.get(platform, {}).get(arch)
    if triple is None:
        raise UnsupportedArchitectureError(
            f"No target triple known for architecture '{arch}' on {platform}; "
            "set CARGO_BUILD_TARGET to cross-compile",
            {"platform": platform, "arch": arch},
        )
    return triple


def target_directory_name(triple: str) -> str:
    """Directory cargo uses under ``target/`` for ``--target=<triple>``.

    A custom target given as a JSON spec path builds into a directory named
    after the file stem (``specs/my-board.json`` -> ``my-board``).
    """
    if triple.endswith(".json"):
        return Path(triple).stem
    return triple
