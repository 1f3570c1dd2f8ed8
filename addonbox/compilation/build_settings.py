"""Build settings: the fingerprint a target's binary was produced under."""

import os
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ConfigDict, Field, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from addonbox.core.errors import FieldError, SchemaValidationError, ToolchainError
from addonbox.core.logging import get_struct_logger
from addonbox.models.base import AddonboxBaseModel
from addonbox.protocols.toolchain_protocol import Toolchain, ToolchainAdapterProtocol


logger = get_struct_logger(__name__)

# Bump ENV_WHITELIST_VERSION whenever ENV_WHITELIST changes: every ledger
# record written under the previous list stops matching.
ENV_WHITELIST_VERSION = 1
ENV_WHITELIST: tuple[str, ...] = (
    "npm_config_target",
    "npm_config_arch",
    "npm_config_target_arch",
    "npm_config_disturl",
    "npm_config_runtime",
    "npm_config_build_from_source",
    "npm_config_devdir",
)

_RUSTC_VERSION_RE = re.compile(r"^rustc (?P<version>\d+\.\d+\.\d+(?:-[0-9A-Za-z.]+)?)")


def parse_rustc_version(line: str) -> str:
    """Extract ``X.Y.Z[-channel]`` from a ``rustc --version`` line.

    Raises:
        ToolchainError: If the line is not a rustc version banner
    """
    match = _RUSTC_VERSION_RE.match(line.strip())
    if not match:
        raise ToolchainError(f"Unrecognized rustc version output: {line!r}")
    return match.group("version")


def field_errors_from_pydantic(
    exc: PydanticValidationError, prefix: str = ""
) -> list[FieldError]:
    """Translate pydantic errors into addonbox ``FieldError`` values."""
    field_errors = []
    for error in exc.errors():
        parts = [prefix] if prefix else []
        parts.extend(str(part) for part in error["loc"])
        location = ".".join(parts)
        error_type = error["type"]
        if error_type == "missing":
            kind = "missing"
        elif error_type.endswith("_type") or error_type == "model_attributes_type":
            kind = "type"
        else:
            kind = "value"
        field_errors.append(FieldError(kind, location, error["msg"]))
    return field_errors


def _env_value(value: str | None) -> str | None:
    # null and "" are the same thing
    return value or None


class BuildSettings(AddonboxBaseModel):
    """Toolchain and environment signature of a build.

    Serialized form (one ledger record)::

        {"rustc": "rustc 1.78.0 (...)", "nodeVersion": "v20.11.1",
         "env": {"npm_config_arch": null, ...}}
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=False,
        validate_assignment=False,
    )

    rustc: StrictStr
    node_version: StrictStr | None = Field(default=None, alias="nodeVersion")
    env: Mapping[str, StrictStr | None]

    @field_validator("env")
    @classmethod
    def freeze_env(cls, value: Mapping[str, str | None]) -> Mapping[str, str | None]:
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        return hash((self.rustc, self.node_version, frozenset(self.env.items())))

    @classmethod
    def current(
        cls,
        toolchain: Toolchain = None,
        adapter: ToolchainAdapterProtocol | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "BuildSettings":
        """Compute the settings a build would run under right now.

        Raises:
            ToolchainNotFoundError: If rustc is not installed
            ToolchainError: If rustc could not report a usable version
        """
        if adapter is None:
            from addonbox.adapters.cargo_adapter import create_cargo_adapter

            adapter = create_cargo_adapter()
        environ = os.environ if environ is None else environ

        rustc = adapter.rustc_version(toolchain)
        version = parse_rustc_version(rustc)
        node_version = adapter.host_runtime_version()
        env = {key: _env_value(environ.get(key)) for key in ENV_WHITELIST}

        logger.debug(
            "current_build_settings",
            rustc_version=version,
            node_version=node_version,
            env={k: v for k, v in env.items() if v is not None},
        )
        return cls(rustc=rustc, nodeVersion=node_version, env=env)

    @property
    def rustc_version(self) -> str | None:
        """The ``X.Y.Z`` part of ``rustc``, if it can be parsed."""
        try:
            return parse_rustc_version(self.rustc)
        except ToolchainError:
            return None

    def match(self, other: "BuildSettings") -> bool:
        """Whether a binary built under ``other`` is valid under ``self``."""
        return not self.differences(other)

    def differences(self, other: "BuildSettings") -> list[str]:
        """Names of the fingerprint fields that prevent a match."""
        differences = []
        if self.node_version != other.node_version:
            differences.append("nodeVersion")

        keys = set(ENV_WHITELIST) | self.env.keys() | other.env.keys()
        for key in sorted(keys):
            if _env_value(self.env.get(key)) != _env_value(other.env.get(key)):
                differences.append(f"env.{key}")
        return differences

    @classmethod
    def from_json(cls, record: Any, location: str = "") -> "BuildSettings":
        """Validate and load one ledger record.

        A record without ``nodeVersion`` predates host-runtime tracking and
        loads with ``node_version=None``.

        Raises:
            SchemaValidationError: With one ``FieldError`` per violation
        """
        if not isinstance(record, Mapping):
            raise SchemaValidationError(
                "build settings",
                [FieldError("type", location, "expected an object")],
            )
        try:
            return cls.model_validate(record)
        except PydanticValidationError as e:
            raise SchemaValidationError(
                "build settings", field_errors_from_pydantic(e, location)
            ) from e

    def to_json(self) -> dict[str, Any]:
        return {
            "rustc": self.rustc,
            "nodeVersion": self.node_version,
            "env": dict(self.env),
        }
