"""The artifacts ledger.

The ledger file (``artifacts.json`` beside ``Cargo.toml``) records the build
settings of every target directory that holds a build, plus which of them was
most recently copied to the addon file::

    {
      "active": "release" | "x86_64-pc-windows-msvc/debug" | null,
      "targets": {
        "<triple>/<profile>" | "<profile>": {"rustc": ..., "nodeVersion": ..., "env": {...}}
      }
    }

An unreadable ledger means nothing has been built yet: ``load`` never raises.
"""

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from addonbox.compilation.build_settings import BuildSettings
from addonbox.core.errors import FieldError, SchemaValidationError
from addonbox.core.logging import get_struct_logger


logger = get_struct_logger(__name__)

_TARGET_KEY_RE = re.compile(r"^(?:(?!\.\.?/)[A-Za-z0-9_.-]+/)?(?:debug|release)$")


def normalize_target_key(key: str) -> str:
    """Use ``/`` separators; older ledgers written on Windows used ``\\``."""
    return key.replace("\\", "/")


def is_target_key(key: str) -> bool:
    return bool(_TARGET_KEY_RE.match(normalize_target_key(key)))


@dataclass(frozen=True)
class LedgerLoaded:
    artifacts: "Artifacts"


@dataclass(frozen=True)
class LedgerEmpty:
    reason: Literal["missing", "unreadable", "malformed_json", "invalid_schema"]
    detail: str = ""


LedgerLoadResult = LedgerLoaded | LedgerEmpty


def parse_artifacts(text: str) -> LedgerLoadResult:
    """Parse ledger JSON text into a tagged result."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return LedgerEmpty("malformed_json", str(e))

    try:
        return LedgerLoaded(Artifacts.from_json(data))
    except SchemaValidationError as e:
        return LedgerEmpty("invalid_schema", str(e))


def read_artifacts(path: Path) -> LedgerLoadResult:
    """Read and parse the ledger file at ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LedgerEmpty("missing")
    except (OSError, UnicodeDecodeError) as e:
        return LedgerEmpty("unreadable", str(e))
    return parse_artifacts(text)


class Artifacts:
    """In-memory ledger: one ``BuildSettings`` per target key and the active key.

    Mutations do not persist by themselves; use ``Crate.transaction`` which
    saves once the mutating block completes.
    """

    def __init__(
        self,
        active: str | None = None,
        targets: Mapping[str, BuildSettings] | None = None,
    ) -> None:
        self.active = active
        self._targets: dict[str, BuildSettings] = dict(targets or {})

    @classmethod
    def load(cls, path: Path) -> "Artifacts":
        result = read_artifacts(path)
        if isinstance(result, LedgerLoaded):
            logger.debug(
                "artifacts_loaded",
                path=str(path),
                active=result.artifacts.active,
                targets=list(result.artifacts.keys()),
            )
            return result.artifacts

        if result.reason == "missing":
            logger.debug("artifacts_missing", path=str(path))
        else:
            logger.warning(
                "artifacts_reset",
                path=str(path),
                reason=result.reason,
                detail=result.detail,
            )
        return cls()

    @classmethod
    def from_json(cls, data: Any) -> "Artifacts":
        """Validate a decoded ledger document.

        Raises:
            SchemaValidationError: Listing every violation found
        """
        if not isinstance(data, Mapping):
            raise SchemaValidationError(
                "artifacts ledger", [FieldError("type", "", "expected an object")]
            )

        errors: list[FieldError] = []

        active = data.get("active")
        if active is not None and not isinstance(active, str):
            errors.append(FieldError("type", "active", "expected a string or null"))
            active = None

        targets: dict[str, BuildSettings] = {}
        raw_targets = data.get("targets")
        if raw_targets is None:
            errors.append(FieldError("missing", "targets", "field required"))
        elif not isinstance(raw_targets, Mapping):
            errors.append(FieldError("type", "targets", "expected an object"))
        else:
            for raw_key, record in raw_targets.items():
                location = f"targets.{raw_key}"
                if not is_target_key(raw_key):
                    errors.append(
                        FieldError("value", location, "not a target subdirectory")
                    )
                    continue
                try:
                    settings = BuildSettings.from_json(record, location)
                except SchemaValidationError as e:
                    errors.extend(e.errors)
                    continue
                targets[normalize_target_key(raw_key)] = settings

        if errors:
            raise SchemaValidationError("artifacts ledger", errors)

        if active is not None:
            active = normalize_target_key(active)
            if active not in targets:
                logger.debug("artifacts_dangling_active", active=active)
                active = None

        return cls(active, targets)

    def to_json(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "targets": {key: s.to_json() for key, s in self._targets.items()},
        }

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_json(), indent=2) + "\n", encoding="utf-8")
        logger.debug("artifacts_saved", path=str(path), active=self.active)

    def lookup(self, key: str) -> BuildSettings | None:
        return self._targets.get(key)

    def activate(self, key: str, settings: BuildSettings) -> None:
        """Record ``settings`` for ``key`` and make it the active target."""
        self._targets[key] = settings
        self.active = key

    def have_activated(self, key: str) -> bool:
        return self.active == key

    def delete(self, key: str) -> None:
        self._targets.pop(key, None)
        if self.active == key:
            self.active = None

    def reset(self) -> None:
        self.active = None
        self._targets.clear()

    def keys(self) -> list[str]:
        return list(self._targets)

    def items(self) -> Iterator[tuple[str, BuildSettings]]:
        return iter(self._targets.items())

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, key: object) -> bool:
        return key in self._targets

    def __repr__(self) -> str:
        return f"Artifacts(active={self.active!r}, targets={self.keys()!r})"
