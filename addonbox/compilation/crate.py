"""The native crate inside an addon project."""

import os
import shutil
import tomllib
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from addonbox.compilation.artifacts import Artifacts
from addonbox.core.errors import ManifestInvalidError, ManifestMissingError
from addonbox.core.logging import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_SUBDIRECTORY = "native"
DEFAULT_NODEFILE = "index.node"
ARTIFACTS_FILENAME = "artifacts.json"


def load_lib_name(manifest_path: Path) -> str:
    """Read ``[lib] name`` from a Cargo manifest.

    Raises:
        ManifestMissingError: If the manifest does not exist
        ManifestInvalidError: If it cannot be read or parsed, or has no lib name
    """
    try:
        with manifest_path.open("rb") as f:
            metadata = tomllib.load(f)
    except FileNotFoundError as e:
        raise ManifestMissingError(
            f"No Cargo.toml found at {manifest_path}",
            {"manifest": str(manifest_path)},
        ) from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ManifestInvalidError(
            f"Failed to parse TOML file {manifest_path}: {e}",
            {"manifest": str(manifest_path)},
        ) from e
    except OSError as e:
        raise ManifestInvalidError(
            f"Cannot read {manifest_path}: {e}",
            {"manifest": str(manifest_path)},
        ) from e

    lib = metadata.get("lib")
    name = lib.get("name") if isinstance(lib, dict) else None
    if not isinstance(name, str) or not name:
        raise ManifestInvalidError(
            "Cargo.toml does not contain a [lib] section with a 'name' field",
            {"manifest": str(manifest_path)},
        )
    return name


def remove_path(path: Path) -> bool:
    """Remove a file or directory tree; a missing path is not an error.

    Returns:
        True if something was removed
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        return False
    return True


class Crate:
    """A cargo crate producing the addon, its addon file and its ledger.

    Args:
        project_root: Root directory of the Node.js package
        subdirectory: Crate location relative to ``project_root``
        nodefile: Addon file location relative to the crate root
        environ: Environment used for ``CARGO_TARGET_DIR`` (defaults to os.environ)
    """

    def __init__(
        self,
        project_root: Path,
        subdirectory: str = DEFAULT_SUBDIRECTORY,
        nodefile: str = DEFAULT_NODEFILE,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.subdirectory = subdirectory
        self.nodefile = nodefile
        self.root = (Path(project_root) / subdirectory).resolve()
        self.addon = self.root / nodefile
        self.manifest_path = self.root / "Cargo.toml"
        self.name = load_lib_name(self.manifest_path)
        self.artifacts_file = self.root / ARTIFACTS_FILENAME
        self.artifacts = Artifacts.load(self.artifacts_file)

        environ = os.environ if environ is None else environ
        target_dir = environ.get("CARGO_TARGET_DIR")
        self.target_directory = (
            self.root / target_dir if target_dir else self.root / "target"
        )

    @property
    def addon_display_path(self) -> str:
        """Addon path relative to the project root, for log messages."""
        return str(Path(self.subdirectory) / self.nodefile)

    def finish(self, dylib: Path) -> None:
        """Replace the addon file with a copy of ``dylib``.

        Copy errors propagate unchanged; the addon may then be missing until
        the next successful build.
        """
        self.remove_addon()
        self.addon.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(dylib, self.addon)
        logger.debug("addon_updated", source=str(dylib), addon=str(self.addon))

    def remove_addon(self) -> bool:
        """Remove the addon file, including a dangling symlink.

        Returns:
            True if something was removed
        """
        removed = remove_path(self.addon)
        if removed:
            logger.debug("addon_removed", addon=str(self.addon))
        return removed

    def reset_artifacts(self) -> None:
        self.artifacts.reset()

    def save_artifacts(self) -> None:
        self.artifacts.save(self.artifacts_file)

    @contextmanager
    def transaction(self) -> Iterator[Artifacts]:
        """Reload the ledger, yield it for mutation, then persist it.

        Nothing is written if the block raises, and ``self.artifacts`` keeps
        its previous value.
        """
        artifacts = Artifacts.load(self.artifacts_file)
        yield artifacts
        artifacts.save(self.artifacts_file)
        self.artifacts = artifacts
