"""Composer client construction from a project's manifest and lock file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .loader import load_json_document, load_lock_packages, load_root_package
from .models import RootPackage
from .repository import LockRepository

__all__ = [
    "Composer",
    "ComposerFactory",
    "DEFAULT_MANIFEST_NAME",
    "MANIFEST_ENV_VAR",
    "RepositoryManager",
    "lock_file_for",
]

DEFAULT_MANIFEST_NAME = "composer.json"
MANIFEST_ENV_VAR = "COMPOSER"

logger = logging.getLogger(__name__)


def lock_file_for(manifest: Path) -> Path:
    """Return the lock file that belongs to ``manifest``."""

    if manifest.suffix == ".json":
        return manifest.with_suffix(".lock")
    return manifest.with_name(f"{manifest.name}.lock")


@dataclass(frozen=True)
class RepositoryManager:
    local_repository: LockRepository

    def get_local_repository(self) -> LockRepository:
        return self.local_repository


@dataclass(frozen=True)
class Composer:
    """Loaded project state: the root package and its installed packages."""

    package: RootPackage
    repository_manager: RepositoryManager
    manifest_path: Path
    lock_path: Path

    def get_package(self) -> RootPackage:
        return self.package

    def get_repository_manager(self) -> RepositoryManager:
        return self.repository_manager


class ComposerFactory:
    """Build :class:`Composer` instances the way the Composer CLI locates files."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self.env = os.environ if env is None else env

    def manifest_path(self, working_dir: Path | str | None = None) -> Path:
        base = Path(working_dir) if working_dir is not None else Path.cwd()
        name = (self.env.get(MANIFEST_ENV_VAR) or "").strip() or DEFAULT_MANIFEST_NAME
        return base / name

    def create(self, working_dir: Path | str | None = None) -> Composer:
        """Parse the manifest and lock file found in ``working_dir``.

        The current directory is used when ``working_dir`` is omitted.
        Raises :class:`~upcheck_composer.errors.ManifestLoadError` when
        either file is missing or malformed.
        """
        manifest = self.manifest_path(working_dir)
        lock = lock_file_for(manifest)
        logger.debug("loading composer manifest %s", manifest)
        root = load_root_package(manifest, load_json_document(manifest))
        logger.debug("loading composer lock file %s", lock)
        installed = load_lock_packages(lock, load_json_document(lock))
        logger.debug("loaded %s with %d locked packages", root, len(installed))
        return Composer(
            package=root,
            repository_manager=RepositoryManager(LockRepository(installed)),
            manifest_path=manifest,
            lock_path=lock,
        )
