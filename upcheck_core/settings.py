"""Layered settings: overrides, environment, project file, user file, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .config import CONFIG_FILE_NAME, ConfigStore
from .paths import UserDirs

DEFAULT_EXTENSIONS = "upcheck_composer.extension:ComposerLoaderExtension"

_DEFAULTS: dict[str, str] = {
    "base_path": ".",
    "extensions": DEFAULT_EXTENSIONS,
}
_ENV_KEY_MAP: dict[str, str] = {
    "base_path": "UPCHECK_BASE_PATH",
    "extensions": "UPCHECK_EXTENSIONS",
    "composer_home": "UPCHECK_COMPOSER_HOME",
}


@dataclass
class SettingsResolver:
    """Resolve settings while honoring layered configuration."""

    config_filename: str = CONFIG_FILE_NAME
    user_dirs: UserDirs | None = None
    overrides: Mapping[str, str] | None = None
    env: Mapping[str, str] | None = None
    defaults: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        self.user_dirs = self.user_dirs or UserDirs()
        self.overrides = dict(self.overrides or {})
        self.env = os.environ if self.env is None else self.env
        base_defaults = dict(_DEFAULTS)
        base_defaults["composer_home"] = str(self.user_dirs.composer_home())
        if self.defaults:
            base_defaults.update(self.defaults)
        self.defaults = base_defaults

    # ---------- Public API ----------

    def find_project_config(self, start_dir: Path | None = None) -> Path | None:
        """Look for the nearest project config file walking parent directories."""
        start = (Path(start_dir) if start_dir else Path.cwd()).resolve()
        for current in (start, *start.parents):
            candidate = current / self.config_filename
            if candidate.is_file():
                return candidate
        return None

    def resolve_setting(self, key: str, start_dir: Path | None = None) -> str | None:
        """Return the value for `key` using overrides, env, project, user, defaults order."""
        if value := self.overrides.get(key):
            return value
        if value := self._env_value(key):
            return value
        if value := self._project_layer(start_dir).get_str(key):
            return value
        if value := self._user_layer().get_str(key):
            return value
        return self.defaults.get(key)

    def base_path(self, start_dir: Path | None = None) -> Path:
        raw = self.resolve_setting("base_path", start_dir) or "."
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = (Path(start_dir) if start_dir else Path.cwd()) / path
        return path.resolve()

    def extension_entrypoints(self, start_dir: Path | None = None) -> tuple[str, ...]:
        raw = self.resolve_setting("extensions", start_dir) or ""
        return tuple(item.strip() for item in raw.split(",") if item.strip())

    def composer_home(self, start_dir: Path | None = None) -> str:
        return self.resolve_setting("composer_home", start_dir) or str(self.user_dirs.composer_home())

    # ---------- Internal helpers ----------

    def _env_value(self, key: str) -> str | None:
        value = self.env.get(key)
        if value:
            return value
        alias = _ENV_KEY_MAP.get(key)
        if alias:
            return self.env.get(alias)
        return None

    def _project_layer(self, start_dir: Path | None) -> ConfigStore:
        config_path = self.find_project_config(start_dir)
        if config_path is None:
            return ConfigStore(path=Path(self.config_filename))
        return ConfigStore.load(config_path)

    def _user_layer(self) -> ConfigStore:
        return ConfigStore.load(self.user_dirs.config_dir() / self.config_filename)
