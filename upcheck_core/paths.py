"""Platform-independent helpers for update-checker paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

_DEFAULT_APP_NAME = "upcheck"
_DEFAULT_APP_AUTHOR = "Update Checker"


@dataclass(frozen=True)
class UserDirs:
    """Expose the platform-configured locations for config and cache trees."""

    app_name: str = _DEFAULT_APP_NAME
    app_author: str = _DEFAULT_APP_AUTHOR
    config_dir_override: Path | None = None
    cache_dir_override: Path | None = None

    def config_dir(self) -> Path:
        return (
            self.config_dir_override
            if self.config_dir_override
            else Path(user_config_dir(self.app_name, appauthor=self.app_author))
        )

    def cache_dir(self) -> Path:
        return (
            self.cache_dir_override
            if self.cache_dir_override
            else Path(user_cache_dir(self.app_name, appauthor=self.app_author))
        )

    def composer_home(self) -> Path:
        """Fallback home for the Composer cache when the process has none."""
        return self.cache_dir() / "composer"
