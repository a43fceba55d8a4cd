"""A single TOML configuration layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomllib

CONFIG_FILE_NAME = "upcheck.toml"

logger = logging.getLogger(__name__)


@dataclass
class ConfigStore:
    path: Path
    _store: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def load(cls, path: Path) -> "ConfigStore":
        """Read ``path``; a missing or unreadable file yields an empty store."""

        store = cls(path=path)
        if not path.is_file():
            return store
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("ignoring config file %s: %s", path, exc)
            return store
        for key, value in data.items():
            store.set(key, value)
        return store

    def get(self, key: str, default: Any | None = None) -> Any | None:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def get_str(self, key: str) -> str | None:
        """Return ``key`` as a string; lists are joined with commas."""

        value = self._store.get(key)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        return str(value)
