"""Base class for extensions and the context handed to them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import MutableMapping

from upcheck_core.events import EventBus
from upcheck_core.settings import SettingsResolver


@dataclass(frozen=True)
class ExtensionContext:
    """Host information surfaced to extensions when they are attached."""

    base_path: Path
    settings: SettingsResolver
    events: EventBus
    environ: MutableMapping[str, str]
    logger: logging.Logger
    start_dir: Path | None = None


class Extension:
    """Adds behaviour to the host through hook methods such as ``on_after_build``.

    Hooks are plain methods; the manager calls every attached extension that
    defines one. Subclasses must be constructible without arguments.
    """

    _context: ExtensionContext | None = None

    def bind(self, context: ExtensionContext) -> None:
        self._context = context

    @property
    def context(self) -> ExtensionContext:
        if self._context is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a host")
        return self._context

    @property
    def is_bound(self) -> bool:
        return self._context is not None
