"""Host application that runs the build phase and its extension hooks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, MutableMapping, Sequence

from upcheck_core.events import BUILD_AFTER, BUILD_BEFORE, EventBus
from upcheck_core.extension import (
    Extension,
    ExtensionContext,
    ExtensionManager,
    ExtensionState,
)
from upcheck_core.paths import UserDirs
from upcheck_core.settings import SettingsResolver


@dataclass(frozen=True)
class BuildStatus:
    base_path: Path
    extensions: Sequence[str]
    failed: Sequence[str]


class UpdateCheckerApp:
    """Entry point that glues settings, events and extensions together."""

    def __init__(
        self,
        *,
        base_path: Path | str | None = None,
        start_dir: Path | str | None = None,
        settings: SettingsResolver | None = None,
        user_dirs: UserDirs | None = None,
        environ: MutableMapping[str, str] | None = None,
        extensions: Iterable[Extension] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("upcheck_core.app")
        self.environ = os.environ if environ is None else environ
        self.start_dir = Path(start_dir) if start_dir is not None else None
        self.settings = settings or SettingsResolver(
            user_dirs=user_dirs or UserDirs(),
            env=self.environ,
        )
        self.base_path = (
            Path(base_path).resolve()
            if base_path is not None
            else self.settings.base_path(self.start_dir)
        )
        self.events = EventBus()
        self.extensions = ExtensionManager(
            ExtensionContext(
                base_path=self.base_path,
                settings=self.settings,
                events=self.events,
                environ=self.environ,
                logger=self.logger,
                start_dir=self.start_dir,
            )
        )
        for extension in extensions:
            self.extensions.attach(extension)
        self._configured = False

    def _load_configured_extensions(self) -> None:
        if self._configured:
            return
        entrypoints = self.settings.extension_entrypoints(self.start_dir)
        self.logger.debug("loading extensions: %s", ", ".join(entrypoints) or "none")
        self.extensions.load(entrypoints)
        self._configured = True

    def build(self) -> BuildStatus:
        """Run the build phase: attach configured extensions, then ``on_after_build``."""

        self._load_configured_extensions()
        self.events.emit(BUILD_BEFORE, {"base_path": str(self.base_path)})
        self.extensions.extend("on_after_build")
        self.events.emit(BUILD_AFTER, {"base_path": str(self.base_path)})
        records = self.extensions.records()
        return BuildStatus(
            base_path=self.base_path,
            extensions=tuple(r.id for r in records if r.state == ExtensionState.ATTACHED),
            failed=tuple(r.id for r in records if r.state == ExtensionState.FAILED),
        )

    def get_packages(self, allowed_types: Iterable[str] | None = None) -> dict[str, Any]:
        """Forward to the first extension that lists packages."""

        return self.extensions.call("get_packages", allowed_types)

    def status(self) -> dict[str, str]:
        extensions = ", ".join(record.id for record in self.extensions.records()) or "none"
        return {
            "base_path": str(self.base_path),
            "extensions": extensions,
        }
