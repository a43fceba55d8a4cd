"""Attach extensions to the host and dispatch hooks to them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, TypeVar

from upcheck_core.events import EXTENSION_POST_INIT, EXTENSION_PRE_INIT

from .base import Extension, ExtensionContext
from .errors import ExtensionLoadError, ExtensionNotFoundError
from .loader import ExtensionLoader

_E = TypeVar("_E", bound=Extension)


class ExtensionState(Enum):
    """Lifecycle states for extensions."""

    PENDING = "pending"
    ATTACHED = "attached"
    FAILED = "failed"


@dataclass
class ExtensionRecord:
    """Snapshot of an extension the host knows about."""

    id: str
    entrypoint: str | None = None
    extension: Extension | None = None
    state: ExtensionState = ExtensionState.PENDING
    error: str | None = None


def _extension_id(extension: Extension) -> str:
    cls = type(extension)
    return f"{cls.__module__}:{cls.__qualname__}"


class ExtensionManager:
    """Keep attached extensions in order and call their hooks."""

    def __init__(self, context: ExtensionContext) -> None:
        self.context = context
        self._logger = logging.getLogger(__name__)
        self._records: dict[str, ExtensionRecord] = {}

    def attach(self, extension: Extension, *, name: str | None = None) -> ExtensionRecord:
        """Bind ``extension`` to the host context; attaching an id twice is a no-op."""

        extension_id = name or _extension_id(extension)
        record = self._records.get(extension_id)
        if record is not None and record.state == ExtensionState.ATTACHED:
            return record
        if record is None:
            record = ExtensionRecord(id=extension_id)
            self._records[extension_id] = record
        extension.bind(self.context)
        record.extension = extension
        record.state = ExtensionState.ATTACHED
        record.error = None
        return record

    def load(self, entrypoints: Iterable[str]) -> tuple[ExtensionRecord, ...]:
        """Import and attach every entrypoint; a failing one does not stop the rest."""

        loaded: list[ExtensionRecord] = []
        for entrypoint in entrypoints:
            entrypoint = entrypoint.strip()
            if not entrypoint:
                continue
            existing = self._records.get(entrypoint)
            if existing is not None and existing.state == ExtensionState.ATTACHED:
                loaded.append(existing)
                continue
            record = ExtensionRecord(id=entrypoint, entrypoint=entrypoint)
            self._records[entrypoint] = record
            self.context.events.emit(EXTENSION_PRE_INIT, {"extension": entrypoint})
            try:
                extension = ExtensionLoader(entrypoint).load()
            except ExtensionLoadError as exc:
                record.state = ExtensionState.FAILED
                record.error = str(exc)
                self._logger.exception("extension %s failed to load", entrypoint)
            else:
                self.attach(extension, name=entrypoint)
            finally:
                self.context.events.emit(
                    EXTENSION_POST_INIT,
                    {
                        "extension": entrypoint,
                        "state": record.state.value,
                        "error": record.error,
                    },
                )
            loaded.append(record)
        return tuple(loaded)

    def records(self) -> tuple[ExtensionRecord, ...]:
        return tuple(self._records.values())

    def extensions(self) -> tuple[Extension, ...]:
        return tuple(
            record.extension
            for record in self._records.values()
            if record.state == ExtensionState.ATTACHED and record.extension is not None
        )

    def get(self, extension_cls: type[_E]) -> _E | None:
        for extension in self.extensions():
            if isinstance(extension, extension_cls):
                return extension
        return None

    def extend(self, hook: str, *args: Any, **kwargs: Any) -> list[Any]:
        """Call ``hook`` on every attached extension that defines it, in order.

        Exceptions raised by a hook propagate to the caller.
        """
        results: list[Any] = []
        for extension in self.extensions():
            method = getattr(extension, hook, None)
            if not callable(method):
                continue
            self._logger.debug("running %s on %s", hook, type(extension).__name__)
            results.append(method(*args, **kwargs))
        return results

    def call(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        """Forward to the first attached extension that provides ``method_name``."""

        for extension in self.extensions():
            method = getattr(extension, method_name, None)
            if callable(method):
                return method(*args, **kwargs)
        raise ExtensionNotFoundError(f"no attached extension provides {method_name}()")
