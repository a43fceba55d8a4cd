"""Import extension classes from ``module:Class`` entrypoints."""

from __future__ import annotations

import importlib

from .base import Extension
from .errors import ExtensionLoadError


class ExtensionLoader:
    """Responsible for importing and instantiating a single extension."""

    def __init__(self, entrypoint: str) -> None:
        self.entrypoint = entrypoint.strip()
        self._module_path, self._attribute = self._split_entrypoint(self.entrypoint)

    def load(self) -> Extension:
        extension_cls = self._import_extension_class()
        try:
            return extension_cls()
        except Exception as exc:
            raise ExtensionLoadError(
                f"extension {self.entrypoint} failed to initialize: {exc}"
            ) from exc

    def _split_entrypoint(self, entrypoint: str) -> tuple[str, str]:
        if ":" in entrypoint:
            module_path, attribute = entrypoint.split(":", 1)
        elif "." in entrypoint:
            module_path, attribute = entrypoint.rsplit(".", 1)
        else:
            raise ExtensionLoadError(f"entrypoint {entrypoint!r} is not a module path")

        if not module_path or not attribute:
            raise ExtensionLoadError(f"entrypoint {entrypoint!r} is incomplete")
        return module_path, attribute

    def _import_extension_class(self) -> type[Extension]:
        try:
            module = importlib.import_module(self._module_path)
        except Exception as exc:
            raise ExtensionLoadError(
                f"unable to import module {self._module_path}: {exc}"
            ) from exc

        try:
            extension_cls = getattr(module, self._attribute)
        except AttributeError as exc:
            raise ExtensionLoadError(
                f"module {self._module_path} does not expose {self._attribute}"
            ) from exc

        if not isinstance(extension_cls, type) or not issubclass(extension_cls, Extension):
            raise ExtensionLoadError(
                f"{self._attribute} in {self._module_path} is not an Extension subclass"
            )
        return extension_cls
