"""Host extension support."""

from .base import Extension, ExtensionContext
from .errors import ExtensionError, ExtensionLoadError, ExtensionNotFoundError
from .loader import ExtensionLoader
from .manager import ExtensionManager, ExtensionRecord, ExtensionState

__all__ = [
    "Extension",
    "ExtensionContext",
    "ExtensionLoader",
    "ExtensionManager",
    "ExtensionRecord",
    "ExtensionState",
    "ExtensionError",
    "ExtensionLoadError",
    "ExtensionNotFoundError",
]
