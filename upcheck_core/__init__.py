"""Host runtime pieces for the update checker."""

from .app import BuildStatus, UpdateCheckerApp
from .config import ConfigStore
from .environment import EnvironmentDefaults, apply_environment, plan_environment
from .events import Event, EventBus
from .extension import Extension, ExtensionContext, ExtensionManager
from .paths import UserDirs
from .settings import SettingsResolver
from .workdir import working_directory

__all__ = [
    "BuildStatus",
    "UpdateCheckerApp",
    "ConfigStore",
    "EnvironmentDefaults",
    "apply_environment",
    "plan_environment",
    "Event",
    "EventBus",
    "Extension",
    "ExtensionContext",
    "ExtensionManager",
    "UserDirs",
    "SettingsResolver",
    "working_directory",
]
