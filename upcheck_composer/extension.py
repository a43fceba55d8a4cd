"""Host extension that loads Composer during the build and lists packages."""

from __future__ import annotations

from typing import Iterable

from upcheck_core.environment import EnvironmentDefaults, apply_environment, plan_environment
from upcheck_core.extension import Extension
from upcheck_core.workdir import working_directory

from .client import Composer, ComposerFactory
from .errors import ComposerNotLoadedError
from .lister import ListedPackage, PackageLister
from .repository import ArrayRepository, CompositeRepository


class ComposerLoaderExtension(Extension):
    """Builds a Composer client from the host's base path after each build."""

    def __init__(self) -> None:
        self._composer: Composer | None = None

    def set_composer(self, composer: Composer) -> "ComposerLoaderExtension":
        self._composer = composer
        return self

    def get_composer(self) -> Composer | None:
        return self._composer

    def get_packages(self, allowed_types: Iterable[str] | None = None) -> dict[str, ListedPackage]:
        """Packages of the project and its lock file, keyed by name.

        Packages whose type is not in ``allowed_types`` are left out; each
        entry carries the strictest constraint any dependent declares, or
        ``None`` when nothing depends on the package.
        """
        return PackageLister(self.get_repository()).list_packages(allowed_types)

    def get_repository(self) -> CompositeRepository:
        """The root package followed by every locally installed package."""

        composer = self._composer
        if composer is None:
            raise ComposerNotLoadedError("composer has not been loaded; run the host build first")
        return CompositeRepository(
            [
                ArrayRepository([composer.get_package()]),
                composer.get_repository_manager().get_local_repository(),
            ]
        )

    def on_after_build(self) -> None:
        self.configure_environment()
        with working_directory(self.context.base_path):
            composer = ComposerFactory(self.context.environ).create()
        self.set_composer(composer)
        self.context.logger.debug(
            "composer loaded from %s (%d locked packages)",
            composer.manifest_path,
            len(composer.get_repository_manager().get_local_repository()),
        )

    def configure_environment(self) -> None:
        """Set the variables Composer needs that the process does not define."""

        context = self.context
        environ = context.environ
        defaults = EnvironmentDefaults(
            composer_home=context.settings.composer_home(context.start_dir)
        )
        apply_environment(plan_environment(dict(environ), defaults), environ)
