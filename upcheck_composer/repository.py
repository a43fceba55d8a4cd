"""Read-only package repositories and reverse-dependency lookup."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Protocol, Sequence, runtime_checkable

from .models import Link, Package

__all__ = [
    "ArrayRepository",
    "BaseRepository",
    "CompositeRepository",
    "Dependent",
    "LockRepository",
    "Repository",
]

Dependent = tuple[Package, Link]


@runtime_checkable
class Repository(Protocol):
    """The two queries the package lister relies on."""

    def get_packages(self) -> Sequence[Package]:
        ...

    def get_dependents(self, name: str) -> Sequence[Dependent]:
        ...


class BaseRepository(ABC):
    """Shared dependents lookup for repositories that can list packages."""

    @abstractmethod
    def get_packages(self) -> Sequence[Package]:
        """Every package in the repository, in load order."""

    def get_dependents(self, name: str) -> list[Dependent]:
        """Return ``(dependent, link)`` pairs targeting ``name``, one per dependent.

        Results are ordered by dependent name. If a dependent is seen more
        than once the later package wins.
        """
        needle = name.lower()
        found: dict[str, Dependent] = {}
        for package in self.get_packages():
            for link in package.links():
                if link.target == needle:
                    found[link.source] = (package, link)
        return [found[source] for source in sorted(found)]

    def find_package(self, name: str) -> Package | None:
        needle = name.lower()
        for package in self.get_packages():
            if package.name == needle:
                return package
        return None

    def __len__(self) -> int:
        return len(self.get_packages())


class ArrayRepository(BaseRepository):
    """Repository over an in-memory list of packages."""

    def __init__(self, packages: Iterable[Package] = ()) -> None:
        self._packages: tuple[Package, ...] = tuple(packages)

    def get_packages(self) -> tuple[Package, ...]:
        return self._packages


class LockRepository(ArrayRepository):
    """Locally installed packages as recorded by the lock file."""


class CompositeRepository(BaseRepository):
    """Union view over several repositories, in the order given."""

    def __init__(self, repositories: Iterable[Repository]) -> None:
        self._repositories: tuple[Repository, ...] = tuple(repositories)

    def get_packages(self) -> list[Package]:
        packages: list[Package] = []
        for repository in self._repositories:
            packages.extend(repository.get_packages())
        return packages
