"""Immutable package and link records loaded from manifest/lock data."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "DEFAULT_PACKAGE_TYPE",
    "DEV_REQUIRES",
    "Link",
    "Package",
    "REPLACES",
    "REQUIRES",
    "ROOT_PACKAGE_NAME",
    "ROOT_PACKAGE_VERSION",
    "RootPackage",
]

DEFAULT_PACKAGE_TYPE = "library"
ROOT_PACKAGE_NAME = "__root__"
ROOT_PACKAGE_VERSION = "1.0.0+no-version-set"

REQUIRES = "requires"
DEV_REQUIRES = "devRequires"
REPLACES = "replaces"


@dataclass(frozen=True)
class Link:
    """``source`` declares ``constraint`` on ``target``."""

    source: str
    target: str
    constraint: str
    description: str = REQUIRES

    def __str__(self) -> str:
        return f"{self.source} {self.description} {self.target} ({self.constraint})"


@dataclass(frozen=True)
class Package:
    """A package as recorded by the manifest or the lock file."""

    pretty_name: str
    version: str
    type: str = DEFAULT_PACKAGE_TYPE
    requires: tuple[Link, ...] = field(default_factory=tuple)
    dev_requires: tuple[Link, ...] = field(default_factory=tuple)
    replaces: tuple[Link, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.pretty_name.lower()

    @property
    def is_root(self) -> bool:
        return False

    def links(self) -> tuple[Link, ...]:
        """Links that make this package a dependent of their targets.

        Requirements win over replacements for the same target; the root
        package additionally contributes its dev requirements.
        """
        merged: dict[str, Link] = {}
        groups = [self.requires, self.replaces]
        if self.is_root:
            groups.append(self.dev_requires)
        for group in groups:
            for link in group:
                merged.setdefault(link.target, link)
        return tuple(merged.values())

    def __str__(self) -> str:
        return f"{self.pretty_name} {self.version}"


@dataclass(frozen=True)
class RootPackage(Package):
    """The project's own package, read from the manifest."""

    @property
    def is_root(self) -> bool:
        return True
