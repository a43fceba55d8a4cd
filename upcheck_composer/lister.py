"""List packages with the strictest constraint their dependents declare."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from .models import Package
from .repository import Repository
from .versions import version_key

__all__ = [
    "ListedPackage",
    "PackageLister",
    "UNCONSTRAINED",
]

UNCONSTRAINED = None

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListedPackage:
    package: Package
    constraint: str | None = UNCONSTRAINED

    @property
    def is_constrained(self) -> bool:
        return self.constraint is not None

    def as_dict(self) -> dict[str, Any]:
        return {"constraint": self.constraint, "package": self.package}


class PackageLister:
    """Query helper over any :class:`Repository`."""

    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    def list_packages(self, allowed_types: Iterable[str] | None = None) -> dict[str, ListedPackage]:
        """Map package names to their package and strictest constraint.

        When ``allowed_types`` is given, packages whose type is not listed
        are left out. Order follows the repository's enumeration.
        """
        allowed = frozenset(allowed_types) if allowed_types is not None else None
        listed: dict[str, ListedPackage] = {}
        for package in self.repository.get_packages():
            if allowed is not None and package.type not in allowed:
                continue
            listed[package.name] = ListedPackage(
                package=package,
                constraint=self.strictest_constraint(package.name),
            )
        logger.debug("listed %d packages (allowed types: %s)", len(listed), allowed)
        return listed

    def strictest_constraint(self, name: str) -> str | None:
        """Return the highest constraint any dependent places on ``name``.

        This is the last constraint string under version ordering, which
        is not always the most restrictive range. Returns ``UNCONSTRAINED``
        when nothing depends on ``name``.
        """
        constraints = [link.constraint for _, link in self.repository.get_dependents(name)]
        if not constraints:
            return UNCONSTRAINED
        return sorted(constraints, key=version_key)[-1]
