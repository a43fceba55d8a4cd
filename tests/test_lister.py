"""Tests for package listing and constraint aggregation."""

from __future__ import annotations

from typing import Sequence

from upcheck_composer.lister import UNCONSTRAINED, PackageLister
from upcheck_composer.models import Link, Package


class FakeRepository:
    """In-memory stand-in for a loaded Composer repository."""

    def __init__(self, packages: Sequence[Package], constraints: dict[str, list[str]]) -> None:
        self.packages = list(packages)
        self.constraints = constraints
        self.queries: list[str] = []

    def get_packages(self) -> list[Package]:
        return self.packages

    def get_dependents(self, name: str) -> list[tuple[Package, Link]]:
        self.queries.append(name)
        dependents = []
        for index, constraint in enumerate(self.constraints.get(name, [])):
            source = f"dependent/{index}"
            dependent = Package(pretty_name=source, version="1.0.0")
            dependents.append((dependent, Link(source=source, target=name, constraint=constraint)))
        return dependents


def _package(name: str, package_type: str = "library") -> Package:
    return Package(pretty_name=name, version="1.0.0", type=package_type)


def test_strictest_constraint_is_highest_version() -> None:
    lister = PackageLister(FakeRepository([], {"acme/lib": ["^1.0", "^2.0", "^1.5"]}))
    assert lister.strictest_constraint("acme/lib") == "^2.0"


def test_strictest_constraint_keeps_duplicates() -> None:
    lister = PackageLister(FakeRepository([], {"acme/lib": ["^1.0", "^1.0"]}))
    assert lister.strictest_constraint("acme/lib") == "^1.0"


def test_no_dependents_is_unconstrained() -> None:
    lister = PackageLister(FakeRepository([], {}))
    assert lister.strictest_constraint("acme/lib") is UNCONSTRAINED


def test_strictest_constraint_is_deterministic() -> None:
    repository = FakeRepository([], {"acme/lib": ["~1.2", "^1.2", ">=1.1"]})
    lister = PackageLister(repository)

    results = {lister.strictest_constraint("acme/lib") for _ in range(5)}

    assert len(results) == 1


def test_upper_bounds_compare_by_version_only() -> None:
    lister = PackageLister(FakeRepository([], {"acme/lib": ["^1.5", "<2.0"]}))
    assert lister.strictest_constraint("acme/lib") == "<2.0"


def test_list_packages_without_filter_returns_every_package_once() -> None:
    packages = [
        _package("acme/site", "project"),
        _package("acme/lib"),
        _package("acme/module", "silverstripe-vendormodule"),
    ]
    repository = FakeRepository(packages, {"acme/lib": ["^1.0", "^1.1"]})

    listed = PackageLister(repository).list_packages()

    assert list(listed) == ["acme/site", "acme/lib", "acme/module"]
    assert listed["acme/lib"].package is packages[1]
    assert listed["acme/lib"].constraint == "^1.1"
    assert listed["acme/lib"].is_constrained
    assert listed["acme/site"].constraint is UNCONSTRAINED
    assert not listed["acme/site"].is_constrained


def test_list_packages_filters_by_type() -> None:
    packages = [
        _package("acme/site", "project"),
        _package("acme/lib"),
        _package("acme/module", "silverstripe-vendormodule"),
    ]
    repository = FakeRepository(packages, {})

    listed = PackageLister(repository).list_packages(["library", "silverstripe-vendormodule"])

    assert list(listed) == ["acme/lib", "acme/module"]
    assert repository.queries == ["acme/lib", "acme/module"]


def test_empty_allowed_types_filters_everything() -> None:
    repository = FakeRepository([_package("acme/lib")], {})
    assert PackageLister(repository).list_packages([]) == {}


def test_listed_package_as_dict() -> None:
    package = _package("acme/lib")
    repository = FakeRepository([package], {"acme/lib": ["^1.0"]})

    listed = PackageLister(repository).list_packages()

    assert listed["acme/lib"].as_dict() == {"constraint": "^1.0", "package": package}
