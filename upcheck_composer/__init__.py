"""Composer manifest loading and constraint listing for the update checker."""

from __future__ import annotations

from .client import Composer, ComposerFactory
from .errors import ComposerError, ComposerNotLoadedError, ManifestLoadError
from .extension import ComposerLoaderExtension
from .lister import UNCONSTRAINED, ListedPackage, PackageLister
from .models import Link, Package, RootPackage
from .repository import ArrayRepository, CompositeRepository, LockRepository, Repository
from .versions import compare_versions

__all__ = [
    "Composer",
    "ComposerFactory",
    "ComposerError",
    "ComposerNotLoadedError",
    "ManifestLoadError",
    "ComposerLoaderExtension",
    "UNCONSTRAINED",
    "ListedPackage",
    "PackageLister",
    "Link",
    "Package",
    "RootPackage",
    "ArrayRepository",
    "CompositeRepository",
    "LockRepository",
    "Repository",
    "compare_versions",
]
