"""Typed errors raised while loading Composer manifests."""

from __future__ import annotations

from pathlib import Path


class ComposerError(RuntimeError):
    """Base Composer integration error."""


class ManifestLoadError(ComposerError):
    """The manifest or lock file is missing, unreadable or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"unable to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ComposerNotLoadedError(ComposerError):
    """Packages were queried before the Composer client was built."""
