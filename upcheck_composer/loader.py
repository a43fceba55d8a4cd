"""Turn manifest and lock documents into package records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .errors import ManifestLoadError
from .models import (
    DEFAULT_PACKAGE_TYPE,
    DEV_REQUIRES,
    REPLACES,
    REQUIRES,
    ROOT_PACKAGE_NAME,
    ROOT_PACKAGE_VERSION,
    Link,
    Package,
    RootPackage,
)

__all__ = [
    "load_json_document",
    "load_lock_packages",
    "load_package",
    "load_root_package",
]

_LINK_SECTIONS: tuple[tuple[str, str, str], ...] = (
    ("require", "requires", REQUIRES),
    ("require-dev", "dev_requires", DEV_REQUIRES),
    ("replace", "replaces", REPLACES),
)


def load_json_document(path: Path) -> dict[str, Any]:
    """Read ``path`` and return its top-level JSON object."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            document = json.load(handle)
    except FileNotFoundError as exc:
        raise ManifestLoadError(path, "file does not exist") from exc
    except OSError as exc:
        raise ManifestLoadError(path, f"file is not readable ({exc.strerror or exc})") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestLoadError(path, f"invalid JSON ({exc})") from exc

    if not isinstance(document, dict):
        raise ManifestLoadError(path, "top-level value must be an object")
    return document


def _optional_string(path: Path, data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ManifestLoadError(path, f"'{key}' must be a string")
    return value.strip() or default


def _required_string(path: Path, data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ManifestLoadError(path, f"{where} is missing a '{key}' string")
    return value.strip()


def _load_links(
    path: Path,
    source: str,
    data: Mapping[str, Any],
    section: str,
    description: str,
) -> tuple[Link, ...]:
    raw = data.get(section)
    if raw is None:
        return ()
    # Composer writes empty link maps as [] in lock files.
    if raw == []:
        return ()
    if not isinstance(raw, dict):
        raise ManifestLoadError(path, f"'{section}' of {source} must be an object")
    links: list[Link] = []
    for target, constraint in raw.items():
        if not isinstance(constraint, str):
            raise ManifestLoadError(
                path, f"constraint for {target} in '{section}' of {source} must be a string"
            )
        links.append(
            Link(
                source=source,
                target=target.lower(),
                constraint=constraint.strip(),
                description=description,
            )
        )
    return tuple(links)


def _link_fields(path: Path, source: str, data: Mapping[str, Any]) -> dict[str, tuple[Link, ...]]:
    return {
        attribute: _load_links(path, source, data, section, description)
        for section, attribute, description in _LINK_SECTIONS
    }


def load_root_package(path: Path, document: Mapping[str, Any]) -> RootPackage:
    """Build the root package from a manifest document."""

    pretty_name = _optional_string(path, document, "name", ROOT_PACKAGE_NAME)
    return RootPackage(
        pretty_name=pretty_name,
        version=_optional_string(path, document, "version", ROOT_PACKAGE_VERSION),
        type=_optional_string(path, document, "type", DEFAULT_PACKAGE_TYPE),
        **_link_fields(path, pretty_name.lower(), document),
    )


def load_package(path: Path, entry: Any, *, position: int) -> Package:
    """Build one locked package from its lock file entry."""

    where = f"package #{position}"
    if not isinstance(entry, dict):
        raise ManifestLoadError(path, f"{where} must be an object")
    pretty_name = _required_string(path, entry, "name", where)
    return Package(
        pretty_name=pretty_name,
        version=_required_string(path, entry, "version", pretty_name),
        type=_optional_string(path, entry, "type", DEFAULT_PACKAGE_TYPE),
        **_link_fields(path, pretty_name.lower(), entry),
    )


def load_lock_packages(path: Path, document: Mapping[str, Any]) -> tuple[Package, ...]:
    """Return the ``packages`` then ``packages-dev`` entries of a lock document."""

    packages: list[Package] = []
    for section in ("packages", "packages-dev"):
        entries = document.get(section)
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise ManifestLoadError(path, f"'{section}' must be a list")
        for entry in entries:
            packages.append(load_package(path, entry, position=len(packages) + 1))
    return tuple(packages)
