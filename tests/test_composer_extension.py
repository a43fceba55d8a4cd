"""End-to-end tests for the Composer loader extension inside the host build."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from upcheck_composer import ComposerLoaderExtension, ComposerNotLoadedError, ManifestLoadError
from upcheck_core.app import UpdateCheckerApp
from upcheck_core.events import BUILD_AFTER, BUILD_BEFORE
from upcheck_core.extension import ExtensionNotFoundError
from upcheck_core.paths import UserDirs
from upcheck_core.settings import DEFAULT_EXTENSIONS, SettingsResolver

MANIFEST = {
    "name": "acme/site",
    "type": "project",
    "require": {"php": ">=8.1", "acme/lib": "^1.0", "acme/theme": "^2.0"},
}
LOCK = {
    "packages": [
        {"name": "acme/lib", "version": "1.2.0", "type": "library"},
        {
            "name": "acme/theme",
            "version": "2.0.3",
            "type": "silverstripe-theme",
            "require": {"acme/lib": "^1.1"},
        },
    ],
    "packages-dev": [],
}


def _write_project(root: Path, manifest: dict[str, Any] | None = MANIFEST) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (root / "composer.json").write_text(json.dumps(manifest), encoding="utf-8")
    (root / "composer.lock").write_text(json.dumps(LOCK), encoding="utf-8")
    return root


def _build_app(tmp_path: Path, environ: dict[str, str], **kwargs: Any) -> UpdateCheckerApp:
    user_dirs = UserDirs(
        config_dir_override=tmp_path / "user-config",
        cache_dir_override=tmp_path / "user-cache",
    )
    settings = SettingsResolver(user_dirs=user_dirs, env=environ)
    return UpdateCheckerApp(
        start_dir=tmp_path,
        settings=settings,
        environ=environ,
        **kwargs,
    )


def test_build_loads_composer_and_lists_filtered_packages(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site")
    environ = {"HOME": "/home/deploy", "UPCHECK_BASE_PATH": str(site)}
    app = _build_app(tmp_path, environ)

    status = app.build()

    assert status.base_path == site.resolve()
    assert status.extensions == (DEFAULT_EXTENSIONS,)
    assert status.failed == ()

    libraries = app.get_packages(["library"])
    assert list(libraries) == ["acme/lib"]
    assert libraries["acme/lib"].constraint == "^1.1"
    assert libraries["acme/lib"].package.version == "1.2.0"

    everything = app.get_packages()
    assert list(everything) == ["acme/site", "acme/lib", "acme/theme"]
    assert everything["acme/site"].package.type == "project"
    assert everything["acme/site"].constraint is None
    assert everything["acme/theme"].constraint == "^2.0"


def test_build_restores_working_directory(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site")
    original = Path.cwd()
    app = _build_app(tmp_path, {"HOME": "/home/deploy"}, base_path=site)

    app.build()

    assert Path.cwd() == original


def test_missing_manifest_fails_the_build(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site", manifest=None)
    original = Path.cwd()
    extension = ComposerLoaderExtension()
    app = _build_app(
        tmp_path,
        {"HOME": "/home/deploy", "UPCHECK_EXTENSIONS": ","},
        base_path=site,
        extensions=[extension],
    )

    with pytest.raises(ManifestLoadError):
        app.build()

    assert Path.cwd() == original
    assert extension.get_composer() is None
    with pytest.raises(ComposerNotLoadedError):
        app.get_packages()


def test_build_configures_environment(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site")
    environ = {
        "UPCHECK_OUTBOUND_PROXY": "proxy.internal",
        "UPCHECK_OUTBOUND_PROXY_PORT": "3128",
    }
    app = _build_app(tmp_path, environ, base_path=site)

    app.build()

    assert environ["COMPOSER_HOME"] == str(tmp_path / "user-cache" / "composer")
    assert environ["CGI_HTTP_PROXY"] == "tcp://proxy.internal:3128"


def test_composer_home_from_project_config_in_start_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    site = _write_project(tmp_path / "site")
    (tmp_path / "upcheck.toml").write_text('composer_home = "/custom/composer"', encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    environ: dict[str, str] = {}
    app = _build_app(tmp_path, environ, base_path=site)

    app.build()

    assert environ["COMPOSER_HOME"] == "/custom/composer"


def test_build_emits_events_around_hooks(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site")
    app = _build_app(tmp_path, {"HOME": "/home/deploy"}, base_path=site)
    seen: list[str] = []

    def before(event) -> None:
        seen.append(event.name)
        extension = app.extensions.get(ComposerLoaderExtension)
        assert extension is not None
        assert extension.get_composer() is None

    app.events.on(BUILD_BEFORE, before)
    app.events.on(BUILD_AFTER, lambda event: seen.append(event.name))

    app.build()

    assert seen == [BUILD_BEFORE, BUILD_AFTER]
    assert app.status()["extensions"] == DEFAULT_EXTENSIONS


def test_failed_extension_entrypoint_is_reported(tmp_path: Path) -> None:
    site = _write_project(tmp_path / "site")
    environ = {"HOME": "/home/deploy", "UPCHECK_EXTENSIONS": f"{DEFAULT_EXTENSIONS},missing_pkg:Nope"}
    app = _build_app(tmp_path, environ, base_path=site)

    status = app.build()

    assert status.extensions == (DEFAULT_EXTENSIONS,)
    assert status.failed == ("missing_pkg:Nope",)


def test_extension_module_failing_at_import_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.syspath_prepend(str(Path(__file__).parent / "fixtures" / "extensions"))
    site = _write_project(tmp_path / "site")
    environ = {
        "HOME": "/home/deploy",
        "UPCHECK_EXTENSIONS": f"{DEFAULT_EXTENSIONS},failing_import_extensions:Anything",
    }
    app = _build_app(tmp_path, environ, base_path=site)

    status = app.build()

    assert status.extensions == (DEFAULT_EXTENSIONS,)
    assert status.failed == ("failing_import_extensions:Anything",)
    assert list(app.get_packages(["library"])) == ["acme/lib"]


def test_get_packages_without_extensions(tmp_path: Path) -> None:
    app = _build_app(tmp_path, {"HOME": "/home/deploy"}, base_path=tmp_path)
    with pytest.raises(ExtensionNotFoundError):
        app.get_packages()


def test_extension_can_be_used_without_the_host(tmp_path: Path) -> None:
    from upcheck_composer import ComposerFactory

    site = _write_project(tmp_path / "site")
    extension = ComposerLoaderExtension().set_composer(ComposerFactory(env={}).create(site))

    listed = extension.get_packages(["silverstripe-theme"])

    assert list(listed) == ["acme/theme"]
