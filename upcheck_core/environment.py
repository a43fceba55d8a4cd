"""Process environment settings Composer needs before it is constructed.

Composer refuses to start without a home directory for its cache, and its
HTTP layer reads proxy settings from ``CGI_HTTP_PROXY``. The host exposes
the proxy as separate host and port variables, so they are translated here.

Planning is a pure function over a snapshot of the environment; applying
the plan is a separate, explicit step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, MutableMapping

__all__ = [
    "COMPOSER_HOME_VAR",
    "EnvironmentDefaults",
    "HOME_VARS",
    "PROXY_HOST_VAR",
    "PROXY_PORT_VAR",
    "PROXY_URL_VAR",
    "apply_environment",
    "plan_environment",
]

COMPOSER_HOME_VAR = "COMPOSER_HOME"
HOME_VARS = ("HOME", COMPOSER_HOME_VAR)
PROXY_HOST_VAR = "UPCHECK_OUTBOUND_PROXY"
PROXY_PORT_VAR = "UPCHECK_OUTBOUND_PROXY_PORT"
PROXY_URL_VAR = "CGI_HTTP_PROXY"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentDefaults:
    composer_home: str


def _proxy_url(host: str, port: str) -> str | None:
    port = port.strip()
    if not port.isdigit():
        logger.warning("ignoring outbound proxy %s: port %r is not a number", host, port)
        return None
    return f"tcp://{host.strip()}:{int(port)}"


def plan_environment(snapshot: Mapping[str, str], defaults: EnvironmentDefaults) -> dict[str, str]:
    """Return the variables that must be set, given the current ``snapshot``."""

    updates: dict[str, str] = {}
    if not any(snapshot.get(name) for name in HOME_VARS):
        updates[COMPOSER_HOME_VAR] = defaults.composer_home

    host = snapshot.get(PROXY_HOST_VAR)
    port = snapshot.get(PROXY_PORT_VAR)
    if host and port and not snapshot.get(PROXY_URL_VAR):
        url = _proxy_url(host, port)
        if url is not None:
            updates[PROXY_URL_VAR] = url
    return updates


def apply_environment(updates: Mapping[str, str], environ: MutableMapping[str, str]) -> None:
    for name, value in updates.items():
        logger.debug("setting %s=%s", name, value)
        environ[name] = value
