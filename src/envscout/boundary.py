"""Request/response boundary exposed to the rest of the application.

Each channel maps to one handler returning JSON-ready data. The transport
(IPC, HTTP, in-process calls) belongs to the host application.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import click
import structlog

from envscout.core.errors import BoundaryError
from envscout.runtime.coordinator import RuntimeCoordinator, get_coordinator

log = structlog.get_logger()

GET_RUNTIME_STATUS = "runtime:get-status"
GET_GIT_REPO_STATUS = "git:get-repo-status"
OPEN_EXTERNAL = "shell:open-external"

CHANNELS = (GET_RUNTIME_STATUS, GET_GIT_REPO_STATUS, OPEN_EXTERNAL)

_EXTERNAL_SCHEMES = frozenset({"http", "https", "mailto"})


def _check_url(url: Any) -> str:
    if not isinstance(url, str) or not url:
        raise BoundaryError.invalid_argument("url", url, "expected a URL")
    scheme = urlparse(url).scheme.lower()
    if scheme not in _EXTERNAL_SCHEMES:
        raise BoundaryError.invalid_argument("url", url, f"unsupported scheme '{scheme}'")
    return url


def open_external(url: str) -> None:
    """Hand a URL to the operating system's default handler."""
    _check_url(url)
    log.info("open_external", url=url)
    click.launch(url)


class BoundaryRouter:
    """Dispatch channel requests to the coordinator."""

    def __init__(
        self,
        coordinator: RuntimeCoordinator | None = None,
        *,
        launcher: Callable[[str], None] = open_external,
    ) -> None:
        self._coordinator = coordinator
        self._launcher = launcher
        self._handlers: dict[str, Callable[..., Any]] = {
            GET_RUNTIME_STATUS: self.get_runtime_status,
            GET_GIT_REPO_STATUS: self.get_git_repo_status,
            OPEN_EXTERNAL: self.open_external,
        }

    @property
    def coordinator(self) -> RuntimeCoordinator:
        return self._coordinator or get_coordinator()

    def get_runtime_status(self) -> dict[str, Any] | None:
        status = self.coordinator.get_runtime_status()
        return status.to_dict() if status is not None else None

    def get_git_repo_status(self, path: str) -> dict[str, Any]:
        if not isinstance(path, str) or not path:
            raise BoundaryError.invalid_argument("path", path, "expected a directory path")
        return self.coordinator.get_git_repo_status(path).to_dict()

    def open_external(self, url: str) -> None:
        self._launcher(_check_url(url))

    def dispatch(self, channel: str, *args: Any) -> Any:
        handler = self._handlers.get(channel)
        if handler is None:
            raise BoundaryError.unknown_channel(channel)
        return handler(*args)
