"""Listening socket configuration for running behind Nginx.

When proxied through a local Nginx the service listens on a Unix domain
socket and signals readiness by touching an init file. Otherwise it binds
TCP on all interfaces, on ``PORT`` when the platform supplies one.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from app.infrastructure.config import Settings

logger = structlog.get_logger()

ANY_INTERFACE = "0.0.0.0"
DEFAULT_PORT = 5000


@dataclass(frozen=True)
class ListenTarget:
    """Where the ASGI server accepts connections.

    Attributes:
        host: Interface to bind for TCP.
        port: TCP port.
        uds: Unix domain socket path; takes precedence over TCP.
    """

    host: str | None = None
    port: int | None = None
    uds: str | None = None

    @property
    def is_unix_socket(self) -> bool:
        """Whether the target is a Unix domain socket."""
        return self.uds is not None

    def uvicorn_options(self) -> dict[str, Any]:
        """Keyword arguments for ``uvicorn.run``."""
        if self.uds is not None:
            return {"uds": self.uds}
        return {"host": self.host, "port": self.port}


def resolve_listen_target(settings: Settings) -> ListenTarget:
    """Resolve the listening transport from settings.

    Args:
        settings: Application settings.

    Returns:
        Unix socket when Nginx proxies through a socket, else TCP on all
        interfaces using ``PORT`` or the default port.
    """
    if settings.nginx.use_nginx and settings.nginx.use_unix_socket:
        return ListenTarget(uds=settings.nginx.unix_socket_path)

    return ListenTarget(host=ANY_INTERFACE, port=settings.port or DEFAULT_PORT)


def mark_initialized(settings: Settings) -> Path | None:
    """Touch the Nginx init file once the application is ready.

    Returns:
        Path of the init file, or None when the init file is disabled.
    """
    if not (settings.nginx.use_nginx and settings.nginx.use_init_file):
        return None

    path = Path(settings.nginx.init_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)
    logger.info("Init file written", path=str(path))
    return path
