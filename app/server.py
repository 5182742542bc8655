"""Process entry point running the API under uvicorn.

Binds a Unix socket when proxied by Nginx, TCP otherwise.
"""

import uvicorn

from app.infrastructure.config import Settings, settings
from app.infrastructure.hosting import mark_initialized, resolve_listen_target


class CatalogServer(uvicorn.Server):
    """uvicorn server that writes the Nginx init file once it listens.

    uvicorn runs the application lifespan before binding its sockets, so
    the init file is written after ``startup`` has bound them.
    """

    def __init__(self, config: uvicorn.Config, app_settings: Settings) -> None:
        super().__init__(config)
        self.app_settings = app_settings

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and not self.should_exit:
            mark_initialized(self.app_settings)


def build_server(app_settings: Settings) -> CatalogServer:
    """Configure the server for the resolved listen target."""
    target = resolve_listen_target(app_settings)
    config = uvicorn.Config(
        "app.main:app",
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_config=None,
        **target.uvicorn_options(),
    )
    return CatalogServer(config, app_settings)


def main() -> None:
    """Run the catalog API."""
    build_server(settings).run()


if __name__ == "__main__":
    main()
