"""Tests for the uvicorn entry point."""

from pathlib import Path

import pytest
import uvicorn

import app.server as server_module
from app.infrastructure.config import NginxSettings, Settings
from app.server import CatalogServer, build_server


def nginx_settings(tmp_path: Path) -> Settings:
    return Settings(
        nginx=NginxSettings(
            use_nginx=True,
            use_unix_socket=True,
            unix_socket_path=str(tmp_path / "nginx.socket"),
            use_init_file=True,
            init_file_path=str(tmp_path / "app-initialized"),
        )
    )


class TestBuildServer:
    """Tests for server configuration."""

    def test_unix_socket_behind_nginx(self, tmp_path: Path) -> None:
        server = build_server(nginx_settings(tmp_path))

        assert isinstance(server, CatalogServer)
        assert server.config.uds == str(tmp_path / "nginx.socket")
        assert server.config.proxy_headers is True

    def test_tcp_port(self) -> None:
        server = build_server(Settings(port=8080))

        assert server.config.host == "0.0.0.0"
        assert server.config.port == 8080


class TestInitFile:
    """The init file is written only once the server listens."""

    @pytest.mark.asyncio
    async def test_written_after_sockets_are_bound(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        events: list[str] = []
        init_file = tmp_path / "app-initialized"

        async def bind(self, sockets=None) -> None:
            events.append(f"listening, init file exists={init_file.exists()}")
            self.started = True

        monkeypatch.setattr(uvicorn.Server, "startup", bind)
        server = build_server(nginx_settings(tmp_path))

        await server.startup()

        assert events == ["listening, init file exists=False"]
        assert init_file.exists()

    @pytest.mark.asyncio
    async def test_not_written_when_startup_fails(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        async def fail(self, sockets=None) -> None:
            self.should_exit = True

        monkeypatch.setattr(uvicorn.Server, "startup", fail)
        written: list[Settings] = []
        monkeypatch.setattr(server_module, "mark_initialized", written.append)
        server = build_server(nginx_settings(tmp_path))

        await server.startup()

        assert written == []
