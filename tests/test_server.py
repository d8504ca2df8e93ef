"""Tests for server module."""

from pathlib import Path
from typing import Any

import pytest
from mdpreview.app_keys import assets_key, content_source_key, renderer_key
from mdpreview.config import Config
from mdpreview.core.content import FileContentSource
from mdpreview.core.renderer import OfflineRenderer
from mdpreview.server import create_app, live_update_key


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__builds_collaborators(self, test_config: Config) -> None:
        """Build content source, renderer and assets from configuration."""
        app = create_app(test_config)

        content_source = app[content_source_key]
        assert isinstance(content_source, FileContentSource)
        assert content_source.root == test_config.docs.root.resolve()
        assert isinstance(app[renderer_key], OfflineRenderer)
        assert "style.css" in app[assets_key]
        assert app[live_update_key].interval == test_config.live_update.interval


class TestEndToEnd:
    """Requests against a real folder rendered offline."""

    @pytest.mark.asyncio
    async def test__readme__rendered_then_not_modified(
        self, aiohttp_client: Any, tmp_path: Path, test_config: Config
    ) -> None:
        """Serve README.md, then answer the same validator with 304."""
        (tmp_path / "README.md").write_text("# A Readme\n")
        client = await aiohttp_client(create_app(test_config))

        first = await client.get("/")
        second = await client.get("/", headers={"If-None-Match": first.headers["ETag"]})

        assert first.status == 200
        assert "<h1>A Readme</h1>" in await first.text()
        assert second.status == 304
        assert await second.read() == b""

    @pytest.mark.asyncio
    async def test__nested_file__rendered(
        self, aiohttp_client: Any, tmp_path: Path, test_config: Config
    ) -> None:
        """Serve markdown files below the root."""
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "guide.md").write_text("# Guide\n\nSome *text*.\n")
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/docs/guide.md")

        assert response.status == 200
        body = await response.text()
        assert "<title>guide.md</title>" in body
        assert "<em>text</em>" in body

    @pytest.mark.asyncio
    async def test__text_file__returns_400(
        self, aiohttp_client: Any, tmp_path: Path, test_config: Config
    ) -> None:
        """Refuse to render non-markdown files."""
        (tmp_path / "foo.txt").write_text("plain")
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/foo.txt")

        assert response.status == 400
        assert "foo.txt" in await response.text()

    @pytest.mark.asyncio
    async def test__missing_readme__returns_404(
        self, aiohttp_client: Any, test_config: Config
    ) -> None:
        """Report a folder without README.md."""
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/")

        assert response.status == 404
        assert await response.text() == "Could not find README.md"

    @pytest.mark.asyncio
    async def test__bundled_style__served(
        self, aiohttp_client: Any, test_config: Config
    ) -> None:
        """Serve the bundled stylesheet."""
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/static/style.css")

        assert response.status == 200
        assert ".markdown-body" in await response.text()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("name", "content_type", "magic"),
        [
            ("octicons.css", "text/css; charset=utf-8", b"@font-face"),
            ("octicons.eot", "application/vnd.ms-fontobject", b""),
            ("octicons.svg", "image/svg+xml; charset=utf-8", b"<?xml"),
            ("octicons.ttf", "font/ttf", b"\x00\x01\x00\x00"),
            ("octicons.woff", "font/woff", b"wOFF"),
            ("octicons.woff2", "font/woff2", b"wOF2"),
        ],
    )
    async def test__bundled_octicons__served(
        self,
        aiohttp_client: Any,
        test_config: Config,
        name: str,
        content_type: str,
        magic: bytes,
    ) -> None:
        """Serve every file referenced by the bundled octicons stylesheet."""
        client = await aiohttp_client(create_app(test_config))

        response = await client.get(f"/static/octicons/{name}")

        assert response.status == 200
        assert response.headers["Content-Type"] == content_type
        body = await response.read()
        assert body.startswith(magic)
        assert len(body) > len(magic)
