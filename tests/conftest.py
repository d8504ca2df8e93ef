"""Shared test fixtures."""

import hashlib
from collections.abc import Mapping
from pathlib import Path

import pytest
from aiohttp import web
from mdpreview.assets import StaticAsset, load_assets
from mdpreview.config import Config
from mdpreview.core.errors import ContentError, RendererUnavailableError
from mdpreview.core.types import ContentResult
from mdpreview.server import create_app


class FakeContentSource:
    """Content source returning fixed text and recording requested resources.

    ``text`` may be reassigned between fetches to simulate file edits, and
    ``error`` set to make every fetch fail.
    """

    def __init__(self, text: str = "# A Readme") -> None:
        self.text = text
        self.error: ContentError | None = None
        self.seen: list[str] = []

    def fetch(self, resource: str) -> ContentResult:
        self.seen.append(resource)
        if self.error is not None:
            raise self.error
        data = self.text.encode("utf-8")
        return ContentResult(text=self.text, digest=hashlib.sha1(data).digest())


class FakeRenderer:
    """Renderer returning fixed HTML and counting calls."""

    def __init__(self, html: str = "<h1>A Readme</h1>") -> None:
        self.html = html
        self.error: RendererUnavailableError | None = None
        self.calls: list[str] = []

    async def render(self, markdown: str) -> str:
        self.calls.append(markdown)
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture
def content_source() -> FakeContentSource:
    return FakeContentSource()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create a static directory with a stylesheet and two octicon files."""
    static = tmp_path / "static"
    (static / "octicons").mkdir(parents=True)
    (static / "style.css").write_text("body { margin: 0; }\n")
    (static / "octicons" / "octicons.css").write_text(".octicon { display: inline-block; }\n")
    (static / "octicons" / "octicons.woff2").write_bytes(b"wOF2\x00\x01fake-font")
    return static


@pytest.fixture
def assets(static_dir: Path) -> Mapping[str, StaticAsset]:
    return load_assets(static_dir)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration serving tmp_path with a short poll interval."""
    return Config.load(_write_config(tmp_path))


@pytest.fixture
def app(
    test_config: Config,
    content_source: FakeContentSource,
    renderer: FakeRenderer,
    assets: Mapping[str, StaticAsset],
) -> web.Application:
    """Create app wired to the fake content source and renderer."""
    return create_app(
        test_config,
        content_source=content_source,
        renderer=renderer,
        assets=assets,
    )


def _write_config(config_dir: Path) -> Path:
    config_file = config_dir / "mdpreview.toml"
    config_file.write_text("""
[renderer]
offline = true

[live_update]
interval = 0.01
""")
    return config_file

