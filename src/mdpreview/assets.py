"""Bundled static assets.

Locates the stylesheet and octicon files shipped inside the mdpreview
package and loads them once into an immutable mapping.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType

from mdpreview.core.cache import compute_etag

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".css": "text/css",
    ".eot": "application/vnd.ms-fontobject",
    ".svg": "image/svg+xml",
    ".ttf": "font/ttf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
}

TEXT_SUFFIXES = frozenset({".css", ".svg"})


@dataclass(frozen=True)
class StaticAsset:
    """A static file with its validator computed once."""

    name: str
    body: bytes
    content_type: str
    etag: str

    @property
    def charset(self) -> str | None:
        """Charset to declare for text assets."""
        return "utf-8" if Path(self.name).suffix in TEXT_SUFFIXES else None


def get_static_dir() -> Path:
    """Return path to bundled static assets.

    Returns:
        Path to the static directory inside the package.

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    static = files("mdpreview").joinpath("static")
    if not static.is_dir():
        msg = "Bundled static assets not found. Reinstall mdpreview."
        raise FileNotFoundError(msg)
    return Path(str(static))


def load_assets(static_dir: Path | None = None) -> Mapping[str, StaticAsset]:
    """Read every static file into memory.

    Args:
        static_dir: Directory to load from (default: bundled static dir)

    Returns:
        Read-only mapping from relative asset name (e.g., "octicons/octicons.css")
        to asset
    """
    static_dir = static_dir or get_static_dir()
    assets: dict[str, StaticAsset] = {}

    for path in sorted(static_dir.rglob("*")):
        if not path.is_file():
            continue
        content_type = CONTENT_TYPES.get(path.suffix)
        if content_type is None:
            continue

        name = path.relative_to(static_dir).as_posix()
        body = path.read_bytes()
        assets[name] = StaticAsset(
            name=name,
            body=body,
            content_type=content_type,
            etag=compute_etag(body),
        )

    logger.debug(f"Loaded {len(assets)} static assets from {static_dir}")
    return MappingProxyType(assets)
