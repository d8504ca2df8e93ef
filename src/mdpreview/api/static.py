"""Bundled static asset endpoints."""

from aiohttp import web

from mdpreview.app_keys import assets_key
from mdpreview.assets import StaticAsset
from mdpreview.core.cache import is_not_modified, not_modified

# Octicon file suffix to bundled asset name
OCTICON_ASSETS = {
    ".css": "octicons/octicons.css",
    ".eot": "octicons/octicons.eot",
    ".svg": "octicons/octicons.svg",
    ".ttf": "octicons/octicons.ttf",
    ".woff": "octicons/octicons.woff",
    ".woff2": "octicons/octicons.woff2",
}

STYLE_ASSET = "style.css"


def create_static_routes() -> list[web.RouteDef]:
    return [
        web.get("/static/octicons/{file:.*}", octicons),
        web.get("/static/style.css", style),
    ]


async def octicons(request: web.Request) -> web.Response:
    """Serve the octicon font file matching the requested suffix."""
    file = request.match_info["file"]
    for suffix, name in OCTICON_ASSETS.items():
        if file.endswith(suffix):
            return _serve_asset(request, name)
    raise web.HTTPNotFound(text="This file does not exist")


async def style(request: web.Request) -> web.Response:
    return _serve_asset(request, STYLE_ASSET)


def _serve_asset(request: web.Request, name: str) -> web.Response:
    """Serve a bundled asset with conditional GET support.

    Args:
        request: Incoming request
        name: Asset name relative to the static directory

    Returns:
        200 response with the asset bytes, or 304 if the client copy is current

    Raises:
        web.HTTPNotFound: If the asset is not bundled
    """
    asset: StaticAsset | None = request.app[assets_key].get(name)
    if asset is None:
        raise web.HTTPNotFound(text="This file does not exist")

    if is_not_modified(request, asset.etag):
        return not_modified(asset.etag)

    return web.Response(
        body=asset.body,
        content_type=asset.content_type,
        charset=asset.charset,
        headers={"ETag": asset.etag},
    )
