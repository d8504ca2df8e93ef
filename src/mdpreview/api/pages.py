"""Markdown page endpoints.

Renders the folder's README.md at the root path and any other markdown file
at its relative path.
"""

import logging

from aiohttp import web

from mdpreview.app_keys import content_source_key, renderer_key
from mdpreview.core.cache import is_not_modified, not_modified
from mdpreview.core.pages import APP_NAME, base_html, markdown_html
from mdpreview.core.types import INDEX_RESOURCE, ResourceId

logger = logging.getLogger(__name__)


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/", render_index),
    ]


def create_file_routes() -> list[web.RouteDef]:
    """Catch-all file route, registered after every other route."""
    return [
        web.get("/{path:.+}", render_file),
    ]


async def render_index(request: web.Request) -> web.Response:
    return await render_resource(request, INDEX_RESOURCE, INDEX_RESOURCE)


async def render_file(request: web.Request) -> web.Response:
    path = request.path
    title = path.rsplit("/", 1)[-1] or APP_NAME
    return await render_resource(request, resource_for_path(path), title)


async def render_resource(
    request: web.Request, resource: ResourceId, title: str
) -> web.Response:
    """Render a markdown resource as a full page.

    The validator is derived from the markdown source, so a matching
    If-None-Match is answered without rendering.

    Args:
        request: Incoming request
        resource: Resource to render
        title: Page title and file name shown in the readme box

    Returns:
        200 response with the page, or 304 if the client copy is current

    Raises:
        NotFoundError: If the resource cannot be read
        NotMarkdownError: If the resource is not markdown
        RendererUnavailableError: If rendering fails
    """
    content = request.app[content_source_key].fetch(resource)

    etag = content.etag
    if is_not_modified(request, etag):
        return not_modified(etag)

    converted = await request.app[renderer_key].render(content.text)
    logger.debug(f"Rendered {resource} ({content.hexdigest})")

    return web.Response(
        text=base_html(title, markdown_html(title, converted)),
        content_type="text/html",
        headers={"ETag": etag},
    )


def resource_for_path(path: str) -> ResourceId:
    """Map a request path to a resource relative to the served folder.

    Args:
        path: URL path (e.g., "/docs/guide.md")

    Returns:
        Resource identifier (e.g., "./docs/guide.md"), or the index resource
        for the root path
    """
    if path in ("", "/"):
        return INDEX_RESOURCE
    return ResourceId(f".{path}")
