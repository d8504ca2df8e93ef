"""Error mapping middleware.

Handlers let typed failures propagate; this middleware turns them into the
matching status code and body so every route answers the same way.
"""

import logging

from aiohttp import web
from aiohttp.typedefs import Handler

from mdpreview.core.errors import (
    NotFoundError,
    NotMarkdownError,
    RendererUnavailableError,
)
from mdpreview.core.pages import APP_NAME, not_markdown_html

logger = logging.getLogger(__name__)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except NotMarkdownError as err:
        logger.warning(f"{request.path}: {err}")
        return web.Response(
            status=400,
            text=not_markdown_html(APP_NAME, request.path),
            content_type="text/html",
        )
    except NotFoundError as err:
        logger.warning(f"{request.path}: {err}")
        return web.Response(status=404, text=f"Could not find {err.resource}")
    except RendererUnavailableError as err:
        logger.error(f"{request.path}: renderer unavailable: {err.reason}")
        return web.Response(
            status=500,
            text=(
                f"Could not convert markdown: {err.reason}\n\n"
                f"{err.markdown}"
            ),
        )
