"""aiohttp server for mdpreview.

Application factory and route registration.
"""

import logging
from collections.abc import Mapping

from aiohttp import web

from mdpreview.api.pages import create_file_routes, create_pages_routes
from mdpreview.api.static import create_static_routes
from mdpreview.app_keys import assets_key, content_source_key, renderer_key
from mdpreview.assets import StaticAsset, load_assets
from mdpreview.config import Config
from mdpreview.core.content import ContentSource, FileContentSource
from mdpreview.core.renderer import MarkdownRenderer, create_renderer
from mdpreview.live import LiveUpdateManager
from mdpreview.live.update import create_live_update_routes
from mdpreview.middleware import error_middleware

logger = logging.getLogger(__name__)

live_update_key = web.AppKey("live_update", LiveUpdateManager)


def create_app(
    config: Config,
    *,
    content_source: ContentSource | None = None,
    renderer: MarkdownRenderer | None = None,
    assets: Mapping[str, StaticAsset] | None = None,
) -> web.Application:
    """Create aiohttp application.

    Collaborators not passed explicitly are built from the configuration.

    Args:
        config: Application configuration
        content_source: Content source (default: files under docs.root)
        renderer: Markdown renderer (default: selected by renderer config)
        assets: Static assets (default: bundled assets)

    Returns:
        Configured aiohttp application
    """
    app = web.Application(middlewares=[error_middleware])

    content_source = content_source or FileContentSource(config.docs.root)
    renderer = renderer or create_renderer(config.renderer)

    app[content_source_key] = content_source
    app[renderer_key] = renderer
    app[assets_key] = assets if assets is not None else load_assets()

    manager = LiveUpdateManager(
        content_source,
        renderer,
        interval=config.live_update.interval,
    )
    app[live_update_key] = manager
    app.on_shutdown.append(_stop_live_update)

    # Order matters: the file route catches every remaining path
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_static_routes())
    app.router.add_routes(create_live_update_routes(manager))
    app.router.add_routes(create_file_routes())

    return app


async def _stop_live_update(app: web.Application) -> None:
    """Stop live update streams on application shutdown."""
    await app[live_update_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(
        f"Serving {config.docs.root.resolve()} "
        f"on http://{config.server.host}:{config.server.port}"
    )
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
