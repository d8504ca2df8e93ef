"""Application keys for type-safe app configuration access."""

from collections.abc import Mapping

from aiohttp import web

from mdpreview.assets import StaticAsset
from mdpreview.core.content import ContentSource
from mdpreview.core.renderer import MarkdownRenderer

content_source_key = web.AppKey("content_source", ContentSource)
renderer_key = web.AppKey("renderer", MarkdownRenderer)
assets_key = web.AppKey("assets", Mapping[str, StaticAsset])
