"""Server-Sent-Events live update for preview pages.

Every open page subscribes to a stream for its own file. The stream polls the
file at a fixed interval and pushes the re-rendered HTML only when the file
digest changes.
"""

import asyncio
import json
import logging
import weakref

from aiohttp import web

from mdpreview.api.pages import resource_for_path
from mdpreview.config import DEFAULT_POLL_INTERVAL
from mdpreview.core.content import ContentSource
from mdpreview.core.errors import ContentError, RendererUnavailableError
from mdpreview.core.pages import LIVE_UPDATE_PREFIX
from mdpreview.core.renderer import MarkdownRenderer
from mdpreview.core.types import ResourceId, UpdateEvent

logger = logging.getLogger(__name__)

EVENT_NAME = "update"


class LiveUpdateChannel:
    """Digest-gated update source for a single resource.

    The resource is fixed for the lifetime of the channel. A new event is
    produced only when the fetched digest differs from the last pushed one.
    """

    def __init__(
        self,
        resource: ResourceId,
        content_source: ContentSource,
        renderer: MarkdownRenderer,
    ) -> None:
        self._resource = resource
        self._content_source = content_source
        self._renderer = renderer
        self._last_digest: str | None = None

    @property
    def resource(self) -> ResourceId:
        return self._resource

    @property
    def last_digest(self) -> str | None:
        """Hex digest of the last pushed content, None before the first push."""
        return self._last_digest

    async def poll(self) -> UpdateEvent | None:
        """Check the resource for changes.

        Returns:
            UpdateEvent with the rendered content if the digest changed,
            None otherwise

        Raises:
            ContentError: If the resource cannot be fetched
            RendererUnavailableError: If the changed content cannot be rendered
        """
        content = self._content_source.fetch(self._resource)
        if content.hexdigest == self._last_digest:
            return None

        html = await self._renderer.render(content.text)
        self._last_digest = content.hexdigest
        return UpdateEvent(contents=html, digest=content.hexdigest)


class LiveUpdateManager:
    """Serves live update streams and stops them on shutdown."""

    def __init__(
        self,
        content_source: ContentSource,
        renderer: MarkdownRenderer,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the live update manager.

        Args:
            content_source: Source polled for file changes
            renderer: Renderer for changed content
            interval: Seconds between two polls of a stream
        """
        self._content_source = content_source
        self._renderer = renderer
        self._interval = interval
        self._streams: weakref.WeakSet[web.StreamResponse] = weakref.WeakSet()
        self._stopped = asyncio.Event()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active_streams(self) -> int:
        return len(self._streams)

    async def stop(self) -> None:
        """Stop every running poll loop and close all open streams."""
        self._stopped.set()

        for response in list(self._streams):
            try:
                await response.write_eof()
            except ConnectionResetError:
                pass

    async def handle_stream(self, request: web.Request) -> web.StreamResponse:
        """Handle a live update subscription.

        The target is fetched once before the stream opens so a missing or
        non-markdown file is reported with a regular error response.

        Args:
            request: aiohttp request

        Returns:
            Event stream response
        """
        resource = resource_for_path(f"/{request.match_info['path']}")
        self._content_source.fetch(resource)

        response = web.StreamResponse(
            headers={
                "Content-Type": "text/event-stream",
                "Cache-Control": "no-cache",
            },
        )
        await response.prepare(request)

        channel = LiveUpdateChannel(resource, self._content_source, self._renderer)
        self._streams.add(response)
        logger.debug(f"Live update stream opened for {resource}")

        try:
            await self._run(request, response, channel)
        finally:
            self._streams.discard(response)
            logger.debug(f"Live update stream closed for {resource}")

        return response

    async def _run(
        self,
        request: web.Request,
        response: web.StreamResponse,
        channel: LiveUpdateChannel,
    ) -> None:
        """Poll the channel until the client goes away or the manager stops.

        Args:
            request: Subscribing request (used to detect disconnects)
            response: Prepared event stream
            channel: Channel to poll
        """
        while not self._stopped.is_set() and not _disconnected(request):
            try:
                event = await channel.poll()
            except (ContentError, RendererUnavailableError) as err:
                # The file may be mid-write; try again on the next tick.
                logger.debug(f"Live update poll of {channel.resource} failed: {err}")
                event = None

            if event is not None and not self._stopped.is_set():
                try:
                    await response.write(format_event(event))
                except ConnectionResetError:
                    return

            try:
                await asyncio.wait_for(self._stopped.wait(), self._interval)
            except TimeoutError:
                pass


def format_event(event: UpdateEvent) -> bytes:
    """Encode an update event in the Server-Sent-Events wire format.

    Args:
        event: Event to encode

    Returns:
        Encoded event ending with a blank line
    """
    data = json.dumps(event.to_dict())
    return f"event: {EVENT_NAME}\ndata: {data}\n\n".encode()


def _disconnected(request: web.Request) -> bool:
    transport = request.transport
    return transport is None or transport.is_closing()


def create_live_update_routes(manager: LiveUpdateManager) -> list[web.RouteDef]:
    """Create routes for live update streams.

    Args:
        manager: LiveUpdateManager instance

    Returns:
        List of route definitions
    """
    return [web.get(f"{LIVE_UPDATE_PREFIX}/{{path:.*}}", manager.handle_stream)]
