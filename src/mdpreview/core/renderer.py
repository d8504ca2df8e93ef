"""Markdown to HTML renderers.

Two interchangeable renderers exist: one calling the GitHub markdown API, so
previews match what GitHub shows, and an offline one based on mistune. The
renderer is chosen once at startup by ``create_renderer``.
"""

import logging
from typing import Protocol, TypedDict, cast

import httpx
import mistune

from mdpreview.config import GITHUB_API_URL, RendererConfig
from mdpreview.core.errors import RendererUnavailableError

logger = logging.getLogger(__name__)

OFFLINE_PLUGINS = [
    "strikethrough",
    "footnotes",
    "table",
    "url",
    "task_lists",
    "def_list",
]


class MarkdownRenderer(Protocol):
    """Something that can convert a markdown string to HTML."""

    async def render(self, markdown: str) -> str:
        """Convert markdown to HTML.

        Raises:
            RendererUnavailableError: If the markdown cannot be converted
        """
        ...


class MarkdownRequestDict(TypedDict):
    """JSON body of a GitHub markdown API request."""

    text: str
    mode: str  # "markdown" or "gfm"
    context: str  # repository for gfm references, e.g. "owner/repo"


class GitHubRenderer:
    """Renders markdown through the GitHub REST API.

    When a context repository is configured the request uses ``gfm`` mode so
    issue and pull request references become links.
    """

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        context: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub renderer.

        Args:
            api_url: GitHub API base URL
            context: Repository to render in, of the form "owner/repo"
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url.rstrip("/")
        self.context = context
        self._timeout = timeout
        self._transport = transport

    def build_body(self, markdown: str) -> MarkdownRequestDict:
        """Build the JSON request body for the markdown API.

        Args:
            markdown: Markdown source text

        Returns:
            Request body dictionary
        """
        if self.context:
            return {"text": markdown, "mode": "gfm", "context": self.context}
        return {"text": markdown, "mode": "markdown", "context": ""}

    async def render(self, markdown: str) -> str:
        """Convert markdown to HTML via the GitHub API.

        Args:
            markdown: Markdown source text

        Returns:
            Rendered HTML

        Raises:
            RendererUnavailableError: If the request fails or GitHub answers
                with an error status
        """
        url = f"{self.api_url}/markdown"
        logger.debug(f"Rendering {len(markdown)} characters via {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    json=self.build_body(markdown),
                    headers={"Accept": "application/vnd.github+json"},
                )
        except httpx.HTTPError as err:
            logger.error(f"GitHub markdown request failed: {err!r}")
            raise RendererUnavailableError("Error making request", markdown) from err

        if response.status_code >= 400:
            logger.error(f"GitHub error {response.status_code}: {response.text}")
            raise RendererUnavailableError(response.text, markdown)

        return response.text


class OfflineRenderer:
    """Renders markdown locally with mistune.

    Output may differ slightly from what GitHub produces.
    """

    def __init__(self) -> None:
        """Initialize the mistune parser with GitHub-like extensions."""
        self._markdown = mistune.create_markdown(
            escape=False,
            plugins=OFFLINE_PLUGINS,
        )

    async def render(self, markdown: str) -> str:
        """Convert markdown to HTML.

        Args:
            markdown: Markdown source text

        Returns:
            Rendered HTML
        """
        return cast(str, self._markdown(markdown))


def create_renderer(config: RendererConfig) -> MarkdownRenderer:
    """Create the renderer selected by configuration.

    Args:
        config: Renderer configuration

    Returns:
        OfflineRenderer when offline mode is enabled, GitHubRenderer otherwise
    """
    if config.offline:
        logger.info("Rendering markdown offline with mistune")
        return OfflineRenderer()

    logger.info(f"Rendering markdown with {config.api_url}")
    return GitHubRenderer(config.api_url, config.context)
