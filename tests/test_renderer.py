"""Tests for markdown renderers."""

import json

import httpx
import pytest
from mdpreview.config import RendererConfig
from mdpreview.core.errors import RendererUnavailableError
from mdpreview.core.renderer import GitHubRenderer, OfflineRenderer, create_renderer


def _transport(
    requests: list[httpx.Request], *, status: int = 200, body: str = "<h1>A thing!</h1>"
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


class TestGitHubRenderer:
    """Tests for GitHubRenderer.render()."""

    @pytest.mark.asyncio
    async def test__markdown__posts_markdown_mode_request(self) -> None:
        """Send the text in markdown mode without a context."""
        requests: list[httpx.Request] = []
        renderer = GitHubRenderer(
            "https://github.example.com/api", transport=_transport(requests)
        )

        html = await renderer.render("# A thing!")

        assert html == "<h1>A thing!</h1>"
        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == "https://github.example.com/api/markdown"
        assert json.loads(requests[0].content) == {
            "text": "# A thing!",
            "mode": "markdown",
            "context": "",
        }

    @pytest.mark.asyncio
    async def test__context__posts_gfm_mode_request(self) -> None:
        """Use gfm mode with the repository context when one is configured."""
        requests: list[httpx.Request] = []
        renderer = GitHubRenderer(
            "https://github.example.com/api/",
            "owner/repo",
            transport=_transport(requests),
        )

        await renderer.render("# A thing!")

        assert str(requests[0].url) == "https://github.example.com/api/markdown"
        assert json.loads(requests[0].content) == {
            "text": "# A thing!",
            "mode": "gfm",
            "context": "owner/repo",
        }

    @pytest.mark.asyncio
    async def test__error_status__raises_renderer_unavailable(self) -> None:
        """Answers with status >= 400 carry GitHub's message as the reason."""
        renderer = GitHubRenderer(
            transport=_transport([], status=400, body="Github error message")
        )

        with pytest.raises(RendererUnavailableError) as exc_info:
            await renderer.render("# A thing!")

        assert exc_info.value.reason == "Github error message"
        assert exc_info.value.markdown == "# A thing!"

    @pytest.mark.asyncio
    async def test__connection_error__raises_renderer_unavailable(self) -> None:
        """Transport failures are reported as renderer unavailable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        renderer = GitHubRenderer(transport=httpx.MockTransport(handler))

        with pytest.raises(RendererUnavailableError, match="Error making request"):
            await renderer.render("# A thing!")


class TestOfflineRenderer:
    """Tests for OfflineRenderer.render()."""

    @pytest.mark.asyncio
    async def test__heading__renders_html(self) -> None:
        """Render markdown locally."""
        html = await OfflineRenderer().render("# A thing!")

        assert "<h1>A thing!</h1>" in html

    @pytest.mark.asyncio
    async def test__table__renders_table(self) -> None:
        """GitHub-style tables are supported."""
        html = await OfflineRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n")

        assert "<table>" in html
        assert "<td>1</td>" in html

    @pytest.mark.asyncio
    async def test__strikethrough__renders_del(self) -> None:
        """GitHub-style strikethrough is supported."""
        html = await OfflineRenderer().render("~~gone~~")

        assert "<del>gone</del>" in html

    @pytest.mark.asyncio
    async def test__raw_html__is_kept(self) -> None:
        """Inline HTML passes through like on GitHub."""
        html = await OfflineRenderer().render('<div align="center">hi</div>\n')

        assert '<div align="center">hi</div>' in html


class TestCreateRenderer:
    """Tests for create_renderer()."""

    def test__offline__returns_offline_renderer(self) -> None:
        """Offline mode selects the local parser."""
        renderer = create_renderer(RendererConfig(offline=True))

        assert isinstance(renderer, OfflineRenderer)

    def test__online__returns_github_renderer(self) -> None:
        """Online mode selects the GitHub API with the configured context."""
        renderer = create_renderer(
            RendererConfig(api_url="https://ghe.example.com/api/v3", context="o/r")
        )

        assert isinstance(renderer, GitHubRenderer)
        assert renderer.api_url == "https://ghe.example.com/api/v3"
        assert renderer.context == "o/r"
