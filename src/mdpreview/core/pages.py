"""HTML page composition.

Pure functions wrapping rendered markdown in the GitHub readme layout and
building the error pages. Text values are escaped; only rendered markdown is
inserted as raw HTML.
"""

from html import escape

APP_NAME = "mdpreview"

# Element replaced by live-update events
CONTENT_ELEMENT_ID = "mdpreview-content"

LIVE_UPDATE_PREFIX = "/__live-update"

STYLESHEETS = (
    "/static/octicons/octicons.css",
    "https://github.githubassets.com/assets/frameworks-146fab5ea30e8afac08dd11013bb4ee0.css",
    "https://github.githubassets.com/assets/site-897ad5fdbe32a5cd67af5d1bdc68a292.css",
    "https://github.githubassets.com/assets/github-c21b6bf71617eeeb67a56b0d48b5bb5c.css",
    "/static/style.css",
)

LIVE_UPDATE_SCRIPT = (
    "let hash = '';"
    f"let source = new EventSource(`//${{location.host}}{LIVE_UPDATE_PREFIX}${{location.pathname}}`);"
    "source.addEventListener('update', (e) => {"
    "let message = JSON.parse(e.data);"
    "if (message.hash !== hash) {"
    "hash = message.hash;"
    f"document.getElementById('{CONTENT_ELEMENT_ID}').innerHTML = message.contents;"
    "}"
    "});"
)


def base_html(title: str, content: str) -> str:
    """Build a complete document around a body fragment.

    The head links the stylesheets and subscribes to the live-update stream
    of the current path.

    Args:
        title: Document title
        content: Body HTML

    Returns:
        Full HTML document
    """
    links = "".join(f'<link rel="stylesheet" href="{href}">' for href in STYLESHEETS)
    return (
        "<!DOCTYPE html>"
        "<html>"
        f"<head>{links}<title>{escape(title)}</title>"
        f"<script>{LIVE_UPDATE_SCRIPT}</script></head>"
        f"<body>{content}</body>"
        "</html>"
    )


def markdown_html(file_name: str, md_content: str) -> str:
    """Wrap rendered markdown in the readme box layout.

    Args:
        file_name: Name shown in the box header
        md_content: Rendered markdown HTML

    Returns:
        HTML fragment
    """
    return (
        '<div class="page">'
        '<div id="preview-page" class="preview-page">'
        '<div role="main" class="main-content">'
        '<div class="container new-discussion-timeline experiment-repo-nav">'
        '<div class="repository-content">'
        '<div id="readme" class="readme boxed-group clearfix announce instapaper_body md">'
        f'<h3><span class="octicon octicon-book"></span> {escape(file_name)}</h3>'
        f'<article id="{CONTENT_ELEMENT_ID}" class="markdown-body entry-content" itemprop="text">'
        f"{md_content}"
        "</article>"
        "</div>"
        "</div>"
        "</div>"
        "</div>"
        "</div>"
        "<div>&nbsp;</div>"
        "</div>"
    )


def not_markdown_html(title: str, file: str) -> str:
    """Build the error page for a file that is not markdown."""
    return (
        "<!DOCTYPE html>"
        "<html>"
        f"<head><title>{escape(title)}</title></head>"
        "<body>"
        "<h1>Not a Markdown File</h1>"
        f"<p><strong>{escape(file)}</strong> is not a markdown file and cannot be rendered</p>"
        "</body>"
        "</html>"
    )


def not_found_html(title: str, file: str) -> str:
    """Build the error page for a missing file."""
    return (
        "<!DOCTYPE html>"
        "<html>"
        f"<head><title>{escape(title)}</title></head>"
        "<body>"
        f"<h1>Couldn't find {escape(file)}</h1>"
        f"<p>For the index page <em>{APP_NAME}</em> will look for a file named "
        "README in the root folder. Otherwise it looks for an exact file name.</p>"
        "</body>"
        "</html>"
    )
