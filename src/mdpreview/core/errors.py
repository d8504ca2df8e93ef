"""Typed failures surfaced by the content source and markdown renderers.

These are the only failures request handlers let through; the error
middleware maps each of them to a status code and body.
"""


class ContentError(Exception):
    """Base class for content lookup failures."""

    def __init__(self, resource: str, message: str) -> None:
        super().__init__(message)
        self.resource = resource


class NotFoundError(ContentError):
    """The requested resource could not be read."""

    def __init__(self, resource: str) -> None:
        resource = display_resource(resource)
        super().__init__(resource, f"Could not find {resource}")


class NotMarkdownError(ContentError):
    """The requested resource is not a markdown file."""

    def __init__(self, resource: str) -> None:
        resource = display_resource(resource)
        super().__init__(resource, f"{resource} is not a markdown file")


class RendererUnavailableError(Exception):
    """The markdown renderer could not convert the given text."""

    def __init__(self, reason: str, markdown: str = "") -> None:
        super().__init__(f"Could not convert\n{reason}")
        self.reason = reason
        self.markdown = markdown


def display_resource(resource: str) -> str:
    """Strip the relative-root prefix from a resource identifier.

    Args:
        resource: Resource identifier (e.g., "./docs/guide.md")

    Returns:
        Resource as shown to users (e.g., "docs/guide.md")
    """
    if resource.startswith("./"):
        return resource[2:]
    return resource
