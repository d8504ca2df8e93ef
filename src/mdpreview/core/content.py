"""Markdown content lookup.

Resolves resource identifiers against the served folder and returns the file
text together with a digest of its bytes.
"""

import hashlib
import logging
from pathlib import Path
from typing import Protocol

from mdpreview.core.errors import NotFoundError, NotMarkdownError
from mdpreview.core.types import ContentResult

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


class ContentSource(Protocol):
    """Something that can find markdown content for a resource identifier."""

    def fetch(self, resource: str) -> ContentResult:
        """Return the markdown text and digest for a resource.

        Raises:
            NotFoundError: If the resource cannot be read
            NotMarkdownError: If the resource is not a markdown file
        """
        ...


class FileContentSource:
    """Content source backed by a folder on disk.

    Every resource is looked up relative to ``root``. Resources resolving
    outside of ``root`` are reported as missing.
    """

    def __init__(self, root: Path) -> None:
        """Initialize content source.

        Args:
            root: Folder to serve markdown files from
        """
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        """Resolved folder markdown files are served from."""
        return self._root

    def fetch(self, resource: str) -> ContentResult:
        """Read a markdown file and compute its digest.

        Args:
            resource: Path relative to root (e.g., "README.md", "./docs/a.md")

        Returns:
            ContentResult with the file text and the SHA-1 of its bytes

        Raises:
            NotFoundError: If the file is missing, unreadable or outside root
            NotMarkdownError: If the file does not have a markdown extension
        """
        path = self._resolve(resource)

        if path.suffix.lower() not in MARKDOWN_SUFFIXES:
            logger.warning(
                f"Tried to fetch markdown from {path}, please add .md extension"
            )
            raise NotMarkdownError(resource)

        try:
            data = path.read_bytes()
        except OSError as err:
            logger.error(f"Could not read {path}: {err}")
            raise NotFoundError(resource) from err

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as err:
            logger.error(f"Could not decode {path} as UTF-8: {err}")
            raise NotFoundError(resource) from err

        return ContentResult(text=text, digest=compute_digest(data))

    def _resolve(self, resource: str) -> Path:
        """Resolve a resource identifier to a path inside root.

        Args:
            resource: Path relative to root

        Returns:
            Absolute path of the resource

        Raises:
            NotFoundError: If the path escapes root
        """
        path = (self._root / resource.lstrip("/")).resolve()
        if not path.is_relative_to(self._root):
            logger.warning(f"Refusing to serve {path}: outside of {self._root}")
            raise NotFoundError(resource)
        return path


def compute_digest(data: bytes) -> bytes:
    """Compute the content digest used for cache validators.

    Args:
        data: Raw file bytes

    Returns:
        SHA-1 digest of the bytes
    """
    return hashlib.sha1(data, usedforsecurity=False).digest()
