"""Core type definitions."""

from dataclasses import dataclass
from typing import NewType

# Path of a markdown resource relative to the served folder
# (e.g., "README.md", "./docs/guide.md")
ResourceId = NewType("ResourceId", str)

INDEX_RESOURCE = ResourceId("README.md")


@dataclass(frozen=True)
class ContentResult:
    """Markdown text together with the digest of its on-disk bytes."""

    text: str
    digest: bytes

    @property
    def hexdigest(self) -> str:
        """Hex form of the digest, as pushed to live-update clients."""
        return self.digest.hex()

    @property
    def etag(self) -> str:
        """Strong validator for pages rendered from this content."""
        return f'"{self.hexdigest}"'


@dataclass(frozen=True)
class UpdateEvent:
    """Payload pushed on the live-update channel."""

    contents: str
    digest: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"contents": self.contents, "hash": self.digest}
