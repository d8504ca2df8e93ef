"""Conditional GET support with content-hash validators.

Pages are validated by the digest of their markdown source, so a matching
``If-None-Match`` is answered before the markdown is rendered. Static assets
are validated by the digest of their fixed payload.
"""

import hashlib

from aiohttp import web


def compute_etag(payload: bytes) -> str:
    """Compute a strong validator for a byte payload.

    Args:
        payload: Bytes served to the client

    Returns:
        Quoted SHA-1 hex digest
    """
    return etag_for_digest(hashlib.sha1(payload, usedforsecurity=False).digest())


def etag_for_digest(digest: bytes) -> str:
    """Format a precomputed digest as a validator.

    Args:
        digest: Raw digest bytes

    Returns:
        Quoted hex digest
    """
    return f'"{digest.hex()}"'


def is_not_modified(request: web.Request, etag: str) -> bool:
    """Check whether the client already holds the current representation.

    The ``If-None-Match`` header is compared verbatim with the validator.

    Args:
        request: Incoming request
        etag: Current validator

    Returns:
        True if the client's cached copy is still valid
    """
    return request.headers.get("If-None-Match") == etag


def not_modified(etag: str) -> web.Response:
    """Build a 304 response carrying the validator and no body."""
    return web.Response(status=304, headers={"ETag": etag})
