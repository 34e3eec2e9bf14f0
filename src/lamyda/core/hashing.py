"""Content fingerprinting for durable assets."""

from hashlib import sha256

from src.lamyda.core.exceptions import EntityValidationError


def content_digest(content: bytes | None) -> str:
    """Return the SHA-256 hex digest of ``content``.

    Every durable asset row stores this digest. It is not used for
    deduplication: two uploads of identical bytes produce two documents.

    Raises:
        EntityValidationError: If content is None or empty.
    """
    if not content:
        raise EntityValidationError("Cannot fingerprint empty content")
    return sha256(content).hexdigest()
