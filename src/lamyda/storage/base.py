"""Object storage contract consumed by the promotion pipeline."""

from collections.abc import Sequence
from typing import Protocol


class ObjectStorage(Protocol):
    """Durable blob storage.

    Implementations raise StorageError on any failed operation.
    """

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store ``content`` at ``path``. Must not overwrite an existing object."""
        ...

    def public_url(self, path: str) -> str:
        """Publicly resolvable URL of the object at ``path``."""
        ...

    async def remove(self, paths: Sequence[str]) -> None:
        """Delete objects."""
        ...
