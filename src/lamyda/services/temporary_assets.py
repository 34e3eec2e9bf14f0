"""Client-held binaries waiting for their owning process to exist.

While a process is being composed its rich-text body references inline
images by a locally resolvable preview reference (a ``data:`` URL by
default). The images stay in a TemporaryAssetStore until the process
record exists and the promotion pipeline can give them durable URLs.
Nothing here touches the network or the database; dropping the store
drops the pending assets.
"""

import base64
import mimetypes
import secrets
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO

from src.lamyda.core.exceptions import EntityValidationError
from src.lamyda.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class PendingFile:
    """A binary received from the client that has not been stored yet."""

    file_name: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class TemporaryAsset(PendingFile):
    """Inline image referenced from a rich-text body by ``preview_ref``."""

    local_id: str
    preview_ref: str = field(repr=False)


def guess_content_type(file_name: str, content_type: str | None = None) -> str:
    """Use the declared type, else guess from the file name."""
    if content_type:
        return content_type
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_CONTENT_TYPE


def read_pending_file(
    file: BinaryIO,
    file_name: str,
    content_type: str | None = None,
) -> PendingFile:
    """Read a file object fully into memory.

    Read errors (OSError) propagate to the caller.
    """
    return PendingFile(
        file_name=file_name,
        content_type=guess_content_type(file_name, content_type),
        content=file.read(),
    )


def data_url(content: bytes, content_type: str) -> str:
    """Locally resolvable preview reference for ``content``."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def new_local_id() -> str:
    """Session-unique id: millisecond timestamp plus a random suffix."""
    return f"temp-{time.time_ns() // 1_000_000}-{secrets.token_hex(4)}"


def validate_inline_image(file: PendingFile, max_bytes: int | None) -> None:
    """Reject non-image types and images over ``max_bytes``.

    Raises:
        EntityValidationError: If the file is not an acceptable inline image.
    """
    if not file.content_type.startswith("image/"):
        raise EntityValidationError(
            f"'{file.file_name}' is not an image ({file.content_type})"
        )
    if max_bytes is not None and file.size > max_bytes:
        raise EntityValidationError(
            f"'{file.file_name}' exceeds the inline image limit of {max_bytes} bytes"
        )


AssetListener = Callable[[tuple[TemporaryAsset, ...]], None]


class TemporaryAssetStore:
    """Ordered, in-memory set of pending inline images for one composing session."""

    def __init__(self, max_bytes: int | None = None, images_only: bool = True):
        self.max_bytes = max_bytes
        self.images_only = images_only
        self._assets: list[TemporaryAsset] = []
        self._listeners: list[AssetListener] = []

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[TemporaryAsset]:
        return iter(tuple(self._assets))

    @property
    def assets(self) -> tuple[TemporaryAsset, ...]:
        """Snapshot of pending assets in insertion order."""
        return tuple(self._assets)

    def subscribe(self, listener: AssetListener) -> Callable[[], None]:
        """Register a callback fired with the full asset tuple after each change.

        Returns:
            A function that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(
        self,
        file: BinaryIO,
        file_name: str,
        content_type: str | None = None,
        preview_ref: str | None = None,
    ) -> TemporaryAsset:
        """Read ``file`` and append it as a pending asset.

        Args:
            file: Binary file object; read to the end.
            file_name: Original file name, kept for the durable record.
            content_type: Declared MIME type, guessed from the name when absent.
            preview_ref: Reference the body uses for this image. Defaults to
                a ``data:`` URL of the content.

        Raises:
            OSError: If reading the file fails.
            EntityValidationError: If the file is not an acceptable inline image.
        """
        return self.add_file(read_pending_file(file, file_name, content_type), preview_ref)

    def add_file(self, file: PendingFile, preview_ref: str | None = None) -> TemporaryAsset:
        """Append an already-read file as a pending asset.

        An explicit ``preview_ref`` is stripped and must be a single
        non-blank token not already used by another pending asset.

        Raises:
            EntityValidationError: If the file or its preview reference is rejected.
        """
        if self.images_only:
            validate_inline_image(file, self.max_bytes)
        if preview_ref is None:
            preview_ref = data_url(file.content, file.content_type)
        else:
            preview_ref = self._check_preview_ref(preview_ref, file.file_name)

        asset = TemporaryAsset(
            file_name=file.file_name,
            content_type=file.content_type,
            content=file.content,
            local_id=new_local_id(),
            preview_ref=preview_ref,
        )
        self._assets.append(asset)
        logger.debug("Temporary asset added", local_id=asset.local_id, file_name=asset.file_name)
        self._notify()
        return asset

    def _check_preview_ref(self, preview_ref: str, file_name: str) -> str:
        ref = preview_ref.strip()
        if not ref:
            raise EntityValidationError(f"Preview reference for '{file_name}' is blank")
        if any(char.isspace() for char in ref):
            raise EntityValidationError(f"Preview reference '{ref}' contains whitespace")
        if any(asset.preview_ref == ref for asset in self._assets):
            raise EntityValidationError(f"Preview reference '{ref}' is already in use")
        return ref

    def get(self, local_id: str) -> TemporaryAsset | None:
        return next((a for a in self._assets if a.local_id == local_id), None)

    def remove(self, local_id: str) -> None:
        """Drop a pending asset. Unknown ids are ignored."""
        remaining = [a for a in self._assets if a.local_id != local_id]
        if len(remaining) == len(self._assets):
            return
        self._assets = remaining
        self._notify()

    def clear(self) -> None:
        if not self._assets:
            return
        self._assets = []
        self._notify()

    def _notify(self) -> None:
        snapshot = self.assets
        for listener in list(self._listeners):
            listener(snapshot)
