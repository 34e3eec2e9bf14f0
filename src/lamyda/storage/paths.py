"""Collision-resistant object names."""

import secrets
import time
from pathlib import PurePosixPath


def file_extension(file_name: str) -> str | None:
    """Lower-cased extension without the dot, or None when the name has none."""
    suffix = PurePosixPath(file_name).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def unique_object_path(
    folder: str,
    file_name: str,
    default_extension: str,
    prefix: str = "",
) -> str:
    """Build ``{folder}/{prefix}{ms_timestamp}-{token}.{ext}``.

    The original file name never appears in the path, only its extension.
    """
    extension = file_extension(file_name) or default_extension
    millis = time.time_ns() // 1_000_000
    name = f"{prefix}{millis}-{secrets.token_hex(8)}.{extension}"
    return f"{folder.strip('/')}/{name}"
