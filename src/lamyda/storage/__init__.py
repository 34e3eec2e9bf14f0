"""Object storage adapters."""

from src.lamyda.storage.base import ObjectStorage
from src.lamyda.storage.paths import file_extension, unique_object_path
from src.lamyda.storage.supabase import SupabaseStorage

__all__ = [
    "ObjectStorage",
    "SupabaseStorage",
    "file_extension",
    "unique_object_path",
]
