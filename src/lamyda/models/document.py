"""Document model - durable asset owned by a process."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.lamyda.models.base import utc_now


class Document(SQLModel, table=True):
    """Metadata for a binary promoted to object storage.

    One row per upload: identical bytes uploaded twice produce two rows
    with the same file_hash.
    """

    __tablename__ = "documents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    process_id: UUID = Field(foreign_key="processes.id", index=True)
    kind: str = Field(max_length=20)
    file_name: str = Field(max_length=255)
    file_type: str = Field(max_length=255)
    file_size: int
    file_hash: str = Field(max_length=64, index=True)
    storage_path: str = Field(max_length=1024)
    file_url: str = Field(max_length=2048)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
