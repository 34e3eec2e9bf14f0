"""Document schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class DocumentRead(BaseModel):
    """Durable asset metadata."""

    id: UUID
    process_id: UUID
    kind: str
    file_name: str
    file_type: str
    file_size: int
    file_hash: str
    file_url: str
    created_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class InlineImageRead(BaseModel):
    """Durable URL of an inline image promoted into an existing process."""

    url: str
    document: DocumentRead
