"""Repository for Document entity."""

from uuid import UUID

from src.lamyda.models import Document
from src.lamyda.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for Document entity."""

    model = Document

    async def list_for_process(self, process_id: UUID) -> list[Document]:
        """Documents owned by a process, newest first."""
        return await self.list_ordered(Document.process_id == process_id)
