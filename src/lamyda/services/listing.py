"""Listing refresh after writes."""

from uuid import UUID

from src.lamyda.core.logging import get_logger
from src.lamyda.services.sequential_index import SequentialEntry, SequentialIndexProjector

logger = get_logger(__name__)


class EntityListing[T]:
    """Re-projects a company's entities after a create.

    Writers call ``refresh`` so the new entity and the shifted sequential
    ids are numbered from a fresh fetch.
    """

    def __init__(self, projector: SequentialIndexProjector[T]):
        self.projector = projector

    async def refresh(self, company_id: UUID) -> list[SequentialEntry[T]]:
        snapshot = await self.projector.project(company_id)
        logger.debug("Listing refreshed", company_id=str(company_id), count=len(snapshot))
        return snapshot
