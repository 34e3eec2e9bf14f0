"""Base repository with common CRUD operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def update_fields(self, id: UUID, values: dict[str, Any]) -> int:
        """Issue a single UPDATE for the given columns of one row.

        Works on the table directly, so ORM instances held elsewhere are
        not touched.

        Returns:
            Number of rows matched (0 when the row no longer exists).
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .values(**values)
        )
        return result.rowcount

    async def list_ordered(self, *criteria: Any, order_by: Any = None) -> list[ModelType]:
        """Select every row matching ``criteria``.

        Args:
            criteria: SQLAlchemy filter expressions, AND-ed together.
            order_by: Ordering clause. Defaults to created_at descending
                (newest first).
        """
        if order_by is None:
            order_by = self.model.created_at.desc()  # type: ignore[attr-defined]
        result = await self.session.execute(
            select(self.model).where(*criteria).order_by(order_by)
        )
        return list(result.scalars().all())
