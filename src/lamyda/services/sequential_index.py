"""Sequential ids: compact, snapshot-scoped addresses for company entities.

Listing and detail screens address areas, teams and processes by their
1-based position in the company's collection ordered newest first, so the
durable UUIDs never appear in navigation. The numbering is recomputed on
every fetch and never stored: a create or delete between two fetches
shifts the numbers, and a resolve may then land on a different entity than
an earlier listing implied.

Entities that share a created_at keep the order the store returned them in
(the sort is stable); no further tie-break is applied.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from operator import attrgetter
from uuid import UUID


@dataclass(frozen=True)
class SequentialEntry[T]:
    """An entity paired with its sequential id within one snapshot."""

    sequential_id: int
    entity: T


def project_snapshot[T](
    entities: Sequence[T],
    created_at: Callable[[T], datetime] = attrgetter("created_at"),
) -> list[SequentialEntry[T]]:
    """Order ``entities`` newest first and number them from 1."""
    ordered = sorted(entities, key=created_at, reverse=True)
    return [SequentialEntry(index + 1, entity) for index, entity in enumerate(ordered)]


def parse_sequential_id(value: int | str) -> int | None:
    """Coerce a route value to a positive int, or None if it cannot be one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    return number if number >= 1 else None


def resolve_in_snapshot[T](
    snapshot: Sequence[SequentialEntry[T]],
    sequential_id: int | str,
) -> SequentialEntry[T] | None:
    """Entry at ``sequential_id`` or None when it is outside ``1..len(snapshot)``."""
    number = parse_sequential_id(sequential_id)
    if number is None or number > len(snapshot):
        return None
    return snapshot[number - 1]


class SequentialIndexProjector[T]:
    """Project a company's entity collection into sequential ids and back.

    Args:
        fetch: Loads every active entity of a company.
        created_at: Extracts the creation timestamp used for ordering.
    """

    def __init__(
        self,
        fetch: Callable[[UUID], Awaitable[Sequence[T]]],
        created_at: Callable[[T], datetime] = attrgetter("created_at"),
    ):
        self._fetch = fetch
        self._created_at = created_at

    async def project(self, company_id: UUID) -> list[SequentialEntry[T]]:
        """Fetch the company's entities and number them newest first."""
        entities = await self._fetch(company_id)
        return project_snapshot(entities, self._created_at)

    async def resolve(
        self, company_id: UUID, sequential_id: int | str
    ) -> SequentialEntry[T] | None:
        """Re-fetch and return the entry at ``sequential_id``.

        Returns None for ids below 1, above the current count, or not
        numeric. Invalid ids short-circuit without a fetch.
        """
        if parse_sequential_id(sequential_id) is None:
            return None
        return resolve_in_snapshot(await self.project(company_id), sequential_id)
