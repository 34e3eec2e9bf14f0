"""In-memory stand-ins for the session, repositories and object storage.

FakeSession keeps committed rows in a list; the fake repositories query
that list so services see exactly what they committed. Failures are
injected with predicates over the pending rows or uploaded bytes.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.exc import OperationalError

from src.lamyda.core.exceptions import StorageError
from src.lamyda.models import Area, Company, Document, Process, Team, TeamMember
from src.lamyda.repositories import ProcessCounts


def db_error(statement: str = "COMMIT") -> OperationalError:
    return OperationalError(statement, {}, Exception("connection reset by peer"))


class FakeSession:
    """Just enough of AsyncSession for the services."""

    def __init__(self, rows: Iterable[Any] = ()) -> None:
        self.rows: list[Any] = list(rows)
        self.pending: list[Any] = []
        self.fail_when: Callable[[Any], bool] | None = None
        self.commits = 0
        self.rollbacks = 0
        self.expunged: list[Any] = []

    def add(self, obj: Any) -> None:
        self.pending.append(obj)

    async def commit(self) -> None:
        if self.fail_when is not None and any(self.fail_when(obj) for obj in self.pending):
            raise db_error()
        self.rows.extend(self.pending)
        self.pending.clear()
        self.commits += 1

    async def rollback(self) -> None:
        self.pending.clear()
        self.rollbacks += 1

    async def refresh(self, obj: Any) -> None:
        return None

    def expunge(self, obj: Any) -> None:
        self.expunged.append(obj)

    def in_transaction(self) -> bool:
        return bool(self.pending)

    def of_type[T](self, model: type[T]) -> list[T]:
        return [row for row in self.rows if isinstance(row, model)]


def newest_first[T](rows: Sequence[T]) -> list[T]:
    return sorted(rows, key=lambda row: row.created_at, reverse=True)  # type: ignore[attr-defined]


class FakeRepository:
    model: type

    def __init__(self, session: FakeSession) -> None:
        self.session = session

    def add(self, entity: Any) -> None:
        self.session.add(entity)

    async def get_by_id(self, id: UUID) -> Any:
        return next((row for row in self._rows() if row.id == id), None)

    def _rows(self) -> list[Any]:
        return self.session.of_type(self.model)


class FakeCompanyRepository(FakeRepository):
    model = Company


class FakeAreaRepository(FakeRepository):
    model = Area

    async def list_active_for_company(self, company_id: UUID) -> list[Area]:
        return newest_first(
            [a for a in self._rows() if a.company_id == company_id and a.is_active]
        )

    async def get_active_for_company(self, area_id: UUID, company_id: UUID) -> Area | None:
        return next(
            (
                a
                for a in self._rows()
                if a.id == area_id and a.company_id == company_id and a.is_active
            ),
            None,
        )

    async def get_names(self, area_ids: Iterable[UUID]) -> dict[UUID, str]:
        ids = set(area_ids)
        return {a.id: a.name for a in self._rows() if a.id in ids and a.is_active}


class FakeTeamRepository(FakeRepository):
    model = Team

    def _company_area_ids(self, company_id: UUID) -> set[UUID]:
        return {
            a.id for a in self.session.of_type(Area) if a.company_id == company_id and a.is_active
        }

    async def list_active_for_company(self, company_id: UUID) -> list[Team]:
        area_ids = self._company_area_ids(company_id)
        return newest_first([t for t in self._rows() if t.area_id in area_ids and t.is_active])

    async def get_active_for_company(self, team_id: UUID, company_id: UUID) -> Team | None:
        area_ids = self._company_area_ids(company_id)
        return next(
            (t for t in self._rows() if t.id == team_id and t.area_id in area_ids and t.is_active),
            None,
        )

    async def get_names(self, team_ids: Iterable[UUID]) -> dict[UUID, str]:
        ids = set(team_ids)
        return {t.id: t.name for t in self._rows() if t.id in ids and t.is_active}

    async def count_active_by_area(self, area_ids: Iterable[UUID]) -> dict[UUID, int]:
        ids = set(area_ids)
        counts: dict[UUID, int] = {}
        for t in self._rows():
            if t.area_id in ids and t.is_active:
                counts[t.area_id] = counts.get(t.area_id, 0) + 1
        return counts


class FakeTeamMemberRepository(FakeRepository):
    model = TeamMember

    async def count_active(self, team_id: UUID) -> int:
        return sum(1 for m in self._rows() if m.team_id == team_id and m.is_active)


class FakeProcessRepository(FakeRepository):
    model = Process

    def __init__(self, session: FakeSession) -> None:
        super().__init__(session)
        self.updates: list[tuple[UUID, dict[str, Any]]] = []
        self.fail_updates = False

    async def list_active_for_company(self, company_id: UUID) -> list[Process]:
        return newest_first([p for p in self._rows() if p.company_id == company_id and p.status])

    async def count_by_area(
        self, company_id: UUID, area_ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        return self._count_by("area_id", company_id, area_ids)

    async def count_by_team(
        self, company_id: UUID, team_ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        return self._count_by("team_id", company_id, team_ids)

    def _count_by(
        self, attribute: str, company_id: UUID, ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        wanted = set(ids)
        counts: dict[UUID, ProcessCounts] = {}
        for p in self._rows():
            key = getattr(p, attribute)
            if p.company_id != company_id or key not in wanted:
                continue
            current = counts.get(key, ProcessCounts())
            counts[key] = ProcessCounts(
                total=current.total + 1, active=current.active + int(p.status)
            )
        return counts

    async def update_fields(self, id: UUID, values: dict[str, Any]) -> int:
        if self.fail_updates:
            raise db_error("UPDATE processes")
        self.updates.append((id, dict(values)))
        process = await self.get_by_id(id)
        if process is None:
            return 0
        for key, value in values.items():
            setattr(process, key, value)
        return 1


class FakeDocumentRepository(FakeRepository):
    model = Document

    async def list_for_process(self, process_id: UUID) -> list[Document]:
        return newest_first([d for d in self._rows() if d.process_id == process_id])


class FakeObjectStorage:
    """Bucket held in a dict.

    Args:
        base_url: Prefix of public URLs.
        url_for: Overrides public URL construction entirely.
        fail_when: Upload fails for (path, content) pairs it accepts.
        fail_remove: Every remove fails.
    """

    def __init__(
        self,
        base_url: str = "https://storage.test/public",
        url_for: Callable[[str], str] | None = None,
        fail_when: Callable[[str, bytes], bool] | None = None,
        fail_remove: bool = False,
    ) -> None:
        self.base_url = base_url
        self.url_for = url_for
        self.fail_when = fail_when
        self.fail_remove = fail_remove
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.upload_calls: list[str] = []
        self.removed: list[str] = []

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.upload_calls.append(path)
        if self.fail_when is not None and self.fail_when(path, content):
            raise StorageError(f"Upload failed for {path}")
        self.objects[path] = (content, content_type)

    def public_url(self, path: str) -> str:
        if self.url_for is not None:
            return self.url_for(path)
        return f"{self.base_url}/{path}"

    async def remove(self, paths: Sequence[str]) -> None:
        if self.fail_remove:
            raise StorageError("Remove failed")
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)
