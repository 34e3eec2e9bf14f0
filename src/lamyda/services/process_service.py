"""Process service - listing by sequential id and multi-asset creation."""

import contextlib
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.lamyda.core.exceptions import (
    EntityNotFoundError,
    EntityValidationError,
    LamydaError,
    PersistenceError,
)
from src.lamyda.core.logging import get_logger
from src.lamyda.models import AssetKind, Document, Process
from src.lamyda.models.base import utc_now
from src.lamyda.repositories import (
    AreaRepository,
    DocumentRepository,
    ProcessRepository,
    TeamRepository,
)
from src.lamyda.schemas import (
    DocumentRead,
    InlineImageRead,
    ProcessCreate,
    ProcessDetail,
    ProcessRead,
)
from src.lamyda.services.analysis import extract_analysis
from src.lamyda.services.listing import EntityListing
from src.lamyda.services.promotion import AssetPromotionPipeline, PromotionResult
from src.lamyda.services.sequential_index import SequentialEntry, SequentialIndexProjector
from src.lamyda.services.temporary_assets import (
    PendingFile,
    TemporaryAsset,
    validate_inline_image,
)

logger = get_logger(__name__)


def replace_references(body: str, locations: Mapping[str, str]) -> str:
    """Swap every preview reference in ``body`` for its stored location.

    All references are replaced in one pass, longest first, so a reference
    that is a prefix of another never rewrites inside it, and a location
    that contains a reference is never rewritten again.
    """
    if not locations:
        return body
    refs = sorted(locations, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(ref) for ref in refs))
    return pattern.sub(lambda match: locations[match.group(0)], body)


@dataclass(frozen=True)
class ProcessVideo:
    """Explanatory video plus the analysis the AI service produced for it, if any."""

    file: PendingFile
    analysis: Mapping[str, Any] | None = None


@dataclass
class ProcessAssemblyResult:
    """Outcome of create_process.

    Only the core record decides success: ``created`` is True whenever the
    process row exists, even if some attachments failed. Failed attachments
    are listed in ``failures``.
    """

    process: Process | None
    error: LamydaError | None = None
    inline_images: list[PromotionResult] = field(default_factory=list)
    documents: list[PromotionResult] = field(default_factory=list)
    video: PromotionResult | None = None
    body_rewritten: bool = False
    analysis_merged: bool = False
    listing_refreshed: bool = False
    sequential_id: int | None = None

    @property
    def created(self) -> bool:
        return self.process is not None

    @property
    def promotions(self) -> list[PromotionResult]:
        results = [*self.inline_images, *self.documents]
        if self.video is not None:
            results.append(self.video)
        return results

    @property
    def failures(self) -> list[PromotionResult]:
        return [result for result in self.promotions if not result.ok]

    @property
    def complete(self) -> bool:
        return self.created and not self.failures


class ProcessService:
    """Process operations for one acting user within one company.

    Creation runs five stages in order: insert the core record, promote
    inline images and rewrite the body, promote attached documents, promote
    the video and merge its analysis, refresh the listing. Only the first
    stage can fail the operation; later failures are logged and reported
    in the result. Stages run sequentially and are not rolled back as a
    whole. If the caller is cancelled mid-way, assets promoted so far stay
    in storage.
    """

    def __init__(
        self,
        process_repo: ProcessRepository,
        area_repo: AreaRepository,
        team_repo: TeamRepository,
        document_repo: DocumentRepository,
        pipeline: AssetPromotionPipeline,
        session: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        listing: EntityListing[Process] | None = None,
    ):
        self.process_repo = process_repo
        self.area_repo = area_repo
        self.team_repo = team_repo
        self.document_repo = document_repo
        self.pipeline = pipeline
        self.session = session
        self.company_id = company_id
        self.user_id = user_id
        self.projector = SequentialIndexProjector(process_repo.list_active_for_company)
        self.listing = listing or EntityListing(self.projector)

    # --- Creation ---

    async def create_process(
        self,
        data: ProcessCreate,
        inline_images: Sequence[TemporaryAsset] = (),
        documents: Sequence[PendingFile] = (),
        video: ProcessVideo | None = None,
    ) -> ProcessAssemblyResult:
        """Create a process together with its inline images, documents and video.

        Args:
            data: Scalar fields, rich-text body (``notes``) and mind-map text.
            inline_images: Pending images referenced from ``notes`` by their
                preview references.
            documents: Attached files, not referenced from the body.
            video: Optional video and its analysis payload.

        Returns:
            ProcessAssemblyResult. When ``created`` is False, ``error`` holds
            the EntityValidationError or PersistenceError and no row exists.
        """
        try:
            process = await self._create_record(data)
        except (EntityValidationError, PersistenceError) as e:
            logger.warning("Process creation failed", name=data.name, error=e.message)
            return ProcessAssemblyResult(process=None, error=e)

        result = ProcessAssemblyResult(process=process)
        log = logger.bind(process_id=str(process.id))
        log.info(
            "Process created",
            inline_images=len(inline_images),
            documents=len(documents),
            has_video=video is not None,
        )

        if inline_images:
            await self._promote_inline_images(result, process, data.notes or "", inline_images)

        for document in documents:
            outcome = await self._promote(document, process.id, AssetKind.DOCUMENT)
            result.documents.append(outcome)

        if video is not None:
            await self._promote_video(result, process, video)

        try:
            snapshot = await self.listing.refresh(self.company_id)
            result.listing_refreshed = True
            result.sequential_id = next(
                (e.sequential_id for e in snapshot if e.entity.id == process.id), None
            )
        except Exception as e:
            log.warning("Process listing refresh failed", error=str(e))

        if result.failures:
            log.warning(
                "Process created with failed attachments",
                failed=[f"{r.kind.value}:{r.file_name}" for r in result.failures],
            )
        return result

    async def _create_record(self, data: ProcessCreate) -> Process:
        await self._validate_references(data)

        process = Process(
            company_id=self.company_id,
            name=data.name,
            description=data.description,
            type=data.type,
            status=data.status,
            area_id=data.area_id,
            team_id=data.team_id,
            person_in_charge=data.person_in_charge_id,
            document_by_user={"html": data.notes} if data.notes else None,
            markmap_by_user=data.markmap or None,
            created_by=self.user_id,
            updated_by=self.user_id,
        )
        try:
            self.process_repo.add(process)
            await self.session.commit()
            await self.session.refresh(process)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Could not create process '{data.name}'", original_error=e) from e

        # Detached copy; later stages mirror successful updates onto it.
        self.session.expunge(process)
        return process

    async def _validate_references(self, data: ProcessCreate) -> None:
        if data.area_id is not None:
            area = await self.area_repo.get_active_for_company(data.area_id, self.company_id)
            if area is None:
                raise EntityValidationError(f"Area {data.area_id} not found")
        if data.team_id is not None:
            team = await self.team_repo.get_active_for_company(data.team_id, self.company_id)
            if team is None:
                raise EntityValidationError(f"Team {data.team_id} not found")

    async def _promote_inline_images(
        self,
        result: ProcessAssemblyResult,
        process: Process,
        original_body: str,
        assets: Sequence[TemporaryAsset],
    ) -> None:
        locations: dict[str, str] = {}
        for asset in assets:
            outcome = await self._promote(asset, process.id, AssetKind.INLINE_IMAGE)
            result.inline_images.append(outcome)
            if outcome.ok and outcome.location:
                locations[asset.preview_ref] = outcome.location

        body = replace_references(original_body, locations)
        if body != original_body:
            result.body_rewritten = await self._update_process(
                process, {"document_by_user": {"html": body}}
            )

    async def _promote_video(
        self, result: ProcessAssemblyResult, process: Process, video: ProcessVideo
    ) -> None:
        outcome = await self._promote(video.file, process.id, AssetKind.VIDEO)
        result.video = outcome
        if not outcome.ok:
            return

        values: dict[str, Any] = {"video_url": outcome.location}
        if video.analysis is not None:
            values.update(extract_analysis(video.analysis).process_fields())

        updated = await self._update_process(process, values)
        result.analysis_merged = updated and video.analysis is not None

    async def _promote(self, file: PendingFile, process_id: UUID, kind: AssetKind) -> PromotionResult:
        """Promote one file; any unexpected error becomes a failed result."""
        try:
            return await self.pipeline.promote(file, process_id, self.user_id, kind)
        except Exception as e:
            logger.exception(
                "Unexpected promotion error",
                process_id=str(process_id),
                file_name=file.file_name,
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return PromotionResult.failed(file, kind, LamydaError(str(e), original_error=e))

    async def _update_process(self, process: Process, values: dict[str, Any]) -> bool:
        """Single UPDATE of ``values``; mirrored onto ``process`` on success."""
        values = {**values, "updated_by": self.user_id, "updated_at": utc_now()}
        try:
            await self.process_repo.update_fields(process.id, values)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(
                "Process update failed",
                process_id=str(process.id),
                fields=sorted(values),
                error=str(e),
            )
            return False

        for key, value in values.items():
            setattr(process, key, value)
        return True

    # --- Inline images for existing processes ---

    async def upload_inline_image(
        self, process_id: UUID, file: PendingFile, max_bytes: int | None = None
    ) -> InlineImageRead:
        """Promote an inline image straight into an existing process.

        Raises:
            EntityValidationError: Not an image, or over ``max_bytes``.
            LamydaError: The promotion's StorageError / PersistenceError.
        """
        validate_inline_image(file, max_bytes)
        outcome = await self.pipeline.promote(file, process_id, self.user_id, AssetKind.INLINE_IMAGE)
        if outcome.location is None or outcome.document is None:
            raise outcome.error or PersistenceError(f"Could not store image '{file.file_name}'")
        return InlineImageRead(
            url=outcome.location,
            document=DocumentRead.model_validate(outcome.document),
        )

    async def list_documents(self, process_id: UUID) -> list[Document]:
        return await self.document_repo.list_for_process(process_id)

    # --- Listing by sequential id ---

    async def list_processes(self) -> list[ProcessRead]:
        """Active processes, newest first, numbered from 1."""
        snapshot = await self.projector.project(self.company_id)
        area_names, team_names = await self._names_for([entry.entity for entry in snapshot])
        return [
            self._to_read(entry.entity, entry.sequential_id, area_names, team_names)
            for entry in snapshot
        ]

    async def resolve(self, sequential_id: int | str) -> SequentialEntry[Process] | None:
        return await self.projector.resolve(self.company_id, sequential_id)

    async def require(self, sequential_id: int | str) -> SequentialEntry[Process]:
        """Like resolve, but raises EntityNotFoundError on a miss."""
        entry = await self.resolve(sequential_id)
        if entry is None:
            raise EntityNotFoundError(f"Process {sequential_id} not found")
        return entry

    async def get_process(self, sequential_id: int | str) -> ProcessDetail | None:
        entry = await self.resolve(sequential_id)
        if entry is None:
            return None
        return await self.to_detail(entry.entity, entry.sequential_id)

    async def to_detail(self, process: Process, sequential_id: int | None) -> ProcessDetail:
        area_names, team_names = await self._names_for([process])
        return ProcessDetail(
            **self._to_read(process, sequential_id, area_names, team_names).model_dump(),
            company_id=process.company_id,
            document_by_user=process.document_by_user,
            markmap_by_user=process.markmap_by_user,
            document_by_ai=process.document_by_ai,
            markmap_by_ai=process.markmap_by_ai,
            json_by_ai=process.json_by_ai,
            steps_by_ai=process.steps_by_ai,
        )

    async def _names_for(
        self, processes: Sequence[Process]
    ) -> tuple[dict[UUID, str], dict[UUID, str]]:
        area_ids = {p.area_id for p in processes if p.area_id is not None}
        team_ids = {p.team_id for p in processes if p.team_id is not None}
        return await self.area_repo.get_names(area_ids), await self.team_repo.get_names(team_ids)

    @staticmethod
    def _to_read(
        process: Process,
        sequential_id: int | None,
        area_names: Mapping[UUID, str],
        team_names: Mapping[UUID, str],
    ) -> ProcessRead:
        return ProcessRead(
            id=process.id,
            sequential_id=sequential_id,
            name=process.name,
            description=process.description,
            type=process.type,
            status=process.status,
            video_url=process.video_url,
            area_id=process.area_id,
            area_name=area_names.get(process.area_id) if process.area_id else None,
            team_id=process.team_id,
            team_name=team_names.get(process.team_id) if process.team_id else None,
            person_in_charge_id=process.person_in_charge,
            created_at=process.created_at,
            updated_at=process.updated_at,
        )
