"""Promotion of pending binaries into durable, fingerprinted documents."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.lamyda.core.config import Settings, get_settings
from src.lamyda.core.exceptions import (
    EntityValidationError,
    LamydaError,
    PersistenceError,
    StorageError,
)
from src.lamyda.core.hashing import content_digest
from src.lamyda.core.logging import get_logger
from src.lamyda.models import AssetKind, Document
from src.lamyda.repositories import DocumentRepository
from src.lamyda.services.temporary_assets import PendingFile
from src.lamyda.storage import ObjectStorage, unique_object_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class PromotionResult:
    """Outcome of promoting one file.

    Exactly one of ``location`` / ``error`` is set.
    """

    file_name: str
    kind: AssetKind
    location: str | None = None
    document: Document | None = None
    error: LamydaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, file: PendingFile, kind: AssetKind, error: LamydaError) -> "PromotionResult":
        return cls(file_name=file.file_name, kind=kind, error=error)


class AssetPromotionPipeline:
    """Upload a binary, record its metadata, and report its durable URL.

    Each call is independent: it commits its own document row, and a
    failure leaves no row behind. When the row cannot be written the
    uploaded blob is removed on a best-effort basis.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        document_repo: DocumentRepository,
        session: AsyncSession,
        settings: Settings | None = None,
    ):
        self.storage = storage
        self.document_repo = document_repo
        self.session = session
        self.settings = settings or get_settings()

    def storage_path(self, kind: AssetKind, owner_id: UUID, file_name: str) -> str:
        """Object path for a new upload of ``kind`` owned by ``owner_id``."""
        if kind == AssetKind.INLINE_IMAGE:
            return unique_object_path(
                self.settings.inline_image_folder,
                file_name,
                self.settings.default_document_extension,
            )
        if kind == AssetKind.VIDEO:
            return unique_object_path(
                str(owner_id),
                file_name,
                self.settings.default_video_extension,
                prefix="video-",
            )
        return unique_object_path(
            str(owner_id), file_name, self.settings.default_document_extension
        )

    async def promote(
        self,
        file: PendingFile,
        owner_id: UUID,
        acting_user_id: UUID,
        kind: AssetKind = AssetKind.DOCUMENT,
    ) -> PromotionResult:
        """Promote ``file`` into a Document owned by process ``owner_id``.

        Never raises for the expected failure modes; they are returned in
        the result:
            EntityValidationError: empty content.
            StorageError: upload failed, nothing was recorded.
            PersistenceError: the row could not be written; the blob was
                removed if storage allowed it.
        """
        log = logger.bind(process_id=str(owner_id), file_name=file.file_name, kind=kind.value)

        try:
            file_hash = content_digest(file.content)
        except EntityValidationError as e:
            log.warning("Promotion rejected", error=e.message)
            return PromotionResult.failed(file, kind, e)

        path = self.storage_path(kind, owner_id, file.file_name)
        try:
            await self.storage.upload(path, file.content, file.content_type)
        except StorageError as e:
            log.warning("Promotion upload failed", path=path, error=e.message)
            return PromotionResult.failed(file, kind, e)

        location = self.storage.public_url(path)

        document = Document(
            process_id=owner_id,
            kind=kind.value,
            file_name=file.file_name,
            file_type=file.content_type,
            file_size=file.size,
            file_hash=file_hash,
            storage_path=path,
            file_url=location,
            created_by=acting_user_id,
        )
        try:
            self.document_repo.add(document)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.warning("Promotion metadata insert failed", path=path, error=str(e))
            await self._compensate(path)
            return PromotionResult.failed(
                file,
                kind,
                PersistenceError(f"Could not record '{file.file_name}'", original_error=e),
            )

        log.info("Asset promoted", document_id=str(document.id), size=file.size)
        return PromotionResult(
            file_name=file.file_name,
            kind=kind,
            location=location,
            document=document,
        )

    async def _compensate(self, path: str) -> None:
        """Remove an orphaned upload. Failures are logged, never raised."""
        try:
            await self.storage.remove([path])
        except StorageError as e:
            logger.error("Compensating delete failed", path=path, error=e.message)
