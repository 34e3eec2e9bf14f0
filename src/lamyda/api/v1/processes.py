"""Process endpoints.

Creation takes a multipart form so the core fields and every pending
binary arrive in one request:

- ``payload``: ProcessCreate as JSON.
- ``inline_images``: images referenced from ``notes``; ``inline_image_refs``
  optionally gives, in the same order, the reference each one is known
  by in ``notes``. Each reference must be distinct, free of whitespace
  and present in ``notes``. Without it the reference is the image's data URL.
- ``documents``: attached files.
- ``video`` and ``analysis``: explanatory video and the JSON analysis the
  AI service produced for it.
"""

import json
from collections.abc import Sequence
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError

from src.lamyda.api.dependencies import AppSettings, ProcessServiceDep
from src.lamyda.core.exceptions import EntityValidationError, PersistenceError
from src.lamyda.schemas import (
    AssetFailure,
    AssetReport,
    DocumentRead,
    InlineImageRead,
    ProcessCreate,
    ProcessCreated,
    ProcessDetail,
    ProcessRead,
)
from src.lamyda.services import ProcessAssemblyResult, ProcessVideo
from src.lamyda.services.temporary_assets import (
    PendingFile,
    TemporaryAsset,
    TemporaryAssetStore,
    guess_content_type,
)

router = APIRouter(prefix="/processes", tags=["processes"])


async def _read_upload(upload: UploadFile, default_name: str) -> PendingFile:
    file_name = upload.filename or default_name
    return PendingFile(
        file_name=file_name,
        content_type=guess_content_type(file_name, upload.content_type),
        content=await upload.read(),
    )


def _parse_payload(payload: str) -> ProcessCreate:
    try:
        return ProcessCreate.model_validate_json(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


def _parse_analysis(analysis: str | None) -> dict[str, Any] | None:
    if analysis is None or not analysis.strip():
        return None
    try:
        value = json.loads(analysis)
    except json.JSONDecodeError as e:
        raise EntityValidationError("analysis is not valid JSON", original_error=e) from e
    if not isinstance(value, dict):
        raise EntityValidationError("analysis must be a JSON object")
    return value


async def _collect_inline_images(
    uploads: Sequence[UploadFile],
    refs: Sequence[str],
    notes: str | None,
    max_bytes: int,
) -> list[TemporaryAsset]:
    if refs and len(refs) != len(uploads):
        raise EntityValidationError(
            f"Got {len(refs)} inline_image_refs for {len(uploads)} inline_images"
        )
    store = TemporaryAssetStore(max_bytes=max_bytes)
    for index, upload in enumerate(uploads):
        pending = await _read_upload(upload, f"image-{index + 1}")
        if not refs:
            store.add_file(pending)
            continue
        asset = store.add_file(pending, preview_ref=refs[index])
        if asset.preview_ref not in (notes or ""):
            raise EntityValidationError(
                f"Inline image reference '{asset.preview_ref}' does not occur in notes"
            )
    return list(store.assets)


def _asset_report(result: ProcessAssemblyResult) -> AssetReport:
    return AssetReport(
        promoted=sum(1 for r in result.promotions if r.ok),
        failed=[
            AssetFailure(
                file_name=r.file_name,
                kind=r.kind.value,
                error=r.error.message if r.error else "",
            )
            for r in result.failures
        ],
        analysis_merged=result.analysis_merged,
    )


@router.get(
    "",
    response_model=list[ProcessRead],
    summary="List processes",
    description="Active processes of the company, newest first, numbered from 1.",
)
async def list_processes(service: ProcessServiceDep) -> list[ProcessRead]:
    return await service.list_processes()


@router.get(
    "/{sequential_id}",
    response_model=ProcessDetail,
    summary="Get process",
    responses={
        200: {"description": "Process at this position in the current listing"},
        404: {"description": "No process at this position"},
    },
)
async def get_process(sequential_id: str, service: ProcessServiceDep) -> ProcessDetail:
    process = await service.get_process(sequential_id)
    if process is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Process {sequential_id} not found",
        )
    return process


@router.post(
    "",
    response_model=ProcessCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create process",
    responses={
        201: {"description": "Process created; failed attachments listed under assets.failed"},
        422: {"description": "Validation error, nothing was created"},
        503: {"description": "Process could not be stored, nothing was created"},
    },
)
async def create_process(
    service: ProcessServiceDep,
    settings: AppSettings,
    payload: Annotated[str, Form(description="ProcessCreate as JSON")],
    inline_images: Annotated[list[UploadFile] | None, File()] = None,
    inline_image_refs: Annotated[list[str] | None, Form()] = None,
    documents: Annotated[list[UploadFile] | None, File()] = None,
    video: Annotated[UploadFile | None, File()] = None,
    analysis: Annotated[str | None, Form(description="Video analysis as JSON")] = None,
) -> ProcessCreated:
    data = _parse_payload(payload)
    analysis_payload = _parse_analysis(analysis)
    images = await _collect_inline_images(
        inline_images or [],
        inline_image_refs or [],
        data.notes,
        settings.inline_image_max_bytes,
    )
    attached = [
        await _read_upload(upload, f"document-{index + 1}")
        for index, upload in enumerate(documents or [])
    ]
    process_video = None
    if video is not None:
        process_video = ProcessVideo(
            file=await _read_upload(video, "video"),
            analysis=analysis_payload,
        )

    result = await service.create_process(data, images, attached, process_video)
    if result.process is None:
        raise result.error or PersistenceError(f"Could not create process '{data.name}'")

    return ProcessCreated(
        process=await service.to_detail(result.process, result.sequential_id),
        assets=_asset_report(result),
    )


@router.get(
    "/{sequential_id}/documents",
    response_model=list[DocumentRead],
    summary="List process documents",
    responses={404: {"description": "No process at this position"}},
)
async def list_process_documents(
    sequential_id: str, service: ProcessServiceDep
) -> list[DocumentRead]:
    entry = await service.require(sequential_id)
    documents = await service.list_documents(entry.entity.id)
    return [DocumentRead.model_validate(d) for d in documents]


@router.post(
    "/{sequential_id}/images",
    response_model=InlineImageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload inline image",
    description="Store an image for the body of an existing process and return its URL.",
    responses={
        404: {"description": "No process at this position"},
        422: {"description": "Not an image, or too large"},
        502: {"description": "Storage rejected the upload"},
    },
)
async def upload_inline_image(
    sequential_id: str,
    service: ProcessServiceDep,
    settings: AppSettings,
    file: Annotated[UploadFile, File()],
) -> InlineImageRead:
    entry = await service.require(sequential_id)
    pending = await _read_upload(file, "image")
    return await service.upload_inline_image(
        entry.entity.id, pending, settings.inline_image_max_bytes
    )
