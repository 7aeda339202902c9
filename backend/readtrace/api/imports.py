"""Import endpoints: browser history and CSV upload produce a review job, confirm persists it."""
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, UploadFile, File, status
from pydantic import ValidationError
from readtrace.config import settings
from readtrace.dependencies import get_current_user, get_import_service
from readtrace.models.user import User
from readtrace.schemas.imports import (
    BrowserHistoryRequest,
    ImportEntryResponse,
    ImportJobResponse,
    ConfirmRequest,
    ConfirmResponse,
)
from readtrace.services.import_service import (
    ImportJob,
    ImportService,
    ImportSource,
    BrowserHistoryItem,
    build_import_job,
    extract_from_browser_history,
    parse_csv_text,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import")

CSV_CONTENT_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}


def job_response(job: ImportJob) -> ImportJobResponse:
    return ImportJobResponse(
        import_id=job.import_id,
        total_items=job.total_items,
        valid_items=job.valid_items,
        error_items=job.error_items,
        skipped_items=job.skipped_items,
        entries=[
            ImportEntryResponse(
                id=e.id,
                title=e.title,
                normalized_title=e.normalized_title,
                chapter=e.chapter,
                url=e.url,
                platform=e.platform,
                last_read_date=e.last_read_date,
                status=e.status.value,
                is_duplicate=e.is_duplicate,
                selected=e.selected,
                errors=list(e.errors),
            )
            for e in job.entries
        ],
    )


@router.post("/browser-history", response_model=ImportJobResponse)
def import_browser_history(
    body: Any = Body(None),
    user: User = Depends(get_current_user),
):
    """Build an import job from exported browser history."""
    try:
        request = BrowserHistoryRequest.model_validate(body)
    except ValidationError:
        raise HTTPException(
            status_code=400,
            detail="historyItems must be a non-empty array of items with a url",
        )

    items = [
        BrowserHistoryItem(url=i.url, title=i.title, visit_time=i.visit_time)
        for i in request.history_items
    ]

    raw_entries = extract_from_browser_history(items)
    if not raw_entries:
        return ImportJobResponse(
            import_id=None,
            message="0 supported URLs found",
            total_items=0,
            valid_items=0,
            error_items=0,
            skipped_items=0,
            entries=[],
        )

    job = build_import_job(user.id, ImportSource.BROWSER_HISTORY, raw_entries)
    return job_response(job)


def _is_csv(upload: UploadFile) -> bool:
    name = (upload.filename or "").lower()
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    return name.endswith(".csv") or content_type in CSV_CONTENT_TYPES


@router.post("/upload", response_model=ImportJobResponse)
def import_csv(
    file: UploadFile = File(None),
    user: User = Depends(get_current_user),
):
    """Build an import job from an uploaded CSV export."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    if not _is_csv(file):
        raise HTTPException(status_code=400, detail="File must be a CSV")

    content = file.file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_bytes // (1024 * 1024)} MB limit",
        )

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded")

    raw_entries = parse_csv_text(text)
    if not raw_entries:
        raise HTTPException(status_code=400, detail="No rows found in CSV file")

    job = build_import_job(user.id, ImportSource.CSV, raw_entries)
    return job_response(job)


@router.post("/confirm", response_model=ConfirmResponse)
def confirm_import(
    request: ConfirmRequest,
    user: User = Depends(get_current_user),
    service: ImportService = Depends(get_import_service),
):
    """Persist the entries the user kept from a review job."""
    if not request.entries:
        raise HTTPException(status_code=400, detail="entries array is required and must not be empty")

    try:
        result = service.confirm(user.id, request.entries, request.import_id)
    except Exception as e:
        logger.error(f"Import confirm failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Import failed")

    return ConfirmResponse(
        import_id=result.import_id,
        imported_count=result.imported_count,
        skipped_count=result.skipped_count,
        error_count=result.error_count,
        errors=result.errors,
    )
