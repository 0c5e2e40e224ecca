# api/v1/reports.py
from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from supabase import Client

from config import settings
from services.analyzer import AnalyzerError, analyze_report
from services.auth import bearer_token, get_current_user
from services.baas import get_service_client
from services.db import MedicalReport, get_session
from api.v1.schemas import MedicalReportOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _discard_upload(storage: Client, file_path: str) -> None:
    try:
        await run_in_threadpool(storage.storage.from_(settings.reports_bucket).remove, [file_path])
    except Exception as exc:
        _LOG.error("orphaned upload left in storage at %s: %s", file_path, exc)


@router.post(
    "",
    response_model=MedicalReportOut,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a medical report and run the hosted analysis on it",
)
async def upload_report(
    file: UploadFile | None = File(None),
    user_id: str = Depends(get_current_user),
    token: str = Depends(bearer_token),
    storage: Client = Depends(get_service_client),
    db: AsyncSession = Depends(get_session),
) -> MedicalReportOut:
    if file is None or not file.filename:
        raise HTTPException(422, "Please select a file")
    content = await file.read()
    if not content:
        raise HTTPException(422, "Uploaded file is empty")

    # 1) object storage
    file_path = f"{user_id}/{int(time.time() * 1000)}_{file.filename}"
    try:
        await run_in_threadpool(
            storage.storage.from_(settings.reports_bucket).upload,
            file_path,
            content,
            {"content-type": file.content_type or "application/octet-stream"},
        )
    except Exception as exc:
        _LOG.error("storage upload failed for %s: %s", file_path, exc)
        raise HTTPException(502, f"Upload failed: {exc}") from exc

    # 2) report row; the stored object is removed if this fails
    row = MedicalReport(user_id=user_id, file_path=file_path, file_name=file.filename)
    db.add(row)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        _LOG.error("report row insert failed for %s: %s", file_path, exc)
        await _discard_upload(storage, file_path)
        raise HTTPException(502, "Could not save report") from exc
    await db.refresh(row)
    _LOG.info("report %s uploaded by user %s", row.id, user_id)

    # 3) hosted analysis; the upload stands even if this fails
    text = content.decode("utf-8", errors="replace")
    try:
        row.analysis = await analyze_report(row.id, text, token)
    except AnalyzerError as exc:
        _LOG.warning("analysis skipped for report %s: %s", row.id, exc)
    else:
        await db.commit()
        await db.refresh(row)

    return MedicalReportOut.model_validate(row, from_attributes=True)


@router.get(
    "",
    response_model=list[MedicalReportOut],
    summary="Uploaded reports, newest first",
)
async def list_reports(
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[MedicalReportOut]:
    res = await db.execute(
        select(MedicalReport)
        .where(MedicalReport.user_id == user_id)
        .order_by(MedicalReport.created_at.desc())
    )
    return [MedicalReportOut.model_validate(r, from_attributes=True) for r in res.scalars().all()]
