from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import RecordValidationError
from core.models.profile import MedicalConditionSet
from services.auth import get_current_user
from services.db import Profile, get_session
from api.v1.schemas import ProfileIn, ProfileOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


# ───────────────────────── helpers ──────────────────────────
def _serialize(row: Profile) -> ProfileOut:
    """Validate the stored row before it reaches the client."""
    conditions = MedicalConditionSet.from_row(row)
    try:
        return ProfileOut(
            id=row.id,
            name=row.name,
            age=row.age,
            gender=row.gender,
            medical_conditions=conditions.as_list(),
            updated_at=row.updated_at,
        )
    except ValidationError as exc:
        raise RecordValidationError("profiles", row.id, str(exc)) from exc


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=ProfileOut)
async def get_profile(
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    row = await db.get(Profile, user_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _serialize(row)


# ───────────────────────── upsert ───────────────────────────
@router.put("", response_model=ProfileOut, status_code=status.HTTP_200_OK)
async def upsert_profile(
    body: ProfileIn,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    payload = body.model_dump(mode="json")

    row = await db.get(Profile, user_id)
    if row is None:                            # Insert
        row = Profile(id=user_id, **payload)
        db.add(row)
    else:
        for k, v in payload.items():
            setattr(row, k, v)

    await db.commit()
    await db.refresh(row)
    _LOG.info("profile saved for user %s", user_id)
    return _serialize(row)
