# api/v1/analysis.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.models.meal import MealEntry
from core.models.profile import MedicalConditionSet
from core.recommendation import RandomSource, analyze_week
from core.week import week_bounds
from services.auth import get_current_user
from services.db import Profile, WeeklyReportRow, fetch_meals, get_session
from api.v1.schemas import AnalysisOut, NutrientScores, WeeklyReportOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


def get_rng() -> RandomSource | None:
    """Random source for scoring; None lets the engine pick its default."""
    return None


@router.post(
    "",
    response_model=AnalysisOut,
    status_code=status.HTTP_200_OK,
    summary="Analyse the week containing `date` and store the report",
)
async def analyze(
    day: date | None = Query(None, alias="date", description="YYYY-MM-DD, default today"),
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
    rng: RandomSource | None = Depends(get_rng),
) -> AnalysisOut:
    # 1) profile → conditions
    profile = await db.get(Profile, user_id)
    if profile is None:
        raise HTTPException(404, "Profile not found")
    conditions = MedicalConditionSet.from_row(profile)

    # 2) this week's meals
    start, end = week_bounds(day or date.today())
    rows = await fetch_meals(db, user_id, start, end)
    meals = [MealEntry.from_row(r) for r in rows]

    # 3) run the engine
    report = analyze_week(
        meals, conditions, start, end, rng=rng,
        min_meals=settings.min_meals_for_analysis,
    )
    if report is None:
        raise HTTPException(422, "Please enter meals for this week before analyzing.")

    # 4) snapshot – the computed report is returned even if this fails
    s = report.scores
    db.add(
        WeeklyReportRow(
            user_id=user_id,
            week_start=report.week_start,
            week_end=report.week_end,
            iron_percentage=s.iron,
            calcium_percentage=s.calcium,
            potassium_percentage=s.potassium,
            magnesium_percentage=s.magnesium,
            recommendations=list(report.recommendations),
        )
    )
    try:
        await db.commit()
        saved = True
        _LOG.info("weekly report stored for user %s (%s..%s)", user_id, start, end)
    except SQLAlchemyError as exc:
        await db.rollback()
        saved = False
        _LOG.warning("could not store weekly report for user %s: %s", user_id, exc)

    return AnalysisOut(
        week_start=report.week_start,
        week_end=report.week_end,
        nutrients=NutrientScores(**s.model_dump()),
        recommendations=list(report.recommendations),
        saved=saved,
    )


@router.get(
    "/reports",
    response_model=list[WeeklyReportOut],
    summary="Stored weekly reports, newest first",
)
async def list_reports(
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[WeeklyReportOut]:
    res = await db.execute(
        select(WeeklyReportRow)
        .where(WeeklyReportRow.user_id == user_id)
        .order_by(WeeklyReportRow.created_at.desc(), WeeklyReportRow.week_start.desc())
    )
    return [
        WeeklyReportOut.model_validate(r, from_attributes=True)
        for r in res.scalars().all()
    ]
