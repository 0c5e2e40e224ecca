# api/v1/meals.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.meal import MealEntry, MealType
from core.summary import weekly_summary
from core.week import week_bounds
from services.auth import get_current_user
from services.db import MealEntryRow, fetch_meals, get_session
from api.v1.schemas import DayMeals, MealIn, MealOut, MealSaved, WeekSummary

router = APIRouter()
_LOG = logging.getLogger(__name__)


def _out(row: MealEntryRow) -> MealOut:
    return MealOut(
        id=row.id,
        meal_date=row.meal_date,
        meal_type=row.meal_type,
        meal_description=row.meal_description,
    )


@router.get(
    "",
    response_model=DayMeals,
    summary="Meals saved for one day, keyed by meal type",
)
async def list_day_meals(
    day: date | None = Query(None, alias="date", description="YYYY-MM-DD, default today"),
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> DayMeals:
    day = day or date.today()
    rows = await fetch_meals(db, user_id, day, day)
    return DayMeals(date=day, meals={MealEntry.from_row(r).meal_type: _out(r) for r in rows})


@router.get(
    "/week",
    response_model=WeekSummary,
    summary="Monday–Sunday summary of the week containing `date`",
)
async def week_summary(
    day: date | None = Query(None, alias="date", description="YYYY-MM-DD, default today"),
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> WeekSummary:
    day = day or date.today()
    start, end = week_bounds(day)
    rows = await fetch_meals(db, user_id, start, end)
    entries = [MealEntry.from_row(r) for r in rows]
    return WeekSummary.model_validate(weekly_summary(entries, day))


async def _find_slot(
    db: AsyncSession, user_id: str, meal_date: date, meal_type: MealType
) -> MealEntryRow | None:
    return (
        await db.execute(
            select(MealEntryRow).where(
                MealEntryRow.user_id == user_id,
                MealEntryRow.meal_date == meal_date,
                MealEntryRow.meal_type == meal_type.value,
            )
        )
    ).scalar_one_or_none()


@router.put(
    "/{meal_date}/{meal_type}",
    response_model=MealSaved,
    status_code=status.HTTP_200_OK,
    summary="Save a meal, updating the slot if it is already filled",
)
async def save_meal(
    meal_date: date,
    meal_type: MealType,
    body: MealIn,
    response: Response,
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> MealSaved:
    row = await _find_slot(db, user_id, meal_date, meal_type)
    state = "updated"

    if row is None:
        row = MealEntryRow(
            user_id=user_id,
            meal_date=meal_date,
            meal_type=meal_type.value,
            meal_description=body.description,
        )
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            # slot was filled by a concurrent save after our select
            await db.rollback()
            row = await _find_slot(db, user_id, meal_date, meal_type)
            if row is None:
                raise
            _LOG.info("slot %s/%s filled concurrently, updating", meal_date, meal_type.value)
        else:
            state = "created"
            response.status_code = status.HTTP_201_CREATED

    if state == "updated":
        row.meal_description = body.description
        await db.commit()

    await db.refresh(row)
    _LOG.info("%s %s for user %s on %s", state, meal_type.value, user_id, meal_date)
    return MealSaved(status=state, meal=_out(row))
