from __future__ import annotations
import datetime as dt
from typing import Dict, List, Literal

from pydantic import BaseModel, Field, field_validator

from core.models.meal import MealType


class MealIn(BaseModel):
    description: str = Field(..., examples=["Oatmeal with berries"])

    @field_validator("description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please enter meal details before saving.")
        return v


class MealOut(BaseModel):
    id: str
    meal_date: dt.date
    meal_type: MealType
    meal_description: str


class MealSaved(BaseModel):
    status: Literal["created", "updated"]
    meal: MealOut


class DayMeals(BaseModel):
    date: dt.date
    meals: Dict[MealType, MealOut]


class SummaryMeal(BaseModel):
    meal_type: MealType
    description: str


class SummaryDay(BaseModel):
    date: dt.date
    meals: List[SummaryMeal]


class WeekSummary(BaseModel):
    week_start: dt.date
    week_end: dt.date
    total_meals: int
    days_logged: int
    days: List[SummaryDay]
