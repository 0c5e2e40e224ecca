from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.errors import RecordValidationError


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"


# display order inside a day
MEAL_ORDER: tuple[MealType, ...] = (MealType.breakfast, MealType.lunch, MealType.dinner)


class MealEntry(BaseModel):
    date: dt.date
    meal_type: MealType
    description: str

    model_config = ConfigDict(frozen=True)

    @field_validator("description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description is blank")
        return v

    @classmethod
    def from_row(cls, row: Any) -> "MealEntry":
        """Build from a `meal_entries` row (ORM object or plain dict)."""
        get = row.get if isinstance(row, dict) else lambda k: getattr(row, k, None)
        try:
            return cls(
                date=get("meal_date"),
                meal_type=get("meal_type"),
                description=get("meal_description") or "",
            )
        except ValidationError as exc:
            raise RecordValidationError("meal_entries", get("id"), str(exc)) from exc
