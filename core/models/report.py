from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

# fixed scan order for tie-breaks and random draws
NUTRIENTS = ("iron", "calcium", "potassium", "magnesium")


class NutrientScoreSet(BaseModel):
    """Percent of recommended weekly intake, one value per tracked nutrient."""

    iron: float = Field(..., ge=0, le=100)
    calcium: float = Field(..., ge=0, le=100)
    potassium: float = Field(..., ge=0, le=100)
    magnesium: float = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    def items(self) -> list[tuple[str, float]]:
        return [(k, getattr(self, k)) for k in NUTRIENTS]


class WeeklyReport(BaseModel):
    week_start: dt.date
    week_end: dt.date
    scores: NutrientScoreSet
    recommendations: tuple[str, ...]

    model_config = ConfigDict(frozen=True)
