# api/v1/schemas/analysis.py
from __future__ import annotations
import datetime as dt
from typing import List

from pydantic import BaseModel, ConfigDict


class NutrientScores(BaseModel):
    iron: float
    calcium: float
    potassium: float
    magnesium: float


class AnalysisOut(BaseModel):
    week_start: dt.date
    week_end: dt.date
    nutrients: NutrientScores
    recommendations: List[str]
    saved: bool


class WeeklyReportOut(BaseModel):
    id: str
    week_start: dt.date
    week_end: dt.date
    iron_percentage: float
    calcium_percentage: float
    potassium_percentage: float
    magnesium_percentage: float
    recommendations: List[str]
    created_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True)
