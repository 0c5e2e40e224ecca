from __future__ import annotations
import datetime as dt
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.profile import Gender, MedicalConditionSet


class ProfileIn(BaseModel):
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=1, le=150)
    gender: Gender
    medical_conditions: List[str] = Field(..., min_length=1, examples=[["diabetes"], ["none"]])

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("medical_conditions")
    @classmethod
    def _valid_conditions(cls, v: List[str]) -> List[str]:
        # raises ValueError on unknown values or 'none' mixed with others
        return MedicalConditionSet.of(v).as_list()


class ProfileOut(ProfileIn):
    id: str
    updated_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True)
