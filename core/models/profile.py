from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.errors import RecordValidationError

CONDITIONS = ("diabetes", "hypertension", "cholesterol", "none")
# conditions that change recommendation wording, in advisory order
TRACKED_CONDITIONS = ("diabetes", "hypertension", "cholesterol")


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class MedicalConditionSet(BaseModel):
    """Self-reported conditions; `none` cannot be combined with anything."""

    conditions: frozenset[str]

    model_config = ConfigDict(frozen=True)

    @field_validator("conditions", mode="before")
    @classmethod
    def _normalise(cls, v: Any) -> frozenset[str]:
        if isinstance(v, str):
            v = [v]
        items = {str(c).strip().lower() for c in v or ()}
        unknown = items - set(CONDITIONS)
        if unknown:
            raise ValueError(f"unknown medical condition(s): {', '.join(sorted(unknown))}")
        if "none" in items and len(items) > 1:
            raise ValueError("'none' cannot be combined with other conditions")
        return frozenset(items)

    @classmethod
    def of(cls, items: Iterable[str]) -> "MedicalConditionSet":
        return cls(conditions=list(items))

    @classmethod
    def from_row(cls, row: Any) -> "MedicalConditionSet":
        """Parse `profiles.medical_conditions` (ORM object or dict)."""
        get = row.get if isinstance(row, dict) else lambda k: getattr(row, k, None)
        raw = get("medical_conditions")
        if raw is not None and not isinstance(raw, (list, tuple)):
            raise RecordValidationError("profiles", get("id"), "medical_conditions is not a list")
        try:
            return cls.of(raw or [])
        except ValidationError as exc:
            raise RecordValidationError("profiles", get("id"), str(exc)) from exc

    def __contains__(self, item: object) -> bool:
        return item in self.conditions

    def tracked(self) -> list[str]:
        """Tracked conditions present, in advisory order."""
        return [c for c in TRACKED_CONDITIONS if c in self.conditions]

    def as_list(self) -> list[str]:
        return [c for c in CONDITIONS if c in self.conditions]
