from __future__ import annotations
import datetime as dt

from pydantic import BaseModel, ConfigDict


class MedicalReportOut(BaseModel):
    id: str
    file_name: str
    file_path: str
    analysis: str | None = None
    created_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True)
