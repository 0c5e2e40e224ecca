from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, examples=["ada@example.com"])
    password: str = Field(..., min_length=6)


class AuthOut(BaseModel):
    user_id: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    # where the client should go next
    next: Literal["dashboard", "profile-setup", "confirm-email"]
