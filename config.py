"""
Centralised settings loader (pydantic-settings).

Values come from the environment or a local `.env`; unknown variables
are ignored so teammates' env files don't break startup.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = "local"
    database_url: str | None = None
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # ─── Supabase project ───────────────────────────────────────────
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = "changeme"
    jwt_audience: str = "authenticated"

    # ─── storage + hosted analyze function ─────────────────────────
    reports_bucket: str = "reports"
    analyze_function: str = "analyze-report"
    analyze_timeout: float = 30.0

    # ─── nutrient analysis ──────────────────────────────────────────
    min_meals_for_analysis: int = Field(1, ge=1)

    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )

    @property
    def analyze_function_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/functions/v1/{self.analyze_function}"


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
