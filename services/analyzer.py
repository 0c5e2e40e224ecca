# services/analyzer.py
"""Client for the hosted `analyze-report` edge function."""
from __future__ import annotations

import logging

import httpx

from config import settings

_LOG = logging.getLogger(__name__)


class AnalyzerError(RuntimeError):
    pass


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.analyze_timeout)


async def analyze_report(report_id: str, file_text: str, access_token: str) -> str | None:
    """POST the report text to the function and return its `aiText`."""
    headers = {
        "Authorization": f"Bearer {access_token}",
        "apikey": settings.supabase_anon_key,
    }
    try:
        async with _client() as http:
            r = await http.post(
                settings.analyze_function_url,
                json={"report_id": report_id, "file_text": file_text},
                headers=headers,
            )
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise AnalyzerError(f"analyze function failed: {exc}") from exc

    _LOG.debug("analyze function answered for report %s", report_id)
    return data.get("aiText") if isinstance(data, dict) else None
