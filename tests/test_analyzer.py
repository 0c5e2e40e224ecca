from __future__ import annotations

import asyncio
import json

import httpx
import pytest

import services.analyzer as analyzer
from config import settings
from services.analyzer import AnalyzerError, analyze_report


@pytest.fixture
def function(monkeypatch):
    """Route the analyzer's client through a MockTransport; returns seen requests."""
    monkeypatch.setattr(settings, "supabase_url", "https://proj.supabase.co/")
    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")
    seen: list[httpx.Request] = []
    state = {"reply": httpx.Response(200, json={"aiText": "Iron is low."})}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return state["reply"]

    monkeypatch.setattr(
        analyzer, "_client", lambda: httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    )
    return seen, state


def _run(*args):
    return asyncio.run(analyze_report(*args))


def test_posts_report_to_function(function):
    seen, _ = function
    assert _run("r-1", "Hb 11 g/dL", "user-jwt") == "Iron is low."

    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == "https://proj.supabase.co/functions/v1/analyze-report"
    assert req.headers["Authorization"] == "Bearer user-jwt"
    assert req.headers["apikey"] == "anon-key"
    assert json.loads(req.content) == {"report_id": "r-1", "file_text": "Hb 11 g/dL"}


def test_missing_ai_text_is_none(function):
    _, state = function
    state["reply"] = httpx.Response(200, json={"status": "queued"})
    assert _run("r-1", "x", "t") is None


def test_server_error_raises(function):
    _, state = function
    state["reply"] = httpx.Response(500, text="boom")
    with pytest.raises(AnalyzerError, match="500"):
        _run("r-1", "x", "t")


def test_invalid_json_raises(function):
    _, state = function
    state["reply"] = httpx.Response(200, text="<html>not json</html>")
    with pytest.raises(AnalyzerError):
        _run("r-1", "x", "t")


def test_transport_error_raises(monkeypatch):
    def _refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(
        analyzer, "_client", lambda: httpx.AsyncClient(transport=httpx.MockTransport(_refuse))
    )
    with pytest.raises(AnalyzerError, match="connection refused"):
        _run("r-1", "x", "t")
