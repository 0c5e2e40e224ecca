from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import text

from api.v1.analysis import get_rng
from core.recommendation import CONDITION_ADVICE
from main import app


class HalfRng:
    def random(self) -> float:
        return 0.5


@pytest.fixture
def fixed_rng():
    app.dependency_overrides[get_rng] = lambda: HalfRng()


def _profile(client, auth, conditions):
    client.put(
        "/api/v1/profile",
        json={"name": "Ada", "age": 36, "gender": "female", "medical_conditions": conditions},
        headers=auth,
    )


def _log(client, auth, *slots):
    for s in slots:
        client.put(f"/api/v1/meals/{s}", json={"description": "something"}, headers=auth)


def test_analysis_needs_profile(client, auth):
    r = client.post("/api/v1/analysis", params={"date": "2024-03-06"}, headers=auth)
    assert r.status_code == 404


def test_empty_week_is_insufficient_data(client, auth):
    _profile(client, auth, ["none"])
    _log(client, auth, "2024-02-26/lunch")           # previous week only
    r = client.post("/api/v1/analysis", params={"date": "2024-03-06"}, headers=auth)
    assert r.status_code == 422
    assert r.json()["detail"] == "Please enter meals for this week before analyzing."
    assert client.get("/api/v1/analysis/reports", headers=auth).json() == []


def test_analysis_report_and_snapshot(client, auth, fixed_rng):
    _profile(client, auth, ["diabetes"])
    _log(client, auth, "2024-03-04/breakfast", "2024-03-04/lunch", "2024-03-10/dinner")

    r = client.post("/api/v1/analysis", params={"date": "2024-03-06"}, headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["saved"] is True
    assert (body["week_start"], body["week_end"]) == ("2024-03-04", "2024-03-10")

    expected = 100 * 3 / 21 + 10
    assert body["nutrients"]["iron"] == pytest.approx(expected)
    # every score ties → iron, diabetic wording, then the diabetes block
    assert body["recommendations"] == [
        "Add spinach, lentils, and chickpeas to your meals (avoid high sugar fruits)",
        *CONDITION_ADVICE["diabetes"],
    ]

    stored = client.get("/api/v1/analysis/reports", headers=auth).json()
    assert len(stored) == 1
    assert stored[0]["iron_percentage"] == pytest.approx(expected)
    assert stored[0]["recommendations"] == body["recommendations"]


def test_scores_in_range_with_default_rng(client, auth):
    _profile(client, auth, ["hypertension", "cholesterol"])
    _log(client, auth, "2024-03-05/lunch")
    body = client.post("/api/v1/analysis", params={"date": "2024-03-05"}, headers=auth).json()
    assert all(20 <= v <= 100 for v in body["nutrients"].values())
    assert len(body["recommendations"]) == 5


def test_report_returned_even_if_snapshot_fails(client, auth, engine, fixed_rng):
    _profile(client, auth, ["none"])
    _log(client, auth, "2024-03-05/lunch")

    async def _drop():
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE weekly_reports"))

    asyncio.run(_drop())

    r = client.post("/api/v1/analysis", params={"date": "2024-03-05"}, headers=auth)
    assert r.status_code == 200
    assert r.json()["saved"] is False
    assert len(r.json()["recommendations"]) == 1


def test_reports_are_per_user(client, auth, other_auth, fixed_rng):
    _profile(client, auth, ["none"])
    _log(client, auth, "2024-03-05/lunch")
    client.post("/api/v1/analysis", params={"date": "2024-03-05"}, headers=auth)
    assert client.get("/api/v1/analysis/reports", headers=other_auth).json() == []
