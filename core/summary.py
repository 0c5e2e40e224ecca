"""
core/summary.py
────────────────────────────────────────────────────────────────────────
Group one week of meal entries into seven calendar-ordered day buckets.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Sequence

import pandas as pd

from core.models.meal import MEAL_ORDER, MealEntry
from core.week import week_bounds, week_days

_SLOT_RANK = {m.value: i for i, m in enumerate(MEAL_ORDER)}


def weekly_summary(meals: Sequence[MealEntry], day: dt.date) -> Dict[str, Any]:
    start, end = week_bounds(day)
    days = week_days(day)

    df = pd.DataFrame(
        [
            {"date": m.date, "meal_type": m.meal_type.value, "description": m.description}
            for m in meals
        ],
        columns=["date", "meal_type", "description"],
    )
    # entries outside the week are ignored
    df = df[(df["date"] >= start) & (df["date"] <= end)].copy()
    df["rank"] = df["meal_type"].map(_SLOT_RANK)
    df = df.sort_values(["date", "rank"])

    grouped: Dict[dt.date, List[Dict[str, str]]] = {
        d: g[["meal_type", "description"]].to_dict("records")
        for d, g in df.groupby("date")
    }

    return {
        "week_start": start,
        "week_end": end,
        "total_meals": int(len(df)),
        "days_logged": int(df["date"].nunique()),
        "days": [{"date": d, "meals": grouped.get(d, [])} for d in days],
    }
