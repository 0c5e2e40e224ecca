from __future__ import annotations

import datetime as dt


def week_bounds(day: dt.date) -> tuple[dt.date, dt.date]:
    """Monday and Sunday of the week containing `day`."""
    start = day - dt.timedelta(days=day.weekday())
    return start, start + dt.timedelta(days=6)


def week_days(day: dt.date) -> list[dt.date]:
    start, _ = week_bounds(day)
    return [start + dt.timedelta(days=i) for i in range(7)]
