from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Optional

import polars as pl
from pydantic import BaseModel
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from HabitTracker.models import Activity

log = logging.getLogger(__name__)


class SummaryStats(BaseModel):
    total_hours: float = 0.0
    active_days: int = 0
    avg_hours: float = 0.0
    max_hours: float = 0.0


class DayTotal(BaseModel):
    day: date
    hours: float


class MonthTotal(BaseModel):
    label: str  # e.g. "October 2026"
    hours: float


class Report(BaseModel):
    days: int
    streak: int
    stats: SummaryStats
    recent_days: List[DayTotal]
    months: List[MonthTotal]
    max_month_hours: float = 0.0


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Map a configured IANA zone name to a tzinfo. ``None`` means the system
    local timezone, which is also the fallback for unknown names.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        log.warning(f"Invalid timezone '{name}' ({e}). Using system local time.")
        return None


def local_date(moment: datetime, tz: Optional[tzinfo]) -> date:
    return moment.astimezone(tz).date()


def daily_buckets(activities: Iterable[Activity], tz: Optional[tzinfo] = None) -> Dict[date, float]:
    """Sum hours per local calendar date, over the whole history, oldest date first."""
    activities = list(activities)
    frame = pl.DataFrame(
        {
            "day": [local_date(a.timestamp, tz) for a in activities],
            "hours": [float(a.hours) for a in activities],
        },
        schema={"day": pl.Date, "hours": pl.Float64},
    )
    daily = frame.group_by("day").agg(pl.col("hours").sum()).sort("day")
    return dict(zip(daily["day"].to_list(), daily["hours"].to_list()))


def monthly_buckets(buckets: Dict[date, float]) -> List[MonthTotal]:
    """Fold daily totals into calendar months, most recent month first."""
    if not buckets:
        return []
    frame = pl.DataFrame(
        {"day": list(buckets.keys()), "hours": list(buckets.values())},
        schema={"day": pl.Date, "hours": pl.Float64},
    )
    monthly = (
        frame.with_columns(
            pl.col("day").dt.year().alias("year"),
            pl.col("day").dt.month().alias("month"),
        )
        .group_by(["year", "month"])
        .agg(pl.col("hours").sum())
        .sort(["year", "month"], descending=True)
    )
    return [
        MonthTotal(label=date(row["year"], row["month"], 1).strftime("%B %Y"), hours=row["hours"])
        for row in monthly.iter_rows(named=True)
    ]


def current_streak(buckets: Dict[date, float], today: date, days: int) -> int:
    """
    Consecutive active days ending today. The walk stops at the first day
    without an entry or once it passes ``today - days``.
    """
    streak = 0
    for offset in range(days + 1):
        if today - timedelta(days=offset) not in buckets:
            break
        streak += 1
    return streak


def summary_stats(buckets: Dict[date, float]) -> SummaryStats:
    if not buckets:
        return SummaryStats()
    total = sum(buckets.values())
    active = len(buckets)
    return SummaryStats(
        total_hours=total,
        active_days=active,
        avg_hours=total / active,
        max_hours=max(0.0, max(buckets.values())),
    )


def last_n_days(buckets: Dict[date, float], today: date, n: int = 7) -> List[DayTotal]:
    """Totals for the ``n`` days ending today, oldest first; missing days are 0."""
    return [
        DayTotal(day=day, hours=buckets.get(day, 0.0))
        for day in (today - timedelta(days=i) for i in range(n - 1, -1, -1))
    ]


def bar_length(value: float, max_value: float, width: int) -> int:
    if max_value <= 0:
        return 0
    # Round half up
    return max(0, math.floor(value / max_value * width + 0.5))


def build_report(
    activities: Iterable[Activity],
    days: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    chart_days: int = 7,
    months_shown: int = 3,
) -> Report:
    now = now or datetime.now(timezone.utc)
    today = local_date(now, tz)
    buckets = daily_buckets(activities, tz)
    months = monthly_buckets(buckets)
    log.debug(f"Built {len(buckets)} daily buckets and {len(months)} monthly buckets for {today}")
    return Report(
        days=days,
        streak=current_streak(buckets, today, days),
        stats=summary_stats(buckets),
        recent_days=last_n_days(buckets, today, chart_days),
        months=months[:months_shown],
        max_month_hours=max((m.hours for m in months), default=0.0),
    )
