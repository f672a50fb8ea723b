"""
Text rendering of the activity dashboard.

The layout mirrors a small terminal report: quick stats, a bar per day for
the last week, and a bar per month for the most recent months. Bars are
scaled against the best day (or month) so the longest bar is full width.
"""
from __future__ import annotations

from typing import List, Optional

from HabitTracker.config import Settings
from HabitTracker.summary.aggregate import Report, bar_length

BAR_CHAR = "█"
EMPTY_DAY = "·"


def _day_lines(report: Report, width: int) -> List[str]:
    lines = []
    for entry in report.recent_days:
        if entry.hours > 0:
            bar = BAR_CHAR * bar_length(entry.hours, report.stats.max_hours, width)
        else:
            bar = EMPTY_DAY
        lines.append(
            f"  {entry.day.strftime('%a')} {entry.day.strftime('%d/%m')} {entry.hours:<5.1f}h {bar}"
        )
    return lines


def _month_lines(report: Report, width: int) -> List[str]:
    return [
        f"  {month.label:<12} {month.hours:<5.1f}h "
        f"{BAR_CHAR * bar_length(month.hours, report.max_month_hours, width)}"
        for month in report.months
    ]


def render_dashboard(report: Report, settings: Optional[Settings] = None) -> str:
    settings = settings or Settings()
    stats = report.stats
    lines = [
        "",
        "📊 Activity Dashboard",
        "=================",
        "",
        "📈 Quick Stats",
        f"  • Current streak: {report.streak} days",
        f"  • Total hours: {stats.total_hours:.1f} hrs",
        f"  • Active days: {stats.active_days} of {report.days} days",
        f"  • Daily average: {stats.avg_hours:.1f} hrs",
        f"  • Best day: {stats.max_hours:.1f} hrs",
        "",
        f"📅 Last {len(report.recent_days)} Days",
        *_day_lines(report, settings.day_bar_width),
        "",
        "📊 Monthly Overview",
        *_month_lines(report, settings.month_bar_width),
        "",
    ]
    return "\n".join(lines)
