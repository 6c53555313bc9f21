"""
Derived forecast views. Both are recomputed from the stored series on every
render; a 5-day/3-hour forecast is about 40 samples.
"""
from datetime import tzinfo
from typing import Dict, List, Optional

from .models import DailyForecast, ForecastSeries, HourlyEntry

HOURLY_SAMPLES = 8
DAILY_DAYS = 5


def hourly_view(
    series: Optional[ForecastSeries],
    limit: int = HOURLY_SAMPLES,
    tz: Optional[tzinfo] = None,
) -> List[HourlyEntry]:
    """First `limit` samples as (time label, temperature). tz=None uses the local timezone."""
    if not series:
        return []
    entries = []
    for sample in series.samples[:limit]:
        local = sample.timestamp.astimezone(tz)
        entries.append(
            HourlyEntry(
                timestamp=sample.timestamp,
                time_label=local.strftime("%H:%M"),
                temperature=sample.temperature,
                condition_summary=sample.condition_summary,
            )
        )
    return entries


def daily_view(
    series: Optional[ForecastSeries],
    days: int = DAILY_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[DailyForecast]:
    """Group samples by calendar day in the viewer's timezone.

    Temperature is the plain mean of the day's samples. The description and
    icon come from the first sample seen for that day, not a midday or
    majority sample.
    """
    if not series:
        return []

    groups: Dict = {}
    for sample in series.samples:
        day = sample.timestamp.astimezone(tz).date()
        group = groups.get(day)
        if group is None:
            groups[day] = {
                "first": sample,
                "total": sample.temperature,
                "count": 1,
            }
        else:
            group["total"] += sample.temperature
            group["count"] += 1

    result = []
    for day in sorted(groups)[:days]:
        group = groups[day]
        first = group["first"]
        result.append(
            DailyForecast(
                date=day,
                temperature=group["total"] / group["count"],
                condition_summary=first.condition_summary,
                icon_code=first.icon_code,
                sample_count=group["count"],
            )
        )
    return result
