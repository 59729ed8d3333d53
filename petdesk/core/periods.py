from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from petdesk.core.constants import PERIODS
from petdesk.core.dates import normalize_datetime

HOUR = "hour"
DAY = "day"


@dataclass(frozen=True)
class PeriodWindow:
    period: str
    start: Optional[datetime]
    end: Optional[datetime]
    previous_start: Optional[datetime]
    previous_end: Optional[datetime]
    granularity: str

    @property
    def bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, moment) -> bool:
        moment = normalize_datetime(moment)
        if moment is None:
            return False
        if not self.bounded:
            return True
        return self.start <= moment < self.end

    def in_previous(self, moment) -> bool:
        moment = normalize_datetime(moment)
        if moment is None or self.previous_start is None:
            return False
        return self.previous_start <= moment < self.previous_end


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _first_of_month(day: date) -> date:
    return day.replace(day=1)


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    return date(day.year + month_index // 12, month_index % 12 + 1, 1)


def _week_start(day: date, week_start: int) -> date:
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def resolve_period(period: str, now=None, *, week_start: int = 0) -> PeriodWindow:
    """Return the ``[start, end)`` range for ``period`` and the equal-length range before it.

    ``week_start`` follows ``date.weekday()`` numbering (0 is Monday).
    """
    key = (period or "").strip().lower()
    if key not in PERIODS:
        raise ValueError("Unknown period: {}".format(period))
    if not 0 <= week_start <= 6:
        raise ValueError("week_start must be between 0 and 6")

    now = normalize_datetime(now) or datetime.now()
    today = now.date()

    if key == "all":
        return PeriodWindow(key, None, None, None, None, DAY)

    if key == "today":
        start_day, end_day = today, today + timedelta(days=1)
    elif key == "tomorrow":
        start_day, end_day = today + timedelta(days=1), today + timedelta(days=2)
    elif key == "week":
        start_day = _week_start(today, week_start)
        end_day = start_day + timedelta(days=7)
    elif key == "last_week":
        end_day = _week_start(today, week_start)
        start_day = end_day - timedelta(days=7)
    elif key == "month":
        start_day = _first_of_month(today)
        end_day = _add_months(start_day, 1)
    else:
        end_day = _first_of_month(today)
        start_day = _add_months(end_day, -1)

    start = _midnight(start_day)
    end = _midnight(end_day)
    length = end - start
    granularity = HOUR if length <= timedelta(days=1) else DAY
    return PeriodWindow(key, start, end, start - length, start, granularity)


def _bucket_step(granularity: str) -> timedelta:
    return timedelta(hours=1) if granularity == HOUR else timedelta(days=1)


def _bucket_label(moment: datetime, granularity: str) -> str:
    if granularity == HOUR:
        return moment.strftime("%H:00")
    return moment.date().isoformat()


def bucket_series(entries: Iterable[tuple], window: PeriodWindow) -> list[dict]:
    """Bucket ``(moment, amount)`` pairs into the window's current and previous ranges.

    Each bucket of the current range is paired with the bucket at the same
    offset from the start of the previous range.
    """
    points = []
    for moment, amount in entries:
        moment = normalize_datetime(moment)
        if moment is None:
            continue
        points.append((moment, float(amount or 0.0)))

    step = _bucket_step(window.granularity)

    if window.bounded:
        start, end = window.start, window.end
    else:
        if not points:
            return []
        start = _midnight(min(moment for moment, _ in points).date())
        end = _midnight(max(moment for moment, _ in points).date()) + step

    buckets = []
    cursor = start
    while cursor < end:
        buckets.append(
            {
                "label": _bucket_label(cursor, window.granularity),
                "start": cursor,
                "sales": 0.0,
                "orders": 0,
                "previous_sales": 0.0,
                "previous_orders": 0,
            }
        )
        cursor += step

    for moment, amount in points:
        if start <= moment < end:
            bucket = buckets[int((moment - start) // step)]
            bucket["sales"] += amount
            bucket["orders"] += 1
        elif window.in_previous(moment):
            index = int((moment - window.previous_start) // step)
            if index < len(buckets):
                bucket = buckets[index]
                bucket["previous_sales"] += amount
                bucket["previous_orders"] += 1

    return buckets


__all__ = ["DAY", "HOUR", "PeriodWindow", "bucket_series", "resolve_period"]
