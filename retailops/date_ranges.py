from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class DateRange:
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    @property
    def is_complete(self) -> bool:
        return self.from_date is not None and self.to_date is not None

    @property
    def days(self) -> int:
        if not self.is_complete:
            raise ValueError("date range is incomplete")
        return (self.to_date - self.from_date).days + 1


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _month_start(d: date) -> date:
    return d.replace(day=1)


def _month_end(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def _last_month(today: date) -> DateRange:
    prev = _month_start(today) - timedelta(days=1)
    return DateRange(_month_start(prev), _month_end(prev))


PRESETS: Dict[str, Callable[[date], DateRange]] = {
    "today": lambda t: DateRange(t, t),
    "yesterday": lambda t: DateRange(t - timedelta(days=1), t - timedelta(days=1)),
    "last_7_days": lambda t: DateRange(t - timedelta(days=6), t),
    "last_30_days": lambda t: DateRange(t - timedelta(days=29), t),
    "this_month": lambda t: DateRange(_month_start(t), t),
    "last_month": _last_month,
}


def preset_range(name: str, today: date | None = None) -> DateRange:
    key = (name or "").strip().lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown date range preset: {name!r}")
    return PRESETS[key](today or _today())


def previous_period(current: DateRange) -> DateRange:
    """Window of the same length that ends the day before ``current`` starts."""
    length = current.days
    prev_to = current.from_date - timedelta(days=1)
    return DateRange(prev_to - timedelta(days=length - 1), prev_to)
