"""Share price history expansion and look-back windows."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from .models import StockSeries

LOOKBACK_DAYS = {
    "1W": 7,
    "1M": 30,
    "6M": 182,
    "1Y": 365,
    "3Y": 365 * 3,
    "5Y": 365 * 5,
}

DateLike = Union[str, date, datetime]


@dataclass
class PricePoint:
    date: datetime
    price: float


def _parse(value: DateLike) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _add_months(start: datetime, months: int) -> datetime:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def expand_series(series: Optional[StockSeries]) -> list[PricePoint]:
    """Turn a compact series into dated points (D: days, W: weeks, M: months)."""
    if series is None or not series.prices:
        return []
    start = _parse(series.start_date)
    if start is None:
        raise ValueError(f"Invalid stock series start date: {series.start_date!r}")

    points = []
    for index, price in enumerate(series.prices):
        if series.frequency == "W":
            when = start + timedelta(days=7 * index)
        elif series.frequency == "M":
            when = _add_months(start, index)
        else:
            when = start + timedelta(days=index)
        points.append(PricePoint(date=when, price=price))
    return points


def shift_series_dates_to_target(
    points: list[PricePoint],
    target: Optional[datetime] = None,
) -> list[PricePoint]:
    """Move a series so its last point falls on ``target`` (default: now).

    Relative spacing is preserved. When the first and last dates coincide
    the points are instead laid out one day apart ending at ``target``.
    """
    if not points:
        return points
    target = target or datetime.now()
    first = points[0].date
    last = points[-1].date

    if first == last:
        step = timedelta(days=1)
        return [
            PricePoint(date=target - (len(points) - 1 - i) * step, price=p.price)
            for i, p in enumerate(points)
        ]

    delta = target - last
    return [PricePoint(date=p.date + delta, price=p.price) for p in points]


def window(points: list[PricePoint], time_range: str = "6M", now: Optional[datetime] = None) -> list[PricePoint]:
    """Points within the look-back range; the trailing points when none fall inside."""
    if not points:
        return []
    days = LOOKBACK_DAYS.get(time_range, LOOKBACK_DAYS["6M"])
    cutoff = (now or datetime.now()) - timedelta(days=days)
    selected = [p for p in points if p.date >= cutoff]
    if selected:
        return selected
    return points[max(0, len(points) - days):]


def price_change(points: list[PricePoint], fallback_price: float) -> tuple[float, float]:
    """Absolute and percent change between the first and last points."""
    latest = points[-1].price if points else fallback_price
    first = points[0].price if points else latest
    change = latest - first
    change_pct = change / first * 100 if first else 0.0
    return change, change_pct


__all__ = [
    "LOOKBACK_DAYS",
    "PricePoint",
    "expand_series",
    "price_change",
    "shift_series_dates_to_target",
    "window",
]
