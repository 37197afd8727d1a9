"""Unit tests for share price history helpers."""

from datetime import datetime

import pytest

from cement_carbon.analytics import StockSeries
from cement_carbon.analytics.stock_history import (
    PricePoint,
    expand_series,
    price_change,
    shift_series_dates_to_target,
    window,
)


class TestExpandSeries:
    def test_daily(self):
        points = expand_series(StockSeries(start_date="2024-03-01", prices=[1.0, 2.0, 3.0]))
        assert [p.date for p in points] == [datetime(2024, 3, 1), datetime(2024, 3, 2), datetime(2024, 3, 3)]
        assert [p.price for p in points] == [1.0, 2.0, 3.0]

    def test_weekly(self):
        points = expand_series(StockSeries(start_date="2024-03-01", frequency="W", prices=[1.0, 2.0]))
        assert points[1].date == datetime(2024, 3, 8)

    def test_monthly_clamps_day(self):
        points = expand_series(StockSeries(start_date="2024-01-31", frequency="M", prices=[1.0, 2.0, 3.0]))
        assert [p.date for p in points] == [datetime(2024, 1, 31), datetime(2024, 2, 29), datetime(2024, 3, 31)]

    def test_monthly_crosses_year(self):
        points = expand_series(StockSeries(start_date="2024-11-15", frequency="M", prices=[1.0, 2.0, 3.0]))
        assert points[-1].date == datetime(2025, 1, 15)

    def test_empty(self):
        assert expand_series(None) == []
        assert expand_series(StockSeries(start_date="2024-01-01")) == []

    def test_invalid_start_date(self):
        with pytest.raises(ValueError, match="Invalid stock series start date"):
            expand_series(StockSeries(start_date="not-a-date", prices=[1.0]))


class TestShiftAndWindow:
    def test_shift_preserves_spacing(self):
        points = [PricePoint(datetime(2020, 1, 1), 1.0), PricePoint(datetime(2020, 1, 11), 2.0)]
        shifted = shift_series_dates_to_target(points, datetime(2024, 6, 30))
        assert [p.date for p in shifted] == [datetime(2024, 6, 20), datetime(2024, 6, 30)]

    def test_shift_identical_dates_spreads_daily(self):
        same = datetime(2020, 1, 1)
        points = [PricePoint(same, 1.0), PricePoint(same, 2.0), PricePoint(same, 3.0)]
        shifted = shift_series_dates_to_target(points, datetime(2024, 6, 30))
        assert [p.date.day for p in shifted] == [28, 29, 30]

    def test_shift_empty(self):
        assert shift_series_dates_to_target([]) == []

    def test_window_selects_recent_points(self):
        now = datetime(2024, 12, 31)
        points = [PricePoint(datetime(2024, m, 1), float(m)) for m in range(1, 13)]
        selected = window(points, "1M", now=now)
        assert [p.price for p in selected] == [12.0]

    def test_window_falls_back_to_trailing_points(self):
        points = [PricePoint(datetime(2001, 1, d), float(d)) for d in range(1, 11)]
        selected = window(points, "1W", now=datetime(2024, 1, 1))
        assert [p.price for p in selected] == [4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]

    def test_unknown_range_uses_six_months(self):
        now = datetime(2024, 12, 31)
        points = [PricePoint(datetime(2024, m, 1), float(m)) for m in range(1, 13)]
        assert window(points, "bogus", now=now) == window(points, "6M", now=now)


class TestPriceChange:
    def test_change_between_endpoints(self):
        points = [PricePoint(datetime(2024, 1, 1), 100.0), PricePoint(datetime(2024, 2, 1), 125.0)]
        change, pct = price_change(points, fallback_price=0.0)
        assert change == 25.0
        assert pct == pytest.approx(25.0)

    def test_no_points_uses_fallback(self):
        assert price_change([], fallback_price=900.0) == (0.0, 0.0)
