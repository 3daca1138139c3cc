#!/usr/bin/env python3
"""Tests for next-service calculation helpers."""
import math
from datetime import date

import pytest
from homeauto import (
    MaintenanceRecord,
    calc_date_progress,
    calc_service_progress,
    latest_scheduled_record,
    resolve_warranty,
    round_percent,
    suggest_next_service,
)
from homeauto.calculations import calc_due_date


def record(service_date=None, mileage=None, next_mileage=None, service_type="Oil Change"):
    return MaintenanceRecord(
        service_type,
        service_date=service_date,
        mileage=mileage,
        next_service_mileage=next_mileage,
    )


class TestCalcServiceProgress:
    """Tests for calc_service_progress."""

    def test_no_current_mileage(self):
        """0 when current mileage is unknown."""
        assert calc_service_progress(None, [record("2025-01-01", 10000, 15000)]) == 0

    def test_no_records(self):
        """0 when there are no records."""
        assert calc_service_progress(12000, []) == 0

    def test_no_scheduled_records(self):
        """0 when no record has a next-service mileage."""
        records = [record("2025-01-01", 10000), record("2025-02-01", 11000)]
        assert calc_service_progress(12000, records) == 0

    def test_halfway(self):
        """10,000 -> 15,000 at 12,500 is 50%."""
        assert calc_service_progress(12500, [record("2025-01-01", 10000, 15000)]) == 50

    def test_clamps_past_due(self):
        """Past the next-service mileage clamps to 100."""
        assert calc_service_progress(16000, [record("2025-01-01", 10000, 15000)]) == 100

    def test_clamps_below_last_service(self):
        """Odometer below the last service mileage clamps to 0."""
        assert calc_service_progress(9000, [record("2025-01-01", 10000, 15000)]) == 0

    def test_keeps_fractional_precision(self):
        assert calc_service_progress(10001, [record("2025-01-01", 10000, 13000)]) == pytest.approx(1 / 30)

    def test_missing_record_mileage_counts_from_zero(self):
        """Interval starts at 0 when the record has no mileage."""
        assert calc_service_progress(2500, [record("2025-01-01", None, 5000)]) == 50

    @pytest.mark.parametrize(
        "mileage,next_mileage,current",
        [
            (15000, 15000, 16000),
            (15000, 15000, 15000),
            (15000, 15000, 14000),
            (15000, 10000, 16000),
            (15000, 10000, 12000),
            (15000, 10000, 9000),
        ],
    )
    def test_malformed_interval_stays_in_range(self, mileage, next_mileage, current):
        """Zero or negative intervals still give a finite value in [0, 100]."""
        result = calc_service_progress(current, [record("2025-01-01", mileage, next_mileage)])
        assert math.isfinite(result)
        assert 0 <= result <= 100

    def test_zero_interval_is_zero(self):
        assert calc_service_progress(16000, [record("2025-01-01", 15000, 15000)]) == 0

    def test_uses_most_recent_scheduled_record(self):
        """The latest dated record with a threshold defines the interval."""
        records = [
            record("2024-06-01", 5000, 10000),
            record("2025-01-01", 10000, 15000),
            record("2025-03-01", 11000),  # no threshold, ignored
        ]
        assert calc_service_progress(12500, records) == 50

    def test_input_order_does_not_matter(self):
        records = [
            record("2025-01-01", 10000, 15000),
            record("2024-06-01", 5000, 10000),
        ]
        assert calc_service_progress(12500, records) == 50


class TestLatestScheduledRecord:
    """Tests for latest_scheduled_record."""

    def test_none_without_thresholds(self):
        assert latest_scheduled_record([record("2025-01-01", 1000)]) is None

    def test_only_scheduled_records_qualify(self):
        scheduled = record("2024-01-01", 1000, 6000)
        assert scheduled.is_scheduled
        assert not record("2025-01-01", 2000).is_scheduled
        assert latest_scheduled_record([scheduled, record("2025-01-01", 2000)]) is scheduled

    def test_undated_records_sort_oldest(self):
        undated = record(None, 20000, 25000)
        dated = record("2020-01-01", 1000, 6000)
        assert latest_scheduled_record([undated, dated]) is dated

    def test_tie_keeps_first_in_input_order(self):
        first = record("2025-01-01", 1000, 6000)
        second = record("2025-01-01", 2000, 7000)
        assert latest_scheduled_record([first, second]) is first

    def test_all_undated_picks_first(self):
        first = record(None, 1000, 6000)
        second = record(None, 2000, 7000)
        assert latest_scheduled_record([first, second]) is first


class TestCalcDateProgress:
    """Tests for calc_date_progress."""

    def test_halfway(self):
        result = calc_date_progress("2025-01-01", "2025-01-11", as_of=date(2025, 1, 6))
        assert result == 50

    def test_clamps_after_due(self):
        assert calc_date_progress("2025-01-01", "2025-01-11", as_of=date(2025, 3, 1)) == 100

    def test_clamps_before_start(self):
        assert calc_date_progress("2025-01-01", "2025-01-11", as_of=date(2024, 12, 1)) == 0

    def test_missing_dates(self):
        assert calc_date_progress(None, "2025-01-11") == 0
        assert calc_date_progress("2025-01-01", None) == 0

    def test_invalid_or_empty_interval(self):
        assert calc_date_progress("2025-01-11", "2025-01-01", as_of=date(2025, 1, 5)) == 0
        assert calc_date_progress("not-a-date", "2025-01-01") == 0


class TestRoundPercent:
    """Tests for round_percent."""

    def test_rounds_half_up(self):
        assert round_percent(62.5) == 63
        assert round_percent(0.5) == 1

    def test_rounds_down_below_half(self):
        assert round_percent(62.4) == 62

    def test_bounds(self):
        assert round_percent(0) == 0
        assert round_percent(100) == 100


class TestCalcDueDate:
    """Tests for calc_due_date helper function."""

    def test_whole_months(self):
        assert calc_due_date(date(2025, 1, 15), 6) == date(2025, 7, 15)

    def test_fractional_months(self):
        """Handles fractional months (converted to days)."""
        assert calc_due_date(date(2025, 1, 15), 7.5) == date(2025, 8, 30)

    def test_missing_inputs(self):
        assert calc_due_date(None, 6) is None
        assert calc_due_date(date(2025, 1, 15), None) is None


class TestSuggestNextService:
    """Tests for suggest_next_service."""

    def test_oil_change_mileage(self):
        assert suggest_next_service("Oil Change", 45000, "2025-03-02") == (50000, None)

    def test_brake_service_mileage(self):
        assert suggest_next_service("Brake Service", 30000, None) == (42000, None)

    def test_inspection_date(self):
        assert suggest_next_service("General Inspection", 45000, "2025-03-02") == (
            None,
            "2025-09-02",
        )

    def test_unknown_type(self):
        assert suggest_next_service("Other", 45000, "2025-03-02") == (None, None)

    def test_missing_mileage(self):
        assert suggest_next_service("Oil Change", None, "2025-03-02") == (None, None)


class TestResolveWarranty:
    """Tests for resolve_warranty."""

    def test_named_lengths(self):
        assert resolve_warranty("2025-05-14", "90 days") == "2025-08-12"
        assert resolve_warranty("2025-05-14", "1 year") == "2026-05-14"
        assert resolve_warranty("2025-05-14", "6 months") == "2025-11-14"

    def test_no_warranty(self):
        assert resolve_warranty("2025-05-14", None) is None
        assert resolve_warranty("2025-05-14", "") is None
        assert resolve_warranty("2025-05-14", "No Warranty") is None

    def test_explicit_date_unchanged(self):
        assert resolve_warranty("2025-05-14", "2027-01-01") == "2027-01-01"

    def test_length_without_service_date_unchanged(self):
        assert resolve_warranty(None, "1 year") == "1 year"
