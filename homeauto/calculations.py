"""Helper functions for next-service calculations."""

import math
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Optional, Sequence, Tuple

from .catalog import (
    DEFAULT_INTERVAL_MILES,
    DEFAULT_INTERVAL_MONTHS,
    NO_WARRANTY,
    WARRANTY_TERMS,
)
from .maintenance_record import MaintenanceRecord


def _clamp_percent(ratio: float) -> float:
    if not math.isfinite(ratio):
        return 0.0
    return min(max(ratio, 0.0), 100.0)


def latest_scheduled_record(
    records: Sequence[MaintenanceRecord],
) -> Optional[MaintenanceRecord]:
    """
    Most recent record that carries a next-service mileage.

    Records without a service date sort as the oldest. On equal dates the
    earliest record in input order wins.
    """
    scheduled = [r for r in records if r.is_scheduled]
    if not scheduled:
        return None
    return max(scheduled, key=lambda r: r.service_date or "")


def calc_service_progress(
    current_mileage: Optional[float], records: Sequence[MaintenanceRecord]
) -> float:
    """
    Percentage (0-100) of the current service interval already driven.

    - No current mileage or no records: 0
    - Interval runs from the latest scheduled record's mileage (0 if unknown)
      to its next-service mileage
    - Malformed intervals (zero or negative) never produce a value outside 0-100
    """
    if current_mileage is None or not records:
        return 0.0

    record = latest_scheduled_record(records)
    if record is None or record.next_service_mileage is None:
        return 0.0

    last_miles = record.mileage if record.mileage is not None else 0
    total_interval = record.next_service_mileage - last_miles
    progressed = current_mileage - last_miles
    if total_interval == 0:
        return 0.0
    return _clamp_percent(progressed / total_interval * 100)


def calc_date_progress(
    service_date: Optional[str],
    next_service_date: Optional[str],
    as_of: Optional[date] = None,
) -> float:
    """Percentage (0-100) of a date-based service interval already elapsed."""
    if not service_date or not next_service_date:
        return 0.0
    try:
        start = date.fromisoformat(service_date)
        end = date.fromisoformat(next_service_date)
    except ValueError:
        return 0.0
    total_days = (end - start).days
    if total_days <= 0:
        return 0.0
    days_passed = ((as_of or date.today()) - start).days
    return _clamp_percent(days_passed / total_days * 100)


def round_percent(value: float) -> int:
    """Round half up for display (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def calc_due_date(
    last_date: Optional[date], interval_months: Optional[float]
) -> Optional[date]:
    """Calculate next due date: last + interval months."""
    if interval_months is None or last_date is None:
        return None
    months = int(interval_months)
    days = int((interval_months - months) * 30)
    return last_date + relativedelta(months=months, days=days)


def suggest_next_service(
    service_type: str,
    mileage: Optional[float],
    service_date: Optional[str],
) -> Tuple[Optional[float], Optional[str]]:
    """
    Suggest next-service mileage and date from the default intervals.

    Returns (next_mileage, next_date); either is None when the service type
    has no default interval of that kind or the base value is missing.
    """
    next_mileage = None
    interval_miles = DEFAULT_INTERVAL_MILES.get(service_type)
    if interval_miles is not None and mileage is not None:
        next_mileage = mileage + interval_miles

    next_date = None
    if service_date:
        try:
            last_date = date.fromisoformat(service_date)
        except ValueError:
            last_date = None
        due = calc_due_date(last_date, DEFAULT_INTERVAL_MONTHS.get(service_type))
        next_date = due.isoformat() if due else None

    return next_mileage, next_date


def resolve_warranty(service_date: Optional[str], value: Optional[str]) -> Optional[str]:
    """
    Turn a warranty entry into the date it runs until.

    - Blank or "No Warranty": None
    - A named length ("90 days", "1 year", ...): service date + length
    - Anything else is returned unchanged (an explicit end date)
    """
    if not value or value == NO_WARRANTY:
        return None
    term = WARRANTY_TERMS.get(value)
    if term is None:
        return value
    try:
        start = date.fromisoformat(service_date or "")
    except ValueError:
        return value
    return (start + relativedelta(**term)).isoformat()
