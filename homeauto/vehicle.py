"""Vehicle class - the aggregate for vehicle data and service progress."""

from datetime import date
from typing import List, Optional

from .maintenance_record import MaintenanceRecord
from .vehicle_repair import VehicleRepair
from .service_progress import ServiceProgress
from .status import DUE_SOON_PERCENT, progress_status
from .calculations import (
    calc_date_progress,
    calc_service_progress,
    latest_scheduled_record,
)


class Vehicle:
    """A vehicle with its current odometer reading, maintenance and repair records."""

    def __init__(
        self,
        make: str,
        model: str,
        year: Optional[int] = None,
        nickname: Optional[str] = None,
        mileage: Optional[float] = None,
        maintenance: Optional[List[MaintenanceRecord]] = None,
        repairs: Optional[List[VehicleRepair]] = None,
    ):
        self.make = make
        self.model = model
        self.year = year
        self.nickname = nickname
        self.mileage = mileage
        self.maintenance = maintenance or []
        self.repairs = repairs or []

    @property
    def description(self) -> str:
        """Year, make and model."""
        if self.year:
            return f"{self.year} {self.make} {self.model}"
        return f"{self.make} {self.model}"

    @property
    def name(self) -> str:
        """Nickname if set, otherwise the description."""
        return self.nickname or self.description

    @property
    def latest_record(self) -> Optional[MaintenanceRecord]:
        """Most recent maintenance record overall (undated records sort oldest)."""
        if not self.maintenance:
            return None
        return max(self.maintenance, key=lambda r: r.service_date or "")

    @property
    def total_cost(self) -> float:
        """Maintenance cost only; see repair_cost for repairs."""
        return sum(r.cost for r in self.maintenance if r.cost is not None)

    @property
    def repair_cost(self) -> float:
        return sum(r.cost for r in self.repairs if r.cost is not None)

    def get_maintenance_sorted(self, reverse: bool = True) -> List[MaintenanceRecord]:
        """Records ordered by service date, newest first by default."""
        return sorted(
            self.maintenance, key=lambda r: r.service_date or "", reverse=reverse
        )

    def get_repairs_sorted(self, reverse: bool = True) -> List[VehicleRepair]:
        return sorted(self.repairs, key=lambda r: r.service_date or "", reverse=reverse)

    def service_progress(self) -> float:
        """Mileage-based progress through the current service interval."""
        return calc_service_progress(self.mileage, self.maintenance)

    def next_service(
        self,
        as_of: Optional[date] = None,
        soon_threshold: float = DUE_SOON_PERCENT,
    ) -> ServiceProgress:
        """
        Derive the next-service progress card.

        Mileage schedules take precedence. When no record carries a
        next-service mileage, the latest record's next-service date is used.
        """
        if self.mileage is None or not self.maintenance:
            return ServiceProgress(
                percent=0.0,
                label="No service data",
                status=progress_status(0, has_schedule=False),
            )

        record = latest_scheduled_record(self.maintenance)
        if record is not None:
            percent = self.service_progress()
            return ServiceProgress(
                percent=percent,
                label=f"Due at {record.next_service_mileage:,.0f} mi",
                status=progress_status(percent, soon_threshold),
                due_mileage=record.next_service_mileage,
                due_date=record.next_service_date,
            )

        latest = self.latest_record
        if latest.next_service_date and latest.service_date:
            percent = calc_date_progress(
                latest.service_date, latest.next_service_date, as_of
            )
            return ServiceProgress(
                percent=percent,
                label=f"Due {latest.next_service_date}",
                status=progress_status(percent, soon_threshold),
                due_date=latest.next_service_date,
            )

        return ServiceProgress(
            percent=0.0,
            label="No service schedule",
            status=progress_status(0, has_schedule=False),
        )
