"""MaintenanceRecord class for vehicle service records."""
from typing import Optional


class MaintenanceRecord:
    """A record of maintenance performed on a vehicle."""

    def __init__(
            self,
            service_type: str,
            service_date: Optional[str] = None,
            mileage: Optional[float] = None,
            next_service_mileage: Optional[float] = None,
            next_service_date: Optional[str] = None,
            cost: Optional[float] = None,
            service_company: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.service_type = service_type
        self.service_date = service_date
        self.mileage = mileage
        self.next_service_mileage = next_service_mileage
        self.next_service_date = next_service_date
        self.cost = cost
        self.service_company = service_company
        self.notes = notes

    @property
    def is_scheduled(self) -> bool:
        """True when a next-service mileage threshold was recorded."""
        return self.next_service_mileage is not None
