"""VehicleRepair class for unscheduled repair records."""
from datetime import date
from typing import Optional


class VehicleRepair:
    """A repair done on a vehicle, with optional parts and labor warranties."""

    def __init__(
            self,
            repair_type: str,
            service_date: Optional[str] = None,
            mileage: Optional[float] = None,
            cost: Optional[float] = None,
            repair_facility: Optional[str] = None,
            finding: Optional[str] = None,
            part_warranty: Optional[str] = None,
            labor_warranty: Optional[str] = None,
    ):
        self.repair_type = repair_type
        self.service_date = service_date
        self.mileage = mileage
        self.cost = cost
        self.repair_facility = repair_facility
        self.finding = finding
        # ISO dates the warranties run until
        self.part_warranty = part_warranty
        self.labor_warranty = labor_warranty

    @property
    def warranty_until(self) -> Optional[str]:
        """Later of the parts and labor warranty end dates."""
        dates = [d for d in (self.part_warranty, self.labor_warranty) if d]
        return max(dates) if dates else None

    def under_warranty(self, as_of: Optional[date] = None) -> bool:
        """True while either warranty has not yet run out."""
        if self.warranty_until is None:
            return False
        return self.warranty_until >= (as_of or date.today()).isoformat()
