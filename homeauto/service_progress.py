"""ServiceProgress dataclass for derived next-service information."""

from dataclasses import dataclass
from typing import Optional

from .status import Status


@dataclass
class ServiceProgress:
    """How far a vehicle is through its current service interval."""

    percent: float
    label: str
    status: Status
    due_mileage: Optional[float] = None
    due_date: Optional[str] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)
