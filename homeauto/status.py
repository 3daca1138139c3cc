"""Status enum for service urgency levels."""

from enum import Enum


class Status(Enum):
    """Service status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    OK = 3
    UNKNOWN = 4  # No service schedule recorded


DUE_SOON_PERCENT = 80


def progress_status(
    percent: float, soon_threshold: float = DUE_SOON_PERCENT, has_schedule: bool = True
) -> Status:
    """Classify a service progress percentage."""
    if not has_schedule:
        return Status.UNKNOWN
    if percent >= 100:
        return Status.OVERDUE
    if percent > soon_threshold:
        return Status.DUE_SOON
    return Status.OK
