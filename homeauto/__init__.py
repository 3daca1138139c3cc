"""
Home & Auto Assistant models.

This package provides the data models and rules behind the assistant:
- Status: Service urgency levels (OVERDUE, DUE_SOON, OK, UNKNOWN)
- Vehicle / MaintenanceRecord / VehicleRepair: Vehicles, service and repair records
- ServiceProgress: Derived next-service progress
- Provider: Saved service providers
- directory: Home services taxonomy and provider matching
- forms: Form validation schemas
- loader: YAML data store
"""

from .status import Status, progress_status
from .maintenance_record import MaintenanceRecord
from .vehicle_repair import VehicleRepair
from .service_progress import ServiceProgress
from .vehicle import Vehicle
from .provider import Provider, filter_providers
from .calculations import (
    calc_service_progress,
    calc_date_progress,
    latest_scheduled_record,
    resolve_warranty,
    round_percent,
    suggest_next_service,
)
from .directory import (
    DIRECTORY,
    DirectorySelection,
    find_service,
    resolve_providers,
    service_key,
    service_options,
)
from .loader import (
    load_vehicle,
    load_providers,
    save_maintenance_record,
    save_current_mileage,
)

__all__ = [
    "Status",
    "progress_status",
    "MaintenanceRecord",
    "VehicleRepair",
    "ServiceProgress",
    "Vehicle",
    "Provider",
    "filter_providers",
    "calc_service_progress",
    "calc_date_progress",
    "latest_scheduled_record",
    "resolve_warranty",
    "round_percent",
    "suggest_next_service",
    "DIRECTORY",
    "DirectorySelection",
    "find_service",
    "resolve_providers",
    "service_key",
    "service_options",
    "load_vehicle",
    "load_providers",
    "save_maintenance_record",
    "save_current_mileage",
]
