"""YAML loading and saving utilities for vehicles and providers."""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .maintenance_record import MaintenanceRecord
from .provider import Provider
from .vehicle import Vehicle
from .vehicle_repair import VehicleRepair

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Vehicle, MaintenanceRecord, VehicleRepair, dict]:
    """Parse dictionary into appropriate object type."""
    # Maintenance record
    if "serviceType" in dct:
        return MaintenanceRecord(
            dct["serviceType"],
            dct.get("serviceDate"),
            dct.get("mileage"),
            dct.get("nextServiceMileage"),
            dct.get("nextServiceDate"),
            dct.get("cost"),
            dct.get("serviceCompany"),
            dct.get("notes"),
        )
    # Repair record
    elif "repairType" in dct:
        return VehicleRepair(
            dct["repairType"],
            dct.get("serviceDate"),
            dct.get("mileage"),
            dct.get("cost"),
            dct.get("repairFacility"),
            dct.get("finding"),
            dct.get("partWarranty"),
            dct.get("laborWarranty"),
        )
    # Top-level vehicle file
    elif "vehicle" in dct:
        info = dct["vehicle"]
        return Vehicle(
            info["make"],
            info["model"],
            info.get("year"),
            info.get("nickname"),
            info.get("mileage"),
            dct.get("maintenance"),
            dct.get("repairs"),
        )
    else:
        # Vehicle info block, consumed by the top-level branch above
        return dct


def _read_yaml(filename: PathLike) -> Any:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader)


def _write_yaml(filename: PathLike, data: Any) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


# =============================================================================
# Vehicles
# =============================================================================


def vehicles_dir(data_dir: PathLike) -> Path:
    return Path(data_dir) / "vehicles"


def vehicle_path(data_dir: PathLike, vehicle_id: str) -> Path:
    """Get full path for a vehicle ID."""
    return vehicles_dir(data_dir) / f"{vehicle_id}.yaml"


def list_vehicle_ids(data_dir: PathLike) -> List[str]:
    """Vehicle IDs (file stems) in the data directory, sorted."""
    return sorted(p.stem for p in vehicles_dir(data_dir).glob("*.yaml"))


def load_vehicle(filename: PathLike) -> Vehicle:
    """Load a vehicle from a YAML file."""
    with open(filename, "rb") as fp:
        # default=str turns unquoted YAML dates into ISO strings
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
        return json.loads(json_data, object_hook=_parse_object)


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a MaintenanceRecord to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"serviceType": record.service_type}
    if record.service_date is not None:
        d["serviceDate"] = record.service_date
    if record.mileage is not None:
        d["mileage"] = record.mileage
    if record.next_service_mileage is not None:
        d["nextServiceMileage"] = record.next_service_mileage
    if record.next_service_date is not None:
        d["nextServiceDate"] = record.next_service_date
    if record.cost is not None:
        d["cost"] = record.cost
    if record.service_company is not None:
        d["serviceCompany"] = record.service_company
    if record.notes is not None:
        d["notes"] = record.notes
    return d


def _repair_to_dict(repair: VehicleRepair) -> Dict[str, Any]:
    """Serialize a VehicleRepair to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"repairType": repair.repair_type}
    for key, value in (
        ("serviceDate", repair.service_date),
        ("mileage", repair.mileage),
        ("cost", repair.cost),
        ("repairFacility", repair.repair_facility),
        ("finding", repair.finding),
        ("partWarranty", repair.part_warranty),
        ("laborWarranty", repair.labor_warranty),
    ):
        if value is not None:
            d[key] = value
    return d


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    d: Dict[str, Any] = {"make": vehicle.make, "model": vehicle.model}
    if vehicle.year is not None:
        d["year"] = vehicle.year
    if vehicle.nickname is not None:
        d["nickname"] = vehicle.nickname
    if vehicle.mileage is not None:
        d["mileage"] = vehicle.mileage
    return d


def _check_index(items: List[Any], index: int, kind: str) -> None:
    if index < 0 or index >= len(items):
        raise IndexError(f"{kind} index {index} out of range (0..{len(items) - 1})")


def create_vehicle(filename: PathLike, vehicle: Vehicle) -> None:
    """
    Create a new vehicle YAML file.

    Refuses to overwrite an existing file.
    """
    path = Path(filename)
    if path.exists():
        raise FileExistsError(f"Vehicle file already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "vehicle": _vehicle_to_dict(vehicle),
        "maintenance": [_record_to_dict(r) for r in vehicle.maintenance],
    }
    if vehicle.repairs:
        data["repairs"] = [_repair_to_dict(r) for r in vehicle.repairs]
    _write_yaml(path, data)
    logger.info("Created vehicle %s", path.stem)


def save_maintenance_record(filename: PathLike, record: MaintenanceRecord) -> None:
    """
    Append a maintenance record to a vehicle YAML file.

    Loads the raw YAML, appends the record to the maintenance list,
    and writes back to the file.
    """
    data = _read_yaml(filename)

    if data.get("maintenance") is None:
        data["maintenance"] = []

    data["maintenance"].append(_record_to_dict(record))

    _write_yaml(filename, data)
    logger.info("Logged %s for %s", record.service_type, Path(filename).stem)


def update_maintenance_record(
    filename: PathLike, index: int, record: MaintenanceRecord
) -> None:
    """Replace the maintenance record at the given index (file order)."""
    data = _read_yaml(filename)
    records = data.get("maintenance") or []
    _check_index(records, index, "Maintenance")

    records[index] = _record_to_dict(record)
    data["maintenance"] = records

    _write_yaml(filename, data)
    logger.info("Updated maintenance record %d for %s", index, Path(filename).stem)


def delete_maintenance_record(filename: PathLike, index: int) -> None:
    """Remove the maintenance record at the given index (file order)."""
    data = _read_yaml(filename)
    records = data.get("maintenance") or []
    _check_index(records, index, "Maintenance")

    del records[index]
    data["maintenance"] = records

    _write_yaml(filename, data)
    logger.info("Deleted maintenance record %d for %s", index, Path(filename).stem)


def save_repair(filename: PathLike, repair: VehicleRepair) -> None:
    """Append a repair record to a vehicle YAML file."""
    data = _read_yaml(filename)

    if data.get("repairs") is None:
        data["repairs"] = []

    data["repairs"].append(_repair_to_dict(repair))

    _write_yaml(filename, data)
    logger.info("Logged repair %s for %s", repair.repair_type, Path(filename).stem)


def delete_repair(filename: PathLike, index: int) -> None:
    """Remove the repair record at the given index (file order)."""
    data = _read_yaml(filename)
    repairs = data.get("repairs") or []
    _check_index(repairs, index, "Repair")

    del repairs[index]
    data["repairs"] = repairs

    _write_yaml(filename, data)
    logger.info("Deleted repair %d for %s", index, Path(filename).stem)


def save_current_mileage(filename: PathLike, mileage: float) -> None:
    """Update the current odometer reading of a vehicle YAML file."""
    data = _read_yaml(filename)

    if data.get("vehicle") is None:
        data["vehicle"] = {}

    data["vehicle"]["mileage"] = mileage

    _write_yaml(filename, data)
    logger.info("Updated mileage for %s to %s", Path(filename).stem, mileage)


def update_vehicle_meta(
    filename: PathLike,
    make: Optional[str] = None,
    model: Optional[str] = None,
    year: Optional[int] = None,
    nickname: Optional[str] = None,
) -> None:
    """
    Update vehicle identity fields.

    Only updates fields that are provided (non-None). Leaves other keys unchanged.
    """
    data = _read_yaml(filename)
    info = data.setdefault("vehicle", {})

    for key, value in (
        ("make", make),
        ("model", model),
        ("year", year),
        ("nickname", nickname),
    ):
        if value is not None:
            info[key] = value

    _write_yaml(filename, data)
    logger.info("Updated details for %s", Path(filename).stem)


def delete_vehicle(filename: PathLike) -> None:
    """Remove a vehicle YAML file from disk."""
    Path(filename).unlink()
    logger.info("Deleted vehicle %s", Path(filename).stem)


# =============================================================================
# Providers
# =============================================================================


def providers_path(data_dir: PathLike) -> Path:
    return Path(data_dir) / "providers.yaml"


def _parse_provider(dct: Dict[str, Any]) -> Provider:
    return Provider(
        str(dct["id"]),
        dct.get("name"),
        dct.get("category"),
        dct.get("phone"),
        dct.get("email"),
        dct.get("address"),
        dct.get("website"),
        dct.get("rating"),
        dct.get("notes"),
        [str(t) for t in dct.get("tags") or []],
    )


def _provider_to_dict(provider: Provider) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": provider.id}
    for key in (
        "name",
        "category",
        "phone",
        "email",
        "address",
        "website",
        "rating",
        "notes",
    ):
        value = getattr(provider, key)
        if value is not None:
            d[key] = value
    if provider.tags:
        d["tags"] = list(provider.tags)
    return d


def load_providers(filename: PathLike) -> List[Provider]:
    """Load saved providers. A missing file means no providers yet."""
    path = Path(filename)
    if not path.exists():
        return []
    data = _read_yaml(path) or {}
    return [_parse_provider(p) for p in data.get("providers") or []]


def add_provider(filename: PathLike, provider: Provider) -> Provider:
    """
    Append a provider to the providers file, creating it if needed.

    A provider without an id gets a generated one. Returns the saved provider.
    """
    path = Path(filename)
    data = (_read_yaml(path) if path.exists() else None) or {}
    if data.get("providers") is None:
        data["providers"] = []

    if not provider.id:
        provider.id = uuid.uuid4().hex[:8]

    data["providers"].append(_provider_to_dict(provider))

    path.parent.mkdir(parents=True, exist_ok=True)
    _write_yaml(path, data)
    logger.info("Added provider %s (%s)", provider.id, provider.display_name)
    return provider


def delete_provider(filename: PathLike, provider_id: str) -> None:
    """Remove a provider by id. Unknown ids raise KeyError."""
    data = _read_yaml(filename) or {}
    providers = data.get("providers") or []
    remaining = [p for p in providers if str(p.get("id")) != provider_id]
    if len(remaining) == len(providers):
        raise KeyError(f"Provider '{provider_id}' not found")

    data["providers"] = remaining
    _write_yaml(filename, data)
    logger.info("Deleted provider %s", provider_id)
