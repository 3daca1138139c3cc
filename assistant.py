#!/usr/bin/env python3
"""
Unified CLI for the Home & Auto Assistant.

Commands:
  vehicles        - List vehicles with next-service progress
  add-vehicle     - Create a new vehicle
  edit-vehicle    - Change make, model, year or nickname
  delete-vehicle  - Remove a vehicle and its records
  status          - Show next-service progress for a vehicle
  history         - View maintenance history
  log             - Add a maintenance record
  edit-log        - Change a maintenance record
  delete-log      - Remove a maintenance record
  update-miles    - Update current vehicle mileage
  repairs         - View repair records and warranties
  log-repair      - Add a repair record
  delete-repair   - Remove a repair record
  providers       - List saved service providers
  add-provider    - Save a new service provider
  delete-provider - Remove a saved service provider
  directory       - Browse home services and matching providers
  rooms           - List room types by category
"""

import argparse
import os
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from homeauto import (
    DIRECTORY,
    DirectorySelection,
    MaintenanceRecord,
    Provider,
    ServiceProgress,
    Status,
    Vehicle,
    VehicleRepair,
    filter_providers,
    load_providers,
    load_vehicle,
    resolve_warranty,
    round_percent,
    save_current_mileage,
    save_maintenance_record,
    suggest_next_service,
)
from homeauto.catalog import (
    ALL_CATEGORIES,
    LABOR_PART_WARRANTY,
    PROVIDER_CATEGORIES,
    ROOM_CATEGORY_MAP,
    WARRANTY_OPTIONS,
    room_category,
)
from homeauto.forms import (
    MAINTENANCE_FORM,
    PROVIDER_FORM,
    REPAIR_FORM,
    parse_tags,
    validate_form,
    vehicle_form_schema,
)
from homeauto.loader import (
    add_provider,
    create_vehicle,
    delete_maintenance_record,
    delete_provider,
    delete_repair,
    delete_vehicle,
    list_vehicle_ids,
    providers_path,
    save_repair,
    update_maintenance_record,
    update_vehicle_meta,
    vehicle_path,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_percent(percent: float) -> str:
    return f"{round_percent(percent)}%"


def format_progress_bar(percent: float, width: int = 20) -> str:
    """Text progress bar, e.g. '[#####---------------]'."""
    filled = round_percent(percent * width / 100)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def status_flag(progress: ServiceProgress) -> str:
    """Short flag for the status column."""
    if progress.status == Status.OVERDUE:
        return "OVERDUE"
    if progress.status == Status.DUE_SOON:
        return "Service due soon"
    if progress.status == Status.UNKNOWN:
        return "-"
    return "OK"


# =============================================================================
# Vehicles
# =============================================================================


def make_vehicle_table(vehicles: List[tuple]) -> List[List[str]]:
    """Convert (vehicle_id, Vehicle) pairs to table rows."""
    rows = []
    for vehicle_id, vehicle in vehicles:
        progress = vehicle.next_service()
        rows.append(
            [
                vehicle_id,
                vehicle.name,
                format_miles(vehicle.mileage),
                progress.label,
                format_percent(progress.percent),
                status_flag(progress),
            ]
        )
    return rows


def cmd_vehicles(args):
    """List vehicles with next-service progress."""
    ids = list_vehicle_ids(args.data_dir)
    if not ids:
        print("No vehicles found.")
        return 0

    vehicles = [(vid, load_vehicle(vehicle_path(args.data_dir, vid))) for vid in ids]
    headers = ["ID", "Vehicle", "Mileage", "Next Service", "Progress", "Status"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))
    return 0


def cmd_add_vehicle(args):
    """Create a new vehicle file."""
    form = {
        "make": args.make,
        "model": args.model,
        "year": args.year,
        "nickname": args.nickname,
        "mileage": args.mileage,
    }
    errors = validate_form(vehicle_form_schema(), form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    path = vehicle_path(args.data_dir, args.vehicle_id)
    if path.exists():
        print(f"Error: Vehicle '{args.vehicle_id}' already exists")
        return 1

    vehicle = Vehicle(args.make, args.model, args.year, args.nickname, args.mileage)
    create_vehicle(path, vehicle)
    print(f"Created {vehicle.name} ({args.vehicle_id}).")
    return 0


def _load_vehicle_arg(args) -> Optional[Vehicle]:
    path = vehicle_path(args.data_dir, args.vehicle_id)
    if not path.exists():
        print(f"Error: Vehicle not found: {args.vehicle_id}")
        return None
    return load_vehicle(path)


def _override(new, old):
    """Command-line value if given, otherwise the stored one."""
    return old if new is None else new


def _position(items: list, item) -> int:
    """Index of an item in its stored (file) order."""
    return next(i for i, candidate in enumerate(items) if candidate is item)


def _pick_index(items: list, index: int, kind: str):
    """Item at a file-order index, or None after printing an error."""
    if index < 0 or index >= len(items):
        print(f"Error: No {kind} record #{index}")
        return None
    return items[index]


def cmd_edit_vehicle(args):
    """Change make, model, year or nickname of a vehicle."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1
    if all(v is None for v in (args.make, args.model, args.year, args.nickname)):
        print("Error: nothing to change (use --make, --model, --year or --nickname)")
        return 1

    form = {
        "make": _override(args.make, vehicle.make),
        "model": _override(args.model, vehicle.model),
        "year": _override(args.year, vehicle.year),
        "nickname": _override(args.nickname, vehicle.nickname),
        "mileage": vehicle.mileage,
    }
    errors = validate_form(vehicle_form_schema(), form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    update_vehicle_meta(
        vehicle_path(args.data_dir, args.vehicle_id),
        args.make,
        args.model,
        args.year,
        args.nickname,
    )
    print(f"Updated {args.vehicle_id}.")
    return 0


def cmd_delete_vehicle(args):
    """Remove a vehicle file with all of its records."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1

    print(f"Deleting {vehicle.name} ({args.vehicle_id}):")
    print(f"  {len(vehicle.maintenance)} maintenance records")
    print(f"  {len(vehicle.repairs)} repair records")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_vehicle(vehicle_path(args.data_dir, args.vehicle_id))
    print("Vehicle deleted.")
    return 0


# =============================================================================
# Status command
# =============================================================================


def cmd_status(args):
    """Show next-service progress for a vehicle."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1

    progress = vehicle.next_service(soon_threshold=args.threshold)

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {format_miles(vehicle.mileage)}")
    print(f"Maintenance records: {len(vehicle.maintenance)}")
    print()
    print(f"Next service: {progress.label}")
    print(f"Progress:     {format_progress_bar(progress.percent)} {format_percent(progress.percent)}")
    if progress.due_mileage is not None and vehicle.mileage is not None:
        print(f"Remaining:    {format_miles(progress.due_mileage - vehicle.mileage)} mi")
    if progress.is_due:
        print()
        print(f"!! {status_flag(progress)}")
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(
    records: List[MaintenanceRecord], vehicle: Vehicle
) -> List[List[str]]:
    """Convert maintenance records to table rows, numbered in file order."""
    rows = []
    for record in records:
        rows.append(
            [
                _position(vehicle.maintenance, record),
                record.service_date or "-",
                format_miles(record.mileage),
                record.service_type,
                record.service_company or "-",
                format_cost(record.cost),
                format_miles(record.next_service_mileage),
                truncate(record.notes),
            ]
        )
    return rows


def cmd_history(args):
    """View maintenance history."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1

    records = vehicle.get_maintenance_sorted(reverse=not args.asc)

    if args.type:
        records = [r for r in records if args.type.lower() in r.service_type.lower()]

    if args.since:
        records = [r for r in records if (r.service_date or "") >= args.since]

    total_cost = sum(r.cost for r in records if r.cost is not None)

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {format_miles(vehicle.mileage)}")
    print(f"Total records: {len(vehicle.maintenance)}")
    if args.type or args.since:
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: ${total_cost:,.2f}")
    print()

    if not records:
        print("No maintenance records found.")
        return 0

    headers = ["#", "Date", "Mileage", "Service", "Company", "Cost", "Next Due (mi)", "Notes"]
    print(tabulate(make_history_table(records, vehicle), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a maintenance record."""
    path = vehicle_path(args.data_dir, args.vehicle_id)
    if not path.exists():
        print(f"Error: Vehicle not found: {args.vehicle_id}")
        return 1

    service_date = args.date or date.today().isoformat()
    next_mileage, next_date = args.next_mileage, args.next_date
    suggested_mileage, suggested_date = suggest_next_service(
        args.service_type, args.mileage, service_date
    )
    if next_mileage is None:
        next_mileage = suggested_mileage
    if next_date is None:
        next_date = suggested_date

    form = {
        "service_type": args.service_type,
        "service_date": service_date,
        "mileage": args.mileage,
        "cost": args.cost,
        "service_company": args.company,
        "notes": args.notes,
        "next_service_mileage": next_mileage,
        "next_service_date": next_date,
    }
    errors = validate_form(MAINTENANCE_FORM, form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    record = MaintenanceRecord(
        service_type=args.service_type,
        service_date=service_date,
        mileage=args.mileage,
        next_service_mileage=next_mileage,
        next_service_date=next_date,
        cost=args.cost,
        service_company=args.company,
        notes=args.notes,
    )

    print(f"Adding maintenance record to {args.vehicle_id}:")
    print(f"  Service: {record.service_type}")
    print(f"  Date:    {record.service_date}")
    print(f"  Mileage: {format_miles(record.mileage)}")
    if record.next_service_mileage is not None:
        print(f"  Next:    {format_miles(record.next_service_mileage)} mi")
    if record.next_service_date:
        print(f"  Next:    {record.next_service_date}")
    if record.service_company:
        print(f"  By:      {record.service_company}")
    if record.notes:
        print(f"  Notes:   {record.notes}")
    if record.cost:
        print(f"  Cost:    ${record.cost:.2f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_maintenance_record(path, record)
    print("Record saved.")
    return 0


def cmd_edit_log(args):
    """Change fields of a maintenance record, keeping the ones not given."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1
    old = _pick_index(vehicle.maintenance, args.index, "maintenance")
    if old is None:
        return 1

    record = MaintenanceRecord(
        service_type=_override(args.service_type, old.service_type),
        service_date=_override(args.date, old.service_date),
        mileage=_override(args.mileage, old.mileage),
        next_service_mileage=_override(args.next_mileage, old.next_service_mileage),
        next_service_date=_override(args.next_date, old.next_service_date),
        cost=_override(args.cost, old.cost),
        service_company=_override(args.company, old.service_company),
        notes=_override(args.notes, old.notes),
    )
    form = {
        "service_type": record.service_type,
        "service_date": record.service_date,
        "mileage": record.mileage,
        "cost": record.cost,
        "service_company": record.service_company,
        "notes": record.notes,
        "next_service_mileage": record.next_service_mileage,
        "next_service_date": record.next_service_date,
    }
    errors = validate_form(MAINTENANCE_FORM, form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    print(f"Updating record #{args.index} of {args.vehicle_id}:")
    print(f"  Service: {record.service_type}")
    print(f"  Date:    {record.service_date}")
    print(f"  Mileage: {format_miles(record.mileage)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_maintenance_record(vehicle_path(args.data_dir, args.vehicle_id), args.index, record)
    print("Record updated.")
    return 0


def cmd_delete_log(args):
    """Remove a maintenance record."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1
    record = _pick_index(vehicle.maintenance, args.index, "maintenance")
    if record is None:
        return 1

    print(f"Deleting record #{args.index} of {args.vehicle_id}:")
    print(f"  {record.service_date or '-'}  {record.service_type}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_maintenance_record(vehicle_path(args.data_dir, args.vehicle_id), args.index)
    print("Record deleted.")
    return 0


# =============================================================================
# Update Miles command
# =============================================================================


def cmd_update_miles(args):
    """Update current vehicle mileage."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1
    if args.mileage < 0:
        print("Error: mileage must be zero or greater")
        return 1

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {format_miles(vehicle.mileage)}")
    print(f"New mileage:     {format_miles(args.mileage)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_mileage(vehicle_path(args.data_dir, args.vehicle_id), args.mileage)
    print("Mileage updated.")
    return 0


# =============================================================================
# Repair commands
# =============================================================================


def make_repair_table(
    repairs: List[VehicleRepair], vehicle: Vehicle, as_of: Optional[date] = None
) -> List[List[str]]:
    """Convert repair records to table rows, numbered in file order."""
    rows = []
    for repair in repairs:
        rows.append(
            [
                _position(vehicle.repairs, repair),
                repair.service_date or "-",
                format_miles(repair.mileage),
                repair.repair_type,
                repair.repair_facility or "-",
                format_cost(repair.cost),
                repair.part_warranty or "-",
                repair.labor_warranty or "-",
                "Under warranty" if repair.under_warranty(as_of) else "-",
            ]
        )
    return rows


def cmd_repairs(args):
    """View repair records and warranty status."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1

    print(f"Vehicle: {vehicle.name}")
    print(f"Total records: {len(vehicle.repairs)}")
    if vehicle.repair_cost > 0:
        print(f"Total cost: ${vehicle.repair_cost:,.2f}")
    print()

    if not vehicle.repairs:
        print("No repair records found.")
        return 0

    headers = ["#", "Date", "Mileage", "Repair", "Facility", "Cost", "Parts Until", "Labor Until", "Warranty"]
    rows = make_repair_table(vehicle.get_repairs_sorted(), vehicle)
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_log_repair(args):
    """Add a repair record."""
    path = vehicle_path(args.data_dir, args.vehicle_id)
    if not path.exists():
        print(f"Error: Vehicle not found: {args.vehicle_id}")
        return 1

    service_date = args.date or date.today().isoformat()
    form = {
        "repair_type": args.repair_type,
        "service_date": service_date,
        "mileage": args.mileage,
        "cost": args.cost,
        "repair_facility": args.facility,
        "finding": args.finding,
        "part_warranty": resolve_warranty(service_date, args.part_warranty),
        "labor_warranty": resolve_warranty(service_date, args.labor_warranty),
    }
    errors = validate_form(REPAIR_FORM, form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    repair = VehicleRepair(**form)

    print(f"Adding repair record to {args.vehicle_id}:")
    print(f"  Repair:  {repair.repair_type}")
    print(f"  Date:    {repair.service_date}")
    print(f"  Mileage: {format_miles(repair.mileage)}")
    if repair.repair_facility:
        print(f"  By:      {repair.repair_facility}")
    if repair.part_warranty:
        print(f"  Parts warranty until: {repair.part_warranty}")
    if repair.labor_warranty:
        print(f"  Labor warranty until: {repair.labor_warranty}")
    if repair.cost:
        print(f"  Cost:    ${repair.cost:.2f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_repair(path, repair)
    print("Repair saved.")
    return 0


def cmd_delete_repair(args):
    """Remove a repair record."""
    vehicle = _load_vehicle_arg(args)
    if vehicle is None:
        return 1
    repair = _pick_index(vehicle.repairs, args.index, "repair")
    if repair is None:
        return 1

    print(f"Deleting repair #{args.index} of {args.vehicle_id}:")
    print(f"  {repair.service_date or '-'}  {repair.repair_type}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_repair(vehicle_path(args.data_dir, args.vehicle_id), args.index)
    print("Repair deleted.")
    return 0


# =============================================================================
# Provider commands
# =============================================================================


def make_provider_table(providers: List[Provider]) -> List[List[str]]:
    """Convert providers to table rows."""
    rows = []
    for provider in providers:
        rows.append(
            [
                provider.id,
                provider.display_name,
                provider.category or "-",
                provider.phone or "-",
                provider.email or "-",
                truncate(provider.address),
                ", ".join(provider.tags) or "-",
            ]
        )
    return rows


def _print_providers(providers: List[Provider]) -> None:
    headers = ["ID", "Name", "Category", "Phone", "Email", "Address", "Tags"]
    print(tabulate(make_provider_table(providers), headers=headers, tablefmt="simple"))


def cmd_providers(args):
    """List saved service providers."""
    providers = load_providers(providers_path(args.data_dir))
    if not providers:
        print("No service providers saved yet.")
        return 0

    matches = filter_providers(providers, args.search, args.category)
    if args.search or (args.category and args.category != ALL_CATEGORIES):
        print(f"Showing: {len(matches)} of {len(providers)}")
        print()
    if not matches:
        print("No providers found.")
        return 0

    _print_providers(matches)
    return 0


def cmd_add_provider(args):
    """Save a new service provider."""
    form = {
        "name": args.name,
        "category": args.category,
        "phone": args.phone,
        "email": args.email,
        "website": args.website,
        "address": args.address,
        "rating": args.rating,
        "tags": parse_tags(args.tags),
    }
    errors = validate_form(PROVIDER_FORM, form)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    provider = Provider(id="", **form)

    if args.dry_run:
        print(f"Would add {provider.display_name} ({provider.category})")
        print("(dry run - no changes made)")
        return 0

    saved = add_provider(providers_path(args.data_dir), provider)
    print(f"Added {saved.display_name} ({saved.id}).")
    return 0


def cmd_delete_provider(args):
    """Remove a saved service provider by id."""
    path = providers_path(args.data_dir)
    if args.dry_run:
        matches = [p for p in load_providers(path) if p.id == args.provider_id]
        if not matches:
            print(f"Error: Provider '{args.provider_id}' not found")
            return 1
        print(f"Would delete {matches[0].display_name} ({args.provider_id})")
        print("(dry run - no changes made)")
        return 0

    try:
        delete_provider(path, args.provider_id)
    except (KeyError, FileNotFoundError):
        print(f"Error: Provider '{args.provider_id}' not found")
        return 1
    print(f"Deleted provider {args.provider_id}.")
    return 0


# =============================================================================
# Directory command
# =============================================================================


def cmd_directory(args):
    """Browse home services; list matching providers once a service is chosen."""
    selection = (
        DirectorySelection()
        .with_location(args.location)
        .with_group(args.type)
        .with_service(args.service)
        .with_search(args.search)
        .with_contact_only(args.contact_only)
    )

    if not selection.location or selection.location not in DIRECTORY:
        print("Select a location with --location:")
        for kind, node in DIRECTORY.items():
            print(f"  {kind:<14}{node.label}")
        return 0

    node = DIRECTORY[selection.location]
    if not selection.options:
        print(f"{node.label}: select a type with --type:")
        for kind, group in node.groups.items():
            print(f"  {kind:<14}{group.label}")
        return 0

    service = selection.selected_service
    if service is None:
        print(f"{node.label} / {node.groups[selection.group_type].label}")
        print("Select a service to view providers (--service):")
        for leaf in selection.options:
            print(f"  {leaf.key:<36}{leaf.label}")
        return 0

    print(f"Service: {service.label}")
    print(f"Showing providers in: {', '.join(service.provider_categories)}")
    print()

    matches = selection.resolve(load_providers(providers_path(args.data_dir)))
    if not matches:
        print("No providers found for this service yet.")
        return 0

    _print_providers(matches)
    return 0


# =============================================================================
# Rooms command
# =============================================================================


def cmd_rooms(args):
    """List room types grouped by category, or look up one room's category."""
    if args.room:
        category = room_category(args.room)
        if category is None:
            print(f"Error: Unknown room type: {args.room}")
            return 1
        print(f"{args.room}: {category}")
        return 0

    rows = [
        [category, ", ".join(rooms)]
        for category, rooms in ROOM_CATEGORY_MAP.items()
    ]
    print(tabulate(rows, headers=["Category", "Room Types"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Home & Auto Assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles
  %(prog)s add-vehicle outback Subaru Outback --year 2019 --mileage 42000
  %(prog)s status outback
  %(prog)s history outback --type oil
  %(prog)s log outback "Oil Change" --mileage 45000 --company "Quick Lube"
  %(prog)s update-miles outback 47500
  %(prog)s log-repair outback Brakes --mileage 46000 --part-warranty "1 year"
  %(prog)s delete-log outback 2
  %(prog)s providers --category Plumber
  %(prog)s directory --location inside --type repairs --service plumbing
  %(prog)s rooms --room Kitchen
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(os.environ.get("HOMEAUTO_DATA_DIR", "data")),
        help="Data directory (default: $HOMEAUTO_DATA_DIR or ./data)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("vehicles", help="List vehicles with next-service progress")

    add_vehicle_parser = subparsers.add_parser("add-vehicle", help="Create a new vehicle")
    add_vehicle_parser.add_argument("vehicle_id", help="Vehicle ID (file name)")
    add_vehicle_parser.add_argument("make")
    add_vehicle_parser.add_argument("model")
    add_vehicle_parser.add_argument("--year", type=int, required=True)
    add_vehicle_parser.add_argument("--nickname", type=str)
    add_vehicle_parser.add_argument("--mileage", type=float, help="Current mileage")

    status_parser = subparsers.add_parser(
        "status", help="Show next-service progress for a vehicle"
    )
    status_parser.add_argument("vehicle_id")
    status_parser.add_argument(
        "--threshold",
        type=float,
        default=80,
        help="Flag service as due soon above this percentage (default: 80)",
    )

    history_parser = subparsers.add_parser("history", help="View maintenance history")
    history_parser.add_argument("vehicle_id")
    history_parser.add_argument(
        "--type",
        type=str,
        help="Filter to service types containing text (case-insensitive)",
    )
    history_parser.add_argument(
        "--since", type=str, help="Show only records since date (YYYY-MM-DD)"
    )
    history_parser.add_argument(
        "--asc", action="store_true", help="Oldest first instead of newest first"
    )

    log_parser = subparsers.add_parser("log", help="Add a maintenance record")
    log_parser.add_argument("vehicle_id")
    log_parser.add_argument("service_type", help="Service type (e.g., 'Oil Change')")
    log_parser.add_argument(
        "--date", type=str, help="Service date in YYYY-MM-DD format (default: today)"
    )
    log_parser.add_argument(
        "--mileage", type=float, required=True, help="Mileage at time of service"
    )
    log_parser.add_argument(
        "--next-mileage",
        type=float,
        help="Mileage the next service is due (default: from service type)",
    )
    log_parser.add_argument(
        "--next-date",
        type=str,
        help="Date the next service is due (default: from service type)",
    )
    log_parser.add_argument("--company", type=str, help="Who performed the service")
    log_parser.add_argument("--notes", type=str)
    log_parser.add_argument("--cost", type=float)
    log_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    edit_log_parser = subparsers.add_parser(
        "edit-log", help="Change a maintenance record (# from history)"
    )
    edit_log_parser.add_argument("vehicle_id")
    edit_log_parser.add_argument("index", type=int, help="Record number shown by history")
    edit_log_parser.add_argument("--service-type", type=str)
    edit_log_parser.add_argument("--date", type=str)
    edit_log_parser.add_argument("--mileage", type=float)
    edit_log_parser.add_argument("--next-mileage", type=float)
    edit_log_parser.add_argument("--next-date", type=str)
    edit_log_parser.add_argument("--company", type=str)
    edit_log_parser.add_argument("--notes", type=str)
    edit_log_parser.add_argument("--cost", type=float)
    edit_log_parser.add_argument(
        "--dry-run", action="store_true", help="Show the result without saving"
    )

    delete_log_parser = subparsers.add_parser(
        "delete-log", help="Remove a maintenance record (# from history)"
    )
    delete_log_parser.add_argument("vehicle_id")
    delete_log_parser.add_argument("index", type=int, help="Record number shown by history")
    delete_log_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted"
    )

    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Update current vehicle mileage"
    )
    update_miles_parser.add_argument("vehicle_id")
    update_miles_parser.add_argument("mileage", type=float, help="Current mileage")
    update_miles_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    edit_vehicle_parser = subparsers.add_parser(
        "edit-vehicle", help="Change make, model, year or nickname"
    )
    edit_vehicle_parser.add_argument("vehicle_id")
    edit_vehicle_parser.add_argument("--make", type=str)
    edit_vehicle_parser.add_argument("--model", type=str)
    edit_vehicle_parser.add_argument("--year", type=int)
    edit_vehicle_parser.add_argument("--nickname", type=str)

    delete_vehicle_parser = subparsers.add_parser(
        "delete-vehicle", help="Remove a vehicle and all of its records"
    )
    delete_vehicle_parser.add_argument("vehicle_id")
    delete_vehicle_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted"
    )

    repairs_parser = subparsers.add_parser(
        "repairs", help="View repair records and warranties"
    )
    repairs_parser.add_argument("vehicle_id")

    log_repair_parser = subparsers.add_parser("log-repair", help="Add a repair record")
    log_repair_parser.add_argument("vehicle_id")
    log_repair_parser.add_argument("repair_type", help="What was repaired (e.g., 'Brakes')")
    log_repair_parser.add_argument(
        "--date", type=str, help="Service date in YYYY-MM-DD format (default: today)"
    )
    log_repair_parser.add_argument(
        "--mileage", type=float, required=True, help="Mileage at time of repair"
    )
    log_repair_parser.add_argument("--cost", type=float)
    log_repair_parser.add_argument("--facility", type=str, help="Repair shop")
    log_repair_parser.add_argument("--finding", type=str, help="What was found")
    log_repair_parser.add_argument(
        "--part-warranty",
        type=str,
        help=f"End date (YYYY-MM-DD) or one of: {', '.join(WARRANTY_OPTIONS)}",
    )
    log_repair_parser.add_argument(
        "--labor-warranty",
        type=str,
        help=f"End date (YYYY-MM-DD) or one of: {', '.join(LABOR_PART_WARRANTY)}",
    )
    log_repair_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    delete_repair_parser = subparsers.add_parser(
        "delete-repair", help="Remove a repair record (# from repairs)"
    )
    delete_repair_parser.add_argument("vehicle_id")
    delete_repair_parser.add_argument("index", type=int, help="Record number shown by repairs")
    delete_repair_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted"
    )

    providers_parser = subparsers.add_parser(
        "providers", help="List saved service providers"
    )
    providers_parser.add_argument(
        "--search", type=str, help="Match name or category (case-insensitive)"
    )
    providers_parser.add_argument(
        "--category", choices=[ALL_CATEGORIES] + PROVIDER_CATEGORIES
    )

    add_provider_parser = subparsers.add_parser(
        "add-provider", help="Save a new service provider"
    )
    add_provider_parser.add_argument("name")
    add_provider_parser.add_argument("category", choices=PROVIDER_CATEGORIES)
    add_provider_parser.add_argument("--phone", type=str)
    add_provider_parser.add_argument("--email", type=str)
    add_provider_parser.add_argument("--website", type=str)
    add_provider_parser.add_argument("--address", type=str)
    add_provider_parser.add_argument("--rating", type=float)
    add_provider_parser.add_argument(
        "--tags", type=str, help="Comma-separated, e.g. 'licensed, insured'"
    )
    add_provider_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    delete_provider_parser = subparsers.add_parser(
        "delete-provider", help="Remove a saved service provider"
    )
    delete_provider_parser.add_argument("provider_id", help="ID shown by providers")
    delete_provider_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted"
    )

    directory_parser = subparsers.add_parser(
        "directory", help="Browse home services and matching providers"
    )
    directory_parser.add_argument("--location", choices=list(DIRECTORY))
    directory_parser.add_argument("--type", choices=["repairs", "improvements"])
    directory_parser.add_argument("--service", type=str, help="Service key")
    directory_parser.add_argument(
        "--search", type=str, help="Match provider name or address"
    )
    directory_parser.add_argument(
        "--contact-only",
        action="store_true",
        help="Only providers with a phone or email",
    )

    rooms_parser = subparsers.add_parser("rooms", help="List room types by category")
    rooms_parser.add_argument("--room", type=str, help="Show the category of one room type")

    return parser


COMMANDS = {
    "vehicles": cmd_vehicles,
    "add-vehicle": cmd_add_vehicle,
    "edit-vehicle": cmd_edit_vehicle,
    "delete-vehicle": cmd_delete_vehicle,
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "edit-log": cmd_edit_log,
    "delete-log": cmd_delete_log,
    "update-miles": cmd_update_miles,
    "repairs": cmd_repairs,
    "log-repair": cmd_log_repair,
    "delete-repair": cmd_delete_repair,
    "providers": cmd_providers,
    "add-provider": cmd_add_provider,
    "delete-provider": cmd_delete_provider,
    "directory": cmd_directory,
    "rooms": cmd_rooms,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main() or 0)
