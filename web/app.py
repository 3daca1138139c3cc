"""Flask web application for the Home & Auto Assistant."""

import logging
import os
from datetime import date
from pathlib import Path

from flask import (
    Flask,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)

# Add parent directory to path for package imports when run as a script
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from homeauto import (
    DIRECTORY,
    DirectorySelection,
    MaintenanceRecord,
    Provider,
    Status,
    Vehicle,
    VehicleRepair,
    filter_providers,
    resolve_warranty,
    round_percent,
    suggest_next_service,
)
from homeauto.catalog import (
    ALL_CATEGORIES,
    LABOR_PART_WARRANTY,
    MAINTENANCE_TYPES,
    PROVIDER_CATEGORIES,
    VEHICLE_MAKES,
    VEHICLE_REPAIR_ISSUES,
    WARRANTY_OPTIONS,
    models_for_make,
)
from homeauto.forms import (
    MAINTENANCE_FORM,
    PROVIDER_FORM,
    REPAIR_FORM,
    blank_to_none,
    parse_number,
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
    load_providers,
    load_vehicle,
    providers_path,
    save_current_mileage,
    save_maintenance_record,
    save_repair,
    update_vehicle_meta,
    vehicle_path,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
# Data directory (relative to project root unless HOMEAUTO_DATA_DIR is set)
app.config["DATA_DIR"] = Path(
    os.environ.get("HOMEAUTO_DATA_DIR", Path(__file__).parent.parent / "data")
)


def data_dir() -> Path:
    return Path(current_app.config["DATA_DIR"])


def format_miles(miles):
    """Format miles with comma separator."""
    if miles is None:
        return "—"
    return f"{miles:,.0f}"


def format_cost(cost):
    if cost is None:
        return "—"
    return f"${cost:,.2f}"


def format_percent(percent):
    return f"{round_percent(percent or 0)}%"


def status_color(status: Status) -> str:
    """Get Tailwind color classes for a progress bar."""
    colors = {
        Status.OVERDUE: "bg-red-500",
        Status.DUE_SOON: "bg-orange-500",
        Status.OK: "bg-blue-600",
        Status.UNKNOWN: "bg-gray-300",
    }
    return colors.get(status, "bg-gray-300")


# Register template filters
app.jinja_env.filters["format_miles"] = format_miles
app.jinja_env.filters["format_cost"] = format_cost
app.jinja_env.filters["format_percent"] = format_percent
app.jinja_env.filters["status_color"] = status_color


@app.route("/")
def index():
    """Dashboard showing all vehicles with next-service progress."""
    vehicles = []
    for vehicle_id in list_vehicle_ids(data_dir()):
        vehicle = load_vehicle(vehicle_path(data_dir(), vehicle_id))
        vehicles.append({
            "id": vehicle_id,
            "vehicle": vehicle,
            "progress": vehicle.next_service(),
            "last_service": vehicle.latest_record,
        })

    due_soon = sum(1 for v in vehicles if v["progress"].is_due)
    return render_template(
        "index.html",
        vehicles=vehicles,
        due_soon=due_soon,
        makes=VEHICLE_MAKES,
    )


@app.route("/vehicles", methods=["POST"])
def add_vehicle():
    """Handle new vehicle form submission."""
    form = blank_to_none(request.form.to_dict())
    form["year"] = parse_number(form.get("year"))
    form["mileage"] = parse_number(form.get("mileage"))
    vehicle_id = form.pop("vehicle_id", None)

    errors = validate_form(vehicle_form_schema(), form)
    if not vehicle_id:
        errors.insert(0, "vehicle_id: Vehicle ID is required")
    if errors:
        for error in errors:
            flash(error, "error")
        return redirect(url_for("index"))

    path = vehicle_path(data_dir(), vehicle_id)
    if path.exists():
        flash(f"Vehicle '{vehicle_id}' already exists", "error")
        return redirect(url_for("index"))

    vehicle = Vehicle(
        form["make"], form["model"], form["year"], form.get("nickname"), form.get("mileage")
    )
    create_vehicle(path, vehicle)
    flash(f"Added {vehicle.name}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/makes/<make>/models")
def vehicle_models(make: str):
    """JSON list of known models for a make (for the model dropdown)."""
    return jsonify(models_for_make(make))


@app.route("/vehicle/<vehicle_id>")
def vehicle_detail(vehicle_id: str):
    """Vehicle detail page with service progress and maintenance history."""
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        logger.warning("Vehicle %s not found in %s", vehicle_id, data_dir())
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    vehicle = load_vehicle(path)
    return render_template(
        "vehicle.html",
        vehicle_id=vehicle_id,
        vehicle=vehicle,
        progress=vehicle.next_service(),
        maintenance=newest_first(vehicle.maintenance),
        repairs=newest_first(vehicle.repairs),
        maintenance_types=MAINTENANCE_TYPES,
        repair_issues=VEHICLE_REPAIR_ISSUES,
        part_warranty_options=WARRANTY_OPTIONS,
        labor_warranty_options=LABOR_PART_WARRANTY,
        today=date.today().isoformat(),
    )


def newest_first(records):
    """(file index, record) pairs ordered by service date, newest first."""
    return sorted(
        enumerate(records), key=lambda pair: pair[1].service_date or "", reverse=True
    )


@app.route("/vehicle/<vehicle_id>/edit", methods=["POST"])
def edit_vehicle(vehicle_id: str):
    """Handle vehicle details form submission."""
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    vehicle = load_vehicle(path)
    form = blank_to_none(request.form.to_dict())
    form["year"] = parse_number(form.get("year"))
    form["mileage"] = vehicle.mileage

    errors = validate_form(vehicle_form_schema(), form)
    if errors:
        for error in errors:
            flash(error, "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))

    update_vehicle_meta(
        path, form["make"], form["model"], form["year"], form.get("nickname")
    )
    flash("Vehicle details saved", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicle/<vehicle_id>/delete", methods=["POST"])
def remove_vehicle(vehicle_id: str):
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    delete_vehicle(path)
    flash(f"Deleted vehicle '{vehicle_id}'", "success")
    return redirect(url_for("index"))


@app.route("/vehicle/<vehicle_id>/maintenance", methods=["POST"])
def log_maintenance(vehicle_id: str):
    """Handle log maintenance form submission."""
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    form = blank_to_none(request.form.to_dict())
    form["service_date"] = form.get("service_date") or date.today().isoformat()
    for field in ("mileage", "cost", "next_service_mileage"):
        form[field] = parse_number(form.get(field))

    # Fill the next-service schedule from default intervals when left blank
    if isinstance(form["mileage"], (int, float)):
        suggested_mileage, suggested_date = suggest_next_service(
            form.get("service_type") or "", form["mileage"], form["service_date"]
        )
        if form["next_service_mileage"] is None:
            form["next_service_mileage"] = suggested_mileage
        if form.get("next_service_date") is None:
            form["next_service_date"] = suggested_date

    errors = validate_form(MAINTENANCE_FORM, form)
    if errors:
        for error in errors:
            flash(error, "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))

    record = MaintenanceRecord(
        service_type=form["service_type"],
        service_date=form["service_date"],
        mileage=form["mileage"],
        next_service_mileage=form.get("next_service_mileage"),
        next_service_date=form.get("next_service_date"),
        cost=form.get("cost"),
        service_company=form.get("service_company"),
        notes=form.get("notes"),
    )
    save_maintenance_record(path, record)
    flash(f"Logged service: {record.service_type}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicle/<vehicle_id>/maintenance/<int:index>/delete", methods=["POST"])
def delete_maintenance(vehicle_id: str, index: int):
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    try:
        delete_maintenance_record(path, index)
    except IndexError:
        flash("Maintenance record not found", "error")
    else:
        flash("Maintenance record deleted", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicle/<vehicle_id>/repairs", methods=["POST"])
def log_repair(vehicle_id: str):
    """Handle repair form submission. Warranty lengths become end dates."""
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    form = blank_to_none(request.form.to_dict())
    form["service_date"] = form.get("service_date") or date.today().isoformat()
    for field in ("mileage", "cost"):
        form[field] = parse_number(form.get(field))
    for field in ("part_warranty", "labor_warranty"):
        form[field] = resolve_warranty(form["service_date"], form.get(field))

    errors = validate_form(REPAIR_FORM, form)
    if errors:
        for error in errors:
            flash(error, "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))

    repair = VehicleRepair(
        repair_type=form["repair_type"],
        service_date=form["service_date"],
        mileage=form["mileage"],
        cost=form.get("cost"),
        repair_facility=form.get("repair_facility"),
        finding=form.get("finding"),
        part_warranty=form.get("part_warranty"),
        labor_warranty=form.get("labor_warranty"),
    )
    save_repair(path, repair)
    flash(f"Logged repair: {repair.repair_type}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicle/<vehicle_id>/repairs/<int:index>/delete", methods=["POST"])
def delete_repair_record(vehicle_id: str, index: int):
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    try:
        delete_repair(path, index)
    except IndexError:
        flash("Repair record not found", "error")
    else:
        flash("Repair record deleted", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicle/<vehicle_id>/mileage", methods=["POST"])
def update_mileage(vehicle_id: str):
    """Handle update mileage form submission."""
    path = vehicle_path(data_dir(), vehicle_id)
    if not path.exists():
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    miles = parse_number(request.form.get("mileage"))
    if miles is None:
        flash("Please enter mileage", "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))
    if not isinstance(miles, (int, float)) or miles < 0:
        flash("Invalid mileage value", "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))

    save_current_mileage(path, miles)
    flash(f"Updated mileage to {miles:,.0f}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/providers")
def providers():
    """Saved service providers with search and category filter."""
    search = request.args.get("q", "").strip()
    category = request.args.get("category") or ALL_CATEGORIES

    all_providers = load_providers(providers_path(data_dir()))
    return render_template(
        "providers.html",
        providers=filter_providers(all_providers, search, category),
        total=len(all_providers),
        search=search,
        category=category,
        categories=[ALL_CATEGORIES] + PROVIDER_CATEGORIES,
    )


@app.route("/providers", methods=["POST"])
def create_provider():
    """Handle new provider form submission."""
    form = blank_to_none(request.form.to_dict())
    form["rating"] = parse_number(form.get("rating"))
    form["tags"] = parse_tags(form.get("tags"))

    errors = validate_form(PROVIDER_FORM, form)
    if errors:
        for error in errors:
            flash(error, "error")
        return redirect(url_for("providers"))

    provider = add_provider(
        providers_path(data_dir()),
        Provider(
            id="",
            name=form["name"],
            category=form["category"],
            phone=form.get("phone"),
            email=form.get("email"),
            address=form.get("address"),
            website=form.get("website"),
            rating=form.get("rating"),
            notes=form.get("notes"),
            tags=form.get("tags"),
        ),
    )
    flash(f"Added {provider.display_name}", "success")
    return redirect(url_for("providers"))


@app.route("/providers/<provider_id>/delete", methods=["POST"])
def remove_provider(provider_id: str):
    try:
        delete_provider(providers_path(data_dir()), provider_id)
    except (KeyError, FileNotFoundError):
        flash(f"Provider '{provider_id}' not found", "error")
    else:
        flash("Provider deleted", "success")
    return redirect(url_for("providers"))


def selection_from_args(args) -> DirectorySelection:
    """
    Rebuild the directory selection from query arguments.

    The form posts the location and type it was rendered with as
    'prev_location' and 'prev_type'. A changed location clears the type and
    service; a changed type clears the service. Links without the 'prev_'
    fields are taken as a complete selection.
    """
    location = args.get("location", "")
    group_type = args.get("type", "")
    selection = DirectorySelection(
        location=args.get("prev_location", location),
        group_type=group_type,
        service_key=args.get("service", ""),
    )
    if location != selection.location:
        selection = selection.with_location(location)
    elif args.get("prev_type", group_type) != group_type:
        selection = selection.with_group(group_type)
    return selection.with_search(args.get("q", "")).with_contact_only(
        args.get("contact") == "1"
    )


@app.route("/services")
def services_directory():
    """Home services directory: location -> type -> service -> providers."""
    selection = selection_from_args(request.args)
    service = selection.selected_service
    matches = []
    if service is not None:
        matches = selection.resolve(load_providers(providers_path(data_dir())))

    return render_template(
        "services.html",
        directory=DIRECTORY,
        selection=selection,
        service=service,
        providers=matches,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Access from phone: use your computer's local IP (e.g., 192.168.1.x:5001)
    app.run(debug=True, host="0.0.0.0", port=5001)
