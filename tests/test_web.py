#!/usr/bin/env python3
"""Tests for the Flask web application."""

import pytest

from homeauto import MaintenanceRecord, Provider, Vehicle, VehicleRepair
from homeauto.loader import (
    add_provider,
    create_vehicle,
    load_providers,
    load_vehicle,
    providers_path,
    save_repair,
    vehicle_path,
)
from web.app import app, selection_from_args


@pytest.fixture
def client(tmp_path):
    create_vehicle(
        vehicle_path(tmp_path, "civic"),
        Vehicle(
            "Honda",
            "Civic",
            2016,
            nickname="Blue",
            mileage=14500,
            maintenance=[MaintenanceRecord("Oil Change", "2025-01-01", 10000, 15000)],
        ),
    )
    add_provider(providers_path(tmp_path), Provider("p1", "Smith Plumbing", "Plumber", phone="555-0101"))
    add_provider(providers_path(tmp_path), Provider("p2", "Pipe Pros", "Plumber"))
    add_provider(providers_path(tmp_path), Provider("p3", "Bright Spark", "Electrician"))

    app.config["TESTING"] = True
    app.config["DATA_DIR"] = tmp_path
    with app.test_client() as client:
        yield client


class TestVehiclePages:
    """Tests for the dashboard and vehicle routes."""

    def test_index_lists_vehicles(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "Blue" in body
        assert "Due at 15,000 mi" in body
        assert "90%" in body
        assert "1 vehicle(s) due for service soon" in body

    def test_detail(self, client):
        response = client.get("/vehicle/civic")
        assert response.status_code == 200
        assert "Service due soon" in response.get_data(as_text=True)

    def test_unknown_vehicle_redirects(self, client):
        response = client.get("/vehicle/nope")
        assert response.status_code == 302

    def test_log_maintenance_fills_schedule(self, client, tmp_path):
        response = client.post(
            "/vehicle/civic/maintenance",
            data={"service_type": "Oil Change", "service_date": "2025-03-01", "mileage": "15,000"},
        )
        assert response.status_code == 302
        record = load_vehicle(vehicle_path(tmp_path, "civic")).maintenance[-1]
        assert record.mileage == 15000
        assert record.next_service_mileage == 20000

    def test_log_maintenance_rejects_bad_mileage(self, client, tmp_path):
        client.post(
            "/vehicle/civic/maintenance",
            data={"service_type": "Oil Change", "service_date": "2025-03-01", "mileage": "lots"},
        )
        assert len(load_vehicle(vehicle_path(tmp_path, "civic")).maintenance) == 1

    def test_update_mileage(self, client, tmp_path):
        client.post("/vehicle/civic/mileage", data={"mileage": "14900"})
        assert load_vehicle(vehicle_path(tmp_path, "civic")).mileage == 14900

    def test_update_mileage_rejects_negative(self, client, tmp_path):
        client.post("/vehicle/civic/mileage", data={"mileage": "-5"})
        assert load_vehicle(vehicle_path(tmp_path, "civic")).mileage == 14500

    def test_add_vehicle(self, client, tmp_path):
        response = client.post(
            "/vehicles",
            data={"vehicle_id": "rav", "make": "Toyota", "model": "RAV4", "year": "2021"},
        )
        assert response.status_code == 302
        assert load_vehicle(vehicle_path(tmp_path, "rav")).make == "Toyota"

    def test_add_vehicle_requires_year(self, client, tmp_path):
        client.post("/vehicles", data={"vehicle_id": "rav", "make": "Toyota", "model": "RAV4"})
        assert not vehicle_path(tmp_path, "rav").exists()

    def test_models_for_make(self, client):
        response = client.get("/makes/toyota/models")
        assert response.status_code == 200
        assert "Camry" in response.get_json()

    def test_edit_vehicle(self, client, tmp_path):
        response = client.post(
            "/vehicle/civic/edit",
            data={"make": "Honda", "model": "Civic", "year": "2017", "nickname": "Zippy"},
        )
        assert response.status_code == 302
        vehicle = load_vehicle(vehicle_path(tmp_path, "civic"))
        assert vehicle.year == 2017
        assert vehicle.nickname == "Zippy"
        assert vehicle.mileage == 14500

    def test_edit_vehicle_rejects_missing_model(self, client, tmp_path):
        client.post("/vehicle/civic/edit", data={"make": "Honda", "model": "", "year": "2017"})
        assert load_vehicle(vehicle_path(tmp_path, "civic")).year == 2016

    def test_delete_vehicle(self, client, tmp_path):
        response = client.post("/vehicle/civic/delete")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/")
        assert not vehicle_path(tmp_path, "civic").exists()

    def test_delete_maintenance(self, client, tmp_path):
        client.post("/vehicle/civic/maintenance/0/delete")
        assert load_vehicle(vehicle_path(tmp_path, "civic")).maintenance == []

    def test_delete_maintenance_bad_index(self, client, tmp_path):
        response = client.post("/vehicle/civic/maintenance/3/delete", follow_redirects=True)
        assert "Maintenance record not found" in response.get_data(as_text=True)
        assert len(load_vehicle(vehicle_path(tmp_path, "civic")).maintenance) == 1


class TestRepairPages:
    """Tests for the repair record routes."""

    def test_detail_lists_repairs(self, client, tmp_path):
        save_repair(
            vehicle_path(tmp_path, "civic"),
            VehicleRepair("Brakes", "2025-05-14", 14000, 500.0, "Dave's Garage"),
        )
        body = client.get("/vehicle/civic").get_data(as_text=True)
        assert "Repair Records" in body
        assert "Total spent: $500.00" in body

    def test_log_repair_resolves_warranty(self, client, tmp_path):
        response = client.post(
            "/vehicle/civic/repairs",
            data={
                "repair_type": "Brakes",
                "service_date": "2025-05-14",
                "mileage": "14,000",
                "cost": "500",
                "part_warranty": "1 year",
                "labor_warranty": "No Warranty",
            },
        )
        assert response.status_code == 302
        repair = load_vehicle(vehicle_path(tmp_path, "civic")).repairs[0]
        assert repair.mileage == 14000
        assert repair.part_warranty == "2026-05-14"
        assert repair.labor_warranty is None

    def test_log_repair_rejects_missing_mileage(self, client, tmp_path):
        client.post("/vehicle/civic/repairs", data={"repair_type": "Brakes"})
        assert load_vehicle(vehicle_path(tmp_path, "civic")).repairs == []

    def test_delete_repair(self, client, tmp_path):
        save_repair(vehicle_path(tmp_path, "civic"), VehicleRepair("Brakes", "2025-05-14"))
        client.post("/vehicle/civic/repairs/0/delete")
        assert load_vehicle(vehicle_path(tmp_path, "civic")).repairs == []

    def test_delete_repair_bad_index(self, client):
        response = client.post("/vehicle/civic/repairs/0/delete", follow_redirects=True)
        assert "Repair record not found" in response.get_data(as_text=True)


class TestProviderPages:
    """Tests for the saved providers routes."""

    def test_list_with_category(self, client):
        body = client.get("/providers?category=Electrician").get_data(as_text=True)
        assert "Bright Spark" in body
        assert "Pipe Pros" not in body

    def test_create_provider(self, client, tmp_path):
        response = client.post(
            "/providers",
            data={"name": "Top Roofing", "category": "Roofer", "rating": "4.5"},
        )
        assert response.status_code == 302
        saved = [p for p in load_providers(providers_path(tmp_path)) if p.name == "Top Roofing"]
        assert saved[0].rating == 4.5
        assert saved[0].id

    def test_create_provider_rejects_bad_website(self, client, tmp_path):
        client.post(
            "/providers",
            data={"name": "Top Roofing", "category": "Roofer", "website": "top.example"},
        )
        assert len(load_providers(providers_path(tmp_path))) == 3

    def test_create_provider_with_tags(self, client, tmp_path):
        client.post(
            "/providers",
            data={"name": "Top Roofing", "category": "Roofer", "tags": "licensed, insured"},
        )
        saved = [p for p in load_providers(providers_path(tmp_path)) if p.name == "Top Roofing"]
        assert saved[0].tags == ["licensed", "insured"]
        assert "licensed" in client.get("/providers").get_data(as_text=True)

    def test_delete_provider(self, client, tmp_path):
        response = client.post("/providers/p2/delete")
        assert response.status_code == 302
        assert [p.id for p in load_providers(providers_path(tmp_path))] == ["p1", "p3"]

    def test_delete_unknown_provider(self, client, tmp_path):
        response = client.post("/providers/nope/delete", follow_redirects=True)
        assert "not found" in response.get_data(as_text=True)
        assert len(load_providers(providers_path(tmp_path))) == 3


class TestServicesDirectory:
    """Tests for the services directory page."""

    def test_prompt_without_service(self, client):
        body = client.get("/services").get_data(as_text=True)
        assert "Select a service to view matching providers" in body

    def test_matching_providers(self, client):
        body = client.get(
            "/services?location=inside&type=repairs&service=plumbing"
        ).get_data(as_text=True)
        assert "Smith Plumbing" in body
        assert "Pipe Pros" in body
        assert "Bright Spark" not in body

    def test_contact_only(self, client):
        body = client.get(
            "/services?location=inside&type=repairs&service=plumbing&contact=1"
        ).get_data(as_text=True)
        assert "Smith Plumbing" in body
        assert "Pipe Pros" not in body

    def test_no_matches(self, client):
        body = client.get(
            "/services?location=outside&type=repairs&service=lawn-care"
        ).get_data(as_text=True)
        assert "No providers found for this service yet" in body


class TestSelectionFromArgs:
    """Tests for rebuilding the directory selection from a submitted form."""

    def test_complete_link(self):
        selection = selection_from_args(
            {"location": "inside", "type": "repairs", "service": "plumbing"}
        )
        assert selection.service_key == "plumbing"

    def test_location_change_resets(self):
        selection = selection_from_args({
            "prev_location": "inside",
            "prev_type": "repairs",
            "location": "outside",
            "type": "repairs",
            "service": "plumbing",
        })
        assert selection.location == "outside"
        assert selection.group_type == ""
        assert selection.service_key == ""

    def test_type_change_resets_service(self):
        selection = selection_from_args({
            "prev_location": "inside",
            "prev_type": "repairs",
            "location": "inside",
            "type": "improvements",
            "service": "plumbing",
        })
        assert selection.group_type == "improvements"
        assert selection.service_key == ""

    def test_search_and_contact(self):
        selection = selection_from_args({"q": "smith", "contact": "1"})
        assert selection.search_text == "smith"
        assert selection.contact_only is True
