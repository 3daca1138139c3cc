"""Lookup tables for dropdowns and default service intervals."""

from typing import List, Optional

ALL_CATEGORIES = "All Categories"

PROVIDER_CATEGORIES = [
    "Plumber",
    "Electrician",
    "HVAC",
    "Contractor",
    "Landscaper",
    "Painter",
    "Roofer",
    "Mechanic",
    "Other",
]

# Simplified core maintenance service types for quick entry
MAINTENANCE_TYPES = [
    "Oil Change",
    "Tire Rotation",
    "Brake Service",
    "General Inspection",
    "Other",
]

# Recommended mileage intervals for next-due suggestions (miles)
DEFAULT_INTERVAL_MILES = {
    "Oil Change": 5000,
    "Tire Rotation": 6000,
    "Brake Service": 12000,
}

# Recommended date intervals for date-based services (months)
DEFAULT_INTERVAL_MONTHS = {
    "General Inspection": 6,
}

VEHICLE_MAKES = [
    "Toyota",
    "Honda",
    "Ford",
    "Chevrolet",
    "Nissan",
    "BMW",
    "Mercedes-Benz",
    "Volkswagen",
    "Subaru",
    "Hyundai",
    "Kia",
    "Tesla",
    "Jeep",
]

VEHICLE_MODELS = {
    "Toyota": ["Camry", "Corolla", "RAV4", "Highlander", "Tacoma", "4Runner"],
    "Honda": ["Civic", "Accord", "CR-V", "Pilot", "Odyssey"],
    "Ford": ["F-150", "Escape", "Explorer", "Mustang", "Edge"],
    "Chevrolet": ["Silverado", "Equinox", "Malibu", "Tahoe", "Traverse"],
    "Nissan": ["Altima", "Sentra", "Rogue", "Pathfinder", "Frontier"],
    "BMW": ["3 Series", "5 Series", "X3", "X5", "X1"],
    "Mercedes-Benz": ["C-Class", "E-Class", "GLC", "GLE", "GLA"],
    "Volkswagen": ["Jetta", "Passat", "Tiguan", "Atlas", "Golf"],
    "Subaru": ["Outback", "Forester", "Impreza", "Crosstrek", "Ascent"],
    "Hyundai": ["Elantra", "Sonata", "Tucson", "Santa Fe", "Kona"],
    "Kia": ["Sorento", "Sportage", "Optima", "Telluride", "Soul"],
    "Tesla": ["Model 3", "Model Y", "Model S", "Model X"],
    "Jeep": ["Wrangler", "Grand Cherokee", "Cherokee", "Compass", "Renegade"],
}


def models_for_make(make: str) -> List[str]:
    """Known models for a make (case-insensitive). Unknown makes give []."""
    for known, models in VEHICLE_MODELS.items():
        if known.lower() == (make or "").strip().lower():
            return list(models)
    return []


VEHICLE_REPAIR_ISSUES = [
    "Engine",
    "Transmission",
    "Brakes",
    "Electrical",
    "Suspension",
    "Cooling System",
    "Fuel System",
    "Other",
]

# Warranty lengths offered as shortcuts; "Custom" means an explicit end date
LABOR_PART_WARRANTY = [
    "30 days",
    "90 days",
    "1 year",
    "Custom",
]

WARRANTY_OPTIONS = [
    "No Warranty",
    "6 months",
    "1 year",
    "2 years",
    "Other",
]

# relativedelta arguments for every named warranty length
WARRANTY_TERMS = {
    "30 days": {"days": 30},
    "90 days": {"days": 90},
    "6 months": {"months": 6},
    "1 year": {"years": 1},
    "2 years": {"years": 2},
}

NO_WARRANTY = "No Warranty"

ROOM_TYPES = [
    "Living Room",
    "Family Room / Den",
    "Dining Room",
    "Kitchen",
    "Master Bedroom",
    "Bedroom",
    "Nursery",
    "Master Bathroom",
    "Full Bathroom",
    "Half Bathroom / Powder Room",
    "Laundry Room",
    "Mudroom",
    "Pantry",
    "Closet / Walk-in Closet",
    "Garage",
    "Finished Basement",
    "Unfinished Basement",
    "Attic",
    "Home Office",
    "Playroom",
    "Home Gym",
    "Media Room / Theater",
    "Game Room",
    "Patio / Deck",
    "Porch",
    "Balcony",
    "Backyard / Garden",
]

ROOM_CATEGORY_MAP = {
    "Main Living Areas": ["Living Room", "Family Room / Den", "Dining Room", "Kitchen"],
    "Bedrooms": ["Master Bedroom", "Bedroom", "Nursery"],
    "Bathrooms": ["Master Bathroom", "Full Bathroom", "Half Bathroom / Powder Room"],
    "Utility / Functional": [
        "Laundry Room",
        "Mudroom",
        "Pantry",
        "Closet / Walk-in Closet",
        "Garage",
    ],
    "Basement / Attic": ["Finished Basement", "Unfinished Basement", "Attic"],
    "Office / Recreation": [
        "Home Office",
        "Playroom",
        "Home Gym",
        "Media Room / Theater",
        "Game Room",
    ],
    "Outdoor Spaces": ["Patio / Deck", "Porch", "Balcony", "Backyard / Garden"],
}


def room_category(room_type: str) -> Optional[str]:
    """Category a room type belongs to (case-insensitive), or None."""
    wanted = (room_type or "").strip().lower()
    for category, rooms in ROOM_CATEGORY_MAP.items():
        if any(room.lower() == wanted for room in rooms):
            return category
    return None
