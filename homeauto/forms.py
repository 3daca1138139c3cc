"""Form validation schemas for vehicles, maintenance and repair records, and providers."""

from datetime import date
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator, FormatChecker

from .catalog import PROVIDER_CATEGORIES


def vehicle_form_schema(today: Optional[date] = None) -> Dict[str, Any]:
    """Schema for the vehicle form. Year may be at most next year."""
    max_year = (today or date.today()).year + 1
    return {
        "type": "object",
        "required": ["make", "model", "year"],
        "properties": {
            "make": {"type": "string", "minLength": 1},
            "model": {"type": "string", "minLength": 1},
            "year": {"type": "integer", "minimum": 1900, "maximum": max_year},
            "nickname": {"type": ["string", "null"]},
            "mileage": {"type": ["number", "null"], "minimum": 0},
        },
    }


MAINTENANCE_FORM = {
    "type": "object",
    "required": ["service_type", "service_date", "mileage"],
    "properties": {
        "service_type": {"type": "string", "minLength": 1},
        "service_date": {"type": "string", "format": "date"},
        "mileage": {"type": "number", "minimum": 0},
        "cost": {"type": ["number", "null"], "minimum": 0},
        "service_company": {"type": ["string", "null"]},
        "notes": {"type": ["string", "null"]},
        "next_service_mileage": {"type": ["number", "null"], "minimum": 0},
        "next_service_date": {
            "anyOf": [{"type": "null"}, {"type": "string", "format": "date"}]
        },
    },
}

REPAIR_FORM = {
    "type": "object",
    "required": ["repair_type", "service_date", "mileage"],
    "properties": {
        "repair_type": {"type": "string", "minLength": 1},
        "service_date": {"type": "string", "format": "date"},
        "mileage": {"type": "number", "minimum": 0},
        "cost": {"type": ["number", "null"], "minimum": 0},
        "repair_facility": {"type": ["string", "null"]},
        "finding": {"type": ["string", "null"]},
        # Warranty end dates
        "part_warranty": {
            "anyOf": [{"type": "null"}, {"type": "string", "format": "date"}]
        },
        "labor_warranty": {
            "anyOf": [{"type": "null"}, {"type": "string", "format": "date"}]
        },
    },
}

PROVIDER_FORM = {
    "type": "object",
    "required": ["name", "category"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "category": {"enum": PROVIDER_CATEGORIES},
        "phone": {"type": ["string", "null"]},
        "email": {
            "anyOf": [{"type": "null"}, {"type": "string", "format": "email"}]
        },
        "website": {
            "anyOf": [
                {"type": "null"},
                {"type": "string", "pattern": "^https?://[^\\s/$.?#].[^\\s]*$"},
            ]
        },
        "address": {"type": ["string", "null"]},
        "rating": {"type": ["number", "null"], "minimum": 0, "maximum": 5},
        "notes": {"type": ["string", "null"]},
        "tags": {
            "type": ["array", "null"],
            "items": {"type": "string", "minLength": 1},
        },
    },
}


def parse_number(text: Optional[str]) -> Union[int, float, str, None]:
    """
    Convert form text to a number.

    Blank input becomes None. Text that is not a number is returned unchanged
    so schema validation reports it.
    """
    if text is None:
        return None
    text = str(text).strip().replace(",", "")
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_tags(text: Optional[str]) -> Optional[List[str]]:
    """Split comma-separated tags: "licensed, insured" -> ["licensed", "insured"]."""
    tags = [t.strip() for t in (text or "").split(",") if t.strip()]
    return tags or None


def blank_to_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop surrounding whitespace and turn empty strings into None."""
    cleaned = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip() or None
        cleaned[key] = value
    return cleaned


def _field_name(error) -> str:
    if error.path:
        return ".".join(str(p) for p in error.path)
    if error.validator == "required":
        return error.message.split("'")[1]
    return "form"


def validate_form(schema: Dict[str, Any], data: Dict[str, Any]) -> List[str]:
    """Validate form data. Returns list of errors (empty when valid)."""
    validator = Draft7Validator(schema, format_checker=FormatChecker())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    return [f"{_field_name(e)}: {e.message}" for e in errors]
