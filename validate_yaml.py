#!/usr/bin/env python3
"""Validate vehicle and provider YAML files against their schemas."""
import json
import os
import sys
from pathlib import Path

import yaml
from jsonschema import Draft7Validator

SCHEMA_DIR = Path(__file__).parent / "schemas"


def load_schema(name: str = "vehicle") -> dict:
    """Load a JSON schema from schemas/<name>.yaml."""
    schema_path = SCHEMA_DIR / f"{name}.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file. Returns every schema error, not just the first."""
    try:
        with open(filepath) as f:
            # Unquoted dates load as date objects; compare them as ISO strings
            data = json.loads(json.dumps(yaml.safe_load(f), default=str))
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = []
    validator = Draft7Validator(schema)
    for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path))):
        errors.append(f"Schema validation error: {error.message}")
        if error.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    return errors


def validate_data_dir(data_dir: Path) -> int:
    """Validate all vehicle files and the providers file in a data directory."""
    vehicles_dir = data_dir / "vehicles"

    if not data_dir.exists():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    vehicle_schema = load_schema("vehicle")
    yaml_files = []
    if vehicles_dir.exists():
        yaml_files = list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))

    targets = [(path, vehicle_schema) for path in sorted(yaml_files)]
    providers_file = data_dir / "providers.yaml"
    if providers_file.exists():
        targets.append((providers_file, load_schema("providers")))

    if not targets:
        print(f"Warning: No YAML files found in {data_dir}")
        return 0

    all_valid = True
    for filepath, schema in targets:
        errors = validate_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


def main():
    """Validate the data directory given on the command line or in HOMEAUTO_DATA_DIR."""
    if len(sys.argv) > 1:
        data_dir = Path(sys.argv[1])
    else:
        data_dir = Path(os.environ.get("HOMEAUTO_DATA_DIR", "data"))
    return validate_data_dir(data_dir)


if __name__ == "__main__":
    sys.exit(main())
