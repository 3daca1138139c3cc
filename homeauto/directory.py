"""
Home services directory.

Hierarchy: location (inside/outside) -> group (repairs/improvements) -> service.
Each service lists the provider categories that qualify for it; saved
providers are matched to a service by category label, ignoring case.
"""

import re
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .provider import Provider

LOCATIONS = ("inside", "outside")
GROUP_TYPES = ("repairs", "improvements")


def service_key(label: str) -> str:
    """Lookup key for a service label: 'Gutter Cleaning & Repair' -> 'gutter-cleaning-repair'."""
    return re.sub(r"[^a-z0-9]+", "-", label.lower()).strip("-")


@dataclass(frozen=True)
class ServiceLeaf:
    """A named service and the provider categories that can perform it."""

    key: str
    label: str
    provider_categories: Tuple[str, ...]


@dataclass(frozen=True)
class ServiceGroup:
    kind: str
    label: str
    services: Tuple[ServiceLeaf, ...]


@dataclass(frozen=True)
class LocationNode:
    kind: str
    label: str
    groups: Mapping[str, ServiceGroup]


def _group(kind: str, label: str, services: Sequence[Tuple[str, Sequence[str]]]) -> ServiceGroup:
    leaves = tuple(
        ServiceLeaf(service_key(name), name, tuple(categories))
        for name, categories in services
    )
    return ServiceGroup(kind, label, leaves)


def _location(kind: str, label: str, repairs: ServiceGroup, improvements: ServiceGroup) -> LocationNode:
    return LocationNode(
        kind, label, MappingProxyType({"repairs": repairs, "improvements": improvements})
    )


def _check_unique_keys(directory: Mapping[str, LocationNode]) -> None:
    seen = {}
    for location in directory.values():
        for group in location.groups.values():
            for leaf in group.services:
                if leaf.key in seen:
                    raise ValueError(
                        f"Duplicate service key '{leaf.key}': "
                        f"'{seen[leaf.key]}' and '{leaf.label}'"
                    )
                seen[leaf.key] = leaf.label


REPAIRS_LABEL = "Repairs / Maintenance"
IMPROVEMENTS_LABEL = "Improvements / Installations"

DIRECTORY: Mapping[str, LocationNode] = MappingProxyType({
    "inside": _location(
        "inside",
        "Inside the Home",
        _group("repairs", REPAIRS_LABEL, [
            ("Plumbing", ["Plumber"]),
            ("Electrical", ["Electrician"]),
            ("HVAC", ["HVAC"]),
            ("Appliance Repair", ["Contractor", "Other"]),
            ("Flooring Repair", ["Contractor"]),
            ("Painting", ["Painter"]),
            ("Lighting Install / Repair", ["Electrician"]),
            ("Drywall Repair / Patching", ["Contractor"]),
            ("Pest Control", ["Other"]),
            ("Cleaning Services", ["Other"]),
        ]),
        _group("improvements", IMPROVEMENTS_LABEL, [
            ("Kitchen Remodel", ["Contractor"]),
            ("Bathroom Remodel", ["Contractor"]),
            ("Flooring Installation", ["Contractor"]),
            ("Smart Home Devices", ["Electrician", "Other"]),
            ("Furniture Assembly / Installation", ["Contractor", "Other"]),
            ("Interior Design / Decorating", ["Other"]),
        ]),
    ),
    "outside": _location(
        "outside",
        "Outside the Home",
        _group("repairs", REPAIRS_LABEL, [
            ("Lawn Care", ["Landscaper"]),
            ("Tree & Bush Trimming / Removal", ["Landscaper"]),
            ("Irrigation System Install / Repair", ["Landscaper", "Contractor"]),
            ("Gutter Cleaning & Repair", ["Roofer", "Contractor", "Other"]),
            ("Power Washing", ["Other", "Contractor"]),
            ("Roof Repair / Inspection", ["Roofer"]),
            ("Fence Repair / Maintenance", ["Contractor"]),
            ("Pest Control (Yard)", ["Other"]),
        ]),
        _group("improvements", IMPROVEMENTS_LABEL, [
            ("Deck / Patio Build or Repair", ["Contractor"]),
            ("Fence Installation", ["Contractor"]),
            ("Exterior Painting / Siding Work", ["Painter", "Contractor"]),
            ("Outdoor Lighting Install", ["Electrician"]),
            ("Driveway / Concrete Work", ["Contractor"]),
            ("Landscaping", ["Landscaper"]),
            ("Outdoor Furniture Assembly", ["Contractor", "Other"]),
            ("Pool Install / Maintenance", ["Contractor", "Other"]),
        ]),
    ),
})

_check_unique_keys(DIRECTORY)


def service_options(
    location: Optional[str], group_type: Optional[str]
) -> Tuple[ServiceLeaf, ...]:
    """Services offered for a location/group pair; empty until both are chosen."""
    if not location or not group_type:
        return ()
    node = DIRECTORY.get(location)
    if node is None:
        return ()
    group = node.groups.get(group_type)
    return group.services if group else ()


def find_service(
    location: Optional[str], group_type: Optional[str], key: Optional[str]
) -> Optional[ServiceLeaf]:
    """Find a service by key within the current location/group."""
    if not key:
        return None
    for leaf in service_options(location, group_type):
        if leaf.key == key:
            return leaf
    return None


def resolve_providers(
    providers: Iterable[Provider],
    location: Optional[str] = None,
    group_type: Optional[str] = None,
    key: Optional[str] = None,
    search_text: Optional[str] = None,
    contact_only: bool = False,
) -> List[Provider]:
    """
    Providers eligible for the selected service, in input order.

    - category must be one of the service's provider categories (any case)
    - search_text, if given, must appear in the name or address (any case)
    - contact_only keeps providers with a phone or email
    """
    service = find_service(location, group_type, key)
    if service is None:
        return []

    categories = {c.lower() for c in service.provider_categories}
    needle = (search_text or "").lower()

    results = []
    for provider in providers:
        if not provider.category or provider.category.lower() not in categories:
            continue
        if needle and not (
            needle in (provider.name or "").lower()
            or needle in (provider.address or "").lower()
        ):
            continue
        if contact_only and not provider.has_contact:
            continue
        results.append(provider)
    return results


@dataclass(frozen=True)
class DirectorySelection:
    """
    Current directory selection.

    Changing an upper level clears the levels below it, so a service key
    chosen under one location never survives a switch to another.
    """

    location: str = ""
    group_type: str = ""
    service_key: str = ""
    search_text: str = ""
    contact_only: bool = False

    def with_location(self, location: Optional[str]) -> "DirectorySelection":
        return replace(self, location=location or "", group_type="", service_key="")

    def with_group(self, group_type: Optional[str]) -> "DirectorySelection":
        return replace(self, group_type=group_type or "", service_key="")

    def with_service(self, key: Optional[str]) -> "DirectorySelection":
        return replace(self, service_key=key or "")

    def with_search(self, search_text: Optional[str]) -> "DirectorySelection":
        return replace(self, search_text=search_text or "")

    def with_contact_only(self, contact_only: bool) -> "DirectorySelection":
        return replace(self, contact_only=bool(contact_only))

    @property
    def options(self) -> Tuple[ServiceLeaf, ...]:
        return service_options(self.location, self.group_type)

    @property
    def selected_service(self) -> Optional[ServiceLeaf]:
        return find_service(self.location, self.group_type, self.service_key)

    def resolve(self, providers: Iterable[Provider]) -> List[Provider]:
        return resolve_providers(
            providers,
            self.location,
            self.group_type,
            self.service_key,
            self.search_text,
            self.contact_only,
        )
