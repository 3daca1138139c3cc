"""Provider class for saved service providers."""

from typing import Iterable, List, Optional

from .catalog import ALL_CATEGORIES


class Provider:
    """A saved service provider (plumber, mechanic, ...)."""

    def __init__(
            self,
            id: str,
            name: Optional[str] = None,
            category: Optional[str] = None,
            phone: Optional[str] = None,
            email: Optional[str] = None,
            address: Optional[str] = None,
            website: Optional[str] = None,
            rating: Optional[float] = None,
            notes: Optional[str] = None,
            tags: Optional[List[str]] = None,
    ):
        self.id = id
        self.name = name
        self.category = category
        self.phone = phone
        self.email = email
        self.address = address
        self.website = website
        self.rating = rating
        self.notes = notes
        self.tags = tags or []

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Provider"

    @property
    def has_contact(self) -> bool:
        """True when the provider can be reached by phone or email."""
        return bool(self.phone or self.email)


def filter_providers(
    providers: Iterable[Provider],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Provider]:
    """
    Filter the saved providers list.

    - search: case-insensitive substring of name or category
    - category: exact label; empty or "All Categories" keeps everything
    """
    needle = (search or "").lower()
    results = []
    for provider in providers:
        if needle and not (
            needle in (provider.name or "").lower()
            or needle in (provider.category or "").lower()
        ):
            continue
        if category and category != ALL_CATEGORIES and provider.category != category:
            continue
        results.append(provider)
    return results
