#!/usr/bin/env python3
"""Tests for Provider class and filter_providers."""
import pytest
from homeauto import Provider, filter_providers


class TestProvider:
    """Tests for Provider properties."""

    def test_has_contact_phone(self):
        assert Provider("1", "A", phone="555-0101").has_contact is True

    def test_has_contact_email(self):
        assert Provider("1", "A", email="a@example.com").has_contact is True

    def test_no_contact(self):
        assert Provider("1", "A").has_contact is False

    def test_empty_strings_are_no_contact(self):
        assert Provider("1", "A", phone="", email="").has_contact is False

    def test_display_name_fallback(self):
        assert Provider("1").display_name == "Unnamed Provider"
        assert Provider("1", "Smith Plumbing").display_name == "Smith Plumbing"


class TestFilterProviders:
    """Tests for filter_providers."""

    @pytest.fixture
    def providers(self):
        return [
            Provider("1", "Smith Plumbing", "Plumber"),
            Provider("2", "Bright Spark", "Electrician"),
            Provider("3", "Dave's Garage", "Mechanic"),
            Provider("4", None, None),
        ]

    def test_no_filters_keeps_all(self, providers):
        assert filter_providers(providers) == providers

    def test_search_matches_name(self, providers):
        assert [p.id for p in filter_providers(providers, search="SMITH")] == ["1"]

    def test_search_matches_category(self, providers):
        assert [p.id for p in filter_providers(providers, search="electric")] == ["2"]

    def test_category_exact(self, providers):
        assert [p.id for p in filter_providers(providers, category="Mechanic")] == ["3"]

    def test_all_categories(self, providers):
        assert len(filter_providers(providers, category="All Categories")) == 4

    def test_search_and_category(self, providers):
        assert filter_providers(providers, search="smith", category="Mechanic") == []


class TestProviderTags:
    """Tests for provider tags."""

    def test_defaults_to_empty(self):
        assert Provider("1", "A").tags == []

    def test_keeps_tags(self):
        assert Provider("1", "A", tags=["licensed", "insured"]).tags == ["licensed", "insured"]
