"""Tests for catalog lookup and search."""

import pytest

from retrieval import CatalogIndex


@pytest.fixture
def index(site_data):
    return CatalogIndex(site_data)


class TestLookup:
    """Tests for get_category and get_resource."""

    def test_get_category(self, index):
        category = index.get_category("tools")
        assert category.name == "Tools"

    def test_get_category_not_found(self, index):
        assert index.get_category("nope") is None
        assert index.get_category("") is None

    def test_get_resource(self, index):
        resource = index.get_resource("tools", "tarkov-tracker")
        assert resource.name == "Tarkov Tracker"
        assert resource.subcategory_name == "Trackers"

    def test_get_resource_uncategorized(self, index):
        assert index.get_resource("uncategorized", "loose-notes").name == "Loose Notes"

    @pytest.mark.parametrize("category_slug, resource_slug", [
        ("tools", "map-genie"),
        ("missing", "tarkov-tracker"),
        ("tools", ""),
    ])
    def test_get_resource_not_found(self, index, category_slug, resource_slug):
        assert index.get_resource(category_slug, resource_slug) is None


class TestSearch:
    """Tests for search."""

    def test_empty_query(self, index):
        assert index.search("") == []

    def test_case_insensitive_name(self, index):
        results = index.search("GENIE")
        assert [r.resource.name for r in results] == ["Map Genie"]
        assert results[0].category == "Maps"
        assert results[0].subcategory == "Interactive Maps"

    def test_subcategory_match_returns_each_once(self, index):
        """'Trackers' also appears in a resource name; still one result each."""
        results = index.search("tracker")
        assert [r.resource.name for r in results] == ["Hideout Helper", "Tarkov Tracker"]

    def test_category_match_in_catalog_order(self, index):
        results = index.search("tools")
        assert [r.resource.name for r in results] == [
            "Ammo Chart", "Hideout Helper", "Tarkov Tracker",
        ]

    def test_description_match(self, index):
        results = index.search("penetration")
        assert [r.resource.name for r in results] == ["Ammo Chart"]

    def test_platform_match(self, index):
        results = index.search("desktop")
        assert [r.resource.name for r in results] == ["Ammo Chart"]

    def test_audience_and_price_not_searched(self, index):
        assert index.search("quest grinders") == []
        assert index.search("free") == []

    def test_no_match(self, index):
        assert index.search("zzz-no-such-thing") == []

    def test_search_does_not_mutate(self, index, site_data):
        before = site_data.to_dict()
        index.search("map")
        assert site_data.to_dict() == before
