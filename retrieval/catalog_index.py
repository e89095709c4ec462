"""
Read-only lookup and search over a built catalog.

Usage:
    from catalog import build_catalog
    from retrieval import CatalogIndex

    index = CatalogIndex(build_catalog(Path("resources")))
    maps = index.get_category("maps")
    genie = index.get_resource("maps", "map-genie")
    results = index.search("tracker")

No method mutates the catalog, so one index can be shared across threads.
"""

from __future__ import annotations

from typing import List, Optional

from catalog.models import Category, Resource, SearchResult, SiteData


class CatalogIndex:
    """Lookup by slug and substring search over a SiteData snapshot."""

    def __init__(self, site_data: SiteData):
        self.data = site_data

    @property
    def categories(self):
        return self.data.categories

    @property
    def total_resources(self) -> int:
        return self.data.total_resources

    def get_category(self, slug: str) -> Optional[Category]:
        """Find a category by its slug.

        Returns:
            Matching Category, or None if no category has this slug
        """
        for category in self.data.categories:
            if category.slug == slug:
                return category
        return None

    def get_resource(self, category_slug: str, resource_slug: str) -> Optional[Resource]:
        """Find a resource by category slug and resource slug.

        Subcategories are scanned in catalog order and the first resource
        with a matching slug is returned.

        Returns:
            Matching Resource, or None if the category or resource is unknown
        """
        category = self.get_category(category_slug)
        if category is None:
            return None

        for subcategory in category.subcategories:
            for resource in subcategory.resources:
                if resource.slug == resource_slug:
                    return resource
        return None

    def search(self, query: str) -> List[SearchResult]:
        """Case-insensitive substring search across resources.

        Matches against the resource name, description and platform, and
        the names of its category and subcategory. Each resource appears at
        most once, in catalog order.

        Args:
            query: Search text; an empty query matches nothing

        Returns:
            List of SearchResult objects
        """
        if not query:
            return []

        needle = query.lower()
        results: List[SearchResult] = []

        for category in self.data.categories:
            for subcategory in category.subcategories:
                for resource in subcategory.resources:
                    fields = (
                        resource.name,
                        resource.description,
                        resource.platform,
                        category.name,
                        subcategory.name,
                    )
                    if any(needle in value.lower() for value in fields):
                        results.append(
                            SearchResult(
                                resource=resource,
                                category=category.name,
                                subcategory=subcategory.name,
                            )
                        )

        return results
