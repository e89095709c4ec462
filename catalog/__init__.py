"""
Catalog module for community resource documents.

This module provides functionality for:
- Normalizing display names into URL slugs
- Parsing resource documents and category descriptions
- Building the sorted, in-memory category hierarchy

Content structure:
    resources/
        maps/
            _category.md        - Category description (front matter)
            map-genie.md        - One resource per document
        tools/
            tarkov-tracker.md

Resource document format (in markdown):
    # Tarkov Tracker
    **Website:** [Site](https://tarkovtracker.io)
    **Category:** Tools > Trackers

Usage:
    from catalog import CatalogBuilder

    data = CatalogBuilder(Path("resources")).build()
    print(f"{data.total_resources} resources")
"""

from .slug import slugify
from .models import (
    Category,
    Resource,
    ResourceLink,
    SearchResult,
    SiteData,
    Subcategory,
)
from .metadata_parser import MetadataError, parse_category_description, parse_front_matter
from .resource_parser import parse_resource_file, parse_resource_lines
from .builder import CatalogBuilder, build_catalog

__all__ = [
    "slugify",
    "Category",
    "Resource",
    "ResourceLink",
    "SearchResult",
    "SiteData",
    "Subcategory",
    "MetadataError",
    "parse_category_description",
    "parse_front_matter",
    "parse_resource_file",
    "parse_resource_lines",
    "CatalogBuilder",
    "build_catalog",
]

__version__ = "1.0.0"
