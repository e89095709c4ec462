"""
Data model for the resource catalog.

Hierarchy:
    SiteData
        Category            - top-level grouping, optional description
            Subcategory     - grouping inside a category
                Resource    - one cataloged entry with one or more links

All types are frozen: the catalog is built once and then shared read-only.
Slugs are derived from names on access and never stored separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .slug import slugify

UNCATEGORIZED_NAME = "Uncategorized"
GENERAL_NAME = "General"


@dataclass(frozen=True)
class ResourceLink:
    """A single link with an optional label."""
    url: str
    label: str = ""

    def to_dict(self) -> Dict:
        return {"url": self.url, "label": self.label}


@dataclass(frozen=True)
class Resource:
    """Represents a single catalog resource."""
    name: str
    links: Tuple[ResourceLink, ...]
    description: str = ""
    platform: str = ""
    audience: str = ""
    price: str = ""
    category_name: str = ""
    subcategory_name: str = ""

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def url(self) -> str:
        """Primary URL (first link)."""
        return self.links[0].url if self.links else ""

    @property
    def category_slug(self) -> str:
        return slugify(self.category_name)

    @property
    def subcategory_slug(self) -> str:
        return slugify(self.subcategory_name)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "url": self.url,
            "links": [link.to_dict() for link in self.links],
            "description": self.description,
            "platform": self.platform,
            "audience": self.audience,
            "price": self.price,
            "category_name": self.category_name,
            "category_slug": self.category_slug,
            "subcategory_name": self.subcategory_name,
            "subcategory_slug": self.subcategory_slug,
        }


@dataclass(frozen=True)
class Subcategory:
    """Resources sharing a (category, subcategory) pair."""
    name: str
    resources: Tuple[Resource, ...] = ()

    @property
    def slug(self) -> str:
        return slugify(self.name)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "resources": [resource.to_dict() for resource in self.resources],
        }


@dataclass(frozen=True)
class Category:
    """Top-level catalog grouping."""
    name: str
    description: str = ""
    subcategories: Tuple[Subcategory, ...] = ()

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def resource_count(self) -> int:
        return sum(len(sub.resources) for sub in self.subcategories)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "resource_count": self.resource_count,
            "subcategories": [sub.to_dict() for sub in self.subcategories],
        }


@dataclass(frozen=True)
class SiteData:
    """Site-wide catalog snapshot."""
    categories: Tuple[Category, ...] = ()
    total_resources: int = 0

    def to_dict(self) -> Dict:
        return {
            "total_resources": self.total_resources,
            "categories": [category.to_dict() for category in self.categories],
        }


@dataclass(frozen=True)
class SearchResult:
    """A resource with the names of its owning category and subcategory."""
    resource: Resource
    category: str
    subcategory: str = ""

    def to_dict(self) -> Dict:
        return {
            "resource": self.resource.to_dict(),
            "category": self.category,
            "subcategory": self.subcategory,
        }
