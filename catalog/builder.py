"""
Catalog builder for the resource site.

Walks a content tree and assembles the in-memory catalog:
- ``*.md`` files are resource documents (see resource_parser)
- ``_category.md`` files describe the category named after their directory
- Resources are grouped by category slug, then subcategory slug
- Categories, subcategories and resources are sorted by name

The walk is depth-first with directory entries visited in name order, so
the result is deterministic. When several resources spell the same category
slug differently, the first one visited names the category.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from .metadata_parser import parse_category_description
from .models import (
    GENERAL_NAME,
    UNCATEGORIZED_NAME,
    Category,
    Resource,
    SiteData,
    Subcategory,
)
from .resource_parser import parse_resource_file
from .slug import slugify

logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".md"
CATEGORY_FILENAME = "_category.md"


@dataclass
class _SubcategoryGroup:
    name: str
    resources: List[Resource] = field(default_factory=list)


@dataclass
class _CategoryGroup:
    name: str
    subcategories: Dict[str, _SubcategoryGroup] = field(default_factory=dict)


class CatalogBuilder:
    """Builds the immutable catalog from a directory of markdown documents."""

    def __init__(self, content_dir: Path):
        """Initialize catalog builder.

        Args:
            content_dir: Root directory of the content tree (e.g., resources/)
        """
        self.content_dir = Path(content_dir)

    def build(self) -> SiteData:
        """Parse every document under the content directory.

        Returns:
            SiteData with sorted categories and the total resource count

        Raises:
            FileNotFoundError: If the content directory does not exist
            NotADirectoryError: If the content path is not a directory
            OSError: If a matching file cannot be read

        Example:
            >>> data = CatalogBuilder(Path("resources")).build()
            >>> print(f"Loaded {data.total_resources} resources")
        """
        if not self.content_dir.exists():
            raise FileNotFoundError(f"Content directory not found: {self.content_dir}")
        if not self.content_dir.is_dir():
            raise NotADirectoryError(f"Content path is not a directory: {self.content_dir}")

        groups: Dict[str, _CategoryGroup] = {}
        descriptions: Dict[str, str] = {}
        total_resources = 0

        for file_path in self._iter_files(self.content_dir):
            if file_path.name == CATEGORY_FILENAME:
                description = parse_category_description(file_path)
                if description:
                    descriptions[slugify(file_path.parent.name)] = description
                continue

            if file_path.suffix != CONTENT_SUFFIX:
                continue

            resource = parse_resource_file(file_path)
            if resource is None:
                continue

            self._add_resource(groups, resource)
            total_resources += 1

        categories = self._finalize(groups, descriptions)
        logger.info(
            f"Loaded {len(categories)} categories with {total_resources} total resources"
        )
        return SiteData(categories=categories, total_resources=total_resources)

    def _iter_files(self, directory: Path) -> Iterator[Path]:
        """Yield files depth-first, visiting directory entries in name order."""
        with os.scandir(directory) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from self._iter_files(Path(entry.path))
            elif entry.is_file():
                yield Path(entry.path)

    def _add_resource(self, groups: Dict[str, _CategoryGroup], resource: Resource) -> None:
        """Place a resource into its category and subcategory group."""
        category_slug = slugify(resource.category_name)
        category_name = resource.category_name
        if not category_slug:
            category_slug = slugify(UNCATEGORIZED_NAME)
            category_name = UNCATEGORIZED_NAME

        subcategory_slug = slugify(resource.subcategory_name)
        subcategory_name = resource.subcategory_name
        if not subcategory_slug:
            subcategory_slug = slugify(GENERAL_NAME)
            subcategory_name = GENERAL_NAME

        category = groups.setdefault(category_slug, _CategoryGroup(name=category_name))
        subcategory = category.subcategories.setdefault(
            subcategory_slug, _SubcategoryGroup(name=subcategory_name)
        )

        # Denormalized names follow the group, whichever document named it first
        subcategory.resources.append(
            replace(resource, category_name=category.name, subcategory_name=subcategory.name)
        )

    def _finalize(
        self,
        groups: Dict[str, _CategoryGroup],
        descriptions: Dict[str, str],
    ) -> Tuple[Category, ...]:
        """Sort the groups and freeze them into model objects."""
        categories = []
        for category_slug, group in groups.items():
            subcategories = [
                Subcategory(
                    name=sub.name,
                    resources=tuple(sorted(sub.resources, key=lambda r: r.name)),
                )
                for sub in group.subcategories.values()
            ]
            subcategories.sort(key=lambda s: s.name)

            categories.append(
                Category(
                    name=group.name,
                    description=descriptions.get(category_slug, ""),
                    subcategories=tuple(subcategories),
                )
            )

        categories.sort(key=lambda c: c.name)
        return tuple(categories)


def build_catalog(content_dir: Path) -> SiteData:
    """Build the catalog for a content directory."""
    return CatalogBuilder(content_dir).build()
