"""
Retrieval package for the resource catalog.

Components:
- catalog_index: Lookup by slug and substring search over a built catalog
"""

from .catalog_index import CatalogIndex

__all__ = ['CatalogIndex']
