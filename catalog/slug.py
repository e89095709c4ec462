"""
URL-safe identifiers for catalog names.
"""

from __future__ import annotations

import re


def slugify(text: str) -> str:
    """Convert display text to a URL-friendly slug.

    Args:
        text: Arbitrary display text (category, subcategory or resource name)

    Returns:
        Lower-case slug made of ``[a-z0-9]`` runs joined by single hyphens.
        Empty input yields an empty string.

    Example:
        >>> slugify("  Ammo Charts & Tables ")
        'ammo-charts-tables'
        >>> slugify(slugify("Map Genie"))
        'map-genie'
    """
    slug = text.lower().strip()
    slug = re.sub(r'[^a-z0-9]+', '-', slug)
    return slug.strip('-')
