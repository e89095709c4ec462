"""
Resource document parser.

Each resource lives in its own markdown file:

    # Map Genie

    **Website:** [Site](https://mapgenie.io/tarkov)
    **Website:** [Discord](https://discord.gg/example)
    **Category:** Maps > Interactive Maps

    ## Overview

    Interactive maps with loot, extracts and quest markers.

    ## Details

    | Key | Value |
    |-----|-------|
    | **Platform** | Web |
    | **Audience** | All players |
    | **Price** | Free |

    ---

Parsing is best-effort and line-oriented. A document without a name or
without at least one link produces no resource.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .models import Resource, ResourceLink

logger = logging.getLogger(__name__)

NAME_PREFIX = "# "
WEBSITE_PREFIX = "**Website:**"
CATEGORY_PREFIX = "**Category:**"
OVERVIEW_MARKER = "## Overview"
DETAILS_MARKER = "## Details"
RULE_PREFIX = "---"
TABLE_PREFIX = "|"
CATEGORY_SEPARATOR = ">"

DETAIL_KEYS = ("Platform", "Audience", "Price")


def parse_resource_file(file_path: Path) -> Optional[Resource]:
    """Parse an individual resource markdown file.

    Args:
        file_path: Path to the resource document

    Returns:
        Parsed Resource, or None if the document has no name or no link

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(file_path, encoding='utf-8', errors='replace') as handle:
        resource = parse_resource_lines(handle)

    if resource is None:
        logger.debug(f"Skipping {file_path}: missing name or website link")
    return resource


def parse_resource_lines(lines: Iterable[str]) -> Optional[Resource]:
    """Parse a resource document from a stream of lines.

    Args:
        lines: Document lines (trailing newlines are ignored)

    Returns:
        Parsed Resource with the category and subcategory names exactly as
        written in the document (possibly empty), or None if the document
        has no name or no link
    """
    name = ""
    description = ""
    links: List[ResourceLink] = []
    category_name = ""
    subcategory_name = ""
    details = dict.fromkeys(DETAIL_KEYS, "")
    in_details = False

    for raw_line in lines:
        line = raw_line.rstrip('\r\n')

        if line.startswith(NAME_PREFIX) and not name:
            name = line[len(NAME_PREFIX):].strip()
            continue

        if line.startswith(WEBSITE_PREFIX):
            link = _parse_link(line)
            if link is not None:
                links.append(link)
            continue

        if line.startswith(CATEGORY_PREFIX):
            category_name, subcategory_name = _parse_category(line[len(CATEGORY_PREFIX):])
            continue

        if line.startswith(OVERVIEW_MARKER):
            continue

        # First free-text line becomes the description
        if not description and _is_free_text(line):
            description = line.strip()
            continue

        if line.startswith(DETAILS_MARKER):
            in_details = True
            continue

        if in_details and line.startswith(TABLE_PREFIX):
            key, value = _parse_table_row(line)
            if key in details:
                details[key] = value

        if in_details and line.startswith(RULE_PREFIX):
            break

    if not name or not links:
        return None

    return Resource(
        name=name,
        links=tuple(links),
        description=description,
        platform=details["Platform"],
        audience=details["Audience"],
        price=details["Price"],
        category_name=category_name,
        subcategory_name=subcategory_name,
    )


def _parse_link(line: str) -> Optional[ResourceLink]:
    """Extract the first ``[label](url)`` link from a Website line."""
    pattern = r'\[([^\]]+)\]\(([^)]+)\)'
    match = re.search(pattern, line)
    if not match:
        return None

    label, url = match.group(1), match.group(2)
    # A label that is itself a URL adds nothing for display
    if label.startswith("http://") or label.startswith("https://"):
        label = ""
    return ResourceLink(url=url, label=label)


def _parse_category(value: str) -> Tuple[str, str]:
    """Split ``Category > Subcategory`` into its two names."""
    parts = [part.strip() for part in value.strip().split(CATEGORY_SEPARATOR)]
    category = parts[0]
    subcategory = parts[1] if len(parts) > 1 else ""
    return category, subcategory


def _parse_table_row(line: str) -> Tuple[str, str]:
    """Return the (key, value) pair of a ``| **Key** | Value |`` row."""
    cells = line.split(TABLE_PREFIX)
    if len(cells) < 3:
        return "", ""
    key = cells[1].strip().strip('*')
    return key, cells[2].strip()


def _is_free_text(line: str) -> bool:
    if not line.strip():
        return False
    return not line.startswith(("#", "**", RULE_PREFIX, TABLE_PREFIX))
