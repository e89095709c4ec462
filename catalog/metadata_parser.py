"""
Metadata parser for category description documents.

Each category directory may carry a ``_category.md`` file with a leading
front matter block:

    ---
    title: Maps
    description: "Interactive and static maps for every location."
    ---

    Longer free text that is used when no description key is present.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

FRONT_MATTER_DELIMITER = "---"
DESCRIPTION_KEY = "description"


class MetadataError(ValueError):
    """Exception raised when a front matter block is malformed."""
    pass


def parse_front_matter(lines: Sequence[str]) -> Tuple[Optional[Dict[str, str]], List[str]]:
    """Split a document into its front matter and body.

    Args:
        lines: Document lines without trailing newlines

    Returns:
        Tuple of (metadata dict or None when the document has no leading
        block, remaining body lines)

    Raises:
        MetadataError: If the block is opened but never closed

    Example:
        >>> meta, body = parse_front_matter(["---", "description: Maps", "---", "Body"])
        >>> meta
        {'description': 'Maps'}
        >>> body
        ['Body']
    """
    start = _first_content_index(lines)
    if start is None or lines[start].strip() != FRONT_MATTER_DELIMITER:
        return None, list(lines)

    metadata: Dict[str, str] = {}
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if line.strip() == FRONT_MATTER_DELIMITER:
            return metadata, list(lines[index + 1:])

        # Only flat ``key: value`` pairs are recognised
        if ':' in line:
            key, value = line.split(':', 1)
            metadata[key.strip()] = value.strip()

    raise MetadataError("Front matter block is not closed")


def parse_category_description(file_path: Path) -> str:
    """Read the description from a category description document.

    Args:
        file_path: Path to the ``_category.md`` document

    Returns:
        The ``description`` front matter value with quotes stripped, else the
        first non-blank body line, else an empty string

    Raises:
        OSError: If the file cannot be opened or read
    """
    text = Path(file_path).read_text(encoding='utf-8', errors='replace')
    return extract_description(text.splitlines())


def extract_description(lines: Sequence[str]) -> str:
    """Pick the category description out of document lines."""
    try:
        metadata, body = parse_front_matter(lines)
    except MetadataError:
        return ""

    if metadata and DESCRIPTION_KEY in metadata:
        return metadata[DESCRIPTION_KEY].strip("\"'")

    for line in body:
        if line.strip():
            return line.strip()
    return ""


def _first_content_index(lines: Sequence[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if line.strip():
            return index
    return None
