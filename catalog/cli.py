#!/usr/bin/env python3
"""
Build the resource catalog from a content tree and report on it.

This script:
1. Walks the content directory (default: resources/)
2. Parses resource documents and category descriptions
3. Prints a summary of categories, subcategories and resources
4. Optionally dumps the catalog as JSON or runs a search

Usage:
    python -m catalog.cli
    python -m catalog.cli --content-dir path/to/resources --json
    python -m catalog.cli --search tracker
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from retrieval import CatalogIndex

from .builder import CatalogBuilder

DEFAULT_CONTENT_DIR = Path("resources")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the resource catalog from markdown documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Summarize the default content tree
    catalog-build

    # Dump the full catalog as JSON
    catalog-build --content-dir resources --json

    # Search the catalog
    catalog-build --search "ammo"
        """
    )

    parser.add_argument(
        "--content-dir",
        type=Path,
        default=DEFAULT_CONTENT_DIR,
        help=f"Root directory of resource documents (default: {DEFAULT_CONTENT_DIR})"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the whole catalog as JSON instead of a summary"
    )

    parser.add_argument(
        "--search",
        metavar="QUERY",
        help="Print resources matching QUERY"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        data = CatalogBuilder(args.content_dir).build()
    except OSError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(data.to_dict(), indent=2, ensure_ascii=False))
        return 0

    subcategory_count = sum(len(category.subcategories) for category in data.categories)

    print("\n" + "=" * 70)
    print("Resource Catalog")
    print("=" * 70)
    print(f"  Content: {args.content_dir}")
    print(f"  Categories: {len(data.categories)}")
    print(f"  Subcategories: {subcategory_count}")
    print(f"  Resources: {data.total_resources}")

    for category in data.categories:
        print(f"\n{category.name} ({category.slug}) - {category.resource_count} resources")
        if args.verbose and category.description:
            print(f"  {category.description}")
        for subcategory in category.subcategories:
            print(f"  • {subcategory.name}: {len(subcategory.resources)}")

    if args.search is not None:
        results = CatalogIndex(data).search(args.search)
        print("\n" + "=" * 70)
        print(f"Search '{args.search}': {len(results)} result(s)")
        print("=" * 70)
        for result in results:
            print(f"  • {result.resource.name} [{result.category} > {result.subcategory}]")
            print(f"    {result.resource.url}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
