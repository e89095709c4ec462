"""Shared fixtures for catalog tests."""

import pytest

from catalog import build_catalog


def write_resource(directory, filename, name=None, links=(), category=None,
                   description=None, details=None):
    """Write a resource markdown document and return its path."""
    lines = []
    if name is not None:
        lines.append(f"# {name}")
        lines.append("")
    for label, url in links:
        lines.append(f"**Website:** [{label}]({url})")
    if category is not None:
        lines.append(f"**Category:** {category}")
    lines.append("")
    if description is not None:
        lines.append("## Overview")
        lines.append("")
        lines.append(description)
        lines.append("")
    if details:
        lines.append("## Details")
        lines.append("")
        lines.append("| Key | Value |")
        lines.append("|-----|-------|")
        for key, value in details.items():
            lines.append(f"| **{key}** | {value} |")
        lines.append("")
        lines.append("---")

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    """Create a small content tree with known categories and resources."""
    root = tmp_path / "resources"

    maps = root / "maps"
    maps.mkdir(parents=True)
    (maps / "_category.md").write_text(
        "---\n"
        "title: Maps\n"
        'description: "Interactive and static maps for every location."\n'
        "---\n"
        "\n"
        "Ignored body text.\n",
        encoding="utf-8",
    )
    write_resource(
        maps, "map-genie.md",
        name="Map Genie",
        links=[("https://mapgenie.io/tarkov", "https://mapgenie.io/tarkov")],
        category="Maps > Interactive Maps",
        description="Interactive maps with loot and extracts.",
        details={"Platform": "Web", "Audience": "All players", "Price": "Free"},
    )
    write_resource(
        maps, "customs-static.md",
        name="Customs Static Map",
        links=[("Image", "https://maps.example/customs.png")],
        category="Maps > Static Maps",
        description="High resolution static map of Customs.",
        details={"Platform": "Image"},
    )

    tools = root / "tools"
    write_resource(
        tools, "tarkov-tracker.md",
        name="Tarkov Tracker",
        links=[("Site", "https://a.example"), ("Alt", "https://b.example")],
        category="Tools > Trackers",
        description="Track quests and hideout progress.",
        details={"Platform": "Web", "Audience": "Quest grinders", "Price": "Free"},
    )
    write_resource(
        tools, "ammo-chart.md",
        name="Ammo Chart",
        links=[("Chart", "https://ammo.example")],
        category="Tools > Charts",
        description="Penetration and damage for every round.",
        details={"Platform": "Desktop"},
    )
    write_resource(
        tools, "hideout-helper.md",
        name="Hideout Helper",
        links=[("Site", "https://hideout.example")],
        category="Tools > Trackers",
        description="Plan hideout upgrades.",
    )

    # No category line: lands in Uncategorized > General
    write_resource(
        root, "loose.md",
        name="Loose Notes",
        links=[("Notes", "https://notes.example")],
        description="Community notes without a home.",
    )

    # Neither heading nor link: skipped
    (root / "draft.md").write_text("Just some draft text.\n", encoding="utf-8")
    # Not a content document
    (root / "README.txt").write_text("# Not a resource\n", encoding="utf-8")

    return root


@pytest.fixture
def site_data(content_dir):
    """Catalog built from the sample content tree."""
    return build_catalog(content_dir)
