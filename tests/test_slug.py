"""Tests for slug normalization."""

import re

import pytest

from catalog import slugify

SLUG_PATTERN = re.compile(r'^([a-z0-9]+(-[a-z0-9]+)*)?$')


class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize("text, expected", [
        ("Map Genie", "map-genie"),
        ("  Tools  ", "tools"),
        ("Ammo Charts & Tables", "ammo-charts-tables"),
        ("--Quest__Tracker--", "quest-tracker"),
        ("EFT: 12.12 Patch", "eft-12-12-patch"),
        ("Überkarte", "berkarte"),
        ("", ""),
        ("!!!", ""),
    ])
    def test_known_values(self, text, expected):
        assert slugify(text) == expected

    @pytest.mark.parametrize("text", [
        "Map Genie", " Interactive  Maps ", "a--b", "Ammo/Chart (v2)", "", "---", "Zoë's Tools",
    ])
    def test_idempotent(self, text):
        """Normalizing an existing slug leaves it unchanged."""
        once = slugify(text)
        assert slugify(once) == once

    @pytest.mark.parametrize("text", [
        "-Leading", "Trailing-", "  spaced  out  ", "MiXeD CaSe 42", "tabs\tand\nnewlines",
    ])
    def test_output_alphabet(self, text):
        """Only lowercase alphanumerics with internal single hyphens."""
        assert SLUG_PATTERN.match(slugify(text))
