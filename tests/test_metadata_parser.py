"""Tests for category description parsing."""

import pytest

from catalog import MetadataError, parse_category_description, parse_front_matter
from catalog.metadata_parser import extract_description


class TestParseFrontMatter:
    """Tests for parse_front_matter."""

    def test_block_and_body(self):
        meta, body = parse_front_matter(["---", "title: Maps", "description: All maps", "---", "", "Body"])
        assert meta == {"title": "Maps", "description": "All maps"}
        assert body == ["", "Body"]

    def test_leading_blank_lines(self):
        meta, _ = parse_front_matter(["", "---", "description: x", "---"])
        assert meta == {"description": "x"}

    def test_no_block(self):
        meta, body = parse_front_matter(["# Maps", "text"])
        assert meta is None
        assert body == ["# Maps", "text"]

    def test_value_with_colon(self):
        meta, _ = parse_front_matter(["---", "description: Maps: all of them", "---"])
        assert meta["description"] == "Maps: all of them"

    def test_unclosed_block_raises(self):
        with pytest.raises(MetadataError):
            parse_front_matter(["---", "description: never closed"])


class TestExtractDescription:
    """Tests for extract_description."""

    @pytest.mark.parametrize("value, expected", [
        ('"Quoted maps"', "Quoted maps"),
        ("'Single quoted'", "Single quoted"),
        ("Bare value", "Bare value"),
    ])
    def test_description_key(self, value, expected):
        lines = ["---", f"description: {value}", "---", "", "Body line"]
        assert extract_description(lines) == expected

    def test_falls_back_to_first_body_line(self):
        lines = ["---", "title: Maps", "---", "", "   ", "  First body line  ", "Second"]
        assert extract_description(lines) == "First body line"

    def test_no_block_uses_first_line(self):
        assert extract_description(["", "Tools for every raid."]) == "Tools for every raid."

    def test_malformed_block_is_empty(self):
        assert extract_description(["---", "description: unterminated", "more"]) == ""

    def test_empty_document(self):
        assert extract_description([]) == ""
        assert extract_description(["---", "title: Only", "---"]) == ""


class TestParseCategoryDescription:
    """Tests for parse_category_description."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "_category.md"
        path.write_text('---\ndescription: "Tools and trackers."\n---\n', encoding="utf-8")
        assert parse_category_description(path) == "Tools and trackers."

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            parse_category_description(tmp_path / "_category.md")
