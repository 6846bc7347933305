"""Tests for slug derivation."""

import pytest

from devnotes_mcp.utils import slugify, title_from_filename


class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Project Ideas", "project-ideas"),
            ("  Padded Title  ", "padded-title"),
            ("Hello, World!", "hello-world"),
            ("multiple   spaces\there", "multiple-spaces-here"),
            ("dash -- run", "dash-run"),
            ("already-a-slug", "already-a-slug"),
            ("snake_case_title", "snake_case_title"),
            ("Version 2.0 (draft)", "version-20-draft"),
            ("Café Notes", "caf-notes"),
            ("non\u00a0breaking space", "non-breaking-space"),
        ],
    )
    def test_known_titles(self, title, expected):
        assert slugify(title) == expected

    @pytest.mark.parametrize(
        "title",
        [
            "Project Ideas",
            "  --Leading and trailing--  ",
            "! bang first",
            "Tabs\tand\nnewlines",
            "中文标题 测试",
            "İstanbul trip",
            "a - - - b",
            "",
            "???",
        ],
    )
    def test_idempotent(self, title):
        once = slugify(title)
        assert slugify(once) == once

    def test_deterministic(self):
        assert slugify("Meeting Notes 2024") == slugify("Meeting Notes 2024")

    def test_titles_differing_in_case_and_punctuation_share_a_slug(self):
        assert slugify("Project Ideas") == slugify("project ideas!")

    def test_path_separators_are_removed(self):
        slug = slugify("../../etc/passwd")
        assert "/" not in slug
        assert "." not in slug

    def test_punctuation_only_titles_collapse_to_nothing_or_hyphen(self):
        assert slugify("???") == ""
        assert slugify("!!! ???") == "-"


class TestTitleFromFilename:
    """Tests for title_from_filename()."""

    def test_reverses_hyphens(self):
        assert title_from_filename("project-ideas.md") == "project ideas"

    def test_only_strips_trailing_extension(self):
        assert title_from_filename("notes.md-draft.md") == "notes.md draft"

    def test_custom_extension(self):
        assert title_from_filename("daily-log.txt", extension=".txt") == "daily log"
