"""Unit tests for the configuration module."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from inline_table.config import DEFAULT_DATE_FORMATS, INLINE_PAYLOAD_LIMIT, ROOT, split_date_formats


class TestSplitDateFormats:

    def test_splits_on_separator(self):
        assert split_date_formats("%Y-%m-%d;%d.%m.%Y", ";") == ["%Y-%m-%d", "%d.%m.%Y"]

    def test_strips_and_drops_empty_parts(self):
        assert split_date_formats(" %Y , ,%m ", ",") == ["%Y", "%m"]

    def test_blank_uses_defaults(self):
        assert split_date_formats("") == DEFAULT_DATE_FORMATS
        assert split_date_formats(None) == DEFAULT_DATE_FORMATS

    def test_defaults_are_a_copy(self):
        split_date_formats(None).append("%H")
        assert "%H" not in DEFAULT_DATE_FORMATS


class TestConstants:

    def test_inline_limit(self):
        assert INLINE_PAYLOAD_LIMIT == 180

    def test_root_is_project_root(self):
        """ROOT should point to the project root (contains pyproject.toml)."""
        assert (ROOT / "pyproject.toml").exists()
