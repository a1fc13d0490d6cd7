"""Unit tests for TableExtractor: columns, inline headings, dual rendering, timestamps."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from datetime import datetime
from unittest.mock import patch

import pytest

from inline_table.errors import RenderingFailure
from inline_table.markup.engine import TransformationContext
from inline_table.table.extractor import TableExtractor
from inline_table.table.schema import ColumnType

FORMATS = ["%Y/%m/%d %H:%M", "%Y/%m/%d"]


@pytest.fixture
def extract(engine, context):
    """Return a callable(html, context=None) -> RecordSet for the first table in *html*."""
    extractor = TableExtractor(engine, FORMATS)

    def _extract(html: str, ctx: TransformationContext | None = None):
        table = engine.parse(html).find("table")
        return extractor.extract(table, ctx or context)

    return _extract


# ===========================================================================
# Column layout
# ===========================================================================


class TestColumns:

    def test_column_count_is_longest_row(self, extract):
        record_set = extract("<table><tr><td>a</td></tr><tr><td>b</td><td>c</td><td>d</td></tr></table>")
        assert len(record_set.columns) == 3
        assert [c.index for c in record_set.columns] == [0, 1, 2]

    def test_default_names_are_ordinals(self, extract):
        record_set = extract("<table><tr><td>a</td><td>b</td></tr></table>")
        assert record_set.column_names == ["0", "1"]

    def test_short_rows_lack_trailing_cells(self, extract):
        record_set = extract("<table><tr><td>a</td></tr><tr><td>b</td><td>c</td></tr></table>")
        assert set(record_set.records[0]) == {0}
        assert set(record_set.records[1]) == {0, 1}

    def test_rows_inside_tbody_and_thead(self, extract):
        html = "<table><thead><tr><th>H</th></tr></thead><tbody><tr><td>x</td></tr><tr><td>y</td></tr></tbody></table>"
        record_set = extract(html)
        assert record_set.column_names == ["H"]
        assert [r[0].plain for r in record_set.records] == ["x", "y"]

    def test_nested_table_rows_are_not_rows(self, extract):
        html = "<table><tr><td>outer<table><tr><td>i1</td><td>i2</td><td>i3</td></tr></table></td></tr></table>"
        record_set = extract(html)
        assert len(record_set.columns) == 1
        assert len(record_set.records) == 1

    def test_empty_table(self, extract):
        record_set = extract("<table></table>")
        assert record_set.columns == []
        assert record_set.records == []


# ===========================================================================
# Inline heading detection
# ===========================================================================


class TestInlineHeading:

    def test_header_row_names_columns_and_is_dropped(self, extract):
        html = "<table><tr><th>Name</th><th>Date</th></tr><tr><td>Bob</td><td>2024/01/02</td></tr></table>"
        record_set = extract(html)
        assert record_set.column_names == ["Name", "Date"]
        assert len(record_set.records) == 1
        assert record_set.column_types == [ColumnType.STRING, ColumnType.DATE]
        assert record_set.records[0][1].timestamp == int(datetime(2024, 1, 2).timestamp())
        assert record_set.records[0][0].timestamp is None

    def test_header_cells_after_first_row_are_data(self, extract):
        html = "<table><tr><td>a</td></tr><tr><th>b</th></tr></table>"
        record_set = extract(html)
        assert record_set.column_names == ["0"]
        assert [r[0].plain for r in record_set.records] == ["a", "b"]

    def test_partial_header_row_names_only_header_cells(self, extract):
        html = "<table><tr><th>Name</th><td>x</td></tr><tr><td>Bob</td><td>y</td></tr></table>"
        record_set = extract(html)
        assert record_set.column_names == ["Name", "1"]
        assert len(record_set.records) == 1


# ===========================================================================
# Dual rendering
# ===========================================================================


class TestCellRendering:

    def test_plain_and_rich_values(self, extract):
        html = '<table><tr><td class="x" style="width: 10px;color:red">Hi <b>there</b></td></tr></table>'
        cell = extract(html).records[0][0]
        assert cell.plain == "Hi there"
        assert cell.rich == '<div class="inline-table-cell x" style=";color:red">Hi <b>there</b></div>'

    def test_plain_text_collapses_whitespace(self, extract):
        cell = extract("<table><tr><td>\n  a \n b  </td></tr></table>").records[0][0]
        assert cell.plain == "a b"

    def test_source_table_is_not_modified(self, engine, context):
        soup = engine.parse('<table><tr><td style="width:1px">a</td></tr></table>')
        TableExtractor(engine, FORMATS).extract(soup.find("table"), context)
        assert soup.find("td")["style"] == "width:1px"

    def test_nested_macro_in_cell_is_transformed(self, extract):
        html = (
            "<table><tr><td>"
            '<div data-macro="inline-table"><table><tr><td>inner</td></tr></table></div>'
            "</td></tr></table>"
        )
        cell = extract(html).records[0][0]
        assert 'class="inline-table_macro"' in cell.rich
        assert "data-config" in cell.rich
        assert "<table>" not in cell.rich
        assert cell.plain == "inner"

    def test_nesting_deeper_than_limit_fails(self, extract):
        html = '<table><tr><td><div data-macro="inline-table"><table><tr><td>x</td></tr></table></div></td></tr></table>'
        with pytest.raises(RenderingFailure):
            extract(html, TransformationContext(max_depth=0))


# ===========================================================================
# Date columns
# ===========================================================================


class TestTimestamps:

    def test_unparseable_value_in_date_column_has_no_timestamp(self, extract):
        record_set = extract("<table><tr><td>2024/01/02 08:30</td></tr><tr><td>later</td></tr></table>")
        assert record_set.column_types == [ColumnType.DATE]
        assert record_set.records[0][0].timestamp == int(datetime(2024, 1, 2, 8, 30).timestamp())
        assert record_set.records[1][0].timestamp is None

    def test_string_columns_never_get_timestamps(self, extract):
        record_set = extract("<table><tr><td>x</td></tr><tr><td>2024/01/02</td></tr></table>")
        assert all(r[0].timestamp is None for r in record_set.records)

    def test_entries_layout(self, extract):
        html = "<table><tr><th>Name</th><th>Date</th></tr><tr><td>Bob</td><td>2024/01/02</td></tr></table>"
        entries = extract(html).entries()
        assert len(entries) == 1
        assert set(entries[0]) == {"0", "text.0", "1", "text.1", "date.1"}
        assert entries[0]["text.0"] == "Bob"
        assert entries[0]["date.1"] == int(datetime(2024, 1, 2).timestamp())


# ===========================================================================
# Failures
# ===========================================================================


class TestRenderingFailures:

    def test_unknown_target_syntax_aborts_table(self, extract):
        with pytest.raises(RenderingFailure):
            extract("<table><tr><td>a</td></tr></table>", TransformationContext(target_syntax="pdf/1.0"))

    def test_collaborator_error_is_wrapped(self, engine, extract):
        with patch.object(engine, "render_rich", side_effect=RuntimeError("boom")):
            with pytest.raises(RenderingFailure) as excinfo:
                extract("<table><tr><td>a</td></tr></table>")
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_plain_render_error_is_wrapped(self, engine, extract):
        with patch.object(engine, "render_plain_text", side_effect=ValueError("bad node")):
            with pytest.raises(RenderingFailure):
                extract("<table><tr><td>a</td></tr></table>")
