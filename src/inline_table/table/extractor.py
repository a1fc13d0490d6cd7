"""Table tree to RecordSet extraction.

Walks a table's rows and cells, renders each cell twice (plain text for
typing and filtering, rich markup for display), detects an inline heading
row, and derives timestamps for Date columns.  Any failure of the markup
collaborator aborts the whole table; no partial RecordSet is returned.
"""

import logging
from contextlib import contextmanager

from bs4 import Tag

from inline_table.errors import RenderingFailure
from inline_table.markup.engine import MarkupEngine, TransformationContext
from inline_table.table.attributes import read_cell_attributes, rewrite_for_display
from inline_table.table.dates import parse_date
from inline_table.table.inference import infer_column_types
from inline_table.table.schema import Cell, Column, ColumnType, RecordSet

logger = logging.getLogger(__name__)


@contextmanager
def _rendering_step(description: str):
    """Turn any collaborator error raised inside the block into a RenderingFailure."""
    try:
        yield
    except RenderingFailure:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise RenderingFailure(f"Failed to {description}: {exc}") from exc


class TableExtractor:
    """Build a RecordSet from a table element using a markup engine."""

    def __init__(self, engine: MarkupEngine, formats: list[str], locale_name: str | None = None):
        self.engine = engine
        self.formats = formats
        self.locale_name = locale_name

    def render_plain(self, cell: Tag) -> str:
        with _rendering_step("render cell as text"):
            return self.engine.render_plain_text(cell)

    def render_rich(self, cell: Tag, context: TransformationContext) -> str:
        """Render a cell for display: rewritten attributes, transformed content, target syntax."""
        attributes = rewrite_for_display(read_cell_attributes(cell))
        group = self.engine.new_element("div", attributes.as_html_attrs(), cell.contents)

        # The cell may itself contain an inline-table macro call
        with _rendering_step("transform cell content"):
            self.engine.run_transformations(group, context)
        with _rendering_step(f"render cell as {context.target_syntax}"):
            return self.engine.render_rich(group, context.target_syntax)

    def derive_timestamp(self, text: str) -> int | None:
        """Epoch seconds of the first format matching *text*, or None."""
        parsed = parse_date(text, self.formats, self.locale_name)
        if parsed is None:
            return None
        logger.debug("Parsed date %s (unix timestamp %d)", parsed.formatted, parsed.timestamp)
        return parsed.timestamp

    def extract(self, table: Tag, context: TransformationContext) -> RecordSet:
        """Extract the typed columns and records of *table*."""
        rows = [self.engine.cells(row) for row in self.engine.rows(table)]
        column_count = max((len(row) for row in rows), default=0)
        logger.debug("Detected %d rows and %d columns", len(rows), column_count)

        with _rendering_step("render cell as text"):
            types = infer_column_types(
                rows, column_count, self.engine.render_plain_text, self.engine.is_header_cell, self.formats, self.locale_name
            )
        names = [str(i) for i in range(column_count)]

        records: list[dict[int, Cell]] = []
        inline_heading = False
        for row_idx, row in enumerate(rows):
            record: dict[int, Cell] = {}
            for i, cell in enumerate(row):
                plain = self.render_plain(cell)
                if row_idx == 0 and self.engine.is_header_cell(cell):
                    names[i] = plain
                    inline_heading = True
                    logger.debug("Detected inline heading: %s", plain)

                timestamp = self.derive_timestamp(plain) if types[i] is ColumnType.DATE else None
                record[i] = Cell(rich=self.render_rich(cell, context), plain=plain, timestamp=timestamp)
            records.append(record)

        if inline_heading:
            logger.debug("Removing the first row because it is a heading")
            records.pop(0)

        columns = [Column(index=i, name=names[i], type=types[i]) for i in range(column_count)]
        return RecordSet(columns=columns, records=records)
