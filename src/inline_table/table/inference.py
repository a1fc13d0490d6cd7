"""Per-column semantic type inference.

A column is Date when its first non-blank data cell parses under one of the
configured date formats, and String when it does not.  Once a column has
been decided it is not reconsidered, so the outcome depends on row order:
a later cell that contradicts the decision is ignored.  Header cells carry
labels, not data, and never take part.
"""

import logging
from typing import Callable, Sequence

from bs4 import Tag

from inline_table.table.dates import parse_date
from inline_table.table.schema import ColumnType

logger = logging.getLogger(__name__)


def infer_column_types(
    rows: Sequence[Sequence[Tag]],
    column_count: int,
    render_plain: Callable[[Tag], str],
    is_header: Callable[[Tag], bool],
    formats: list[str],
    locale_name: str | None = None,
) -> list[ColumnType]:
    """Return one ColumnType per column, defaulting to String."""
    logger.debug("Detecting the types of %d columns", column_count)
    types: list[ColumnType | None] = [None] * column_count

    for row in rows:
        for i, cell in enumerate(row):
            if is_header(cell) or types[i] is not None:
                continue

            text = render_plain(cell)
            # Blank cells carry no information about the column
            if not text.strip():
                continue

            parsed = parse_date(text, formats, locale_name)
            if parsed is not None:
                logger.debug("Parsed %r using %s, marking column %d as date", text, parsed.date_format, i)
                types[i] = ColumnType.DATE
            else:
                logger.debug("No date format matched %r, marking column %d as string", text, i)
                types[i] = ColumnType.STRING

    resolved = [column_type or ColumnType.STRING for column_type in types]
    logger.debug("Column types: %s", ", ".join(t.value for t in resolved))
    return resolved
