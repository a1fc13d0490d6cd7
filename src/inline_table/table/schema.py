"""Pydantic models for the extracted, typed table.

A RecordSet is built once per table by the extractor and is not mutated
afterwards.  ``RecordSet.entries()`` flattens it into the dict layout that
the payload codec serializes and the query evaluator filters:

    "<i>"       rendered rich value of column i
    "text.<i>"  plain-text value of column i
    "date.<i>"  epoch seconds, only for Date columns whose value parsed
"""

from enum import Enum

from pydantic import BaseModel, Field

from inline_table.table.patterns import DATE_PREFIX, TEXT_PREFIX


class ColumnType(str, Enum):
    """Semantic type of a column."""

    STRING = "String"
    DATE = "Date"


class Column(BaseModel):
    """A column of the extracted table."""

    index: int
    name: str
    type: ColumnType = ColumnType.STRING


class Cell(BaseModel):
    """Both renderings of one cell, plus the derived timestamp for Date columns."""

    rich: str
    plain: str
    timestamp: int | None = None


class RecordSet(BaseModel):
    """Columns and rows of a single source table."""

    columns: list[Column]
    records: list[dict[int, Cell]] = Field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    @property
    def column_types(self) -> list[ColumnType]:
        return [column.type for column in self.columns]

    def entries(self) -> list[dict]:
        """Flatten every record into the serialized entry layout."""
        result: list[dict] = []
        for record in self.records:
            entry: dict = {}
            for index, cell in sorted(record.items()):
                entry[str(index)] = cell.rich
                entry[f"{TEXT_PREFIX}{index}"] = cell.plain
                if cell.timestamp is not None:
                    entry[f"{DATE_PREFIX}{index}"] = cell.timestamp
            result.append(entry)
        return result


class CellAttributes(BaseModel):
    """Attributes of a table cell, with style and class broken out."""

    style: str | None = None
    css_class: str = ""
    other: dict[str, str] = Field(default_factory=dict)

    def as_html_attrs(self) -> dict[str, str]:
        """Return the attributes as a flat mapping suitable for a markup element."""
        attrs = dict(self.other)
        if self.css_class:
            attrs["class"] = self.css_class
        if self.style is not None:
            attrs["style"] = self.style
        return attrs
