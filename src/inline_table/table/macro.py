"""Inline-table macro: replaces authored tables with queryable live data.

Wiring for the whole build side of the pipeline.  For every top-level table
in the macro content the macro extracts a RecordSet, encodes its entries
into a payload reference, and emits a wrapper element whose descriptor
points the query frontend at that reference.

When rendering for the WYSIWYG editor (annotated target syntax) or for the
``get``/``edit`` actions, the content is returned as parsed so the author
keeps editing the underlying table.
"""

import logging

from bs4 import PageElement, Tag
from pydantic import BaseModel

from inline_table.config import DATE_FORMATS_SEPARATOR, DATE_LOCALE, split_date_formats
from inline_table.errors import RenderingFailure
from inline_table.markup.engine import MarkupEngine, TransformationContext
from inline_table.table.cache import OverflowCache, build_cache
from inline_table.table.codec import encode_entries, is_cache_reference, place_payload
from inline_table.table.descriptor import build_descriptor, descriptor_json
from inline_table.table.extractor import TableExtractor
from inline_table.table.patterns import LIVEDATA_CLASS, MACRO_NAME, WRAPPER_CLASS

logger = logging.getLogger(__name__)

# Actions that show the raw content instead of live data
_PASSTHROUGH_ACTIONS = ("get", "edit")


class MacroParameters(BaseModel):
    """Parameters of an inline-table macro call."""

    id: str | None = None
    date_formats: str | None = None
    date_formats_separator: str = DATE_FORMATS_SEPARATOR

    @classmethod
    def from_macro_attributes(cls, attributes: dict[str, str]) -> "MacroParameters":
        """Build from macro-call attributes such as ``date-formats``."""
        fields = {key.replace("-", "_"): value for key, value in attributes.items()}
        return cls(**{name: value for name, value in fields.items() if name in cls.model_fields})

    def resolved_date_formats(self) -> list[str]:
        """The configured formats, or the site defaults when none are given."""
        return split_date_formats(self.date_formats, self.date_formats_separator)


class InlineTableMacro:
    """Macro callable registered with a MarkupEngine."""

    def __init__(self, engine: MarkupEngine, cache: OverflowCache, locale_name: str | None = DATE_LOCALE):
        self.engine = engine
        self.cache = cache
        self.locale_name = locale_name

    def __call__(self, attributes: dict[str, str], content: str, context: TransformationContext) -> list[PageElement]:
        return self.execute(MacroParameters.from_macro_attributes(attributes), content, context)

    def execute(self, parameters: MacroParameters, content: str, context: TransformationContext) -> list[PageElement]:
        """Render the macro content, turning each top-level table into live data."""
        if context.depth > context.max_depth:
            raise RenderingFailure(f"Inline tables nested deeper than {context.max_depth} levels")

        root = self.engine.parse(content)
        if context.is_edit or context.action in _PASSTHROUGH_ACTIONS:
            logger.debug("Edit rendering (%s, %s), keeping the table as authored", context.target_syntax, context.action)
            return list(root.contents)

        formats = parameters.resolved_date_formats()
        logger.debug("Using the following date formats: %s", ", ".join(formats))
        extractor = TableExtractor(self.engine, formats, self.locale_name)

        for table in self.engine.top_level_tables(root):
            table.replace_with(self.transform_table(table, extractor, parameters, context))
        return list(root.contents)

    def transform_table(
        self, table: Tag, extractor: TableExtractor, parameters: MacroParameters, context: TransformationContext
    ) -> Tag:
        """Build the live data wrapper that replaces *table*."""
        record_set = extractor.extract(table, context)
        logger.debug("Found fields: %s", ",".join(record_set.column_names))
        logger.debug("Fields types: %s", ",".join(t.value for t in record_set.column_types))

        reference = place_payload(encode_entries(record_set.entries()), self.cache)
        descriptor = build_descriptor(record_set, reference, extractor.formats)
        logger.info(
            "Built inline table: %d columns, %d entries, %s payload",
            len(record_set.columns),
            len(record_set.records),
            "cached" if is_cache_reference(reference) else "inline",
        )

        attrs = {"class": LIVEDATA_CLASS, "data-config": descriptor_json(descriptor)}
        if parameters.id is not None:
            attrs["id"] = parameters.id
        livedata = self.engine.new_element("div", attrs)
        return self.engine.new_element("div", {"class": WRAPPER_CLASS}, [livedata])


def build_engine(cache: OverflowCache | None = None) -> MarkupEngine:
    """Return a MarkupEngine with the inline-table macro registered."""
    engine = MarkupEngine()
    engine.register_macro(MACRO_NAME, InlineTableMacro(engine, cache if cache is not None else build_cache()))
    return engine
