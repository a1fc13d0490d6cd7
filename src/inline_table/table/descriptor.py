"""Transport descriptor handed to the query frontend.

The descriptor names the columns (with their displayers and filters), the
data source and payload reference to query, and turns off pagination
controls since the whole dataset is delivered at once.
"""

import json
import logging

from inline_table.table.patterns import SOURCE_ID
from inline_table.table.schema import Column, ColumnType, RecordSet

logger = logging.getLogger(__name__)

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10


def property_descriptors(columns: list[Column], formats: list[str]) -> list[dict]:
    """Describe each column; Date columns get the html displayer and a date filter."""
    descriptors: list[dict] = []
    for column in columns:
        logger.debug("Setting property descriptor for field %d: %s", column.index, column.name)
        descriptor = {
            "id": str(column.index),
            "name": column.name,
            "sortable": True,
            "filterable": True,
        }
        if column.type is ColumnType.DATE:
            logger.debug("Field %s is a date, using html displayer and date filter", column.name)
            descriptor["displayer"] = "html"
            descriptor["filter"] = {"id": "date", "dateFormat": formats[0]}
        descriptors.append(descriptor)
    return descriptors


def build_descriptor(record_set: RecordSet, reference: str, formats: list[str]) -> dict:
    """Assemble the full descriptor for a record set whose payload is *reference*."""
    return {
        "query": {
            "properties": [str(column.index) for column in record_set.columns],
            "source": {"id": SOURCE_ID, "entries": reference},
            "offset": DEFAULT_OFFSET,
            "limit": DEFAULT_LIMIT,
        },
        "meta": {
            "propertyDescriptors": property_descriptors(record_set.columns, formats),
            "defaultDisplayer": "html",
            "pagination": {"showEntryRange": False, "showNextPrevious": False, "showFirstLast": False},
        },
    }


def descriptor_json(descriptor: dict) -> str:
    return json.dumps(descriptor, separators=(",", ":"))
