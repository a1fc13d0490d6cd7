"""Default configuration of the inline-table data source.

The frontend merges this over its own configuration: pagination controls
are turned off because the whole table is delivered at once, and entries
are identified by the ``_inline_id`` property the query evaluator adds.
"""

import copy

from inline_table.table.patterns import ID_PROPERTY

# Page size large enough that every table fits on one page
SINGLE_PAGE_SIZE = 1000000


def source_configuration() -> dict:
    """Return the source's default configuration."""
    return {
        "meta": {
            "pagination": {
                "showPageSizeDropdown": False,
                "showEntryRange": False,
                "showNextPrevious": False,
                "showFirstLast": False,
                "pageSizes": [SINGLE_PAGE_SIZE],
                "maxShownPages": 1,
            },
            "entryDescriptor": {"idProperty": ID_PROPERTY},
        }
    }


def deep_merge(base: dict, override: dict) -> dict:
    """Merge *override* into a copy of *base*, recursing into nested dicts; *override* wins."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_configuration(config: dict | None = None) -> dict:
    """Apply the source defaults on top of a frontend-supplied configuration."""
    return deep_merge(config or {}, source_configuration())
