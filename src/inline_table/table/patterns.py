"""Compiled regex patterns and constant names shared by the table modules.

Used by attributes.py (cell rewriting), codec.py (reference detection),
descriptor.py and macro.py (wrapper/markers), and the query evaluator.
"""

import re

# ─── Cell Attribute Rewriting ────────────────────────────────────────────────

# A "width: ..." declaration at the start of a style or right after a ';'.
# Group 1 keeps the boundary character so other declarations survive.
WIDTH_STRIPPER_RE = re.compile(r"(^|;)(\s*width\s*:[^;]*)")

# Marker class prefixed to every rendered cell group
CELL_MARKER_CLASS = "inline-table-cell"

# ─── Wrapper / Macro Markup ──────────────────────────────────────────────────

MACRO_NAME = "inline-table"

# Class of the div that wraps the generated live data element
WRAPPER_CLASS = "inline-table_macro"

# Class of the element carrying the descriptor JSON
LIVEDATA_CLASS = "livedata"

# Identifier of the data source named in the descriptor's query block
SOURCE_ID = "inline-table"

# ─── Entry Layout ────────────────────────────────────────────────────────────

TEXT_PREFIX = "text."
DATE_PREFIX = "date."

# Entry property used by the frontend as the unique row id
ID_PROPERTY = "_inline_id"

# A payload reference that is a SHA-256 hex digest points into the cache
SHA256_HEX_RE = re.compile(r"^[0-9a-f]{64}$")
