"""Shared configuration for the inline-table pipeline.

Values come from the process environment (optionally seeded from a ``.env``
file at the project root) and fall back to the defaults below.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# ─── Date Formats ─────────────────────────────────────────────────────────────

# Separator used when date formats are given as a single string
DATE_FORMATS_SEPARATOR = os.getenv("INLINE_TABLE_DATE_FORMATS_SEPARATOR", ",")

# Ordered strptime patterns; the first one is also handed to the date filter
DEFAULT_DATE_FORMATS: list[str] = [
    fmt.strip()
    for fmt in os.getenv("INLINE_TABLE_DATE_FORMATS", "%Y/%m/%d %H:%M,%Y/%m/%d").split(DATE_FORMATS_SEPARATOR)
    if fmt.strip()
]

# Locale used for month/day names during date parsing (None = process locale)
DATE_LOCALE: str | None = os.getenv("INLINE_TABLE_LOCALE") or None

# ─── Payload & Rendering ─────────────────────────────────────────────────────

# Encoded payloads longer than this are moved into the overflow cache
INLINE_PAYLOAD_LIMIT = 180

# Inline tables nested inside cells deeper than this abort the render
MAX_NESTING_DEPTH = int(os.getenv("INLINE_TABLE_MAX_NESTING_DEPTH", "8"))

DEFAULT_TARGET_SYNTAX = "html/5.0"

# Optional JSON file backing the overflow cache (in-memory when unset)
CACHE_FILE: Path | None = Path(os.environ["INLINE_TABLE_CACHE_FILE"]) if os.getenv("INLINE_TABLE_CACHE_FILE") else None

# ─── Web Server ──────────────────────────────────────────────────────────────

HOST = os.getenv("INLINE_TABLE_HOST", "0.0.0.0")
PORT = int(os.getenv("INLINE_TABLE_PORT", "8000"))


def split_date_formats(raw: str | None, separator: str = DATE_FORMATS_SEPARATOR) -> list[str]:
    """Split a separator-joined format string, falling back to DEFAULT_DATE_FORMATS when blank."""
    if raw is None or not raw.strip():
        return list(DEFAULT_DATE_FORMATS)
    return [fmt.strip() for fmt in raw.split(separator) if fmt.strip()]
