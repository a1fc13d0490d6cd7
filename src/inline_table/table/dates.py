"""Ordered date-format parsing used by type inference and timestamp derivation.

Formats are strptime patterns tried in configured order; the first one that
accepts the text wins.  A failure to parse is expected and never raised.
"""

import locale
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import NamedTuple

logger = logging.getLogger(__name__)

# setlocale is process-wide, so switching it is serialised
_LOCALE_LOCK = threading.Lock()


class ParsedDate(NamedTuple):
    """A successful parse: the matching format, the re-formatted text, and epoch seconds."""

    date_format: str
    formatted: str
    timestamp: int


@contextmanager
def _time_locale(locale_name: str | None):
    """Temporarily switch LC_TIME so month and day names follow *locale_name*."""
    if not locale_name:
        yield
        return
    with _LOCALE_LOCK:
        previous = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, locale_name)
        except locale.Error:
            logger.warning("Locale %s is not available, using %s", locale_name, previous)
        try:
            yield
        finally:
            locale.setlocale(locale.LC_TIME, previous)


def parse_date(text: str, formats: list[str], locale_name: str | None = None) -> ParsedDate | None:
    """Parse *text* with the first matching format, or return None when none match.

    Naive datetimes are interpreted in local time, so the timestamp of
    '2024/01/02' is midnight local time on that day.
    """
    value = text.strip()
    if not value:
        return None

    with _time_locale(locale_name):
        for date_format in formats:
            try:
                parsed = datetime.strptime(value, date_format)
            except ValueError:
                logger.debug("Failed to parse %r using format %s", value, date_format)
                continue
            return ParsedDate(date_format, parsed.strftime(date_format), int(parsed.timestamp()))
    return None
