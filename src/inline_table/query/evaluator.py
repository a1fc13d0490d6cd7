"""Query-time resolution and filtering of inline table payloads.

Resolves a payload reference (inline payload or overflow-cache digest),
decodes it back into entries, and keeps the entries that every filter
constraint accepts.  Constraints on column ``i`` are matched against the
plain-text value ``text.i`` when the entry has one, so markup in the rich
value never affects filtering.
"""

import logging

from inline_table.query.schema import FilterConstraint, QueryRequest, QueryResult
from inline_table.table.cache import OverflowCache
from inline_table.table.codec import decode_entries, resolve_reference
from inline_table.table.patterns import ID_PROPERTY, TEXT_PREFIX

logger = logging.getLogger(__name__)


def matches(value: str, operator: str, expected: str) -> bool:
    """Apply one operator; anything other than startsWith/equals means case-insensitive contains."""
    if operator == "startsWith":
        return value.lower().startswith(expected.lower())
    if operator == "equals":
        return value == expected
    return expected.lower() in value.lower()


def _field_value(entry: dict, prop: str) -> str | None:
    """The value a constraint on *prop* is matched against, or None when the entry lacks the field."""
    if not prop.startswith(TEXT_PREFIX) and f"{TEXT_PREFIX}{prop}" in entry:
        return str(entry[f"{TEXT_PREFIX}{prop}"])
    if prop in entry:
        return str(entry[prop])
    return None


def accepts(entry: dict, constraints: list[FilterConstraint]) -> bool:
    """True if no constraint rejects *entry*; constraints on absent fields are skipped."""
    for constraint in constraints:
        value = _field_value(entry, constraint.property)
        if value is None:
            continue
        if not matches(value, constraint.operator, str(constraint.value)):
            return False
    return True


class QueryEvaluator:
    """Answer filtered queries against payload references."""

    def __init__(self, cache: OverflowCache):
        self.cache = cache

    def evaluate(self, reference: str, constraints: list[FilterConstraint] | None = None) -> QueryResult:
        """Return the entries of *reference* accepted by all *constraints*."""
        constraints = constraints or []
        entries = decode_entries(resolve_reference(reference, self.cache))

        results: list[dict] = []
        for position, entry in enumerate(entries):
            if accepts(entry, constraints):
                results.append({**entry, ID_PROPERTY: str(position)})

        logger.debug("Query kept %d of %d entries (%d constraints)", len(results), len(entries), len(constraints))
        return QueryResult(count=len(results), entries=results)

    def run(self, request: QueryRequest) -> QueryResult:
        """Evaluate a full query request; offset and limit are not applied."""
        logger.debug("Ignoring offset=%d limit=%d, returning the whole filtered set", request.offset, request.limit)
        return self.evaluate(request.entries, request.filters)
