"""Pydantic models for query requests and responses."""

from typing import Any

from pydantic import BaseModel, Field


class FilterConstraint(BaseModel):
    """A per-column predicate; ``contains`` is the default operator."""

    property: str
    operator: str = "contains"
    value: Any = ""


class QueryRequest(BaseModel):
    """A query against one payload reference.

    ``offset`` and ``limit`` are accepted for compatibility with the query
    frontend but the full filtered set is always returned.
    """

    entries: str
    filters: list[FilterConstraint] = Field(default_factory=list)
    offset: int = 0
    limit: int = 10


class QueryResult(BaseModel):
    count: int
    entries: list[dict[str, Any]]
