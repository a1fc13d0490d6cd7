"""FastAPI server exposing the inline-table render and query endpoints.

The render endpoint expands inline-table macro calls in a piece of markup,
and the query endpoint answers the frontend's filtered queries against the
payload references embedded in rendered pages.  Both share one overflow
cache so large payloads stored at render time resolve at query time.

Usage:
    python -m inline_table.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from inline_table.config import CACHE_FILE, DEFAULT_TARGET_SYNTAX, HOST, PORT
from inline_table.errors import InlineTableError, PayloadDecodeError, ReferenceNotFoundError
from inline_table.markup.engine import TransformationContext
from inline_table.query.evaluator import QueryEvaluator
from inline_table.query.schema import QueryRequest, QueryResult
from inline_table.query.source import resolve_configuration
from inline_table.table.cache import build_cache
from inline_table.table.macro import build_engine

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared state
# ---------------------------------------------------------------------------

_CACHE = build_cache(CACHE_FILE)
_ENGINE = build_engine(_CACHE)
_EVALUATOR = QueryEvaluator(_CACHE)


class RenderRequest(BaseModel):
    """Markup to render, possibly containing inline-table macro calls."""

    content: str
    target_syntax: str = DEFAULT_TARGET_SYNTAX
    action: str = "view"


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Inline Table Data")


@app.post("/api/render")
def render(body: RenderRequest) -> dict:
    """Expand inline-table macros in the submitted markup."""
    context = TransformationContext(target_syntax=body.target_syntax, action=body.action)
    try:
        html = _ENGINE.transform(body.content, context)
    except InlineTableError as exc:
        logger.exception("Failed to render inline table content")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"html": html}


@app.post("/api/query", response_model=QueryResult)
def query(body: QueryRequest) -> QueryResult:
    """Return the entries of a payload reference that pass every filter."""
    try:
        return _EVALUATOR.run(body)
    except ReferenceNotFoundError as exc:
        logger.warning("Query for unknown payload reference %s", exc.reference)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PayloadDecodeError as exc:
        logger.warning("Query with undecodable payload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/api/config")
def config() -> dict:
    """Return the data source configuration the frontend should merge in."""
    return resolve_configuration()


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
