"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from inline_table.markup.engine import TransformationContext
from inline_table.table.cache import InMemoryOverflowCache
from inline_table.table.macro import build_engine

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture
def cache():
    return InMemoryOverflowCache()


@pytest.fixture
def engine(cache):  # pylint: disable=redefined-outer-name
    """A markup engine with the inline-table macro registered against the test cache."""
    return build_engine(cache)


@pytest.fixture
def context():
    return TransformationContext()
