"""
Pytest fixtures for the tuple_mapping test suite.

Provides:
- Logging state reset between tests
- An in-memory SQLite engine with a table of typed columns, for tests that
  map real SQLAlchemy result rows
"""

from datetime import date, datetime, time
from typing import Generator

import pytest
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Time,
    create_engine,
)
from sqlalchemy.engine import Engine

from tuple_mapping.logging_config import LogContext, reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def metadata() -> MetaData:
    return MetaData()


@pytest.fixture
def orders_table(metadata: MetaData) -> Table:
    return Table(
        "orders",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("customer", String(50), nullable=False),
        Column("amount_cents", Integer),
        Column("placed_on", Date),
        Column("placed_at", DateTime),
        Column("cutoff", Time),
    )


ORDER_ROWS = [
    {
        "id": 1,
        "customer": "ACME",
        "amount_cents": 12550,
        "placed_on": date(2024, 6, 15),
        "placed_at": datetime(2024, 6, 15, 9, 30, 0),
        "cutoff": time(17, 0, 0),
    },
    {
        "id": 2,
        "customer": "Globex",
        "amount_cents": None,
        "placed_on": None,
        "placed_at": datetime(2024, 1, 1, 23, 59, 59),
        "cutoff": None,
    },
]


@pytest.fixture
def sqlite_engine(metadata: MetaData, orders_table: Table) -> Generator[Engine, None, None]:
    """In-memory SQLite database with the orders table populated."""
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(orders_table.insert(), ORDER_ROWS)
    yield engine
    engine.dispose()
