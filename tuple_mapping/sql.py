"""
SQLAlchemy helpers: execute a statement and map its result rows.

Rows are positional, so the marked positions refer to the order of the
selected columns.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.engine import Connection
from sqlalchemy.sql.expression import Executable
from sqlalchemy.orm import Session

from tuple_mapping.config import MappingConfig
from tuple_mapping.engine import map_rows
from tuple_mapping.logging_config import get_logger

logger = get_logger("sql")

T = TypeVar("T")


def fetch_all(
    bind: Connection | Session,
    statement: Executable,
    target_type: type[T],
    *,
    params: dict[str, Any] | None = None,
    strict: bool = False,
    config: MappingConfig | None = None,
) -> list[T]:
    """Execute ``statement`` and map every row to ``target_type``."""
    result = bind.execute(statement, params or {})
    mapped = list(map_rows(result, target_type, strict=strict, config=config))
    logger.debug(
        "rows_mapped",
        extra={"target_type": target_type, "row_count": len(mapped), "strict": strict},
    )
    return mapped


def fetch_one(
    bind: Connection | Session,
    statement: Executable,
    target_type: type[T],
    *,
    params: dict[str, Any] | None = None,
    strict: bool = False,
    config: MappingConfig | None = None,
) -> T | None:
    """Execute ``statement`` and map its first row, or return ``None`` when empty."""
    row = bind.execute(statement, params or {}).first()
    if row is None:
        return None
    return next(map_rows([row], target_type, strict=strict, config=config))
