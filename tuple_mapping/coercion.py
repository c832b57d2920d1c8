"""
Temporal coercion rules for field assignment.

Each rule pairs a target field type and a source predicate with a
converter. Rules are evaluated in order; the first match wins. When no
rule matches the result is an explicit "unchanged" ``CoercionResult``,
never an error.

Aware datetimes are normalized to the configured zone (system local when
none) before a date or time of day is taken from them. Naive datetimes are
treated as already local.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Any


@dataclass(frozen=True)
class CoercionResult:
    """Outcome of trying to coerce a value to a field type."""

    success: bool
    value: Any = None
    rule: str | None = None


UNCHANGED = CoercionResult(success=False)


@dataclass(frozen=True)
class CoercionRule:
    name: str
    target: type
    accepts: Callable[[Any], bool]
    convert: Callable[[Any, tzinfo | None], Any]


def _local(value: datetime, tz: tzinfo | None) -> datetime:
    if value.utcoffset() is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def _to_date(value: date, tz: tzinfo | None) -> date:
    if isinstance(value, datetime):
        value = _local(value, tz)
    return date(value.year, value.month, value.day)


def _to_datetime(value: date, tz: tzinfo | None) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    local = _local(value, tz)
    return datetime(
        local.year, local.month, local.day,
        local.hour, local.minute, local.second, local.microsecond,
        fold=local.fold,
    )


def _to_time(value: datetime | time, tz: tzinfo | None) -> time:
    if isinstance(value, datetime):
        value = _local(value, tz)
    return time(value.hour, value.minute, value.second, value.microsecond, fold=value.fold)


COERCION_RULES: tuple[CoercionRule, ...] = (
    CoercionRule(
        name="date",
        target=date,
        accepts=lambda v: isinstance(v, date),
        convert=_to_date,
    ),
    CoercionRule(
        name="datetime",
        target=datetime,
        accepts=lambda v: isinstance(v, date),
        convert=_to_datetime,
    ),
    CoercionRule(
        name="time",
        target=time,
        accepts=lambda v: isinstance(v, (datetime, time)),
        convert=_to_time,
    ),
)


def coerce(
    value: Any,
    field_type: Any,
    tz: tzinfo | None = None,
    rules: tuple[CoercionRule, ...] = COERCION_RULES,
) -> CoercionResult:
    """
    Convert ``value`` for a field declared as ``field_type``. Pure function.

    Only the temporal conversions in ``rules`` exist; anything else comes
    back as ``UNCHANGED``.
    """
    for rule in rules:
        if rule.target is field_type and rule.accepts(value):
            return CoercionResult(success=True, value=rule.convert(value, tz), rule=rule.name)
    return UNCHANGED
