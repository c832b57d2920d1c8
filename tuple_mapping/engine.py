"""
Mapping engine: positional values -> populated instances of a marked type.

Two entry points:

    map_to_value_type -- strict. Collects the marked values in declaration
        order and passes them to the one initializer whose parameter types
        match exactly. Every failure surfaces, nothing partial escapes.

    map_to_object -- best effort. Calls the no-argument initializer, then
        assigns each marked field whose value is present and either has
        exactly the declared type or can be coerced to it (temporal types
        only, see ``tuple_mapping.coercion``). Per-field mismatches and
        out-of-range positions leave the field at its default.

Both are stateless and safe to call concurrently.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Iterable, Iterator, Sequence
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin, get_type_hints

from tuple_mapping.coercion import coerce
from tuple_mapping.column import MappedField, mapped_fields
from tuple_mapping.config import DEFAULT_CONFIG, MappingConfig
from tuple_mapping.exceptions import (
    ConfigurationError,
    InitializerAccessError,
    InitializerInvocationError,
    InstantiationError,
    NoMatchingInitializerError,
    PositionOutOfBoundsError,
)
from tuple_mapping.logging_config import get_logger

logger = get_logger("engine")

T = TypeVar("T")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_VARIADIC = (
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
)


# -----------------------------------------------------------------------------
# Constructor-based construction
# -----------------------------------------------------------------------------


def map_to_value_type(
    values: Sequence[Any],
    target_type: type[T],
) -> T:
    """
    Build an immutable ``target_type`` by calling its initializer once.

    The leading positional parameters of the initializer must be the marked
    fields themselves: same names, same declared types, same order. Values
    are passed through untouched.

    Raises:
        PositionOutOfBoundsError: a marked position is past the end of ``values``.
        NoMatchingInitializerError: no initializer takes the marked fields
            in declaration order.
        InitializerAccessError: the initializer cannot be introspected.
        InstantiationError: ``target_type`` is abstract.
        InitializerInvocationError: the initializer itself raised.
    """
    fields = mapped_fields(target_type)
    field_types = tuple(f.field_type for f in fields)
    args = [_value_at(values, f, target_type) for f in fields]

    _check_instantiable(target_type)
    parameters = _initializer_parameters(target_type)
    if not _signature_matches(parameters, fields):
        logger.warning(
            "no_matching_initializer",
            extra={"target_type": target_type, "field_types": [repr(t) for t in field_types]},
        )
        raise NoMatchingInitializerError(target_type, field_types)

    return _invoke(target_type, args)


def _value_at(values: Sequence[Any], f: MappedField, target_type: type) -> Any:
    try:
        return values[f.position]
    except IndexError as exc:
        logger.warning(
            "position_out_of_bounds",
            extra={
                "target_type": target_type,
                "field_name": f.name,
                "position": f.position,
                "length": len(values),
            },
        )
        raise PositionOutOfBoundsError(target_type, f.name, f.position, len(values)) from exc


def _signature_matches(
    parameters: list[inspect.Parameter],
    fields: tuple[MappedField, ...],
) -> bool:
    positional = [p for p in parameters if p.kind in _POSITIONAL]
    if len(positional) < len(fields):
        return False
    for param, f in zip(positional, fields):
        if param.name != f.name:
            return False
        if param.annotation is inspect.Parameter.empty:
            return False
        if _strip_annotated(param.annotation) != f.field_type:
            return False
    # Whatever is left over must be optional
    leftover = positional[len(fields):] + [
        p for p in parameters if p.kind is inspect.Parameter.KEYWORD_ONLY
    ]
    return all(p.default is not inspect.Parameter.empty for p in leftover)


# -----------------------------------------------------------------------------
# Field-assignment construction
# -----------------------------------------------------------------------------


def map_to_object(
    values: Sequence[Any],
    target_type: type[T],
    *,
    config: MappingConfig | None = None,
) -> T:
    """
    Build ``target_type`` with its no-argument initializer, then assign fields.

    Marked fields are assigned directly (frozen dataclass guards are
    bypassed). Values that are missing, ``None``, or of a type that is
    neither an exact match nor coercible leave the field untouched.

    Raises:
        NoMatchingInitializerError: the initializer has required parameters.
        InitializerAccessError: the initializer cannot be introspected.
        InstantiationError: ``target_type`` is abstract or a tuple type.
        InitializerInvocationError: the initializer itself raised.
    """
    if issubclass(target_type, tuple):
        raise InstantiationError(target_type, "tuple types cannot be assigned field by field")
    _check_instantiable(target_type)
    parameters = _initializer_parameters(target_type)
    if any(p.default is inspect.Parameter.empty for p in parameters if p.kind not in _VARIADIC):
        raise NoMatchingInitializerError(target_type, ())
    instance = _invoke(target_type, [])

    tz = (config or DEFAULT_CONFIG).tzinfo
    for f in mapped_fields(target_type):
        if f.position >= len(values):
            logger.debug(
                "field_skipped_out_of_range",
                extra={"target_type": target_type, "field_name": f.name, "position": f.position},
            )
            continue
        value = values[f.position]
        if value is None:
            continue

        field_type = _unwrap_optional(f.field_type)
        if type(value) is field_type:
            _assign(instance, f, value, target_type)
            continue

        result = coerce(value, field_type, tz)
        if result.success:
            if _assign(instance, f, result.value, target_type):
                logger.debug(
                    "field_coerced",
                    extra={"target_type": target_type, "field_name": f.name, "rule": result.rule},
                )
        else:
            logger.debug(
                "field_skipped_type_mismatch",
                extra={
                    "target_type": target_type,
                    "field_name": f.name,
                    "value_type": type(value),
                },
            )
    return instance


def _assign(instance: Any, f: MappedField, value: Any, target_type: type) -> bool:
    # Read-only properties and missing slots leave the field at its default
    try:
        object.__setattr__(instance, f.name, value)
    except (AttributeError, TypeError) as exc:
        logger.debug(
            "field_skipped_unassignable",
            extra={"target_type": target_type, "field_name": f.name, "cause": repr(exc)},
        )
        return False
    return True


# -----------------------------------------------------------------------------
# Rows
# -----------------------------------------------------------------------------


def map_rows(
    rows: Iterable[Sequence[Any]],
    target_type: type[T],
    *,
    strict: bool = False,
    config: MappingConfig | None = None,
) -> Iterator[T]:
    """
    Lazily map each row, with ``map_to_value_type`` if ``strict`` else ``map_to_object``.

    ``config`` only affects the non-strict path, which is the one that coerces.
    """
    for row in rows:
        if strict:
            yield map_to_value_type(row, target_type)
        else:
            yield map_to_object(row, target_type, config=config)


# -----------------------------------------------------------------------------
# Initializer helpers
# -----------------------------------------------------------------------------


def _check_instantiable(target_type: type) -> None:
    if inspect.isabstract(target_type):
        abstract = sorted(getattr(target_type, "__abstractmethods__", ()))
        raise InstantiationError(
            target_type, f"abstract class with abstract methods {', '.join(abstract)}"
        )


def _initializer_parameters(target_type: type) -> list[inspect.Parameter]:
    try:
        signature = inspect.signature(target_type, eval_str=True)
    except (ValueError, TypeError) as exc:
        raise InitializerAccessError(target_type, str(exc)) from exc
    except NameError as exc:
        raise ConfigurationError(
            f"Cannot resolve initializer annotations of {target_type.__qualname__}: {exc}"
        ) from exc

    parameters = list(signature.parameters.values())
    if _is_namedtuple(target_type):
        # namedtuple's __new__ carries no annotations; the field list is the signature
        hints = get_type_hints(target_type)
        parameters = [p.replace(annotation=hints.get(p.name, p.annotation)) for p in parameters]
    return parameters


def _invoke(target_type: type[T], args: list[Any]) -> T:
    try:
        return target_type(*args)
    except Exception as exc:
        logger.warning(
            "initializer_failed",
            extra={"target_type": target_type, "cause": repr(exc)},
        )
        raise InitializerInvocationError(target_type, exc) from exc


def _is_namedtuple(target_type: type) -> bool:
    return issubclass(target_type, tuple) and hasattr(target_type, "_fields")


def _strip_annotated(tp: Any) -> Any:
    if get_origin(tp) is Annotated:
        return get_args(tp)[0]
    return tp


def _unwrap_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, types.UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp
