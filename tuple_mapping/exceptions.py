"""
Typed exception hierarchy for tuple_mapping.

Every error carries a ``code`` class attribute (machine-readable) and keeps
its context as attributes, so callers catch by type and read structured
data instead of parsing messages.

    TupleMappingError (base)
    |
    +-- ConfigurationError
    |   +-- NoMatchingInitializerError
    |   +-- InitializerAccessError
    |   +-- InstantiationError
    |
    +-- PositionOutOfBoundsError   (also an IndexError)
    |
    +-- InitializerInvocationError

Category        | Code                           | When Raised
----------------|--------------------------------|---------------------------------------
Configuration   | NO_MATCHING_INITIALIZER        | No initializer fits the marked field types
                | INITIALIZER_ACCESS_DENIED      | Initializer cannot be introspected
                | INSTANTIATION_FAILED           | Target type is abstract
----------------|--------------------------------|---------------------------------------
Bounds          | POSITION_OUT_OF_BOUNDS         | Marked position >= len(values) (strict path)
----------------|--------------------------------|---------------------------------------
Invocation      | INITIALIZER_INVOCATION_FAILED  | The target's own initializer raised

Configuration errors are not retriable without changing the target type.
Bounds errors are not retriable without fixing the input.
"""

from __future__ import annotations

from typing import Any


class TupleMappingError(Exception):
    """Base exception for all tuple mapping errors."""

    code: str = "TUPLE_MAPPING_ERROR"


# Configuration errors


class ConfigurationError(TupleMappingError):
    """The target type does not fit what the engine expects."""

    code: str = "CONFIGURATION_ERROR"


class NoMatchingInitializerError(ConfigurationError):
    """No initializer accepts the marked field types in declaration order."""

    code: str = "NO_MATCHING_INITIALIZER"

    def __init__(self, target_type: type, field_types: tuple[Any, ...]):
        self.target_type = target_type
        self.field_types = field_types
        names = ", ".join(_type_name(t) for t in field_types)
        super().__init__(
            f"No initializer of {target_type.__qualname__} "
            f"matches the parameter types ({names})"
        )


class InitializerAccessError(ConfigurationError):
    """The target's initializer is not reachable through introspection."""

    code: str = "INITIALIZER_ACCESS_DENIED"

    def __init__(self, target_type: type, reason: str):
        self.target_type = target_type
        self.reason = reason
        super().__init__(
            f"Initializer of {target_type.__qualname__} is not accessible: {reason}"
        )


class InstantiationError(ConfigurationError):
    """The target type cannot be instantiated (e.g. it is abstract)."""

    code: str = "INSTANTIATION_FAILED"

    def __init__(self, target_type: type, reason: str):
        self.target_type = target_type
        self.reason = reason
        super().__init__(
            f"Cannot instantiate {target_type.__qualname__}: {reason}"
        )


# Input errors


class PositionOutOfBoundsError(TupleMappingError, IndexError):
    """A marked position points past the end of the source values."""

    code: str = "POSITION_OUT_OF_BOUNDS"

    def __init__(self, target_type: type, field_name: str, position: int, length: int):
        self.target_type = target_type
        self.field_name = field_name
        self.position = position
        self.length = length
        super().__init__(
            f"Field {target_type.__qualname__}.{field_name} is marked with position "
            f"{position} but only {length} value(s) were supplied"
        )


# Invocation errors


class InitializerInvocationError(TupleMappingError):
    """
    The target type's initializer raised.

    The original exception is chained as ``__cause__`` and kept on ``cause``.
    """

    code: str = "INITIALIZER_INVOCATION_FAILED"

    def __init__(self, target_type: type, cause: BaseException):
        self.target_type = target_type
        self.cause = cause
        super().__init__(
            f"Initializer of {target_type.__qualname__} failed: "
            f"{type(cause).__name__}: {cause}"
        )


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)
