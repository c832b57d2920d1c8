"""
Field marker -- tags a field with its index into a source row.

Two equivalent spellings are recognised::

    @dataclass(frozen=True)
    class Customer:
        name: Annotated[str, TupleColumn(0)]
        born: date = column(1, default=None)

``mapped_fields`` is the single discovery point used by the engine.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from tuple_mapping.exceptions import ConfigurationError

COLUMN_METADATA_KEY = "tuple_column"


@dataclass(frozen=True, slots=True)
class TupleColumn:
    """Index of the value that belongs in the marked field."""

    position: int

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise ValueError(
                f"TupleColumn position must be an int, got {type(self.position).__name__}"
            )
        if self.position < 0:
            raise ValueError(f"TupleColumn position must be >= 0, got {self.position}")


@dataclass(frozen=True, slots=True)
class MappedField:
    """A marked field as seen by the engine."""

    name: str
    field_type: Any
    position: int


def column(position: int, **field_kwargs: Any) -> Any:
    """Return a ``dataclasses.field`` carrying a ``TupleColumn`` marker."""
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[COLUMN_METADATA_KEY] = TupleColumn(position)
    return dataclasses.field(metadata=metadata, **field_kwargs)


def mapped_fields(target_type: type) -> tuple[MappedField, ...]:
    """
    Discover the marked fields of ``target_type`` in declaration order.

    Inherited fields come first, as ``typing.get_type_hints`` reports them.
    Fields without a marker are left out.

    Raises:
        ConfigurationError: if the annotations cannot be resolved.
    """
    try:
        hints = get_type_hints(target_type, include_extras=True)
    except (NameError, TypeError) as exc:
        raise ConfigurationError(
            f"Cannot resolve annotations of {target_type.__qualname__}: {exc}"
        ) from exc

    dataclass_markers: dict[str, TupleColumn] = {}
    if dataclasses.is_dataclass(target_type):
        for f in dataclasses.fields(target_type):
            marker = f.metadata.get(COLUMN_METADATA_KEY)
            if isinstance(marker, TupleColumn):
                dataclass_markers[f.name] = marker

    result: list[MappedField] = []
    for name, hint in hints.items():
        if get_origin(hint) is ClassVar:
            continue
        field_type, marker = _split_annotated(hint)
        if marker is None:
            marker = dataclass_markers.get(name)
        if marker is not None:
            result.append(MappedField(name, field_type, marker.position))
    return tuple(result)


def _split_annotated(hint: Any) -> tuple[Any, TupleColumn | None]:
    if get_origin(hint) is not Annotated:
        return hint, None
    base, *extras = get_args(hint)
    marker = None
    for extra in extras:
        if isinstance(extra, TupleColumn):
            marker = extra
    return base, marker
