"""
Mapping configuration and its YAML loader.

Failure modes:
    * Missing YAML file  -> ``FileNotFoundError`` propagates.
    * Malformed YAML     -> ``yaml.YAMLError`` propagates.
    * Unknown time zone  -> ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

CONFIG_SECTION = "tuple_mapping"


@dataclass(frozen=True, slots=True)
class MappingConfig:
    """
    Options shared by every mapping call.

    ``timezone`` names the IANA zone aware datetimes are normalized to
    before a date or time of day is taken from them. ``None`` means the
    system local zone.
    """

    timezone: str | None = None

    def __post_init__(self) -> None:
        if self.timezone is not None:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"Unknown time zone: {self.timezone!r}") from exc

    @property
    def tzinfo(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone is not None else None


DEFAULT_CONFIG = MappingConfig()


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning ``{}`` when it is empty."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_config(data: dict[str, Any]) -> MappingConfig:
    """Build a ``MappingConfig`` from a parsed YAML document."""
    section = data.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ValueError(
            f"{CONFIG_SECTION!r} section must be a mapping, got {type(section).__name__}"
        )
    unknown = set(section) - {"timezone"}
    if unknown:
        raise ValueError(f"Unknown {CONFIG_SECTION} option(s): {sorted(unknown)}")
    return MappingConfig(timezone=section.get("timezone"))


def load_config(path: Path | str) -> MappingConfig:
    """Read a ``MappingConfig`` from the ``tuple_mapping`` section of a YAML file."""
    return parse_config(load_yaml_file(Path(path)))
