"""Layout configuration: density, snap tolerance and command formats."""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import TypeVar

from .commands import CommandVariant, OutputFormat
from .geometry import DEFAULT_DENSITY, SNAP_TOLERANCE

log = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)


def _positive_int(settings: dict, key: str, default: int) -> int:
    value = settings.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        log.warning("Ignoring invalid %s=%r, using %d", key, value, default)
        return default
    return value


def _enum_value(settings: dict, key: str, enum: type[_E], default: _E) -> _E:
    raw = settings.get(key, default.value)
    try:
        return enum(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %s", key, raw, default.value)
        return default


@dataclass(frozen=True)
class LayoutConfig:
    density: int = DEFAULT_DENSITY
    snap_tolerance: int = SNAP_TOLERANCE
    apply_format: OutputFormat = OutputFormat.SWAYMSG
    preview_format: OutputFormat = OutputFormat.KANSHI
    variant: CommandVariant = CommandVariant.FULL
    swaymsg: str = "swaymsg"

    @classmethod
    def from_settings(cls, settings: dict) -> LayoutConfig:
        """Build from the settings file, falling back to defaults per key."""
        swaymsg = settings.get("swaymsg", "swaymsg")
        if not isinstance(swaymsg, str) or not swaymsg:
            log.warning("Ignoring invalid swaymsg=%r", swaymsg)
            swaymsg = "swaymsg"
        return cls(
            density=_positive_int(settings, "density", DEFAULT_DENSITY),
            snap_tolerance=_positive_int(settings, "snap_tolerance", SNAP_TOLERANCE),
            apply_format=_enum_value(settings, "apply_format", OutputFormat, OutputFormat.SWAYMSG),
            preview_format=_enum_value(settings, "preview_format", OutputFormat, OutputFormat.KANSHI),
            variant=_enum_value(settings, "variant", CommandVariant, CommandVariant.FULL),
            swaymsg=swaymsg,
        )

    def to_settings(self) -> dict:
        d = asdict(self)
        d["apply_format"] = self.apply_format.value
        d["preview_format"] = self.preview_format.value
        d["variant"] = self.variant.value
        return d
