"""Data models: Mode, Rect, Output, plus parsing of ``swaymsg`` output JSON."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field

from .commands import CommandVariant, OutputFormat, to_command

log = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 4.0


# ── Errors ───────────────────────────────────────────────────────────────

class WrandrError(Exception):
    """Base class for all wrandr errors."""


class OutputParseError(WrandrError):
    """The output list reported by the compositor could not be parsed."""


class InvalidModeError(WrandrError):
    """A mode was selected that the output does not support."""


class InvalidScaleError(WrandrError):
    """A scale factor outside [MIN_SCALE, MAX_SCALE] was requested."""


class UnknownOutputError(WrandrError):
    """No output with the requested name exists in the layout."""


# ── Mode / Rect ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Mode:
    width: int = 0
    height: int = 0
    refresh: int = 0            # millihertz

    @property
    def refresh_hz(self) -> float:
        return self.refresh / 1000.0

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``1920x1080 (60.00 Hz)``."""
        return f"{self.width}x{self.height} ({self.refresh_hz:.2f} Hz)"

    @classmethod
    def from_dict(cls, d: dict) -> Mode:
        return cls(
            width=int(d.get("width", 0)),
            height=int(d.get("height", 0)),
            refresh=int(d.get("refresh", 0)),
        )


@dataclass
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> Rect:
        return cls(
            x=int(d.get("x", 0)),
            y=int(d.get("y", 0)),
            width=int(d.get("width", 0)),
            height=int(d.get("height", 0)),
        )


# ── Output ───────────────────────────────────────────────────────────────

@dataclass
class Output:
    # Identity
    name: str = ""              # e.g. "DP-1", "HDMI-A-1"
    make: str = ""
    model: str = ""
    serial: str = ""

    active: bool = True
    primary: bool = False       # informational only

    # Available modes, in the order the compositor reports them
    modes: list[Mode] = field(default_factory=list)
    current_mode: Mode = field(default_factory=Mode)

    # Position (world pixels); width/height mirror current_mode
    rect: Rect = field(default_factory=Rect)

    scale: float = 1.0

    def __post_init__(self) -> None:
        # Sway reports scale -1 for disabled outputs
        if not math.isfinite(self.scale) or self.scale < MIN_SCALE:
            self.scale = 1.0
        self.rect.width = self.current_mode.width
        self.rect.height = self.current_mode.height

    @property
    def identifier(self) -> str:
        """Quoted ``"make model serial"`` selector, stable across ports.

        Outputs without any identity fields fall back to the port name.
        """
        if not (self.make or self.model or self.serial):
            return self.name
        return f'"{self.make} {self.model} {self.serial}"'

    @property
    def style_class(self) -> str:
        return "active" if self.active else "inactive"

    def change_mode(self, mode: Mode) -> None:
        """Switch to *mode* and resize rect to match.

        Membership in ``modes`` is not checked here; see ``SetMode``.
        """
        self.current_mode = mode
        self.rect.width = mode.width
        self.rect.height = mode.height

    def apparent_size(self) -> tuple[float, float]:
        """Rendered size: current mode dimensions multiplied by scale."""
        return self.current_mode.width * self.scale, self.current_mode.height * self.scale

    def set_scale(self, scale: float) -> None:
        if not MIN_SCALE <= scale <= MAX_SCALE:
            raise InvalidScaleError(
                f"Scale {scale:g} for {self.name} outside [{MIN_SCALE:g}, {MAX_SCALE:g}]"
            )
        self.scale = scale

    def set_active(self, active: bool) -> None:
        """Toggle the output. Mode, position and scale survive deactivation."""
        self.active = active
        if active and self.modes and self.current_mode not in self.modes:
            self.change_mode(self.modes[0])

    def set_position(self, x: int, y: int) -> None:
        self.rect.x = x
        self.rect.y = y

    def to_command(
        self,
        fmt: OutputFormat = OutputFormat.SWAYMSG,
        variant: CommandVariant = CommandVariant.FULL,
    ) -> list[str]:
        """Serialize to ``output ...`` tokens for the external tool."""
        return to_command(self, fmt, variant)

    @classmethod
    def from_sway_output(cls, data: dict) -> Output:
        """Create from one entry of ``swaymsg -t get_outputs -r``.

        Accepts the legacy schema without scale, primary and hardware
        identity fields; those fall back to defaults.
        """
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise OutputParseError(f"Output entry without a name: {data!r}")

        try:
            modes = [Mode.from_dict(m) for m in data.get("modes", [])]
            rect = Rect.from_dict(data.get("rect", {}))

            raw_mode = data.get("current_mode")
            if raw_mode:
                current_mode = Mode.from_dict(raw_mode)
            elif modes:
                current_mode = modes[0]
            else:
                current_mode = Mode(rect.width, rect.height, 0)

            return cls(
                name=name,
                make=data.get("make", "") or "",
                model=data.get("model", "") or "",
                serial=data.get("serial", "") or "",
                active=bool(data.get("active", False)),
                primary=bool(data.get("primary", False)),
                modes=modes,
                current_mode=current_mode,
                rect=rect,
                scale=float(data.get("scale", 1.0)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise OutputParseError(f"Malformed output {name}: {e}") from e


def parse_outputs(text: str) -> list[Output]:
    """Parse the JSON output list reported by the compositor.

    Raises OutputParseError instead of returning an empty model.
    """
    if not text or not text.strip():
        raise OutputParseError("Compositor returned no output data")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise OutputParseError(f"Invalid output JSON: {e}") from e
    if not isinstance(data, list):
        raise OutputParseError(f"Expected a JSON array of outputs, got {type(data).__name__}")

    outputs: list[Output] = []
    seen: set[str] = set()
    for entry in data:
        if not isinstance(entry, dict):
            raise OutputParseError(f"Expected an output object, got {entry!r}")
        output = Output.from_sway_output(entry)
        if output.name in seen:
            raise OutputParseError(f"Duplicate output name: {output.name}")
        seen.add(output.name)
        outputs.append(output)

    log.debug("Parsed %d output(s): %s", len(outputs), ", ".join(o.name for o in outputs))
    return outputs
