"""Serialization of outputs into ``output ...`` commands for sway and kanshi."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .models import Output


class OutputFormat(Enum):
    """Target syntax, which decides how the position token is written."""

    SWAYMSG = "swaymsg"     # position X Y
    KANSHI = "kanshi"       # position X,Y

    @property
    def position_template(self) -> str:
        return "{x},{y}" if self is OutputFormat.KANSHI else "{x} {y}"


class CommandVariant(Enum):
    """Selector syntax and whether a scale token is emitted."""

    BASIC = "basic"         # raw port name, no scale
    FULL = "full"           # quoted "make model serial", trailing scale

    def selector(self, output: Output) -> str:
        return output.identifier if self is CommandVariant.FULL else output.name


def mode_token(output: Output) -> str:
    mode = output.current_mode
    return f"{mode.width}x{mode.height}@{mode.refresh // 1000}Hz"


def to_command(
    output: Output,
    fmt: OutputFormat = OutputFormat.SWAYMSG,
    variant: CommandVariant = CommandVariant.FULL,
) -> list[str]:
    """Return the argument list configuring *output*.

    Inactive outputs always produce the three-token disable command.
    """
    selector = variant.selector(output)
    if not output.active:
        return ["output", selector, "disable"]

    args = [
        "output", selector,
        "mode", mode_token(output),
        "position", fmt.position_template.format(x=output.rect.x, y=output.rect.y),
    ]
    if variant is CommandVariant.FULL:
        args += ["scale", f"{output.scale:.2f}"]
    return args


def format_commands(
    outputs: Iterable[Output],
    fmt: OutputFormat = OutputFormat.KANSHI,
    variant: CommandVariant = CommandVariant.FULL,
) -> str:
    """One space-joined command per line, as shown in the preview popover."""
    return "".join(" ".join(to_command(o, fmt, variant)) + "\n" for o in outputs)
