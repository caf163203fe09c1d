"""Layout container owning the outputs, mutated only through action objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from .commands import CommandVariant, OutputFormat, format_commands
from .models import InvalidModeError, Mode, Output, UnknownOutputError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetActive:
    name: str
    active: bool


@dataclass(frozen=True)
class SetMode:
    name: str
    mode: Mode


@dataclass(frozen=True)
class SetScale:
    name: str
    scale: float


@dataclass(frozen=True)
class SetPosition:
    name: str
    x: int
    y: int


Action = Union[SetActive, SetMode, SetScale, SetPosition]


class OutputLayout:
    """Single owner of the output list for the lifetime of the window."""

    def __init__(self, outputs: Iterable[Output] = ()) -> None:
        self._outputs: list[Output] = list(outputs)

    @property
    def outputs(self) -> tuple[Output, ...]:
        return tuple(self._outputs)

    def __len__(self) -> int:
        return len(self._outputs)

    def __iter__(self):
        return iter(self._outputs)

    def replace(self, outputs: Iterable[Output]) -> None:
        """Swap in a freshly queried output list."""
        self._outputs = list(outputs)

    def get(self, name: str) -> Output:
        for output in self._outputs:
            if output.name == name:
                return output
        raise UnknownOutputError(f"No output named {name!r}")

    def dispatch(self, action: Action) -> Output:
        """Apply *action* to its output and return that output.

        Validation errors propagate and leave the output unchanged.
        """
        output = self.get(action.name)
        if isinstance(action, SetActive):
            output.set_active(action.active)
        elif isinstance(action, SetMode):
            if action.mode not in output.modes:
                raise InvalidModeError(
                    f"{action.mode.label} is not supported by {output.name}"
                )
            output.change_mode(action.mode)
        elif isinstance(action, SetScale):
            output.set_scale(action.scale)
        elif isinstance(action, SetPosition):
            output.set_position(action.x, action.y)
        else:
            raise TypeError(f"Unknown action: {action!r}")
        log.debug("Dispatched %s", action)
        return output

    def commands(
        self,
        fmt: OutputFormat = OutputFormat.SWAYMSG,
        variant: CommandVariant = CommandVariant.FULL,
    ) -> list[list[str]]:
        return [o.to_command(fmt, variant) for o in self._outputs]

    def preview(
        self,
        fmt: OutputFormat = OutputFormat.KANSHI,
        variant: CommandVariant = CommandVariant.FULL,
    ) -> str:
        return format_commands(self._outputs, fmt, variant)
