"""Sway communication through the ``swaymsg`` command line tool."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Iterable

from .commands import CommandVariant, OutputFormat
from .models import Output, WrandrError, parse_outputs

log = logging.getLogger(__name__)


class SwayMsgError(WrandrError):
    """swaymsg could not be started or exited with an error."""


@dataclass
class ApplyResult:
    name: str
    args: list[str]
    ok: bool
    stdout: str = ""
    error: str = ""


class SwayMsg:
    """Query and configure outputs by invoking ``swaymsg``.

    Calls are synchronous and have no timeout.
    """

    def __init__(self, binary: str = "swaymsg") -> None:
        self._binary = binary

    def run(self, args: list[str]) -> str:
        """Invoke swaymsg once with *args* and return its stdout."""
        cmd = [self._binary, *args]
        log.debug("Running %s", cmd)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise SwayMsgError(f"Cannot run {self._binary}: {e}") from e
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise SwayMsgError(
                f"{self._binary} exited with status {proc.returncode}: {detail}"
            )
        return proc.stdout

    def get_outputs_raw(self) -> str:
        """Return the raw JSON of ``swaymsg -t get_outputs -r``."""
        return self.run(["-t", "get_outputs", "-r"])

    def get_outputs(self) -> list[Output]:
        """Query all outputs, including disabled ones."""
        return parse_outputs(self.get_outputs_raw())

    def apply(
        self,
        outputs: Iterable[Output],
        fmt: OutputFormat = OutputFormat.SWAYMSG,
        variant: CommandVariant = CommandVariant.FULL,
    ) -> list[ApplyResult]:
        """Send one command per output.

        A failing output is recorded in its result and the remaining outputs
        are still applied; nothing is rolled back.
        """
        results: list[ApplyResult] = []
        for output in outputs:
            args = output.to_command(fmt, variant)
            try:
                stdout = self.run(args)
            except SwayMsgError as e:
                log.warning("Applying %s failed: %s", output.name, e)
                results.append(ApplyResult(output.name, args, ok=False, error=str(e)))
                continue
            log.debug("swaymsg %s: %s", output.name, stdout.strip())
            results.append(ApplyResult(output.name, args, ok=True, stdout=stdout))
        return results
