"""Shared fixtures: outputs as reported by ``swaymsg -t get_outputs -r``."""

import pytest

from wrandr.models import Mode, Output, Rect


MODE_1080P = Mode(1920, 1080, 60000)
MODE_720P = Mode(1280, 720, 59940)


def make_output(name, x=0, y=0, mode=MODE_1080P, scale=1.0, active=True, modes=None):
    return Output(
        name=name,
        make="Dell Inc.",
        model="U2419H",
        serial=f"SN-{name}",
        active=active,
        modes=list(modes) if modes is not None else [MODE_1080P, MODE_720P],
        current_mode=mode,
        rect=Rect(x, y),
        scale=scale,
    )


@pytest.fixture
def side_by_side():
    """A at (0,0) and B at (2000,0), both 1920x1080 at scale 1."""
    return [make_output("A"), make_output("B", x=2000)]


@pytest.fixture
def sway_json():
    return """[
      {
        "name": "eDP-1", "active": true, "primary": false,
        "make": "BOE", "model": "0x0BCA", "serial": "Unknown",
        "scale": 1.5,
        "modes": [
          {"width": 2256, "height": 1504, "refresh": 59999},
          {"width": 1920, "height": 1200, "refresh": 59950}
        ],
        "current_mode": {"width": 2256, "height": 1504, "refresh": 59999},
        "rect": {"x": 0, "y": 0, "width": 1504, "height": 1003}
      },
      {
        "name": "HDMI-A-1", "active": false, "primary": false,
        "make": "Goldstar", "model": "LG HDR 4K", "serial": "0x0000B01",
        "scale": -1.0,
        "modes": [
          {"width": 3840, "height": 2160, "refresh": 60000},
          {"width": 1920, "height": 1080, "refresh": 60000}
        ],
        "rect": {"x": 0, "y": 0, "width": 0, "height": 0}
      }
    ]"""


@pytest.fixture
def output_factory():
    return make_output
