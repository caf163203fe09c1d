"""Command serializer tests."""

import pytest

from wrandr.commands import CommandVariant, OutputFormat, format_commands, to_command
from wrandr.models import Mode, parse_outputs


class TestToCommand:
    """Token lists for the external tool"""

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    @pytest.mark.parametrize("variant", list(CommandVariant))
    def test_inactive_output_is_three_token_disable(self, output_factory, fmt, variant):
        o = output_factory("DP-1", x=123, y=456, scale=2.0, active=False)
        cmd = to_command(o, fmt, variant)
        assert len(cmd) == 3
        assert cmd[0] == "output"
        assert cmd[2] == "disable"

    def test_disable_selector_follows_variant(self, output_factory):
        o = output_factory("DP-1", active=False)
        assert to_command(o, variant=CommandVariant.BASIC) == ["output", "DP-1", "disable"]
        assert to_command(o, variant=CommandVariant.FULL) == [
            "output", '"Dell Inc. U2419H SN-DP-1"', "disable",
        ]

    def test_mode_token(self, output_factory):
        o = output_factory("DP-1")
        assert to_command(o)[3] == "1920x1080@60Hz"

    def test_refresh_is_truncated(self, output_factory):
        o = output_factory("DP-1", mode=Mode(1280, 720, 59940))
        assert to_command(o)[3] == "1280x720@59Hz"

    def test_full_swaymsg(self, output_factory):
        o = output_factory("DP-1", x=1920, y=-200, scale=1.25)
        assert to_command(o, OutputFormat.SWAYMSG, CommandVariant.FULL) == [
            "output", '"Dell Inc. U2419H SN-DP-1"',
            "mode", "1920x1080@60Hz",
            "position", "1920 -200",
            "scale", "1.25",
        ]

    def test_basic_kanshi(self, output_factory):
        o = output_factory("DP-1", x=1920, y=0, scale=1.25)
        assert to_command(o, OutputFormat.KANSHI, CommandVariant.BASIC) == [
            "output", "DP-1",
            "mode", "1920x1080@60Hz",
            "position", "1920,0",
        ]

    def test_output_method_delegates(self, output_factory):
        o = output_factory("DP-1")
        assert o.to_command() == to_command(o, OutputFormat.SWAYMSG, CommandVariant.FULL)


class TestFormatCommands:
    """Preview text"""

    def test_one_line_per_output(self, side_by_side):
        side_by_side[1].set_active(False)
        text = format_commands(side_by_side, OutputFormat.KANSHI, CommandVariant.BASIC)
        assert text == (
            "output A mode 1920x1080@60Hz position 0,0\n"
            "output B disable\n"
        )

    def test_empty(self):
        assert format_commands([]) == ""


class TestSelectorFallback:
    """Outputs without hardware identity"""

    LEGACY = """[{"name": "DP-1", "active": true,
                  "modes": [{"width": 1920, "height": 1080, "refresh": 60000}],
                  "current_mode": {"width": 1920, "height": 1080, "refresh": 60000},
                  "rect": {"x": 1920, "y": 0, "width": 1920, "height": 1080}}]"""

    def test_legacy_output_uses_port_name_under_full(self):
        (o,) = parse_outputs(self.LEGACY)
        cmd = to_command(o, OutputFormat.SWAYMSG, CommandVariant.FULL)
        assert cmd == [
            "output", "DP-1",
            "mode", "1920x1080@60Hz",
            "position", "1920 0",
            "scale", "1.00",
        ]

    def test_legacy_disable_uses_port_name(self):
        (o,) = parse_outputs(self.LEGACY)
        o.set_active(False)
        assert to_command(o, variant=CommandVariant.FULL) == ["output", "DP-1", "disable"]

    def test_partial_identity_keeps_quoted_identifier(self, output_factory):
        o = output_factory("HEADLESS-1")
        o.make, o.model, o.serial = "", "", "1234"
        assert to_command(o)[1] == '"  1234"'
