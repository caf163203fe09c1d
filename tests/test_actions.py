"""Layout container and action dispatch tests."""

import pytest

from wrandr.actions import OutputLayout, SetActive, SetMode, SetPosition, SetScale
from wrandr.commands import CommandVariant, OutputFormat
from wrandr.models import InvalidModeError, InvalidScaleError, Mode, UnknownOutputError


@pytest.fixture
def layout(side_by_side):
    return OutputLayout(side_by_side)


class TestDispatch:
    """Actions mutate outputs through model operations"""

    def test_set_position(self, layout):
        out = layout.dispatch(SetPosition("B", 1920, 0))
        assert out is layout.get("B")
        assert (out.rect.x, out.rect.y) == (1920, 0)

    def test_set_mode_syncs_rect(self, layout):
        layout.dispatch(SetMode("A", Mode(1280, 720, 59940)))
        a = layout.get("A")
        assert a.current_mode == Mode(1280, 720, 59940)
        assert (a.rect.width, a.rect.height) == (1280, 720)

    def test_set_mode_rejects_unsupported_mode(self, layout):
        with pytest.raises(InvalidModeError):
            layout.dispatch(SetMode("A", Mode(640, 480, 60000)))
        assert layout.get("A").current_mode == Mode(1920, 1080, 60000)

    def test_set_scale(self, layout):
        layout.dispatch(SetScale("A", 1.5))
        assert layout.get("A").scale == 1.5

    @pytest.mark.parametrize("scale", [0.0, 0.09, 4.01, -1.0])
    def test_set_scale_out_of_range(self, layout, scale):
        with pytest.raises(InvalidScaleError):
            layout.dispatch(SetScale("A", scale))
        assert layout.get("A").scale == 1.0

    def test_set_active(self, layout):
        layout.dispatch(SetActive("B", False))
        assert not layout.get("B").active
        assert layout.commands(variant=CommandVariant.BASIC)[1] == ["output", "B", "disable"]

    def test_unknown_output(self, layout):
        with pytest.raises(UnknownOutputError):
            layout.dispatch(SetActive("nope", True))

    def test_unknown_action_type(self, layout):
        class Bogus:
            name = "A"

        with pytest.raises(TypeError):
            layout.dispatch(Bogus())


class TestLayout:
    """Container behaviour"""

    def test_outputs_is_read_only_view(self, layout):
        assert isinstance(layout.outputs, tuple)
        assert [o.name for o in layout.outputs] == ["A", "B"]
        assert len(layout) == 2

    def test_replace(self, layout, output_factory):
        layout.replace([output_factory("C")])
        assert [o.name for o in layout] == ["C"]

    def test_preview(self, layout):
        text = layout.preview(OutputFormat.KANSHI, CommandVariant.BASIC)
        assert text.splitlines() == [
            "output A mode 1920x1080@60Hz position 0,0",
            "output B mode 1920x1080@60Hz position 2000,0",
        ]
