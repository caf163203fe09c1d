"""SwayMsg tests with subprocess.run patched out."""

import subprocess

import pytest

from wrandr.models import OutputParseError
from wrandr.sway import SwayMsg, SwayMsgError


class FakeRun:
    """Records calls and answers from a queue of (returncode, stdout, stderr)."""

    def __init__(self, *responses):
        self.calls = []
        self._responses = list(responses)

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        code, stdout, stderr = response
        return subprocess.CompletedProcess(cmd, code, stdout, stderr)


@pytest.fixture
def fake_run(monkeypatch):
    def install(*responses):
        fake = FakeRun(*responses)
        monkeypatch.setattr("wrandr.sway.subprocess.run", fake)
        return fake
    return install


class TestQuery:
    """get_outputs"""

    def test_get_outputs(self, fake_run, sway_json):
        fake = fake_run((0, sway_json, ""))
        outputs = SwayMsg().get_outputs()
        assert [o.name for o in outputs] == ["eDP-1", "HDMI-A-1"]
        assert fake.calls == [["swaymsg", "-t", "get_outputs", "-r"]]

    def test_custom_binary(self, fake_run):
        fake = fake_run((0, "[]", ""))
        SwayMsg("/usr/local/bin/swaymsg").get_outputs()
        assert fake.calls[0][0] == "/usr/local/bin/swaymsg"

    def test_empty_stdout_is_parse_error(self, fake_run):
        fake_run((0, "", ""))
        with pytest.raises(OutputParseError):
            SwayMsg().get_outputs()

    def test_nonzero_exit(self, fake_run):
        fake_run((1, "", "Unable to connect to socket"))
        with pytest.raises(SwayMsgError, match="Unable to connect"):
            SwayMsg().get_outputs()

    def test_spawn_failure(self, fake_run):
        fake_run(FileNotFoundError("swaymsg"))
        with pytest.raises(SwayMsgError):
            SwayMsg().get_outputs_raw()


class TestApply:
    """One invocation per output, failures isolated"""

    def test_apply_all(self, fake_run, side_by_side):
        fake = fake_run((0, "[]", ""), (0, "[]", ""))
        results = SwayMsg().apply(side_by_side)
        assert [r.ok for r in results] == [True, True]
        assert fake.calls[0] == ["swaymsg", *side_by_side[0].to_command()]
        assert fake.calls[1][-4:] == ["position", "2000 0", "scale", "1.00"]

    def test_failure_does_not_stop_remaining(self, fake_run, side_by_side, output_factory):
        outputs = side_by_side + [output_factory("C", x=4000)]
        fake = fake_run(
            (0, "", ""),
            (2, "", "Error: invalid mode"),
            OSError("boom"),
        )
        results = SwayMsg().apply(outputs)
        assert len(fake.calls) == 3
        assert [r.name for r in results] == ["A", "B", "C"]
        assert [r.ok for r in results] == [True, False, False]
        assert "invalid mode" in results[1].error
        assert results[2].error
