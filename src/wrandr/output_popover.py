"""Popover menu for toggling an output and editing its mode and scale."""

from __future__ import annotations

import gi
gi.require_version("Gtk", "4.0")
from gi.repository import Gtk, GObject

from .actions import Action, OutputLayout, SetActive, SetMode, SetScale
from .models import MAX_SCALE, MIN_SCALE, Mode, Output, WrandrError


class OutputPopover(Gtk.Popover):
    """Edits one output by dispatching actions to the layout."""

    __gtype_name__ = "OutputPopover"

    __gsignals__ = {
        "output-changed": (GObject.SignalFlags.RUN_FIRST, None, (str,)),
        "error": (GObject.SignalFlags.RUN_FIRST, None, (str,)),
    }

    def __init__(self, layout: OutputLayout, output: Output) -> None:
        super().__init__()
        self._layout = layout
        self._name = output.name
        self._building = True
        self._build_ui(output)
        self._building = False

    def _build_ui(self, output: Output) -> None:
        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=10)
        box.set_margin_top(10)
        box.set_margin_bottom(10)
        box.set_margin_start(10)
        box.set_margin_end(10)
        self.set_child(box)

        title = Gtk.Label(label=output.name, xalign=0)
        title.add_css_class("heading")
        box.append(title)

        self._chk_active = Gtk.CheckButton(label="Activate")
        self._chk_active.set_active(output.active)
        self._chk_active.connect("toggled", self._on_active_toggled)
        box.append(self._chk_active)

        box.append(Gtk.Label(label="Resolution", xalign=0))
        group: Gtk.CheckButton | None = None
        for mode in output.modes:
            radio = Gtk.CheckButton(label=mode.label)
            if group is None:
                group = radio
            else:
                radio.set_group(group)
            radio.set_active(mode == output.current_mode)
            radio.connect("toggled", self._on_mode_toggled, mode)
            box.append(radio)

        box.append(Gtk.Label(label="DPI Scale", xalign=0))
        self._spin_scale = Gtk.SpinButton.new_with_range(MIN_SCALE, MAX_SCALE, 0.1)
        self._spin_scale.set_digits(2)
        self._spin_scale.set_value(output.scale)
        self._spin_scale.connect("value-changed", self._on_scale_changed)
        box.append(self._spin_scale)

    def _dispatch(self, action: Action) -> None:
        if self._building:
            return
        try:
            self._layout.dispatch(action)
        except WrandrError as e:
            self.emit("error", str(e))
            return
        self.emit("output-changed", self._name)

    def _on_active_toggled(self, btn: Gtk.CheckButton) -> None:
        self._dispatch(SetActive(self._name, btn.get_active()))

    def _on_mode_toggled(self, radio: Gtk.CheckButton, mode: Mode) -> None:
        if radio.get_active():
            self._dispatch(SetMode(self._name, mode))

    def _on_scale_changed(self, spin: Gtk.SpinButton) -> None:
        self._dispatch(SetScale(self._name, round(spin.get_value(), 2)))
