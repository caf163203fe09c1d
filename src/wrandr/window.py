"""Main application window."""

from __future__ import annotations

import logging

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Gtk, Adw, Gio

from .actions import OutputLayout, SetPosition
from .canvas import OutputCanvas
from .config import LayoutConfig
from .models import WrandrError
from .output_popover import OutputPopover
from .sway import SwayMsg
from .utils import is_swaymsg_installed, load_app_settings, save_app_settings

log = logging.getLogger(__name__)


class MainWindow(Adw.ApplicationWindow):
    """Main window with canvas, command preview and apply button."""

    __gtype_name__ = "MainWindow"

    def __init__(self, app: Adw.Application) -> None:
        super().__init__(application=app, title="wRandR", default_width=800, default_height=600)
        settings = load_app_settings()
        self._config = LayoutConfig.from_settings(settings)
        if not settings:
            # First run: write the defaults so they can be edited
            save_app_settings(self._config.to_settings())
        self._sway = SwayMsg(self._config.swaymsg)
        self._layout = OutputLayout()

        self._build_ui()
        self._setup_actions()
        self._load_outputs()

    # ── UI Construction ──────────────────────────────────────────────

    def _build_ui(self) -> None:
        main_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.set_content(main_box)

        header = Adw.HeaderBar()
        header.set_title_widget(Adw.WindowTitle(title="wRandR", subtitle="Output Layout"))
        main_box.append(header)

        btn_apply = Gtk.Button(label="Apply", tooltip_text="Apply layout with swaymsg")
        btn_apply.add_css_class("suggested-action")
        btn_apply.connect("clicked", self._on_apply_clicked)
        header.pack_start(btn_apply)

        btn_detect = Gtk.Button(icon_name="view-refresh-symbolic", tooltip_text="Detect outputs")
        btn_detect.connect("clicked", self._on_detect_clicked)
        header.pack_start(btn_detect)

        # Command preview
        self._preview_buffer = Gtk.TextBuffer()
        text_view = Gtk.TextView(buffer=self._preview_buffer, editable=False, monospace=True)
        scroll = Gtk.ScrolledWindow()
        scroll.set_size_request(400, 400)
        scroll.set_child(text_view)
        preview = Gtk.Popover()
        preview.set_child(scroll)
        preview.connect("show", self._on_preview_show)
        btn_preview = Gtk.MenuButton(
            icon_name="document-edit-symbolic",
            tooltip_text="Show output commands",
            popover=preview,
        )
        header.pack_end(btn_preview)

        self._canvas = OutputCanvas(self._config)
        self._canvas.connect("output-moved", self._on_output_moved)
        self._canvas.connect("output-activated", self._on_output_activated)

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_child(self._canvas)
        self._toast_overlay.set_vexpand(True)
        main_box.append(self._toast_overlay)

        self._status = Gtk.Label(label="Ready", xalign=0)
        self._status.set_margin_start(12)
        self._status.set_margin_end(12)
        self._status.set_margin_top(4)
        self._status.set_margin_bottom(4)
        self._status.add_css_class("dim-label")
        main_box.append(self._status)

    def _setup_actions(self) -> None:
        """Set up keyboard shortcuts."""
        action_apply = Gio.SimpleAction(name="apply")
        action_apply.connect("activate", lambda *_: self._on_apply_clicked(None))
        self.add_action(action_apply)

        action_detect = Gio.SimpleAction(name="detect")
        action_detect.connect("activate", lambda *_: self._on_detect_clicked(None))
        self.add_action(action_detect)

        app = self.get_application()
        app.set_accels_for_action("win.apply", ["<Control>Return"])
        app.set_accels_for_action("win.detect", ["<Control>r"])

    # ── State ────────────────────────────────────────────────────────

    def _load_outputs(self) -> None:
        """Query swaymsg and replace the layout with the current outputs."""
        if not is_swaymsg_installed(self._config.swaymsg):
            self._set_status(f"{self._config.swaymsg} not found")
            self._toast(f"{self._config.swaymsg} not found in PATH")
            return
        try:
            outputs = self._sway.get_outputs()
        except WrandrError as e:
            log.error("Cannot query outputs: %s", e)
            self._set_status("Cannot query outputs")
            self._toast(f"Cannot query outputs: {e}")
            return
        self._layout.replace(outputs)
        self._canvas.outputs = self._layout.outputs
        if outputs:
            self._set_status(f"{len(outputs)} output(s) detected")
        else:
            self._set_status("No outputs reported")

    # ── Event handlers ───────────────────────────────────────────────

    def _on_detect_clicked(self, btn) -> None:
        self._load_outputs()

    def _on_output_moved(self, canvas: OutputCanvas, index: int, x: int, y: int) -> None:
        output = self._layout.outputs[index]
        self._layout.dispatch(SetPosition(output.name, x, y))
        self._set_status(f"{output.name} moved to {x},{y}")
        canvas.queue_draw()

    def _on_output_activated(self, canvas: OutputCanvas, index: int) -> None:
        output = self._layout.outputs[index]
        popover = OutputPopover(self._layout, output)
        popover.set_parent(canvas)
        popover.set_pointing_to(canvas.output_bounds(index))
        popover.connect("output-changed", self._on_output_changed)
        popover.connect("error", lambda _p, msg: self._toast(msg))
        popover.connect("closed", lambda p: p.unparent())
        popover.popup()

    def _on_output_changed(self, popover: OutputPopover, name: str) -> None:
        self._canvas.queue_draw()
        self._set_status(f"{name} changed")

    def _on_preview_show(self, popover: Gtk.Popover) -> None:
        self._preview_buffer.set_text(
            self._layout.preview(self._config.preview_format, self._config.variant)
        )

    def _on_apply_clicked(self, btn) -> None:
        if not len(self._layout):
            self._toast("Nothing to apply")
            return
        log.info("Applying %d output(s)", len(self._layout))
        results = self._sway.apply(self._layout, self._config.apply_format, self._config.variant)
        failed = [r.name for r in results if not r.ok]
        if failed:
            self._toast(f"Apply failed for {', '.join(failed)}")
            self._set_status(f"Applied {len(results) - len(failed)} of {len(results)} output(s)")
        else:
            self._toast("Layout applied")
            self._set_status(f"Applied {len(results)} output(s)")

    def _set_status(self, text: str) -> None:
        self._status.set_label(text)

    def _toast(self, message: str) -> None:
        toast = Adw.Toast(title=message, timeout=3)
        self._toast_overlay.add_toast(toast)
