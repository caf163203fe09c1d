"""Output arrangement canvas using Gtk.DrawingArea + Cairo."""

from __future__ import annotations

import math

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, Gtk, GObject

from .config import LayoutConfig
from .geometry import (
    extent_x, extent_y, find_anchor, layout_origin, map_to_world, world_to_map,
)
from .models import Output


# Space around the arrangement, in canvas pixels
MARGIN = 40
# Pointer travel below this is a click, not a drag
CLICK_SLOP = 3

# Colors
COLOR_BG = (0.12, 0.12, 0.14)
COLOR_GRID = (0.18, 0.18, 0.20)
COLOR_BORDER = (0.4, 0.42, 0.46)
COLOR_DRAGGED = (0.26, 0.52, 0.96)
COLOR_TEXT = (0.9, 0.9, 0.92)
COLOR_TEXT_DIM = (0.6, 0.62, 0.64)

# Fill per Output.style_class
STYLE_FILL = {
    "active": ((0.22, 0.24, 0.28), 1.0),
    "inactive": ((0.22, 0.24, 0.28), 0.5),
}


class OutputCanvas(Gtk.DrawingArea):
    """Canvas widget that lays outputs out in map coordinates."""

    __gtype_name__ = "OutputCanvas"

    __gsignals__ = {
        # index, world x, world y
        "output-moved": (GObject.SignalFlags.RUN_FIRST, None, (int, int, int)),
        "output-activated": (GObject.SignalFlags.RUN_FIRST, None, (int,)),
    }

    def __init__(self, config: LayoutConfig | None = None) -> None:
        super().__init__()
        self._config = config or LayoutConfig()
        self._outputs: tuple[Output, ...] = ()
        self._origin_x: int = MARGIN
        self._origin_y: int = MARGIN

        # Drag state, positions in map units relative to the origin
        self._dragged: int = -1
        self._moved: bool = False
        self._drag_orig_x: int = 0
        self._drag_orig_y: int = 0
        self._drag_x: int = 0
        self._drag_y: int = 0
        self._anchor_x: int | None = None
        self._anchor_y: int | None = None

        self.set_draw_func(self._draw)
        self.set_hexpand(True)
        self.set_vexpand(True)

        drag = Gtk.GestureDrag()
        drag.set_button(1)
        drag.connect("drag-begin", self._on_drag_begin)
        drag.connect("drag-update", self._on_drag_update)
        drag.connect("drag-end", self._on_drag_end)
        self.add_controller(drag)

    @property
    def outputs(self) -> tuple[Output, ...]:
        return self._outputs

    @outputs.setter
    def outputs(self, value: tuple[Output, ...]) -> None:
        self._outputs = tuple(value)
        self._dragged = -1
        self._fit_origin()
        self.queue_draw()

    def _map(self, value: int) -> int:
        return world_to_map(value, self._config.density)

    def _fit_origin(self) -> None:
        """Shift the origin so outputs at negative positions stay visible."""
        self._origin_x, self._origin_y = layout_origin(
            self._outputs, MARGIN, self._config.density,
        )

    def _map_rect(self, idx: int) -> tuple[int, int, int, int]:
        """Return (x, y, w, h) of an output in map units relative to the origin."""
        o = self._outputs[idx]
        w, h = o.apparent_size()
        if idx == self._dragged and self._moved:
            x, y = self._drag_x, self._drag_y
        else:
            x, y = self._map(o.rect.x), self._map(o.rect.y)
        return x, y, self._map(int(w)), self._map(int(h))

    def output_bounds(self, idx: int) -> Gdk.Rectangle:
        """Widget-space rectangle of an output, for anchoring popovers."""
        x, y, w, h = self._map_rect(idx)
        rect = Gdk.Rectangle()
        rect.x, rect.y = self._origin_x + x, self._origin_y + y
        rect.width, rect.height = max(w, 1), max(h, 1)
        return rect

    def _hit_test(self, sx: float, sy: float) -> int:
        """Return index of the output under a widget position, or -1."""
        for i in range(len(self._outputs) - 1, -1, -1):
            x, y, w, h = self._map_rect(i)
            x += self._origin_x
            y += self._origin_y
            if x <= sx <= x + w and y <= sy <= y + h:
                return i
        return -1

    # ── Event handlers ───────────────────────────────────────────────

    def _on_drag_begin(self, gesture: Gtk.GestureDrag, x: float, y: float) -> None:
        self._dragged = self._hit_test(x, y)
        self._moved = False
        if self._dragged < 0:
            return
        o = self._outputs[self._dragged]
        self._drag_orig_x = self._drag_x = self._map(o.rect.x)
        self._drag_orig_y = self._drag_y = self._map(o.rect.y)
        self._anchor_x = self._anchor_y = None

    def _on_drag_update(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        if self._dragged < 0:
            return
        if not self._moved and abs(offset_x) < CLICK_SLOP and abs(offset_y) < CLICK_SLOP:
            return
        self._moved = True
        current = self._outputs[self._dragged]
        cfg = self._config

        pos_x = self._drag_orig_x + int(offset_x)
        pos_y = self._drag_orig_y + int(offset_y)
        self._anchor_x = find_anchor(
            pos_x, self._outputs, current, extent_x,
            density=cfg.density, tolerance=cfg.snap_tolerance,
        )
        self._anchor_y = find_anchor(
            pos_y, self._outputs, current, extent_y,
            density=cfg.density, tolerance=cfg.snap_tolerance,
        )
        self._drag_x = pos_x if self._anchor_x is None else self._map(self._anchor_x)
        self._drag_y = pos_y if self._anchor_y is None else self._map(self._anchor_y)
        self.queue_draw()

    def _on_drag_end(self, gesture: Gtk.GestureDrag, offset_x: float, offset_y: float) -> None:
        idx = self._dragged
        if idx < 0:
            return
        moved = self._moved
        self._dragged = -1
        self._moved = False
        if not moved:
            self.emit("output-activated", idx)
            return
        # Snapped axes land exactly on the neighbour's edge
        density = self._config.density
        wx = self._anchor_x if self._anchor_x is not None else map_to_world(self._drag_x, density)
        wy = self._anchor_y if self._anchor_y is not None else map_to_world(self._drag_y, density)
        self.emit("output-moved", idx, wx, wy)
        # The move may have pushed the output past the top or left margin
        self._fit_origin()
        self.queue_draw()

    # ── Drawing ──────────────────────────────────────────────────────

    def _draw(self, area: Gtk.DrawingArea, cr, width: int, height: int) -> None:
        cr.set_source_rgb(*COLOR_BG)
        cr.paint()
        self._draw_grid(cr, width, height)
        for i, o in enumerate(self._outputs):
            self._draw_output(cr, i, o)

    def _draw_grid(self, cr, width: int, height: int) -> None:
        cr.set_source_rgb(*COLOR_GRID)
        cr.set_line_width(0.5)

        # One line per 1000 world pixels
        spacing = max(self._map(1000), 10)
        x = self._origin_x % spacing
        while x < width:
            cr.move_to(x, 0)
            cr.line_to(x, height)
            x += spacing
        y = self._origin_y % spacing
        while y < height:
            cr.move_to(0, y)
            cr.line_to(width, y)
            y += spacing
        cr.stroke()

    def _draw_output(self, cr, idx: int, o: Output) -> None:
        mx, my, sw, sh = self._map_rect(idx)
        sx, sy = self._origin_x + mx, self._origin_y + my
        dragged = idx == self._dragged and self._moved

        fill, alpha = STYLE_FILL[o.style_class]
        cr.set_source_rgba(*fill, alpha)
        _rounded_rect(cr, sx, sy, sw, sh, 4)
        cr.fill()

        if dragged:
            cr.set_source_rgb(*COLOR_DRAGGED)
            cr.set_line_width(2.5)
        else:
            cr.set_source_rgba(*COLOR_BORDER, alpha)
            cr.set_line_width(1.0)
        _rounded_rect(cr, sx, sy, sw, sh, 4)
        cr.stroke()

        if sw > 40 and sh > 20:
            self._draw_output_text(cr, o, sx, sy, sw, sh, alpha)

    def _draw_output_text(
        self, cr, o: Output, sx: float, sy: float, sw: float, sh: float, alpha: float,
    ) -> None:
        font_size = min(14, max(8, sw / 10))
        small = min(10, max(6, sw / 14))
        lines = [(o.name or "?", font_size, COLOR_TEXT)]
        for text in (o.make, o.model):
            if text:
                lines.append((text, small, COLOR_TEXT_DIM))

        total = sum(size + 4 for _, size, _ in lines)
        ty = sy + (sh - total) / 2
        for text, size, color in lines:
            ty += size + 4
            if ty > sy + sh:
                break
            cr.set_source_rgba(*color, alpha)
            cr.set_font_size(size)
            extents = cr.text_extents(text)
            cr.move_to(sx + (sw - extents.width) / 2, ty)
            cr.show_text(text)


def _rounded_rect(cr, x: float, y: float, w: float, h: float, r: float) -> None:
    """Draw a rounded rectangle path."""
    cr.new_sub_path()
    cr.arc(x + w - r, y + r, r, -math.pi / 2, 0)
    cr.arc(x + w - r, y + h - r, r, 0, math.pi / 2)
    cr.arc(x + r, y + h - r, r, math.pi / 2, math.pi)
    cr.arc(x + r, y + r, r, math.pi, 3 * math.pi / 2)
    cr.close_path()
