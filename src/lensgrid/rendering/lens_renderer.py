from __future__ import annotations

import math
from typing import Dict, List, Tuple

from lensgrid.constants import (
    CURSOR_ARM,
    CURSOR_DOT_RADIUS,
    DST_BORDER_WIDTH,
    GRID_BORDER_WIDTH,
    SRC_BORDER_WIDTH,
)
from lensgrid.rendering.snapshot import LensView, RenderSnapshot

Point = Tuple[float, float]

BACKGROUND = (26, 26, 26)
ACCENT = (0, 255, 0)
SRC_BORDER = (255, 0, 0, 128)


def lens_local_to_screen(view: LensView, draw_x: float, draw_y: float, lx: float, ly: float) -> Point:
    """Map a point given relative to the source cell centre into the drawn lens.

    The point is mirrored horizontally by ``flip_x`` and then turned clockwise by
    ``rotation`` degrees around the centre of the lens drawn at (draw_x, draw_y).
    """
    half = view.size / 2
    angle = -math.radians(view.rotation)
    mx = lx * view.flip_x
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (
        draw_x + half + mx * cos_a - ly * sin_a,
        draw_y + half + mx * sin_a + ly * cos_a,
    )


def wrapped_positions(snapshot: RenderSnapshot, view: LensView) -> List[Point]:
    """Where to draw a lens, including the copy that re-enters from the opposite edge."""
    positions = [(view.dst_x, view.dst_y)]
    rel_x = view.dst_x - snapshot.origin_x
    rel_y = view.dst_y - snapshot.origin_y
    if rel_x < 0:
        positions.append((view.dst_x + snapshot.width, view.dst_y))
    elif rel_x + view.size > snapshot.width:
        positions.append((view.dst_x - snapshot.width, view.dst_y))
    if rel_y < 0:
        positions.append((view.dst_x, view.dst_y + snapshot.height))
    elif rel_y + view.size > snapshot.height:
        positions.append((view.dst_x, view.dst_y - snapshot.height))
    return positions


def cursor_over_source(view: LensView, cursor: Point) -> bool:
    cx, cy = cursor
    return (cx + CURSOR_ARM >= view.src_x and cx - CURSOR_ARM < view.src_x + view.size
            and cy + CURSOR_ARM >= view.src_y and cy - CURSOR_ARM < view.src_y + view.size)


class LensRenderer:
    """Draws a RenderSnapshot with arcade primitives.

    ``layout`` keeps, per lens entity, the positions it was drawn at in the last
    frame so headless callers can inspect the frame without a window.
    """
    def __init__(self):
        self.layout: Dict[int, List[Point]] = {}

    def render(self, arcade, snapshot: RenderSnapshot, headless: bool, scissor=None) -> None:
        self.layout = {view.entity: wrapped_positions(snapshot, view) for view in snapshot.lenses}
        if headless:
            return
        self._draw_cursor(arcade, snapshot.cursor)
        for view in snapshot.lenses:
            self._draw_source_border(arcade, view)
        if scissor is not None:
            scissor((int(snapshot.origin_x), int(snapshot.origin_y), int(snapshot.width), int(snapshot.height)))
        for view in snapshot.lenses:
            for draw_x, draw_y in self.layout[view.entity]:
                self._draw_lens(arcade, view, draw_x, draw_y, snapshot.cursor)
        if scissor is not None:
            scissor(None)
        left, bottom = snapshot.origin_x, snapshot.origin_y
        right, top = left + snapshot.width, bottom + snapshot.height
        arcade.draw_polygon_outline(
            [(left, bottom), (right, bottom), (right, top), (left, top)], ACCENT, GRID_BORDER_WIDTH
        )

    def _draw_source_border(self, arcade, view: LensView) -> None:
        x, y, s, w = view.src_x, view.src_y, view.size, SRC_BORDER_WIDTH
        for left, bottom, width, height in ((x, y, s, w), (x, y + s - w, s, w), (x, y, w, s), (x + s - w, y, w, s)):
            arcade.draw_polygon_filled(
                [(left, bottom), (left + width, bottom), (left + width, bottom + height), (left, bottom + height)],
                SRC_BORDER,
            )

    def _draw_lens(self, arcade, view: LensView, draw_x: float, draw_y: float, cursor: Point) -> None:
        half = view.size / 2

        def to_screen(lx: float, ly: float) -> Point:
            return lens_local_to_screen(view, draw_x, draw_y, lx, ly)

        square = [to_screen(-half, -half), to_screen(half, -half), to_screen(half, half), to_screen(-half, half)]
        arcade.draw_polygon_filled(square, BACKGROUND)
        # Corner notch marks the source cell's top-left so orientation stays readable.
        notch = half * 0.3
        arcade.draw_polygon_filled(
            [to_screen(-half, half), to_screen(-half + notch, half), to_screen(-half, half - notch)], ACCENT
        )
        if cursor_over_source(view, cursor):
            lx = cursor[0] - view.src_x - half
            ly = cursor[1] - view.src_y - half
            arcade.draw_line(*to_screen(lx - CURSOR_ARM, ly), *to_screen(lx + CURSOR_ARM, ly), ACCENT, 2)
            arcade.draw_line(*to_screen(lx, ly - CURSOR_ARM), *to_screen(lx, ly + CURSOR_ARM), ACCENT, 2)
            arcade.draw_circle_filled(*to_screen(lx, ly), CURSOR_DOT_RADIUS, ACCENT)
        arcade.draw_polygon_outline(square, ACCENT, DST_BORDER_WIDTH)

    def _draw_cursor(self, arcade, cursor: Point) -> None:
        x, y = cursor
        arcade.draw_line(x - CURSOR_ARM, y, x + CURSOR_ARM, y, ACCENT, 2)
        arcade.draw_line(x, y - CURSOR_ARM, x, y + CURSOR_ARM, ACCENT, 2)
        arcade.draw_circle_filled(x, y, CURSOR_DOT_RADIUS, ACCENT)
