"""Composition root of the puzzle engine.

The controller owns the esper world (lenses, grid, cursor and animations), the
systems that mutate it, and the drag session. Hosts talk to it either through
the event bus or by calling its methods directly.
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Sequence

from lensgrid.components.grid import Grid
from lensgrid.components.lens import CellRect, Lens
from lensgrid.constants import (
    GRID_COLS,
    GRID_ROWS,
    GRID_SPACING,
    LENS_SIZE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from lensgrid.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_DRAG_BEGIN,
    EVENT_DRAG_END,
    EVENT_DRAG_MOVE,
    EVENT_FLIP_REQUEST,
    EVENT_GRID_RECENTERED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PUZZLE_SHUFFLED,
    EVENT_PUZZLE_SOLVED,
    EVENT_RESIZE,
    EVENT_ROTATE_REQUEST,
    EventBus,
)
from lensgrid.rendering.snapshot import RenderSnapshot, build_render_snapshot
from lensgrid.systems import lens_ops
from lensgrid.systems.animation import KIND_SNAP, AnimationSystem
from lensgrid.systems.cursor_system import CursorSystem
from lensgrid.systems.slide_system import SlideSystem
from lensgrid.systems.transform_system import TransformSystem
from lensgrid.utils.derangement import random_derangement
from lensgrid.utils.geometry import cell_origin, centered_origin
from lensgrid.utils.shuffle_planner import ColSlide, Flip, RowSlide, Rotate, ShuffleMove, plan_shuffle
from lensgrid.world import create_world

logger = logging.getLogger(__name__)


class PuzzleController:
    def __init__(
        self,
        event_bus: EventBus,
        *,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        cell_size: float = LENS_SIZE,
        spacing: float = GRID_SPACING,
        viewport_width: float = WINDOW_WIDTH,
        viewport_height: float = WINDOW_HEIGHT,
        rng: random.Random | None = None,
        shuffle: bool = True,
        derange: bool = False,
    ):
        self.event_bus = event_bus
        self.world = create_world(event_bus, rng=rng)
        self.rng: random.Random = getattr(self.world, "random")
        self.spacing = spacing
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        origin_x, origin_y = centered_origin(viewport_width, viewport_height, rows, cols, cell_size, spacing)
        self.grid_entity = self.world.create_entity(
            Grid(rows=rows, cols=cols, cell_size=cell_size, origin_x=origin_x, origin_y=origin_y)
        )
        self.animation_system = AnimationSystem(self.world, event_bus)
        self.transform_system = TransformSystem(self.world, event_bus, self.animation_system)
        self.slide_system = SlideSystem(self.world, event_bus, self.animation_system)
        self.cursor_system = CursorSystem(self.world, event_bus, self.animation_system,
                                          viewport_width, viewport_height)
        self._lens_entities: List[int] = []
        self._solved_announced = False

        event_bus.subscribe(EVENT_ROTATE_REQUEST, self.on_rotate_request)
        event_bus.subscribe(EVENT_FLIP_REQUEST, self.on_flip_request)
        event_bus.subscribe(EVENT_DRAG_BEGIN, self.on_drag_begin)
        event_bus.subscribe(EVENT_DRAG_MOVE, self.on_drag_move)
        event_bus.subscribe(EVENT_DRAG_END, self.on_drag_end)
        event_bus.subscribe(EVENT_RESIZE, self.on_resize)
        event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)
        event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

        self.new_game(shuffle=shuffle, derange=derange)

    # -- state access ---------------------------------------------------
    @property
    def grid(self) -> Grid:
        return self.world.component_for_entity(self.grid_entity, Grid)

    @property
    def lens_entities(self) -> List[int]:
        return list(self._lens_entities)

    def lens(self, entity: int) -> Lens:
        return self.world.component_for_entity(entity, Lens)

    def lenses(self) -> List[Lens]:
        return [self.lens(ent) for ent in self._lens_entities]

    def is_dragging(self) -> bool:
        return self.slide_system.session is not None

    def is_solved(self) -> bool:
        return lens_ops.is_solved(self.world, self.grid, self._lens_entities)

    def snapshot(self) -> RenderSnapshot:
        return build_render_snapshot(self.world, self.grid, self._lens_entities, self.cursor_system.state)

    # -- game lifecycle -------------------------------------------------
    def new_game(self, *, shuffle: bool = True, derange: bool = False) -> List[ShuffleMove]:
        """Replace every lens with a fresh set and scramble it.

        Lenses start solved; with ``derange`` their destinations are first permuted
        so that no lens sits on its own cell. ``shuffle`` then applies random legal
        moves. Returns the moves applied.
        """
        self.finish_animations()
        self.slide_system.cancel()
        for ent in self._lens_entities:
            self.world.delete_entity(ent, immediate=True)
        grid = self.grid
        sources = [cell_origin(grid, row, col) for row in range(grid.rows) for col in range(grid.cols)]
        order = list(range(len(sources)))
        if derange:
            order = random_derangement(len(sources), self.rng)
        self._lens_entities = []
        for index, (x, y) in enumerate(sources):
            dst_x, dst_y = sources[order[index]]
            lens = Lens(
                src=CellRect(x, y, grid.cell_size),
                dst=CellRect(dst_x, dst_y, grid.cell_size),
                src_row=index // grid.cols,
                src_col=index % grid.cols,
            )
            self._lens_entities.append(self.world.create_entity(lens))
        self._solved_announced = False
        moves: List[ShuffleMove] = []
        if shuffle:
            moves = self.shuffle()
        logger.debug("new game: %d lenses, %d shuffle moves, derange=%s", len(self._lens_entities), len(moves), derange)
        return moves

    def shuffle(self, moves: Sequence[ShuffleMove] | None = None) -> List[ShuffleMove]:
        """Apply ``moves`` (or a freshly planned list) immediately; returns the list."""
        if moves is None:
            grid = self.grid
            moves = plan_shuffle(self.rng, grid.rows, grid.cols, len(self._lens_entities))
        self.apply_moves(moves)
        self.event_bus.emit(EVENT_PUZZLE_SHUFFLED, moves=list(moves))
        return list(moves)

    def apply_moves(self, moves: Iterable[ShuffleMove]) -> None:
        for move in moves:
            self.apply_move(move)

    def apply_move(self, move: ShuffleMove) -> None:
        """Apply one move at once, without animation."""
        world, grid, entities = self.world, self.grid, self._lens_entities
        match move:
            case RowSlide(row=row, count=count, step=step):
                for _ in range(count):
                    lens_ops.apply_row_slide_immediate(world, grid, entities, row, step)
            case ColSlide(col=col, count=count, step=step):
                for _ in range(count):
                    lens_ops.apply_column_slide_immediate(world, grid, entities, col, step)
            case Rotate(index=index, times=times):
                for _ in range(times):
                    lens_ops.apply_rotation_immediate(world, grid, entities, entities[index])
            case Flip(index=index):
                lens_ops.apply_flip_immediate(world, grid, entities, entities[index])
            case _:
                raise TypeError(f"unknown shuffle move: {move!r}")

    def apply_row_slide_immediate(self, row: int, step: int = 1) -> List[int]:
        return lens_ops.apply_row_slide_immediate(self.world, self.grid, self._lens_entities, row, step)

    def apply_column_slide_immediate(self, col: int, step: int = 1) -> List[int]:
        return lens_ops.apply_column_slide_immediate(self.world, self.grid, self._lens_entities, col, step)

    # -- hit testing ----------------------------------------------------
    def lens_at_source(self, x: float, y: float) -> int | None:
        """Lens whose fixed source cell contains (x, y)."""
        for ent in self._lens_entities:
            if self.lens(ent).src.contains(x, y):
                return ent
        return None

    def lens_at_destination(self, x: float, y: float) -> int | None:
        """Topmost lens drawn at (x, y); later lenses are drawn on top."""
        for ent in reversed(self._lens_entities):
            if self.lens(ent).dst.contains(x, y, inclusive=True):
                return ent
        return None

    def tile_at_pixel(self, x: float, y: float) -> int | None:
        found = self.lens_at_source(x, y)
        if found is None:
            found = self.lens_at_destination(x, y)
        return found

    # -- actions --------------------------------------------------------
    def rotate(self, entity: int) -> List[int]:
        affected = self.transform_system.rotate(entity)
        self._check_solved()
        return affected

    def flip(self, entity: int) -> List[int]:
        affected = self.transform_system.flip(entity)
        self._check_solved()
        return affected

    def rotate_at(self, x: float, y: float) -> List[int]:
        entity = self.lens_at_source(x, y)
        if entity is None:
            return []
        return self.rotate(entity)

    def flip_at(self, x: float, y: float) -> List[int]:
        entity = self.lens_at_source(x, y)
        if entity is None:
            return []
        return self.flip(entity)

    def begin_drag(self, x: float, y: float) -> bool:
        entity = self.tile_at_pixel(x, y)
        if entity is None:
            return False
        self.slide_system.begin(entity, x, y)
        self.cursor_system.freeze()
        return True

    def update_drag(self, dx: float, dy: float) -> bool:
        return self.slide_system.move(dx, dy)

    def end_drag(self) -> bool:
        return self.slide_system.end()

    # -- layout ---------------------------------------------------------
    def recenter(self, origin_x: float, origin_y: float) -> None:
        """Move the grid origin; every stored position shifts by the same delta."""
        grid = self.grid
        dx = origin_x - grid.origin_x
        dy = origin_y - grid.origin_y
        lens_ops.translate_lenses(self.world, self._lens_entities, dx, dy)
        self.slide_system.translate(dx, dy)
        self.animation_system.retarget_snap(dx, dy)
        grid.origin_x = origin_x
        grid.origin_y = origin_y
        self.event_bus.emit(EVENT_GRID_RECENTERED, origin=(origin_x, origin_y), delta=(dx, dy))

    def resize(self, width: float, height: float) -> None:
        self.viewport_width = width
        self.viewport_height = height
        grid = self.grid
        self.recenter(*centered_origin(width, height, grid.rows, grid.cols, grid.cell_size, self.spacing))
        self.cursor_system.resize(width, height)

    # -- animation ------------------------------------------------------
    def tick(self, dt: float) -> None:
        self.animation_system.advance(dt)

    def finish_animations(self) -> None:
        self.animation_system.finish()

    # -- bus handlers ---------------------------------------------------
    def on_rotate_request(self, sender, **kwargs):
        x = kwargs.get('x'); y = kwargs.get('y')
        if x is None or y is None:
            return
        self.rotate_at(x, y)

    def on_flip_request(self, sender, **kwargs):
        x = kwargs.get('x'); y = kwargs.get('y')
        if x is None or y is None:
            return
        self.flip_at(x, y)

    def on_drag_begin(self, sender, **kwargs):
        x = kwargs.get('x'); y = kwargs.get('y')
        if x is None or y is None:
            return
        self.begin_drag(x, y)

    def on_drag_move(self, sender, **kwargs):
        self.update_drag(kwargs.get('dx', 0.0), kwargs.get('dy', 0.0))

    def on_drag_end(self, sender, **kwargs):
        self.end_drag()

    def on_resize(self, sender, **kwargs):
        width = kwargs.get('width'); height = kwargs.get('height')
        if width is None or height is None:
            return
        self.resize(width, height)

    def on_new_game_request(self, sender, **kwargs):
        self.new_game(derange=kwargs.get('derange', False))

    def on_animation_complete(self, sender, **kwargs):
        if kwargs.get('kind') == KIND_SNAP:
            self._check_solved()

    def _check_solved(self) -> None:
        if self.animation_system.is_active(KIND_SNAP) or self.is_dragging():
            return
        if self.is_solved():
            if not self._solved_announced:
                self._solved_announced = True
                logger.info("puzzle solved")
                self.event_bus.emit(EVENT_PUZZLE_SOLVED)
        else:
            self._solved_announced = False
