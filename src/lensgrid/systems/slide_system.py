from __future__ import annotations

import logging
from typing import List

from esper import World

from lensgrid.components.animation_snap import SnapTarget
from lensgrid.components.drag_session import HORIZONTAL, VERTICAL, DragSession
from lensgrid.components.lens import Lens
from lensgrid.constants import DRAG_DEADZONE, SNAP_DURATION
from lensgrid.events.bus import EVENT_DRAG_AXIS_LOCKED, EVENT_LINE_SNAPPED, EventBus
from lensgrid.systems.animation import KIND_SNAP, AnimationSystem
from lensgrid.systems.lens_ops import dst_cell, get_grid, lens_entities, lenses_in_column, lenses_in_row
from lensgrid.utils.geometry import line_length, round_half_up, wrap_offset

logger = logging.getLogger(__name__)


class SlideSystem:
    """Turns a press-and-drag gesture into a toroidal row or column slide.

    Positions during the drag are always snapshot + total delta, never accumulated
    frame by frame. Release snaps the line to the nearest cells along the shorter
    way round the wrap.
    """
    def __init__(self, world: World, event_bus: EventBus, animation_system: AnimationSystem,
                 *, deadzone: float = DRAG_DEADZONE, snap_duration: float = SNAP_DURATION):
        self.world = world
        self.event_bus = event_bus
        self.animation_system = animation_system
        self.deadzone = deadzone
        self.snap_duration = snap_duration
        self.session: DragSession | None = None

    def begin(self, entity: int, x: float, y: float) -> DragSession:
        self.session = DragSession(entity=entity, press_x=x, press_y=y)
        return self.session

    def move(self, dx: float, dy: float) -> bool:
        """Accumulate pointer motion; returns True once the gesture is a slide."""
        session = self.session
        if session is None:
            return False
        session.accumulated_x += dx
        session.accumulated_y += dy
        if not session.committed:
            abs_x = abs(session.accumulated_x)
            abs_y = abs(session.accumulated_y)
            if max(abs_x, abs_y) <= self.deadzone:
                return False
            self._commit_axis(session, HORIZONTAL if abs_x > abs_y else VERTICAL)
        self._slide_line(session)
        return True

    def end(self) -> bool:
        """Release the gesture; returns True when it was a slide (and a snap started)."""
        session = self.session
        self.session = None
        if session is None or not session.committed:
            return False
        targets = self.calculate_snap_targets(session.axis, session.index)
        if targets:
            self.animation_system.start_snap(session.axis, session.index, targets, self.snap_duration)
        self.event_bus.emit(
            EVENT_LINE_SNAPPED,
            axis=session.axis,
            index=session.index,
            entities=[t.entity for t in targets],
        )
        return True

    def cancel(self) -> None:
        self.session = None

    def translate(self, dx: float, dy: float) -> None:
        """Shift the live snapshot after a grid origin change."""
        if self.session is None:
            return
        self.session.snapshot = [(ent, x + dx, y + dy) for ent, x, y in self.session.snapshot]

    def calculate_snap_targets(self, axis: str, index: int) -> List[SnapTarget]:
        grid = get_grid(self.world)
        total = line_length(grid, axis)
        entities = lens_entities(self.world)
        if axis == HORIZONTAL:
            members = lenses_in_row(self.world, grid, entities, index)
        else:
            members = lenses_in_column(self.world, grid, entities, index)
        targets: List[SnapTarget] = []
        for ent in members:
            lens = self.world.component_for_entity(ent, Lens)
            if axis == HORIZONTAL:
                current, origin, count = lens.dst.x, grid.origin_x, grid.cols
            else:
                current, origin, count = lens.dst.y, grid.origin_y, grid.rows
            cell = round_half_up((current - origin) / grid.cell_size) % count
            final = origin + cell * grid.cell_size
            diff = final - current
            adjusted = final
            if abs(diff) > total / 2:
                adjusted = final - total if diff > 0 else final + total
            if axis == HORIZONTAL:
                targets.append(SnapTarget(ent, lens.dst.x, lens.dst.y, adjusted, lens.dst.y, final, lens.dst.y))
            else:
                targets.append(SnapTarget(ent, lens.dst.x, lens.dst.y, lens.dst.x, adjusted, lens.dst.x, final))
        return targets

    def _commit_axis(self, session: DragSession, axis: str) -> None:
        # The line is read from destination cells, which must not be mid-snap.
        self.animation_system.finish(KIND_SNAP)
        grid = get_grid(self.world)
        row, col = dst_cell(self.world, grid, session.entity)
        entities = lens_entities(self.world)
        if axis == HORIZONTAL:
            session.index = row
            members = lenses_in_row(self.world, grid, entities, row)
        else:
            session.index = col
            members = lenses_in_column(self.world, grid, entities, col)
        session.axis = axis
        session.snapshot = []
        for ent in members:
            lens = self.world.component_for_entity(ent, Lens)
            session.snapshot.append((ent, lens.dst.x, lens.dst.y))
        logger.debug("drag locked %s line %d (%d lenses)", axis, session.index, len(members))
        self.event_bus.emit(EVENT_DRAG_AXIS_LOCKED, axis=axis, index=session.index, entities=members)

    def _slide_line(self, session: DragSession) -> None:
        grid = get_grid(self.world)
        total = line_length(grid, session.axis)
        for ent, start_x, start_y in session.snapshot:
            lens = self.world.component_for_entity(ent, Lens)
            if session.axis == HORIZONTAL:
                lens.dst.x = grid.origin_x + wrap_offset(start_x + session.accumulated_x - grid.origin_x, total)
            else:
                lens.dst.y = grid.origin_y + wrap_offset(start_y + session.accumulated_y - grid.origin_y, total)
