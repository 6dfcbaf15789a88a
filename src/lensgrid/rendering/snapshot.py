from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from esper import World

from lensgrid.components.cursor_state import CursorState
from lensgrid.components.grid import Grid
from lensgrid.components.lens import Lens


@dataclass(frozen=True, slots=True)
class LensView:
    """Read-only copy of what a renderer needs for one lens."""
    entity: int
    src_x: float
    src_y: float
    size: float
    dst_x: float
    dst_y: float
    rotation: float
    flip_x: float


@dataclass(frozen=True, slots=True)
class RenderSnapshot:
    """Frame-scoped view of the puzzle; no engine logic needed to draw it."""
    origin_x: float
    origin_y: float
    cell_size: float
    rows: int
    cols: int
    lenses: Tuple[LensView, ...] = field(default_factory=tuple)
    cursor: Tuple[float, float] = (0.0, 0.0)
    locked: bool = False

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size


def build_render_snapshot(
    world: World,
    grid: Grid,
    entities: Sequence[int],
    cursor: CursorState | None = None,
) -> RenderSnapshot:
    views: List[LensView] = []
    for ent in entities:
        lens: Lens = world.component_for_entity(ent, Lens)
        views.append(LensView(
            entity=ent,
            src_x=lens.src.x,
            src_y=lens.src.y,
            size=lens.dst.size,
            dst_x=lens.dst.x,
            dst_y=lens.dst.y,
            rotation=lens.current_rotation,
            flip_x=lens.current_flip_x,
        ))
    return RenderSnapshot(
        origin_x=grid.origin_x,
        origin_y=grid.origin_y,
        cell_size=grid.cell_size,
        rows=grid.rows,
        cols=grid.cols,
        lenses=tuple(views),
        cursor=(cursor.x, cursor.y) if cursor is not None else (0.0, 0.0),
        locked=cursor.locked if cursor is not None else False,
    )
