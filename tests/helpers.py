from __future__ import annotations

import random
from typing import Any, Dict, List

from lensgrid.events.bus import EventBus
from lensgrid.systems.lens_ops import dst_cell
from lensgrid.systems.puzzle_controller import PuzzleController


def make_controller(
    rows: int = 4,
    cols: int = 4,
    *,
    seed: int = 1234,
    shuffle: bool = False,
    derange: bool = False,
    bus: EventBus | None = None,
    cell_size: float = 128,
    width: float = 1024,
    height: float = 768,
) -> PuzzleController:
    """Controller over a solved grid unless ``shuffle``/``derange`` say otherwise."""
    return PuzzleController(
        bus or EventBus(),
        rows=rows,
        cols=cols,
        cell_size=cell_size,
        viewport_width=width,
        viewport_height=height,
        rng=random.Random(seed),
        shuffle=shuffle,
        derange=derange,
    )


def entity_at(controller: PuzzleController, row: int, col: int) -> int:
    """Lens entity whose destination is (row, col)."""
    for ent in controller.lens_entities:
        if dst_cell(controller.world, controller.grid, ent) == (row, col):
            return ent
    raise AssertionError(f"no lens at ({row}, {col})")


def source_center(controller: PuzzleController, row: int, col: int) -> tuple[float, float]:
    grid = controller.grid
    return (
        grid.origin_x + col * grid.cell_size + grid.cell_size / 2,
        grid.origin_y + row * grid.cell_size + grid.cell_size / 2,
    )


def capture(bus: EventBus, name: str) -> List[Dict[str, Any]]:
    """Subscribe to ``name`` and collect every payload it emits."""
    received: List[Dict[str, Any]] = []

    def handler(sender, **kwargs):
        received.append(kwargs)

    bus.subscribe(name, handler)
    return received
