"""Immediate (non-animated) puzzle primitives shared by live play and shuffling."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from esper import World

from lensgrid.components.grid import Grid
from lensgrid.components.lens import Lens
from lensgrid.errors import GridInvariantError
from lensgrid.utils.geometry import Cell, cell_index_of, cell_origin, in_bounds

# up, down, left, right
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def lens_for(world: World, entity: int) -> Lens:
    return world.component_for_entity(entity, Lens)


def dst_cell(world: World, grid: Grid, entity: int) -> Cell:
    lens = lens_for(world, entity)
    return cell_index_of(grid, lens.dst.x, lens.dst.y)


def lenses_at_cell(world: World, grid: Grid, entities: Iterable[int], row: int, col: int) -> List[int]:
    return [ent for ent in entities if dst_cell(world, grid, ent) == (row, col)]


def lens_at_cell(world: World, grid: Grid, entities: Iterable[int], row: int, col: int) -> int | None:
    """Lens whose destination is (row, col); raises if the cell is shared."""
    found = lenses_at_cell(world, grid, entities, row, col)
    if len(found) > 1:
        raise GridInvariantError(f"cell ({row}, {col}) is occupied by lenses {found}")
    return found[0] if found else None


def adjacent_lenses(world: World, grid: Grid, entities: Sequence[int], entity: int) -> List[int]:
    """The lens itself followed by its orthogonal neighbours by destination cell.

    Neighbours outside the grid are skipped; adjacency never wraps.
    """
    affected = [entity]
    row, col = dst_cell(world, grid, entity)
    for d_row, d_col in NEIGHBOR_OFFSETS:
        n_row, n_col = row + d_row, col + d_col
        if not in_bounds(grid, n_row, n_col):
            continue
        neighbor = lens_at_cell(world, grid, entities, n_row, n_col)
        if neighbor is not None:
            affected.append(neighbor)
    return affected


def apply_rotation_immediate(world: World, grid: Grid, entities: Sequence[int], entity: int) -> List[int]:
    affected = adjacent_lenses(world, grid, entities, entity)
    for ent in affected:
        lens = lens_for(world, ent)
        lens.rotation = (lens.rotation + 90) % 360
        lens.current_rotation = lens.rotation
    return affected


def apply_flip_immediate(world: World, grid: Grid, entities: Sequence[int], entity: int) -> List[int]:
    affected = adjacent_lenses(world, grid, entities, entity)
    for ent in affected:
        lens = lens_for(world, ent)
        lens.flip_x = -lens.flip_x
        lens.current_flip_x = lens.flip_x
    return affected


def lenses_in_row(world: World, grid: Grid, entities: Iterable[int], row: int) -> List[int]:
    return [ent for ent in entities if dst_cell(world, grid, ent)[0] == row]


def lenses_in_column(world: World, grid: Grid, entities: Iterable[int], col: int) -> List[int]:
    return [ent for ent in entities if dst_cell(world, grid, ent)[1] == col]


def apply_row_slide_immediate(world: World, grid: Grid, entities: Sequence[int], row: int, step: int = 1) -> List[int]:
    """Shift every lens in ``row`` by ``step`` columns with wraparound."""
    moved = lenses_in_row(world, grid, entities, row)
    for ent in moved:
        lens = lens_for(world, ent)
        _, col = dst_cell(world, grid, ent)
        lens.dst.x, _ = cell_origin(grid, row, (col + step) % grid.cols)
    return moved


def apply_column_slide_immediate(world: World, grid: Grid, entities: Sequence[int], col: int, step: int = 1) -> List[int]:
    """Shift every lens in ``col`` by ``step`` rows with wraparound."""
    moved = lenses_in_column(world, grid, entities, col)
    for ent in moved:
        lens = lens_for(world, ent)
        row, _ = dst_cell(world, grid, ent)
        _, lens.dst.y = cell_origin(grid, (row + step) % grid.rows, col)
    return moved


def occupancy(world: World, grid: Grid, entities: Iterable[int]) -> Dict[Cell, List[int]]:
    cells: Dict[Cell, List[int]] = {}
    for ent in entities:
        cells.setdefault(dst_cell(world, grid, ent), []).append(ent)
    return cells


def is_bijection(world: World, grid: Grid, entities: Sequence[int]) -> bool:
    """True when every grid cell holds exactly one lens."""
    cells = occupancy(world, grid, entities)
    expected = {(r, c) for r in range(grid.rows) for c in range(grid.cols)}
    return set(cells) == expected and all(len(v) == 1 for v in cells.values())


def is_solved(world: World, grid: Grid, entities: Sequence[int]) -> bool:
    for ent in entities:
        lens = lens_for(world, ent)
        if dst_cell(world, grid, ent) != (lens.src_row, lens.src_col):
            return False
        if lens.rotation != 0 or lens.flip_x != 1:
            return False
    return True


def translate_lenses(world: World, entities: Iterable[int], dx: float, dy: float) -> None:
    for ent in entities:
        lens = lens_for(world, ent)
        lens.src.x += dx
        lens.src.y += dy
        lens.dst.x += dx
        lens.dst.y += dy


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise GridInvariantError("Grid component not found")


def lens_entities(world: World) -> List[int]:
    """All lens entities in source row-major order; list position is the lens index."""
    entries = list(world.get_component(Lens))
    entries.sort(key=lambda item: (item[1].src_row, item[1].src_col))
    return [ent for ent, _ in entries]
