import pytest

from lensgrid.errors import GridInvariantError
from lensgrid.systems import lens_ops
from tests.helpers import entity_at, make_controller


def _cells(controller):
    return {ent: lens_ops.dst_cell(controller.world, controller.grid, ent) for ent in controller.lens_entities}


def test_adjacent_lenses_interior_includes_four_neighbours():
    controller = make_controller()
    center = entity_at(controller, 1, 2)
    affected = lens_ops.adjacent_lenses(controller.world, controller.grid, controller.lens_entities, center)
    cells = [lens_ops.dst_cell(controller.world, controller.grid, ent) for ent in affected]
    assert cells == [(1, 2), (0, 2), (2, 2), (1, 1), (1, 3)]


@pytest.mark.parametrize("row, col, expected", [(0, 0, 3), (3, 3, 3), (0, 2, 4), (3, 1, 4), (2, 2, 5)])
def test_adjacent_lenses_do_not_wrap(row, col, expected):
    controller = make_controller()
    entity = entity_at(controller, row, col)
    affected = lens_ops.adjacent_lenses(controller.world, controller.grid, controller.lens_entities, entity)
    assert len(affected) == expected


def test_adjacent_lenses_follow_destination_not_source():
    controller = make_controller()
    controller.apply_row_slide_immediate(0)
    # The lens with source (0, 3) now sits at (0, 0), a corner.
    moved = controller.lens_entities[3]
    assert lens_ops.dst_cell(controller.world, controller.grid, moved) == (0, 0)
    affected = lens_ops.adjacent_lenses(controller.world, controller.grid, controller.lens_entities, moved)
    assert len(affected) == 3
    assert controller.lens_entities[0] in affected  # now at (0, 1)
    assert controller.lens_entities[4] in affected  # (1, 0) unchanged


def test_two_lenses_on_one_cell_is_an_invariant_violation():
    controller = make_controller()
    intruder = controller.lens(entity_at(controller, 0, 1))
    target = controller.lens(entity_at(controller, 1, 1))
    target.dst.x, target.dst.y = intruder.dst.x, intruder.dst.y
    with pytest.raises(GridInvariantError):
        lens_ops.adjacent_lenses(controller.world, controller.grid, controller.lens_entities, entity_at(controller, 0, 0))


def test_rotation_cascades_without_touching_flip():
    controller = make_controller()
    entity = entity_at(controller, 1, 1)
    affected = lens_ops.apply_rotation_immediate(controller.world, controller.grid, controller.lens_entities, entity)
    assert len(affected) == 5
    for ent in controller.lens_entities:
        lens = controller.lens(ent)
        if ent in affected:
            assert lens.rotation == 90
            assert lens.current_rotation == 90
        else:
            assert lens.rotation == 0
        assert lens.flip_x == 1


def test_rotation_wraps_after_four_quarter_turns():
    controller = make_controller()
    entity = entity_at(controller, 0, 0)
    for _ in range(4):
        lens_ops.apply_rotation_immediate(controller.world, controller.grid, controller.lens_entities, entity)
    assert all(lens.rotation == 0 for lens in controller.lenses())


def test_flip_cascades_without_touching_rotation():
    controller = make_controller()
    entity = entity_at(controller, 3, 0)
    affected = lens_ops.apply_flip_immediate(controller.world, controller.grid, controller.lens_entities, entity)
    assert len(affected) == 3
    for ent in affected:
        assert controller.lens(ent).flip_x == -1
        assert controller.lens(ent).rotation == 0
    lens_ops.apply_flip_immediate(controller.world, controller.grid, controller.lens_entities, entity)
    assert all(lens.flip_x == 1 for lens in controller.lenses())


def test_row_slide_moves_every_lens_one_column_with_wrap():
    controller = make_controller()
    before = _cells(controller)
    moved = controller.apply_row_slide_immediate(2)
    after = _cells(controller)
    assert len(moved) == 4
    for ent, (row, col) in before.items():
        if row == 2:
            assert after[ent] == (2, (col + 1) % 4)
        else:
            assert after[ent] == (row, col)


def test_column_slide_backwards_undoes_forwards():
    controller = make_controller()
    before = _cells(controller)
    controller.apply_column_slide_immediate(1)
    controller.apply_column_slide_immediate(1, step=-1)
    assert _cells(controller) == before


def test_full_cycle_row_slide_is_identity():
    controller = make_controller(rows=3, cols=5)
    before = _cells(controller)
    for _ in range(5):
        controller.apply_row_slide_immediate(1)
    assert _cells(controller) == before


def test_two_by_two_double_row_slide_is_identity():
    controller = make_controller(rows=2, cols=2)
    before = _cells(controller)
    controller.apply_row_slide_immediate(0)
    row0 = [ent for ent, cell in before.items() if cell[0] == 0]
    after_one = _cells(controller)
    assert after_one[row0[0]] == before[row0[1]]
    assert after_one[row0[1]] == before[row0[0]]
    controller.apply_row_slide_immediate(0)
    assert _cells(controller) == before
    assert controller.is_solved()


def test_is_bijection_detects_aliasing():
    controller = make_controller()
    assert lens_ops.is_bijection(controller.world, controller.grid, controller.lens_entities)
    lens = controller.lens(entity_at(controller, 2, 2))
    lens.dst.x += controller.grid.cell_size
    assert not lens_ops.is_bijection(controller.world, controller.grid, controller.lens_entities)


def test_lens_entities_are_in_source_order():
    controller = make_controller()
    ordered = lens_ops.lens_entities(controller.world)
    assert ordered == controller.lens_entities
    sources = [(controller.lens(e).src_row, controller.lens(e).src_col) for e in ordered]
    assert sources == [(r, c) for r in range(4) for c in range(4)]
