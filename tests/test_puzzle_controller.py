import pytest

from lensgrid.events.bus import (
    EVENT_GRID_RECENTERED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PUZZLE_SHUFFLED,
    EVENT_PUZZLE_SOLVED,
    EVENT_RESIZE,
    EventBus,
)
from lensgrid.systems import lens_ops
from lensgrid.systems.animation import KIND_SNAP
from lensgrid.utils.shuffle_planner import Flip, RowSlide, Rotate, inverse_moves
from tests.helpers import capture, entity_at, make_controller, source_center


def test_new_game_builds_centered_solved_grid():
    controller = make_controller()
    grid = controller.grid
    assert (grid.origin_x, grid.origin_y) == (256, 128)
    assert len(controller.lens_entities) == 16
    assert controller.is_solved()
    first = controller.lens(controller.lens_entities[0])
    assert (first.src.x, first.src.y) == (256, 128)
    assert (first.dst.x, first.dst.y) == (256, 128)


@pytest.mark.parametrize("seed", [1, 2, 3, 42, 1234])
def test_shuffled_game_is_solvable_by_inverse_replay(seed):
    controller = make_controller(seed=seed)
    moves = controller.shuffle()
    assert lens_ops.is_bijection(controller.world, controller.grid, controller.lens_entities)
    controller.apply_moves(inverse_moves(moves))
    assert controller.is_solved()


def test_shuffle_scrambles_the_grid():
    controller = make_controller(seed=8)
    moves = controller.shuffle()
    assert moves
    assert not controller.is_solved()


def test_deranged_game_leaves_no_lens_on_its_own_cell():
    controller = make_controller(seed=5, derange=True)
    grid = controller.grid
    for ent in controller.lens_entities:
        lens = controller.lens(ent)
        assert lens_ops.dst_cell(controller.world, grid, ent) != (lens.src_row, lens.src_col)
    assert lens_ops.is_bijection(controller.world, grid, controller.lens_entities)


def test_new_game_replaces_lenses_and_emits_shuffle():
    bus = EventBus()
    shuffled = capture(bus, EVENT_PUZZLE_SHUFFLED)
    controller = make_controller(bus=bus)
    old = set(controller.lens_entities)
    bus.emit(EVENT_NEW_GAME_REQUEST)
    assert len(shuffled) == 1
    assert shuffled[0]["moves"]
    assert len(controller.lens_entities) == 16
    for ent in old - set(controller.lens_entities):
        assert not controller.world.entity_exists(ent)


def test_apply_move_dispatches_each_kind():
    controller = make_controller()
    controller.apply_move(RowSlide(row=0, count=4))
    assert controller.is_solved()
    controller.apply_move(Rotate(index=5, times=4))
    assert controller.is_solved()
    controller.apply_move(Flip(index=5))
    assert controller.lens(controller.lens_entities[5]).flip_x == -1
    with pytest.raises(TypeError):
        controller.apply_move(("flip", 5))


def test_recenter_translates_lenses_and_grid():
    bus = EventBus()
    recentered = capture(bus, EVENT_GRID_RECENTERED)
    controller = make_controller(bus=bus)
    before = [(l.src.x, l.src.y, l.dst.x, l.dst.y) for l in controller.lenses()]
    controller.recenter(300, 100)
    assert recentered == [{"origin": (300, 100), "delta": (44, -28)}]
    after = [(l.src.x, l.src.y, l.dst.x, l.dst.y) for l in controller.lenses()]
    for (sx, sy, dx, dy), (sx2, sy2, dx2, dy2) in zip(before, after):
        assert (sx2 - sx, sy2 - sy, dx2 - dx, dy2 - dy) == (44, -28, 44, -28)
    assert controller.is_solved()


def test_recenter_during_drag_shifts_snapshot():
    controller = make_controller()
    assert controller.begin_drag(*source_center(controller, 2, 1))
    controller.update_drag(0, 30)
    controller.recenter(controller.grid.origin_x + 10, controller.grid.origin_y + 20)
    controller.update_drag(0, -30)
    grid = controller.grid
    for ent in controller.lens_entities:
        lens = controller.lens(ent)
        assert (lens.dst.x - grid.origin_x) % grid.cell_size == pytest.approx(0)
        assert (lens.dst.y - grid.origin_y) % grid.cell_size == pytest.approx(0)
    controller.end_drag()
    controller.finish_animations()
    assert controller.is_solved()


def test_recenter_during_snap_shifts_targets():
    controller = make_controller()
    last = entity_at(controller, 1, 3)
    controller.begin_drag(*source_center(controller, 1, 3))
    controller.update_drag(0.6 * controller.grid.cell_size, 0)
    controller.end_drag()
    controller.tick(0.05)
    controller.recenter(0, 0)
    controller.finish_animations()
    lens = controller.lens(last)
    assert (lens.dst.x, lens.dst.y) == pytest.approx((0, 128))
    assert lens_ops.is_bijection(controller.world, controller.grid, controller.lens_entities)


def test_resize_event_recenters_grid():
    bus = EventBus()
    controller = make_controller(bus=bus)
    bus.emit(EVENT_RESIZE, width=800, height=600)
    grid = controller.grid
    assert (grid.origin_x, grid.origin_y) == (144, 44)
    assert controller.lens(controller.lens_entities[0]).src.x == 144
    bus.emit(EVENT_RESIZE)
    assert (grid.origin_x, grid.origin_y) == (144, 44)


def test_solved_event_fires_once_when_rotations_return_home():
    bus = EventBus()
    solved = capture(bus, EVENT_PUZZLE_SOLVED)
    controller = make_controller(bus=bus)
    entity = entity_at(controller, 2, 1)
    for _ in range(3):
        controller.rotate(entity)
    assert solved == []
    controller.rotate(entity)
    assert len(solved) == 1
    controller.finish_animations()
    assert len(solved) == 1


def test_solved_event_waits_for_snap_to_land():
    bus = EventBus()
    solved = capture(bus, EVENT_PUZZLE_SOLVED)
    controller = make_controller(bus=bus)
    controller.apply_row_slide_immediate(0)
    controller.begin_drag(*source_center(controller, 0, 1))
    controller.update_drag(-controller.grid.cell_size, 0)
    controller.end_drag()
    assert controller.animation_system.is_active(KIND_SNAP)
    assert solved == []
    controller.tick(0.5)
    assert len(solved) == 1
    assert controller.is_solved()


def test_snapshot_reflects_display_state():
    controller = make_controller()
    entity = entity_at(controller, 0, 0)
    controller.rotate(entity)
    controller.tick(0.15)
    snap = controller.snapshot()
    assert (snap.origin_x, snap.origin_y, snap.rows, snap.cols) == (256, 128, 4, 4)
    assert snap.width == snap.height == 512
    views = {view.entity: view for view in snap.lenses}
    assert views[entity].rotation == pytest.approx(78.75)
    assert snap.cursor == (512, 384)


def test_controller_accepts_custom_geometry():
    controller = make_controller(rows=3, cols=5, cell_size=64, width=640, height=480)
    grid = controller.grid
    assert (grid.rows, grid.cols, grid.cell_size) == (3, 5, 64)
    assert (grid.origin_x, grid.origin_y) == (160, 144)
    assert len(controller.lens_entities) == 15


def test_seeded_games_are_reproducible():
    a = make_controller(seed=99, shuffle=True)
    b = make_controller(seed=99, shuffle=True)
    assert [(l.dst.x, l.dst.y, l.rotation, l.flip_x) for l in a.lenses()] == [
        (l.dst.x, l.dst.y, l.rotation, l.flip_x) for l in b.lenses()
    ]
