import random

import pytest

from lensgrid.utils.shuffle_planner import ColSlide, Flip, RowSlide, Rotate, inverse_moves, plan_shuffle


def _kinds(moves):
    slides = [m for m in moves if isinstance(m, (RowSlide, ColSlide))]
    rotates = [m for m in moves if isinstance(m, Rotate)]
    flips = [m for m in moves if isinstance(m, Flip)]
    return slides, rotates, flips


@pytest.mark.parametrize("seed", range(25))
def test_plan_shuffle_counts_and_ranges(seed):
    moves = plan_shuffle(random.Random(seed), rows=4, cols=4, lens_count=16)
    slides, rotates, flips = _kinds(moves)
    assert len(slides) + len(rotates) + len(flips) == len(moves)
    assert 8 <= len(slides) <= 12
    assert 12 <= len(rotates) <= 16
    assert 12 <= len(flips) <= 16
    for move in slides:
        assert 1 <= move.count <= 3
        assert move.step == 1
        if isinstance(move, RowSlide):
            assert 0 <= move.row < 4
        else:
            assert 0 <= move.col < 4
    for move in rotates + flips:
        assert 0 <= move.index < 16


def test_plan_shuffle_interleaves_move_kinds():
    moves = plan_shuffle(random.Random(5), rows=4, cols=4, lens_count=16)
    first_kinds = {type(m) for m in moves[:12]}
    # An unshuffled list would start with a block of slides only.
    assert len(first_kinds) > 1


def test_plan_shuffle_is_reproducible_with_same_seed():
    a = plan_shuffle(random.Random(9), rows=4, cols=4, lens_count=16)
    b = plan_shuffle(random.Random(9), rows=4, cols=4, lens_count=16)
    assert a == b


def test_inverse_moves_reverses_order_and_direction():
    moves = [RowSlide(row=1, count=2), Rotate(index=3), ColSlide(col=0, count=3), Flip(index=7)]
    assert inverse_moves(moves) == [
        Flip(index=7),
        ColSlide(col=0, count=3, step=-1),
        Rotate(index=3, times=3),
        RowSlide(row=1, count=2, step=-1),
    ]


def test_inverse_moves_rejects_unknown_moves():
    with pytest.raises(TypeError):
        inverse_moves(["rowSlide"])
