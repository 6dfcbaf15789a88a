"""Random move lists that scramble a solved puzzle.

Every move is one a player could make, so applying a plan to a solved grid
always leaves a solvable one.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple, Union

from lensgrid.constants import (
    SHUFFLE_FLIPS,
    SHUFFLE_ROTATIONS,
    SHUFFLE_SLIDE_REPEAT,
    SHUFFLE_SLIDES,
)


@dataclass(frozen=True, slots=True)
class RowSlide:
    row: int
    count: int
    step: int = 1


@dataclass(frozen=True, slots=True)
class ColSlide:
    col: int
    count: int
    step: int = 1


@dataclass(frozen=True, slots=True)
class Rotate:
    index: int
    times: int = 1


@dataclass(frozen=True, slots=True)
class Flip:
    index: int


ShuffleMove = Union[RowSlide, ColSlide, Rotate, Flip]


def _count(rng: random.Random, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    return rng.randint(low, high)


def plan_shuffle(
    rng: random.Random,
    rows: int,
    cols: int,
    lens_count: int,
    *,
    slides: Tuple[int, int] = SHUFFLE_SLIDES,
    slide_repeat: Tuple[int, int] = SHUFFLE_SLIDE_REPEAT,
    rotations: Tuple[int, int] = SHUFFLE_ROTATIONS,
    flips: Tuple[int, int] = SHUFFLE_FLIPS,
) -> List[ShuffleMove]:
    """Build a randomly ordered list of slide, rotate and flip moves."""
    moves: List[ShuffleMove] = []
    for _ in range(_count(rng, slides)):
        if rng.random() < 0.5:
            moves.append(RowSlide(row=rng.randrange(rows), count=_count(rng, slide_repeat)))
        else:
            moves.append(ColSlide(col=rng.randrange(cols), count=_count(rng, slide_repeat)))
    for _ in range(_count(rng, rotations)):
        moves.append(Rotate(index=rng.randrange(lens_count)))
    for _ in range(_count(rng, flips)):
        moves.append(Flip(index=rng.randrange(lens_count)))
    # Fisher-Yates so slides and transforms interleave.
    for i in range(len(moves) - 1, 0, -1):
        j = rng.randint(0, i)
        moves[i], moves[j] = moves[j], moves[i]
    return moves


def inverse_moves(moves: List[ShuffleMove]) -> List[ShuffleMove]:
    """Moves that undo ``moves`` when applied in order afterwards."""
    undo: List[ShuffleMove] = []
    for move in reversed(moves):
        match move:
            case RowSlide(row=row, count=count, step=step):
                undo.append(RowSlide(row=row, count=count, step=-step))
            case ColSlide(col=col, count=count, step=step):
                undo.append(ColSlide(col=col, count=count, step=-step))
            case Rotate(index=index, times=times):
                undo.append(Rotate(index=index, times=(4 - times % 4) % 4))
            case Flip(index=index):
                undo.append(Flip(index=index))
            case _:
                raise TypeError(f"unknown shuffle move: {move!r}")
    return undo
