from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class SnapTarget:
    entity: int
    start_x: float
    start_y: float
    target_x: float  # may sit one line length outside the grid to take the short way round
    target_y: float
    final_x: float   # canonical grid-aligned position applied on completion
    final_y: float


@dataclass(slots=True)
class SnapAnimation:
    axis: str
    index: int
    items: List[SnapTarget] = field(default_factory=list)
    elapsed: float = 0.0
