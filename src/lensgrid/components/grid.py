from dataclasses import dataclass

@dataclass(slots=True)
class Grid:
    rows: int
    cols: int
    cell_size: float
    origin_x: float = 0.0
    origin_y: float = 0.0
