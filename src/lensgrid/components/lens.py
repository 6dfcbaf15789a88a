from dataclasses import dataclass, field


@dataclass(slots=True)
class CellRect:
    """Square region in window pixels; ``x``/``y`` is the cell origin corner."""
    x: float
    y: float
    size: float

    def contains(self, px: float, py: float, *, inclusive: bool = False) -> bool:
        if inclusive:
            return self.x <= px <= self.x + self.size and self.y <= py <= self.y + self.size
        return self.x <= px < self.x + self.size and self.y <= py < self.y + self.size


@dataclass(slots=True)
class Lens:
    """One tile of the puzzle.

    ``src`` is the fixed grid slot the lens shows; ``dst`` is where it is drawn and
    moves with slides. ``rotation``/``flip_x`` are the logical orientation, while
    ``current_rotation``/``current_flip_x`` hold the value currently on screen and
    converge to the logical ones once animations settle.
    """
    src: CellRect
    dst: CellRect
    src_row: int
    src_col: int
    rotation: int = 0
    flip_x: int = 1
    current_rotation: float = field(default=0.0)
    current_flip_x: float = field(default=1.0)
