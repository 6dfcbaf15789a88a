from dataclasses import dataclass, field
from typing import List, Optional, Tuple

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


@dataclass(slots=True)
class DragSession:
    """State of one press-and-drag gesture.

    ``axis`` stays None until the pointer leaves the deadzone; after that the axis,
    ``index`` (row or column) and ``snapshot`` are fixed for the rest of the gesture.
    Snapshot entries are (entity, x, y) taken at axis commit.
    """
    entity: int
    press_x: float
    press_y: float
    axis: Optional[str] = None
    index: int = -1
    accumulated_x: float = 0.0
    accumulated_y: float = 0.0
    snapshot: List[Tuple[int, float, float]] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.axis is not None
