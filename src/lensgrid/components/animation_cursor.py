from dataclasses import dataclass

@dataclass(slots=True)
class CursorAnimation:
    start_x: float
    start_y: float
    elapsed: float = 0.0
