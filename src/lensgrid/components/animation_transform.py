from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class TransformTarget:
    entity: int
    start_rotation: float
    target_rotation: int
    start_flip_x: float
    target_flip_x: int


@dataclass(slots=True)
class TransformAnimation:
    """Rotation/flip interpolation for a cluster of lenses."""
    items: List[TransformTarget] = field(default_factory=list)
    elapsed: float = 0.0
