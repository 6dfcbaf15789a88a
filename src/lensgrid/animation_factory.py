from typing import List

from esper import World

from lensgrid.components.animation_cursor import CursorAnimation
from lensgrid.components.animation_snap import SnapAnimation, SnapTarget
from lensgrid.components.animation_transform import TransformAnimation, TransformTarget
from lensgrid.components.duration import Duration
from lensgrid.constants import CURSOR_DURATION, SNAP_DURATION, TRANSFORM_DURATION


class AnimationFactory:
    def __init__(self, world: World):
        self.world = world

    def create_transform(self, items: List[TransformTarget], duration: float = TRANSFORM_DURATION) -> int:
        return self.world.create_entity(TransformAnimation(items=list(items)), Duration(duration))

    def create_snap(self, axis: str, index: int, items: List[SnapTarget], duration: float = SNAP_DURATION) -> int:
        return self.world.create_entity(SnapAnimation(axis=axis, index=index, items=list(items)), Duration(duration))

    def create_cursor(self, start_x: float, start_y: float, duration: float = CURSOR_DURATION) -> int:
        return self.world.create_entity(CursorAnimation(start_x=start_x, start_y=start_y), Duration(duration))
