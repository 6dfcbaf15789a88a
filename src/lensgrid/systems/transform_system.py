from __future__ import annotations

from typing import List

from esper import World

from lensgrid.components.animation_transform import TransformTarget
from lensgrid.components.lens import Lens
from lensgrid.constants import TRANSFORM_DURATION
from lensgrid.events.bus import EVENT_LENS_FLIPPED, EVENT_LENS_ROTATED, EventBus
from lensgrid.systems.animation import KIND_SNAP, KIND_TRANSFORM, AnimationSystem
from lensgrid.systems.lens_ops import adjacent_lenses, get_grid, lens_entities


class TransformSystem:
    """Rotates or mirrors a lens together with its orthogonal neighbours.

    The discrete orientation changes at once; the displayed orientation follows via a
    transform animation. Any transform still in flight is committed first, so each
    request starts from a settled state.
    """
    def __init__(self, world: World, event_bus: EventBus, animation_system: AnimationSystem,
                 *, duration: float = TRANSFORM_DURATION):
        self.world = world
        self.event_bus = event_bus
        self.animation_system = animation_system
        self.duration = duration

    def rotate(self, entity: int) -> List[int]:
        affected = self._settle_and_collect(entity)
        items = []
        for ent in affected:
            lens = self.world.component_for_entity(ent, Lens)
            target = (lens.rotation + 90) % 360
            items.append(TransformTarget(
                entity=ent,
                start_rotation=lens.current_rotation,
                target_rotation=target,
                start_flip_x=lens.current_flip_x,
                target_flip_x=lens.flip_x,
            ))
            lens.rotation = target
        self.animation_system.start_transform(items, self.duration)
        self.event_bus.emit(EVENT_LENS_ROTATED, entity=entity, affected=affected)
        return affected

    def flip(self, entity: int) -> List[int]:
        affected = self._settle_and_collect(entity)
        items = []
        for ent in affected:
            lens = self.world.component_for_entity(ent, Lens)
            target = -lens.flip_x
            items.append(TransformTarget(
                entity=ent,
                start_rotation=lens.current_rotation,
                target_rotation=lens.rotation,
                start_flip_x=lens.current_flip_x,
                target_flip_x=target,
            ))
            lens.flip_x = target
        self.animation_system.start_transform(items, self.duration)
        self.event_bus.emit(EVENT_LENS_FLIPPED, entity=entity, affected=affected)
        return affected

    def _settle_and_collect(self, entity: int) -> List[int]:
        # Neighbours are looked up by destination cell, so positions must be at rest too.
        self.animation_system.finish(KIND_SNAP)
        self.animation_system.finish(KIND_TRANSFORM)
        grid = get_grid(self.world)
        return adjacent_lenses(self.world, grid, lens_entities(self.world), entity)
