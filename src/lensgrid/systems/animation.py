from __future__ import annotations

import logging
from typing import List

from esper import World

from lensgrid.animation_factory import AnimationFactory
from lensgrid.components.animation_cursor import CursorAnimation
from lensgrid.components.animation_snap import SnapAnimation, SnapTarget
from lensgrid.components.animation_transform import TransformAnimation, TransformTarget
from lensgrid.components.cursor_state import CursorState
from lensgrid.components.duration import Duration
from lensgrid.components.lens import Lens
from lensgrid.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus
from lensgrid.utils.easing import ease_out_cubic, lerp, progress, shortest_angle_delta

logger = logging.getLogger(__name__)

KIND_TRANSFORM = "transform"
KIND_SNAP = "snap"
KIND_CURSOR = "cursor"
KINDS = (KIND_TRANSFORM, KIND_SNAP, KIND_CURSOR)


class AnimationSystem:
    """Drives the three animation kinds; at most one entity of each kind is alive.

    Starting an animation force-completes the previous one of the same kind, so two
    timers never write the same fields. ``finish`` is the synchronous cancel-and-commit.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world)
        self.transform_entity: int | None = None
        self.snap_entity: int | None = None
        self.cursor_entity: int | None = None
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    # -- starting -------------------------------------------------------
    def start_transform(self, items: List[TransformTarget], duration: float | None = None) -> int:
        self.finish(KIND_TRANSFORM)
        kwargs = {} if duration is None else {"duration": duration}
        self.transform_entity = self.factory.create_transform(items, **kwargs)
        self.event_bus.emit(EVENT_ANIMATION_START, kind=KIND_TRANSFORM, entities=[t.entity for t in items])
        return self.transform_entity

    def start_snap(self, axis: str, index: int, items: List[SnapTarget], duration: float | None = None) -> int:
        self.finish(KIND_SNAP)
        kwargs = {} if duration is None else {"duration": duration}
        self.snap_entity = self.factory.create_snap(axis, index, items, **kwargs)
        logger.debug("snap %s %d over %d lenses", axis, index, len(items))
        self.event_bus.emit(EVENT_ANIMATION_START, kind=KIND_SNAP, entities=[t.entity for t in items])
        return self.snap_entity

    def start_cursor(self, start_x: float, start_y: float, duration: float | None = None) -> int:
        self.finish(KIND_CURSOR)
        kwargs = {} if duration is None else {"duration": duration}
        self.cursor_entity = self.factory.create_cursor(start_x, start_y, **kwargs)
        self.event_bus.emit(EVENT_ANIMATION_START, kind=KIND_CURSOR, entities=[])
        return self.cursor_entity

    # -- queries --------------------------------------------------------
    def is_active(self, kind: str | None = None) -> bool:
        if kind is None:
            return any(self.is_active(k) for k in KINDS)
        return self._entity_for(kind) is not None

    def active_transform(self) -> TransformAnimation | None:
        return self._component(self.transform_entity, TransformAnimation)

    def active_snap(self) -> SnapAnimation | None:
        return self._component(self.snap_entity, SnapAnimation)

    def active_cursor(self) -> CursorAnimation | None:
        return self._component(self.cursor_entity, CursorAnimation)

    # -- driving --------------------------------------------------------
    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        self.advance(dt)

    def advance(self, dt: float) -> None:
        transform = self.active_transform()
        if transform is not None:
            transform.elapsed += dt
            t = progress(transform.elapsed, self._duration(self.transform_entity))
            if t >= 1.0:
                self.finish(KIND_TRANSFORM, forced=False)
            else:
                self._apply_transform(transform, ease_out_cubic(t))
        snap = self.active_snap()
        if snap is not None:
            snap.elapsed += dt
            t = progress(snap.elapsed, self._duration(self.snap_entity))
            if t >= 1.0:
                self.finish(KIND_SNAP, forced=False)
            else:
                self._apply_snap(snap, ease_out_cubic(t))
        cursor_anim = self.active_cursor()
        if cursor_anim is not None:
            cursor_anim.elapsed += dt
            t = progress(cursor_anim.elapsed, self._duration(self.cursor_entity))
            if t >= 1.0:
                self.finish(KIND_CURSOR, forced=False)
            else:
                self._apply_cursor(cursor_anim, ease_out_cubic(t))

    def finish(self, kind: str | None = None, *, forced: bool = True) -> None:
        """Set every field owned by the animation to its target and drop the animation."""
        if kind is None:
            for k in KINDS:
                self.finish(k, forced=forced)
            return
        if kind == KIND_TRANSFORM:
            transform = self.active_transform()
            if transform is None:
                return
            for item in transform.items:
                lens = self.world.component_for_entity(item.entity, Lens)
                lens.current_rotation = item.target_rotation
                lens.current_flip_x = item.target_flip_x
            entities = [item.entity for item in transform.items]
            self._delete_animation_entity(self.transform_entity)
            self.transform_entity = None
        elif kind == KIND_SNAP:
            snap = self.active_snap()
            if snap is None:
                return
            for item in snap.items:
                lens = self.world.component_for_entity(item.entity, Lens)
                lens.dst.x = item.final_x
                lens.dst.y = item.final_y
            entities = [item.entity for item in snap.items]
            self._delete_animation_entity(self.snap_entity)
            self.snap_entity = None
        elif kind == KIND_CURSOR:
            if self.active_cursor() is None:
                return
            cursor = self._cursor_state()
            if cursor is not None:
                cursor.x = cursor.target_x
                cursor.y = cursor.target_y
            entities = []
            self._delete_animation_entity(self.cursor_entity)
            self.cursor_entity = None
        else:
            raise ValueError(f"unknown animation kind: {kind!r}")
        self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=kind, entities=entities, forced=forced)

    def retarget_snap(self, dx: float, dy: float) -> None:
        """Shift a live snap by a grid origin change."""
        snap = self.active_snap()
        if snap is None:
            return
        for item in snap.items:
            item.start_x += dx
            item.start_y += dy
            item.target_x += dx
            item.target_y += dy
            item.final_x += dx
            item.final_y += dy

    # -- internals ------------------------------------------------------
    def _apply_transform(self, transform: TransformAnimation, eased: float) -> None:
        for item in transform.items:
            lens = self.world.component_for_entity(item.entity, Lens)
            delta = shortest_angle_delta(item.start_rotation, item.target_rotation)
            lens.current_rotation = item.start_rotation + delta * eased
            lens.current_flip_x = lerp(item.start_flip_x, item.target_flip_x, eased)

    def _apply_snap(self, snap: SnapAnimation, eased: float) -> None:
        for item in snap.items:
            lens = self.world.component_for_entity(item.entity, Lens)
            lens.dst.x = lerp(item.start_x, item.target_x, eased)
            lens.dst.y = lerp(item.start_y, item.target_y, eased)

    def _apply_cursor(self, anim: CursorAnimation, eased: float) -> None:
        cursor = self._cursor_state()
        if cursor is None:
            return
        cursor.x = lerp(anim.start_x, cursor.target_x, eased)
        cursor.y = lerp(anim.start_y, cursor.target_y, eased)

    def _cursor_state(self) -> CursorState | None:
        for _, state in self.world.get_component(CursorState):
            return state
        return None

    def _entity_for(self, kind: str) -> int | None:
        if kind == KIND_TRANSFORM:
            return self.transform_entity
        if kind == KIND_SNAP:
            return self.snap_entity
        if kind == KIND_CURSOR:
            return self.cursor_entity
        raise ValueError(f"unknown animation kind: {kind!r}")

    def _component(self, ent: int | None, comp_type):
        if ent is None:
            return None
        try:
            return self.world.component_for_entity(ent, comp_type)
        except KeyError:
            return None

    def _duration(self, ent: int | None) -> float:
        dur = self._component(ent, Duration)
        return dur.value if dur is not None else 0.0

    def _delete_animation_entity(self, ent: int | None) -> None:
        if ent is None:
            return
        if self.world.entity_exists(ent):
            self.world.delete_entity(ent, immediate=True)
