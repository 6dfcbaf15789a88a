from __future__ import annotations

from esper import World

from lensgrid.components.cursor_state import CursorState
from lensgrid.constants import CURSOR_DURATION, FEATURE_FREEZE_CURSOR_DURING_DRAG
from lensgrid.events.bus import EVENT_POINTER_LOCK_CHANGED, EventBus
from lensgrid.systems.animation import KIND_CURSOR, AnimationSystem


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class CursorSystem:
    """Owns the crosshair position and exclusive pointer capture.

    While captured the crosshair moves by relative deltas clamped to the viewport;
    otherwise it follows the absolute pointer. Capture changes glide the crosshair
    to its new target.
    """
    def __init__(self, world: World, event_bus: EventBus, animation_system: AnimationSystem,
                 width: float, height: float, *, freeze_during_drag: bool = FEATURE_FREEZE_CURSOR_DURING_DRAG,
                 duration: float = CURSOR_DURATION):
        self.world = world
        self.event_bus = event_bus
        self.animation_system = animation_system
        self.width = width
        self.height = height
        self.freeze_during_drag = freeze_during_drag
        self.duration = duration
        self.entity = self.world.create_entity(CursorState(x=width / 2, y=height / 2,
                                                           target_x=width / 2, target_y=height / 2,
                                                           mouse_x=width / 2, mouse_y=height / 2))

    @property
    def state(self) -> CursorState:
        return self.world.component_for_entity(self.entity, CursorState)

    @property
    def locked(self) -> bool:
        return self.state.locked

    @property
    def position(self) -> tuple[float, float]:
        state = self.state
        return state.x, state.y

    def set_locked(self, locked: bool) -> None:
        state = self.state
        if state.locked == locked:
            return
        state.locked = locked
        if locked:
            state.target_x, state.target_y = state.x, state.y
        else:
            state.target_x, state.target_y = state.mouse_x, state.mouse_y
        self.animation_system.start_cursor(state.x, state.y, self.duration)
        self.event_bus.emit(EVENT_POINTER_LOCK_CHANGED, locked=locked)

    def freeze(self) -> None:
        state = self.state
        state.frozen_x, state.frozen_y = state.x, state.y

    def on_motion(self, x: float, y: float, dx: float, dy: float, *, dragging: bool = False) -> None:
        state = self.state
        animating = self.animation_system.is_active(KIND_CURSOR)
        if not state.locked:
            state.mouse_x = clamp(x, 0, self.width)
            state.mouse_y = clamp(y, 0, self.height)
            if not animating:
                state.x, state.y = state.mouse_x, state.mouse_y
            return
        if dragging and self.freeze_during_drag:
            state.target_x = state.x = state.frozen_x
            state.target_y = state.y = state.frozen_y
            return
        state.target_x = clamp(state.target_x + dx, 0, self.width)
        state.target_y = clamp(state.target_y + dy, 0, self.height)
        if not animating:
            state.x, state.y = state.target_x, state.target_y

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        state = self.state
        state.target_x = clamp(state.target_x, 0, width)
        state.target_y = clamp(state.target_y, 0, height)
        state.x = clamp(state.x, 0, width)
        state.y = clamp(state.y, 0, height)
        if not state.locked:
            state.mouse_x = clamp(state.mouse_x, 0, width)
            state.mouse_y = clamp(state.mouse_y, 0, height)
