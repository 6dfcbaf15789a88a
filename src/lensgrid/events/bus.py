from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that nobody else references alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float
EVENT_RESIZE = "resize"                    # payload: width=int, height=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS_RAW = "mouse_press_raw"  # payload: x, y, button, modifiers
EVENT_MOUSE_RELEASE = "mouse_release"      # payload: x, y, button, modifiers
EVENT_MOUSE_MOVE = "mouse_move"            # payload: x, y, dx, dy
EVENT_KEY_PRESS = "key_press"              # payload: symbol, modifiers
EVENT_POINTER_LOCK_REQUEST = "pointer_lock_request"  # payload: locked=bool
EVENT_POINTER_LOCK_CHANGED = "pointer_lock_changed"  # payload: locked=bool


# ============================================================================
# PUZZLE ACTIONS
# ============================================================================
EVENT_ROTATE_REQUEST = "rotate_request"    # payload: x, y
EVENT_FLIP_REQUEST = "flip_request"        # payload: x, y
EVENT_DRAG_BEGIN = "drag_begin"            # payload: x, y
EVENT_DRAG_MOVE = "drag_move"              # payload: dx, dy
EVENT_DRAG_END = "drag_end"                # payload: None
EVENT_NEW_GAME_REQUEST = "new_game_request"  # payload: None


# ============================================================================
# LENS & GRID STATE
# ============================================================================
EVENT_LENS_ROTATED = "lens_rotated"        # payload: entity=int, affected=list[int]
EVENT_LENS_FLIPPED = "lens_flipped"        # payload: entity=int, affected=list[int]
EVENT_DRAG_AXIS_LOCKED = "drag_axis_locked"  # payload: axis=str, index=int, entities=list[int]
EVENT_LINE_SNAPPED = "line_snapped"        # payload: axis=str, index=int, entities=list[int]
EVENT_GRID_RECENTERED = "grid_recentered"  # payload: origin=(x,y), delta=(dx,dy)
EVENT_PUZZLE_SHUFFLED = "puzzle_shuffled"  # payload: moves=list[ShuffleMove]
EVENT_PUZZLE_SOLVED = "puzzle_solved"      # payload: None


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, entities=list[int]
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, entities=list[int], forced=bool
