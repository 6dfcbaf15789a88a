from lensgrid.constants import KEY_ESCAPE, KEY_NEW_GAME, MOUSE_BUTTON_LEFT, MOUSE_BUTTON_RIGHT
from lensgrid.events.bus import (
    EventBus,
    EVENT_DRAG_BEGIN,
    EVENT_DRAG_END,
    EVENT_DRAG_MOVE,
    EVENT_FLIP_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_LINE_SNAPPED,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_MOUSE_RELEASE,
    EVENT_NEW_GAME_REQUEST,
    EVENT_POINTER_LOCK_REQUEST,
    EVENT_ROTATE_REQUEST,
)


class InputSystem:
    """Translates raw window input into puzzle requests.

    Left press starts a potential drag; its release is a click (rotate) unless the
    drag committed to an axis. Right press flips. A press while the pointer is free
    only captures it, and the click that follows is swallowed.
    """
    def __init__(self, event_bus: EventBus, controller):
        self.event_bus = event_bus
        self.controller = controller
        self._pressed = False
        self.just_dragged = False
        self.just_locked = False
        self.event_bus.subscribe(EVENT_MOUSE_PRESS_RAW, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_LINE_SNAPPED, self.on_line_snapped)

    @property
    def cursor(self):
        return self.controller.cursor_system

    def on_mouse_press(self, sender, **kwargs):
        button = kwargs.get('button')
        if button is None:
            return
        if not self.cursor.locked:
            x = kwargs.get('x'); y = kwargs.get('y')
            if x is not None and y is not None:
                self.cursor.on_motion(x, y, 0.0, 0.0)
            self.cursor.set_locked(True)
            self.just_locked = True
            self.event_bus.emit(EVENT_POINTER_LOCK_REQUEST, locked=True)
            return
        x, y = self.cursor.position
        if button == MOUSE_BUTTON_RIGHT:
            self.event_bus.emit(EVENT_FLIP_REQUEST, x=x, y=y)
        elif button == MOUSE_BUTTON_LEFT:
            self._pressed = True
            self.event_bus.emit(EVENT_DRAG_BEGIN, x=x, y=y)

    def on_mouse_move(self, sender, **kwargs):
        x = kwargs.get('x', 0.0); y = kwargs.get('y', 0.0)
        dx = kwargs.get('dx', 0.0); dy = kwargs.get('dy', 0.0)
        locked = self.cursor.locked
        dragging = locked and self._pressed and self.controller.is_dragging()
        self.cursor.on_motion(x, y, dx, dy, dragging=dragging)
        if dragging:
            self.event_bus.emit(EVENT_DRAG_MOVE, dx=dx, dy=dy)

    def on_mouse_release(self, sender, **kwargs):
        button = kwargs.get('button')
        if button == MOUSE_BUTTON_LEFT and self._pressed:
            self._pressed = False
            self.event_bus.emit(EVENT_DRAG_END)
        if button == MOUSE_BUTTON_LEFT:
            self._click()
        # Flags only live until the click that follows their press.
        self.just_dragged = False
        self.just_locked = False

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol == KEY_ESCAPE and self.cursor.locked:
            if self._pressed:
                self._pressed = False
                self.event_bus.emit(EVENT_DRAG_END)
            self.cursor.set_locked(False)
            self.just_locked = False
            self.event_bus.emit(EVENT_POINTER_LOCK_REQUEST, locked=False)
        elif symbol == KEY_NEW_GAME:
            self._pressed = False
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)

    def on_line_snapped(self, sender, **kwargs):
        self.just_dragged = True

    def _click(self):
        if not self.cursor.locked or self.just_dragged or self.just_locked:
            return
        x, y = self.cursor.position
        self.event_bus.emit(EVENT_ROTATE_REQUEST, x=x, y=y)
