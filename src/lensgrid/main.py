"""Entry point for the Lensgrid puzzle.

Sets up the event bus, puzzle controller, input/render systems and the Arcade window.
"""
from arcade import Window, run, set_background_color

from lensgrid.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from lensgrid.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_MOUSE_RELEASE,
    EVENT_POINTER_LOCK_REQUEST,
    EVENT_RESIZE,
    EVENT_TICK,
    EventBus,
)
from lensgrid.rendering.lens_renderer import BACKGROUND
from lensgrid.systems.input import InputSystem
from lensgrid.systems.puzzle_controller import PuzzleController
from lensgrid.systems.render import RenderSystem
from lensgrid.utils.logging import setup_logger


class LensgridWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.controller = PuzzleController(
            self.event_bus,
            viewport_width=self.width,
            viewport_height=self.height,
        )
        self.input_system = InputSystem(self.event_bus, self.controller)
        self.render_system = RenderSystem(self.controller, self.event_bus, self)
        self.event_bus.subscribe(EVENT_POINTER_LOCK_REQUEST, self.on_pointer_lock_request)
        set_background_color(BACKGROUND)

    def on_pointer_lock_request(self, sender, **kwargs):
        self.set_exclusive_mouse(bool(kwargs.get('locked')))
        self.set_mouse_visible(not kwargs.get('locked'))

    def on_resize(self, width: int, height: int):
        # pyglet may fire a resize before __init__ has built the bus.
        if hasattr(self, "event_bus"):
            self.event_bus.emit(EVENT_RESIZE, width=width, height=height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=y, button=button, modifiers=modifiers)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button, modifiers=modifiers)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    setup_logger()
    window = LensgridWindow()
    run()


if __name__ == "__main__":
    main()
