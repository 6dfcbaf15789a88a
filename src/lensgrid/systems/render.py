from lensgrid.events.bus import EVENT_TICK, EventBus
from lensgrid.rendering.lens_renderer import LensRenderer
from lensgrid.rendering.snapshot import RenderSnapshot


class RenderSystem:
    def __init__(self, controller, event_bus: EventBus, window):
        self.controller = controller
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self._time = 0.0
        self._last_snapshot: RenderSnapshot | None = None
        self._lens_renderer = LensRenderer()

    def on_tick(self, sender, **kwargs):
        self._time += kwargs.get('dt', 1/60)

    @property
    def last_snapshot(self) -> RenderSnapshot | None:
        return self._last_snapshot

    def drawn_positions(self, entity: int):
        return self._lens_renderer.layout.get(entity, [])

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        snapshot = self.controller.snapshot()
        self._last_snapshot = snapshot
        self._lens_renderer.render(arcade, snapshot, headless, scissor=self._scissor_setter())

    def _scissor_setter(self):
        ctx = getattr(self.window, 'ctx', None)
        if ctx is None or not hasattr(ctx, 'scissor'):
            return None

        def set_scissor(rect):
            ctx.scissor = rect
        return set_scissor
