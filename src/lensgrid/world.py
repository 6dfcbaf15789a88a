import random

from esper import World
from .events.bus import EventBus


def create_world(event_bus: EventBus, *, rng: random.Random | None = None) -> World:
    """Fresh esper world carrying the shared random source as ``world.random``."""
    world = World()
    setattr(world, "random", rng or random.Random())
    return world
