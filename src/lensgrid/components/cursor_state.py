from dataclasses import dataclass

@dataclass(slots=True)
class CursorState:
    """Singleton component holding the crosshair and pointer capture state.

    Fields:
      x, y: where the crosshair is drawn.
      target_x, target_y: where the crosshair is heading (equal to x/y at rest).
      mouse_x, mouse_y: last absolute pointer position seen while not captured.
      locked: whether the window holds exclusive mouse capture.
      frozen_x, frozen_y: crosshair position held during a drag when freezing is enabled.
    """
    x: float = 0.0
    y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    locked: bool = False
    frozen_x: float = 0.0
    frozen_y: float = 0.0
