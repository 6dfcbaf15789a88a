def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def progress(elapsed: float, duration: float) -> float:
    """Saturating animation progress in [0, 1]."""
    if duration <= 0:
        return 1.0
    return max(0.0, min(elapsed / duration, 1.0))


def shortest_angle_delta(start: float, target: float) -> float:
    """Signed rotation from ``start`` to ``target`` in degrees, within (-180, 180]."""
    delta = (target - start + 180.0) % 360.0 - 180.0
    if delta == -180.0:
        delta = 180.0
    return delta


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t
