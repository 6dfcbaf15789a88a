import pytest

from lensgrid.utils.easing import ease_out_cubic, lerp, progress, shortest_angle_delta


def test_ease_out_cubic_endpoints_and_shape():
    assert ease_out_cubic(0.0) == 0.0
    assert ease_out_cubic(1.0) == 1.0
    assert ease_out_cubic(0.5) == pytest.approx(0.875)


def test_progress_saturates():
    assert progress(0.0, 0.3) == 0.0
    assert progress(0.15, 0.3) == pytest.approx(0.5)
    assert progress(5.0, 0.3) == 1.0
    assert progress(0.1, 0.0) == 1.0


@pytest.mark.parametrize(
    "start, target, expected",
    [
        (270, 0, 90),
        (0, 270, -90),
        (0, 90, 90),
        (90, 0, -90),
        (0, 180, 180),
        (180, 0, 180),
        (350.5, 0, 9.5),
    ],
)
def test_shortest_angle_delta(start, target, expected):
    assert shortest_angle_delta(start, target) == pytest.approx(expected)


def test_lerp():
    assert lerp(-1, 1, 0.5) == 0
    assert lerp(10, 20, 1.0) == 20
