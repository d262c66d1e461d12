# tests/test_metrics.py
"""
Tests for gradientfield/metrics.py
"""
import itertools
import math

import numpy as np
import pytest

from gradientfield.metrics import DistanceMetric, ALL_METRICS

OFFSETS = list(itertools.product(range(-4, 5), repeat=2))


def test_five_metrics_in_stable_order():
    assert [m.value for m in ALL_METRICS] == [
        "Manhattan", "Euclidean", "Euclidean2", "Chebyshev", "MinXY",
    ]


def test_zero_displacement_is_zero(metric):
    assert metric.delta(0, 0) == 0.0


def test_known_values():
    assert DistanceMetric.MANHATTAN.delta(3, -4) == 7.0
    assert DistanceMetric.EUCLIDEAN.delta(3, -4) == 5.0
    assert DistanceMetric.EUCLIDEAN2.delta(3, -4) == 25.0
    assert DistanceMetric.CHEBYSHEV.delta(3, -4) == 4.0
    assert DistanceMetric.MIN_XY.delta(3, -4) == 3.0


def test_non_negative(metric):
    for dx, dy in OFFSETS:
        assert metric.delta(dx, dy) >= 0.0


def test_squared_euclidean_is_euclidean_squared():
    for dx, dy in OFFSETS:
        e = DistanceMetric.EUCLIDEAN.delta(dx, dy)
        assert math.isclose(DistanceMetric.EUCLIDEAN2.delta(dx, dy), e * e, abs_tol=1e-9)


@pytest.mark.parametrize("m", [DistanceMetric.MANHATTAN, DistanceMetric.CHEBYSHEV, DistanceMetric.MIN_XY])
def test_symmetric(m):
    for dx, dy in OFFSETS:
        assert m.delta(dx, dy) == m.delta(-dx, -dy)


@pytest.mark.parametrize("m", [DistanceMetric.MANHATTAN, DistanceMetric.CHEBYSHEV])
def test_triangle_inequality(m):
    # d(a, c) <= d(a, b) + d(b, c) with displacements u = a-b, v = b-c
    small = list(itertools.product(range(-3, 4), repeat=2))
    for (ux, uy), (vx, vy) in itertools.product(small, repeat=2):
        assert m.delta(ux + vx, uy + vy) <= m.delta(ux, uy) + m.delta(vx, vy)


def test_min_xy_triangle_inequality_on_shared_axis():
    # MinXY is only a pseudo-metric: the inequality holds for displacements
    # along a common axis
    m = DistanceMetric.MIN_XY
    for a, b in itertools.product(range(-4, 5), repeat=2):
        assert m.delta(a + b, 0) <= m.delta(a, 0) + m.delta(b, 0)
        assert m.delta(a + b, a + b) <= m.delta(a, a) + m.delta(b, b)


def test_field_matches_delta(metric):
    dx = np.array([dx for dx, _ in OFFSETS])
    dy = np.array([dy for _, dy in OFFSETS])
    field = metric.field(dx, dy)
    expected = [metric.delta(a, b) for a, b in OFFSETS]
    assert np.allclose(field, expected)


def test_field_broadcasts():
    xs = np.arange(5)[np.newaxis, :]
    ys = np.arange(3)[:, np.newaxis]
    assert DistanceMetric.CHEBYSHEV.field(xs, ys).shape == (3, 5)


@pytest.mark.parametrize("name,expected", [
    ("Euclidean2", DistanceMetric.EUCLIDEAN2),
    ("euclidean2", DistanceMetric.EUCLIDEAN2),
    ("MinXY", DistanceMetric.MIN_XY),
    ("min_xy", DistanceMetric.MIN_XY),
    (" chebyshev ", DistanceMetric.CHEBYSHEV),
])
def test_parse(name, expected):
    assert DistanceMetric.parse(name) is expected


def test_parse_unknown_raises():
    with pytest.raises(ValueError, match="Unknown distance metric"):
        DistanceMetric.parse("hamming")
