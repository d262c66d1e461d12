# tests/test_composite.py
"""
Tests for gradientfield/composite.py
"""
import numpy as np
import pytest

from gradientfield.composite import Accumulator, composite
from gradientfield.config import BRIGHTNESS_SCALE
from gradientfield.metrics import DistanceMetric


def _mixed_sources(factory, w, h):
    return [
        factory(width=w, height=h, metric=DistanceMetric.EUCLIDEAN, anchor=(1, 2),
                weights=(0.9, 0.1, 0.4)),
        factory(width=w, height=h, metric=DistanceMetric.MANHATTAN, anchor=(w - 1, 0),
                weights=(0.2, 0.7, 0.05), reverse=True),
        factory(width=w, height=h, metric=DistanceMetric.MIN_XY, anchor=(3, h - 1),
                weights=(0.0, 0.3, 0.6), wrap=True),
        factory(width=w, height=h, metric=DistanceMetric.EUCLIDEAN2, anchor=(w // 2, h // 2),
                weights=(0.05, 0.05, 0.05), reverse=True, wrap=True),
    ]


def test_brightness_scale_constant():
    assert BRIGHTNESS_SCALE == 3.5


def test_empty_sources_black_frame():
    frame = composite(5, 3, [])
    assert frame.shape == (3, 5, 3)
    assert frame.dtype == np.uint8
    assert not frame.any()


def test_frame_shape_is_height_width_rgb(source_factory):
    frame = composite(6, 4, [source_factory(width=6, height=4)])
    assert frame.shape == (4, 6, 3)


def test_single_euclidean_source_end_to_end(source_factory):
    s = source_factory(width=4, height=4, metric=DistanceMetric.EUCLIDEAN, anchor=(0, 0),
                       weights=(1.0, 0.0, 0.0))
    frame = composite(4, 4, [s])
    assert frame[0, 0, 0] == 0
    assert frame[3, 3, 0] == 255
    # zero-weight channels resolve to 0
    assert not frame[:, :, 1].any()
    assert not frame[:, :, 2].any()


def test_rounding_and_scaling(source_factory):
    # Manhattan from (0, 0) on 8x8: max distance 16, pixel (1, 0) -> 1/16
    s = source_factory(width=8, height=8, metric=DistanceMetric.MANHATTAN, anchor=(0, 0),
                       weights=(1.0, 1.0, 1.0))
    frame = composite(8, 8, [s])
    expected = int(np.floor(1 / 16 * 3.5 * 255 + 0.5))
    assert frame[0, 1, 0] == expected == 56


def test_custom_scale(source_factory):
    s = source_factory(width=8, height=8, metric=DistanceMetric.MANHATTAN, anchor=(0, 0))
    frame = composite(8, 8, [s], scale=1.0)
    # (7, 7) -> 14/16 of full brightness
    assert frame[7, 7, 0] == round(14 / 16 * 255)


def test_weights_normalized_across_sources(source_factory):
    # Two identical sources give the same frame as one, whatever their weight
    one = source_factory(metric=DistanceMetric.CHEBYSHEV, anchor=(2, 5), weights=(0.3, 0.3, 0.3))
    two = source_factory(metric=DistanceMetric.CHEBYSHEV, anchor=(2, 5), weights=(0.8, 0.8, 0.8))
    assert np.array_equal(composite(8, 8, [one]), composite(8, 8, [one, two]))


def test_opposite_corners_blend_to_gray_at_center(source_factory):
    a = source_factory(width=8, height=8, metric=DistanceMetric.EUCLIDEAN, anchor=(0, 0),
                       weights=(0.5, 0.5, 0.5))
    b = source_factory(width=8, height=8, metric=DistanceMetric.EUCLIDEAN, anchor=(7, 7),
                       weights=(0.5, 0.5, 0.5), reverse=True)
    center = (4, 4)
    assert a.scaled_distance(center) == pytest.approx(0.5, abs=0.1)
    assert b.scaled_distance(center) == pytest.approx(0.5, abs=0.1)

    ab = composite(8, 8, [a, b], scale=1.0)
    ba = composite(8, 8, [b, a], scale=1.0)
    pixel = ab[center[1], center[0]]
    assert pixel[0] == pixel[1] == pixel[2]
    assert 100 < pixel[0] < 160
    assert np.array_equal(ab, ba)


def test_permutation_invariant(source_factory):
    w, h = 11, 7
    sources = _mixed_sources(source_factory, w, h)
    base = composite(w, h, sources)
    assert np.array_equal(base, composite(w, h, list(reversed(sources))))
    assert np.array_equal(base, composite(w, h, sources[2:] + sources[:2]))


def test_matches_per_pixel_reference(source_factory):
    w, h = 9, 6
    sources = _mixed_sources(source_factory, w, h)
    frame = composite(w, h, sources)
    totals = np.sum([s.weights for s in sources], axis=0)
    for y in range(h):
        for x in range(w):
            acc = np.zeros(3)
            for s in sources:
                acc += s.scaled_distance((x, y)) * np.asarray(s.weights)
            value = acc / totals * BRIGHTNESS_SCALE * 255
            expected = np.clip(np.floor(value + 0.5), 0, 255)
            assert np.array_equal(frame[y, x], expected.astype(np.uint8)), (x, y)


@pytest.mark.parametrize("workers", [2, 3, 16])
def test_threaded_matches_serial(source_factory, workers):
    w, h = 13, 10
    sources = _mixed_sources(source_factory, w, h)
    assert np.array_equal(composite(w, h, sources), composite(w, h, sources, workers=workers))


def test_deterministic(source_factory):
    sources = _mixed_sources(source_factory, 8, 8)
    assert np.array_equal(composite(8, 8, sources), composite(8, 8, sources))


def test_canvas_mismatch_rejected(source_factory):
    with pytest.raises(ValueError, match="canvas"):
        composite(10, 10, [source_factory(width=8, height=8)])


def test_degenerate_canvas_rejected():
    with pytest.raises(ValueError):
        composite(1, 1, [])


def test_accumulator_totals_and_zero_weight_channel(source_factory):
    acc = Accumulator(4, 4)
    s = source_factory(width=4, height=4, weights=(0.25, 0.0, 0.5))
    acc.add_weights(*s.weights)
    acc.add_weights(*s.weights)
    assert acc.totals == (0.5, 0.0, 1.0)
    acc.add_sources([s, s])
    frame = acc.resolve()
    assert not frame[:, :, 1].any()
    assert frame[:, :, 0].any()


def test_accumulator_clamps_negative(source_factory):
    acc = Accumulator(2, 2)
    acc.add_weights(1.0, 1.0, 1.0)
    acc.pixels[:] = -0.4
    assert not acc.resolve().any()
