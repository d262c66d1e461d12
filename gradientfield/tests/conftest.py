"""Shared fixtures for gradientfield tests."""
from __future__ import annotations

import pytest

from gradientfield.metrics import DistanceMetric
from gradientfield.models import Point, Source


def make_source(width=8, height=8, metric=DistanceMetric.EUCLIDEAN, anchor=(0, 0),
                weights=(1.0, 1.0, 1.0), reverse=False, wrap=False) -> Source:
    return Source(
        width=width,
        height=height,
        metric=metric,
        anchor=Point(*anchor),
        rweight=weights[0],
        gweight=weights[1],
        bweight=weights[2],
        reverse=reverse,
        wrap=wrap,
    )


@pytest.fixture
def source_factory():
    return make_source


@pytest.fixture(params=list(DistanceMetric), ids=lambda m: m.value)
def metric(request):
    return request.param


@pytest.fixture
def clean_config_env(monkeypatch, tmp_path):
    """Point settings lookup at an empty temp dir."""
    monkeypatch.delenv("GRADIENTFIELD_CONFIG", raising=False)
    monkeypatch.setattr(
        "gradientfield.config.default_settings_path",
        lambda: tmp_path / "no-such-dir" / "settings.yaml",
    )
    return tmp_path
