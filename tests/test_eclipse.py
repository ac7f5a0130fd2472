# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for fixed-fraction eclipse prediction."""
import ast
import math
from datetime import datetime, timedelta, timezone

import pytest

from satops.domain.eclipse import (
    ECLIPSE_ENTRY_FRACTION,
    ECLIPSE_EXIT_FRACTION,
    EclipsePeriod,
    in_eclipse,
    predict_eclipses,
)
from satops.domain.errors import InvalidGeometry
from satops.domain.fleet import SatelliteStatus, SatelliteType, make_satellite
from satops.domain.orbital_mechanics import GeoPosition, orbital_period


START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _sat(alt=408.0):
    return make_satellite(
        id="ECL", name="Eclipse Test", type=SatelliteType.WEATHER,
        position=GeoPosition(0.0, 0.0, alt), velocity_kmh=27600.0,
        health=100.0, power=85.0, data_rate_mbps=10.0,
        status=SatelliteStatus.ACTIVE, last_contact=START,
    )


# ── EclipsePeriod dataclass ───────────────────────────────────────

class TestEclipsePeriod:

    def test_frozen(self):
        e = EclipsePeriod(start=START, end=START + timedelta(minutes=30),
                          duration_seconds=1800.0, orbit_index=1)
        with pytest.raises(AttributeError):
            e.orbit_index = 2


# ── predict_eclipses ──────────────────────────────────────────────

class TestPredictEclipses:

    @pytest.mark.parametrize("alt", [408.0, 705.0, 1200.0, 20200.0, 35786.0])
    def test_count_is_complete_orbits(self, alt):
        period_h = orbital_period(alt) / 3600.0
        eclipses = predict_eclipses(_sat(alt), START, 24.0)
        assert len(eclipses) == math.floor(24.0 / period_h)

    def test_iss_has_fifteen_eclipses_per_day(self):
        assert len(predict_eclipses(_sat(408.0), START, 24.0)) == 15

    def test_end_after_start(self):
        for e in predict_eclipses(_sat(), START, 24.0):
            assert e.end > e.start
            assert e.duration_seconds == pytest.approx((e.end - e.start).total_seconds())

    def test_orbit_indices_one_based_and_increasing(self):
        eclipses = predict_eclipses(_sat(), START, 24.0)
        assert [e.orbit_index for e in eclipses] == list(range(1, len(eclipses) + 1))

    def test_fixed_fraction_of_period(self):
        period = orbital_period(705.0)
        first = predict_eclipses(_sat(705.0), START, 24.0)[0]
        assert (first.start - START).total_seconds() == pytest.approx(
            period * ECLIPSE_ENTRY_FRACTION, abs=1e-5)
        assert (first.end - START).total_seconds() == pytest.approx(
            period * ECLIPSE_EXIT_FRACTION, abs=1e-5)
        assert first.duration_seconds == pytest.approx(period * 0.4, abs=1e-5)

    def test_consecutive_eclipses_one_period_apart(self):
        period = orbital_period(408.0)
        eclipses = predict_eclipses(_sat(), START, 24.0)
        for a, b in zip(eclipses, eclipses[1:]):
            assert (b.start - a.start).total_seconds() == pytest.approx(period, abs=1e-5)

    def test_window_shorter_than_orbit_is_empty(self):
        assert predict_eclipses(_sat(), START, 1.0) == []

    def test_zero_duration_is_empty(self):
        assert predict_eclipses(_sat(), START, 0.0) == []

    def test_negative_duration_raises(self):
        with pytest.raises(InvalidGeometry):
            predict_eclipses(_sat(), START, -1.0)

    def test_zero_altitude_raises(self):
        with pytest.raises(InvalidGeometry):
            predict_eclipses(_sat(0.0), START, 24.0)


class TestInEclipse:

    def test_bounds_inclusive(self):
        e = EclipsePeriod(start=START, end=START + timedelta(minutes=36),
                          duration_seconds=2160.0, orbit_index=1)
        assert in_eclipse(START, [e])
        assert in_eclipse(e.end, [e])
        assert not in_eclipse(e.end + timedelta(seconds=1), [e])
        assert not in_eclipse(START - timedelta(seconds=1), [e])

    def test_empty_list(self):
        assert not in_eclipse(START, [])


class TestEclipsePurity:

    def test_no_external_imports(self):
        import satops.domain.eclipse as mod
        with open(mod.__file__) as f:
            tree = ast.parse(f.read())

        allowed_top = {'math', 'dataclasses', 'datetime'}
        allowed_internal_prefix = 'satops.domain'

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    top = alias.name.split('.')[0]
                    assert top in allowed_top or alias.name.startswith(allowed_internal_prefix), \
                        f"Forbidden import: {alias.name}"
            elif isinstance(node, ast.ImportFrom):
                if node.module and node.level == 0:
                    top = node.module.split('.')[0]
                    assert top in allowed_top or node.module.startswith(allowed_internal_prefix), \
                        f"Forbidden import from: {node.module}"
