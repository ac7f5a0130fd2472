# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the hourly power-generation profile."""
import ast
import math
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from satops.domain.eclipse import EclipsePeriod, in_eclipse, predict_eclipses
from satops.domain.errors import InvalidGeometry
from satops.domain.fleet import SatelliteStatus, SatelliteType, make_satellite
from satops.domain.orbital_mechanics import GeoPosition
from satops.domain.power import (
    BATTERY_FLOOR,
    NOISE_AMPLITUDE,
    PowerSample,
    compute_power_profile,
)


START = datetime(2026, 6, 1, tzinfo=timezone.utc)


def _sat(power=85.0, alt=408.0):
    return make_satellite(
        id="PWR", name="Power Test", type=SatelliteType.COMMUNICATION,
        position=GeoPosition(0.0, 0.0, alt), velocity_kmh=27600.0,
        health=100.0, power=power, data_rate_mbps=10.0,
        status=SatelliteStatus.ACTIVE, last_contact=START,
    )


class _ZeroNoise:
    """Generator stand-in whose perturbation is always zero."""

    def uniform(self, low, high, size=None):
        return np.zeros(size)


class TestPowerProfileShape:

    @pytest.mark.parametrize("hours", [0, 1, 12, 24, 48])
    def test_length_equals_hours(self, hours):
        profile = compute_power_profile(_sat(), [], hours=hours, start=START,
                                        rng=np.random.default_rng(0))
        assert len(profile) == hours
        assert [s.hour for s in profile] == list(range(hours))

    def test_timestamps_hourly_from_start(self):
        profile = compute_power_profile(_sat(), [], hours=5, start=START,
                                        rng=np.random.default_rng(0))
        assert [s.timestamp for s in profile] == [START + timedelta(hours=h) for h in range(5)]

    def test_samples_are_plain_python(self):
        sample = compute_power_profile(_sat(), [], hours=1, start=START,
                                       rng=np.random.default_rng(0))[0]
        assert isinstance(sample, PowerSample)
        assert type(sample.power) is float
        assert type(sample.eclipse) is bool
        assert type(sample.hour) is int


class TestPowerProfileBounds:

    @pytest.mark.parametrize("baseline", [0.0, 5.0, 40.0, 85.0, 99.0, 100.0])
    def test_power_within_percent_range(self, baseline):
        sat = _sat(power=baseline)
        eclipses = predict_eclipses(sat, START, 24.0)
        profile = compute_power_profile(sat, eclipses, hours=24, start=START,
                                        rng=np.random.default_rng(7))
        for s in profile:
            assert 0.0 <= s.power <= 100.0

    def test_noise_within_amplitude(self):
        sat = _sat(power=60.0)
        exact = compute_power_profile(sat, [], hours=24, start=START, rng=_ZeroNoise())
        noisy = compute_power_profile(sat, [], hours=24, start=START,
                                      rng=np.random.default_rng(3))
        for a, b in zip(exact, noisy):
            assert abs(a.power - b.power) <= NOISE_AMPLITUDE


class TestPowerProfileModel:

    def test_sunlit_follows_sine(self):
        sat = _sat(power=70.0)
        profile = compute_power_profile(sat, [], hours=24, start=START, rng=_ZeroNoise())
        for s in profile:
            expected = min(100.0, 70.0 + 15.0 * math.sin(s.hour * math.pi / 12.0))
            assert s.power == pytest.approx(expected)
            assert not s.eclipse

    def test_eclipsed_hour_drops_to_battery(self):
        sat = _sat(power=85.0)
        window = EclipsePeriod(start=START + timedelta(hours=2),
                               end=START + timedelta(hours=3),
                               duration_seconds=3600.0, orbit_index=1)
        profile = compute_power_profile(sat, [window], hours=6, start=START, rng=_ZeroNoise())
        assert [s.eclipse for s in profile] == [False, False, True, True, False, False]
        assert profile[2].power == pytest.approx(55.0)
        assert profile[3].power == pytest.approx(55.0)

    def test_eclipse_power_floor(self):
        sat = _sat(power=50.0)
        window = EclipsePeriod(start=START, end=START + timedelta(hours=1),
                               duration_seconds=3600.0, orbit_index=1)
        profile = compute_power_profile(sat, [window], hours=2, start=START, rng=_ZeroNoise())
        assert profile[0].power == pytest.approx(BATTERY_FLOOR)

    def test_eclipse_flag_matches_membership(self):
        sat = _sat()
        eclipses = predict_eclipses(sat, START, 24.0)
        profile = compute_power_profile(sat, eclipses, hours=24, start=START,
                                        rng=np.random.default_rng(11))
        for s in profile:
            assert s.eclipse == in_eclipse(s.timestamp, eclipses)

    def test_seeded_generator_is_deterministic(self):
        sat = _sat()
        eclipses = predict_eclipses(sat, START, 24.0)
        a = compute_power_profile(sat, eclipses, start=START, rng=np.random.default_rng(42))
        b = compute_power_profile(sat, eclipses, start=START, rng=np.random.default_rng(42))
        assert a == b

    def test_default_eclipses_none(self):
        profile = compute_power_profile(_sat(), hours=3, start=START, rng=_ZeroNoise())
        assert not any(s.eclipse for s in profile)


class TestPowerProfileValidation:

    def test_negative_hours_raises(self):
        with pytest.raises(InvalidGeometry):
            compute_power_profile(_sat(), [], hours=-1, start=START)

    def test_non_finite_baseline_raises(self):
        holder = type("Holder", (), {"power": math.nan})()
        with pytest.raises(InvalidGeometry):
            compute_power_profile(holder, [], hours=3, start=START)


class TestPowerPurity:

    def test_no_external_imports(self):
        import satops.domain.power as mod
        with open(mod.__file__) as f:
            tree = ast.parse(f.read())

        allowed_top = {'math', 'dataclasses', 'datetime', 'numpy'}
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
