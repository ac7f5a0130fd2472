# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Hourly power-generation profile.

Sunlit hours follow a sinusoidal solar term around the satellite's
current charge level; eclipsed hours drop to battery level. A uniform
±2.5 perturbation is added to every sample, drawn from an injectable
numpy Generator so callers can pin the output.

No external dependencies — only stdlib dataclasses/datetime + numpy.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import numpy as np

from satops.domain.eclipse import EclipsePeriod, in_eclipse
from satops.domain.errors import InvalidGeometry
from satops.domain.orbital_mechanics import require_finite

SOLAR_AMPLITUDE = 15.0
ECLIPSE_DROP = 30.0
BATTERY_FLOOR = 40.0
NOISE_AMPLITUDE = 2.5


@dataclass(frozen=True)
class PowerSample:
    """Predicted power level for one hour."""
    hour: int
    power: float
    eclipse: bool
    timestamp: datetime


def compute_power_profile(
    satellite,
    eclipses: list[EclipsePeriod] | None = None,
    hours: int = 24,
    start: datetime | None = None,
    rng: np.random.Generator | None = None,
) -> list[PowerSample]:
    """
    Predict power level for each hour 0..hours-1.

    Eclipsed hour: max(40, baseline − 30).
    Sunlit hour:   min(100, baseline + 15·sin(hour·π/12)).
    Each sample then gets U(−2.5, 2.5) added and is clamped to [0, 100].

    Args:
        satellite: Object with ``power`` (percent) used as the baseline.
        eclipses: Eclipse windows; an hour is eclipsed if its timestamp
            falls inside any window (inclusive).
        hours: Number of samples.
        start: Timestamp of hour 0 (default: now, UTC).
        rng: Randomness source (default: a fresh unseeded Generator).

    Returns:
        List of PowerSample, one per hour.

    Raises:
        InvalidGeometry: If hours is negative or the baseline is non-finite.
    """
    if hours < 0:
        raise InvalidGeometry(f"hours must be non-negative, got {hours}")
    baseline = float(satellite.power)
    require_finite(power=baseline)
    if eclipses is None:
        eclipses = []
    if start is None:
        start = datetime.now(timezone.utc)
    if rng is None:
        rng = np.random.default_rng()

    hour_idx = np.arange(hours)
    timestamps = [start + timedelta(hours=int(h)) for h in hour_idx]
    eclipsed = np.array([in_eclipse(t, eclipses) for t in timestamps], dtype=bool)

    sunlit = np.minimum(100.0, baseline + SOLAR_AMPLITUDE * np.sin(hour_idx * np.pi / 12.0))
    shadow = max(BATTERY_FLOOR, baseline - ECLIPSE_DROP)
    power = np.where(eclipsed, shadow, sunlit)
    power = power + rng.uniform(-NOISE_AMPLITUDE, NOISE_AMPLITUDE, size=hours)
    power = np.clip(power, 0.0, 100.0)

    return [
        PowerSample(
            hour=int(h),
            power=float(p),
            eclipse=bool(e),
            timestamp=t,
        )
        for h, p, e, t in zip(hour_idx, power, eclipsed, timestamps)
    ]
