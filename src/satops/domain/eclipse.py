# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Eclipse window prediction.

Fixed-fraction shadow model: every complete orbit in the analysis
window is assumed to spend the span between 30% and 70% of its period
in Earth's shadow. There is no Sun position or shadow-cone geometry;
the windows only drive the power model's battery/solar split.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from satops.domain.errors import InvalidGeometry
from satops.domain.orbital_mechanics import orbital_period, require_finite

ECLIPSE_ENTRY_FRACTION = 0.3
ECLIPSE_EXIT_FRACTION = 0.7


@dataclass(frozen=True)
class EclipsePeriod:
    """One shadow interval; orbit_index is 1-based."""
    start: datetime
    end: datetime
    duration_seconds: float
    orbit_index: int


def predict_eclipses(
    satellite,
    start: datetime,
    duration_hours: float = 24.0,
) -> list[EclipsePeriod]:
    """
    Predict eclipse periods over a time window.

    Args:
        satellite: Object with ``position.alt_km``.
        start: Start of the window.
        duration_hours: Window length in hours (>= 0).

    Returns:
        One EclipsePeriod per complete orbit in the window,
        floor(duration / period) entries, ordered by orbit index.

    Raises:
        InvalidGeometry: If altitude is not positive or the duration
            is negative or non-finite.
    """
    require_finite(duration_hours=duration_hours)
    if duration_hours < 0:
        raise InvalidGeometry(f"duration_hours must be non-negative, got {duration_hours}")

    period_s = orbital_period(satellite.position.alt_km)
    orbit_count = math.floor(duration_hours * 3600.0 / period_s)

    eclipses: list[EclipsePeriod] = []
    for orbit in range(orbit_count):
        orbit_start = start + timedelta(seconds=orbit * period_s)
        entry = orbit_start + timedelta(seconds=period_s * ECLIPSE_ENTRY_FRACTION)
        exit_ = orbit_start + timedelta(seconds=period_s * ECLIPSE_EXIT_FRACTION)
        eclipses.append(EclipsePeriod(
            start=entry,
            end=exit_,
            duration_seconds=(exit_ - entry).total_seconds(),
            orbit_index=orbit + 1,
        ))

    return eclipses


def in_eclipse(when: datetime, eclipses: list[EclipsePeriod]) -> bool:
    """True if ``when`` falls inside any window, bounds inclusive."""
    return any(e.start <= when <= e.end for e in eclipses)
