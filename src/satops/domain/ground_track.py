# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground track computation for circular orbits.

Advances the sub-satellite longitude at the orbit's mean angular rate
while holding latitude and altitude fixed. This is a display-grade
approximation, not a propagator: there is no inclination, Earth
rotation or perturbation model.

No external dependencies — only stdlib math/dataclasses/datetime + numpy.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import numpy as np

from satops.domain.errors import InvalidGeometry
from satops.domain.orbital_mechanics import orbital_period, require_finite


@dataclass(frozen=True)
class GroundTrackPoint:
    """A single point on a satellite's ground track."""
    time: datetime
    lat_deg: float
    lon_deg: float
    alt_km: float


def compute_ground_track(
    satellite,
    duration_s: float = 3600.0,
    steps: int = 100,
    start: datetime | None = None,
) -> list[GroundTrackPoint]:
    """
    Compute the ground track of a satellite over a time interval.

    Longitude advances by 2π/T per second and is wrapped into
    [-180, 180) with ((lon + Δ + 540) mod 360) − 180.

    Args:
        satellite: Object with a ``position`` carrying lat_deg, lon_deg
            and alt_km.
        duration_s: Total time span (seconds, > 0).
        steps: Number of intervals; steps + 1 points are returned.
        start: Time of the first point (default: now, UTC).

    Returns:
        List of GroundTrackPoint with strictly increasing times.

    Raises:
        InvalidGeometry: If altitude is not positive, inputs are
            non-finite, duration is not positive or steps < 1.
    """
    pos = satellite.position
    require_finite(lat_deg=pos.lat_deg, lon_deg=pos.lon_deg, duration_s=duration_s)
    if duration_s <= 0:
        raise InvalidGeometry(f"duration_s must be positive, got {duration_s}")
    if steps < 1:
        raise InvalidGeometry(f"steps must be at least 1, got {steps}")

    period = orbital_period(pos.alt_km)
    angular_velocity = 2.0 * np.pi / period
    if start is None:
        start = datetime.now(timezone.utc)

    times = np.arange(steps + 1) * (duration_s / steps)
    delta_lon = np.degrees(angular_velocity * times)
    lons = np.mod(pos.lon_deg + delta_lon + 540.0, 360.0) - 180.0
    # np.mod can round up to the divisor for tiny negative inputs
    lons = np.where(lons >= 180.0, lons - 360.0, lons)

    return [
        GroundTrackPoint(
            time=start + timedelta(seconds=float(t)),
            lat_deg=pos.lat_deg,
            lon_deg=float(lon),
            alt_km=pos.alt_km,
        )
        for t, lon in zip(times, lons)
    ]
