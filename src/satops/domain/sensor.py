# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Nadir sensor footprint on a flat-Earth approximation.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satops.domain.errors import InvalidGeometry
from satops.domain.orbital_mechanics import require_finite, require_positive_altitude

# Ground sample distance scales 1 m per km of altitude.
_GSD_M_PER_KM = 1.0


@dataclass(frozen=True)
class SensorFootprint:
    """Ground footprint of a nadir-pointing circular sensor."""
    radius_km: float
    diameter_km: float
    swath_width_km: float
    area_km2: float
    ground_sample_distance_m: float


def compute_sensor_footprint(satellite, sensor_angle_deg: float = 45.0) -> SensorFootprint:
    """Footprint of a sensor with full field of view ``sensor_angle_deg``.

    radius = h · tan(fov / 2), area = π · radius².

    Raises:
        InvalidGeometry: If altitude is not positive or the angle is not
            in (0, 180).
    """
    altitude = satellite.position.alt_km
    require_positive_altitude(altitude)
    require_finite(sensor_angle_deg=sensor_angle_deg)
    if sensor_angle_deg <= 0 or sensor_angle_deg >= 180:
        raise InvalidGeometry(
            f"sensor_angle_deg must be in (0, 180), got {sensor_angle_deg}"
        )

    radius = altitude * math.tan(math.radians(sensor_angle_deg / 2.0))
    return SensorFootprint(
        radius_km=radius,
        diameter_km=2.0 * radius,
        swath_width_km=2.0 * radius,
        area_km2=math.pi * radius**2,
        ground_sample_distance_m=altitude * _GSD_M_PER_KM,
    )
