# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Circular-orbit velocity and period, great-circle distance on a
spherical Earth, and longitude normalization. Angles are degrees at
the interface and radians internally.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satops.domain.errors import InvalidGeometry


@dataclass(frozen=True)
class _OrbitalConstants:
    """Physical constants for the spherical-Earth model."""
    R_EARTH_KM: float = 6371.0               # km, mean radius
    MU_EARTH_KM3_S2: float = 398600.4418     # km³/s², gravitational parameter


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


@dataclass(frozen=True)
class GeoPosition:
    """Geodetic position on (or above) a spherical Earth."""
    lat_deg: float
    lon_deg: float
    alt_km: float = 0.0


def require_finite(**values: float) -> None:
    """Raise InvalidGeometry naming the first non-finite value."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidGeometry(f"{name} must be finite, got {value}")


def require_positive_altitude(altitude_km: float) -> None:
    """Raise InvalidGeometry unless altitude is finite and above the surface."""
    require_finite(altitude_km=altitude_km)
    if altitude_km <= 0:
        raise InvalidGeometry(f"altitude_km must be positive, got {altitude_km}")


def normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    wrapped = (lon_deg + 180.0) % 360.0 - 180.0
    if wrapped == -180.0:
        return 180.0
    return wrapped


def orbital_velocity(altitude_km: float) -> float:
    """
    Circular orbital velocity.

    v = sqrt(μ / (R + h))

    Args:
        altitude_km: Altitude above the mean Earth radius (km).

    Returns:
        Velocity in km/s.

    Raises:
        InvalidGeometry: If altitude is non-finite or not positive.
    """
    require_positive_altitude(altitude_km)
    c = OrbitalConstants
    return math.sqrt(c.MU_EARTH_KM3_S2 / (c.R_EARTH_KM + altitude_km))


def orbital_period(altitude_km: float) -> float:
    """
    Circular orbital period.

    T = 2π · sqrt((R + h)³ / μ)

    Args:
        altitude_km: Altitude above the mean Earth radius (km).

    Returns:
        Period in seconds.

    Raises:
        InvalidGeometry: If altitude is non-finite or not positive.
    """
    require_positive_altitude(altitude_km)
    c = OrbitalConstants
    radius = c.R_EARTH_KM + altitude_km
    return 2.0 * math.pi * math.sqrt(radius**3 / c.MU_EARTH_KM3_S2)


def great_circle_distance(pos_a, pos_b) -> float:
    """
    Haversine surface distance between two points.

    Args:
        pos_a: Object with lat_deg/lon_deg (degrees).
        pos_b: Object with lat_deg/lon_deg (degrees).

    Returns:
        Distance in km along the Earth's surface, in [0, πR].

    Raises:
        InvalidGeometry: If any coordinate is non-finite.
    """
    require_finite(
        lat_a=pos_a.lat_deg, lon_a=pos_a.lon_deg,
        lat_b=pos_b.lat_deg, lon_b=pos_b.lon_deg,
    )
    lat1 = math.radians(pos_a.lat_deg)
    lat2 = math.radians(pos_b.lat_deg)
    dlat = lat2 - lat1
    dlon = math.radians(pos_b.lon_deg - pos_a.lon_deg)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push a marginally outside [0, 1]
    a = max(0.0, min(1.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return OrbitalConstants.R_EARTH_KM * c
