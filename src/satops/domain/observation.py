# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground-observer geometry.

Elevation, visibility and azimuth of a satellite as seen from a ground
location, using a spherical-horizon approximation built on the
great-circle distance to the sub-satellite point. Not a rigorous
topocentric look-angle model.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from satops.domain.orbital_mechanics import (
    OrbitalConstants,
    great_circle_distance,
    require_finite,
    require_positive_altitude,
)


@dataclass(frozen=True)
class Visibility:
    """Visibility of a satellite from a ground location."""
    is_visible: bool
    elevation_deg: float
    max_elevation_deg: float
    distance_km: float
    azimuth_deg: float


def compute_azimuth(satellite_pos, ground_pos) -> float:
    """
    Forward azimuth from a ground location to the sub-satellite point.

    Args:
        satellite_pos: Object with lat_deg/lon_deg.
        ground_pos: Object with lat_deg/lon_deg.

    Returns:
        Bearing in degrees, [0, 360), 0 = north, clockwise.
    """
    require_finite(
        sat_lat=satellite_pos.lat_deg, sat_lon=satellite_pos.lon_deg,
        ground_lat=ground_pos.lat_deg, ground_lon=ground_pos.lon_deg,
    )
    lat1 = math.radians(ground_pos.lat_deg)
    lat2 = math.radians(satellite_pos.lat_deg)
    dlon = math.radians(satellite_pos.lon_deg - ground_pos.lon_deg)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    azimuth = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can land on 360.0
    if azimuth >= 360.0:
        azimuth -= 360.0
    return azimuth


def compute_visibility(
    satellite_pos,
    ground_pos,
    min_elevation_deg: float = 10.0,
) -> Visibility:
    """
    Visibility of a satellite from a ground location.

    elevation = asin((h − R(1 − cos(d/R))) / sqrt(d² + h²))
    max_elevation = asin(h / (R + h))

    Args:
        satellite_pos: Object with lat_deg, lon_deg and alt_km.
        ground_pos: Object with lat_deg/lon_deg.
        min_elevation_deg: Elevation threshold for visibility.

    Returns:
        Visibility with is_visible == (elevation >= min_elevation_deg).

    Raises:
        InvalidGeometry: If altitude is not positive or inputs are non-finite.
    """
    h = satellite_pos.alt_km
    require_positive_altitude(h)
    require_finite(min_elevation_deg=min_elevation_deg)

    r = OrbitalConstants.R_EARTH_KM
    distance = great_circle_distance(satellite_pos, ground_pos)

    ratio = (h - r * (1.0 - math.cos(distance / r))) / math.sqrt(distance**2 + h**2)
    ratio = max(-1.0, min(1.0, ratio))
    elevation = math.degrees(math.asin(ratio))
    max_elevation = math.degrees(math.asin(h / (r + h)))

    return Visibility(
        is_visible=elevation >= min_elevation_deg,
        elevation_deg=elevation,
        max_elevation_deg=max_elevation,
        distance_km=distance,
        azimuth_deg=compute_azimuth(satellite_pos, ground_pos),
    )
