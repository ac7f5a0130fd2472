# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Fleet data model: satellites, missions, and their lifecycle rules.

Satellites and missions are immutable value objects. State changes
produce new instances through the normalizing constructors and the
transition functions below, which enforce the clamping and lifecycle
invariants.
"""
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum

from satops.domain.orbital_mechanics import (
    GeoPosition,
    normalize_longitude,
    require_finite,
    require_positive_altitude,
)


class SatelliteType(Enum):
    CREWED = "crewed"
    WEATHER = "weather"
    EARTH_OBSERVATION = "earth-observation"
    NAVIGATION = "navigation"
    COMMUNICATION = "communication"
    CUSTOM = "custom"


class SatelliteStatus(Enum):
    DEPLOYING = "deploying"
    ACTIVE = "active"
    INACTIVE = "inactive"


class MissionType(Enum):
    IMAGING = "imaging"
    MONITORING = "monitoring"
    COMMUNICATION = "communication"


class MissionStatus(Enum):
    EXECUTING = "executing"
    PAUSED = "paused"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_MISSION_STATUSES = frozenset({MissionStatus.COMPLETED, MissionStatus.FAILED})

IMAGING_CAPABLE_TYPES = frozenset({SatelliteType.EARTH_OBSERVATION, SatelliteType.CUSTOM})


@dataclass(frozen=True)
class Target:
    """A named ground target."""
    lat_deg: float
    lon_deg: float
    name: str


@dataclass(frozen=True)
class Satellite:
    """Identity plus physical/operational state of one fleet member."""
    id: str
    name: str
    type: SatelliteType
    position: GeoPosition
    velocity_kmh: float
    health: float
    power: float
    data_rate_mbps: float
    status: SatelliteStatus
    last_contact: datetime
    battery_life_h: float = 24.0
    mission: str | None = None
    target: Target | None = field(default=None)


@dataclass(frozen=True)
class Mission:
    """A task bound to one satellite."""
    id: str
    type: MissionType
    satellite: str
    target: str
    status: MissionStatus
    progress: float
    start_time: datetime
    estimated_completion: datetime | None = None


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def make_satellite(
    id: str,
    name: str,
    type: SatelliteType,
    position: GeoPosition,
    velocity_kmh: float,
    health: float,
    power: float,
    data_rate_mbps: float,
    status: SatelliteStatus,
    last_contact: datetime,
    battery_life_h: float = 24.0,
    mission: str | None = None,
    target: Target | None = None,
) -> Satellite:
    """
    Build a Satellite with its invariants applied.

    Power and health are clamped to [0, 100], longitude is wrapped
    into (-180, 180] and the data rate is floored at zero.

    Raises:
        InvalidGeometry: If latitude/longitude are non-finite or the
            altitude is not a finite positive number.
    """
    require_finite(lat_deg=position.lat_deg, lon_deg=position.lon_deg)
    require_positive_altitude(position.alt_km)
    return Satellite(
        id=id,
        name=name,
        type=SatelliteType(type),
        position=GeoPosition(
            lat_deg=position.lat_deg,
            lon_deg=normalize_longitude(position.lon_deg),
            alt_km=position.alt_km,
        ),
        velocity_kmh=velocity_kmh,
        health=_clamp_percent(health),
        power=_clamp_percent(power),
        data_rate_mbps=max(0.0, data_rate_mbps),
        status=SatelliteStatus(status),
        last_contact=last_contact,
        battery_life_h=battery_life_h,
        mission=mission,
        target=target,
    )


def update_satellite(satellite: Satellite, **changes) -> Satellite:
    """Return a copy of ``satellite`` with ``changes`` applied and re-normalized.

    A status change goes through transition_status.
    """
    new_status = changes.pop("status", None)
    merged = replace(satellite, **changes)
    normalized = make_satellite(**{
        f.name: getattr(merged, f.name) for f in fields(Satellite)
    })
    if new_status is not None:
        normalized = transition_status(normalized, SatelliteStatus(new_status))
    return normalized


def transition_status(satellite: Satellite, new_status: SatelliteStatus) -> Satellite:
    """
    Move a satellite to a new operational status.

    Allowed: deploying -> active, and any -> inactive. Re-asserting the
    current status is a no-op.

    Raises:
        ValueError: On any other transition.
    """
    current = satellite.status
    if new_status == current:
        return satellite
    allowed = (
        new_status == SatelliteStatus.INACTIVE
        or (current == SatelliteStatus.DEPLOYING and new_status == SatelliteStatus.ACTIVE)
    )
    if not allowed:
        raise ValueError(
            f"Illegal status transition for {satellite.id}: "
            f"{current.value} -> {new_status.value}"
        )
    return replace(satellite, status=new_status)


def transition_mission(
    mission: Mission,
    new_status: MissionStatus,
    progress: float | None = None,
) -> Mission:
    """
    Move a mission to a new status, optionally updating progress.

    Completed and failed are final: re-asserting them without a
    progress change is a no-op, anything else is rejected.

    Raises:
        ValueError: If the mission is already completed or failed.
    """
    new_progress = mission.progress if progress is None else _clamp_percent(progress)
    if mission.status in TERMINAL_MISSION_STATUSES:
        if new_status == mission.status and new_progress == mission.progress:
            return mission
        raise ValueError(
            f"Mission {mission.id} is {mission.status.value} and cannot become "
            f"{new_status.value}"
        )
    return replace(mission, status=new_status, progress=new_progress)


def find_satellite(satellites, satellite_id: str | None) -> Satellite | None:
    """Case-insensitive id lookup; None when absent or id is None."""
    if satellite_id is None:
        return None
    wanted = satellite_id.lower()
    for sat in satellites:
        if sat.id.lower() == wanted:
            return sat
    return None
