# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-tick fleet perturbation and aggregate system metrics.

Each tick drifts the sub-satellite longitude in proportion to ground
speed over altitude, jitters charge level and downlink rate, and
stamps last contact. Randomness comes from a caller-supplied numpy
Generator.
"""
from dataclasses import dataclass, replace
from datetime import datetime

import numpy as np

from satops.domain.fleet import Mission, MissionStatus, Satellite, SatelliteStatus
from satops.domain.orbital_mechanics import GeoPosition, normalize_longitude


@dataclass(frozen=True)
class SimulationConfig:
    """Tick cadence and perturbation magnitudes."""
    tick_interval_s: float = 2.0
    longitude_rate_factor: float = 0.001
    power_jitter: float = 2.0
    power_floor: float = 70.0
    data_rate_jitter: float = 10.0
    deploy_delay_s: float = 3.0


@dataclass(frozen=True)
class SystemMetrics:
    """Fleet-wide status snapshot."""
    operational: bool
    total_satellites: int
    active_satellites: int
    active_missions: int
    total_data_rate_mbps: float
    average_power: float
    power_efficiency: float
    last_update: datetime


def advance_satellite(
    satellite: Satellite,
    now: datetime,
    rng: np.random.Generator,
    config: SimulationConfig = SimulationConfig(),
) -> Satellite:
    """Advance one satellite by a single simulation tick."""
    pos = satellite.position
    lon_step = satellite.velocity_kmh / pos.alt_km * config.longitude_rate_factor
    power_delta, rate_delta = rng.uniform(-0.5, 0.5, size=2)

    power = satellite.power + power_delta * config.power_jitter
    data_rate = satellite.data_rate_mbps + rate_delta * config.data_rate_jitter

    return replace(
        satellite,
        position=GeoPosition(
            lat_deg=pos.lat_deg,
            lon_deg=normalize_longitude(pos.lon_deg + lon_step),
            alt_km=pos.alt_km,
        ),
        power=float(max(config.power_floor, min(100.0, power))),
        data_rate_mbps=float(max(0.0, data_rate)),
        last_contact=now,
    )


def advance_fleet(
    satellites,
    now: datetime,
    rng: np.random.Generator,
    config: SimulationConfig = SimulationConfig(),
) -> list[Satellite]:
    """Advance every satellite, preserving fleet order."""
    return [advance_satellite(sat, now, rng, config) for sat in satellites]


@dataclass(frozen=True)
class FleetSummary:
    """Deterministic fleet counts shared by metrics and the status report."""
    total_satellites: int
    active_satellites: int
    active_missions: int
    total_data_rate_mbps: float
    average_power: float


def summarize_fleet(satellites, missions) -> FleetSummary:
    """Count the fleet without drawing randomness; average power is 0 when empty."""
    satellites = list(satellites)
    total = len(satellites)
    powers = np.array([sat.power for sat in satellites], dtype=float)

    return FleetSummary(
        total_satellites=total,
        active_satellites=sum(1 for s in satellites if s.status == SatelliteStatus.ACTIVE),
        active_missions=sum(1 for m in missions if m.status == MissionStatus.EXECUTING),
        total_data_rate_mbps=float(sum(s.data_rate_mbps for s in satellites)),
        average_power=float(powers.mean()) if total else 0.0,
    )


def compute_system_metrics(
    satellites: list[Satellite],
    missions: list[Mission],
    now: datetime,
    rng: np.random.Generator,
) -> SystemMetrics:
    """Aggregate fleet metrics plus a simulated power efficiency."""
    summary = summarize_fleet(satellites, missions)

    return SystemMetrics(
        operational=True,
        total_satellites=summary.total_satellites,
        active_satellites=summary.active_satellites,
        active_missions=summary.active_missions,
        total_data_rate_mbps=summary.total_data_rate_mbps,
        average_power=summary.average_power,
        power_efficiency=float(95.0 + rng.random() * 5.0),
        last_update=now,
    )
