# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SatOps

Orbital and telemetry calculators plus an operator command interpreter
for a simulated satellite fleet. Includes circular-orbit velocity and
period, haversine distance, ground tracks, ground-observer visibility
and azimuth, fixed-fraction eclipse prediction, hourly power profiles,
sensor footprints, a per-tick fleet simulation and a table-driven
command console.
"""

__version__ = "0.1.0"

from satops.domain.errors import (
    InvalidGeometry,
    CommandError,
    SatelliteNotFound,
    UnsupportedCapability,
    UnknownCommand,
)
from satops.domain.orbital_mechanics import (
    OrbitalConstants,
    GeoPosition,
    normalize_longitude,
    orbital_velocity,
    orbital_period,
    great_circle_distance,
)
from satops.domain.fleet import (
    SatelliteType,
    SatelliteStatus,
    MissionType,
    MissionStatus,
    Target,
    Satellite,
    Mission,
    make_satellite,
    update_satellite,
    transition_status,
    transition_mission,
    find_satellite,
)
from satops.domain.ground_track import (
    GroundTrackPoint,
    compute_ground_track,
)
from satops.domain.observation import (
    Visibility,
    compute_azimuth,
    compute_visibility,
)
from satops.domain.eclipse import (
    EclipsePeriod,
    predict_eclipses,
    in_eclipse,
)
from satops.domain.power import (
    PowerSample,
    compute_power_profile,
)
from satops.domain.sensor import (
    SensorFootprint,
    compute_sensor_footprint,
)
from satops.domain.simulation import (
    SimulationConfig,
    SystemMetrics,
    FleetSummary,
    summarize_fleet,
    advance_satellite,
    advance_fleet,
    compute_system_metrics,
)
from satops.domain.analytics import (
    ImageryResult,
    PowerAnalysis,
    build_imagery_result,
    build_power_analysis,
)
from satops.domain.commands import (
    InterpreterConfig,
    RecordStatus,
    CommandRecord,
    CommandSuggestion,
    CommandSpec,
    CommandInterpreter,
    build_registry,
    parse_command_line,
    render_example,
)
from satops.adapters.fleet_store import FleetStore
