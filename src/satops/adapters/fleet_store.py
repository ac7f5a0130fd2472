# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
In-memory fleet state container.

Owns the ordered fleet, the selected satellite, the mission list and
the latest analytics record, and implements the MissionContext port.
All mutations go through this object's methods; it is a single-writer
store and must be driven from one thread (the console's event loop).
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import numpy as np

from satops.domain.fleet import (
    Mission,
    Satellite,
    SatelliteStatus,
    SatelliteType,
    make_satellite,
    transition_status,
    update_satellite,
)
from satops.domain.orbital_mechanics import GeoPosition
from satops.domain.simulation import (
    SimulationConfig,
    SystemMetrics,
    advance_fleet,
    compute_system_metrics,
)
from satops.ports.mission_context import CameraController, MissionContext

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FleetStore(MissionContext):
    """
    Single-writer store for fleet, missions, selection and analytics.

    Args:
        satellites: Initial fleet, in display order.
        missions: Initial mission list.
        camera: Optional view collaborator for ``track``.
        config: Tick and deployment parameters.
        clock: Returns the current time (default: UTC now).
        rng: Randomness source for ticks and metrics.
    """

    def __init__(
        self,
        satellites: list[Satellite] | None = None,
        missions: list[Mission] | None = None,
        camera: CameraController | None = None,
        config: SimulationConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        rng: np.random.Generator | None = None,
    ):
        self._satellites: list[Satellite] = []
        self._missions: list[Mission] = list(missions or [])
        self._selected_id: str | None = None
        self._analytics: Any = None
        self._deployments: dict[str, datetime] = {}
        self.camera = camera
        self._config = config or SimulationConfig()
        self._clock = clock or _utc_now
        self._rng = rng if rng is not None else np.random.default_rng()

        for sat in satellites or []:
            self._insert(sat)

    # --- MissionContext port ---

    @property
    def satellites(self) -> tuple[Satellite, ...]:
        return tuple(self._satellites)

    @property
    def missions(self) -> tuple[Mission, ...]:
        return tuple(self._missions)

    def select_satellite(self, satellite: Satellite | None) -> None:
        self._selected_id = None if satellite is None else satellite.id

    def add_mission(self, mission: Mission) -> None:
        logger.debug("Mission %s added for %s", mission.id, mission.satellite)
        self._missions.append(mission)

    def set_analytics(self, record) -> None:
        self._analytics = record

    # --- Reads ---

    @property
    def selected(self) -> Satellite | None:
        if self._selected_id is None:
            return None
        return self.get_satellite(self._selected_id)

    @property
    def analytics(self):
        return self._analytics

    def get_satellite(self, satellite_id: str) -> Satellite | None:
        """Exact-id lookup."""
        for sat in self._satellites:
            if sat.id == satellite_id:
                return sat
        return None

    def satellites_by_type(self, sat_type: SatelliteType) -> list[Satellite]:
        wanted = SatelliteType(sat_type)
        return [s for s in self._satellites if s.type == wanted]

    def active_satellites(self) -> list[Satellite]:
        return [s for s in self._satellites if s.status == SatelliteStatus.ACTIVE]

    def metrics(self, now: datetime | None = None) -> SystemMetrics:
        return compute_system_metrics(
            list(self._satellites), list(self._missions), now or self._clock(), self._rng,
        )

    # --- Mutations ---

    def add_satellite(self, **overrides) -> Satellite:
        """
        Register a new satellite in ``deploying`` status.

        Unspecified fields take launch defaults. Deployment completes
        on the first tick at least ``deploy_delay_s`` later.

        Raises:
            ValueError: If the id is already in the fleet.
        """
        now = self._clock()
        stamp = int(now.timestamp() * 1000)
        fields = {
            "id": f"SAT_{stamp}",
            "name": f"Satellite {stamp}",
            "type": SatelliteType.CUSTOM,
            "position": GeoPosition(lat_deg=0.0, lon_deg=0.0, alt_km=400.0),
            "velocity_kmh": 27600.0,
            "status": SatelliteStatus.DEPLOYING,
            "health": 100.0,
            "power": 95.0,
            "battery_life_h": 24.0,
            "data_rate_mbps": 50.0 + float(self._rng.random()) * 100.0,
            "mission": None,
            "last_contact": now,
        }
        fields.update(overrides)
        satellite = self._insert(make_satellite(**fields))
        if satellite.status == SatelliteStatus.DEPLOYING:
            self._deployments[satellite.id] = now + timedelta(seconds=self._config.deploy_delay_s)
        return satellite

    def remove_satellite(self, satellite_id: str) -> None:
        self._satellites = [s for s in self._satellites if s.id != satellite_id]
        self._deployments.pop(satellite_id, None)
        if self._selected_id == satellite_id:
            self._selected_id = None
        logger.debug("Satellite %s removed", satellite_id)

    def update_satellite(self, satellite_id: str, **changes) -> Satellite:
        """
        Merge ``changes`` into a satellite and stamp its last contact.

        A renamed satellite keeps its pending deployment and selection.

        Raises:
            KeyError: If no satellite has this id.
            ValueError: On an illegal status transition or if the new id
                is already in the fleet.
        """
        index = self._index_of(satellite_id)
        new_id = changes.get("id", satellite_id)
        if new_id != satellite_id and self.get_satellite(new_id) is not None:
            raise ValueError(f"Duplicate satellite id: {new_id}")

        changes.setdefault("last_contact", self._clock())
        updated = update_satellite(self._satellites[index], **changes)
        self._satellites[index] = updated

        if new_id != satellite_id:
            if satellite_id in self._deployments:
                self._deployments[new_id] = self._deployments.pop(satellite_id)
            if self._selected_id == satellite_id:
                self._selected_id = new_id
            logger.debug("Satellite %s renamed to %s", satellite_id, new_id)
        return updated

    def tick(self, now: datetime | None = None) -> None:
        """Advance the fleet one simulation step and complete due deployments."""
        now = now or self._clock()
        self._satellites = advance_fleet(self._satellites, now, self._rng, self._config)

        for sat_id, due in list(self._deployments.items()):
            if now < due:
                continue
            del self._deployments[sat_id]
            index = self._index_of(sat_id)
            sat = self._satellites[index]
            if sat.status == SatelliteStatus.DEPLOYING:
                self._satellites[index] = transition_status(sat, SatelliteStatus.ACTIVE)
                logger.info("Satellite %s deployment complete", sat_id)

    # --- Internals ---

    def _insert(self, satellite: Satellite) -> Satellite:
        if self.get_satellite(satellite.id) is not None:
            raise ValueError(f"Duplicate satellite id: {satellite.id}")
        self._satellites.append(satellite)
        logger.debug("Satellite %s added (%s)", satellite.id, satellite.type.value)
        return satellite

    def _index_of(self, satellite_id: str) -> int:
        for i, sat in enumerate(self._satellites):
            if sat.id == satellite_id:
                return i
        raise KeyError(satellite_id)
