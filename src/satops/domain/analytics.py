# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytics records produced by data and power commands.

Imagery results are simulated: resolution follows the satellite type,
quality follows health, cloud cover is random. Power analysis reuses
the eclipse and power-profile calculators over the coming hours.
"""
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np

from satops.domain.eclipse import predict_eclipses
from satops.domain.fleet import Satellite, SatelliteType
from satops.domain.power import PowerSample, compute_power_profile

IMAGERY_BANDS = ("Visible", "NIR", "SWIR")
IMAGERY_COVERAGE = "185km x 185km"
EXCELLENT_HEALTH_THRESHOLD = 90.0


@dataclass(frozen=True)
class ImageryResult:
    """Simulated imagery product retrieved from a satellite."""
    satellite: str
    timestamp: datetime
    resolution: str
    coverage: str
    bands: tuple[str, ...]
    cloud_cover: int
    quality: str
    kind: str = field(default="satellite-image")


@dataclass(frozen=True)
class PowerAnalysis:
    """Power prediction and health summary for one satellite."""
    satellite: str
    samples: tuple[PowerSample, ...]
    current_power: float
    battery_health: float
    solar_panel_efficiency: float
    kind: str = field(default="power-chart")


def build_imagery_result(
    satellite: Satellite,
    now: datetime,
    rng: np.random.Generator,
) -> ImageryResult:
    """Simulate the latest imagery product for ``satellite``."""
    if satellite.type == SatelliteType.EARTH_OBSERVATION:
        resolution = "10m/pixel"
    else:
        resolution = "30m/pixel"
    quality = "Excellent" if satellite.health > EXCELLENT_HEALTH_THRESHOLD else "Good"

    return ImageryResult(
        satellite=satellite.name,
        timestamp=now,
        resolution=resolution,
        coverage=IMAGERY_COVERAGE,
        bands=IMAGERY_BANDS,
        cloud_cover=int(round(rng.random() * 30)),
        quality=quality,
    )


def build_power_analysis(
    satellite: Satellite,
    now: datetime,
    rng: np.random.Generator,
    hours: int = 24,
) -> PowerAnalysis:
    """Predict the next ``hours`` of power for ``satellite``."""
    eclipses = predict_eclipses(satellite, now, duration_hours=hours)
    samples = compute_power_profile(satellite, eclipses, hours=hours, start=now, rng=rng)

    return PowerAnalysis(
        satellite=satellite.name,
        samples=tuple(samples),
        current_power=satellite.power,
        battery_health=satellite.health,
        solar_panel_efficiency=float(85.0 + rng.random() * 10.0),
    )
