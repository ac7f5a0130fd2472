# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line operator console.

Usage:
    # Interactive console against the demo constellation
    satops

    # One-shot commands, no simulated latency
    satops -c "track iss" -c "taskImaging LANDSAT8 amazon" --no-latency

    # Reproducible output, verbose logging, slower fleet tick
    satops --seed 42 --log-level DEBUG --tick 5
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone

import numpy as np

from satops.adapters.fleet_store import FleetStore
from satops.domain.commands import CommandInterpreter, InterpreterConfig, RecordStatus
from satops.domain.fleet import (
    Mission,
    MissionStatus,
    MissionType,
    Satellite,
    SatelliteStatus,
    SatelliteType,
    Target,
    make_satellite,
)
from satops.domain.orbital_mechanics import GeoPosition
from satops.domain.simulation import SimulationConfig

logger = logging.getLogger(__name__)

PROMPT = "DSL> "
_EXIT_WORDS = {"exit", "quit"}


def get_default_fleet(now: datetime) -> list[Satellite]:
    """
    Demo constellation: ISS, Landsat 8, GOES-16, Sentinel-2A.
    """
    return [
        make_satellite(
            id="ISS", name="International Space Station", type=SatelliteType.CREWED,
            position=GeoPosition(25.7617, -80.1918, 408.0), velocity_kmh=27600.0,
            status=SatelliteStatus.ACTIVE, health=98.0, power=85.3,
            battery_life_h=18.2, data_rate_mbps=125.8, last_contact=now,
        ),
        make_satellite(
            id="LANDSAT8", name="Landsat 8", type=SatelliteType.EARTH_OBSERVATION,
            position=GeoPosition(-15.7975, 47.4737, 705.0), velocity_kmh=24890.0,
            status=SatelliteStatus.ACTIVE, health=95.0, power=92.1,
            battery_life_h=22.7, data_rate_mbps=384.0, last_contact=now,
            mission="imaging",
            target=Target(-15.7975, 47.4737, "Madagascar Forest"),
        ),
        make_satellite(
            id="GOES16", name="GOES-16", type=SatelliteType.WEATHER,
            position=GeoPosition(0.0, -75.2, 35786.0), velocity_kmh=11070.0,
            status=SatelliteStatus.ACTIVE, health=97.0, power=88.7,
            battery_life_h=45.1, data_rate_mbps=267.3, last_contact=now,
            mission="monitoring",
            target=Target(25.7617, -80.1918, "Hurricane Watch"),
        ),
        make_satellite(
            id="SENTINEL2A", name="Sentinel-2A", type=SatelliteType.EARTH_OBSERVATION,
            position=GeoPosition(37.7749, -122.4194, 786.0), velocity_kmh=25200.0,
            status=SatelliteStatus.ACTIVE, health=94.0, power=91.2,
            battery_life_h=19.8, data_rate_mbps=520.0, last_contact=now,
        ),
    ]


def get_default_missions(now: datetime) -> list[Mission]:
    """Missions already in flight when the console starts."""
    return [
        Mission(
            id="IMG_001", type=MissionType.IMAGING, satellite="LANDSAT8",
            target="Madagascar Forest", status=MissionStatus.EXECUTING,
            progress=67.0, start_time=now - timedelta(minutes=30),
            estimated_completion=now + timedelta(minutes=15),
        ),
        Mission(
            id="MON_002", type=MissionType.MONITORING, satellite="GOES16",
            target="Hurricane Watch", status=MissionStatus.EXECUTING,
            progress=100.0, start_time=now - timedelta(hours=1),
            estimated_completion=None,
        ),
    ]


def build_session(
    seed: int | None = None,
    no_latency: bool = False,
    empty_fleet: bool = False,
    tick_interval_s: float = SimulationConfig.tick_interval_s,
) -> tuple[FleetStore, CommandInterpreter]:
    """Wire a fleet store and interpreter sharing one randomness source."""
    rng = np.random.default_rng(seed)
    now = datetime.now(timezone.utc)

    store = FleetStore(
        satellites=[] if empty_fleet else get_default_fleet(now),
        missions=[] if empty_fleet else get_default_missions(now),
        config=SimulationConfig(tick_interval_s=tick_interval_s),
        rng=rng,
    )
    config = InterpreterConfig()
    if no_latency:
        config = InterpreterConfig(data_latency_s=0.0, power_latency_s=0.0)
    interpreter = CommandInterpreter(config=config, rng=rng)
    logger.debug(
        "Session ready: %d satellites, %d missions",
        len(store.satellites), len(store.missions),
    )
    return store, interpreter


def _report(record) -> bool:
    """Print a finished record; True on success."""
    if record.status == RecordStatus.SUCCESS:
        print(record.result)
        return True
    print(f"Error: {record.result}", file=sys.stderr)
    return False


async def run_commands(lines: list[str], store: FleetStore, interpreter: CommandInterpreter) -> int:
    """Run commands in order; return the number that failed."""
    failures = 0
    for line in lines:
        record = await interpreter.submit(line, store)
        if not _report(record):
            failures += 1
    return failures


async def _tick_forever(store: FleetStore, interval_s: float) -> None:
    while True:
        await asyncio.sleep(interval_s)
        store.tick()


async def run_console(store: FleetStore, interpreter: CommandInterpreter, tick_interval_s: float) -> None:
    """Interactive prompt; returns on exit/quit/EOF."""
    loop = asyncio.get_running_loop()
    ticker = None
    if tick_interval_s > 0:
        ticker = asyncio.create_task(_tick_forever(store, tick_interval_s))

    print("DSL SatOps Command Interface. Type 'help' for commands, 'exit' to quit.")
    pending: set[asyncio.Task] = set()
    try:
        while True:
            try:
                line = await loop.run_in_executor(None, input, PROMPT)
            except EOFError:
                break
            if line.strip() in _EXIT_WORDS:
                break
            if not line.strip():
                continue
            task = asyncio.create_task(_submit_and_report(line, store, interpreter))
            pending.add(task)
            task.add_done_callback(pending.discard)
    finally:
        if ticker is not None:
            ticker.cancel()
        if pending:
            await asyncio.gather(*pending)


async def _submit_and_report(line: str, store: FleetStore, interpreter: CommandInterpreter) -> None:
    _report(await interpreter.submit(line, store))


def main():
    parser = argparse.ArgumentParser(
        description="Satellite fleet operator console (simulated telemetry)"
    )
    parser.add_argument(
        '--command', '-c', action='append', default=[],
        help="Run a command and exit (repeatable, run in order)"
    )
    parser.add_argument(
        '--no-latency', action='store_true',
        help="Disable simulated data/power retrieval latency"
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help="Seed for simulated telemetry randomness"
    )
    parser.add_argument(
        '--tick', type=float, default=SimulationConfig.tick_interval_s,
        help="Fleet simulation tick interval in seconds, 0 disables (default: 2.0)"
    )
    parser.add_argument(
        '--log-level', default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help="Logging verbosity (default: WARNING)"
    )
    parser.add_argument(
        '--empty-fleet', action='store_true',
        help="Start without the demo constellation"
    )
    args = parser.parse_args()

    if args.tick < 0:
        parser.error("--tick must be non-negative")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store, interpreter = build_session(
        seed=args.seed,
        no_latency=args.no_latency,
        empty_fleet=args.empty_fleet,
        tick_interval_s=args.tick,
    )

    if args.command:
        failures = asyncio.run(run_commands(args.command, store, interpreter))
        if failures:
            sys.exit(1)
        return

    try:
        asyncio.run(run_console(store, interpreter, args.tick))
    except KeyboardInterrupt:
        print("\nConsole stopped.")


if __name__ == '__main__':
    main()
