# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Operator command interpreter.

A flat registry maps each command keyword to a CommandSpec carrying its
syntax, description and async handler. ``CommandInterpreter.submit``
splits a raw line on whitespace, dispatches the first token
(case-sensitive) and records the outcome in an append-only audit log.

Handlers receive the argument tokens, a MissionContext for fleet
reads/mutations, and a CommandEnvironment with configuration, clock
and randomness source. Satellite ids are matched case-insensitively.

Each submitted line gets exactly one record, appended as ``executing``
before the handler runs and replaced once by its ``success`` or
``error`` outcome. Handlers that simulate latency yield to the event
loop, so independent submissions may overlap and finish out of order.
"""
import asyncio
import itertools
import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Awaitable, Callable

import numpy as np

from satops.domain.analytics import build_imagery_result, build_power_analysis
from satops.domain.errors import (
    CommandError,
    SatelliteNotFound,
    UnknownCommand,
    UnsupportedCapability,
)
from satops.domain.fleet import (
    IMAGING_CAPABLE_TYPES,
    Mission,
    MissionStatus,
    MissionType,
    find_satellite,
)
from satops.domain.simulation import summarize_fleet
from satops.ports.mission_context import MissionContext

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"<(\w+)>")


@dataclass(frozen=True)
class InterpreterConfig:
    """Latencies and defaults used by the command handlers."""
    data_latency_s: float = 2.0
    power_latency_s: float = 1.5
    imaging_duration: timedelta = timedelta(minutes=30)
    default_imaging_target: str = "User Defined Target"
    example_satellite: str = "ISS"
    example_target: str = "amazon_forest"
    power_profile_hours: int = 24


class RecordStatus(Enum):
    EXECUTING = "executing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CommandRecord:
    """Audit entry for one submitted command line."""
    id: int
    command: str
    timestamp: datetime
    status: RecordStatus
    result: str | None = None


@dataclass(frozen=True)
class CommandSuggestion:
    """A registry entry rendered for autocompletion."""
    command: str
    description: str
    example: str


@dataclass(frozen=True)
class CommandEnvironment:
    """Everything a handler needs besides its arguments and context."""
    config: InterpreterConfig
    clock: Callable[[], datetime]
    rng: np.random.Generator
    registry: dict = field(default_factory=dict)


Handler = Callable[[list[str], MissionContext, CommandEnvironment], Awaitable[str]]


@dataclass(frozen=True)
class CommandSpec:
    """Registry entry: how a command is written, what it does, how it runs."""
    keyword: str
    syntax: str
    description: str
    execute: Handler


def parse_command_line(line: str) -> tuple[str, list[str]]:
    """Split a raw line into (keyword, args) on runs of whitespace."""
    parts = line.strip().split()
    if not parts:
        return "", []
    return parts[0], parts[1:]


def render_example(syntax: str, config: InterpreterConfig) -> str:
    """Substitute concrete values for ``<placeholder>`` parameters."""
    def _fill(match: re.Match) -> str:
        param = match.group(1)
        if param == "satellite":
            return config.example_satellite
        if param == "target":
            return config.example_target
        return param

    return _PLACEHOLDER.sub(_fill, syntax)


def _require_satellite(args: list[str], context: MissionContext):
    requested = args[0] if args else None
    satellite = find_satellite(context.satellites, requested)
    if satellite is None:
        raise SatelliteNotFound(requested)
    return satellite


def _unique_mission_id(prefix: str, now: datetime, context: MissionContext) -> str:
    base = f"{prefix}_{int(now.timestamp() * 1000)}"
    taken = {m.id for m in context.missions}
    candidate = base
    for n in itertools.count(1):
        if candidate not in taken:
            return candidate
        candidate = f"{base}_{n}"


# --- Handlers ---

async def _track(args, context, env):
    satellite = _require_satellite(args, context)
    context.select_satellite(satellite)
    camera = getattr(context, "camera", None)
    if camera is not None:
        camera.focus_on_satellite(satellite)
    return f"Now tracking {satellite.name} ({satellite.id})"


async def _task_imaging(args, context, env):
    satellite = _require_satellite(args, context)
    target = " ".join(args[1:]) or env.config.default_imaging_target

    if satellite.type not in IMAGING_CAPABLE_TYPES:
        raise UnsupportedCapability(satellite.id, "imaging")

    now = env.clock()
    mission = Mission(
        id=_unique_mission_id("IMG", now, context),
        type=MissionType.IMAGING,
        satellite=satellite.id,
        target=target,
        status=MissionStatus.EXECUTING,
        progress=0.0,
        start_time=now,
        estimated_completion=now + env.config.imaging_duration,
    )
    context.add_mission(mission)
    return f"Imaging mission started for {satellite.name}. Target: {target}"


async def _get_data(args, context, env):
    satellite = _require_satellite(args, context)
    await asyncio.sleep(env.config.data_latency_s)

    result = build_imagery_result(satellite, env.clock(), env.rng)
    context.set_analytics(result)
    return f"Data retrieved from {satellite.name}. Quality: {result.quality}"


async def _get_power_status(args, context, env):
    satellite = _require_satellite(args, context)
    await asyncio.sleep(env.config.power_latency_s)

    analysis = build_power_analysis(
        satellite, env.clock(), env.rng, hours=env.config.power_profile_hours,
    )
    context.set_analytics(analysis)
    return (
        f"Power analysis completed for {satellite.name}. "
        f"Current: {satellite.power:.1f}%"
    )


async def _status(args, context, env):
    summary = summarize_fleet(context.satellites, context.missions)

    return (
        "System Status: OPERATIONAL\n"
        f"Active Satellites: {summary.active_satellites}/{summary.total_satellites}\n"
        f"Average Power: {summary.average_power:.1f}%\n"
        f"Active Missions: {summary.active_missions}\n"
        f"Last Update: {env.clock():%H:%M:%S}"
    )


async def _help(args, context, env):
    registry = env.registry
    if args:
        spec = registry.get(args[0])
        if spec is None:
            raise UnknownCommand(args[0])
        return (
            f"{spec.syntax}\n"
            f"{spec.description}\n\n"
            f"Example: {render_example(spec.syntax, env.config)}"
        )

    lines = [f"  {spec.syntax:<25} - {spec.description}" for spec in registry.values()]
    return (
        "Available DSL Commands:\n"
        + "\n".join(lines)
        + "\n\nType 'help <command>' for detailed information about a specific command."
    )


def build_registry() -> dict[str, CommandSpec]:
    """The operator command table, in display order."""
    specs = [
        CommandSpec("track", "track <satellite>",
                    "Focus camera on specified satellite", _track),
        CommandSpec("taskImaging", "taskImaging <satellite> [target]",
                    "Start imaging mission for satellite", _task_imaging),
        CommandSpec("getData", "getData <satellite>",
                    "Retrieve latest data from satellite", _get_data),
        CommandSpec("getPowerStatus", "getPowerStatus <satellite>",
                    "Get power analysis and predictions", _get_power_status),
        CommandSpec("status", "status",
                    "Show system status", _status),
        CommandSpec("help", "help [command]",
                    "Show available commands or help for specific command", _help),
    ]
    return {spec.keyword: spec for spec in specs}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommandInterpreter:
    """
    Dispatches operator command lines and keeps their audit log.

    Args:
        config: Handler latencies and defaults.
        clock: Returns the current time (default: UTC now).
        rng: Randomness source for simulated results.
        registry: Command table (default: build_registry()).
    """

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        rng: np.random.Generator | None = None,
        registry: dict[str, CommandSpec] | None = None,
    ):
        self._registry = registry if registry is not None else build_registry()
        self._env = CommandEnvironment(
            config=config or InterpreterConfig(),
            clock=clock or _utc_now,
            rng=rng if rng is not None else np.random.default_rng(),
            registry=self._registry,
        )
        self._history: list[CommandRecord] = []
        self._ids = itertools.count(1)

    @property
    def history(self) -> tuple[CommandRecord, ...]:
        return tuple(self._history)

    @property
    def available_commands(self) -> list[str]:
        return list(self._registry)

    @property
    def registry(self) -> dict[str, CommandSpec]:
        return dict(self._registry)

    def clear_history(self) -> None:
        self._history.clear()

    def suggest(self, partial: str) -> list[CommandSuggestion]:
        """Registry entries whose keyword or description contains ``partial``."""
        needle = partial.lower()
        return [
            CommandSuggestion(
                command=spec.syntax,
                description=spec.description,
                example=render_example(spec.syntax, self._env.config),
            )
            for keyword, spec in self._registry.items()
            if needle in keyword.lower() or needle in spec.description.lower()
        ]

    async def submit(self, line: str, context: MissionContext) -> CommandRecord:
        """
        Run one command line against ``context``.

        Never raises for command failures: the returned (and logged)
        record carries either the handler's result or the error message.
        """
        record = CommandRecord(
            id=next(self._ids),
            command=line,
            timestamp=self._env.clock(),
            status=RecordStatus.EXECUTING,
        )
        self._history.append(record)

        keyword, args = parse_command_line(line)
        logger.debug("Dispatching %r (record %d)", keyword, record.id)

        try:
            spec = self._registry.get(keyword)
            if spec is None:
                raise UnknownCommand(keyword, hint=True)
            result = await spec.execute(args, context, self._env)
        except CommandError as e:
            logger.warning("Command %r failed: %s", line, e)
            return self._finish(record, RecordStatus.ERROR, str(e))
        except Exception as e:
            logger.exception("Command %r raised unexpectedly", line)
            return self._finish(record, RecordStatus.ERROR, str(e) or "Command execution failed")

        logger.info("Command %r completed", keyword)
        return self._finish(record, RecordStatus.SUCCESS, result)

    def _finish(self, record: CommandRecord, status: RecordStatus, result: str) -> CommandRecord:
        done = replace(record, status=status, result=result)
        for i, entry in enumerate(self._history):
            if entry.id == record.id:
                self._history[i] = done
                break
        return done
