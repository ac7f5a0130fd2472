# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Error taxonomy for the calculators and the command interpreter.

Calculator failures are ValueErrors so callers that already guard
numeric input with ``except ValueError`` keep working. Interpreter
failures share the CommandError base and are converted to audit
records at the dispatch boundary.
"""


class InvalidGeometry(ValueError):
    """Non-physical input to an orbital or telemetry calculation."""


class CommandError(Exception):
    """Base class for operator command failures."""


class SatelliteNotFound(CommandError):
    """Referenced satellite id has no match in the fleet snapshot."""

    def __init__(self, satellite_id: str | None):
        self.satellite_id = satellite_id
        shown = "" if satellite_id is None else satellite_id
        super().__init__(f"Satellite '{shown}' not found")


class UnsupportedCapability(CommandError):
    """Satellite type cannot perform the requested mission."""

    def __init__(self, satellite_id: str, capability: str):
        self.satellite_id = satellite_id
        self.capability = capability
        super().__init__(
            f"Satellite '{satellite_id}' is not capable of {capability} missions"
        )


class UnknownCommand(CommandError):
    """Command keyword is not in the registry."""

    def __init__(self, keyword: str, hint: bool = False):
        self.keyword = keyword
        message = f"Unknown command: {keyword}"
        if hint:
            message += ". Type 'help' for available commands."
        super().__init__(message)
