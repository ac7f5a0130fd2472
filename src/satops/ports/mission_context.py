# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the state the command interpreter acts on.

The interpreter reads the fleet snapshot and issues mutations through
these methods; the implementing adapter owns the state and serializes
writes to it.
"""
from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class CameraController(Protocol):
    """Port for the view that can centre on a satellite."""

    def focus_on_satellite(self, satellite) -> None:
        """Move the camera to follow ``satellite``."""
        ...


@runtime_checkable
class MissionContext(Protocol):
    """Port for fleet state read/update requests from command handlers."""

    camera: CameraController | None

    @property
    def satellites(self) -> Sequence[Any]:
        """Current fleet snapshot, in fleet order."""
        ...

    @property
    def missions(self) -> Sequence[Any]:
        """Current mission list, in creation order."""
        ...

    def select_satellite(self, satellite) -> None:
        """Mark ``satellite`` as the focused fleet member."""
        ...

    def add_mission(self, mission) -> None:
        """Append a mission to the mission list."""
        ...

    def set_analytics(self, record) -> None:
        """Publish the latest analytics result."""
        ...
