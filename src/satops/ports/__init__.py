# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces between the command interpreter and the state layer.

Adapters implement these to expose fleet state and view side-effects.
"""
from satops.ports.mission_context import CameraController, MissionContext

__all__ = ["CameraController", "MissionContext"]
