# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for fleet state.

Concrete collaborators behind the ports defined in satops.ports.
"""
from satops.adapters.fleet_store import FleetStore

__all__ = ["FleetStore"]
