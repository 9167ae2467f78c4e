# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Evaluators, drivers and the value types they exchange."""
from __future__ import annotations

from .config import AGENT_CONFIG, AgentTuning, AIConfig, GoalkeeperConfig, MovementConfig, PassingConfig, ShootingConfig
from .physics import KinematicBody, RigidBody, Vector2D, Vector3D
from .snapshot import AgentSnapshot, BallSnapshot, PassCandidate, ThreatPosition
from .states import AIState, GoalkeeperState

__all__ = [
    "AGENT_CONFIG",
    "AgentTuning",
    "AIConfig",
    "GoalkeeperConfig",
    "MovementConfig",
    "PassingConfig",
    "ShootingConfig",
    "KinematicBody",
    "RigidBody",
    "Vector2D",
    "Vector3D",
    "AgentSnapshot",
    "BallSnapshot",
    "PassCandidate",
    "ThreatPosition",
    "AIState",
    "GoalkeeperState",
]
