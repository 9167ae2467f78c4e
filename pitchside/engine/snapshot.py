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
"""Per-tick snapshots consumed by the evaluators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import AIConfig
from .physics import RigidBody, Vector2D


@dataclass(frozen=True)
class BallSnapshot:
    """Ground-plane view of the ball for a single tick.

    Parameters
    ----------
    position : Vector2D
        Ball position on the ground plane.
    velocity : Vector2D
        Ground components of the ball's linear velocity.
    speed : float
        Full speed magnitude, vertical component included.
    """

    position: Vector2D
    velocity: Vector2D
    speed: float

    @classmethod
    def from_body(cls, body: RigidBody) -> "BallSnapshot":
        """Capture the current state of ``body``.

        Parameters
        ----------
        body : RigidBody
            Ball body supplied by the physics collaborator.

        Returns
        -------
        BallSnapshot
            Immutable snapshot of the body's position and velocity.
        """
        return cls(
            position=body.position.ground(),
            velocity=body.velocity.ground(),
            speed=body.velocity.magnitude(),
        )


@dataclass(frozen=True)
class AgentSnapshot:
    """Read-only bundle a field player decides from.

    Instances are created by the driver at the start of a tick and discarded at
    the end of it.

    Parameters
    ----------
    position : Vector2D
        Agent position on the ground plane.
    ball_position : Vector2D
        Ball position on the ground plane.
    formation_position : Vector2D
        Formation slot the agent returns to.
    is_nearest_to_ball : bool
        Whether the team coordinator picked this agent as nearest to the ball.
    config : AIConfig
        Tuning the decision is evaluated against.
    ball_velocity : Vector2D | None, optional
        Ground velocity of the ball when known.
    """

    position: Vector2D
    ball_position: Vector2D
    formation_position: Vector2D
    is_nearest_to_ball: bool
    config: AIConfig
    ball_velocity: Optional[Vector2D] = None


@dataclass(frozen=True)
class PassCandidate:
    """Teammate that may receive a pass.

    Parameters
    ----------
    index : int
        Position of the teammate in the source collection.
    position : Vector2D
        Teammate position on the ground plane.
    """

    index: int
    position: Vector2D


@dataclass(frozen=True)
class ThreatPosition:
    """Opponent that may intercept a pass.

    Parameters
    ----------
    index : int
        Position of the opponent in the source collection.
    position : Vector2D
        Opponent position on the ground plane.
    """

    index: int
    position: Vector2D


def _ground_positions(bodies: Optional[Sequence[Optional[RigidBody]]]) -> List[Vector2D]:
    """Project ``bodies`` to ground positions, keeping gaps at the origin.

    Parameters
    ----------
    bodies : Sequence[RigidBody | None] | None
        Source collection, possibly containing missing entries.

    Returns
    -------
    List[Vector2D]
        One position per entry; missing bodies map to ``Vector2D(0, 0)``.
    """
    if not bodies:
        return []
    return [body.position.ground() if body is not None else Vector2D(0.0, 0.0) for body in bodies]


def build_pass_candidates(teammates: Optional[Sequence[Optional[RigidBody]]]) -> List[PassCandidate]:
    """Wrap teammate bodies as indexed pass candidates.

    Parameters
    ----------
    teammates : Sequence[RigidBody | None] | None
        Teammate bodies in roster order.

    Returns
    -------
    List[PassCandidate]
        Candidates carrying their source index.
    """
    return [PassCandidate(i, pos) for i, pos in enumerate(_ground_positions(teammates))]


def build_threat_positions(opponents: Optional[Sequence[Optional[RigidBody]]]) -> List[ThreatPosition]:
    """Wrap opponent bodies as indexed threats.

    Parameters
    ----------
    opponents : Sequence[RigidBody | None] | None
        Opponent bodies in roster order.

    Returns
    -------
    List[ThreatPosition]
        Threats carrying their source index.
    """
    return [ThreatPosition(i, pos) for i, pos in enumerate(_ground_positions(opponents))]
