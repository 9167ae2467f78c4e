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
"""Per-tick driver for outfield players."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pitchside.engine.config import AGENT_CONFIG, AIConfig, MovementConfig
from pitchside.engine.evaluators.field_player import FieldPlayerDecisionEngine
from pitchside.engine.snapshot import AgentSnapshot
from pitchside.engine.states import AIState

from .base import StatefulController

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody, Vector2D
    from pitchside.utils.debug import DecisionDebugger


class FieldPlayerController(StatefulController[AIState]):
    """Runs the Idle / ChaseBall / ReturnToPosition machine for one player.

    Parameters
    ----------
    body : RigidBody
        The player's body.
    ball : RigidBody | None, optional
        Ball body; without it the player keeps its state.
    config : AIConfig | None, optional
        Tuning; defaults to ``AGENT_CONFIG.field_player``.
    formation_position : Vector2D | None, optional
        Formation slot; defaults to the body's starting ground position.
    agent_id : str, optional
        Label used in debug output.
    movement : MovementConfig | None, optional
        Steering constants.
    debugger : DecisionDebugger | None, optional
        Trace log for transitions.
    engine : FieldPlayerDecisionEngine | None, optional
        Decision engine; built from ``config`` when omitted.
    """

    def __init__(
        self,
        body: "RigidBody",
        ball: Optional["RigidBody"] = None,
        config: Optional[AIConfig] = None,
        formation_position: Optional["Vector2D"] = None,
        *,
        agent_id: str = "player",
        movement: Optional[MovementConfig] = None,
        debugger: Optional["DecisionDebugger"] = None,
        engine: Optional[FieldPlayerDecisionEngine] = None,
    ) -> None:
        """Wire the player to its ball, formation slot and decision engine.

        Parameters
        ----------
        body : RigidBody
            The player's body.
        ball : RigidBody | None
            Ball body; without it the player keeps its state.
        config : AIConfig | None
            Tuning; defaults to ``AGENT_CONFIG.field_player``.
        formation_position : Vector2D | None
            Formation slot; defaults to the body's starting ground position.
        agent_id : str
            Label used in debug output.
        movement : MovementConfig | None
            Steering constants.
        debugger : DecisionDebugger | None
            Trace log for transitions.
        engine : FieldPlayerDecisionEngine | None
            Decision engine; built from ``config`` when omitted.
        """
        super().__init__(body, AIState.IDLE, agent_id, movement, debugger)
        self.config = config or AGENT_CONFIG.field_player
        self.ball = ball
        self.formation_position = formation_position or body.position.ground()
        self.is_nearest_to_ball = False
        self.engine = engine or FieldPlayerDecisionEngine(self.config)

    def set_nearest_to_ball(self, is_nearest: bool) -> None:
        """Accept the team coordinator's nearest-to-ball verdict.

        Parameters
        ----------
        is_nearest : bool
            Whether this player is the teammate closest to the ball.
        """
        self.is_nearest_to_ball = is_nearest

    def set_formation_position(self, position: "Vector2D") -> None:
        """Move the formation slot.

        Parameters
        ----------
        position : Vector2D
            New formation target on the ground plane.
        """
        self.formation_position = position

    def set_ball(self, ball: Optional["RigidBody"]) -> None:
        """Replace the ball reference.

        Parameters
        ----------
        ball : RigidBody | None
            New ball body, or ``None`` to detach.
        """
        self.ball = ball

    def snapshot(self) -> Optional[AgentSnapshot]:
        """Assemble this tick's decision inputs.

        Returns
        -------
        AgentSnapshot | None
            Snapshot of player, ball and formation, or ``None`` without a ball.
        """
        if self.ball is None:
            return None
        return AgentSnapshot(
            position=self._ground_position(),
            ball_position=self.ball.position.ground(),
            formation_position=self.formation_position,
            is_nearest_to_ball=self.is_nearest_to_ball,
            config=self.config,
            ball_velocity=self.ball.velocity.ground(),
        )

    def update(self, dt: float) -> AIState:
        """Re-evaluate the state and steer the body for one tick.

        Parameters
        ----------
        dt : float
            Simulation timestep in seconds.

        Returns
        -------
        AIState
            State after this tick's evaluation.
        """
        self.advance_clock(dt)
        snapshot = self.snapshot()
        if snapshot is not None:
            self._set_state(self.engine.evaluate_snapshot(snapshot))
        self._apply_movement()
        return self.state

    def _apply_movement(self) -> None:
        """Translate the current state into a ground velocity."""
        state = self.state
        if state is AIState.IDLE:
            self._decelerate()
        elif state is AIState.CHASE_BALL:
            if self.ball is not None:
                self._steer_toward(self.ball.position.ground(), self.config.sprint_speed)
        elif state is AIState.RETURN_TO_POSITION:
            self._steer_toward(self.formation_position, self.config.move_speed)

    def _decelerate(self) -> None:
        """Damp ground velocity toward rest while idle."""
        ground = self.body.velocity.ground()
        if ground.magnitude() > self.movement.stop_speed:
            self.body.velocity = self.body.velocity.with_ground(ground * self.movement.idle_damping)
        else:
            self._stop_ground()
