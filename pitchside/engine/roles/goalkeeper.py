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
"""Driver for the goalkeeper positioning / diving / recovering cycle."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pitchside.engine.config import AGENT_CONFIG, GoalkeeperConfig, MovementConfig
from pitchside.engine.evaluators.goalkeeper import GoalkeeperLogic
from pitchside.engine.physics import Vector2D
from pitchside.engine.snapshot import BallSnapshot
from pitchside.engine.states import GoalkeeperState

from .base import StatefulController

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody
    from pitchside.utils.debug import DecisionDebugger


class GoalkeeperController(StatefulController[GoalkeeperState]):
    """Goalkeeper that tracks the ball, dives at shots and then recovers.

    Recovery is timed: the keeper returns to ``Positioning`` when the countdown
    expires whether or not it has made it back to the goal centre.

    Parameters
    ----------
    body : RigidBody
        The keeper's body.
    ball : RigidBody | None, optional
        Ball body; ticks are skipped while it is missing.
    config : GoalkeeperConfig | None, optional
        Goal geometry and speeds; defaults to ``AGENT_CONFIG.goalkeeper``.
    agent_id : str, optional
        Label used in debug output.
    movement : MovementConfig | None, optional
        Steering constants.
    debugger : DecisionDebugger | None, optional
        Trace log for transitions and dives.
    logic : GoalkeeperLogic | None, optional
        Geometry evaluator; built from ``config`` when omitted.
    """

    def __init__(
        self,
        body: "RigidBody",
        ball: Optional["RigidBody"] = None,
        config: Optional[GoalkeeperConfig] = None,
        *,
        agent_id: str = "goalkeeper",
        movement: Optional[MovementConfig] = None,
        debugger: Optional["DecisionDebugger"] = None,
        logic: Optional[GoalkeeperLogic] = None,
    ) -> None:
        """Attach the keeper to its goal and ball.

        Parameters
        ----------
        body : RigidBody
            The keeper's body.
        ball : RigidBody | None
            Ball body; ticks are skipped while it is missing.
        config : GoalkeeperConfig | None
            Goal geometry and speeds; defaults to ``AGENT_CONFIG.goalkeeper``.
        agent_id : str
            Label used in debug output.
        movement : MovementConfig | None
            Steering constants.
        debugger : DecisionDebugger | None
            Trace log for transitions and dives.
        logic : GoalkeeperLogic | None
            Geometry evaluator; built from ``config`` when omitted.
        """
        super().__init__(body, GoalkeeperState.POSITIONING, agent_id, movement, debugger)
        self.config = config or AGENT_CONFIG.goalkeeper
        self.logic = logic or GoalkeeperLogic(self.config)
        self.ball = ball
        self.dive_target: Optional[Vector2D] = None
        self.recovery_timer = 0.0

    def set_ball(self, ball: Optional["RigidBody"]) -> None:
        """Replace the ball reference.

        Parameters
        ----------
        ball : RigidBody | None
            New ball body, or ``None`` to detach.
        """
        self.ball = ball

    def update(self, dt: float) -> GoalkeeperState:
        """Advance the keeper by one tick.

        Parameters
        ----------
        dt : float
            Simulation timestep in seconds.

        Returns
        -------
        GoalkeeperState
            State after this tick.
        """
        if self.ball is None:
            return self.state

        self.advance_clock(dt)
        state = self.state
        if state is GoalkeeperState.POSITIONING:
            self._update_positioning(BallSnapshot.from_body(self.ball))
        elif state is GoalkeeperState.DIVING:
            self._update_diving()
        elif state is GoalkeeperState.RECOVERING:
            self._update_recovering(dt)
        return self.state

    def _update_positioning(self, ball: BallSnapshot) -> None:
        """Track the ball across the goal and watch for shots.

        Parameters
        ----------
        ball : BallSnapshot
            Ball state for this tick.
        """
        cfg = self.config
        target = Vector2D(self.logic.goal_line_x, self.logic.calculate_lateral_position(ball.position.z))
        if not self._steer_toward(target, cfg.positioning_speed, cfg.position_tolerance):
            self._stop_ground()

        if not self.logic.is_shot_detected(ball.position, ball.velocity, ball.speed):
            return

        self.dive_target = self.logic.predict_dive_target(ball.position, ball.velocity)
        self._log_event(
            "dive",
            f"shot at {ball.speed:.1f}m/s -> diving to z={self.dive_target.z:.2f}",
        )
        self._set_state(GoalkeeperState.DIVING)

    def _update_diving(self) -> None:
        """Close on the dive target, then start recovering."""
        cfg = self.config
        if self.dive_target is None:
            self._set_state(GoalkeeperState.POSITIONING)
            return

        if self._steer_toward(self.dive_target, cfg.dive_speed, cfg.dive_arrival_tolerance):
            return

        self._stop_ground()
        self.recovery_timer = cfg.recovery_time
        self._set_state(GoalkeeperState.RECOVERING)

    def _update_recovering(self, dt: float) -> None:
        """Drift back to the goal centre until the recovery timer runs out.

        Parameters
        ----------
        dt : float
            Simulation timestep in seconds.
        """
        cfg = self.config
        self.recovery_timer -= dt

        speed = cfg.positioning_speed * cfg.recovery_speed_factor
        if not self._steer_toward(cfg.goal_center, speed, cfg.position_tolerance):
            self._stop_ground()

        if self.recovery_timer <= 0:
            self.recovery_timer = 0.0
            self.dive_target = None
            self._set_state(GoalkeeperState.POSITIONING)
