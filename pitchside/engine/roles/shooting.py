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
"""Shot trigger: arm on opportunity, then strike the ball at goal."""
from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable, Optional

from pitchside.engine.config import AGENT_CONFIG, ShootingConfig
from pitchside.engine.evaluators.shooting import ShotEvaluator
from pitchside.engine.physics import Vector2D, Vector3D, ground_distance

from .base import AgentController

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody
    from pitchside.utils.debug import DecisionDebugger

LineOfSight = Callable[[Vector2D, Vector2D], bool]


class ShootingSystem(AgentController):
    """Detects shooting chances and applies the shot impulse.

    A shot must be armed by :meth:`evaluate_shot_opportunity` and is disarmed
    once executed, so the same chance cannot be taken twice.

    Parameters
    ----------
    shooter : RigidBody
        Body of the player who would shoot.
    ball : RigidBody | None
        Ball body; nothing is armed without it.
    goal_position : Vector2D
        Centre of the target goal; ``x`` is the goal line.
    goal_half_width : float
        Half the width of the goal mouth.
    config : ShootingConfig | None, optional
        Range, force and aim tuning; defaults to ``AGENT_CONFIG.shooting``.
    line_of_sight : Callable[[Vector2D, Vector2D], bool] | None, optional
        Occlusion query from ball to goal supplied by the host engine.
    agent_id : str, optional
        Label used in debug output.
    debugger : DecisionDebugger | None, optional
        Trace log for shots and refusals.
    evaluator : ShotEvaluator | None, optional
        Shot evaluator; built from ``config`` and ``rng`` when omitted.
    rng : random.Random | None, optional
        Aim generator handed to a newly built evaluator.
    """

    def __init__(
        self,
        shooter: "RigidBody",
        ball: Optional["RigidBody"],
        goal_position: Vector2D,
        goal_half_width: float,
        config: Optional[ShootingConfig] = None,
        *,
        line_of_sight: Optional[LineOfSight] = None,
        agent_id: str = "shooter",
        debugger: Optional["DecisionDebugger"] = None,
        evaluator: Optional[ShotEvaluator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Attach shooter, ball and target goal.

        Parameters
        ----------
        shooter : RigidBody
            Body of the player who would shoot.
        ball : RigidBody | None
            Ball body; nothing is armed without it.
        goal_position : Vector2D
            Centre of the target goal; ``x`` is the goal line.
        goal_half_width : float
            Half the width of the goal mouth.
        config : ShootingConfig | None
            Range, force and aim tuning; defaults to ``AGENT_CONFIG.shooting``.
        line_of_sight : Callable[[Vector2D, Vector2D], bool] | None
            Occlusion query from ball to goal supplied by the host engine.
        agent_id : str
            Label used in debug output.
        debugger : DecisionDebugger | None
            Trace log for shots and refusals.
        evaluator : ShotEvaluator | None
            Shot evaluator; built from ``config`` and ``rng`` when omitted.
        rng : random.Random | None
            Aim generator handed to a newly built evaluator.
        """
        super().__init__(agent_id, debugger)
        self.config = config or AGENT_CONFIG.shooting
        self.evaluator = evaluator or ShotEvaluator(self.config, rng)
        self.shooter = shooter
        self.ball = ball
        self.goal_position = goal_position
        self.goal_half_width = goal_half_width
        self.line_of_sight = line_of_sight
        self.has_shot_opportunity = False
        self.distance_to_goal = 0.0
        self.last_target_z: Optional[float] = None

    def evaluate_shot_opportunity(self, has_possession: bool, has_clear_line: Optional[bool] = None) -> bool:
        """Arm or disarm the shot for this tick.

        Parameters
        ----------
        has_possession : bool
            Whether the shooter controls the ball.
        has_clear_line : bool | None, optional
            Precomputed line-of-sight result; when ``None`` the injected
            ``line_of_sight`` query is asked, and without one the line is
            treated as blocked.

        Returns
        -------
        bool
            ``True`` when a shot is now armed.
        """
        if self.ball is None:
            self.has_shot_opportunity = False
            return False

        self.distance_to_goal = ground_distance(self.shooter.position.ground(), self.goal_position)

        clear = has_clear_line
        if clear is None:
            clear = self.line_of_sight(self.ball.position.ground(), self.goal_position) if self.line_of_sight else False

        self.has_shot_opportunity = self.evaluator.should_shoot(self.distance_to_goal, clear, has_possession)
        return self.has_shot_opportunity

    def execute_shot(self) -> bool:
        """Strike the armed shot toward a point inside the goal mouth.

        Returns
        -------
        bool
            ``True`` when the impulse was applied.
        """
        if not self.has_shot_opportunity or self.ball is None:
            self._log_refusal("shot_refused", "no armed opportunity or ball")
            return False

        cfg = self.config
        target_z = self.evaluator.calculate_shot_target_z(self.goal_position.z, self.goal_half_width)
        aim_point = Vector3D(self.goal_position.x, cfg.aim_height, target_z)

        offset = aim_point - self.ball.position
        if offset.ground().magnitude() < 1e-6:
            self._log_refusal("shot_refused", "ball already on the aim point")
            return False

        # Lift is imposed on the direction, not derived from the aim height.
        direction = Vector3D(offset.x, cfg.shot_lift, offset.z).normalize()
        force = self.evaluator.calculate_shot_force(self.distance_to_goal)

        self.ball.velocity = Vector3D.zero()
        self.ball.apply_impulse(direction * force)
        self.has_shot_opportunity = False
        self.last_target_z = target_z
        self._log_event("shot", f"aim z={target_z:.2f} distance={self.distance_to_goal:.2f}m force={force:.2f}")
        return True

    def attempt_shot(self, has_possession: bool, has_clear_line: Optional[bool] = None) -> bool:
        """Evaluate the chance and shoot if it is armed.

        Parameters
        ----------
        has_possession : bool
            Whether the shooter controls the ball.
        has_clear_line : bool | None, optional
            Precomputed line-of-sight result.

        Returns
        -------
        bool
            ``True`` when a shot was struck.
        """
        if not self.evaluate_shot_opportunity(has_possession, has_clear_line):
            return False
        return self.execute_shot()
