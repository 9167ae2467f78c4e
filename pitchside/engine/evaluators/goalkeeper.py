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
"""Goalkeeper positioning, shot recognition and arrival prediction.

All functions here are pure. The dive/recover timing that strings them
together lives in :mod:`pitchside.engine.roles.goalkeeper`.
"""
from __future__ import annotations

from typing import Optional

from pitchside.engine.config import AGENT_CONFIG, GoalkeeperConfig
from pitchside.engine.physics import Vector2D, clamp


class GoalkeeperLogic:
    """Geometry helpers for a keeper guarding a goal line at ``goal_center.x``.

    Parameters
    ----------
    config : GoalkeeperConfig | None, optional
        Goal geometry and thresholds; defaults to ``AGENT_CONFIG.goalkeeper``.
    """

    def __init__(self, config: Optional[GoalkeeperConfig] = None) -> None:
        """Cache the goal geometry.

        Parameters
        ----------
        config : GoalkeeperConfig | None
            Goal geometry and thresholds; defaults to ``AGENT_CONFIG.goalkeeper``.
        """
        self.config = config or AGENT_CONFIG.goalkeeper
        self.goal_center = self.config.goal_center
        self.half_width = self.config.goal_area_width / 2

    @property
    def goal_line_x(self) -> float:
        """Return the ``x`` coordinate of the defended goal line.

        Returns
        -------
        float
            Goal line position along the pitch.
        """
        return self.goal_center.x

    def clamp_to_goal_area(self, z: float) -> float:
        """Keep a lateral coordinate between the edges of the goal area.

        Parameters
        ----------
        z : float
            Lateral coordinate to constrain.

        Returns
        -------
        float
            ``z`` limited to ``goal_center.z ± goal_area_width / 2``.
        """
        return clamp(z, self.goal_center.z - self.half_width, self.goal_center.z + self.half_width)

    def calculate_lateral_position(self, ball_z: float) -> float:
        """Return where the keeper should stand across the goal.

        Parameters
        ----------
        ball_z : float
            Lateral coordinate of the ball.

        Returns
        -------
        float
            Target lateral coordinate, never outside the goal area.
        """
        target_z = self.goal_center.z + (ball_z - self.goal_center.z) * self.config.lateral_tracking_ratio
        return self.clamp_to_goal_area(target_z)

    def is_shot_detected(
        self,
        ball_pos: Vector2D,
        ball_vel: Vector2D,
        speed: float,
        threshold: Optional[float] = None,
    ) -> bool:
        """Decide whether the ball is a shot heading for this goal.

        Parameters
        ----------
        ball_pos : Vector2D
            Ball position on the ground plane.
        ball_vel : Vector2D
            Ground components of the ball velocity.
        speed : float
            Ball speed magnitude.
        threshold : float | None, optional
            Speed that must be exceeded; defaults to ``shot_speed_threshold``.

        Returns
        -------
        bool
            ``True`` only for a ball faster than ``threshold`` whose velocity
            points toward the goal line.
        """
        limit = self.config.shot_speed_threshold if threshold is None else threshold
        if speed <= limit:
            return False
        return (self.goal_line_x - ball_pos.x) * ball_vel.x > 0

    def predict_ball_arrival_z(self, ball_pos: Vector2D, ball_vel: Vector2D) -> float:
        """Extrapolate where the ball crosses the goal line.

        Parameters
        ----------
        ball_pos : Vector2D
            Ball position on the ground plane.
        ball_vel : Vector2D
            Ground components of the ball velocity.

        Returns
        -------
        float
            Predicted lateral coordinate at the goal line, unclamped. Falls
            back to ``ball_pos.z`` when the ball barely moves along ``x`` or
            is travelling away from the line.
        """
        if abs(ball_vel.x) < self.config.velocity_epsilon:
            return ball_pos.z

        time_to_line = (self.goal_line_x - ball_pos.x) / ball_vel.x
        if time_to_line < 0:
            return ball_pos.z

        return ball_pos.z + ball_vel.z * time_to_line

    def predict_dive_target(self, ball_pos: Vector2D, ball_vel: Vector2D) -> Vector2D:
        """Return the point on the goal line the keeper should dive to.

        Parameters
        ----------
        ball_pos : Vector2D
            Ball position on the ground plane.
        ball_vel : Vector2D
            Ground components of the ball velocity.

        Returns
        -------
        Vector2D
            Goal-line point with the predicted arrival clamped to the goal area.
        """
        predicted_z = self.predict_ball_arrival_z(ball_pos, ball_vel)
        return Vector2D(self.goal_line_x, self.clamp_to_goal_area(predicted_z))
