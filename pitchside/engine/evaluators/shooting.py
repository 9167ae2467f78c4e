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
"""Shot selection, aim and power."""
from __future__ import annotations

import random
from typing import Optional

from pitchside.engine.config import AGENT_CONFIG, ShootingConfig
from pitchside.engine.physics import Vector2D, ground_distance


class ShotEvaluator:
    """Decide whether to shoot and how.

    The only non-deterministic output is the aim offset. Pass a seeded
    ``random.Random`` to make it reproducible.

    Parameters
    ----------
    config : ShootingConfig | None, optional
        Range, force and aim tuning; defaults to ``AGENT_CONFIG.shooting``.
    rng : random.Random | None, optional
        Source for the aim offset; a fresh unseeded generator when omitted.
    """

    def __init__(self, config: Optional[ShootingConfig] = None, rng: Optional[random.Random] = None) -> None:
        """Store the tuning and the aim generator.

        Parameters
        ----------
        config : ShootingConfig | None
            Range, force and aim tuning; defaults to ``AGENT_CONFIG.shooting``.
        rng : random.Random | None
            Source for the aim offset.
        """
        self.config = config or AGENT_CONFIG.shooting
        self.rng = rng or random.Random()

    def is_in_shooting_range(self, shooter_pos: Vector2D, goal_pos: Vector2D) -> bool:
        """Check the ground distance from shooter to goal against the range.

        Parameters
        ----------
        shooter_pos : Vector2D
            Shooter position on the ground plane.
        goal_pos : Vector2D
            Centre of the target goal.

        Returns
        -------
        bool
            ``True`` when the goal is within ``shoot_range``.
        """
        return ground_distance(shooter_pos, goal_pos) <= self.config.shoot_range

    def should_shoot(self, distance_to_goal: float, has_clear_line: bool, has_possession: bool) -> bool:
        """Return whether a shot should be taken.

        Parameters
        ----------
        distance_to_goal : float
            Ground distance from the shooter to the goal centre.
        has_clear_line : bool
            Result of the line-of-sight check toward goal.
        has_possession : bool
            Whether the shooter controls the ball.

        Returns
        -------
        bool
            ``True`` with possession, a clear line and the goal within range.
        """
        return has_possession and has_clear_line and distance_to_goal <= self.config.shoot_range

    def calculate_shot_target_z(self, goal_z: float, goal_half_width: float) -> float:
        """Pick a lateral aim point inside the goal mouth.

        The offset from centre is drawn between ``aim_min_offset`` and
        ``aim_spread`` of the half width, on a random side.

        Parameters
        ----------
        goal_z : float
            Lateral coordinate of the goal centre.
        goal_half_width : float
            Half the width of the goal mouth.

        Returns
        -------
        float
            Aim coordinate strictly inside ``goal_z ± goal_half_width``.
        """
        cfg = self.config
        low = min(cfg.aim_min_offset, cfg.aim_spread)
        fraction = self.rng.uniform(low, cfg.aim_spread)
        side = 1.0 if self.rng.random() < 0.5 else -1.0
        return goal_z + side * fraction * goal_half_width

    def calculate_shot_force(self, distance: float) -> float:
        """Return shot power, harder from further out.

        Parameters
        ----------
        distance : float
            Ground distance to the goal.

        Returns
        -------
        float
            ``base_shot_force + distance * shot_force_multiplier``.
        """
        return self.config.base_shot_force + distance * self.config.shot_force_multiplier
