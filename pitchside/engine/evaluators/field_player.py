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
"""State selection for outfield players."""
from __future__ import annotations

from typing import Optional

from pitchside.engine.config import AIConfig
from pitchside.engine.physics import Vector2D, ground_distance
from pitchside.engine.snapshot import AgentSnapshot
from pitchside.engine.states import AIState


class FieldPlayerDecisionEngine:
    """Pick the next :class:`AIState` for a field player.

    The rule set has no memory and no hysteresis: a player straddling a
    threshold may flip state every tick, and it is up to the driver to only
    announce real changes.

    Parameters
    ----------
    config : AIConfig | None, optional
        Tuning used when :meth:`evaluate` is called without one.
    """

    def __init__(self, config: Optional[AIConfig] = None) -> None:
        """Bind the default tuning.

        Parameters
        ----------
        config : AIConfig | None
            Tuning used when :meth:`evaluate` is called without one.
        """
        self.config = config

    def evaluate(
        self,
        agent_pos: Vector2D,
        ball_pos: Vector2D,
        formation_pos: Vector2D,
        is_nearest_to_ball: bool,
        config: Optional[AIConfig] = None,
    ) -> AIState:
        """Return the state the player should be in this tick.

        Parameters
        ----------
        agent_pos : Vector2D
            Player position on the ground plane.
        ball_pos : Vector2D
            Ball position on the ground plane.
        formation_pos : Vector2D
            The player's formation slot.
        is_nearest_to_ball : bool
            Whether the team coordinator picked this player as nearest.
        config : AIConfig | None, optional
            Tuning overriding the one bound at construction.

        Returns
        -------
        AIState
            ``CHASE_BALL`` when nearest and within chase range,
            ``RETURN_TO_POSITION`` when out of position, otherwise ``IDLE``.
        """
        cfg = config or self.config
        if cfg is None:
            return AIState.IDLE

        if is_nearest_to_ball and ground_distance(agent_pos, ball_pos) <= cfg.chase_range:
            return AIState.CHASE_BALL

        if ground_distance(agent_pos, formation_pos) > cfg.position_threshold:
            return AIState.RETURN_TO_POSITION

        return AIState.IDLE

    def evaluate_snapshot(self, snapshot: AgentSnapshot) -> AIState:
        """Evaluate a prepared :class:`AgentSnapshot`.

        Parameters
        ----------
        snapshot : AgentSnapshot
            Tick snapshot assembled by the driver.

        Returns
        -------
        AIState
            Same decision as :meth:`evaluate` for the snapshot's fields.
        """
        return self.evaluate(
            snapshot.position,
            snapshot.ball_position,
            snapshot.formation_position,
            snapshot.is_nearest_to_ball,
            snapshot.config,
        )
