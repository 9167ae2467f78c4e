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
"""Pass target scoring and pass power."""
from __future__ import annotations

import math
from typing import Optional, Sequence

from pitchside.engine.config import AGENT_CONFIG, PassingConfig
from pitchside.engine.physics import Vector2D, clamp
from pitchside.engine.snapshot import PassCandidate, ThreatPosition

NO_TARGET = -1


class PassEvaluator:
    """Score teammates by openness and size the pass.

    Openness is the distance from a teammate to the closest opponent, so the
    best receiver is the one the defence is furthest from.

    Parameters
    ----------
    config : PassingConfig | None, optional
        Force limits; defaults to ``AGENT_CONFIG.passing``.
    """

    def __init__(self, config: Optional[PassingConfig] = None) -> None:
        """Store the force configuration.

        Parameters
        ----------
        config : PassingConfig | None
            Force limits; defaults to ``AGENT_CONFIG.passing``.
        """
        self.config = config or AGENT_CONFIG.passing

    def calculate_openness(
        self,
        position: Vector2D,
        opponents: Optional[Sequence[Optional[ThreatPosition]]],
    ) -> float:
        """Return the distance from ``position`` to the nearest opponent.

        Parameters
        ----------
        position : Vector2D
            Ground position being scored.
        opponents : Sequence[ThreatPosition | None] | None
            Opponents to measure against; ``None`` entries are ignored.

        Returns
        -------
        float
            Smallest opponent distance, or ``math.inf`` when unmarked.
        """
        nearest = math.inf
        for threat in opponents or ():
            if threat is None:
                continue
            nearest = min(nearest, position.distance_to(threat.position))
        return nearest

    def find_most_open_teammate(
        self,
        teammates: Optional[Sequence[Optional[PassCandidate]]],
        opponents: Optional[Sequence[Optional[ThreatPosition]]],
    ) -> int:
        """Pick the teammate furthest from any opponent.

        Parameters
        ----------
        teammates : Sequence[PassCandidate | None] | None
            Candidate receivers; ``None`` entries are ignored.
        opponents : Sequence[ThreatPosition | None] | None
            Opponents that could intercept.

        Returns
        -------
        int
            ``index`` of the most open candidate (first seen wins a tie), or
            ``-1`` when there is no candidate.
        """
        best_index = NO_TARGET
        best_openness = -math.inf

        for candidate in teammates or ():
            if candidate is None:
                continue
            openness = self.calculate_openness(candidate.position, opponents)
            if openness > best_openness:
                best_openness = openness
                best_index = candidate.index

        return best_index

    def calculate_pass_force(self, distance: float) -> float:
        """Scale pass power with distance inside the configured bounds.

        Parameters
        ----------
        distance : float
            Ground distance to the receiver.

        Returns
        -------
        float
            ``distance * pass_force_multiplier`` clamped to
            ``[min_pass_force, max_pass_force]``.
        """
        cfg = self.config
        return clamp(distance * cfg.pass_force_multiplier, cfg.min_pass_force, cfg.max_pass_force)
