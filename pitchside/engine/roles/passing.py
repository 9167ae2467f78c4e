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
"""Pass trigger: pick the open teammate and kick the ball to them."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from pitchside.engine.config import AGENT_CONFIG, PassingConfig
from pitchside.engine.evaluators.passing import NO_TARGET, PassEvaluator
from pitchside.engine.physics import Vector3D
from pitchside.engine.snapshot import build_pass_candidates, build_threat_positions

from .base import AgentController

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody
    from pitchside.utils.debug import DecisionDebugger


class PassingSystem(AgentController):
    """Evaluates pass targets and applies the pass impulse to the ball.

    Teammate and opponent collections are indexed by roster slot and may hold
    ``None`` for players that are no longer present.

    Parameters
    ----------
    ball : RigidBody | None
        Ball body; passes are refused without it.
    teammates : Sequence[RigidBody | None] | None, optional
        Possible receivers in roster order.
    opponents : Sequence[RigidBody | None] | None, optional
        Opponents in roster order.
    config : PassingConfig | None, optional
        Force limits; defaults to ``AGENT_CONFIG.passing``.
    agent_id : str, optional
        Label used in debug output.
    debugger : DecisionDebugger | None, optional
        Trace log for passes and refusals.
    evaluator : PassEvaluator | None, optional
        Pass scorer; built from ``config`` when omitted.
    """

    def __init__(
        self,
        ball: Optional["RigidBody"],
        teammates: Optional[Sequence[Optional["RigidBody"]]] = None,
        opponents: Optional[Sequence[Optional["RigidBody"]]] = None,
        config: Optional[PassingConfig] = None,
        *,
        agent_id: str = "passer",
        debugger: Optional["DecisionDebugger"] = None,
        evaluator: Optional[PassEvaluator] = None,
    ) -> None:
        """Attach the ball and the two rosters.

        Parameters
        ----------
        ball : RigidBody | None
            Ball body; passes are refused without it.
        teammates : Sequence[RigidBody | None] | None
            Possible receivers in roster order.
        opponents : Sequence[RigidBody | None] | None
            Opponents in roster order.
        config : PassingConfig | None
            Force limits; defaults to ``AGENT_CONFIG.passing``.
        agent_id : str
            Label used in debug output.
        debugger : DecisionDebugger | None
            Trace log for passes and refusals.
        evaluator : PassEvaluator | None
            Pass scorer; built from ``config`` when omitted.
        """
        super().__init__(agent_id, debugger)
        self.config = config or AGENT_CONFIG.passing
        self.evaluator = evaluator or PassEvaluator(self.config)
        self.ball = ball
        self.teammates: List[Optional["RigidBody"]] = list(teammates or [])
        self.opponents: List[Optional["RigidBody"]] = list(opponents or [])
        self.last_selected_target_index = NO_TARGET

    @property
    def last_selected_target(self) -> Optional["RigidBody"]:
        """Return the body of the last selected receiver.

        Returns
        -------
        RigidBody | None
            Receiver body, or ``None`` when nothing valid is selected.
        """
        index = self.last_selected_target_index
        if 0 <= index < len(self.teammates):
            return self.teammates[index]
        return None

    def update_collections(
        self,
        teammates: Optional[Sequence[Optional["RigidBody"]]],
        opponents: Optional[Sequence[Optional["RigidBody"]]],
    ) -> None:
        """Replace the rosters with this tick's bodies.

        The cached selection is kept; :meth:`execute_pass` re-validates it.

        Parameters
        ----------
        teammates : Sequence[RigidBody | None] | None
            Possible receivers in roster order.
        opponents : Sequence[RigidBody | None] | None
            Opponents in roster order.
        """
        self.teammates = list(teammates or [])
        self.opponents = list(opponents or [])

    def evaluate_pass_target(self) -> int:
        """Select the most open teammate and cache the choice.

        Returns
        -------
        int
            Roster index of the chosen teammate, or ``-1`` with no teammates.
        """
        if not self.teammates:
            self.last_selected_target_index = NO_TARGET
            return NO_TARGET

        self.last_selected_target_index = self.evaluator.find_most_open_teammate(
            build_pass_candidates(self.teammates),
            build_threat_positions(self.opponents),
        )
        return self.last_selected_target_index

    def execute_pass(self) -> bool:
        """Kick the ball toward the cached target along the ground.

        Returns
        -------
        bool
            ``True`` when the impulse was applied.
        """
        index = self.last_selected_target_index
        if index < 0 or self.ball is None:
            self._log_refusal("pass_refused", f"no target or ball (target={index})")
            return False
        if index >= len(self.teammates):
            self._log_refusal("pass_refused", f"stale target index {index} (roster={len(self.teammates)})")
            return False

        target = self.teammates[index]
        if target is None:
            self._log_refusal("pass_refused", f"target {index} missing")
            return False

        offset = target.position.ground() - self.ball.position.ground()
        distance = offset.magnitude()
        if distance < self.config.min_pass_distance:
            self._log_refusal("pass_refused", f"target {index} too close ({distance:.2f}m)")
            return False

        direction = offset.normalize()
        force = self.evaluator.calculate_pass_force(distance)

        self.ball.velocity = Vector3D.zero()
        self.ball.apply_impulse(Vector3D(direction.x, 0.0, direction.z) * force)
        self._log_event("pass", f"to #{index} distance={distance:.2f}m force={force:.2f}")
        return True

    def attempt_pass(self) -> bool:
        """Evaluate a target and pass to it in one step.

        Returns
        -------
        bool
            ``True`` when a pass was played.
        """
        self.evaluate_pass_target()
        return self.execute_pass()
