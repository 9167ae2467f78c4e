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
"""Tests for pass target selection and the pass trigger."""

import math

import pytest

from pitchside.engine.config import PassingConfig
from pitchside.engine.evaluators import NO_TARGET, PassEvaluator
from pitchside.engine.physics import KinematicBody, Vector2D, Vector3D
from pitchside.engine.roles import PassingSystem
from pitchside.engine.snapshot import PassCandidate, ThreatPosition
from pitchside.utils.debug import DecisionDebugger


def body_at(x: float, z: float) -> KinematicBody:
    """Return a resting body on the ground at ``(x, z)``."""
    return KinematicBody(position=Vector3D(x, 0.0, z))


class TestPassEvaluator:
    """Openness scoring and force scaling."""

    def setup_method(self) -> None:
        """Use the default force limits."""
        self.evaluator = PassEvaluator(PassingConfig())

    def test_picks_teammate_furthest_from_opponents(self) -> None:
        """The receiver with the larger gap to the nearest opponent wins."""
        teammates = [PassCandidate(0, Vector2D(5.0, 0.0)), PassCandidate(1, Vector2D(5.0, 5.0))]
        opponents = [ThreatPosition(0, Vector2D(5.0, 2.0))]
        assert self.evaluator.find_most_open_teammate(teammates, opponents) == 1

    def test_tie_goes_to_first_candidate(self) -> None:
        """Equal openness keeps the earlier candidate."""
        teammates = [PassCandidate(0, Vector2D(0.0, 5.0)), PassCandidate(1, Vector2D(0.0, -5.0))]
        opponents = [ThreatPosition(0, Vector2D(0.0, 0.0))]
        assert self.evaluator.find_most_open_teammate(teammates, opponents) == 0

    def test_no_teammates(self) -> None:
        """An empty roster has no target."""
        assert self.evaluator.find_most_open_teammate([], [ThreatPosition(0, Vector2D(0.0, 0.0))]) == NO_TARGET
        assert self.evaluator.find_most_open_teammate(None, None) == -1

    def test_unmarked_teammate_is_infinitely_open(self) -> None:
        """Without opponents openness is infinite and the first candidate wins."""
        assert self.evaluator.calculate_openness(Vector2D(1.0, 1.0), []) == math.inf
        teammates = [PassCandidate(3, Vector2D(1.0, 0.0)), PassCandidate(4, Vector2D(9.0, 0.0))]
        assert self.evaluator.find_most_open_teammate(teammates, None) == 3

    def test_none_entries_are_skipped(self) -> None:
        """Gaps in either roster are ignored."""
        teammates = [None, PassCandidate(1, Vector2D(0.0, 4.0))]
        opponents = [None, ThreatPosition(1, Vector2D(0.0, 0.0))]
        assert self.evaluator.calculate_openness(Vector2D(0.0, 4.0), opponents) == pytest.approx(4.0)
        assert self.evaluator.find_most_open_teammate(teammates, opponents) == 1

    def test_returns_candidate_index_not_position(self) -> None:
        """The chosen value is the candidate's roster index."""
        teammates = [PassCandidate(7, Vector2D(0.0, 1.0)), PassCandidate(2, Vector2D(0.0, 8.0))]
        assert self.evaluator.find_most_open_teammate(teammates, [ThreatPosition(0, Vector2D(0.0, 0.0))]) == 2

    def test_force_is_clamped(self) -> None:
        """Short passes use the minimum, long ones the maximum."""
        assert self.evaluator.calculate_pass_force(1.0) == 4.0
        assert self.evaluator.calculate_pass_force(10.0) == pytest.approx(5.0)
        assert self.evaluator.calculate_pass_force(100.0) == 20.0

    def test_force_never_decreases_with_distance(self) -> None:
        """Longer passes are never weaker."""
        forces = [self.evaluator.calculate_pass_force(d) for d in range(0, 60, 2)]
        assert forces == sorted(forces)
        assert all(4.0 <= force <= 20.0 for force in forces)


class TestPassingSystem:
    """The pass trigger applied to bodies."""

    def test_end_to_end_pass(self) -> None:
        """Select the open teammate and kick the ball at them."""
        ball = body_at(0.0, 0.0)
        system = PassingSystem(ball, [body_at(5.0, 0.0), body_at(5.0, 5.0)], [body_at(5.0, 2.0)])

        assert system.evaluate_pass_target() == 1
        assert system.last_selected_target is system.teammates[1]
        assert system.execute_pass()

        # sqrt(50) * 0.5 is below the minimum force of 4.
        assert ball.velocity.magnitude() == pytest.approx(4.0)
        assert ball.velocity.x == pytest.approx(ball.velocity.z)
        assert ball.velocity.y == 0.0

    def test_pass_replaces_existing_ball_velocity(self) -> None:
        """The kick starts from a still ball."""
        ball = KinematicBody(position=Vector3D.zero(), velocity=Vector3D(0.0, 3.0, -7.0))
        system = PassingSystem(ball, [body_at(20.0, 0.0)])
        assert system.attempt_pass()
        assert ball.velocity == Vector3D(10.0, 0.0, 0.0)

    def test_no_teammates(self) -> None:
        """An empty roster selects nothing and refuses to pass."""
        system = PassingSystem(body_at(0.0, 0.0))
        assert system.evaluate_pass_target() == NO_TARGET
        assert system.last_selected_target is None
        assert not system.execute_pass()

    def test_stale_index_is_refused(self) -> None:
        """A selection that no longer exists in the roster is not used."""
        debugger = DecisionDebugger()
        ball = body_at(0.0, 0.0)
        system = PassingSystem(ball, [body_at(5.0, 0.0), body_at(5.0, 5.0)], [body_at(5.0, 2.0)], debugger=debugger)
        system.evaluate_pass_target()
        system.update_collections([body_at(5.0, 0.0)], [])

        assert system.last_selected_target is None
        assert not system.execute_pass()
        assert ball.velocity == Vector3D.zero()
        assert "stale target index 1" in debugger.get_recent_events()[-1]

    def test_missing_target_is_refused(self) -> None:
        """A departed receiver is not passed to."""
        ball = body_at(0.0, 0.0)
        system = PassingSystem(ball, [None], [])
        assert system.evaluate_pass_target() == 0
        assert not system.execute_pass()
        assert ball.velocity == Vector3D.zero()

    def test_too_close_is_refused(self) -> None:
        """A receiver standing on the ball has no direction to pass in."""
        ball = body_at(3.0, 3.0)
        system = PassingSystem(ball, [body_at(3.0, 3.0)])
        system.evaluate_pass_target()
        assert not system.execute_pass()
        assert ball.velocity == Vector3D.zero()

    def test_no_ball(self) -> None:
        """Passing without a ball is refused."""
        system = PassingSystem(None, [body_at(5.0, 0.0)])
        system.evaluate_pass_target()
        assert not system.execute_pass()

    def test_pass_is_logged(self) -> None:
        """A played pass leaves a decision entry."""
        debugger = DecisionDebugger()
        system = PassingSystem(body_at(0.0, 0.0), [body_at(8.0, 0.0)], agent_id="#6", debugger=debugger)
        system.attempt_pass()
        entry = debugger.get_recent_events()[-1]
        assert "DECISION" in entry
        assert "Agent: #6" in entry
        assert "Event: pass" in entry
