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
"""Tests for goalkeeper geometry and the dive/recover cycle."""

from dataclasses import replace

import pytest

from pitchside.engine.config import GoalkeeperConfig
from pitchside.engine.evaluators.goalkeeper import GoalkeeperLogic
from pitchside.engine.physics import KinematicBody, Vector2D, Vector3D
from pitchside.engine.roles.goalkeeper import GoalkeeperController
from pitchside.engine.states import GoalkeeperState
from pitchside.utils.debug import DecisionDebugger

GOAL_CONFIG = GoalkeeperConfig(goal_area_width=5.0, goal_center=Vector2D(25.0, 0.0))


class TestGoalkeeperLogic:
    """Pure positioning and prediction helpers."""

    def setup_method(self) -> None:
        """Guard a goal on the line x=25."""
        self.logic = GoalkeeperLogic(GOAL_CONFIG)

    def test_lateral_position_is_clamped(self) -> None:
        """A wide ball pins the keeper to the edge of the area."""
        logic = GoalkeeperLogic(GoalkeeperConfig(goal_area_width=5.0, goal_center=Vector2D(0.0, 0.0)))
        assert logic.calculate_lateral_position(10.0) == 2.5
        assert logic.calculate_lateral_position(-10.0) == -2.5

    def test_lateral_position_follows_ball_inside_area(self) -> None:
        """Inside the area the keeper mirrors the ball."""
        assert self.logic.calculate_lateral_position(1.0) == pytest.approx(1.0)

    def test_lateral_clamp_is_relative_to_goal_centre(self) -> None:
        """An off-centre goal clamps around its own centre."""
        logic = GoalkeeperLogic(GoalkeeperConfig(goal_area_width=4.0, goal_center=Vector2D(0.0, 10.0)))
        assert logic.calculate_lateral_position(0.0) == 8.0

    def test_lateral_tracking_ratio(self) -> None:
        """A partial tracking ratio shades toward the ball."""
        logic = GoalkeeperLogic(replace(GOAL_CONFIG, lateral_tracking_ratio=0.6))
        assert logic.calculate_lateral_position(2.0) == pytest.approx(1.2)

    def test_detects_shot_toward_goal(self) -> None:
        """A fast ball heading for the line is a shot."""
        assert self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(10.0, 0.0), 10.0, 5.0)

    def test_ignores_ball_moving_away(self) -> None:
        """A fast ball travelling away is not a shot."""
        assert not self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(-10.0, 0.0), 10.0, 5.0)

    def test_ignores_slow_ball(self) -> None:
        """Speed at or below the threshold is never a shot."""
        assert not self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(2.0, 0.0), 2.0, 5.0)
        assert not self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(5.0, 0.0), 5.0, 5.0)

    def test_stationary_ball_is_not_a_shot(self) -> None:
        """No goal-ward velocity means no shot, whatever the threshold."""
        assert not self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(0.0, 0.0), 0.0, -1.0)

    def test_threshold_defaults_to_config(self) -> None:
        """Omitting the threshold uses ``shot_speed_threshold``."""
        assert self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(6.0, 0.0), 6.0)
        assert not self.logic.is_shot_detected(Vector2D(15.0, 0.0), Vector2D(4.0, 0.0), 4.0)

    def test_goal_on_negative_side(self) -> None:
        """Direction is judged against whichever side the goal is on."""
        logic = GoalkeeperLogic(replace(GOAL_CONFIG, goal_center=Vector2D(-25.0, 0.0)))
        assert logic.is_shot_detected(Vector2D(-10.0, 0.0), Vector2D(-10.0, 0.0), 10.0)
        assert not logic.is_shot_detected(Vector2D(-10.0, 0.0), Vector2D(10.0, 0.0), 10.0)

    def test_predict_arrival_is_linear(self) -> None:
        """Extrapolate along the velocity to the goal line."""
        assert self.logic.predict_ball_arrival_z(Vector2D(15.0, 0.0), Vector2D(10.0, 5.0)) == pytest.approx(5.0)

    def test_predict_arrival_is_not_clamped(self) -> None:
        """Arrival outside the posts is reported as is."""
        z = self.logic.predict_ball_arrival_z(Vector2D(15.0, 0.0), Vector2D(10.0, 20.0))
        assert z == pytest.approx(20.0)

    def test_predict_arrival_without_goalward_speed(self) -> None:
        """Near-zero x velocity falls back to the current z."""
        assert self.logic.predict_ball_arrival_z(Vector2D(15.0, 1.5), Vector2D(0.001, 10.0)) == 1.5

    def test_predict_arrival_for_receding_ball(self) -> None:
        """A ball moving away has no arrival; keep the current z."""
        assert self.logic.predict_ball_arrival_z(Vector2D(15.0, 1.5), Vector2D(-10.0, 10.0)) == 1.5

    def test_dive_target_is_clamped(self) -> None:
        """The dive target sits on the goal line inside the area."""
        target = self.logic.predict_dive_target(Vector2D(15.0, 0.0), Vector2D(10.0, 20.0))
        assert target == Vector2D(25.0, 2.5)


class TestGoalkeeperController:
    """Positioning, diving and timed recovery."""

    def make_keeper(self, ball: KinematicBody, config: GoalkeeperConfig = GOAL_CONFIG) -> GoalkeeperController:
        """Place a keeper on the centre of the goal line."""
        body = KinematicBody(position=Vector3D(25.0, 0.0, 0.0))
        return GoalkeeperController(body, ball, config)

    def run_until(self, keeper: GoalkeeperController, state: GoalkeeperState, max_ticks: int = 500) -> int:
        """Tick and integrate until ``state`` is reached; return ticks used."""
        for tick in range(1, max_ticks + 1):
            keeper.update(0.02)
            keeper.body.integrate(0.02)
            if keeper.state is state:
                return tick
        raise AssertionError(f"keeper never reached {state}")

    def test_initial_state_is_positioning(self) -> None:
        """Keepers start in positioning."""
        keeper = self.make_keeper(KinematicBody(position=Vector3D(0.0, 0.0, 0.0)))
        assert keeper.state is GoalkeeperState.POSITIONING

    def test_positioning_tracks_ball_laterally(self) -> None:
        """The keeper shuffles across at positioning speed."""
        keeper = self.make_keeper(KinematicBody(position=Vector3D(10.0, 0.0, 10.0)))
        keeper.update(0.02)
        assert keeper.body.velocity.z == pytest.approx(5.0)
        assert keeper.body.velocity.x == pytest.approx(0.0)

    def test_full_save_cycle(self) -> None:
        """Positioning -> Diving -> Recovering -> Positioning, announced once each."""
        ball = KinematicBody(position=Vector3D(15.0, 0.0, 0.0), velocity=Vector3D(10.0, 0.0, 3.0))
        keeper = self.make_keeper(ball)
        seen = []
        keeper.subscribe(lambda prev, new: seen.append((prev, new)))

        assert keeper.update(0.02) is GoalkeeperState.DIVING
        assert keeper.dive_target == Vector2D(25.0, 2.5)
        ball.velocity = Vector3D.zero()

        self.run_until(keeper, GoalkeeperState.RECOVERING)
        assert keeper.body.position.z == pytest.approx(2.5, abs=0.3)
        assert keeper.recovery_timer == pytest.approx(2.0)

        self.run_until(keeper, GoalkeeperState.POSITIONING)
        assert keeper.dive_target is None
        assert seen == [
            (GoalkeeperState.POSITIONING, GoalkeeperState.DIVING),
            (GoalkeeperState.DIVING, GoalkeeperState.RECOVERING),
            (GoalkeeperState.RECOVERING, GoalkeeperState.POSITIONING),
        ]

    def test_recovery_ends_on_timer_not_arrival(self) -> None:
        """A short recovery ends while the keeper is still off centre."""
        ball = KinematicBody(position=Vector3D(15.0, 0.0, 0.0), velocity=Vector3D(10.0, 0.0, 3.0))
        keeper = self.make_keeper(ball, replace(GOAL_CONFIG, recovery_time=0.1))
        keeper.update(0.02)
        ball.velocity = Vector3D.zero()
        self.run_until(keeper, GoalkeeperState.RECOVERING)

        ticks = self.run_until(keeper, GoalkeeperState.POSITIONING)
        assert ticks <= 6
        assert keeper.body.position.z > 1.5

    def test_recovery_moves_at_half_speed(self) -> None:
        """Recovering drifts back at half positioning speed."""
        ball = KinematicBody(position=Vector3D(15.0, 0.0, 0.0), velocity=Vector3D(10.0, 0.0, 3.0))
        keeper = self.make_keeper(ball)
        keeper.update(0.02)
        ball.velocity = Vector3D.zero()
        self.run_until(keeper, GoalkeeperState.RECOVERING)
        keeper.update(0.02)
        assert keeper.body.velocity.ground().magnitude() == pytest.approx(2.5)

    def test_missing_ball_is_a_no_op(self) -> None:
        """Without a ball the tick does nothing."""
        keeper = self.make_keeper(None)  # type: ignore[arg-type]
        keeper.body.velocity = Vector3D(1.0, 0.0, 1.0)
        assert keeper.update(0.02) is GoalkeeperState.POSITIONING
        assert keeper.body.velocity == Vector3D(1.0, 0.0, 1.0)

    def test_dive_is_logged(self) -> None:
        """The debugger records the dive decision and the transition."""
        debugger = DecisionDebugger()
        ball = KinematicBody(position=Vector3D(15.0, 0.0, 0.0), velocity=Vector3D(10.0, 0.0, 0.0))
        keeper = GoalkeeperController(
            KinematicBody(position=Vector3D(25.0, 0.0, 0.0)),
            ball,
            GOAL_CONFIG,
            agent_id="GK1",
            debugger=debugger,
        )
        keeper.update(0.02)
        events = debugger.get_recent_events()
        assert any("Event: dive" in line for line in events)
        assert any("POSITIONING -> DIVING" in line for line in events)
