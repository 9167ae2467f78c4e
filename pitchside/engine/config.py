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
"""Central configuration for agent decision tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field

from .physics import Vector2D


@dataclass(frozen=True, slots=True)
class AIConfig:
    """Thresholds and speeds driving the field-player state machine.

    Parameters
    ----------
    chase_range : float, default=10.0
        Maximum ground distance to the ball at which the nearest player chases.
    move_speed : float, default=6.0
        Speed used when jogging back to the formation slot.
    sprint_speed : float, default=9.0
        Speed used when chasing the ball.
    position_threshold : float, default=1.0
        Distance from the formation slot regarded as "in position".
    """

    chase_range: float = 10.0
    move_speed: float = 6.0
    sprint_speed: float = 9.0
    position_threshold: float = 1.0


@dataclass(frozen=True, slots=True)
class GoalkeeperConfig:
    """Goal geometry, shot detection and movement settings for goalkeepers.

    Parameters
    ----------
    goal_area_width : float, default=5.0
        Lateral width the keeper may cover, centred on ``goal_center.z``.
    goal_center : Vector2D, default=Vector2D(0.0, 0.0)
        Centre of the goal mouth; its ``x`` is the goal line.
    dive_speed : float, default=15.0
        Ground speed while diving toward the predicted arrival point.
    positioning_speed : float, default=5.0
        Ground speed while tracking the ball laterally.
    recovery_time : float, default=2.0
        Seconds spent recovering after a dive.
    shot_speed_threshold : float, default=5.0
        Ball speed that must be exceeded before a shot is recognised.
    lateral_tracking_ratio : float, default=1.0
        Fraction of the ball's lateral offset the keeper follows.
    velocity_epsilon : float, default=0.01
        Smallest goal-ward ball velocity trusted for arrival prediction.
    dive_arrival_tolerance : float, default=0.3
        Distance from the dive target treated as arrival.
    recovery_speed_factor : float, default=0.5
        Multiplier on ``positioning_speed`` while recovering.
    position_tolerance : float, default=0.1
        Distance from a positioning target at which the keeper stops.
    """

    goal_area_width: float = 5.0
    goal_center: Vector2D = field(default_factory=lambda: Vector2D(0.0, 0.0))
    dive_speed: float = 15.0
    positioning_speed: float = 5.0
    recovery_time: float = 2.0
    shot_speed_threshold: float = 5.0
    lateral_tracking_ratio: float = 1.0
    velocity_epsilon: float = 0.01
    dive_arrival_tolerance: float = 0.3
    recovery_speed_factor: float = 0.5
    position_tolerance: float = 0.1


@dataclass(frozen=True, slots=True)
class PassingConfig:
    """Force scaling used when playing a pass.

    Parameters
    ----------
    min_pass_force : float, default=4.0
        Lower bound on pass impulse magnitude.
    max_pass_force : float, default=20.0
        Upper bound on pass impulse magnitude.
    pass_force_multiplier : float, default=0.5
        Impulse added per metre of pass distance.
    min_pass_distance : float, default=0.1
        Passes shorter than this are refused.
    """

    min_pass_force: float = 4.0
    max_pass_force: float = 20.0
    pass_force_multiplier: float = 0.5
    min_pass_distance: float = 0.1


@dataclass(frozen=True, slots=True)
class ShootingConfig:
    """Range, power and aiming parameters for shots on goal.

    Parameters
    ----------
    shoot_range : float, default=15.0
        Maximum ground distance from goal at which a shot is considered.
    base_shot_force : float, default=12.0
        Impulse applied to a shot from zero distance.
    shot_force_multiplier : float, default=0.5
        Impulse added per metre of distance to goal.
    aim_spread : float, default=0.8
        Largest aim offset as a fraction of the goal half width.
    aim_min_offset : float, default=0.25
        Smallest aim offset as a fraction of the goal half width.
    aim_height : float, default=0.5
        Height of the aim point above the ground.
    shot_lift : float, default=0.2
        Vertical component forced onto the shot direction before normalising.
    """

    shoot_range: float = 15.0
    base_shot_force: float = 12.0
    shot_force_multiplier: float = 0.5
    aim_spread: float = 0.8
    aim_min_offset: float = 0.25
    aim_height: float = 0.5
    shot_lift: float = 0.2


@dataclass(frozen=True, slots=True)
class MovementConfig:
    """Steering constants shared by the agent drivers.

    Parameters
    ----------
    idle_damping : float, default=0.9
        Fraction of ground velocity kept per tick while idle.
    stop_speed : float, default=0.1
        Ground speed at or below which an idle player is brought to rest.
    steer_epsilon : float, default=0.1
        Ground offset below which no steering velocity is written.
    """

    idle_damping: float = 0.9
    stop_speed: float = 0.1
    steer_epsilon: float = 0.1


@dataclass(frozen=True, slots=True)
class AgentTuning:
    """Top-level container for all agent tuning structures.

    Parameters
    ----------
    field_player : AIConfig, default=AIConfig()
        Field-player state machine configuration.
    goalkeeper : GoalkeeperConfig, default=GoalkeeperConfig()
        Goalkeeper geometry and movement configuration.
    passing : PassingConfig, default=PassingConfig()
        Pass force configuration.
    shooting : ShootingConfig, default=ShootingConfig()
        Shot range, force and aim configuration.
    movement : MovementConfig, default=MovementConfig()
        Steering constants shared by the drivers.
    """

    field_player: AIConfig = field(default_factory=AIConfig)
    goalkeeper: GoalkeeperConfig = field(default_factory=GoalkeeperConfig)
    passing: PassingConfig = field(default_factory=PassingConfig)
    shooting: ShootingConfig = field(default_factory=ShootingConfig)
    movement: MovementConfig = field(default_factory=MovementConfig)


AGENT_CONFIG = AgentTuning()
"""Shared default tuning used when a component is built without its own config."""
