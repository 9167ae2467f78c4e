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
"""Vector maths and the body boundary shared by evaluators and drivers.

Decision logic works exclusively on the ground plane, so the workhorse here is
:class:`Vector2D` holding ``x`` (along the pitch) and ``z`` (across it). The
vertical axis only appears at the boundary with the physics collaborator, where
bodies expose three-dimensional :class:`Vector3D` positions and velocities.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class Vector2D:
    """Immutable ground-plane vector with convenience operations.

    Parameters
    ----------
    x : float
        Component along the length of the pitch in metres.
    z : float
        Component across the width of the pitch in metres.
    """

    x: float
    z: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector sum of ``self`` and ``other``."""
        return Vector2D(self.x + other.x, self.z + other.z)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector difference ``self - other``."""
        return Vector2D(self.x - other.x, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector2D":
        """Scale the vector by ``scalar`` while preserving direction."""
        return Vector2D(self.x * scalar, self.z * scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude measured in metres.
        """
        return math.sqrt(self.x * self.x + self.z * self.z)

    def sqr_magnitude(self) -> float:
        """Return the squared length, avoiding the square root.

        Returns
        -------
        float
            Squared magnitude of the vector.
        """
        return self.x * self.x + self.z * self.z

    def normalize(self) -> "Vector2D":
        """Return a unit vector pointing in the same direction as ``self``.

        Returns
        -------
        Vector2D
            Normalised vector; zero vector when ``self`` has no magnitude.
        """
        mag = self.magnitude()
        if mag == 0:
            return Vector2D(0.0, 0.0)
        return Vector2D(self.x / mag, self.z / mag)

    def dot(self, other: "Vector2D") -> float:
        """Return the dot product of ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Second operand.

        Returns
        -------
        float
            Sum of the component-wise products.
        """
        return self.x * other.x + self.z * other.z

    def distance_to(self, other: "Vector2D") -> float:
        """Return the ground-plane distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Point whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance in metres between the two points.
        """
        return (other - self).magnitude()


@dataclass(frozen=True)
class Vector3D:
    """Immutable world-space vector used at the physics boundary.

    Parameters
    ----------
    x : float
        Component along the length of the pitch.
    y : float
        Vertical component (height).
    z : float
        Component across the width of the pitch.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3D") -> "Vector3D":
        """Return the vector sum of ``self`` and ``other``."""
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3D") -> "Vector3D":
        """Return the vector difference ``self - other``."""
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3D":
        """Scale the vector by ``scalar``."""
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Length including the vertical component.
        """
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector3D":
        """Return a unit vector in the same direction.

        Returns
        -------
        Vector3D
            Normalised vector; zero vector when ``self`` has no magnitude.
        """
        mag = self.magnitude()
        if mag == 0:
            return Vector3D(0.0, 0.0, 0.0)
        return Vector3D(self.x / mag, self.y / mag, self.z / mag)

    def ground(self) -> Vector2D:
        """Project onto the ground plane by dropping the height.

        Returns
        -------
        Vector2D
            ``(x, z)`` components of the vector.
        """
        return Vector2D(self.x, self.z)

    def with_ground(self, ground: Vector2D) -> "Vector3D":
        """Return a copy whose ground components are replaced by ``ground``.

        Parameters
        ----------
        ground : Vector2D
            New ``x``/``z`` components.

        Returns
        -------
        Vector3D
            Vector with the original height and the new ground components.
        """
        return Vector3D(ground.x, self.y, ground.z)

    @classmethod
    def zero(cls) -> "Vector3D":
        """Return the zero vector.

        Returns
        -------
        Vector3D
            Vector with all components set to ``0.0``.
        """
        return cls(0.0, 0.0, 0.0)


def ground_distance(a: Vector2D, b: Vector2D) -> float:
    """Return the ground-plane distance between two points.

    Parameters
    ----------
    a : Vector2D
        First point.
    b : Vector2D
        Second point.

    Returns
    -------
    float
        Distance in metres, height excluded by construction.
    """
    return a.distance_to(b)


def clamp(value: float, lower: float, upper: float) -> float:
    """Constrain ``value`` to the closed range ``[lower, upper]``.

    Parameters
    ----------
    value : float
        Number to constrain.
    lower : float
        Smallest permitted result.
    upper : float
        Largest permitted result.

    Returns
    -------
    float
        ``value`` limited to the range.
    """
    return max(lower, min(upper, value))


class RigidBody(Protocol):
    """Shape of a physics body the drivers steer or kick.

    The physics collaborator owns integration, gravity and collisions; the
    decision drivers only write ``velocity`` and call :meth:`apply_impulse`.
    """

    position: Vector3D
    velocity: Vector3D

    def apply_impulse(self, impulse: Vector3D) -> None:
        """Apply an instantaneous impulse to the body.

        Parameters
        ----------
        impulse : Vector3D
            Impulse vector (direction scaled by magnitude).
        """


@dataclass
class KinematicBody:
    """Minimal body that integrates its own velocity.

    Stands in for an engine rigid body in tools and tests. Impulses change
    velocity by ``impulse / mass`` and :meth:`integrate` advances the position.

    Parameters
    ----------
    position : Vector3D
        Current world position.
    velocity : Vector3D
        Current linear velocity in metres per second.
    mass : float, optional
        Body mass used to convert impulses into velocity changes.
    """

    position: Vector3D
    velocity: Vector3D = field(default_factory=Vector3D.zero)
    mass: float = 1.0

    def apply_impulse(self, impulse: Vector3D) -> None:
        """Add ``impulse / mass`` to the current velocity.

        Parameters
        ----------
        impulse : Vector3D
            Impulse vector to apply.
        """
        self.velocity = self.velocity + impulse * (1.0 / self.mass)

    def integrate(self, dt: float) -> None:
        """Advance the position by the current velocity.

        Parameters
        ----------
        dt : float
            Simulation timestep in seconds.
        """
        if dt <= 0:
            return
        self.position = self.position + self.velocity * dt
