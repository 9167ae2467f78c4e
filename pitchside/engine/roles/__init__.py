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
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Type

from .base import AgentController, StatefulController
from .field_player import FieldPlayerController
from .goalkeeper import GoalkeeperController
from .passing import PassingSystem
from .shooting import ShootingSystem

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody

ROLE_CONTROLLER_CLASSES: Dict[str, Type[StatefulController]] = {
    "GK": GoalkeeperController,
    "DF": FieldPlayerController,
    "MF": FieldPlayerController,
    "FW": FieldPlayerController,
}


def create_controller(
    role: str,
    body: "RigidBody",
    ball: Optional["RigidBody"] = None,
    **kwargs: object,
) -> StatefulController:
    """Build the state machine driver matching a positional role code.

    Parameters
    ----------
    role : str
        Role code, one of ``ROLE_CONTROLLER_CLASSES``.
    body : RigidBody
        Body the controller steers.
    ball : RigidBody | None, optional
        Ball body shared by the team.
    **kwargs : object
        Extra keyword arguments forwarded to the controller.

    Returns
    -------
    StatefulController
        Goalkeeper or field-player controller.

    Raises
    ------
    ValueError
        If ``role`` is not a known role code.
    """
    try:
        controller_cls = ROLE_CONTROLLER_CLASSES[role]
    except KeyError as exc:
        known_roles = ", ".join(sorted(ROLE_CONTROLLER_CLASSES))
        raise ValueError(f"Unknown role '{role}'. Known roles: {known_roles}") from exc
    return controller_cls(body, ball, **kwargs)


__all__ = [
    "AgentController",
    "StatefulController",
    "FieldPlayerController",
    "GoalkeeperController",
    "PassingSystem",
    "ShootingSystem",
    "ROLE_CONTROLLER_CLASSES",
    "create_controller",
]
