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
"""State enumerations for the agent finite state machines."""
from __future__ import annotations

from enum import Enum


class AIState(Enum):
    """States a field player cycles through."""

    IDLE = 0
    CHASE_BALL = 1
    RETURN_TO_POSITION = 2


class GoalkeeperState(Enum):
    """States of the goalkeeper shot-stopping cycle."""

    POSITIONING = 0
    DIVING = 1
    RECOVERING = 2
