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
"""State change records and the subscriber set that receives them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, TypeVar

S = TypeVar("S", bound=Enum)

StateListener = Callable[[S, S], None]


@dataclass(frozen=True)
class StateChange(Generic[S]):
    """Snapshot of a single state machine transition.

    Parameters
    ----------
    previous : Enum
        State before the transition.
    current : Enum
        State after the transition.
    timestamp : float
        Agent clock in seconds when the transition happened.
    agent_id : str
        Label of the agent whose state changed.
    """

    previous: S
    current: S
    timestamp: float  # seconds of agent clock
    agent_id: str


class StateChangeNotifier(Generic[S]):
    """Ordered set of callbacks told about ``(previous, new)`` transitions.

    The notifier keeps the last published state and drops repeat
    announcements, so subscribers only ever see genuine changes.

    Parameters
    ----------
    initial : Enum
        State the owning machine starts in.
    """

    def __init__(self, initial: S) -> None:
        """Start tracking from ``initial`` with no subscribers.

        Parameters
        ----------
        initial : Enum
            State the owning machine starts in.
        """
        self.current: S = initial
        self._listeners: List[StateListener] = []

    def subscribe(self, listener: StateListener) -> None:
        """Register ``listener``; registering twice has no extra effect.

        Parameters
        ----------
        listener : Callable[[Enum, Enum], None]
            Callback receiving ``(previous, new)``.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        """Remove ``listener`` if it is registered.

        Parameters
        ----------
        listener : Callable[[Enum, Enum], None]
            Previously registered callback.
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, new_state: S) -> bool:
        """Move to ``new_state`` and notify subscribers if it differs.

        Parameters
        ----------
        new_state : Enum
            State the machine has decided on.

        Returns
        -------
        bool
            ``True`` when a transition happened and was announced.
        """
        if new_state == self.current:
            return False
        previous = self.current
        self.current = new_state
        for listener in list(self._listeners):
            listener(previous, new_state)
        return True

    def __len__(self) -> int:
        """Return the number of registered subscribers."""
        return len(self._listeners)
