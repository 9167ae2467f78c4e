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
"""Shared driver scaffolding for all per-agent controllers."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from pitchside.engine.config import AGENT_CONFIG, MovementConfig
from pitchside.engine.events import StateChange, StateChangeNotifier, StateListener
from pitchside.engine.physics import Vector2D

if TYPE_CHECKING:
    from pitchside.engine.physics import RigidBody
    from pitchside.utils.debug import DecisionDebugger

S = TypeVar("S", bound=Enum)


class AgentController:
    """Base for drivers that turn evaluator output into body updates.

    Parameters
    ----------
    agent_id : str
        Label used in debug output.
    debugger : DecisionDebugger | None, optional
        Trace log receiving decisions and refusals.
    """

    def __init__(self, agent_id: str, debugger: Optional["DecisionDebugger"] = None) -> None:
        """Store identity and logging hooks.

        Parameters
        ----------
        agent_id : str
            Label used in debug output.
        debugger : DecisionDebugger | None
            Trace log receiving decisions and refusals.
        """
        self.agent_id = agent_id
        self.debugger = debugger
        self.match_time = 0.0

    def advance_clock(self, dt: float) -> None:
        """Move the agent clock forward by ``dt`` seconds.

        Parameters
        ----------
        dt : float
            Elapsed simulation time.
        """
        if dt > 0:
            self.match_time += dt

    def _log_event(self, event_type: str, details: str) -> None:
        """Emit a decision trace line when a debugger is attached.

        Parameters
        ----------
        event_type : str
            Short category label (for example ``"pass"`` or ``"dive"``).
        details : str
            Free-form description of the action.
        """
        if not self.debugger:
            return
        self.debugger.log_decision_event(self.match_time, self.agent_id, event_type, details)

    def _log_refusal(self, reason: str, details: str) -> None:
        """Record that an action was declined.

        Parameters
        ----------
        reason : str
            Classification of the refusal.
        details : str
            Human-readable context.
        """
        if not self.debugger:
            return
        self.debugger.log_error(reason, f"{self.agent_id} {details}")


class StatefulController(AgentController, Generic[S]):
    """Driver owning a body and a finite state value.

    Parameters
    ----------
    body : RigidBody
        Body steered by the driver.
    initial_state : Enum
        State the machine starts in.
    agent_id : str
        Label used in debug output.
    movement : MovementConfig | None, optional
        Steering constants; defaults to ``AGENT_CONFIG.movement``.
    debugger : DecisionDebugger | None, optional
        Trace log receiving transitions.
    """

    def __init__(
        self,
        body: "RigidBody",
        initial_state: S,
        agent_id: str,
        movement: Optional[MovementConfig] = None,
        debugger: Optional["DecisionDebugger"] = None,
    ) -> None:
        """Bind the body and start the state machine.

        Parameters
        ----------
        body : RigidBody
            Body steered by the driver.
        initial_state : Enum
            State the machine starts in.
        agent_id : str
            Label used in debug output.
        movement : MovementConfig | None
            Steering constants; defaults to ``AGENT_CONFIG.movement``.
        debugger : DecisionDebugger | None
            Trace log receiving transitions.
        """
        super().__init__(agent_id, debugger)
        self.body = body
        self.movement = movement or AGENT_CONFIG.movement
        self._notifier: StateChangeNotifier[S] = StateChangeNotifier(initial_state)

    @property
    def state(self) -> S:
        """Return the current state.

        Returns
        -------
        Enum
            State value last decided by the driver.
        """
        return self._notifier.current

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback for ``(previous, new)`` transitions.

        Parameters
        ----------
        listener : Callable[[Enum, Enum], None]
            Callback invoked once per actual state change.
        """
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        """Stop notifying ``listener``.

        Parameters
        ----------
        listener : Callable[[Enum, Enum], None]
            Previously registered callback.
        """
        self._notifier.unsubscribe(listener)

    def _set_state(self, new_state: S) -> bool:
        """Apply a decided state, announcing it only when it changed.

        Parameters
        ----------
        new_state : Enum
            State returned by the evaluator or the timing logic.

        Returns
        -------
        bool
            ``True`` when the state actually changed.
        """
        previous = self._notifier.current
        if not self._notifier.publish(new_state):
            return False
        if self.debugger:
            self.debugger.log_state_change(StateChange(previous, new_state, self.match_time, self.agent_id))
        return True

    def _ground_position(self) -> Vector2D:
        """Return the body position on the ground plane.

        Returns
        -------
        Vector2D
            ``(x, z)`` of the body.
        """
        return self.body.position.ground()

    def _steer_toward(self, target: Vector2D, speed: float, tolerance: Optional[float] = None) -> bool:
        """Write a ground velocity heading for ``target`` at ``speed``.

        The vertical velocity component is left untouched.

        Parameters
        ----------
        target : Vector2D
            Ground point to head for.
        speed : float
            Desired ground speed.
        tolerance : float | None, optional
            Offset at or below which no velocity is written; defaults to
            ``movement.steer_epsilon``.

        Returns
        -------
        bool
            ``False`` when already within ``tolerance`` of the target.
        """
        limit = self.movement.steer_epsilon if tolerance is None else tolerance
        offset = target - self._ground_position()
        if offset.magnitude() <= limit:
            return False
        self.body.velocity = self.body.velocity.with_ground(offset.normalize() * speed)
        return True

    def _stop_ground(self) -> None:
        """Zero the ground velocity, keeping the vertical component."""
        self.body.velocity = self.body.velocity.with_ground(Vector2D(0.0, 0.0))
