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
"""Structured trace log for agent decisions."""
from __future__ import annotations

import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Deque, List, Optional, TextIO, Tuple

if TYPE_CHECKING:
    from pitchside.engine.events import StateChange


class DecisionDebugger:
    """Collects timestamped decision traces in memory and optionally on disk.

    Every entry is kept in a bounded buffer for live displays. When
    ``output_dir`` is given a session file is opened there as well.

    Parameters
    ----------
    output_dir : str | Path | None, default=None
        Directory for session log files; created when missing. ``None`` keeps
        entries in memory only.
    max_recent : int, default=200
        Number of entries retained for :meth:`get_recent_events`.
    """

    def __init__(self, output_dir: Optional[str | Path] = None, max_recent: int = 200) -> None:
        """Initialise the debugger and open a session file when requested.

        Parameters
        ----------
        output_dir : str | Path | None
            Directory for session log files, or ``None`` for memory only.
        max_recent : int
            Number of entries retained in the recent-events buffer.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.log_file: Optional[TextIO] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=max_recent)
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new session file, closing any previous one."""
        if self.output_dir is None:
            return
        if self.log_file:
            self.log_file.close()

        filename = f"decisions_{self.session_start}.txt"
        self.log_file = open(self.output_dir / filename, "w", encoding="utf-8")
        self.log_file.write(f"=== Decision Trace Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_state_change(self, change: "StateChange") -> None:
        """Log a state machine transition.

        Parameters
        ----------
        change : StateChange
            Transition record to write.
        """
        self._write_log(
            "STATE",
            f"Time: {change.timestamp:.2f}s | Agent: {change.agent_id} | "
            f"{change.previous.name} -> {change.current.name}",
        )

    def log_decision_event(self, match_time: float, agent_id: str, event_type: str, description: str) -> None:
        """Log an action taken by an agent (dive, pass, shot).

        Parameters
        ----------
        match_time : float
            Agent clock in seconds.
        agent_id : str
            Label of the acting agent.
        event_type : str
            Short label identifying the action.
        description : str
            Human-readable summary of the action.
        """
        self._write_log(
            "DECISION",
            f"Time: {match_time:.2f}s | Agent: {agent_id} | Event: {event_type} | Details: {description}",
        )

    def log_error(self, error_type: str, description: str) -> None:
        """Log a refused action or other local failure.

        Parameters
        ----------
        error_type : str
            Label describing the failure classification.
        description : str
            Human-readable explanation.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Append a line to the buffer and the session file.

        Parameters
        ----------
        event_type : str
            Category label for the entry.
        details : str
            Formatted message body.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest entries with line numbers.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent lines prefixed with their line number.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:] if limit > 0 else []
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the session file if one is open."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
