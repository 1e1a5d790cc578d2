"""Controller: turns user commands and frame ticks into Timer calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from lighttimer.core.timer import Timer, TimerState

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 0.016
PRESET_MINUTES = (1, 5, 10, 25, 50)
MAX_MINUTES = 999
MAX_SECONDS = 59


def format_hhmmss(total_seconds: float) -> str:
    """Format *total_seconds* as ``HH:MM:SS``, or ``MM:SS`` under an hour."""
    total = max(int(total_seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def _clamp(value: int, upper: int) -> int:
    return min(max(int(value), 0), upper)


@dataclass(frozen=True)
class Frame:
    """What the UI needs to draw one frame."""

    time_text: str
    remaining: float
    running: bool
    completion_pending: bool
    state: TimerState
    next_frame_in: Optional[float]


class Controller:
    """Owns the Timer and the editable duration fields of the UI.

    Every command maps to exactly one Timer command and returns a short
    status message.  :meth:`frame` is called once per rendered frame with
    the current instant.
    """

    def __init__(self, timer: Timer | None = None) -> None:
        self._timer: Timer = timer if timer is not None else Timer()
        minutes, seconds = divmod(self._timer.configured_duration, 60)
        self.set_minutes: int = minutes
        self.set_seconds: int = seconds
        self._completion_reported: bool = self._timer.completion_pending

    @property
    def timer(self) -> Timer:
        return self._timer

    # -- duration fields -----------------------------------------------------

    def edit_minutes(self, value: int) -> None:
        self.set_minutes = _clamp(value, MAX_MINUTES)

    def edit_seconds(self, value: int) -> None:
        self.set_seconds = _clamp(value, MAX_SECONDS)

    # -- commands ------------------------------------------------------------

    def apply(self) -> str:
        """Apply the edit fields as the new duration."""
        self._timer.apply_duration(self.set_minutes, self.set_seconds)
        return f"Duration set: {format_hhmmss(self._timer.configured_duration)}"

    def preset(self, minutes: int) -> str:
        self.edit_minutes(minutes)
        self.set_seconds = 0
        return self.apply()

    def start(self) -> str:
        self._timer.start()
        return "Started"

    def pause(self) -> str:
        self._timer.pause()
        return f"Paused at {format_hhmmss(self._timer.remaining)}"

    def toggle(self) -> str:
        return self.pause() if self._timer.running else self.start()

    def reset(self) -> str:
        self._timer.reset()
        return f"Reset to {format_hhmmss(self._timer.configured_duration)}"

    def acknowledge(self) -> None:
        self._timer.acknowledge_completion()

    def copy_remaining(self) -> str:
        """Copy the whole seconds left into the edit fields without applying."""
        minutes, seconds = divmod(int(self._timer.remaining), 60)
        self.edit_minutes(minutes)
        self.edit_seconds(seconds)
        return f"Set fields to {self.set_minutes} min {self.set_seconds} sec"

    # -- frame loop ----------------------------------------------------------

    def frame(self, now: float) -> Frame:
        """Advance the timer to *now* and snapshot it for rendering."""
        timer = self._timer.advance(now)
        if timer.completion_pending and not self._completion_reported:
            logger.info("timer finished after %d seconds", timer.configured_duration)
            self._completion_reported = True
        elif not timer.completion_pending:
            self._completion_reported = False

        keep_drawing = timer.running or timer.completion_pending
        return Frame(
            time_text=format_hhmmss(timer.remaining),
            remaining=timer.remaining,
            running=timer.running,
            completion_pending=timer.completion_pending,
            state=timer.state,
            next_frame_in=FRAME_INTERVAL if keep_drawing else None,
        )
