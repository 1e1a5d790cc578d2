"""Timer core — a pure state-machine countdown timer."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 5 * 60

_MIN_DURATION_SECONDS = 1


class TimerState(Enum):
    """Possible states of the timer, derived from its fields."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


def _check_component(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


class Timer:
    """A pure state-machine timer that counts down a configured duration.

    The timer never reads a clock.  Elapsed time is charged only by
    :meth:`advance`, which receives the current instant (in seconds, e.g.
    from ``time.monotonic()``) from the caller.  Contains no I/O, no threads,
    and no persistence.
    """

    def __init__(self) -> None:
        self._configured_duration: int = DEFAULT_DURATION_SECONDS
        self._remaining: float = float(DEFAULT_DURATION_SECONDS)
        self._running: bool = False
        self._last_observed: Optional[float] = None
        self._completion_pending: bool = False

    # -- observable fields ---------------------------------------------------

    @property
    def configured_duration(self) -> int:
        """Duration in whole seconds applied by the last apply/reset."""
        return self._configured_duration

    @property
    def remaining(self) -> float:
        """Seconds left in the countdown, never below zero."""
        return self._remaining

    @property
    def running(self) -> bool:
        """Whether the countdown is consuming time."""
        return self._running

    @property
    def last_observed(self) -> Optional[float]:
        """Instant last charged by :meth:`advance`, or None before a baseline."""
        return self._last_observed

    @property
    def completion_pending(self) -> bool:
        """True from the moment the countdown hits zero until acknowledged."""
        return self._completion_pending

    @property
    def state(self) -> TimerState:
        """Return the current state, derived from the other fields."""
        if self._running:
            return TimerState.RUNNING
        if self._remaining <= 0.0:
            return TimerState.FINISHED
        if self._remaining < self._configured_duration:
            return TimerState.PAUSED
        return TimerState.IDLE

    # -- commands ------------------------------------------------------------

    def apply_duration(self, minutes: int, seconds: int) -> None:
        """Configure a new duration of *minutes* and *seconds* and stop.

        A total of zero is clamped to one second rather than rejected.
        Negative components raise ``ValueError`` and leave the timer as it
        was.
        """
        _check_component("minutes", minutes)
        _check_component("seconds", seconds)

        total = minutes * 60 + seconds
        if total < _MIN_DURATION_SECONDS:
            logger.debug("zero duration clamped to %d second", _MIN_DURATION_SECONDS)
            total = _MIN_DURATION_SECONDS

        self._configured_duration = total
        self._remaining = float(total)
        self._running = False
        self._completion_pending = False
        self._last_observed = None
        logger.debug("duration applied: %d seconds", total)

    def start(self) -> None:
        """Start counting down.  The next :meth:`advance` sets the baseline.

        Calling it while already running only rebases the baseline.
        """
        self._running = True
        self._last_observed = None
        logger.debug("started with %.3f seconds remaining", self._remaining)

    def pause(self) -> None:
        """Stop counting down, keeping the remaining time.  No-op when stopped."""
        if self._running:
            logger.debug("paused with %.3f seconds remaining", self._remaining)
        self._running = False
        self._last_observed = None

    def toggle(self) -> None:
        """Pause if running, otherwise start."""
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Stop and restore the configured duration."""
        self.pause()
        minutes, seconds = divmod(self._configured_duration, 60)
        self.apply_duration(minutes, seconds)

    def acknowledge_completion(self) -> None:
        """Clear a pending completion.  No-op when nothing is pending."""
        self._completion_pending = False

    def advance(self, now: float) -> Timer:
        """Charge the time elapsed since the last call against the countdown.

        The first call after a start only records *now* as the baseline.  An
        instant earlier than the stored one counts as no time at all.
        Completion fires here and nowhere else, once per run.
        """
        if not self._running:
            self._last_observed = None
            return self

        if self._last_observed is None:
            self._last_observed = now
            return self

        dt = max(now - self._last_observed, 0.0)
        self._last_observed = now

        if dt >= self._remaining:
            self._remaining = 0.0
            self._running = False
            self._completion_pending = True
            logger.debug("countdown of %d seconds finished", self._configured_duration)
        else:
            self._remaining -= dt
        return self
