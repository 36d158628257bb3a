"""
Action Scheduler
================

Tick-driven timers: one-shot delays and repeating actions, all fired from
advance() on the game's single update thread. A scheduler belongs to one
game scene; dropping the scene drops every pending action with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# Absorbs float drift from summing fixed sub-steps (e.g. 90 * 1/60 vs 1.5)
TIME_EPSILON = 1e-9


@dataclass
class ScheduledAction:
    """A pending callback."""
    callback: Callable[[], None]
    remaining: float
    interval: Optional[float] = None  # None for one-shot actions
    name: str = ""
    fire_count: int = 0
    cancelled: bool = field(default=False, repr=False)

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True


class ActionScheduler:
    """
    Runs scheduled actions against accumulated tick time.

    Actions scheduled from inside a callback start counting on the next
    advance() call.
    """

    def __init__(self):
        self._actions: List[ScheduledAction] = []
        self._time: float = 0.0

    @property
    def time(self) -> float:
        """Total time advanced so far."""
        return self._time

    @property
    def pending(self) -> int:
        """Number of live actions."""
        return sum(1 for a in self._actions if not a.cancelled)

    def after(self, delay: float, callback: Callable[[], None], name: str = "") -> ScheduledAction:
        """
        Run callback once, delay seconds from now.

        Args:
            delay: Seconds to wait (>= 0).
            callback: Zero-argument callable.
            name: Optional label for debugging.

        Returns:
            The scheduled action (cancel() to drop it).
        """
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        action = ScheduledAction(callback=callback, remaining=delay, name=name)
        self._actions.append(action)
        logger.debug("Scheduled %s after %.3fs", name or "action", delay)
        return action

    def every(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = "",
        delay: Optional[float] = None
    ) -> ScheduledAction:
        """
        Run callback repeatedly: first after delay (defaults to interval),
        then every interval seconds.
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        first = interval if delay is None else delay
        if first < 0:
            raise ValueError(f"delay must not be negative, got {first}")
        action = ScheduledAction(
            callback=callback,
            remaining=first,
            interval=interval,
            name=name
        )
        self._actions.append(action)
        logger.debug("Scheduled %s every %.3fs", name or "action", interval)
        return action

    def find(self, name: str) -> Optional[ScheduledAction]:
        """First live action with the given name."""
        for action in self._actions:
            if action.name == name and not action.cancelled:
                return action
        return None

    def advance(self, dt: float) -> int:
        """
        Advance time by dt and fire every action that came due.

        A repeating action fires as many times as dt covers.

        Returns:
            Number of callbacks fired.
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        self._time += dt
        fired = 0

        for action in list(self._actions):
            if action.cancelled:
                continue
            action.remaining -= dt
            while not action.cancelled and action.remaining <= TIME_EPSILON:
                action.fire_count += 1
                fired += 1
                action.callback()
                if action.interval is None:
                    action.cancelled = True
                else:
                    action.remaining += action.interval

        self._actions = [a for a in self._actions if not a.cancelled]
        return fired

    def clear(self) -> None:
        """Drop every pending action."""
        for action in self._actions:
            action.cancelled = True
        self._actions = []
