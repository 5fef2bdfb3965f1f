#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/scheduling.py
"""Timers, debouncing and liveness guards for the single-threaded engine.

Everything in livefind runs on one cooperative sequence of execution (the UI
loop). Deferred work is expressed as callbacks scheduled on a ``Scheduler``:

    - ``AsyncioScheduler`` schedules on an asyncio event loop
    - ``ManualScheduler`` keeps a virtual clock that only moves when
      ``advance`` is called; headless hosts and tests drive it explicitly

``Debouncer`` collapses bursts of triggers into one call after a quiet
period. Each debounce domain (query keystrokes, content publishing) owns its
own ``Debouncer``; they never share a timer.

A deferred continuation may fire after the session that scheduled it was torn
down. Wrapping it with ``guarded(token, callback)`` turns that late firing
into a logged no-op.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        """Prevent the callback from running."""
        ...


class Scheduler(Protocol):
    """Schedules callbacks on the UI's sequence of execution."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run ``callback`` after ``delay`` seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Parameters
    ----------
    loop : asyncio.AbstractEventLoop, optional
        Loop to schedule on. Defaults to the loop running when
        ``call_later`` is invoked.

    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Initialise the scheduler with an optional fixed loop."""
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        """Run ``callback`` after ``delay`` seconds on the event loop."""
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


@dataclass(eq=False)
class ManualTimer:
    """A timer registered with a ``ManualScheduler``."""

    due: float
    callback: Callable[[], Any]
    cancelled: bool = False

    def cancel(self) -> None:
        """Prevent the callback from running."""
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler with a virtual clock.

    Timers fire in due order (ties in scheduling order) when the clock is
    advanced past their due time. Callbacks may schedule further timers; those
    fire within the same ``advance`` call if they fall due before its target.

    Examples
    --------
        >>> scheduler = ManualScheduler()
        >>> fired = []
        >>> _ = scheduler.call_later(0.2, lambda: fired.append("a"))
        >>> scheduler.advance(0.1)
        0
        >>> scheduler.advance(0.1)
        1
        >>> fired
        ['a']

    """

    now: float = 0.0
    _queue: list[tuple[float, int, ManualTimer]] = field(default_factory=list, repr=False)
    _sequence: itertools.count = field(default_factory=itertools.count, repr=False)

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ManualTimer:
        """Register ``callback`` to run ``delay`` seconds from the current virtual time."""
        timer = ManualTimer(due=self.now + max(delay, 0.0), callback=callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    @property
    def pending_count(self) -> int:
        """Return the number of timers that are scheduled and not cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every timer that falls due.

        Returns
        -------
        int
            Number of callbacks that ran

        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = due
            timer.callback()
            ran += 1
        self.now = target
        return ran

    def run_pending(self) -> int:
        """Run every timer that is already due."""
        return self.advance(0.0)


class Debouncer:
    """Collapse bursts of triggers into a single call after a quiet period.

    Each ``trigger`` restarts the window and replaces the pending arguments;
    only the last arguments reach the callback. A non-positive delay calls
    through immediately.

    Parameters
    ----------
    scheduler : Scheduler
        Scheduler providing the timer
    delay : float
        Quiet period in seconds
    callback : callable
        Function receiving the last trigger's arguments

    """

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[..., Any]) -> None:
        """Initialise the debouncer with its timer source, window and callback."""
        self._scheduler = scheduler
        self.delay = delay
        self._callback = callback
        self._handle: Optional[TimerHandle] = None
        self._args: tuple[Any, ...] = ()

    @property
    def pending(self) -> bool:
        """Return True if a call is waiting for the window to close."""
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        """Schedule a call with ``args``, replacing any pending one."""
        self.cancel()
        if self.delay <= 0:
            self._callback(*args)
            return
        self._args = args
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._args = ()

    def flush(self) -> bool:
        """Run the pending call now. Returns False if nothing was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        args = self._args
        self._handle = None
        self._args = ()
        self._callback(*args)


class LivenessToken:
    """Alive flag plus generation number identifying one session.

    The generation is unique per process, so log lines and late callbacks
    can be attributed to the session that produced them.
    """

    _generations = itertools.count(1)

    def __init__(self) -> None:
        """Create a live token with a fresh generation number."""
        self.generation = next(LivenessToken._generations)
        self._alive = True

    @property
    def alive(self) -> bool:
        """Return True until ``revoke`` is called."""
        return self._alive

    def revoke(self) -> None:
        """Mark the owning session as torn down."""
        self._alive = False

    def __repr__(self) -> str:
        return f"LivenessToken(generation={self.generation}, alive={self._alive})"


def guarded(token: LivenessToken, callback: Callable[[], Any], description: str = "callback") -> Callable[[], None]:
    """Wrap a deferred continuation so it does nothing once ``token`` is revoked.

    Parameters
    ----------
    token : LivenessToken
        Token of the session that schedules the continuation
    callback : callable
        The continuation
    description : str, default "callback"
        Name used in the debug log when a stale firing is skipped

    Returns
    -------
    callable
        Zero-argument function suitable for ``Scheduler.call_later``

    """

    def run() -> None:
        if not token.alive:
            logger.debug("Skipping stale %s of session %d", description, token.generation)
            return
        callback()

    return run
