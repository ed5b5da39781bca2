"""Debounced autosave scheduling."""

import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_DELAY = 0.5


class Timer(Protocol):
    """The part of threading.Timer the scheduler relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


class AutosaveScheduler:
    """Single-slot delayed task that coalesces bursts of changes.

    Each schedule() replaces the pending task instead of queueing another,
    so the action runs once, after changes have stopped for `delay`
    seconds. Failures of the action are logged and dropped.
    """

    def __init__(
        self,
        action: Callable[[], None],
        delay: float = DEFAULT_AUTOSAVE_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """Initialize scheduler.

        Args:
            action: Callable performing the save
            delay: Quiet period in seconds before the action runs
            timer_factory: Creates a startable, cancellable timer from
                (delay, callback); threading.Timer by default
        """
        self.action = action
        self.delay = delay
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """Whether an action is scheduled and has not run yet."""
        with self._lock:
            return self._timer is not None

    def schedule(self) -> None:
        """(Re)start the quiet-period timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            timer = self.timer_factory(self.delay, lambda: self._fire(generation))
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Drop the pending action, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def flush(self) -> bool:
        """Run the pending action now instead of waiting.

        Returns:
            True if an action was pending and has been run
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        self._run()
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer schedule() or a cancel() superseded this timer
            if generation != self._generation:
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        try:
            self.action()
        except Exception:
            logger.exception("Autosave failed")
