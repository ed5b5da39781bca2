"""Tests for the debounced autosave scheduler."""

from cardcatalog.domain.autosave import AutosaveScheduler


class Recorder:
    """Counts calls; optionally raises."""

    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    def __call__(self):
        self.calls += 1
        if self.error:
            raise self.error


def test_burst_runs_once(timer_factory):
    """Several changes inside the quiet period produce one save."""
    action = Recorder()
    scheduler = AutosaveScheduler(action, delay=0.5, timer_factory=timer_factory)

    for _ in range(5):
        scheduler.schedule()

    assert len(timer_factory.timers) == 5
    assert all(t.cancelled for t in timer_factory.timers[:-1])
    assert timer_factory.last.started
    assert timer_factory.last.delay == 0.5

    # A cancelled timer that fires anyway is ignored
    timer_factory.timers[0].fire()
    assert action.calls == 0

    timer_factory.last.fire()
    assert action.calls == 1
    assert not scheduler.pending


def test_pending_until_fired(timer_factory):
    """The scheduler reports a pending save until the timer fires."""
    scheduler = AutosaveScheduler(Recorder(), timer_factory=timer_factory)
    assert not scheduler.pending

    scheduler.schedule()
    assert scheduler.pending

    timer_factory.last.fire()
    assert not scheduler.pending


def test_cancel(timer_factory):
    """A cancelled save never runs."""
    action = Recorder()
    scheduler = AutosaveScheduler(action, timer_factory=timer_factory)

    scheduler.schedule()
    scheduler.cancel()
    timer_factory.last.fire()

    assert action.calls == 0
    assert timer_factory.last.cancelled
    assert not scheduler.pending


def test_flush_runs_pending_now(timer_factory):
    """Flush runs the pending save once and disarms the timer."""
    action = Recorder()
    scheduler = AutosaveScheduler(action, timer_factory=timer_factory)

    scheduler.schedule()
    assert scheduler.flush() is True
    assert action.calls == 1

    timer_factory.last.fire()
    assert action.calls == 1


def test_flush_without_pending(timer_factory):
    """Flush with nothing scheduled does nothing."""
    action = Recorder()
    scheduler = AutosaveScheduler(action, timer_factory=timer_factory)

    assert scheduler.flush() is False
    assert action.calls == 0


def test_failures_are_swallowed(timer_factory):
    """A failing save is logged and later saves still run."""
    action = Recorder(error=RuntimeError("boom"))
    scheduler = AutosaveScheduler(action, timer_factory=timer_factory)

    scheduler.schedule()
    timer_factory.last.fire()
    scheduler.schedule()
    timer_factory.last.fire()

    assert action.calls == 2


def test_real_timer_fires():
    """The default threading.Timer runs the action after the delay."""
    import threading

    done = threading.Event()
    scheduler = AutosaveScheduler(done.set, delay=0.01)

    scheduler.schedule()

    assert done.wait(timeout=5)
