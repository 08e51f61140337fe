from typing import Callable, List

from lens_engine.runtime.scheduler import RefreshScheduler, SchedulerState


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


class Harness:
    def __init__(self, *, refresh: Callable[[bool], None] | None = None) -> None:
        self.clock = FakeClock()
        self.active = True
        self.calls: List[bool] = []
        self.stops = 0
        self.scheduler = RefreshScheduler(
            refresh or self.calls.append,
            is_active=lambda: self.active,
            on_inactive=self._stop,
            interval_ms=150,
            clock=self.clock,
        )

    def _stop(self) -> None:
        self.stops += 1


def test_burst_of_requests_fires_once_after_quiet_period() -> None:
    harness = Harness()
    scheduler, clock = harness.scheduler, harness.clock

    for _ in range(5):
        assert scheduler.request() is True
        clock.advance(50)
    assert scheduler.state is SchedulerState.PENDING

    clock.advance(99)
    assert scheduler.tick() is False
    clock.advance(2)
    assert scheduler.tick() is True

    assert harness.calls == [False]
    assert scheduler.state is SchedulerState.IDLE
    assert scheduler.tick() is False


def test_each_request_restarts_the_quiet_period() -> None:
    harness = Harness()
    scheduler, clock = harness.scheduler, harness.clock

    scheduler.request()
    clock.advance(100)
    scheduler.request()
    clock.advance(100)
    assert scheduler.tick() is False

    clock.advance(51)
    assert scheduler.tick() is True
    assert harness.calls == [False]


def test_forced_request_runs_synchronously_and_drops_pending() -> None:
    harness = Harness()
    scheduler, clock = harness.scheduler, harness.clock

    scheduler.request()
    assert scheduler.request(force=True) is True
    assert harness.calls == [True]
    assert scheduler.pending is None

    clock.advance(500)
    assert scheduler.tick() is False
    assert harness.calls == [True]


def test_flush_ignores_the_deadline() -> None:
    harness = Harness()

    harness.scheduler.request()

    assert harness.scheduler.flush() is True
    assert harness.calls == [False]
    assert harness.scheduler.flush() is False


def test_cancel_discards_pending_and_is_idempotent() -> None:
    harness = Harness()
    scheduler, clock = harness.scheduler, harness.clock

    scheduler.request()
    scheduler.cancel()
    scheduler.cancel()
    clock.advance(200)

    assert scheduler.tick() is False
    assert scheduler.state is SchedulerState.CANCELLED
    assert scheduler.request() is False
    assert scheduler.request(force=True) is False
    assert harness.calls == []

    scheduler.arm()
    assert scheduler.state is SchedulerState.IDLE
    assert scheduler.request(force=True) is True
    assert harness.calls == [True]


def test_inactive_search_defers_a_stop_check() -> None:
    harness = Harness()
    harness.active = False

    assert harness.scheduler.request() is False
    assert harness.stops == 0
    assert harness.scheduler.state is SchedulerState.IDLE

    harness.scheduler.tick()
    assert harness.stops == 1
    assert harness.calls == []


def test_deferred_stop_check_rechecks_search_state() -> None:
    harness = Harness()
    harness.active = False
    harness.scheduler.request()

    harness.active = True
    harness.scheduler.tick()

    assert harness.stops == 0


def test_search_cleared_before_fire_stops_instead_of_refreshing() -> None:
    harness = Harness()
    harness.scheduler.request()
    harness.active = False
    harness.clock.advance(151)

    assert harness.scheduler.tick() is False
    assert harness.stops == 1
    assert harness.calls == []


def test_callback_may_cancel_its_own_scheduler() -> None:
    holder: dict[str, RefreshScheduler] = {}

    def refresh(force: bool) -> None:
        holder["scheduler"].cancel()

    harness = Harness(refresh=refresh)
    holder["scheduler"] = harness.scheduler

    harness.scheduler.request(force=True)

    assert harness.scheduler.state is SchedulerState.CANCELLED
    assert harness.scheduler.fire_count == 1


def test_deferred_callbacks_run_once_on_next_tick() -> None:
    harness = Harness()
    ran: List[str] = []

    harness.scheduler.defer(lambda: ran.append("a"))
    harness.scheduler.defer(lambda: ran.append("b"))
    harness.scheduler.tick()
    harness.scheduler.tick()

    assert ran == ["a", "b"]
