"""Trailing-edge debounce for lens refreshes, driven by host ticks."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from lens_engine.runtime import telemetry

from .config import DEFAULT_REFRESH_INTERVAL_MS


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CANCELLED = "cancelled"


@dataclass
class PendingRefresh:
    deadline: float
    generation: int
    force: bool


class RefreshScheduler:
    """Coalesces refresh requests into one pipeline run.

    Unforced requests (re)arm a single pending refresh ``interval_ms`` after
    the latest request; forced requests drop it and run synchronously. The
    host calls ``tick()`` periodically, which also drains callbacks queued via
    ``defer``. Every arm or cancel bumps a generation counter so a timer that
    outlived its request never fires.
    """

    def __init__(
        self,
        refresh: Callable[[bool], None],
        *,
        is_active: Callable[[], bool],
        on_inactive: Callable[[], None],
        interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
        clock: Optional[Callable[[], float]] = None,
        logger_name: str | None = None,
    ) -> None:
        self._refresh = refresh
        self._is_active = is_active
        self._on_inactive = on_inactive
        self.interval_ms = interval_ms
        self._clock = clock or time.monotonic
        self._pending: Optional[PendingRefresh] = None
        self._deferred: List[Callable[[], None]] = []
        self._generation = 0
        self._cancelled = False
        self._logger_name = logger_name or "lens_engine.scheduler"
        self.fire_count = 0

    @property
    def state(self) -> SchedulerState:
        if self._cancelled:
            return SchedulerState.CANCELLED
        if self._pending is not None:
            return SchedulerState.PENDING
        return SchedulerState.IDLE

    @property
    def pending(self) -> Optional[PendingRefresh]:
        return self._pending

    def request(self, force: bool = False) -> bool:
        """Ask for a refresh; returns ``True`` if one ran or was scheduled."""

        if self._cancelled:
            return False
        if force:
            self._drop_pending()
            return self._fire(force=True)
        if not self._is_active():
            self.defer(self._stop_if_inactive)
            return False
        self._generation += 1
        self._pending = PendingRefresh(
            deadline=self._clock() + self.interval_ms / 1000.0,
            generation=self._generation,
            force=force,
        )
        return True

    def tick(self) -> bool:
        """Run deferred work, then fire the pending refresh if it is due."""

        self.run_deferred()
        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._trigger(pending.generation)

    def flush(self) -> bool:
        """Fire the pending refresh now, ignoring its deadline."""

        pending = self._pending
        if pending is None:
            return False
        return self._trigger(pending.generation)

    def defer(self, callback: Callable[[], None]) -> None:
        self._deferred.append(callback)

    def run_deferred(self) -> int:
        queued, self._deferred = self._deferred, []
        for callback in queued:
            callback()
        return len(queued)

    def cancel(self) -> None:
        self._drop_pending()
        if not self._cancelled:
            self._cancelled = True
            telemetry.record_event(
                "scheduler.cancel", level="debug", logger_name=self._logger_name
            )

    def arm(self) -> None:
        self._cancelled = False

    def _drop_pending(self) -> None:
        self._pending = None
        self._generation += 1

    def _stop_if_inactive(self) -> None:
        if not self._cancelled and not self._is_active():
            self._on_inactive()

    def _trigger(self, generation: int) -> bool:
        pending = self._pending
        if self._cancelled or pending is None or pending.generation != generation:
            return False
        self._pending = None
        return self._fire(force=pending.force)

    def _fire(self, *, force: bool) -> bool:
        if not self._is_active():
            self._on_inactive()
            return False
        self.fire_count += 1
        with telemetry.span(
            "scheduler::fire",
            logger_name=self._logger_name,
            metadata={"force": force, "generation": self._generation},
        ):
            self._refresh(force)
        return True


__all__ = ["PendingRefresh", "RefreshScheduler", "SchedulerState"]
