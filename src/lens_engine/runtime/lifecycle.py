"""Start/stop transitions and the subscriptions that feed the scheduler."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List

from lens_engine.runtime import telemetry

from .events import Disposable, EventBus, LensEvent, dispose_all
from .scheduler import RefreshScheduler


class LifecycleState(str, Enum):
    STOPPED = "stopped"
    STARTED = "started"


def _noop() -> None:
    return None


class LifecycleController:
    """Owns the STOPPED/STARTED transition.

    Everything acquired by ``start`` is registered as a ``Disposable`` in a
    single teardown list, so ``stop`` is the only release path and calling it
    again finds nothing left to release.
    """

    def __init__(
        self,
        bus: EventBus,
        scheduler: RefreshScheduler,
        *,
        is_search_active: Callable[[], bool],
        calm_down: bool = False,
        on_term_enter: Callable[[], None] = _noop,
        on_text_changed: Callable[[], None] = _noop,
        on_teardown: Callable[[], None] = _noop,
        logger_name: str | None = None,
    ) -> None:
        self.bus = bus
        self.scheduler = scheduler
        self.calm_down = calm_down
        self._is_search_active = is_search_active
        self._on_term_enter = on_term_enter
        self._on_text_changed = on_text_changed
        self._on_teardown = on_teardown
        self._state = LifecycleState.STOPPED
        self._teardown: List[Disposable] = []
        self._logger_name = logger_name or "lens_engine.lifecycle"

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_started(self) -> bool:
        return self._state is LifecycleState.STARTED

    def start(self, force: bool = False) -> bool:
        if not self._is_search_active():
            return False
        first = not self.is_started
        if first:
            self._state = LifecycleState.STARTED
            self.scheduler.arm()
            self._subscribe()
            self._teardown.append(Disposable(self._release))
            telemetry.record_event(
                "lifecycle.start",
                data={"calm_down": self.calm_down},
                logger_name=self._logger_name,
            )
        self.scheduler.request(force=force or first)
        return True

    def stop(self) -> None:
        dispose_all(self._teardown)

    def _subscribe(self) -> None:
        bus, teardown = self.bus, self._teardown
        teardown.append(
            bus.subscribe(LensEvent.CURSOR_MOVED, lambda _payload: self.scheduler.request())
        )
        teardown.append(
            bus.subscribe(LensEvent.TERM_ENTER, lambda _payload: self._on_term_enter())
        )
        teardown.append(
            bus.subscribe(
                LensEvent.REGION_CHANGED,
                lambda _payload: self.scheduler.request(force=True),
            )
        )
        if self.calm_down:
            bus.subscribe_many(
                (LensEvent.TEXT_CHANGED, LensEvent.TEXT_CHANGED_INSERT),
                lambda _payload: self._on_text_changed(),
                teardown,
            )

    def _release(self) -> None:
        self._state = LifecycleState.STOPPED
        self.scheduler.cancel()
        self._on_teardown()
        telemetry.record_event("lifecycle.stop", logger_name=self._logger_name)


__all__ = ["LifecycleController", "LifecycleState"]
