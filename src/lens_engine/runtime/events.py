"""Editor event bus with disposable subscription handles."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, MutableSequence, Optional


class LensEvent(str, Enum):
    CURSOR_MOVED = "CursorMoved"
    TEXT_CHANGED = "TextChanged"
    TEXT_CHANGED_INSERT = "TextChangedI"
    TERM_ENTER = "TermEnter"
    # raised by the host when the search pattern or direction changes
    REGION_CHANGED = "RegionChanged"


EventCallback = Callable[[object], None]


class Disposable:
    """Releases one resource exactly once."""

    __slots__ = ("_callback",)

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback: Optional[Callable[[], None]] = callback

    @property
    def disposed(self) -> bool:
        return self._callback is None

    def dispose(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


def dispose_all(disposables: MutableSequence[Disposable]) -> None:
    """Dispose every handle in order and empty the list."""

    pending = list(disposables)
    del disposables[:]
    for item in pending:
        item.dispose()


class EventBus:
    """Fan-out of editor events; ``subscribe`` hands back a ``Disposable``."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventCallback]] = {}

    def subscribe(self, event: str | LensEvent, callback: EventCallback) -> Disposable:
        name = _event_name(event)
        self._subscribers.setdefault(name, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(name, [])
            if callback in callbacks:
                callbacks.remove(callback)
            if not callbacks:
                self._subscribers.pop(name, None)

        return Disposable(unsubscribe)

    def subscribe_many(
        self,
        events: Iterable[str | LensEvent],
        callback: EventCallback,
        into: MutableSequence[Disposable],
    ) -> None:
        for event in events:
            into.append(self.subscribe(event, callback))

    def emit(self, event: str | LensEvent, payload: object | None = None) -> int:
        callbacks = list(self._subscribers.get(_event_name(event), ()))
        for callback in callbacks:
            callback(payload)
        return len(callbacks)

    def subscriber_count(self, event: str | LensEvent | None = None) -> int:
        if event is None:
            return sum(len(callbacks) for callbacks in self._subscribers.values())
        return len(self._subscribers.get(_event_name(event), ()))


def _event_name(event: str | LensEvent) -> str:
    return event.value if isinstance(event, LensEvent) else str(event)


__all__ = ["Disposable", "EventBus", "LensEvent", "dispose_all"]
