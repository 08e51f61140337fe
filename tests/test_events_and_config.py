from typing import List

import pytest

from lens_engine.runtime.config import LensConfig
from lens_engine.runtime.events import Disposable, EventBus, LensEvent, dispose_all


def test_subscription_handle_unsubscribes_once() -> None:
    bus = EventBus()
    seen: List[object] = []
    handle = bus.subscribe(LensEvent.CURSOR_MOVED, seen.append)

    assert bus.emit("CursorMoved", 1) == 1
    handle.dispose()
    handle.dispose()
    assert bus.emit(LensEvent.CURSOR_MOVED, 2) == 0

    assert seen == [1]
    assert handle.disposed
    assert bus.subscriber_count() == 0


def test_dispose_all_empties_the_list() -> None:
    released: List[str] = []
    handles = [Disposable(lambda: released.append("a")), Disposable(lambda: released.append("b"))]

    dispose_all(handles)
    dispose_all(handles)

    assert handles == []
    assert released == ["a", "b"]


def test_callback_can_unsubscribe_during_emit() -> None:
    bus = EventBus()
    seen: List[str] = []
    handles: List[Disposable] = []

    def first(_payload: object) -> None:
        seen.append("first")
        dispose_all(handles)

    handles.append(bus.subscribe(LensEvent.TEXT_CHANGED, first))
    handles.append(bus.subscribe(LensEvent.TEXT_CHANGED, lambda _p: seen.append("second")))

    bus.emit(LensEvent.TEXT_CHANGED)
    bus.emit(LensEvent.TEXT_CHANGED)

    assert seen == ["first", "second"]


def test_config_defaults() -> None:
    config = LensConfig()

    assert config.nearest_only is False
    assert config.nearest_float_when == "auto"
    assert config.calm_down is False
    assert config.override_lens is None
    assert config.refresh_interval_ms == 150


def test_config_rejects_unknown_float_policy() -> None:
    with pytest.raises(ValueError):
        LensConfig(nearest_float_when="sometimes")  # type: ignore[arg-type]


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LENS_ENGINE_NEAREST_ONLY", "yes")
    monkeypatch.setenv("LENS_ENGINE_NEAREST_FLOAT_WHEN", "ALWAYS")
    monkeypatch.setenv("LENS_ENGINE_REFRESH_INTERVAL_MS", "not-a-number")

    config = LensConfig.from_env(calm_down=True)

    assert config.nearest_only is True
    assert config.nearest_float_when == "always"
    assert config.calm_down is True
    assert config.refresh_interval_ms == 150


def test_config_from_env_rejects_unknown_overrides() -> None:
    with pytest.raises(TypeError):
        LensConfig.from_env(nearest_floats=True)
