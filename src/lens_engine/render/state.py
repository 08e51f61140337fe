"""Per-engine render bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional

from lens_engine.lens.models import PlacementDecision, StyledChunks
from lens_engine.matches import MatchIndex, Position


@dataclass(frozen=True, slots=True)
class OverlayState:
    handle: Hashable
    window: Hashable
    anchor: Position
    text: str
    chunks: StyledChunks


@dataclass(slots=True)
class CycleSnapshot:
    """What the last completed refresh drew; used to skip identical cycles.

    ``key`` is the resolution key extended with the window, its geometry and
    the nearest line's end column, so a resize redraws even when the nearest
    match stays put.
    """

    buffer: Hashable
    key: tuple[object, ...]
    matches: MatchIndex


@dataclass(slots=True)
class LensRenderState:
    """Mutable render state, owned exclusively by one engine instance."""

    decisions: Dict[Hashable, tuple[PlacementDecision, ...]] = field(default_factory=dict)
    overlay: Optional[OverlayState] = None
    last_cycle: Optional[CycleSnapshot] = None

    @property
    def buffers(self) -> tuple[Hashable, ...]:
        return tuple(self.decisions)

    def record(self, buffer: Hashable, decisions: tuple[PlacementDecision, ...]) -> None:
        self.decisions[buffer] = decisions

    def forget(self, buffer: Hashable) -> None:
        self.decisions.pop(buffer, None)
        if self.last_cycle is not None and self.last_cycle.buffer == buffer:
            self.last_cycle = None

    def is_repeat(self, buffer: Hashable, key: tuple[object, ...], matches: MatchIndex) -> bool:
        last = self.last_cycle
        return (
            last is not None
            and last.buffer == buffer
            and last.key == key
            and last.matches == matches
        )

    def reset(self) -> None:
        self.decisions.clear()
        self.overlay = None
        self.last_cycle = None
