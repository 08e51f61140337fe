"""Validation helpers shared by the match index."""

from __future__ import annotations

from typing import Sequence

from .models import MatchSpan, Position


class MatchListError(RuntimeError):
    """Base class for broken match-list invariants; never a user-facing error."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class MatchIndexError(MatchListError, IndexError):
    """Raised when the engine asks for a match outside ``[0, length)``."""


class MatchOrderError(MatchListError):
    """Raised when spans are not in strictly ascending document order."""

    def __init__(
        self, message: str, *, index: int | None = None, start: Position | None = None
    ) -> None:
        super().__init__(message, index=index)
        self.start = start


def ensure_document_order(spans: Sequence[MatchSpan]) -> None:
    for i in range(1, len(spans)):
        previous, current = spans[i - 1].start, spans[i].start
        if current <= previous:
            raise MatchOrderError(
                f"Match {i} starts at {current}, not after match {i - 1} at {previous}",
                index=i,
                start=current,
            )


def ensure_index(length: int, i: int) -> int:
    if i < 0 or i >= length:
        raise MatchIndexError(f"Match index {i} out of range [0, {length})", index=i)
    return i
