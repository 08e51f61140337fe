"""Immutable ordered view over one cycle's match list."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from .models import MatchSpan, Position
from .validation import ensure_document_order, ensure_index


class MatchIndex:
    """Pure index/line lookups over a validated, ordered match list."""

    __slots__ = ("_spans", "_lines", "_starts", "_ends", "_ends_ordered")

    def __init__(self, spans: Iterable[MatchSpan] = (), *, validate: bool = True) -> None:
        self._spans: tuple[MatchSpan, ...] = tuple(spans)
        if validate:
            ensure_document_order(self._spans)
        self._lines: tuple[int, ...] = tuple(span.start[0] for span in self._spans)
        self._starts: tuple[Position, ...] = tuple(span.start for span in self._spans)
        self._ends: tuple[Position, ...] = tuple(span.end for span in self._spans)
        self._ends_ordered = all(
            self._ends[i - 1] <= self._ends[i] for i in range(1, len(self._ends))
        )

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[tuple[Sequence[int], Sequence[int]]]
    ) -> "MatchIndex":
        return cls(MatchSpan.from_pair(start, end) for start, end in pairs)

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[MatchSpan]:
        return iter(self._spans)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchIndex):
            return NotImplemented
        return self._spans == other._spans

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MatchIndex(length={len(self._spans)})"

    def length(self) -> int:
        return len(self._spans)

    @property
    def spans(self) -> tuple[MatchSpan, ...]:
        return self._spans

    def span(self, i: int) -> MatchSpan:
        return self._spans[ensure_index(len(self._spans), i)]

    def line_of(self, i: int) -> int:
        return self._lines[ensure_index(len(self._lines), i)]

    def start_of(self, i: int) -> Position:
        return self.span(i).start

    def end_of(self, i: int) -> Position:
        return self.span(i).end

    def starts(self) -> tuple[Position, ...]:
        return self._starts

    def ends(self) -> tuple[Position, ...]:
        return self._ends

    @property
    def ends_ordered(self) -> bool:
        """True when span ends ascend too, so they can be bisected."""

        return self._ends_ordered


__all__ = ["MatchIndex"]
