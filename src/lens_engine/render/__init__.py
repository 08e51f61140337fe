"""Render-side state, the sink driver, and an in-memory sink."""

from .memory import FloatingOverlay, InlineAnnotation, MemoryRenderSink
from .renderer import LensRenderer
from .state import CycleSnapshot, LensRenderState, OverlayState

__all__ = [
    "CycleSnapshot",
    "FloatingOverlay",
    "InlineAnnotation",
    "LensRenderState",
    "LensRenderer",
    "MemoryRenderSink",
    "OverlayState",
]
