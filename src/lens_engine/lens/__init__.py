"""Nearest-match resolution, range walking, and lens planning."""

from .models import Chunk, LensEntry, PlacementDecision, Resolution, StyledChunks
from .planner import (
    LENS_STYLE,
    NEAR_STYLE,
    PAD_STYLE,
    LensFormatter,
    LensPlanner,
    WindowGeometry,
    chunks_to_text,
    default_lens_chunks,
    format_indicator,
)
from .resolver import NearestResolver
from .walker import FoldAwareRangeWalker

__all__ = [
    "Chunk",
    "FoldAwareRangeWalker",
    "LENS_STYLE",
    "LensEntry",
    "LensFormatter",
    "LensPlanner",
    "NEAR_STYLE",
    "NearestResolver",
    "PAD_STYLE",
    "PlacementDecision",
    "Resolution",
    "StyledChunks",
    "WindowGeometry",
    "chunks_to_text",
    "default_lens_chunks",
    "format_indicator",
]
