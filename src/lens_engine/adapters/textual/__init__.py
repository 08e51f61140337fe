"""Textual demo host for the lens engine."""

from .controller import LensView, TextualLensAdapter, TextualUIHooks, create_adapter
from .host import DocumentHost

__all__ = [
    "DocumentHost",
    "LensView",
    "TextualLensAdapter",
    "TextualUIHooks",
    "create_adapter",
]
