"""UI-agnostic search lens placement and refresh engine."""

__all__ = [
    "adapters",
    "host",
    "lens",
    "matches",
    "render",
    "runtime",
]

__version__ = "0.1.0"
