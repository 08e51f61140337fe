"""Environment-backed configuration for the lens engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Literal, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from lens_engine.lens.planner import LensFormatter

ENV_PREFIX = "LENS_ENGINE_"

FloatPolicy = Literal["auto", "always", "never"]
FLOAT_POLICIES: tuple[str, ...] = ("auto", "always", "never")

DEFAULT_REFRESH_INTERVAL_MS = 150


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class LensConfig:
    """Switches consumed by the placement and refresh pipeline."""

    nearest_only: bool = False
    nearest_float_when: FloatPolicy = "auto"
    calm_down: bool = False
    override_lens: Optional["LensFormatter"] = None
    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.nearest_float_when not in FLOAT_POLICIES:
            raise ValueError(
                f"nearest_float_when must be one of {FLOAT_POLICIES}, "
                f"got '{self.nearest_float_when}'"
            )
        if self.refresh_interval_ms < 0:
            raise ValueError("refresh_interval_ms cannot be negative")
        if self.override_lens is not None and not callable(self.override_lens):
            raise TypeError("override_lens must be callable")

    @classmethod
    def from_env(cls, **overrides: Any) -> "LensConfig":
        """Build a config from ``LENS_ENGINE_*`` variables; keyword overrides win."""

        known = {item.name for item in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown config option(s): {sorted(unknown)}")

        values: dict[str, Any] = {
            "nearest_only": env_flag("NEAREST_ONLY", False),
            "nearest_float_when": (env("NEAREST_FLOAT_WHEN") or "auto").lower(),
            "calm_down": env_flag("CALM_DOWN", False),
            "refresh_interval_ms": env_int(
                "REFRESH_INTERVAL_MS", DEFAULT_REFRESH_INTERVAL_MS
            ),
        }
        values.update(overrides)
        return cls(**values)


__all__ = [
    "ENV_PREFIX",
    "FLOAT_POLICIES",
    "FloatPolicy",
    "LensConfig",
    "env",
    "env_flag",
    "env_int",
]
