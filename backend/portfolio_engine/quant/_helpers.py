"""Shared helpers for the quant package."""

from __future__ import annotations

import math


def _safe_float(value: object) -> float | None:
    """Convert *value* to a Python float, returning ``None`` for nan / inf / bad types."""
    if value is None:
        return None
    try:
        f = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))
