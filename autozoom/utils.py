"""Utility helpers used across synthesis stages."""
from __future__ import annotations

import math
from statistics import mean
from typing import Sequence

from .models import Keyframe


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def summary_stats(keyframes: Sequence[Keyframe]) -> dict:
    if not keyframes:
        return {"count": 0, "duration": 0.0, "peak_zoom": 0.0, "mean_zoom": 0.0}
    zooms = [kf.zoom for kf in keyframes]
    return {
        "count": len(keyframes),
        "duration": round(keyframes[-1].time - keyframes[0].time, 3),
        "peak_zoom": round(max(zooms), 3),
        "mean_zoom": round(mean(zooms), 3),
    }
