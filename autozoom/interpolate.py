"""Time-domain queries against a finished keyframe sequence."""
from __future__ import annotations

from bisect import bisect_right
from typing import Callable, Dict, List, Sequence

from .models import CameraPose, Easing, Keyframe
from .utils import clamp


def _ease_in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def _ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


EASING_FUNCTIONS: Dict[Easing, Callable[[float], float]] = {
    Easing.LINEAR: lambda t: t,
    Easing.EASE_IN_CUBIC: lambda t: t * t * t,
    Easing.EASE_OUT_CUBIC: lambda t: 1 - (1 - t) ** 3,
    Easing.EASE_IN_OUT_CUBIC: _ease_in_out_cubic,
    Easing.EASE_IN_OUT_QUAD: _ease_in_out_quad,
}


def apply_easing(t: float, easing: Easing | str) -> float:
    """Map linear progress ``t`` in ``[0, 1]`` through ``easing``."""

    return EASING_FUNCTIONS[Easing(easing)](t)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def sample(keyframes: Sequence[Keyframe], t: float, *, default_zoom: float = 1.0) -> CameraPose:
    """Return the camera pose at time ``t``.

    The pair ``(before, after)`` bracketing ``t`` is blended with the easing
    named on ``before``.  Times outside the sequence clamp to the first or
    last keyframe; an empty sequence yields ``(default_zoom, 0, 0)``.
    """

    if not keyframes:
        return CameraPose(zoom=default_zoom, x=0.0, y=0.0)
    idx = bisect_right([kf.time for kf in keyframes], t)
    if idx == 0:
        first = keyframes[0]
        return CameraPose(zoom=first.zoom, x=first.x, y=first.y)
    if idx >= len(keyframes):
        last = keyframes[-1]
        return CameraPose(zoom=last.zoom, x=last.x, y=last.y)

    before = keyframes[idx - 1]
    after = keyframes[idx]
    span = (after.time - before.time) or 1.0
    progress = clamp((t - before.time) / span, 0.0, 1.0)
    eased = apply_easing(progress, before.easing)
    return CameraPose(
        zoom=lerp(before.zoom, after.zoom, eased),
        x=lerp(before.x, after.x, eased),
        y=lerp(before.y, after.y, eased),
    )


def sample_range(keyframes: Sequence[Keyframe], duration: float, fps: float, *, default_zoom: float = 1.0) -> List[CameraPose]:
    """One pose per output frame over ``[0, duration)`` ms."""

    count = max(0, int(round(duration / 1000.0 * fps)))
    step = 1000.0 / fps
    return [sample(keyframes, i * step, default_zoom=default_zoom) for i in range(count)]


__all__ = ["EASING_FUNCTIONS", "apply_easing", "lerp", "sample", "sample_range"]
