"""Pan-only follow camera that tracks the cursor.

Per output frame the camera looks ahead by ``anticipation`` ms, ignores
cursor offsets inside a central dead-zone band, and approaches the target
pan through a speed-capped first-order filter (``smooth_damp``).  The
result is hard-clamped to a quarter of the viewport either side of center
so the frame never leaves the content.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np
from loguru import logger

from .config import EngineConfig
from .models import CursorSample, Easing, Keyframe
from .utils import clamp, sign

SMOOTHING = 0.3
MAX_PAN_FRACTION = 0.25


def interpolate_positions(
    samples: Sequence[CursorSample], duration: float, fps: float, start: float = 0.0
) -> List[CursorSample]:
    """Resample sparse cursor samples to ``fps`` over ``[start, start + duration)``."""

    if not samples:
        return []
    count = int(round(duration / 1000.0 * fps))
    if count <= 0:
        return []
    times = start + np.arange(count, dtype=np.float64) * (1000.0 / fps)
    src = np.array([(s.t, s.x, s.y) for s in samples], dtype=np.float64)
    xs = np.interp(times, src[:, 0], src[:, 1])
    ys = np.interp(times, src[:, 0], src[:, 2])
    return [CursorSample(t=float(t), x=float(x), y=float(y)) for t, x, y in zip(times, xs, ys)]


def smooth_damp(current: float, target: float, max_speed: float, dt: float, smoothing: float = SMOOTHING) -> float:
    """Move ``current`` towards ``target`` with a speed cap.

    ``dt`` is in seconds.  The capped step is scaled by ``smoothing``, a
    first-order filter rather than a true critically damped spring.
    """

    max_delta = max_speed * dt
    delta = clamp(target - current, -max_delta, max_delta)
    return current + delta * smoothing


def deadzone_target(offset: float, dimension: float, deadzone: float, intensity: float) -> float:
    """Target pan for a cursor ``offset`` px away from the viewport center."""

    half_band = deadzone * dimension / 2.0
    if abs(offset) <= half_band:
        return 0.0
    return (offset - sign(offset) * half_band) * intensity


def _frames_for(samples: Sequence[CursorSample], fps: float, resample: bool) -> List[CursorSample]:
    if not resample:
        return list(samples)
    start = samples[0].t
    frame_ms = 1000.0 / fps
    # one extra frame so the last sample is covered
    return interpolate_positions(samples, samples[-1].t - start + frame_ms, fps, start=start)


def generate_follow_keyframes(
    samples: Sequence[CursorSample],
    width: float,
    height: float,
    config: EngineConfig,
    *,
    fps: float = 60.0,
    resample: bool = True,
) -> List[Keyframe]:
    """Build the follow-cam baseline: one linear keyframe per frame at ``min_zoom``.

    Fewer than two samples carry no movement to follow and yield ``[]``.
    """

    if len(samples) < 2:
        return []
    frames = _frames_for(samples, fps, resample)
    if not frames:
        return []

    frame_ms = 1000.0 / fps
    lookahead = int(round(config.anticipation / frame_ms))
    center_x, center_y = width / 2.0, height / 2.0
    limit_x, limit_y = width * MAX_PAN_FRACTION, height * MAX_PAN_FRACTION

    pan_x = pan_y = 0.0
    prev_t = frames[0].t - frame_ms
    keyframes: List[Keyframe] = []
    for idx, frame in enumerate(frames):
        target = frames[min(idx + lookahead, len(frames) - 1)]
        target_x = deadzone_target(target.x - center_x, width, config.deadzone, config.follow_intensity)
        target_y = deadzone_target(target.y - center_y, height, config.deadzone, config.follow_intensity)

        dt = max(frame.t - prev_t, 1.0) / 1000.0
        pan_x = clamp(smooth_damp(pan_x, target_x, config.max_pan_speed, dt), -limit_x, limit_x)
        pan_y = clamp(smooth_damp(pan_y, target_y, config.max_pan_speed, dt), -limit_y, limit_y)
        prev_t = frame.t

        keyframes.append(
            Keyframe(time=frame.t, zoom=config.min_zoom, x=center_x + pan_x, y=center_y + pan_y, easing=Easing.LINEAR)
        )

    logger.debug("Follow cam produced {} frames (lookahead {} frames)", len(keyframes), lookahead)
    return keyframes


__all__ = [
    "deadzone_target",
    "generate_follow_keyframes",
    "interpolate_positions",
    "smooth_damp",
]
