"""Compact dense keyframe sequences.

Two strategies share one entry point, :func:`reduce_keyframes`:

* a local-difference filter for sequences already within budget, dropping
  keyframes that barely move relative to the last kept one;
* an importance-ranked downsampler (Douglas-Peucker flavoured) for
  sequences over budget, keeping the keyframes that deviate most from the
  straight line between their neighbours.

The first and last keyframe always survive either pass.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np
from loguru import logger

from .models import Keyframe
from .utils import distance

ZOOM_WEIGHT = 100.0


def filter_by_difference(keyframes: Sequence[Keyframe], min_distance: float, min_zoom_diff: float) -> List[Keyframe]:
    if len(keyframes) <= 2:
        return list(keyframes)
    kept = [keyframes[0]]
    for kf in keyframes[1:-1]:
        last = kept[-1]
        moved = distance(last.x, last.y, kf.x, kf.y) >= min_distance
        zoomed = abs(kf.zoom - last.zoom) >= min_zoom_diff
        if moved or zoomed:
            kept.append(kf)
    kept.append(keyframes[-1])
    return kept


def keyframe_importance(keyframes: Sequence[Keyframe]) -> np.ndarray:
    """Deviation of each keyframe from its neighbours' interpolation.

    Zoom deviation is weighted by ``ZOOM_WEIGHT`` against spatial deviation
    in px; endpoints score ``inf``.
    """

    n = len(keyframes)
    scores = np.full(n, np.inf, dtype=np.float64)
    if n <= 2:
        return scores
    arr = np.array([(kf.time, kf.x, kf.y, kf.zoom) for kf in keyframes], dtype=np.float64)
    prev, cur, nxt = arr[:-2], arr[1:-1], arr[2:]
    span = nxt[:, 0] - prev[:, 0]
    span[span == 0] = 1.0
    frac = (cur[:, 0] - prev[:, 0]) / span
    expected = prev[:, 1:] + (nxt[:, 1:] - prev[:, 1:]) * frac[:, None]
    dev = cur[:, 1:] - expected
    scores[1:-1] = np.hypot(dev[:, 0], dev[:, 1]) + np.abs(dev[:, 2]) * ZOOM_WEIGHT
    return scores


def downsample_by_importance(keyframes: Sequence[Keyframe], max_count: int) -> List[Keyframe]:
    if len(keyframes) <= max_count:
        return list(keyframes)
    scores = keyframe_importance(keyframes)
    # stable sort on negated scores keeps earlier keyframes on ties
    top = np.argsort(-scores, kind="stable")[: max(max_count, 2)]
    return [keyframes[i] for i in sorted(int(i) for i in top)]


def reduce_keyframes(
    keyframes: Sequence[Keyframe], max_count: int, min_distance: float, min_zoom_diff: float
) -> List[Keyframe]:
    """Reduce ``keyframes`` to at most ``max_count`` entries."""

    if len(keyframes) <= 2:
        return list(keyframes)
    if len(keyframes) <= max_count:
        reduced = filter_by_difference(keyframes, min_distance, min_zoom_diff)
    else:
        reduced = downsample_by_importance(keyframes, max_count)
    logger.debug("Reduced {} keyframes to {}", len(keyframes), len(reduced))
    return reduced


__all__ = ["downsample_by_importance", "filter_by_difference", "keyframe_importance", "reduce_keyframes"]
