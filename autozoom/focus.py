"""Detect moments of user attention in pointer telemetry.

Three behavioural signals become :class:`~autozoom.models.FocusPoint`
candidates:

``hover``
    The cursor rests within a small radius for a while.  The window centroid
    is a running average (each sample pulls it halfway towards itself), not a
    true mean; default thresholds were tuned against that behaviour.

``slow_movement``
    A sustained run of slow but non-zero velocity, typically someone reading
    along with the pointer.

``click``
    Every click, at high importance.

Candidates are merged so that the surviving points never overlap in time;
on conflict the point with the higher importance + reason score wins.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np
from loguru import logger

from .config import EngineConfig
from .models import ClickEvent, CursorSample, FocusPoint, FocusReason, Importance
from .utils import distance

LONG_HOVER_MS = 1500.0
MIN_SLOW_RUN_MS = 1000.0


def _hover_point(samples: Sequence[CursorSample], start: int, end: int, cx: float, cy: float, max_hold: float) -> FocusPoint:
    t0 = samples[start].t
    duration = samples[end].t - t0
    return FocusPoint(
        time=t0 + duration / 2.0,
        x=cx,
        y=cy,
        importance=Importance.HIGH if duration > LONG_HOVER_MS else Importance.MEDIUM,
        reason=FocusReason.HOVER,
        duration=min(duration, max_hold),
    )


def detect_hover_pauses(
    samples: Sequence[CursorSample],
    *,
    min_duration: float,
    max_radius: float,
    max_hold: float = float("inf"),
) -> List[FocusPoint]:
    """Return one ``hover`` point per pause lasting at least ``min_duration``."""

    pauses: List[FocusPoint] = []
    if not samples:
        return pauses

    start = 0
    cx, cy = samples[0].x, samples[0].y
    for idx in range(1, len(samples)):
        sample = samples[idx]
        if distance(cx, cy, sample.x, sample.y) <= max_radius:
            cx = (cx + sample.x) / 2.0
            cy = (cy + sample.y) / 2.0
            continue
        if samples[idx - 1].t - samples[start].t >= min_duration:
            pauses.append(_hover_point(samples, start, idx - 1, cx, cy, max_hold))
        start = idx
        cx, cy = sample.x, sample.y

    last = len(samples) - 1
    if samples[last].t - samples[start].t >= min_duration:
        pauses.append(_hover_point(samples, start, last, cx, cy, max_hold))
    return pauses


def segment_velocities(samples: Sequence[CursorSample]) -> np.ndarray:
    """Velocity in px/s of each segment ``samples[i] -> samples[i + 1]``."""

    if len(samples) < 2:
        return np.zeros(0, dtype=np.float64)
    arr = np.array([(s.t, s.x, s.y) for s in samples], dtype=np.float64)
    dt = np.diff(arr[:, 0])
    dt[dt == 0] = 1.0
    dist = np.hypot(np.diff(arr[:, 1]), np.diff(arr[:, 2]))
    return dist / dt * 1000.0


def detect_slow_movement(
    samples: Sequence[CursorSample],
    *,
    max_velocity: float,
    max_hold: float = float("inf"),
    min_duration: float = MIN_SLOW_RUN_MS,
) -> List[FocusPoint]:
    """Return a ``slow_movement`` point per sustained run of slow segments."""

    velocities = segment_velocities(samples)
    slow = (velocities > 0) & (velocities <= max_velocity)
    points: List[FocusPoint] = []

    idx = 0
    n = len(slow)
    while idx < n:
        if not slow[idx]:
            idx += 1
            continue
        run_start = idx
        while idx < n and slow[idx]:
            idx += 1
        # segments run_start..idx-1 span samples run_start..idx
        run = samples[run_start : idx + 1]
        duration = run[-1].t - run[0].t
        if duration >= min_duration:
            points.append(
                FocusPoint(
                    time=run[0].t + duration / 2.0,
                    x=float(np.mean([s.x for s in run])),
                    y=float(np.mean([s.y for s in run])),
                    importance=Importance.MEDIUM,
                    reason=FocusReason.SLOW_MOVEMENT,
                    duration=min(duration, max_hold),
                )
            )
    return points


def click_focus_points(clicks: Iterable[ClickEvent], hold_duration: float) -> List[FocusPoint]:
    return [
        FocusPoint(
            time=c.t,
            x=c.x,
            y=c.y,
            importance=Importance.HIGH,
            reason=FocusReason.CLICK,
            duration=hold_duration,
        )
        for c in clicks
    ]


def merge_focus_points(points: Iterable[FocusPoint]) -> List[FocusPoint]:
    """Resolve temporal overlaps, keeping the higher-scoring point.

    Ties keep the earlier point.
    """

    ordered = sorted(points, key=lambda p: p.time)
    merged: List[FocusPoint] = []
    current: Optional[FocusPoint] = None
    for point in ordered:
        if current is None:
            current = point
        elif point.time < current.end:
            if point.score > current.score:
                current = point
        else:
            merged.append(current)
            current = point
    if current is not None:
        merged.append(current)
    return merged


def detect_focus_points(
    samples: Sequence[CursorSample],
    clicks: Sequence[ClickEvent],
    config: EngineConfig,
    *,
    zoom_on_clicks: bool = True,
    zoom_on_hover: bool = True,
) -> List[FocusPoint]:
    """Detect and merge all focus points of a recording.

    Fewer than two samples carry no behavioural signal and yield ``[]``.
    """

    if len(samples) < 2:
        return []

    candidates: List[FocusPoint] = []
    if zoom_on_hover:
        hovers = detect_hover_pauses(
            samples,
            min_duration=config.hover_pause_threshold,
            max_radius=config.hover_radius_threshold,
            max_hold=config.hold_duration,
        )
        slow = detect_slow_movement(
            samples,
            max_velocity=config.slow_movement_threshold,
            max_hold=config.hold_duration,
        )
        logger.debug("Found {} hover pauses and {} slow-movement runs", len(hovers), len(slow))
        candidates.extend(hovers)
        candidates.extend(slow)
    if zoom_on_clicks:
        candidates.extend(click_focus_points(clicks, config.hold_duration))

    merged = merge_focus_points(candidates)
    logger.debug("Merged {} focus candidates into {}", len(candidates), len(merged))
    return merged


_IMPORTANT_TAGS = {"BUTTON", "INPUT", "H1", "H2", "A"}
_HIGH_TAGS = {"BUTTON", "H1"}


def focus_points_from_elements(
    elements: Iterable[Mapping[str, Any]],
    *,
    spacing: float = 3000.0,
    duration: float = 2000.0,
) -> List[FocusPoint]:
    """Schedule focus points over page elements when no pointer data exists.

    Elements are dictionaries with ``tag``, ``x``, ``y``, ``width``,
    ``height`` and optionally ``text`` and ``isInteractive``.  Kept elements
    are visited ``spacing`` ms apart in document order.
    """

    kept = [
        el
        for el in elements
        if str(el.get("tag", "")).upper() in _IMPORTANT_TAGS or el.get("isInteractive")
    ]
    points: List[FocusPoint] = []
    for idx, el in enumerate(kept):
        tag = str(el.get("tag", "")).upper()
        points.append(
            FocusPoint(
                time=idx * spacing,
                x=float(el["x"]) + float(el.get("width", 0.0)) / 2.0,
                y=float(el["y"]) + float(el.get("height", 0.0)) / 2.0,
                importance=Importance.HIGH if tag in _HIGH_TAGS else Importance.MEDIUM,
                reason=FocusReason.HOVER,
                duration=duration,
                label=el.get("text"),
            )
        )
    return points


__all__ = [
    "click_focus_points",
    "detect_focus_points",
    "detect_hover_pauses",
    "detect_slow_movement",
    "focus_points_from_elements",
    "merge_focus_points",
    "segment_velocities",
]
