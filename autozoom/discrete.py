"""Discrete zoom-in / hold / zoom-out keyframes anchored on events."""
from __future__ import annotations

from typing import Iterable, List, Sequence

from .config import EngineConfig
from .models import ClickEvent, FocusPoint, Importance, Keyframe


def keyframes_from_clicks(
    clicks: Iterable[ClickEvent], width: float, height: float, config: EngineConfig
) -> List[Keyframe]:
    """Zoom on every click, ignoring all other behaviour ("basic" mode).

    Each click contributes four keyframes: a pre-roll at the viewport
    center, the zoom-in on the click, the end of the hold, and the return to
    center.  The sequence always opens with a centered keyframe at t=0.
    """

    cx, cy = width / 2.0, height / 2.0
    easing = config.easing
    keyframes = [Keyframe(time=0.0, zoom=config.min_zoom, x=cx, y=cy, easing=easing)]
    for click in clicks:
        hold_end = click.t + config.hold_duration
        keyframes.extend(
            [
                Keyframe(time=click.t - config.zoom_duration, zoom=config.min_zoom, x=cx, y=cy, easing=easing),
                Keyframe(time=click.t, zoom=config.default_zoom, x=click.x, y=click.y, easing=easing),
                Keyframe(time=hold_end, zoom=config.default_zoom, x=click.x, y=click.y, easing=easing),
                Keyframe(time=hold_end + config.zoom_duration, zoom=config.min_zoom, x=cx, y=cy, easing=easing),
            ]
        )
    keyframes.sort(key=lambda kf: kf.time)
    return keyframes


def target_zoom(point: FocusPoint, config: EngineConfig) -> float:
    return config.max_zoom if point.importance is Importance.HIGH else config.default_zoom


def keyframes_from_focus_points(
    points: Sequence[FocusPoint], width: float, height: float, config: EngineConfig
) -> List[Keyframe]:
    """Zoom through a list of focus points without a follow baseline.

    Consecutive points chain directly into each other; the camera only
    returns to center after the last one.
    """

    cx, cy = width / 2.0, height / 2.0
    easing = config.easing
    keyframes = [Keyframe(time=0.0, zoom=config.min_zoom, x=cx, y=cy, easing=easing)]
    for point in points:
        zoom = target_zoom(point, config)
        hold = point.duration or config.hold_duration
        keyframes.extend(
            [
                Keyframe(time=point.time - config.zoom_duration, zoom=config.min_zoom, x=point.x, y=point.y, easing=easing),
                Keyframe(time=point.time, zoom=zoom, x=point.x, y=point.y, easing=easing),
                Keyframe(time=point.time + hold, zoom=zoom, x=point.x, y=point.y, easing=easing),
            ]
        )
    if points:
        last = points[-1]
        end = last.time + (last.duration or config.hold_duration) + config.zoom_duration
        keyframes.append(Keyframe(time=end, zoom=config.min_zoom, x=cx, y=cy, easing=easing))
    keyframes.sort(key=lambda kf: kf.time)
    return keyframes


__all__ = ["keyframes_from_clicks", "keyframes_from_focus_points", "target_zoom"]
