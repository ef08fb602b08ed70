"""Overlay focus-point zooms onto the follow-cam baseline ("smart" mode)."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence

from loguru import logger

from .config import EngineConfig
from .discrete import target_zoom
from .interpolate import apply_easing, lerp
from .models import Easing, FocusPoint, Keyframe


def _progress(t: float, start: float, length: float) -> float:
    return min(1.0, max(0.0, (t - start) / (length or 1.0)))


def compose_keyframes(
    follow: Sequence[Keyframe], focus_points: Iterable[FocusPoint], config: EngineConfig
) -> List[Keyframe]:
    """Blend each focus point into a copy of ``follow``.

    Around every focus point three windows are rewritten:

    * zoom-in ``[time - zoom_duration, time]`` eases (out-cubic) zoom and pan
      from the baseline towards the focus target;
    * hold ``(time, time + duration]`` pins zoom and pan on the target;
    * zoom-out ``(end, end + zoom_duration]`` eases (in-out-cubic) zoom back to
      the baseline while pan stays with the follow cam.

    Blends always start from the untouched baseline, so overlapping windows
    resolve as last write wins.
    """

    out = list(follow)
    applied = 0
    for point in focus_points:
        zoom = target_zoom(point, config)
        zoom_in_start = point.time - config.zoom_duration
        hold_end = point.end
        zoom_out_end = hold_end + config.zoom_duration
        touched = False
        for idx, base in enumerate(follow):
            t = base.time
            if zoom_in_start <= t <= point.time:
                eased = apply_easing(_progress(t, zoom_in_start, config.zoom_duration), Easing.EASE_OUT_CUBIC)
                out[idx] = replace(
                    out[idx],
                    zoom=lerp(base.zoom, zoom, eased),
                    x=lerp(base.x, point.x, eased),
                    y=lerp(base.y, point.y, eased),
                )
            elif point.time < t <= hold_end:
                out[idx] = replace(out[idx], zoom=zoom, x=point.x, y=point.y)
            elif hold_end < t <= zoom_out_end:
                eased = apply_easing(_progress(t, hold_end, config.zoom_duration), Easing.EASE_IN_OUT_CUBIC)
                out[idx] = replace(out[idx], zoom=lerp(zoom, base.zoom, eased))
            else:
                continue
            touched = True
        applied += touched

    logger.debug("Composed {} focus points onto {} follow frames", applied, len(out))
    return out


__all__ = ["compose_keyframes"]
