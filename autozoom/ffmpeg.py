"""Build an ffmpeg ``zoompan`` filter from a keyframe sequence.

zoompan has no notion of keyframes, so every value is written as a
piecewise expression over the output frame number ``n``: one
``if(between(n,a,b),...)`` branch per keyframe segment, each carrying that
segment's easing.  Frames before the first or after the last keyframe hold
the boundary value.
"""
from __future__ import annotations

from typing import Callable, List, Sequence

from .models import Easing, Keyframe

_IDENTITY_XY = "x='iw/2-(iw/zoom/2)':y='ih/2-(ih/zoom/2)'"

_EASING_EXPR = {
    Easing.LINEAR: "({p})",
    Easing.EASE_IN_CUBIC: "pow({p},3)",
    Easing.EASE_OUT_CUBIC: "(1-pow(1-{p},3))",
    Easing.EASE_IN_OUT_CUBIC: "if(lt({p},0.5),4*pow({p},3),1-pow(-2*{p}+2,3)/2)",
    Easing.EASE_IN_OUT_QUAD: "if(lt({p},0.5),2*pow({p},2),1-pow(-2*{p}+2,2)/2)",
}


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def frame_index(time_ms: float, fps: float) -> int:
    return max(0, int(round(time_ms / 1000.0 * fps)))


def easing_expr(easing: Easing, progress: str) -> str:
    return _EASING_EXPR[easing].format(p=progress)


def piecewise_expr(keyframes: Sequence[Keyframe], fps: float, value: Callable[[Keyframe], float]) -> str:
    """Piecewise ffmpeg expression in ``n`` honouring every keyframe."""

    if len(keyframes) == 1:
        return _fmt(value(keyframes[0]))

    parts: List[str] = [f"if(lt(n,{frame_index(keyframes[0].time, fps)}),{_fmt(value(keyframes[0]))},"]
    for before, after in zip(keyframes, keyframes[1:]):
        lo = frame_index(before.time, fps)
        hi = frame_index(after.time, fps)
        if hi <= lo:
            continue
        a, b = value(before), value(after)
        if a == b:
            parts.append(f"if(between(n,{lo},{hi}),{_fmt(a)},")
            continue
        eased = easing_expr(before.easing, f"(n-{lo})/{hi - lo}")
        parts.append(f"if(between(n,{lo},{hi}),{_fmt(a)}+({_fmt(b - a)})*{eased},")
    return "".join(parts) + _fmt(value(keyframes[-1])) + ")" * len(parts)


def zoompan_filter(keyframes: Sequence[Keyframe], width: int, height: int, fps: float = 60) -> str:
    """Return a ``zoompan`` filter reproducing ``keyframes`` frame by frame.

    Keyframe positions are viewport pixels of a ``width`` x ``height``
    recording; they are rescaled to the input size (``iw``/``ih``) and the
    crop origin is clamped to stay inside the frame.
    """

    fps_str = _fmt(fps)
    if not keyframes:
        return f"zoompan=z=1:{_IDENTITY_XY}:d=1:s={width}x{height}:fps={fps_str}"

    z_expr = piecewise_expr(keyframes, fps, lambda kf: kf.zoom)
    cx_expr = piecewise_expr(keyframes, fps, lambda kf: kf.x)
    cy_expr = piecewise_expr(keyframes, fps, lambda kf: kf.y)
    x_expr = f"max(0,min(iw-iw/zoom,({cx_expr})*iw/{width}-iw/zoom/2))"
    y_expr = f"max(0,min(ih-ih/zoom,({cy_expr})*ih/{height}-ih/zoom/2))"
    return f"zoompan=z='{z_expr}':x='{x_expr}':y='{y_expr}':d=1:s={width}x{height}:fps={fps_str}"


__all__ = ["easing_expr", "frame_index", "piecewise_expr", "zoompan_filter"]
