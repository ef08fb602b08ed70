"""Records shared by the camera keyframe synthesis stages.

Times are milliseconds since the start of the recording and positions are
viewport pixels.  Keyframe ``x``/``y`` name the point the virtual camera is
centered on, so a keyframe at the viewport center with ``zoom=1`` is the
identity framing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


class Importance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        return _IMPORTANCE_WEIGHTS[self]


class FocusReason(str, Enum):
    CLICK = "click"
    HOVER = "hover"
    SLOW_MOVEMENT = "slow_movement"

    @property
    def weight(self) -> int:
        return _REASON_WEIGHTS[self]


_IMPORTANCE_WEIGHTS = {Importance.HIGH: 3, Importance.MEDIUM: 2, Importance.LOW: 1}
_REASON_WEIGHTS = {FocusReason.CLICK: 3, FocusReason.HOVER: 2, FocusReason.SLOW_MOVEMENT: 1}


class Easing(str, Enum):
    LINEAR = "linear"
    EASE_IN_CUBIC = "ease-in-cubic"
    EASE_OUT_CUBIC = "ease-out-cubic"
    EASE_IN_OUT_CUBIC = "ease-in-out-cubic"
    EASE_IN_OUT_QUAD = "ease-in-out-quad"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Easing"]:
        # Capture JSON spells easings in camelCase ("easeInOutCubic").
        if isinstance(value, str):
            return _CAMEL_EASINGS.get(value.replace("_", "").replace("-", "").lower())
        return None


_CAMEL_EASINGS = {
    "linear": Easing.LINEAR,
    "easeincubic": Easing.EASE_IN_CUBIC,
    "easeoutcubic": Easing.EASE_OUT_CUBIC,
    "easeinoutcubic": Easing.EASE_IN_OUT_CUBIC,
    "easeinoutquad": Easing.EASE_IN_OUT_QUAD,
}


class ZoomMode(str, Enum):
    NONE = "none"
    BASIC = "basic"
    FOLLOW = "follow"
    SMART = "smart"


class ZoomSpeed(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"

    @property
    def duration(self) -> float:
        return {ZoomSpeed.SLOW: 1200.0, ZoomSpeed.MEDIUM: 800.0, ZoomSpeed.FAST: 400.0}[self]


def _time_of(raw: Mapping[str, Any]) -> float:
    if "t" in raw:
        return float(raw["t"])
    return float(raw["timestamp"])


@dataclass(frozen=True)
class CursorSample:
    t: float
    x: float
    y: float

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "CursorSample":
        return CursorSample(t=_time_of(raw), x=float(raw["x"]), y=float(raw["y"]))


@dataclass(frozen=True)
class ClickEvent:
    t: float
    x: float
    y: float

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "ClickEvent":
        return ClickEvent(t=_time_of(raw), x=float(raw["x"]), y=float(raw["y"]))


@dataclass(frozen=True)
class Telemetry:
    """Completed pointer recording handed over by the capture stage."""

    positions: Tuple[CursorSample, ...] = ()
    clicks: Tuple[ClickEvent, ...] = ()

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "Telemetry":
        positions = raw.get("positions")
        if positions is None:
            positions = raw.get("frames") or []
        samples = sorted((CursorSample.from_dict(p) for p in positions), key=lambda s: s.t)
        clicks = sorted((ClickEvent.from_dict(c) for c in raw.get("clicks") or []), key=lambda c: c.t)
        return Telemetry(positions=tuple(samples), clicks=tuple(clicks))

    @staticmethod
    def build(positions: Iterable[Tuple[float, float, float]] = (), clicks: Iterable[Tuple[float, float, float]] = ()) -> "Telemetry":
        """Build telemetry from ``(t, x, y)`` triples."""

        return Telemetry(
            positions=tuple(CursorSample(*p) for p in positions),
            clicks=tuple(ClickEvent(*c) for c in clicks),
        )

    def to_dict(self) -> Dict[str, List[Dict[str, float]]]:
        return {
            "positions": [{"t": s.t, "x": s.x, "y": s.y} for s in self.positions],
            "clicks": [{"t": c.t, "x": c.x, "y": c.y} for c in self.clicks],
        }


@dataclass(frozen=True)
class FocusPoint:
    """A moment of user attention worth framing."""

    time: float
    x: float
    y: float
    importance: Importance
    reason: FocusReason
    duration: float
    label: Optional[str] = field(default=None, compare=False)

    @property
    def end(self) -> float:
        return self.time + self.duration

    @property
    def score(self) -> int:
        return self.importance.weight + self.reason.weight


@dataclass(frozen=True)
class Keyframe:
    time: float
    zoom: float
    x: float
    y: float
    easing: Easing = Easing.LINEAR

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "zoom": self.zoom, "x": self.x, "y": self.y, "easing": self.easing.value}

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "Keyframe":
        return Keyframe(
            time=float(raw["time"]),
            zoom=float(raw["zoom"]),
            x=float(raw["x"]),
            y=float(raw["y"]),
            easing=Easing(raw.get("easing", Easing.LINEAR.value)),
        )


@dataclass(frozen=True)
class CameraPose:
    zoom: float
    x: float
    y: float


__all__ = [
    "CameraPose",
    "ClickEvent",
    "CursorSample",
    "Easing",
    "FocusPoint",
    "FocusReason",
    "Importance",
    "Keyframe",
    "Telemetry",
    "ZoomMode",
    "ZoomSpeed",
]
