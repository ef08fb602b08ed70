"""Camera keyframe synthesis for auto-zoomed demo recordings."""

from .config import AppConfig, EngineConfig, ReductionConfig, load_config
from .engine import AutoZoomEngine, CameraSession, generate_keyframes
from .interpolate import sample
from .models import (
    CameraPose,
    ClickEvent,
    CursorSample,
    Easing,
    FocusPoint,
    FocusReason,
    Importance,
    Keyframe,
    Telemetry,
    ZoomMode,
    ZoomSpeed,
)

__all__ = [
    "AppConfig",
    "AutoZoomEngine",
    "CameraPose",
    "CameraSession",
    "ClickEvent",
    "CursorSample",
    "Easing",
    "EngineConfig",
    "FocusPoint",
    "FocusReason",
    "Importance",
    "Keyframe",
    "ReductionConfig",
    "Telemetry",
    "ZoomMode",
    "ZoomSpeed",
    "generate_keyframes",
    "load_config",
    "sample",
]
