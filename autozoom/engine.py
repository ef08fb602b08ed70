"""Mode dispatch and the cached camera session."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .compose import compose_keyframes
from .config import AppConfig, EngineConfig, ReductionConfig
from .discrete import keyframes_from_clicks, keyframes_from_focus_points
from .focus import detect_focus_points
from .follow import generate_follow_keyframes
from .interpolate import sample
from .models import CameraPose, FocusPoint, Keyframe, Telemetry, ZoomMode
from .reduce import reduce_keyframes
from .utils import summary_stats


@dataclass(frozen=True)
class CameraSession:
    """Immutable result of one synthesis call.

    The engine swaps in a new session per call; anyone holding an older
    session keeps querying a complete, unchanged sequence.
    """

    keyframes: Tuple[Keyframe, ...] = ()
    config: EngineConfig = field(default_factory=EngineConfig)
    mode: ZoomMode = ZoomMode.SMART
    width: float = 0.0
    height: float = 0.0

    def zoom_at(self, t: float) -> CameraPose:
        return sample(self.keyframes, t, default_zoom=self.config.min_zoom)

    def to_dict(self) -> dict:
        return {
            "keyframes": [kf.to_dict() for kf in self.keyframes],
            "settings": self.config.to_settings(),
        }


class AutoZoomEngine:
    """Turn pointer telemetry into a reduced camera keyframe sequence."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        mode: ZoomMode | str = ZoomMode.SMART,
        reduction: Optional[ReductionConfig] = None,
        fps: float = 60.0,
        zoom_on_clicks: bool = True,
        zoom_on_hover: bool = True,
    ) -> None:
        self.config = config or EngineConfig()
        self.mode = ZoomMode(mode)
        self.reduction = reduction or ReductionConfig()
        self.fps = float(fps)
        self.zoom_on_clicks = zoom_on_clicks
        self.zoom_on_hover = zoom_on_hover
        self._session = CameraSession(config=self.config, mode=self.mode)
        self._synthesizers: Dict[ZoomMode, Callable[[Telemetry, float, float], List[Keyframe]]] = {
            ZoomMode.NONE: lambda telemetry, width, height: [],
            ZoomMode.BASIC: self._basic,
            ZoomMode.FOLLOW: self._follow,
            ZoomMode.SMART: self._smart,
        }

    @classmethod
    def from_app_config(cls, app: AppConfig) -> "AutoZoomEngine":
        return cls(
            app.engine_config(),
            mode=app.output.mode,
            reduction=app.reduction,
            fps=app.output.fps,
            zoom_on_clicks=app.focus.zoom_on_clicks,
            zoom_on_hover=app.focus.zoom_on_hover,
        )

    @property
    def session(self) -> CameraSession:
        return self._session

    @property
    def keyframes(self) -> Tuple[Keyframe, ...]:
        return self._session.keyframes

    def _basic(self, telemetry: Telemetry, width: float, height: float) -> List[Keyframe]:
        return keyframes_from_clicks(telemetry.clicks, width, height, self.config)

    def _follow(self, telemetry: Telemetry, width: float, height: float) -> List[Keyframe]:
        return generate_follow_keyframes(telemetry.positions, width, height, self.config, fps=self.fps)

    def _smart(self, telemetry: Telemetry, width: float, height: float) -> List[Keyframe]:
        baseline = self._follow(telemetry, width, height)
        points = detect_focus_points(
            telemetry.positions,
            telemetry.clicks,
            self.config,
            zoom_on_clicks=self.zoom_on_clicks,
            zoom_on_hover=self.zoom_on_hover,
        )
        return compose_keyframes(baseline, points, self.config)

    def generate(
        self, telemetry: Telemetry, width: float, height: float, mode: ZoomMode | str | None = None
    ) -> Tuple[Keyframe, ...]:
        """Synthesize, reduce and cache keyframes for one recording."""

        active = ZoomMode(mode) if mode is not None else self.mode
        raw = self._synthesizers[active](telemetry, width, height)
        if not raw and active is not ZoomMode.NONE:
            raw = [Keyframe(time=0.0, zoom=self.config.min_zoom, x=width / 2.0, y=height / 2.0, easing=self.config.easing)]
        return self._publish(raw, active, width, height)

    def generate_from_focus_points(
        self, points: Sequence[FocusPoint], width: float, height: float
    ) -> Tuple[Keyframe, ...]:
        """Zoom through precomputed focus points when no pointer data exists."""

        raw = keyframes_from_focus_points(points, width, height, self.config)
        return self._publish(raw, ZoomMode.BASIC, width, height)

    def _publish(self, raw: List[Keyframe], mode: ZoomMode, width: float, height: float) -> Tuple[Keyframe, ...]:
        # The difference filter compares against the last kept keyframe, so
        # pre-roll and hold-end keyframes that repeat their predecessor drop
        # out (see "Difference filter drops plateaus" in DESIGN.md).
        reduced = reduce_keyframes(
            raw,
            self.reduction.max_keyframes,
            self.reduction.min_distance,
            self.reduction.min_zoom_diff,
        )
        self._session = CameraSession(
            keyframes=tuple(reduced), config=self.config, mode=mode, width=width, height=height
        )
        logger.info("Generated {} keyframes ({} mode): {}", len(reduced), mode.value, summary_stats(reduced))
        return self._session.keyframes

    def zoom_at(self, t: float) -> CameraPose:
        return self._session.zoom_at(t)

    def to_dict(self) -> dict:
        return self._session.to_dict()


def generate_keyframes(
    telemetry: Telemetry,
    width: float,
    height: float,
    *,
    mode: ZoomMode | str = ZoomMode.SMART,
    config: Optional[EngineConfig] = None,
    reduction: Optional[ReductionConfig] = None,
) -> Tuple[Keyframe, ...]:
    """One-shot helper when no session cache is needed."""

    return AutoZoomEngine(config, mode=mode, reduction=reduction).generate(telemetry, width, height)


__all__ = ["AutoZoomEngine", "CameraSession", "generate_keyframes"]
