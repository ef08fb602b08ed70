"""Configuration models and loader for the auto-zoom engine."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .models import Easing, ZoomMode, ZoomSpeed


class EngineConfig(BaseModel):
    """Tunables shared by every synthesis stage.

    Instances are immutable; use :meth:`model_copy` or :meth:`with_speed` to
    derive a variant.  Field aliases are the camelCase names used by the
    capture tool so exported settings round-trip with it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    min_zoom: float = Field(1.0, gt=0.0, description="Zoom factor of the widest framing.")
    max_zoom: float = Field(2.0, gt=0.0, description="Zoom factor used for high-importance focus points.")
    default_zoom: float = Field(1.3, gt=0.0, description="Zoom factor for clicks and medium-importance points.")
    zoom_duration: float = Field(800.0, ge=0.0, description="Milliseconds spent zooming in or out.")
    hold_duration: float = Field(1500.0, ge=0.0, description="Milliseconds a zoom is held on its target.")
    easing: Easing = Field(Easing.EASE_IN_OUT_CUBIC, description="Easing attached to discrete zoom keyframes.")
    follow_intensity: float = Field(0.5, ge=0.0, le=1.0, description="Fraction of the out-of-band offset the follow cam pans.")
    deadzone: float = Field(0.2, ge=0.0, le=1.0, description="Central band (fraction of the viewport) that never pans.")
    max_pan_speed: float = Field(200.0, ge=0.0, description="Pan speed cap in px/s.")
    anticipation: float = Field(200.0, ge=0.0, description="Milliseconds the follow cam looks ahead.")
    hover_pause_threshold: float = Field(500.0, ge=0.0, description="Minimum hover pause in milliseconds.")
    hover_radius_threshold: float = Field(50.0, ge=0.0, description="Radius in px the cursor may wander during a pause.")
    slow_movement_threshold: float = Field(100.0, ge=0.0, description="Velocity in px/s at or below which movement is deliberate.")

    @field_validator("easing", mode="before")
    @classmethod
    def normalize_easing(cls, value: object) -> object:
        if isinstance(value, str):
            return Easing(value)
        return value

    @model_validator(mode="after")
    def check_zoom_order(self) -> "EngineConfig":
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) must not exceed max_zoom ({self.max_zoom})")
        if not self.min_zoom <= self.default_zoom <= self.max_zoom:
            raise ValueError(
                f"default_zoom ({self.default_zoom}) must lie within [{self.min_zoom}, {self.max_zoom}]"
            )
        return self

    def with_speed(self, speed: ZoomSpeed | str) -> "EngineConfig":
        """Return a copy whose zoom duration follows a named speed preset."""

        return self.model_copy(update={"zoom_duration": ZoomSpeed(speed).duration})

    def to_settings(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ReductionConfig(BaseModel):
    max_keyframes: int = Field(300, ge=2, description="Upper bound on keyframes kept after reduction.")
    min_distance: float = Field(2.0, ge=0.0, description="Pan change in px that keeps a keyframe.")
    min_zoom_diff: float = Field(0.01, ge=0.0, description="Zoom change that keeps a keyframe.")


class FocusConfig(BaseModel):
    zoom_on_clicks: bool = Field(True, description="Turn clicks into focus points.")
    zoom_on_hover: bool = Field(True, description="Turn hover pauses and slow movement into focus points.")


class OutputConfig(BaseModel):
    mode: ZoomMode = Field(ZoomMode.SMART, description="Zoom mode: none, basic, follow or smart.")
    zoom_speed: Optional[ZoomSpeed] = Field(None, description="Named zoom speed overriding engine.zoom_duration.")
    fps: float = Field(60.0, gt=0.0, description="Frame rate of the resampled follow path.")
    width: int = Field(1920, gt=0, description="Viewport width in px.")
    height: int = Field(1080, gt=0, description="Viewport height in px.")

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered not in {m.value for m in ZoomMode}:
                raise ValueError("mode must be one of 'none', 'basic', 'follow' or 'smart'")
            return lowered
        return value


class AppConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    reduction: ReductionConfig = Field(default_factory=ReductionConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def engine_config(self) -> EngineConfig:
        if self.output.zoom_speed is not None:
            return self.engine.with_speed(self.output.zoom_speed)
        return self.engine


def load_config(path: Path | str) -> AppConfig:
    """Load configuration from YAML, falling back to defaults when missing."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        return AppConfig()
    data = yaml.safe_load(cfg_path.read_text()) or {}
    return AppConfig.model_validate(data)
