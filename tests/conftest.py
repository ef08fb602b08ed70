"""Shared fixtures for the autozoom test suite."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from autozoom.config import AppConfig, EngineConfig
from autozoom.models import CursorSample, Easing, Keyframe, Telemetry
from examples.generate_sample import build_recording


@pytest.fixture
def default_config() -> EngineConfig:
    """Return an EngineConfig with every default."""
    return EngineConfig()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def recording() -> dict:
    """Synthetic capture document (sweep, hover, drift, circle, click)."""
    return build_recording()


@pytest.fixture
def sample_telemetry(recording: dict) -> Telemetry:
    return Telemetry.from_dict(recording)


@pytest.fixture
def recording_file(tmp_path: Path, recording: dict) -> Path:
    path = tmp_path / "recording.json"
    path.write_text(json.dumps(recording))
    return path


@pytest.fixture
def flat_follow() -> List[Keyframe]:
    """A centered, unzoomed baseline every 100 ms over 6 s."""
    return [Keyframe(time=float(t), zoom=1.0, x=960.0, y=540.0, easing=Easing.LINEAR) for t in range(0, 6001, 100)]


@pytest.fixture
def hover_samples() -> List[CursorSample]:
    return [
        CursorSample(0, 100, 100),
        CursorSample(200, 105, 102),
        CursorSample(400, 103, 98),
        CursorSample(600, 101, 100),
        CursorSample(1000, 100, 100),
    ]


@pytest.fixture
def sample_yaml(tmp_path: Path) -> Path:
    """Write a minimal config.yaml and return its path."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "engine:\n"
        "  maxZoom: 2.5\n"
        "  hold_duration: 2000\n"
        "  easing: easeOutCubic\n"
        "reduction:\n"
        "  max_keyframes: 120\n"
        "focus:\n"
        "  zoom_on_hover: false\n"
        "output:\n"
        "  mode: basic\n"
        "  zoom_speed: slow\n"
        "  width: 1280\n"
        "  height: 720\n"
    )
    return cfg
