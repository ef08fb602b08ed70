"""Read telemetry recordings and write keyframe documents."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from loguru import logger

from .config import EngineConfig
from .engine import CameraSession
from .models import CameraPose, Keyframe, Telemetry


class TelemetryError(ValueError):
    pass


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise TelemetryError(f"No such file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise TelemetryError(f"Invalid JSON in {path}: {exc}") from exc


def load_telemetry(path: Path | str) -> Telemetry:
    """Load a capture document ``{positions, clicks}``.

    Documents that wrap the recording in a ``cursorData`` key (project
    files) are accepted as well.
    """

    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict) and isinstance(data.get("cursorData"), dict):
        data = data["cursorData"]
    if not isinstance(data, dict):
        raise TelemetryError(f"Telemetry in {path} must be a JSON object")
    try:
        telemetry = Telemetry.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise TelemetryError(f"Malformed telemetry sample in {path}: {exc}") from exc
    logger.debug("Loaded {} samples and {} clicks from {}", len(telemetry.positions), len(telemetry.clicks), path)
    return telemetry


def load_elements(path: Path | str) -> List[Dict[str, Any]]:
    """Load page elements, a list or ``{"elements": [...]}``, for element-driven zooms."""

    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("elements")
    if not isinstance(data, list) or not all(isinstance(el, dict) for el in data):
        raise TelemetryError(f"Elements in {path} must be a list of objects")
    logger.debug("Loaded {} page elements from {}", len(data), path)
    return data


def load_keyframes(path: Path | str) -> Tuple[List[Keyframe], EngineConfig]:
    """Load a document written by :func:`save_session`."""

    path = Path(path)
    data = _read_json(path)
    if isinstance(data, list):
        raw_frames, settings = data, {}
    elif isinstance(data, dict):
        raw_frames, settings = data.get("keyframes") or [], data.get("settings") or {}
    else:
        raise TelemetryError(f"Keyframes in {path} must be a list or an object")
    try:
        keyframes = sorted((Keyframe.from_dict(kf) for kf in raw_frames), key=lambda kf: kf.time)
    except (KeyError, TypeError, ValueError) as exc:
        raise TelemetryError(f"Malformed keyframe in {path}: {exc}") from exc
    return keyframes, EngineConfig.model_validate(settings)


def save_session(path: Path | str, session: CameraSession) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(session.to_dict(), indent=2), encoding="utf-8")
    return path


def write_keyframes_csv(path: Path | str, keyframes: Sequence[Keyframe]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "zoom", "x", "y", "easing"])
        for kf in keyframes:
            writer.writerow([f"{kf.time:.3f}", f"{kf.zoom:.4f}", f"{kf.x:.2f}", f"{kf.y:.2f}", kf.easing.value])
    return path


def pose_rows(times: Sequence[float], poses: Sequence[CameraPose]) -> List[Dict[str, float]]:
    rows: List[Dict[str, float]] = []
    for t, pose in zip(times, poses):
        rows.append({"time": t, "zoom": round(pose.zoom, 4), "x": round(pose.x, 2), "y": round(pose.y, 2)})
    return rows
