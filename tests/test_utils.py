from __future__ import annotations

import pytest

from autozoom.models import Keyframe
from autozoom.utils import clamp, distance, sign, summary_stats


def test_clamp_and_sign() -> None:
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
    assert sign(-4.0) == -1.0
    assert sign(0.0) == 0.0
    assert sign(2) == 1.0


def test_distance() -> None:
    assert distance(0, 0, 3, 4) == pytest.approx(5.0)


def test_summary_stats() -> None:
    keyframes = [
        Keyframe(time=0.0, zoom=1.0, x=0.0, y=0.0),
        Keyframe(time=500.0, zoom=2.0, x=0.0, y=0.0),
        Keyframe(time=1500.0, zoom=1.5, x=0.0, y=0.0),
    ]
    stats = summary_stats(keyframes)
    assert stats == {"count": 3, "duration": 1500.0, "peak_zoom": 2.0, "mean_zoom": 1.5}
    assert summary_stats([])["count"] == 0
