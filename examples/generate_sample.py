"""Generate a small synthetic pointer recording for testing."""
from __future__ import annotations

import json
import math
from pathlib import Path


def _position(t: int) -> tuple[float, float]:
    if t < 3000:
        frac = t / 3000.0
        return 200 + 1300 * frac, 800 - 500 * frac
    if t < 5000:
        return 1500 + 6 * math.sin(t / 180.0), 300 + 4 * math.cos(t / 210.0)
    if t < 5500:
        frac = (t - 5000) / 500.0
        return 1500 - 800 * frac, 300 + 300 * frac
    if t < 7500:
        frac = (t - 5500) / 2000.0
        return 700 + 160 * frac, 600.0
    angle = 2 * math.pi * (t - 7500) / 2000.0
    return 960 + 300 * math.cos(angle), 540 + 200 * math.sin(angle)


def build_recording(duration: int = 12000, interval: int = 100) -> dict:
    """Sweep, rest on a button, jump, read slowly, circle, click.

    Timeline (ms): 0-3000 sweep to (1500, 300), 3000-5000 hover there,
    5000-5500 jump to (700, 600), 5500-7500 slow drift right, 7500 onwards
    circle the viewport center with a click at 9000.
    """

    positions = []
    for t in range(0, duration + 1, interval):
        x, y = _position(t)
        positions.append({"t": t, "x": round(x, 2), "y": round(y, 2)})
    clicks = [{"t": 9000, "x": 1100.0, "y": 450.0}]
    return {"positions": positions, "clicks": clicks}


def main(output: Path = Path("sample_recording.json")) -> Path:
    output = Path(output)
    output.write_text(json.dumps(build_recording(), indent=2))
    print(f"Wrote {output}")
    return output


if __name__ == "__main__":
    main()
