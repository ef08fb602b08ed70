from __future__ import annotations

import json
import shutil
import sys
from pathlib import Path
from typing import List

import pytest
from loguru import logger

from autozoom.cli import build_parser, main


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def _run(tmp_path: Path, *args: str) -> int:
    argv: List[str] = ["--config", str(tmp_path / "missing.yaml"), *args]
    return main(argv)


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_sample_needs_at_or_fps() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["sample", "--keyframes", "k.json"])


def test_generate_default_output(tmp_path: Path, recording_file: Path) -> None:
    assert _run(tmp_path, "generate", "--telemetry", str(recording_file)) == 0
    out = recording_file.with_suffix(".keyframes.json")
    data = json.loads(out.read_text())
    assert data["keyframes"]
    assert data["settings"]["maxZoom"] == 2.0
    times = [kf["time"] for kf in data["keyframes"]]
    assert times == sorted(times)


def test_generate_with_overrides(tmp_path: Path, recording_file: Path) -> None:
    out = tmp_path / "basic.json"
    csv_path = tmp_path / "basic.csv"
    code = _run(
        tmp_path,
        "generate",
        "--telemetry", str(recording_file),
        "--out", str(out),
        "--csv", str(csv_path),
        "--mode", "basic",
        "--speed", "fast",
    )
    assert code == 0
    data = json.loads(out.read_text())
    assert [kf["time"] for kf in data["keyframes"]] == [0.0, 9000.0, 10900.0]
    assert data["settings"]["zoomDuration"] == 400
    assert csv_path.read_text().splitlines()[0] == "time,zoom,x,y,easing"


def test_generate_with_config_file(tmp_path: Path, recording_file: Path, sample_yaml: Path) -> None:
    out = tmp_path / "configured.json"
    code = main(["--config", str(sample_yaml), "generate", "--telemetry", str(recording_file), "--out", str(out)])
    assert code == 0
    data = json.loads(out.read_text())
    # basic mode at 1280x720, slow zoom from the YAML file
    assert data["keyframes"][0]["x"] == 640.0
    assert data["settings"]["maxZoom"] == 2.5
    assert data["settings"]["zoomDuration"] == 1200


def test_generate_missing_telemetry(tmp_path: Path) -> None:
    assert _run(tmp_path, "generate", "--telemetry", str(tmp_path / "absent.json")) == 1


def test_generate_from_elements(tmp_path: Path) -> None:
    page = tmp_path / "page.json"
    page.write_text(json.dumps({"elements": [{"tag": "BUTTON", "x": 100, "y": 200, "width": 80, "height": 40}]}))
    assert _run(tmp_path, "generate", "--elements", str(page)) == 0
    data = json.loads((tmp_path / "page.keyframes.json").read_text())
    frames = data["keyframes"]
    assert [kf["time"] for kf in frames] == [-800, 0, 0, 2800]
    assert (frames[2]["zoom"], frames[2]["x"], frames[2]["y"]) == (2.0, 140, 220)
    assert (frames[-1]["x"], frames[-1]["y"]) == (960, 540)


def test_generate_malformed_elements(tmp_path: Path) -> None:
    page = tmp_path / "page.json"
    page.write_text(json.dumps([{"tag": "BUTTON"}]))
    assert _run(tmp_path, "generate", "--elements", str(page)) == 1


def test_generate_needs_one_source() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["generate"])
    with pytest.raises(SystemExit):
        build_parser().parse_args(["generate", "--telemetry", "a.json", "--elements", "b.json"])


def test_sample_and_filter(tmp_path: Path, recording_file: Path, capsys) -> None:
    out = tmp_path / "basic.json"
    assert _run(tmp_path, "generate", "--telemetry", str(recording_file), "--out", str(out), "--mode", "basic") == 0
    capsys.readouterr()

    assert _run(tmp_path, "sample", "--keyframes", str(out), "--at", "0,9000") == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows[0] == {"time": 0.0, "zoom": 1.0, "x": 960.0, "y": 540.0}
    assert rows[1] == {"time": 9000.0, "zoom": 1.3, "x": 1100.0, "y": 450.0}

    assert _run(tmp_path, "sample", "--keyframes", str(out), "--fps", "1") == 0
    rows = json.loads(capsys.readouterr().out)
    assert len(rows) == 12

    assert _run(tmp_path, "filter", "--keyframes", str(out), "--fps", "30") == 0
    flt = capsys.readouterr().out.strip()
    assert flt.startswith("zoompan=z='")
    assert flt.endswith(":d=1:s=1920x1080:fps=30")


def test_batch(tmp_path: Path, recording_file: Path) -> None:
    indir = tmp_path / "in"
    outdir = tmp_path / "out"
    indir.mkdir()
    shutil.copy(recording_file, indir / "first.json")
    shutil.copy(recording_file, indir / "second.json")
    (indir / "broken.json").write_text("{")
    (indir / "old.keyframes.json").write_text("[]")

    assert _run(tmp_path, "batch", "--indir", str(indir), "--outdir", str(outdir), "--mode", "follow") == 0
    produced = sorted(p.name for p in outdir.iterdir())
    assert produced == ["first.keyframes.json", "second.keyframes.json"]
    data = json.loads((outdir / "first.keyframes.json").read_text())
    assert {kf["zoom"] for kf in data["keyframes"]} == {1.0}


def test_batch_empty_directory(tmp_path: Path) -> None:
    indir = tmp_path / "in"
    indir.mkdir()
    assert _run(tmp_path, "batch", "--indir", str(indir), "--outdir", str(tmp_path / "out")) == 0
    assert not (tmp_path / "out").exists()
