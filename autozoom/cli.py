"""Console entry point for the auto-zoom engine."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from loguru import logger
from tqdm import tqdm

from .config import AppConfig, load_config
from .engine import AutoZoomEngine
from .ffmpeg import zoompan_filter
from .focus import focus_points_from_elements
from .interpolate import sample, sample_range
from .io import (
    TelemetryError,
    load_elements,
    load_keyframes,
    load_telemetry,
    pose_rows,
    save_session,
    write_keyframes_csv,
)
from .models import ZoomMode, ZoomSpeed
from .utils import summary_stats


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level)


def _load_config(path: Path) -> AppConfig:
    if not path.exists():
        logger.info("Using default configuration; no {} found", path)
    return load_config(path)


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    output = {}
    if getattr(args, "mode", None):
        output["mode"] = ZoomMode(args.mode)
    if getattr(args, "speed", None):
        output["zoom_speed"] = ZoomSpeed(args.speed)
    if getattr(args, "width", None) is not None:
        output["width"] = args.width
    if getattr(args, "height", None) is not None:
        output["height"] = args.height
    if getattr(args, "fps", None) is not None:
        output["fps"] = args.fps
    if not output:
        return config
    return config.model_copy(update={"output": config.output.model_copy(update=output)})


def _element_points(path: str):
    elements = load_elements(path)
    try:
        return focus_points_from_elements(elements)
    except (KeyError, TypeError, ValueError) as exc:
        raise TelemetryError(f"Malformed page element in {path}: {exc}") from exc


def cmd_generate(config: AppConfig, args: argparse.Namespace) -> None:
    engine = AutoZoomEngine.from_app_config(config)
    width, height = config.output.width, config.output.height
    source = Path(args.telemetry or args.elements)
    if args.telemetry:
        engine.generate(load_telemetry(source), width, height)
    else:
        engine.generate_from_focus_points(_element_points(args.elements), width, height)
    out_path = Path(args.out or source.with_suffix(".keyframes.json"))
    save_session(out_path, engine.session)
    logger.info("Wrote {}", out_path)
    if args.csv:
        write_keyframes_csv(args.csv, engine.keyframes)


def cmd_sample(config: AppConfig, args: argparse.Namespace) -> None:
    keyframes, settings = load_keyframes(args.keyframes)
    if args.at:
        times = [float(t) for t in args.at.split(",") if t.strip()]
        poses = [sample(keyframes, t, default_zoom=settings.min_zoom) for t in times]
    else:
        step = 1000.0 / args.fps
        end = keyframes[-1].time if keyframes else 0.0
        poses = sample_range(keyframes, end + step, args.fps, default_zoom=settings.min_zoom)
        times = [i * step for i in range(len(poses))]
    print(json.dumps(pose_rows(times, poses), indent=2))


def cmd_filter(config: AppConfig, args: argparse.Namespace) -> None:
    keyframes, _ = load_keyframes(args.keyframes)
    print(zoompan_filter(keyframes, config.output.width, config.output.height, config.output.fps))


def cmd_batch(config: AppConfig, args: argparse.Namespace) -> None:
    in_dir = Path(args.indir)
    out_dir = Path(args.outdir)
    sources = sorted(p for p in in_dir.glob("*.json") if not p.name.endswith(".keyframes.json"))
    if not sources:
        logger.warning("No telemetry files found in {}", in_dir)
        return
    engine = AutoZoomEngine.from_app_config(config)
    failures = 0
    for src in tqdm(sources, desc="autozoom", unit="recording"):
        try:
            telemetry = load_telemetry(src)
        except TelemetryError as exc:
            logger.warning("Skipping {}: {}", src, exc)
            failures += 1
            continue
        engine.generate(telemetry, config.output.width, config.output.height)
        save_session(out_dir / f"{src.stem}.keyframes.json", engine.session)
        logger.debug("{}: {}", src.name, summary_stats(engine.keyframes))
    logger.info("Processed {} recordings ({} skipped)", len(sources) - failures, failures)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="autozoom", description="Camera keyframes from pointer telemetry")
    parser.add_argument("--config", default="config.yaml", help="Path to YAML configuration file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    modes = [m.value for m in ZoomMode]
    speeds = [s.value for s in ZoomSpeed]

    gen_p = sub.add_parser("generate", help="Synthesize keyframes for one recording")
    source = gen_p.add_mutually_exclusive_group(required=True)
    source.add_argument("--telemetry", help="Pointer recording {positions, clicks}")
    source.add_argument("--elements", help="Page elements to zoom through when no recording exists")
    gen_p.add_argument("--out")
    gen_p.add_argument("--csv")
    gen_p.add_argument("--mode", choices=modes)
    gen_p.add_argument("--speed", choices=speeds)
    gen_p.add_argument("--width", type=int)
    gen_p.add_argument("--height", type=int)
    gen_p.add_argument("--fps", type=float)
    gen_p.set_defaults(func=cmd_generate)

    sample_p = sub.add_parser("sample", help="Query camera poses from a keyframe file")
    sample_p.add_argument("--keyframes", required=True)
    group = sample_p.add_mutually_exclusive_group(required=True)
    group.add_argument("--at", help="Comma separated times in ms")
    group.add_argument("--fps", type=float, help="Sample every frame at this rate")
    sample_p.set_defaults(func=cmd_sample)

    filter_p = sub.add_parser("filter", help="Print an ffmpeg zoompan filter")
    filter_p.add_argument("--keyframes", required=True)
    filter_p.add_argument("--width", type=int)
    filter_p.add_argument("--height", type=int)
    filter_p.add_argument("--fps", type=float)
    filter_p.set_defaults(func=cmd_filter)

    batch_p = sub.add_parser("batch", help="Process every telemetry file in a directory")
    batch_p.add_argument("--indir", required=True)
    batch_p.add_argument("--outdir", required=True)
    batch_p.add_argument("--mode", choices=modes)
    batch_p.add_argument("--speed", choices=speeds)
    batch_p.set_defaults(func=cmd_batch)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    config = _load_config(Path(args.config))
    if args.command != "sample":
        config = _apply_overrides(config, args)
    try:
        args.func(config, args)
    except TelemetryError as exc:
        logger.error("{}", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
