"""CLI for rendering persisted runs: ``animate`` and ``snapshot`` subcommands."""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib

from pong_wars.viz.render import render_run_animation, render_territory_snapshot


def _build_animate_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("animate", help="Render a run as an animated GIF/MP4")
    p.add_argument("--out-dir", type=Path, required=True, help="Run output directory")
    p.add_argument("--run-json", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--fps", type=int, default=20)
    p.add_argument("--frame-stride", type=int, default=1)
    p.add_argument("--base-dir", type=Path, default=None)


def _build_snapshot_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("snapshot", help="Render one tick as a static image")
    p.add_argument("--out-dir", type=Path, required=True, help="Run output directory")
    p.add_argument("--run-json", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--tick", type=int, default=None, help="Tick to render (default: last)")
    p.add_argument("--base-dir", type=Path, default=None)


def _handle_animate(args: argparse.Namespace) -> None:
    render_run_animation(
        out_dir=args.out_dir,
        run_json_path=args.run_json,
        output_path=args.output,
        fps=args.fps,
        frame_stride=args.frame_stride,
        base_dir=args.base_dir,
    )


def _handle_snapshot(args: argparse.Namespace) -> None:
    render_territory_snapshot(
        out_dir=args.out_dir,
        run_json_path=args.run_json,
        output_path=args.output,
        tick=args.tick,
        base_dir=args.base_dir,
    )


def main(argv: list[str] | None = None) -> None:
    matplotlib.use("Agg")
    parser = argparse.ArgumentParser(description="Render persisted territory runs")
    sub = parser.add_subparsers(dest="command", required=True)
    _build_animate_parser(sub)
    _build_snapshot_parser(sub)
    args = parser.parse_args(argv)

    handlers = {"animate": _handle_animate, "snapshot": _handle_snapshot}
    handlers[args.command](args)


if __name__ == "__main__":
    main()
