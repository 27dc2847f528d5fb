"""Matplotlib-based replay of persisted territory runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq
from matplotlib import animation
from matplotlib.patches import Patch

from pong_wars.domain.grid import Grid, Territory
from pong_wars.io.paths import (
    ball_log_path,
    claim_log_path,
    resolve_within_base,
    territory_log_path,
)

GRID_LINE_COLOR = "#333333"


@dataclass(frozen=True)
class RunReplay:
    """Everything needed to reconstruct every tick of one persisted run."""

    run_id: str
    dimension: int
    color_a: tuple[int, int, int]
    color_b: tuple[int, int, int]
    ticks: list[int]
    balls_by_tick: dict[int, list[tuple[int, int, int]]]  # tick -> [(ball, x, y)]
    claims_by_tick: dict[int, list[tuple[int, int, int]]]  # tick -> [(x, y, label)]
    counts_by_tick: dict[int, tuple[int, int]]  # tick -> (count_a, count_b)


def load_run(out_dir: Path, run_json_path: Path) -> RunReplay:
    """Read run metadata and the three Parquet logs for one run_id."""
    payload = json.loads(Path(run_json_path).read_text())
    run_id = payload.get("run_id")
    if not isinstance(run_id, str) or not run_id:
        raise ValueError("Run JSON must include non-empty string field 'run_id'")
    raw_metadata = payload.get("metadata")
    metadata = raw_metadata if isinstance(raw_metadata, dict) else {}
    dimension = metadata.get("dimension")
    if not isinstance(dimension, int) or dimension < 1:
        raise ValueError("Run JSON metadata must include a positive 'dimension'")
    palette = metadata.get("palette") or {}

    if not ball_log_path(out_dir, run_id).exists():
        raise ValueError(f"No ball rows found for run_id={run_id}")
    row_filter = [("run_id", "=", run_id)]

    def _rows(path: Path) -> list[dict[str, Any]]:
        return pq.read_table(path, filters=row_filter).to_pylist()

    ball_rows = _rows(ball_log_path(out_dir, run_id))
    claim_rows = _rows(claim_log_path(out_dir, run_id))
    count_rows = _rows(territory_log_path(out_dir, run_id))
    if not ball_rows:
        raise ValueError(f"No ball rows found for run_id={run_id}")

    balls_by_tick: dict[int, list[tuple[int, int, int]]] = {}
    for row in ball_rows:
        balls_by_tick.setdefault(int(row["tick"]), []).append(
            (int(row["ball"]), int(row["x"]), int(row["y"]))
        )
    claims_by_tick: dict[int, list[tuple[int, int, int]]] = {}
    for row in claim_rows:
        claims_by_tick.setdefault(int(row["tick"]), []).append(
            (int(row["x"]), int(row["y"]), int(row["label"]))
        )
    counts_by_tick = {
        int(row["tick"]): (int(row["count_a"]), int(row["count_b"])) for row in count_rows
    }
    ticks = sorted(balls_by_tick)
    missing = [tick for tick in ticks if tick not in counts_by_tick]
    if missing:
        raise ValueError(f"Missing territory counts for ticks {missing[:5]} for run_id={run_id}")

    return RunReplay(
        run_id=run_id,
        dimension=dimension,
        color_a=tuple(palette.get("color_a", (255, 50, 50))),  # type: ignore[arg-type]
        color_b=tuple(palette.get("color_b", (30, 255, 30))),  # type: ignore[arg-type]
        ticks=ticks,
        balls_by_tick=balls_by_tick,
        claims_by_tick=claims_by_tick,
        counts_by_tick=counts_by_tick,
    )


def replay_labels(replay: RunReplay) -> dict[int, np.ndarray]:
    """Return the ``[y, x]`` label array after every tick, starting at tick 0."""
    labels = Grid.create(replay.dimension).to_array()
    frames: dict[int, np.ndarray] = {}
    for tick in replay.ticks:
        for x, y, label in replay.claims_by_tick.get(tick, []):
            labels[y, x] = label
        frames[tick] = labels.copy()
    return frames


def colorize(
    labels: np.ndarray, balls: list[tuple[int, int, int]], replay: RunReplay
) -> np.ndarray:
    """Map labels to territory colors and draw each ball in its opponent's color."""
    rgb = np.empty((*labels.shape, 3), dtype=np.uint8)
    rgb[labels == Territory.A.value] = replay.color_a
    rgb[labels == Territory.B.value] = replay.color_b
    for ball, x, y in balls:
        rgb[y, x] = replay.color_b if ball == 0 else replay.color_a
    return rgb


def _resolve_paths(paths: list[Path], base_dir: Path | None) -> list[Path]:
    if base_dir is None:
        return [Path(p).resolve() for p in paths]
    base = Path(base_dir).resolve()
    return [resolve_within_base(Path(p), base) for p in paths]


def _legend_handles(replay: RunReplay) -> list[Patch]:
    return [
        Patch(facecolor=np.array(replay.color_a) / 255, edgecolor="gray", label="Territory A"),
        Patch(facecolor=np.array(replay.color_b) / 255, edgecolor="gray", label="Territory B"),
    ]


def render_run_animation(
    out_dir: Path,
    run_json_path: Path,
    output_path: Path,
    fps: int = 20,
    frame_stride: int = 1,
    base_dir: Path | None = None,
) -> None:
    """Render the territory evolution and the per-tick cell counts as an animation."""
    if fps < 1:
        raise ValueError("fps must be >= 1")
    if frame_stride < 1:
        raise ValueError("frame_stride must be >= 1")
    out_dir, run_json_path, output_path = _resolve_paths(
        [out_dir, run_json_path, output_path], base_dir
    )
    replay = load_run(out_dir, run_json_path)
    label_frames = replay_labels(replay)
    ticks = replay.ticks[::frame_stride]
    if ticks[-1] != replay.ticks[-1]:
        ticks.append(replay.ticks[-1])

    fig, (ax_grid, ax_counts) = plt.subplots(1, 2, figsize=(10, 5))
    first = colorize(label_frames[ticks[0]], replay.balls_by_tick[ticks[0]], replay)
    img = ax_grid.imshow(first, origin="upper", aspect="equal", interpolation="nearest")
    ax_grid.set_xticks([])
    ax_grid.set_yticks([])
    ax_grid.set_title("Territory")
    ax_grid.legend(handles=_legend_handles(replay), loc="upper right", fontsize=7)

    counts_a = [replay.counts_by_tick[t][0] for t in replay.ticks]
    counts_b = [replay.counts_by_tick[t][1] for t in replay.ticks]
    total = replay.dimension * replay.dimension
    ax_counts.set_xlim(0, max(1, replay.ticks[-1]))
    ax_counts.set_ylim(0, total)
    ax_counts.set_xlabel("Tick")
    ax_counts.set_ylabel("Cells")
    ax_counts.set_title("Territory size")
    (line_a,) = ax_counts.plot([], [], color=np.array(replay.color_a) / 255, label="A")
    (line_b,) = ax_counts.plot([], [], color=np.array(replay.color_b) / 255, label="B")
    ax_counts.legend(loc="upper right")
    fig.tight_layout()

    def update(frame_index: int) -> tuple[Any, ...]:
        tick = ticks[frame_index]
        img.set_data(colorize(label_frames[tick], replay.balls_by_tick[tick], replay))
        ax_grid.set_title(f"Territory (tick={tick})")
        upto = replay.ticks.index(tick) + 1
        line_a.set_data(replay.ticks[:upto], counts_a[:upto])
        line_b.set_data(replay.ticks[:upto], counts_b[:upto])
        return (img, line_a, line_b)

    anim = animation.FuncAnimation(
        fig, update, frames=len(ticks), interval=max(1, int(1000 / fps)), blit=False
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    writer: animation.PillowWriter | animation.FFMpegWriter
    if output_path.suffix.lower() == ".gif":
        writer = animation.PillowWriter(fps=fps)
    else:
        writer = animation.FFMpegWriter(fps=fps)
    anim.save(output_path, writer=writer)
    plt.close(fig)


def render_territory_snapshot(
    out_dir: Path,
    run_json_path: Path,
    output_path: Path,
    tick: int | None = None,
    base_dir: Path | None = None,
) -> None:
    """Save one tick (default: the last) as a static image with grid lines."""
    out_dir, run_json_path, output_path = _resolve_paths(
        [out_dir, run_json_path, output_path], base_dir
    )
    replay = load_run(out_dir, run_json_path)
    selected = replay.ticks[-1] if tick is None else tick
    if selected not in replay.balls_by_tick:
        raise ValueError(f"Tick {selected} not recorded for run_id={replay.run_id}")
    labels = replay_labels(replay)[selected]

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.imshow(
        colorize(labels, replay.balls_by_tick[selected], replay),
        origin="upper",
        aspect="equal",
        interpolation="nearest",
    )
    for k in range(replay.dimension + 1):
        ax.axvline(k - 0.5, color=GRID_LINE_COLOR, linewidth=0.3)
        ax.axhline(k - 0.5, color=GRID_LINE_COLOR, linewidth=0.3)
    ax.set_xticks([])
    ax.set_yticks([])
    count_a, count_b = replay.counts_by_tick[selected]
    ax.set_title(f"{replay.run_id} tick={selected} A={count_a} B={count_b}")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=100, bbox_inches="tight")
    plt.close(fig)
