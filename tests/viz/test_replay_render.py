"""Tests for pong_wars.viz.render: log replay and figure output."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from pong_wars.config.types import RunConfig, SimulationConfig  # noqa: E402
from pong_wars.domain.grid import Territory  # noqa: E402
from pong_wars.io.paths import run_metadata_path  # noqa: E402
from pong_wars.simulation.engine import Simulation, run_simulation  # noqa: E402
from pong_wars.simulation.random_source import SeededRandom  # noqa: E402
from pong_wars.viz.render import (  # noqa: E402
    colorize,
    load_run,
    render_run_animation,
    render_territory_snapshot,
    replay_labels,
)


def _persist_run(out_dir: Path, ticks: int = 12, seed: int = 4) -> Path:
    summary = run_simulation(
        RunConfig(
            simulation=SimulationConfig(dimension=8),
            ticks=ticks,
            seed=seed,
            out_dir=out_dir,
        )
    )
    return run_metadata_path(out_dir, summary.run_id)


class TestLoadRun:
    def test_reads_every_tick(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path)
        replay = load_run(tmp_path, run_json)
        assert replay.run_id == "n8_s4"
        assert replay.dimension == 8
        assert replay.ticks == list(range(13))
        assert all(len(replay.balls_by_tick[t]) == 2 for t in replay.ticks)
        assert replay.color_a == (255, 50, 50)

    def test_two_runs_in_one_directory_both_replay(self, tmp_path: Path) -> None:
        first_json = _persist_run(tmp_path, ticks=10, seed=1)
        second_json = _persist_run(tmp_path, ticks=20, seed=2)
        first = load_run(tmp_path, first_json)
        second = load_run(tmp_path, second_json)
        assert first.run_id == "n8_s1"
        assert first.ticks == list(range(11))
        assert second.run_id == "n8_s2"
        assert second.ticks == list(range(21))

    def test_missing_run_id(self, tmp_path: Path) -> None:
        _persist_run(tmp_path)
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"metadata": {"dimension": 8}}))
        with pytest.raises(ValueError, match="non-empty string field 'run_id'"):
            load_run(tmp_path, bad)

    def test_missing_dimension(self, tmp_path: Path) -> None:
        _persist_run(tmp_path)
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"run_id": "n8_s4", "metadata": {}}))
        with pytest.raises(ValueError, match="positive 'dimension'"):
            load_run(tmp_path, bad)

    def test_unknown_run(self, tmp_path: Path) -> None:
        _persist_run(tmp_path)
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"run_id": "n8_s99", "metadata": {"dimension": 8}}))
        with pytest.raises(ValueError, match="No ball rows found for run_id=n8_s99"):
            load_run(tmp_path, other)


class TestReplayLabels:
    def test_final_frame_matches_live_grid(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path, ticks=200, seed=6)
        frames = replay_labels(load_run(tmp_path, run_json))
        sim = Simulation(SimulationConfig(dimension=8), rng=SeededRandom(6))
        sim.run(200)
        np.testing.assert_array_equal(frames[200], sim.grid.to_array())

    def test_frame_counts_match_territory_log(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path, ticks=60)
        replay = load_run(tmp_path, run_json)
        for tick, labels in replay_labels(replay).items():
            count_a = int(np.count_nonzero(labels == Territory.A.value))
            assert (count_a, labels.size - count_a) == replay.counts_by_tick[tick]

    def test_colorize_draws_balls_in_opponent_color(self, tmp_path: Path) -> None:
        replay = load_run(tmp_path, _persist_run(tmp_path))
        labels = np.zeros((8, 8), dtype=np.uint8)
        rgb = colorize(labels, [(0, 1, 2), (1, 5, 6)], replay)
        assert tuple(rgb[0, 0]) == replay.color_a
        assert tuple(rgb[2, 1]) == replay.color_b
        assert tuple(rgb[6, 5]) == replay.color_a


class TestRendering:
    def test_animation_creates_gif(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path, ticks=6)
        output = tmp_path / "media" / "run.gif"
        render_run_animation(tmp_path, run_json, output, fps=4, frame_stride=4)
        assert output.exists()
        assert output.stat().st_size > 0

    def test_snapshot_creates_png(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path)
        output = tmp_path / "snap.png"
        render_territory_snapshot(tmp_path, run_json, output, tick=3)
        assert output.exists()

    def test_snapshot_unknown_tick(self, tmp_path: Path) -> None:
        run_json = _persist_run(tmp_path)
        with pytest.raises(ValueError, match="Tick 99 not recorded"):
            render_territory_snapshot(tmp_path, run_json, tmp_path / "x.png", tick=99)

    def test_rejects_paths_outside_base_dir(self, tmp_path: Path) -> None:
        base = tmp_path / "base"
        base.mkdir()
        run_json = _persist_run(base)
        with pytest.raises(ValueError, match="Path escapes base_dir"):
            render_territory_snapshot(
                base, run_json, tmp_path / "outside.png", base_dir=base
            )

    def test_invalid_fps(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="fps must be >= 1"):
            render_run_animation(tmp_path, tmp_path / "r.json", tmp_path / "o.gif", fps=0)
