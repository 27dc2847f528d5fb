"""CLI entrypoint for running and persisting one territory simulation.

Supports ``--config path/to/config.json`` for reproducibility. CLI arguments
override config-file values; config-file values override built-in defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import asdict
from pathlib import Path

from pong_wars.config.constants import GRID_DIMENSION, HISTORY_CAPACITY, NUM_TICKS
from pong_wars.config.types import Palette, RunConfig, SimulationConfig
from pong_wars.domain.color import Color
from pong_wars.simulation.engine import run_simulation

logger = logging.getLogger(__name__)


def _parse_color(raw: object, label: str) -> Color:
    """Parse ``R,G,B`` strings or 3-element lists into a Color."""
    if isinstance(raw, str):
        parts = [part.strip() for part in raw.split(",") if part.strip()]
    elif isinstance(raw, (list, tuple)):
        parts = list(raw)
    else:
        raise ValueError(f"{label} must be an R,G,B triple")
    if len(parts) != 3:
        raise ValueError(f"{label} must have exactly three components")
    try:
        r, g, b = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"{label} components must be integers") from exc
    return Color(r, g, b)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a two-ball territory simulation")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--dimension", type=int, default=None)
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--history-capacity", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--color-a", type=str, default=None, help="R,G,B of territory A")
    parser.add_argument("--color-b", type=str, default=None, help="R,G,B of territory B")
    parser.add_argument(
        "--frame-delay-ms",
        type=float,
        default=None,
        help="Sleep between ticks (0 disables pacing)",
    )
    parser.add_argument("--write-logs", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        file_cfg = json.loads(Path(args.config).read_text())

    def _get(cli_val: object, key: str, default: object) -> object:
        if cli_val is not None:
            return cli_val
        return file_cfg.get(key, default)

    default_palette = Palette()
    palette = Palette(
        color_a=_parse_color(
            _get(args.color_a, "color_a", list(default_palette.color_a.as_tuple())), "color-a"
        ),
        color_b=_parse_color(
            _get(args.color_b, "color_b", list(default_palette.color_b.as_tuple())), "color-b"
        ),
    )
    run_config = RunConfig(
        simulation=SimulationConfig(
            dimension=int(_get(args.dimension, "dimension", GRID_DIMENSION)),
            history_capacity=int(
                _get(args.history_capacity, "history_capacity", HISTORY_CAPACITY)
            ),
            palette=palette,
        ),
        ticks=int(_get(args.ticks, "ticks", NUM_TICKS)),
        seed=int(_get(args.seed, "seed", 0)),
        out_dir=Path(str(_get(args.out_dir, "out_dir", "data"))),
        frame_delay_s=float(_get(args.frame_delay_ms, "frame_delay_ms", 0.0)) / 1000.0,
        write_logs=bool(_get(args.write_logs, "write_logs", True)),
    )

    logger.info(
        "Running %d ticks on a %dx%d grid (seed=%d)",
        run_config.ticks,
        run_config.simulation.dimension,
        run_config.simulation.dimension,
        run_config.seed,
    )
    summary = run_simulation(run_config, pace=time.sleep)
    print(json.dumps(asdict(summary), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
