"""Visualization layer: replay of persisted runs with matplotlib."""

from pong_wars.viz.render import (
    RunReplay,
    colorize,
    load_run,
    render_run_animation,
    render_territory_snapshot,
    replay_labels,
)

__all__ = [
    "RunReplay",
    "colorize",
    "load_run",
    "render_run_animation",
    "render_territory_snapshot",
    "replay_labels",
]
