"""Tick driver and batch runner for the two-ball territory simulation."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path

from pong_wars.config.constants import NUM_BALLS, PRIMARY_BALL
from pong_wars.config.types import RunConfig, SimulationConfig
from pong_wars.domain.ball import Ball, Position, Velocity, spawn_ball
from pong_wars.domain.collision import (
    CellClaim,
    CollisionFlags,
    can_occupy,
    resolve_collision,
)
from pong_wars.domain.grid import Grid, Territory
from pong_wars.domain.oscillation import OscillationGuard
from pong_wars.io.paths import (
    ball_log_path,
    claim_log_path,
    run_metadata_path,
    territory_log_path,
)
from pong_wars.io.schemas import (
    BALL_LOG_SCHEMA,
    CLAIM_LOG_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
    TERRITORY_LOG_SCHEMA,
)
from pong_wars.render.sinks import RenderDelta, RenderSink
from pong_wars.simulation.persistence import ParquetLog
from pong_wars.simulation.random_source import RandomSource, SeededRandom

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BallUpdate:
    """What happened to one ball on one tick."""

    index: int
    old_position: Position
    old_velocity: Velocity
    position: Position
    velocity: Velocity
    flags: CollisionFlags
    claims: tuple[CellClaim, ...]
    perturbed: bool = False
    held: bool = False


@dataclass(frozen=True)
class TickReport:
    """Ball updates and ordered render deltas of one tick."""

    tick: int
    updates: tuple[BallUpdate, ...]
    deltas: tuple[RenderDelta, ...]


class Simulation:
    """Owns the grid, both balls and the primary ball's oscillation guard.

    Each tick resolves ball 0 (through the guard) and then ball 1, and hands
    the resulting render deltas to the sink in order. Sink failures are
    logged and never interrupt the simulation.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: RandomSource | None = None,
        sink: RenderSink | None = None,
        grid: Grid | None = None,
        balls: tuple[Ball, Ball] | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.rng = rng if rng is not None else SeededRandom()
        self.sink = sink
        self.grid = grid if grid is not None else Grid.create(self.config.dimension)
        if self.grid.dimension != self.config.dimension:
            raise ValueError("grid dimension conflicts with config.dimension")
        if balls is None:
            balls = (
                spawn_ball(0, self.config.dimension, self.rng),
                spawn_ball(1, self.config.dimension, self.rng),
            )
        if [ball.index for ball in balls] != list(range(NUM_BALLS)):
            raise ValueError("balls must be ordered by index (0, 1)")
        for ball in balls:
            if not can_occupy(self.grid, ball.position, ball.obstacle):
                raise ValueError(f"ball {ball.index} starts outside its territory")
        self.balls = balls
        self.guard = OscillationGuard(capacity=self.config.history_capacity)
        self.tick_count = 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _emit(self, deltas: list[RenderDelta]) -> None:
        if self.sink is None:
            return
        for delta in deltas:
            try:
                self.sink.set_cell(delta.x, delta.y, delta.color)
            except Exception:
                logger.warning(
                    "Render sink failed for cell (%d, %d) on tick %d",
                    delta.x,
                    delta.y,
                    self.tick_count,
                    exc_info=True,
                )

    def paint(self) -> list[RenderDelta]:
        """Emit the whole territory row by row, then both balls."""
        palette = self.config.palette
        deltas = [
            RenderDelta(x, y, palette.territory_color(self.grid.get(x, y)))
            for y in range(self.grid.dimension)
            for x in range(self.grid.dimension)
        ]
        for ball in self.balls:
            deltas.append(
                RenderDelta(ball.position.x, ball.position.y, palette.ball_color(ball.index))
            )
        self._emit(deltas)
        return deltas

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _advance_ball(self, ball: Ball, deltas: list[RenderDelta]) -> BallUpdate:
        palette = self.config.palette
        empty = palette.empty_color(ball.index)
        old_position = ball.position
        old_velocity = ball.velocity

        outcome = resolve_collision(self.grid, ball)
        for claim in outcome.claims:
            deltas.append(RenderDelta(claim.x, claim.y, empty))

        velocity = outcome.velocity
        perturbed = False
        if ball.index == PRIMARY_BALL:
            velocity, perturbed = self.guard.apply(
                old_position, old_velocity, outcome.flags, velocity, self.rng
            )
            if perturbed:
                logger.debug(
                    "Tick %d: cycle at %s, velocity %s -> %s",
                    self.tick_count,
                    old_position,
                    outcome.velocity,
                    velocity,
                )

        # A blocked or out-of-range target keeps the ball in place for this tick.
        target = old_position + velocity
        held = not can_occupy(self.grid, target, ball.obstacle)
        ball.velocity = velocity
        fill = palette.ball_color(ball.index)
        if held:
            # No empty delta: old and new cell coincide and it would erase the ball.
            deltas.append(RenderDelta(old_position.x, old_position.y, fill))
        else:
            ball.position = target
            deltas.append(RenderDelta(target.x, target.y, fill))
            deltas.append(RenderDelta(old_position.x, old_position.y, empty))

        return BallUpdate(
            index=ball.index,
            old_position=old_position,
            old_velocity=old_velocity,
            position=ball.position,
            velocity=ball.velocity,
            flags=outcome.flags,
            claims=outcome.claims,
            perturbed=perturbed,
            held=held,
        )

    def tick(self) -> TickReport:
        """Advance both balls once and render the resulting deltas."""
        self.tick_count += 1
        deltas: list[RenderDelta] = []
        updates = tuple(self._advance_ball(ball, deltas) for ball in self.balls)
        self._emit(deltas)
        return TickReport(tick=self.tick_count, updates=updates, deltas=tuple(deltas))

    def run(self, ticks: int) -> list[TickReport]:
        if ticks < 0:
            raise ValueError("ticks must be >= 0")
        return [self.tick() for _ in range(ticks)]


# ---------------------------------------------------------------------------
# Batch runner
# ---------------------------------------------------------------------------


@dataclass
class RunSummary:
    """Top-level result of one persisted run."""

    run_id: str
    ticks: int
    count_a: int
    count_b: int
    claims: list[int] = field(default_factory=lambda: [0] * NUM_BALLS)
    perturbations: int = 0
    held_moves: int = 0


def deterministic_run_id(seed: int, dimension: int) -> str:
    """Build a run ID stable across runs for identical seeds and sizes."""
    return f"n{dimension}_s{seed}"


class _RunLogs:
    """The three Parquet streams written by one run."""

    def __init__(self, out_dir: Path, run_id: str) -> None:
        self.run_id = run_id
        self.balls = ParquetLog(ball_log_path(out_dir, run_id), BALL_LOG_SCHEMA)
        self.claims = ParquetLog(claim_log_path(out_dir, run_id), CLAIM_LOG_SCHEMA)
        self.territory = ParquetLog(
            territory_log_path(out_dir, run_id), TERRITORY_LOG_SCHEMA
        )

    def record_ball(
        self,
        tick: int,
        ball: Ball,
        flags: CollisionFlags | None = None,
        perturbed: bool = False,
        held: bool = False,
    ) -> None:
        flags = flags or CollisionFlags()
        self.balls.append(
            {
                "run_id": self.run_id,
                "tick": tick,
                "ball": ball.index,
                "x": ball.position.x,
                "y": ball.position.y,
                "dx": ball.velocity.dx,
                "dy": ball.velocity.dy,
                "x_collision": flags.x,
                "y_collision": flags.y,
                "corner_collision": flags.corner,
                "perturbed": perturbed,
                "held": held,
            }
        )

    def record_claims(self, tick: int, update: BallUpdate) -> None:
        for claim in update.claims:
            self.claims.append(
                {
                    "run_id": self.run_id,
                    "tick": tick,
                    "ball": update.index,
                    "x": claim.x,
                    "y": claim.y,
                    "label": int(claim.label),
                }
            )

    def record_territory(self, tick: int, grid: Grid) -> None:
        self.territory.append(
            {
                "run_id": self.run_id,
                "tick": tick,
                "count_a": grid.count(Territory.A),
                "count_b": grid.count(Territory.B),
            }
        )

    def close(self) -> None:
        for log in (self.balls, self.claims, self.territory):
            log.close()


def _balls_payload(balls: tuple[Ball, ...]) -> list[dict[str, int]]:
    return [
        {
            "index": ball.index,
            "x": ball.position.x,
            "y": ball.position.y,
            "dx": ball.velocity.dx,
            "dy": ball.velocity.dy,
        }
        for ball in balls
    ]


def run_simulation(
    config: RunConfig | None = None,
    sink: RenderSink | None = None,
    rng: RandomSource | None = None,
    pace: Callable[[float], None] | None = None,
) -> RunSummary:
    """Run one seeded simulation and persist JSON metadata and Parquet logs.

    Tick 0 rows in the ball and territory logs describe the initial state.
    When *pace* is given (e.g. ``time.sleep``) it is called with
    ``config.frame_delay_s`` after every tick.
    """
    run_config = config or RunConfig()
    sim_config = run_config.simulation
    rng = rng if rng is not None else SeededRandom(run_config.seed)
    run_id = deterministic_run_id(run_config.seed, sim_config.dimension)
    out_dir = Path(run_config.out_dir)

    sim = Simulation(config=sim_config, rng=rng, sink=sink)
    initial_balls = _balls_payload(sim.balls)
    sim.paint()

    logs = _RunLogs(out_dir, run_id) if run_config.write_logs else None
    summary = RunSummary(
        run_id=run_id,
        ticks=0,
        count_a=sim.grid.count(Territory.A),
        count_b=sim.grid.count(Territory.B),
    )

    try:
        if logs is not None:
            for ball in sim.balls:
                logs.record_ball(0, ball)
            logs.record_territory(0, sim.grid)
        for _ in range(run_config.ticks):
            report = sim.tick()
            for update, ball in zip(report.updates, sim.balls, strict=True):
                summary.claims[update.index] += len(update.claims)
                summary.held_moves += int(update.held)
                if logs is not None:
                    logs.record_ball(report.tick, ball, update.flags, update.perturbed, update.held)
                    logs.record_claims(report.tick, update)
            if logs is not None:
                logs.record_territory(report.tick, sim.grid)
            if pace is not None and run_config.frame_delay_s > 0:
                pace(run_config.frame_delay_s)
    finally:
        if logs is not None:
            logs.close()

    summary.ticks = sim.tick_count
    summary.count_a = sim.grid.count(Territory.A)
    summary.count_b = sim.grid.count(Territory.B)
    summary.perturbations = sim.guard.perturbations
    logger.info(
        "Run %s finished after %d ticks: A=%d B=%d, %d perturbations",
        run_id,
        summary.ticks,
        summary.count_a,
        summary.count_b,
        summary.perturbations,
    )

    if run_config.write_logs:
        payload = {
            "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
            "run_id": run_id,
            "metadata": {
                "dimension": sim_config.dimension,
                "history_capacity": sim_config.history_capacity,
                "seed": run_config.seed,
                "ticks": run_config.ticks,
                "palette": {
                    "color_a": list(sim_config.palette.color_a.as_tuple()),
                    "color_b": list(sim_config.palette.color_b.as_tuple()),
                },
            },
            "initial_balls": initial_balls,
            "summary": asdict(summary),
        }
        metadata_path = run_metadata_path(out_dir, run_id)
        metadata_path.parent.mkdir(parents=True, exist_ok=True)
        metadata_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2))

    return summary
