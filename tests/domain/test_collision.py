"""Tests for pong_wars.domain.collision module."""

from __future__ import annotations

from random import Random

import numpy as np

from pong_wars.domain.ball import Ball, Position, Velocity
from pong_wars.domain.collision import (
    CellClaim,
    CollisionFlags,
    can_occupy,
    resolve_collision,
)
from pong_wars.domain.grid import Grid, Territory


def _all_a(dimension: int) -> Grid:
    return Grid.from_array(np.zeros((dimension, dimension), dtype=np.uint8))


class TestAxisCollisions:
    def test_free_diagonal_move_keeps_velocity(self) -> None:
        grid = Grid.create(4)
        ball = Ball(0, Position(0, 0), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(1, 1)
        assert outcome.flags == CollisionFlags()
        assert outcome.claims == ()

    def test_x_collision_claims_side_cell(self) -> None:
        grid = Grid.create(4)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(-1, 1)
        assert outcome.flags == CollisionFlags(x=True)
        assert outcome.claims == (CellClaim(2, 1, Territory.A),)
        assert grid.get(2, 1) == Territory.A
        assert grid.get(2, 2) == Territory.B

    def test_resolver_does_not_move_ball(self) -> None:
        grid = Grid.create(4)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        resolve_collision(grid, ball)
        assert ball.position == Position(1, 1)
        assert ball.velocity == Velocity(1, 1)

    def test_wall_collision_claims_nothing(self) -> None:
        grid = Grid.create(4)
        ball = Ball(0, Position(0, 1), Velocity(-1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(1, 1)
        assert outcome.flags == CollisionFlags(x=True)
        assert outcome.claims == ()
        assert grid.count(Territory.A) == 8

    def test_y_collision_claims_cell_below(self) -> None:
        grid = _all_a(4)
        grid.set(1, 2, Territory.B)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(1, -1)
        assert outcome.flags == CollisionFlags(y=True)
        assert outcome.claims == (CellClaim(1, 2, Territory.A),)

    def test_grid_corner_reflects_both_axes(self) -> None:
        grid = _all_a(4)
        ball = Ball(0, Position(3, 3), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(-1, -1)
        assert outcome.flags == CollisionFlags(x=True, y=True)
        assert outcome.claims == ()

    def test_ball_one_claims_for_b(self) -> None:
        grid = Grid.create(4)
        ball = Ball(1, Position(2, 1), Velocity(-1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(1, 1)
        assert outcome.claims == (CellClaim(1, 1, Territory.B),)
        assert grid.get(1, 1) == Territory.B

    def test_explicit_labels_override_ball_defaults(self) -> None:
        grid = Grid.create(4)
        ball = Ball(0, Position(2, 1), Velocity(-1, 1))
        outcome = resolve_collision(grid, ball, passable=Territory.B, obstacle=Territory.A)
        assert outcome.claims == (CellClaim(1, 1, Territory.B),)


class TestCornerRule:
    def test_diagonal_only_obstacle_reverses(self) -> None:
        grid = _all_a(4)
        grid.set(2, 2, Territory.B)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(-1, -1)
        assert outcome.flags == CollisionFlags(corner=True)
        assert outcome.claims == (CellClaim(2, 2, Territory.A),)
        assert grid.get(2, 2) == Territory.A

    def test_corner_skipped_after_axis_collision(self) -> None:
        grid = _all_a(4)
        grid.set(2, 1, Territory.B)
        grid.set(2, 2, Territory.B)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(-1, 1)
        assert outcome.flags == CollisionFlags(x=True)
        assert grid.get(2, 2) == Territory.B

    def test_both_axes_block_without_double_negation(self) -> None:
        grid = _all_a(4)
        for x, y in [(2, 1), (1, 2), (2, 2)]:
            grid.set(x, y, Territory.B)
        ball = Ball(0, Position(1, 1), Velocity(1, 1))
        outcome = resolve_collision(grid, ball)
        assert outcome.velocity == Velocity(-1, -1)
        assert outcome.flags == CollisionFlags(x=True, y=True)
        assert outcome.claims == (
            CellClaim(2, 1, Territory.A),
            CellClaim(1, 2, Territory.A),
        )
        assert grid.get(2, 2) == Territory.B


class TestResolverProperties:
    def test_flip_count_and_corner_exclusivity_on_random_grids(self) -> None:
        rng = Random(0)
        for _ in range(500):
            dimension = rng.randint(2, 6)
            cells = np.array(
                [[rng.randint(0, 1) for _ in range(dimension)] for _ in range(dimension)]
            )
            grid = Grid.from_array(cells)
            ball = Ball(
                rng.randint(0, 1),
                Position(rng.randrange(dimension), rng.randrange(dimension)),
                Velocity(rng.choice((-1, 1)), rng.choice((-1, 1))),
            )
            before = grid.count(Territory.A) + grid.count(Territory.B)
            outcome = resolve_collision(grid, ball)
            flipped = int(outcome.velocity.dx != ball.velocity.dx) + int(
                outcome.velocity.dy != ball.velocity.dy
            )
            assert flipped in (0, 1, 2)
            if outcome.flags.x or outcome.flags.y:
                assert not outcome.flags.corner
            assert outcome.flags.any == (flipped > 0)
            assert grid.count(Territory.A) + grid.count(Territory.B) == before
            for claim in outcome.claims:
                assert grid.get(claim.x, claim.y) == ball.passable


class TestCanOccupy:
    def test_rejects_out_of_bounds(self) -> None:
        grid = Grid.create(4)
        assert not can_occupy(grid, Position(-1, 0), Territory.B)
        assert not can_occupy(grid, Position(0, 4), Territory.B)

    def test_rejects_obstacle(self) -> None:
        grid = Grid.create(4)
        assert not can_occupy(grid, Position(2, 2), Territory.B)
        assert can_occupy(grid, Position(1, 2), Territory.B)
