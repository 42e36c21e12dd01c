"""
Per-pipe collision, scoring and movement for one tick.

process_pipe() evaluates a single pipe against the bird;
aggregate_pipe_results() folds the per-pipe results into tick totals.
"""

from dataclasses import dataclass, replace
from typing import Iterable

from .constants import BIRD_WIDTH, PIPE_SPEED, PIPE_WIDTH
from .rng import random_velocity
from .state import Pipe


@dataclass(frozen=True)
class PipeEvaluationResult:
    """
    Result of processing a single pipe against the bird state.

    Fields:
        pipe: Pipe after this tick (flags updated, moved left)
        hit_pipe: A collision fired on this tick
        score_increase: 1 if the pipe was passed on this tick, else 0
        velocity_adjustment: Knockback applied to the bird
    """
    pipe: Pipe
    hit_pipe: bool
    score_increase: int
    velocity_adjustment: float


@dataclass(frozen=True)
class PipeTotals:
    hit_pipe: bool = False
    total_score_increase: int = 0
    pipe_velocity_adjustment: float = 0.0


def process_pipe(
    pipe: Pipe,
    bird_x: float,
    bird_velocity: float,
    bird_position: float,
) -> PipeEvaluationResult:
    """
    Process one pipe for one tick.

    Collision and pass are one-shot: a pipe collides at most once and scores
    at most once. A pipe that collides on this tick never scores on it. An
    inert pipe (malformed schedule record) never collides and never scores.

    Args:
        pipe: Pipe to process
        bird_x: Bird horizontal position
        bird_velocity: Bird velocity after gravity
        bird_position: Bird vertical position after gravity

    Returns:
        PipeEvaluationResult
    """
    x = pipe.horizontal_position

    in_x_range = bird_x + BIRD_WIDTH / 2 > x and bird_x - BIRD_WIDTH / 2 < x + PIPE_WIDTH
    in_y_gap = pipe.gap_y - pipe.gap_height / 2 < bird_position < pipe.gap_y + pipe.gap_height / 2

    # NaN fields from a malformed schedule row: the pipe only drifts left
    inert = pipe.inert

    has_collision = not inert and not pipe.collided and in_x_range and not in_y_gap
    new_collided = pipe.collided or has_collision

    hit_top = has_collision and bird_position < pipe.gap_y
    hit_bottom = has_collision and bird_position >= pipe.gap_y
    velocity_adjustment = random_velocity(bird_velocity, hit_top, hit_bottom, has_collision)

    # No points for a pipe that was struck
    has_passed = not inert and not pipe.passed and not new_collided and x + PIPE_WIDTH < bird_x

    return PipeEvaluationResult(
        pipe=replace(
            pipe,
            collided=new_collided,
            passed=pipe.passed or has_passed,
            horizontal_position=x - PIPE_SPEED,
        ),
        hit_pipe=has_collision,
        score_increase=1 if has_passed else 0,
        velocity_adjustment=velocity_adjustment,
    )


def aggregate_pipe_results(results: Iterable[PipeEvaluationResult]) -> PipeTotals:
    """
    Fold per-pipe results into tick totals.

    Returns:
        PipeTotals: any hit, summed score increase, summed velocity adjustment.
        An empty input yields (False, 0, 0.0).
    """
    hit_pipe = False
    total_score = 0
    total_velocity = 0.0
    for result in results:
        hit_pipe = hit_pipe or result.hit_pipe
        total_score += result.score_increase
        total_velocity += result.velocity_adjustment
    return PipeTotals(
        hit_pipe=hit_pipe,
        total_score_increase=total_score,
        pipe_velocity_adjustment=total_velocity,
    )
