"""
Deterministic pseudo-random numbers.

Linear congruential step with no internal state. Knockback strength is
derived from SEED plus the bird's velocity, so the same trajectory always
bounces the same way and replays stay identical.
"""

from typing import Union

from .constants import COLLISION_VELOCITY_DOWN, COLLISION_VELOCITY_UP, KNOCKBACK_SPREAD, SEED

Number = Union[int, float]

M = 0x80000000  # 2^31
A = 1103515245
C = 12345


def hash_seed(seed: Number) -> Number:
    """
    One LCG step: (A * seed + C) mod M.

    Call repeatedly on the previous result to walk the sequence.
    """
    return (A * seed + C) % M


def scale(h: Number) -> float:
    """Map a hash in [0, M) linearly onto [-1, 1]."""
    return (2 * h) / (M - 1) - 1


def random_velocity(
    velocity: Number,
    hit_top: bool,
    hit_bottom: bool,
    has_collision: bool,
) -> float:
    """
    Velocity adjustment after a collision.

    - hit_top: positive adjustment in [5, 10] (knocked downward)
    - hit_bottom: negative adjustment in [-10, -5] (knocked upward)
    - no collision: 0

    Args:
        velocity: Bird velocity feeding the hash
        hit_top: Struck the upper segment (or the top edge)
        hit_bottom: Struck the lower segment (or the bottom edge)
        has_collision: Whether a collision actually happened
    """
    if not has_collision:
        return 0.0

    fraction = (scale(hash_seed(SEED + velocity)) + 1) / 2
    if hit_top:
        return COLLISION_VELOCITY_DOWN + fraction * KNOCKBACK_SPREAD
    if hit_bottom:
        return COLLISION_VELOCITY_UP - KNOCKBACK_SPREAD + fraction * KNOCKBACK_SPREAD
    return 0.0
