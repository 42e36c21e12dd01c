"""
State model for the game.

Every entity is immutable. A "mutation" is a dataclasses.replace() that
returns a new value; the previous snapshot is never touched.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from .constants import CANVAS_HEIGHT, STARTING_LIVES


@dataclass(frozen=True)
class Bird:
    """
    Bird kinematics.

    Fields:
        vertical_position: y coordinate (grows downward)
        vertical_velocity: y velocity per tick (positive = falling)

    Horizontal position is the constant BIRD_X and is not stored.
    """
    vertical_position: float
    vertical_velocity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertical_position": self.vertical_position,
            "vertical_velocity": self.vertical_velocity,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Bird":
        return Bird(
            vertical_position=float(data["vertical_position"]),
            vertical_velocity=float(data["vertical_velocity"]),
        )


@dataclass(frozen=True)
class Pipe:
    """
    A pipe pair with a gap.

    Fields:
        horizontal_position: left edge x coordinate
        gap_y: gap center y coordinate
        gap_height: full gap height
        time: spawn offset from session start (ms)
        collided: one-shot flag, the bird struck this pipe
        passed: one-shot flag, the bird cleared this pipe
    """
    horizontal_position: float
    gap_y: float
    gap_height: float
    time: float
    collided: bool = False
    passed: bool = False

    @property
    def inert(self) -> bool:
        """True for pipes parsed from a malformed schedule record (NaN fields)."""
        return math.isnan(self.gap_y) or math.isnan(self.gap_height) or math.isnan(self.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "horizontal_position": self.horizontal_position,
            "gap_y": self.gap_y,
            "gap_height": self.gap_height,
            "time": self.time,
            "collided": self.collided,
            "passed": self.passed,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Pipe":
        return Pipe(
            horizontal_position=float(data["horizontal_position"]),
            gap_y=float(data["gap_y"]),
            gap_height=float(data["gap_height"]),
            time=float(data["time"]),
            collided=bool(data.get("collided", False)),
            passed=bool(data.get("passed", False)),
        )


INITIAL_BIRD = Bird(vertical_position=CANVAS_HEIGHT / 2, vertical_velocity=0.0)


@dataclass(frozen=True)
class GameState:
    """
    Full game state at one point of the fold.

    Invariants:
        score never decreases, lives never increase
        game_end is absorbing: once True the state no longer changes
        game_started flips to True on the first spawn and stays True
    """
    bird: Bird = INITIAL_BIRD
    pipes: Tuple[Pipe, ...] = field(default_factory=tuple)
    score: int = 0
    lives: int = STARTING_LIVES
    game_end: bool = False
    game_time: float = 0
    game_started: bool = False

    @staticmethod
    def initial() -> "GameState":
        return GameState()

    def with_pipe(self, pipe: Pipe) -> "GameState":
        return replace(self, pipes=self.pipes + (pipe,), game_started=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bird": self.bird.to_dict(),
            "pipes": [p.to_dict() for p in self.pipes],
            "score": self.score,
            "lives": self.lives,
            "game_end": self.game_end,
            "game_time": self.game_time,
            "game_started": self.game_started,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "GameState":
        data = data or {}
        bird = data.get("bird")
        return GameState(
            bird=Bird.from_dict(bird) if bird else INITIAL_BIRD,
            pipes=tuple(Pipe.from_dict(p) for p in data.get("pipes", [])),
            score=int(data.get("score", 0)),
            lives=int(data.get("lives", STARTING_LIVES)),
            game_end=bool(data.get("game_end", False)),
            game_time=data.get("game_time", 0),
            game_started=bool(data.get("game_started", False)),
        )
