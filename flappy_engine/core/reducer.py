"""
Reducer: pure state transition functions.

tick(), jump() and spawn_pipe() are the only ways a GameState changes. They
must be:
- Pure (no side effects, no I/O)
- Deterministic (same input -> same output)
- Total (never raise on numeric input)

Reducer maps event types onto these transforms so the composer and the log
replay runner apply events the same way.
"""

from dataclasses import replace
from typing import Callable, Dict

from .constants import BIRD_X, CANVAS_HEIGHT, GRAVITY, PIPE_WIDTH, STRENGTH, TICK_RATE_MS
from .errors import InvalidTransitionError
from .events import JUMP, PIPE_SPAWNED, TICK, Event
from .pipes import aggregate_pipe_results, process_pipe
from .rng import random_velocity
from .state import Bird, GameState, Pipe

# Handler signature: (current_state, event) -> new_state
Handler = Callable[[GameState, Event], GameState]


def tick(s: GameState) -> GameState:
    """
    Advance the game by one time step.

    1. Apply gravity to the bird's velocity and position.
    2. Move pipes and drop the ones that left the screen.
    3. Detect pipe and boundary collisions.
    4. Award points for passed pipes.
    5. Update lives and decide whether the game has ended.

    Returns the state unchanged once the game has ended.
    """
    if s.game_end:
        return s

    new_velocity = s.bird.vertical_velocity + GRAVITY
    new_position = s.bird.vertical_position + new_velocity

    pipe_results = [process_pipe(p, BIRD_X, new_velocity, new_position) for p in s.pipes]
    new_pipes = tuple(
        r.pipe for r in pipe_results if r.pipe.horizontal_position + PIPE_WIDTH > 0
    )
    totals = aggregate_pipe_results(pipe_results)

    hit_top = new_position <= 0
    hit_bottom = new_position >= CANVAS_HEIGHT
    hit_boundary = hit_top or hit_bottom
    boundary_velocity_adjustment = random_velocity(new_velocity, hit_top, hit_bottom, hit_boundary)

    # One life per tick, however many things were hit
    lose_life = hit_boundary or totals.hit_pipe
    new_lives = s.lives - 1 if lose_life else s.lives

    # Running out of pipes after the first spawn completes the game
    game_end = new_lives <= 0 or (s.game_started and not new_pipes)

    final_velocity = (
        new_velocity + totals.pipe_velocity_adjustment + boundary_velocity_adjustment
    )
    final_position = s.bird.vertical_position + final_velocity

    return replace(
        s,
        bird=Bird(vertical_position=final_position, vertical_velocity=final_velocity),
        pipes=new_pipes,
        lives=new_lives,
        game_end=game_end,
        score=s.score + totals.total_score_increase,
        game_time=s.game_time + TICK_RATE_MS,
    )


def jump(s: GameState) -> GameState:
    """Set the bird's vertical velocity to the fixed upward jump strength."""
    return replace(s, bird=replace(s.bird, vertical_velocity=STRENGTH))


def spawn_pipe(s: GameState, pipe: Pipe) -> GameState:
    """Insert a scheduled pipe and mark the game as started."""
    return s.with_pipe(pipe)


def on_tick(cur: GameState, ev: Event) -> GameState:
    return tick(cur)


def on_jump(cur: GameState, ev: Event) -> GameState:
    return jump(cur)


def on_pipe_spawned(cur: GameState, ev: Event) -> GameState:
    return spawn_pipe(cur, Pipe.from_dict(ev.payload["pipe"]))


class Reducer:
    """
    Registry of event handlers for state transitions.

    Usage:
        reducer = Reducer()
        reducer.register("Tick", on_tick)
        new_state = reducer.apply(state, event)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, event_type: str, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_type: Event type string
            handler: Pure function (current_state, event) -> new_state
        """
        self._handlers[event_type] = handler

    def apply(self, state: GameState, event: Event) -> GameState:
        """
        Apply event to state using registered handler.

        Raises:
            InvalidTransitionError: If no handler registered for event type
        """
        if event.type not in self._handlers:
            raise InvalidTransitionError(f"No handler for event type: {event.type}")
        return self._handlers[event.type](state, event)


def register_handlers(reducer: Reducer) -> None:
    reducer.register(TICK, on_tick)
    reducer.register(PIPE_SPAWNED, on_pipe_spawned)
    reducer.register(JUMP, on_jump)


def default_reducer() -> Reducer:
    reducer = Reducer()
    register_handlers(reducer)
    return reducer
