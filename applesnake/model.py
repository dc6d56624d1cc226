"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Direction     — immutable (dx, dy) value object
    Snake         — ordered body (head first) plus committed/pending direction
    TickResult    — what a single tick did
    GameSnapshot  — immutable read view handed to the renderer
    GameModel     — top-level model; owns the snake, apple, score, speed, phase
"""

import logging
import random
from collections import deque
from typing import Callable, NamedTuple

from .config import (
    GRID_SIZE, INITIAL_SPEED, SPEED_INCREMENT, MIN_TICK_INTERVAL,
    INITIAL_SNAKE, INITIAL_APPLE, INITIAL_DIRECTION,
    PHASE_NOT_STARTED, PHASE_RUNNING, PHASE_OVER,
)

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction. y grows downwards."""
    UP    = None  # filled below after class definition
    DOWN  = None
    LEFT  = None
    RIGHT = None

    def __init__(self, name: str, x: int, y: int):
        self.name = name
        self.x = x
        self.y = y

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        return getattr(cls, name.upper())

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name}"


Direction.UP    = Direction("UP",     0, -1)
Direction.DOWN  = Direction("DOWN",   0,  1)
Direction.LEFT  = Direction("LEFT",  -1,  0)
Direction.RIGHT = Direction("RIGHT",  1,  0)
ALL_DIRS = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure body data for the snake.
    No rendering. No input handling. No board knowledge.
    """

    def __init__(self, body, start_dir: Direction):
        self.body: deque[Coordinate] = deque(tuple(seg) for seg in body)
        self.dir: Direction = start_dir
        self._next_dir: Direction = start_dir

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Coordinate:
        return self.body[0]

    @property
    def next_dir(self) -> Direction:
        return self._next_dir

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Record a direction change. Refused if it would reverse the snake."""
        if new_dir.is_opposite(self.dir):
            return False
        self._next_dir = new_dir
        return True

    def commit_direction(self) -> None:
        self.dir = self._next_dir

    def next_head(self) -> Coordinate:
        hx, hy = self.head
        return hx + self.dir.x, hy + self.dir.y

    def push_head(self, cell: Coordinate) -> None:
        self.body.appendleft(cell)

    def drop_tail(self) -> None:
        self.body.pop()

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, x: int, y: int) -> bool:
        return (x, y) in self.body


# ─────────────────────────── TickResult ──────────────────────────
class TickResult:
    IDLE          = "idle"           # not running, nothing changed
    MOVED         = "moved"
    ATE           = "ate"
    CRASHED_WALL  = "crashed_wall"
    CRASHED_SELF  = "crashed_self"

    CRASHES = (CRASHED_WALL, CRASHED_SELF)


# ────────────────────────── GameSnapshot ─────────────────────────
class GameSnapshot(NamedTuple):
    snake: tuple[Coordinate, ...]
    apple: Coordinate | None
    direction: Direction
    score: int
    tick_interval_ms: int | None
    phase: str
    grid_size: int

    @property
    def head(self) -> Coordinate:
        return self.snake[0]


Listener = Callable[[GameSnapshot], None]
AppleListener = Callable[[int], None]


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model.  Owns all game state and is its only writer.

    The controller forwards direction requests through
    set_pending_direction() and calls tick() once per scheduler interval.
    Renderers read snapshot(); they never touch the live state.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        initial_snake=INITIAL_SNAKE,
        initial_apple: Coordinate = INITIAL_APPLE,
        initial_direction: Direction = Direction.from_name(INITIAL_DIRECTION),
        initial_speed: int = INITIAL_SPEED,
        speed_increment: int = SPEED_INCREMENT,
        min_interval: int = MIN_TICK_INTERVAL,
        rng: random.Random | None = None,
    ):
        self.grid_size = grid_size
        self._initial_snake = tuple(tuple(seg) for seg in initial_snake)
        self._initial_apple = tuple(initial_apple)
        self._initial_direction = initial_direction
        self.initial_speed = initial_speed
        self.speed_increment = speed_increment
        self.min_interval = min_interval
        self._rng = rng or random.Random()
        self._validate_initial_layout()

        self._listeners: list[Listener] = []
        self._apple_listeners: list[AppleListener] = []

        self._snake: Snake = None
        self._apple: Coordinate | None = None
        self._score: int = 0
        self._tick_interval_ms: int | None = None
        self._phase: str = PHASE_NOT_STARTED
        self._reset_entities()

    # ── Read-only state ──────────────────────────────────────────
    @property
    def snake(self) -> tuple[Coordinate, ...]:
        """Body cells, head first. A copy; the live body stays private."""
        return tuple(self._snake.body)

    @property
    def apple(self) -> Coordinate | None:
        return self._apple

    @property
    def score(self) -> int:
        return self._score

    @property
    def tick_interval_ms(self) -> int | None:
        return self._tick_interval_ms

    @property
    def phase(self) -> str:
        return self._phase

    @property
    def direction(self) -> Direction:
        return self._snake.dir

    @property
    def pending_direction(self) -> Direction:
        return self._snake.next_dir

    # ── Public API ───────────────────────────────────────────────
    def set_pending_direction(self, direction: Direction) -> None:
        """
        Ask the snake to turn on the next tick.

        Ignored once the game is over. A reversal of the committed
        direction is refused, but any directional input still starts a
        game that has not started yet.
        """
        if self._phase == PHASE_OVER:
            return

        accepted = self._snake.request_direction(direction)
        if not accepted:
            logger.debug("Rejected reversal %r while heading %r", direction, self._snake.dir)

        if self._phase == PHASE_NOT_STARTED:
            self._phase = PHASE_RUNNING
            self._tick_interval_ms = self.initial_speed
            logger.info("Game started heading %r", self._snake.next_dir)
            self._notify()

    def tick(self) -> str:
        """Advance one cell. Returns a TickResult value."""
        if self._phase != PHASE_RUNNING:
            return TickResult.IDLE

        self._snake.commit_direction()
        nx, ny = self._snake.next_head()

        if not (0 <= nx < self.grid_size and 0 <= ny < self.grid_size):
            return self._game_over(TickResult.CRASHED_WALL)

        # Checked against the pre-move body, tail included.
        if self._snake.occupies(nx, ny):
            return self._game_over(TickResult.CRASHED_SELF)

        self._snake.push_head((nx, ny))

        if (nx, ny) == self._apple:
            self._score += 1
            self._apple = self._spawn_apple()
            self._tick_interval_ms = max(
                self.min_interval, self._tick_interval_ms - self.speed_increment,
            )
            logger.debug("Apple eaten at %s, score=%d interval=%dms",
                         (nx, ny), self._score, self._tick_interval_ms)
            self._notify()
            self._notify_apple()
            return TickResult.ATE

        self._snake.drop_tail()
        self._notify()
        return TickResult.MOVED

    def reset(self) -> None:
        self._reset_entities()
        logger.info("Game reset")
        self._notify()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self._snake.body),
            apple=self._apple,
            direction=self._snake.dir,
            score=self._score,
            tick_interval_ms=self._tick_interval_ms,
            phase=self._phase,
            grid_size=self.grid_size,
        )

    # ── Observers ────────────────────────────────────────────────
    def subscribe(self, listener: Listener) -> None:
        """Call `listener(snapshot)` after every state change."""
        self._listeners.append(listener)

    def on_apple_eaten(self, listener: AppleListener) -> None:
        """Call `listener(score)` once per apple eaten."""
        self._apple_listeners.append(listener)

    # ── Private helpers ──────────────────────────────────────────
    def _validate_initial_layout(self) -> None:
        cells = self._initial_snake
        if not cells:
            raise ValueError("initial snake must have at least one segment")
        if len(set(cells)) != len(cells):
            raise ValueError("initial snake overlaps itself")
        for x, y in cells + (self._initial_apple,):
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                raise ValueError(f"cell {(x, y)} is outside a {self.grid_size}x{self.grid_size} board")
        if self._initial_apple in cells:
            raise ValueError("initial apple is on the snake")

    def _reset_entities(self) -> None:
        self._snake = Snake(self._initial_snake, self._initial_direction)
        self._apple = self._initial_apple
        self._score = 0
        self._tick_interval_ms = None
        self._phase = PHASE_NOT_STARTED

    def _spawn_apple(self) -> Coordinate | None:
        occupied = set(self._snake.body)
        if len(occupied) >= self.grid_size * self.grid_size:
            logger.warning("Board is full, no room for another apple")
            return None
        while True:
            pos = (self._rng.randrange(self.grid_size), self._rng.randrange(self.grid_size))
            if pos not in occupied:
                return pos

    def _game_over(self, cause: str) -> str:
        self._phase = PHASE_OVER
        self._tick_interval_ms = None
        logger.info("Game over (%s) with score %d", cause, self._score)
        self._notify()
        return cause

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def _notify_apple(self) -> None:
        for listener in list(self._apple_listeners):
            try:
                listener(self._score)
            except Exception:
                logger.exception("Apple listener %r failed", listener)
