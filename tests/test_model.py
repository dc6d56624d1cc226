import random

import pytest

from applesnake.config import (
    INITIAL_SPEED, SPEED_INCREMENT, MIN_TICK_INTERVAL,
    PHASE_NOT_STARTED, PHASE_RUNNING, PHASE_OVER,
)
from applesnake.model import ALL_DIRS, Direction, GameModel, TickResult


class ScriptedRng:
    """Stands in for random.Random; hands out randrange() values in order."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        return self.values.pop(0)


def started(model: GameModel, direction: Direction = None) -> GameModel:
    model.set_pending_direction(direction or model.direction)
    return model


# ── Lifecycle ─────────────────────────────────────────────────────

def test_new_game_is_not_started_and_idle():
    model = GameModel()
    snap = model.snapshot()
    assert snap.phase == PHASE_NOT_STARTED
    assert snap.tick_interval_ms is None
    assert snap.snake == ((10, 10), (9, 10), (8, 10))
    assert snap.apple == (15, 10)
    assert snap.direction == Direction.RIGHT
    assert model.tick() == TickResult.IDLE
    assert model.snapshot() == snap


def test_first_direction_starts_the_game():
    model = GameModel()
    model.set_pending_direction(Direction.UP)
    assert model.phase == PHASE_RUNNING
    assert model.tick_interval_ms == INITIAL_SPEED
    model.tick()
    assert model.snapshot().head == (10, 9)


def test_reversal_as_first_input_starts_but_keeps_heading():
    model = GameModel()
    model.set_pending_direction(Direction.LEFT)
    assert model.phase == PHASE_RUNNING
    assert model.pending_direction == Direction.RIGHT
    model.tick()
    assert model.direction == Direction.RIGHT
    assert model.snapshot().head == (11, 10)


def test_eats_apple_after_five_ticks():
    model = started(GameModel(rng=random.Random(7)))
    for _ in range(4):
        assert model.tick() == TickResult.MOVED
        assert len(model.snake) == 3
    assert model.snapshot().snake[-1] == (12, 10)

    assert model.tick() == TickResult.ATE
    snap = model.snapshot()
    assert snap.head == (15, 10)
    assert snap.score == 1
    assert len(snap.snake) == 4
    assert snap.snake == ((15, 10), (14, 10), (13, 10), (12, 10))
    assert snap.apple not in snap.snake
    assert snap.tick_interval_ms == INITIAL_SPEED - SPEED_INCREMENT


def test_wall_collision_leaves_snake_untouched():
    model = started(GameModel(initial_snake=[(19, 5), (18, 5), (17, 5)], initial_apple=(0, 0)))
    before = model.snapshot().snake

    assert model.tick() == TickResult.CRASHED_WALL
    snap = model.snapshot()
    assert snap.phase == PHASE_OVER
    assert snap.snake == before
    assert snap.tick_interval_ms is None


@pytest.mark.parametrize("direction, body", [
    (Direction.UP, [(3, 0), (3, 1), (3, 2)]),
    (Direction.LEFT, [(0, 3), (1, 3), (2, 3)]),
    (Direction.DOWN, [(3, 19), (3, 18), (3, 17)]),
])
def test_every_edge_is_a_wall(direction, body):
    model = started(GameModel(initial_snake=body, initial_apple=(10, 10),
                              initial_direction=direction))
    assert model.tick() == TickResult.CRASHED_WALL


def test_tight_loop_hits_own_body():
    model = started(GameModel(initial_snake=[(5, 5), (4, 5), (3, 5), (2, 5)],
                              initial_apple=(15, 15)))
    for turn in (Direction.UP, Direction.LEFT):
        model.set_pending_direction(turn)
        assert model.tick() == TickResult.MOVED
    assert model.snapshot().snake == ((4, 4), (5, 4), (5, 5), (4, 5))

    model.set_pending_direction(Direction.DOWN)
    before = model.snapshot().snake
    # (4, 5) is the tail; it is checked before it moves away.
    assert model.tick() == TickResult.CRASHED_SELF
    assert model.phase == PHASE_OVER
    assert model.snapshot().snake == before


def test_single_segment_snake_moves_freely():
    model = started(GameModel(initial_snake=[(5, 5)], initial_apple=(0, 0)))
    for turn in (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT):
        model.set_pending_direction(turn)
        assert model.tick() == TickResult.MOVED
    assert model.snapshot().snake == ((5, 5),)


def test_single_segment_snake_still_refuses_reversal():
    model = started(GameModel(initial_snake=[(5, 5)], initial_apple=(0, 0)))
    model.set_pending_direction(Direction.LEFT)
    model.tick()
    assert model.direction == Direction.RIGHT


# ── Direction handling ────────────────────────────────────────────

def test_reversal_is_ignored():
    model = started(GameModel())
    model.tick()
    model.set_pending_direction(Direction.LEFT)
    model.tick()
    assert model.direction == Direction.RIGHT
    assert model.snapshot().head == (12, 10)


def test_last_request_between_ticks_wins():
    model = started(GameModel())
    model.set_pending_direction(Direction.UP)
    model.set_pending_direction(Direction.DOWN)
    model.tick()
    assert model.direction == Direction.DOWN
    assert model.snapshot().head == (10, 11)


def test_reversal_is_judged_against_committed_direction():
    model = started(GameModel())
    model.set_pending_direction(Direction.UP)
    # LEFT reverses the committed RIGHT, so UP stays pending.
    model.set_pending_direction(Direction.LEFT)
    model.tick()
    assert model.direction == Direction.UP


def test_input_after_game_over_is_ignored():
    model = started(GameModel(initial_snake=[(19, 0)], initial_apple=(0, 0)))
    model.tick()
    assert model.phase == PHASE_OVER
    model.set_pending_direction(Direction.DOWN)
    assert model.phase == PHASE_OVER
    assert model.pending_direction == Direction.RIGHT


# ── Game over & reset ─────────────────────────────────────────────

def test_tick_after_game_over_is_noop():
    model = started(GameModel(initial_snake=[(19, 0)], initial_apple=(0, 0)))
    model.tick()
    snap = model.snapshot()
    for _ in range(3):
        assert model.tick() == TickResult.IDLE
    assert model.snapshot() == snap


@pytest.mark.parametrize("ticks", [0, 2, 9])
def test_reset_restores_initial_state(ticks):
    model = started(GameModel(rng=random.Random(1)))
    for _ in range(ticks):
        model.tick()
    model.reset()
    assert model.snapshot() == GameModel().snapshot()
    assert model.pending_direction == Direction.RIGHT


def test_reset_from_game_over_allows_a_new_game():
    model = started(GameModel(initial_snake=[(19, 0)], initial_apple=(0, 0)))
    model.tick()
    model.reset()
    assert model.phase == PHASE_NOT_STARTED
    model.set_pending_direction(Direction.DOWN)
    assert model.tick() == TickResult.MOVED
    assert model.snapshot().head == (19, 1)


# ── Apples, score and speed ───────────────────────────────────────

def test_speed_is_floored_at_minimum_interval():
    rng = ScriptedRng([2, 0, 3, 0, 4, 0, 5, 0])
    model = started(GameModel(grid_size=10, initial_snake=[(0, 0)], initial_apple=(1, 0),
                              initial_speed=60, rng=rng))
    intervals = []
    for _ in range(4):
        assert model.tick() == TickResult.ATE
        intervals.append(model.tick_interval_ms)
    assert intervals == [55, 50, MIN_TICK_INTERVAL, MIN_TICK_INTERVAL]
    assert model.score == 4
    assert len(model.snake) == 5


def test_apple_respawn_skips_occupied_cells():
    # First sample lands on the body, second is free.
    rng = ScriptedRng([1, 0, 7, 7])
    model = started(GameModel(grid_size=10, initial_snake=[(1, 0), (0, 0)],
                              initial_apple=(2, 0), rng=rng))
    model.tick()
    assert model.apple == (7, 7)


def test_full_board_leaves_no_apple():
    model = started(GameModel(grid_size=2, initial_snake=[(1, 1), (1, 0), (0, 0)],
                              initial_apple=(0, 1), initial_direction=Direction.LEFT))
    assert model.tick() == TickResult.ATE
    assert model.apple is None
    assert len(model.snake) == 4
    assert model.tick() == TickResult.CRASHED_WALL


def test_interval_unchanged_on_plain_moves():
    model = started(GameModel())
    for _ in range(4):
        model.tick()
        assert model.tick_interval_ms == INITIAL_SPEED


def test_random_play_keeps_board_invariants():
    rng = random.Random(1234)
    model = GameModel(grid_size=8, initial_snake=[(4, 4), (3, 4)], initial_apple=(6, 4),
                      rng=random.Random(99))
    games = 0
    for _ in range(3000):
        if model.phase == PHASE_OVER:
            games += 1
            model.reset()
        model.set_pending_direction(rng.choice(ALL_DIRS))
        before = model.snapshot()
        result = model.tick()
        after = model.snapshot()

        for x, y in after.snake:
            assert 0 <= x < 8 and 0 <= y < 8
        assert len(set(after.snake)) == len(after.snake)
        if after.apple is not None:
            assert after.apple not in after.snake

        if result == TickResult.ATE:
            assert after.head == before.apple
            assert len(after.snake) == len(before.snake) + 1
            assert after.score == before.score + 1
            assert after.tick_interval_ms == max(MIN_TICK_INTERVAL,
                                                 before.tick_interval_ms - SPEED_INCREMENT)
        elif result == TickResult.MOVED:
            assert len(after.snake) == len(before.snake)
            assert after.score == before.score
            assert after.tick_interval_ms == before.tick_interval_ms
        elif result in TickResult.CRASHES:
            assert after.snake == before.snake
            assert after.phase == PHASE_OVER
    assert games > 0


# ── Observers & validation ────────────────────────────────────────

def test_listeners_see_each_change_and_failures_are_contained():
    model = GameModel(rng=random.Random(3))
    seen, scores = [], []

    def broken(snap):
        raise RuntimeError("boom")

    model.subscribe(broken)
    model.subscribe(seen.append)
    model.on_apple_eaten(scores.append)

    model.set_pending_direction(Direction.RIGHT)
    for _ in range(5):
        model.tick()

    assert [s.phase for s in seen] == [PHASE_RUNNING] * 6
    assert seen[-1].score == 1
    assert scores == [1]


def test_rejected_reversal_does_not_notify():
    model = started(GameModel())
    seen = []
    model.subscribe(seen.append)
    model.set_pending_direction(Direction.LEFT)
    assert seen == []


def test_direction_lookup_by_name():
    assert Direction.from_name("up") is Direction.UP
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert not Direction.UP.is_opposite(Direction.LEFT)


@pytest.mark.parametrize("kwargs", [
    {"initial_snake": []},
    {"initial_snake": [(1, 1), (1, 1)]},
    {"initial_snake": [(20, 0)]},
    {"initial_apple": (10, 10)},
])
def test_bad_initial_layout_is_rejected(kwargs):
    with pytest.raises(ValueError):
        GameModel(**kwargs)


def test_state_is_read_only_from_outside():
    model = started(GameModel())
    for name, value in [("score", 99), ("phase", "bogus"), ("apple", (0, 0)),
                        ("tick_interval_ms", 1), ("snake", ((0, 0),))]:
        with pytest.raises(AttributeError):
            setattr(model, name, value)

    body = model.snake
    assert isinstance(body, tuple)
    assert not hasattr(body, "push_head")
    model.tick()
    assert body == ((10, 10), (9, 10), (8, 10))
    assert model.snapshot().snake == ((11, 10), (10, 10), (9, 10))
    assert model.score == 0
    assert model.phase == PHASE_RUNNING
