"""
input.py — Input adapter.

Turns raw key identifiers into Direction requests on the model.
Knows nothing about pygame; the controller hands it identifier strings.
"""

from .model import Direction, GameModel

KEY_DIRECTIONS = {
    "ArrowUp":    Direction.UP,
    "ArrowDown":  Direction.DOWN,
    "ArrowLeft":  Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}


def direction_for_key(key: str) -> Direction | None:
    return KEY_DIRECTIONS.get(key)


class InputAdapter:
    """Forwards directional keys to the model; everything else is ignored."""

    def __init__(self, model: GameModel):
        self.model = model

    def handle_key(self, key: str) -> bool:
        """
        Returns True when the key was a direction key, i.e. the host
        should swallow it instead of applying its default behaviour.
        """
        direction = direction_for_key(key)
        if direction is None:
            return False
        self.model.set_pending_direction(direction)
        return True
