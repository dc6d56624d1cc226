"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate pygame key codes into key identifiers for the InputAdapter.
  - Drive the game loop: feed frame time to the TickScheduler, which
    ticks the model; ask the view to render.
  - Request a fun fact whenever an apple is eaten (or F is pressed).
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys
import pygame

from .config import WIDTH, HEIGHT, FPS, PHASE_OVER
from .facts import FactFetcher
from .input import InputAdapter
from .model import GameModel
from .scheduler import TickScheduler
from .view import GameView

logger = logging.getLogger(__name__)

PYGAME_KEYS = {
    pygame.K_UP:    "ArrowUp",
    pygame.K_DOWN:  "ArrowDown",
    pygame.K_LEFT:  "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_w:     "ArrowUp",
    pygame.K_s:     "ArrowDown",
    pygame.K_a:     "ArrowLeft",
    pygame.K_d:     "ArrowRight",
}

RESTART_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, model: GameModel | None = None, facts: FactFetcher | None = None):
        pygame.init()
        self.screen    = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("APPLE SNAKE")
        self.clock     = pygame.time.Clock()
        self.model     = model or GameModel()
        self.view      = GameView(self.screen)
        self.input     = InputAdapter(self.model)
        self.scheduler = TickScheduler()
        self.facts     = facts or FactFetcher()
        self.model.on_apple_eaten(self._on_apple_eaten)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt_ms = self.clock.tick(FPS)
            self.step(dt_ms)

    def step(self, dt_ms: float) -> None:
        """One frame: input, tick timing, fact polling, render."""
        self._handle_events()
        self.scheduler.sync(self.model.tick_interval_ms)
        self.scheduler.advance(dt_ms, self._tick)
        fact = self.facts.poll()
        self.view.render(self.model.snapshot(), fact, self.facts.loading)

    # ── Model glue ────────────────────────────────────────────────
    def _tick(self) -> None:
        self.model.tick()
        # Stop immediately on game over so no stale tick can follow.
        self.scheduler.sync(self.model.tick_interval_ms)

    def _on_apple_eaten(self, score: int) -> None:
        self.facts.request()

    def _reset(self) -> None:
        self.model.reset()
        self.scheduler.stop()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self._quit()

        if key in PYGAME_KEYS:
            self.input.handle_key(PYGAME_KEYS[key])
        elif key == pygame.K_r:
            self._reset()
        elif key in RESTART_KEYS and self.model.phase == PHASE_OVER:
            self._reset()
        elif key == pygame.K_f:
            self.facts.request()

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        self.facts.shutdown()
        pygame.quit()
        sys.exit()
