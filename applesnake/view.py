"""
view.py — View layer.

Draws a frame from a GameSnapshot. Never mutates the model.

Layout, top to bottom:
  - Header: title and live score
  - Board: pre-rendered grid, apple with glow, snake fading head→tail
  - Overlays: start hint (not started), game-over card (game over)
  - Fun-fact panel: button hint, loading state, "Did you know?" text

Public API:
    GameView(screen)                  — bind to a pygame surface
    view.render(snapshot, fact, busy) — draw the current frame
"""

import math
import pygame

from .config import (
    WIDTH, HEADER_H, FACT_PANEL_H, MARGIN,
    OFFSET_X, OFFSET_Y, CELL, BOARD_PX, GRID_SIZE,
    BG, BOARD_BG, GRID_COL, BORDER_COL, SNAKE_HEAD, SNAKE_BODY,
    APPLE_COL, TITLE_COL, UI_COL, FACT_COL, FACT_LABEL, OVER_COL,
    WHITE, PANEL_BG,
    PHASE_NOT_STARTED, PHASE_OVER,
)
from .model import GameSnapshot


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _wrap_text(font: pygame.font.Font, text: str, max_w: int) -> list[str]:
    lines, line = [], ""
    for word in text.split():
        trial = f"{line} {word}".strip()
        if line and font.size(trial)[0] > max_w:
            lines.append(line)
            line = word
        else:
            line = trial
    if line:
        lines.append(line)
    return lines


def cell_center(cell: tuple[int, int]) -> tuple[int, int]:
    """Pixel centre of a board cell."""
    return (OFFSET_X + cell[0] * CELL + CELL // 2,
            OFFSET_Y + cell[1] * CELL + CELL // 2)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a GameSnapshot."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()
        self._best_score: int = 0
        self._anim_tick: int = 0

    @property
    def best_score(self) -> int:
        return self._best_score

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: GameSnapshot, fact: str = "", fact_loading: bool = False) -> None:
        self._anim_tick += 1
        self._best_score = max(self._best_score, snap.score)

        self.screen.fill(BG)
        self._draw_header(snap)
        self.screen.blit(self._board_surf, (OFFSET_X, OFFSET_Y))

        if snap.phase != PHASE_NOT_STARTED:
            if snap.apple is not None:
                self._draw_apple(snap.apple)
            self._draw_snake(snap)

        self._draw_border()

        if snap.phase == PHASE_NOT_STARTED:
            self._draw_start_hint()
        elif snap.phase == PHASE_OVER:
            self._draw_game_over(snap)

        self._draw_fact_panel(fact, fact_loading)
        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._board_surf = pygame.Surface((BOARD_PX, BOARD_PX))
        self._board_surf.fill(BOARD_BG)
        for i in range(GRID_SIZE + 1):
            pygame.draw.line(self._board_surf, GRID_COL, (i * CELL, 0), (i * CELL, BOARD_PX))
            pygame.draw.line(self._board_surf, GRID_COL, (0, i * CELL), (BOARD_PX, i * CELL))

    # ── Header ───────────────────────────────────────────────────
    def _draw_header(self, snap: GameSnapshot) -> None:
        title = self.font_title.render("APPLE SNAKE", True, TITLE_COL)
        self.screen.blit(title, title.get_rect(midtop=(WIDTH // 2, 6)))

        label = self.font_small.render("Score:", True, UI_COL)
        value = self.font_big.render(str(snap.score), True, SNAKE_HEAD)
        total_w = label.get_width() + 8 + value.get_width()
        x = WIDTH // 2 - total_w // 2
        y = HEADER_H - 8 - value.get_height()
        self.screen.blit(label, (x, y + value.get_height() - label.get_height()))
        self.screen.blit(value, (x + label.get_width() + 8, y))

        if self._best_score > 0:
            best = self.font_tiny.render(f"BEST {self._best_score}", True, UI_COL)
            self.screen.blit(best, best.get_rect(bottomright=(WIDTH - MARGIN, HEADER_H - 10)))

    # ── Apple ────────────────────────────────────────────────────
    def _draw_apple(self, apple: tuple[int, int]) -> None:
        x, y = cell_center(apple)
        r = CELL // 2 - 2
        pulse = 0.75 + 0.25 * math.sin(self._anim_tick * 0.1)

        glow_r = r + 8
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(80 * (1 - (gr - r) / (glow_r - r)) * pulse)
            pygame.draw.circle(glow, _with_alpha(APPLE_COL, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (x - glow_r, y - glow_r))
        pygame.draw.circle(self.screen, APPLE_COL, (x, y), r)

    # ── Snake ────────────────────────────────────────────────────
    def _draw_snake(self, snap: GameSnapshot) -> None:
        length = len(snap.snake)
        # Tail first so the head is painted on top.
        for i in range(length - 1, -1, -1):
            sx, sy = snap.snake[i]
            rect = pygame.Rect(OFFSET_X + sx * CELL + 1, OFFSET_Y + sy * CELL + 1,
                               CELL - 2, CELL - 2)
            if i == 0:
                glow = pygame.Surface((CELL * 2, CELL * 2), pygame.SRCALPHA)
                pygame.draw.rect(glow, _with_alpha(SNAKE_HEAD, 60),
                                 (0, 0, CELL * 2, CELL * 2), border_radius=CELL)
                self.screen.blit(glow, (rect.centerx - CELL, rect.centery - CELL))
                pygame.draw.rect(self.screen, SNAKE_HEAD, rect, border_radius=4)
                self._draw_eyes(snap)
            else:
                t = i / max(length - 1, 1)
                color = _lerp_color(SNAKE_BODY, _lerp_color(SNAKE_BODY, BOARD_BG, 0.45), t)
                pygame.draw.rect(self.screen, color, rect, border_radius=2)

    def _draw_eyes(self, snap: GameSnapshot) -> None:
        cx, cy = cell_center(snap.head)
        dx, dy = snap.direction.x, snap.direction.y
        px, py = -dy, dx  # perpendicular
        for sign in (+1, -1):
            ex = int(cx + dx * 5 + sign * px * 5)
            ey = int(cy + dy * 5 + sign * py * 5)
            pygame.draw.circle(self.screen, WHITE, (ex, ey), 3)
            pygame.draw.circle(self.screen, BOARD_BG, (ex + dx, ey + dy), 1)

    # ── Border ───────────────────────────────────────────────────
    def _draw_border(self) -> None:
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 4, OFFSET_Y - 4, BOARD_PX + 8, BOARD_PX + 8),
                         4, border_radius=6)

    # ── Overlays ─────────────────────────────────────────────────
    def _draw_start_hint(self) -> None:
        alpha = 0.55 + 0.45 * math.sin(self._anim_tick * 0.06)
        color = _lerp_color(BOARD_BG, UI_COL, alpha)
        surf = self.font_med.render("Press any arrow key to start", True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, OFFSET_Y + BOARD_PX // 2)))

    def _draw_game_over(self, snap: GameSnapshot) -> None:
        shade = pygame.Surface((BOARD_PX, BOARD_PX), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 180))
        self.screen.blit(shade, (OFFSET_X, OFFSET_Y))

        cy = OFFSET_Y + BOARD_PX // 2 - 70
        title = self.font_title.render("Game Over", True, OVER_COL)
        self.screen.blit(title, title.get_rect(midtop=(WIDTH // 2, cy)))
        cy += title.get_height() + 12

        score = self.font_med.render(f"Your Score: {snap.score}", True, WHITE)
        self.screen.blit(score, score.get_rect(midtop=(WIDTH // 2, cy)))
        cy += score.get_height() + 20

        self._draw_button("R / ENTER — RESTART", SNAKE_BODY, cy)

    def _draw_button(self, label: str, color: tuple, cy: int) -> int:
        btn_w = max(220, self.font_small.size(label)[0] + 40)
        btn_h = 36
        bx = WIDTH // 2 - btn_w // 2
        bg = pygame.Surface((btn_w, btn_h), pygame.SRCALPHA)
        bg.fill(_with_alpha(color, 40))
        self.screen.blit(bg, (bx, cy))
        pygame.draw.rect(self.screen, color, (bx, cy, btn_w, btn_h), 2, border_radius=6)
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy + btn_h // 2)))
        return cy + btn_h + 10

    # ── Fun-fact panel ───────────────────────────────────────────
    def _draw_fact_panel(self, fact: str, loading: bool) -> None:
        top = OFFSET_Y + BOARD_PX + MARGIN
        panel = pygame.Rect(MARGIN, top, WIDTH - MARGIN * 2, FACT_PANEL_H - 8)
        pygame.draw.rect(self.screen, PANEL_BG, panel, border_radius=8)
        pygame.draw.rect(self.screen, BORDER_COL, panel, 1, border_radius=8)

        hint = "Getting Fact..." if loading else "F — Get a Fun Fact!"
        hint_surf = self.font_small.render(hint, True, UI_COL if loading else TITLE_COL)
        self.screen.blit(hint_surf, hint_surf.get_rect(midtop=(WIDTH // 2, top + 8)))

        if not fact or loading:
            return
        y = top + 14 + hint_surf.get_height()
        label = self.font_small.render("Did you know?", True, FACT_LABEL)
        self.screen.blit(label, (panel.x + 12, y))
        x = panel.x + 12 + label.get_width() + 6
        for line in _wrap_text(self.font_tiny, fact, panel.right - 12 - x)[:3]:
            surf = self.font_tiny.render(line, True, FACT_COL)
            self.screen.blit(surf, (x, y + 2))
            y += surf.get_height() + 2

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 34, True),
            ("font_big",   "courier", 26, True),
            ("font_med",   "courier", 18, False),
            ("font_small", "courier", 14, True),
            ("font_tiny",  "courier", 12, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
