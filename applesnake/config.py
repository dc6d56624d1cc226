"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

# ── Board & Timing ────────────────────────────────────────────────
GRID_SIZE          = 20
INITIAL_SPEED      = 200       # ms per tick
SPEED_INCREMENT    = 5         # ms subtracted per apple
MIN_TICK_INTERVAL  = 50        # ms, speed floor

# Head first. Direction names match model.Direction attributes.
INITIAL_SNAKE      = ((10, 10), (9, 10), (8, 10))
INITIAL_APPLE      = (15, 10)
INITIAL_DIRECTION  = "RIGHT"

# ── Window ────────────────────────────────────────────────────────
CELL            = 24
BOARD_PX        = GRID_SIZE * CELL
HEADER_H        = 70
FACT_PANEL_H    = 90
MARGIN          = 16
WIDTH           = BOARD_PX + MARGIN * 2
HEIGHT          = HEADER_H + BOARD_PX + MARGIN * 2 + FACT_PANEL_H
OFFSET_X        = MARGIN
OFFSET_Y        = HEADER_H
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (17,  24,  39)
BOARD_BG    = (0,   0,   0)
GRID_COL    = (14,  22,  30)
BORDER_COL  = (20,  184, 166)
SNAKE_HEAD  = (74,  222, 128)
SNAKE_BODY  = (34,  197, 94)
APPLE_COL   = (239, 68,  68)
TITLE_COL   = (45,  212, 191)
UI_COL      = (156, 163, 175)
FACT_COL    = (94,  234, 212)
FACT_LABEL  = (153, 246, 228)
OVER_COL    = (239, 68,  68)
WHITE       = (255, 255, 255)
PANEL_BG    = (31,  41,  55)

# ── Fun facts ─────────────────────────────────────────────────────
FACT_TIMEOUT   = 3.0       # seconds before a pending fact is abandoned
FALLBACK_FACT  = "Could not fetch a fact right now. Please try again later."

# ── Logging ───────────────────────────────────────────────────────
LOG_LEVEL_ENV  = "APPLESNAKE_LOG_LEVEL"
LOG_FORMAT     = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# ── Game Phases ───────────────────────────────────────────────────
PHASE_NOT_STARTED = "not_started"
PHASE_RUNNING     = "running"
PHASE_OVER        = "game_over"
