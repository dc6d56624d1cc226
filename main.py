"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame
"""

from applesnake.controller import GameController
from applesnake.log_config import setup_logging


def main() -> None:
    setup_logging()
    GameController().run()


if __name__ == "__main__":
    main()
