"""
facts.py — "Did you know?" panel data.

The fact source is any zero-argument callable returning a short string.
It runs on a background thread so a slow source can never stall the
game loop; the controller collects the result with poll() each frame.
Failures, empty answers and timeouts all degrade to FALLBACK_FACT.
"""

import logging
import random
import threading
import time
from concurrent.futures import Future, wait
from typing import Callable

from .config import FACT_TIMEOUT, FALLBACK_FACT

logger = logging.getLogger(__name__)

STATIC_FACTS = (
    "Snakes can't bite food, so they have to swallow it whole!",
    "Apples float because 25% of their volume is air.",
    "A group of snakes is called a 'nest' or 'den'.",
    "There are over 7,500 varieties of apples grown worldwide.",
    "Snakes smell with their tongues!",
    "Apple trees can live for over 100 years.",
    "Some snakes can go months without eating.",
    "Apples are more effective than coffee at waking you up in the morning.",
)


def random_fact(rng: random.Random | None = None) -> str:
    return (rng or random).choice(STATIC_FACTS)


class FactFetcher:
    """
    Owns the current fact text and its loading flag.

    request()  — start fetching (supersedes any pending request)
    poll()     — collect a finished or timed-out request; call every frame
    fetch_now() — blocking variant for headless callers

    Each request runs on its own daemon thread, so a source that never
    answers is abandoned on timeout and cannot hold up interpreter exit.
    """

    def __init__(
        self,
        provider: Callable[[], str] = random_fact,
        timeout: float = FACT_TIMEOUT,
        fallback: str = FALLBACK_FACT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.timeout = timeout
        self.fallback = fallback
        self._clock = clock
        self._pending: Future | None = None
        self._started_at: float = 0.0
        self._closed: bool = False
        self.fact: str = ""

    @property
    def loading(self) -> bool:
        return self._pending is not None

    def request(self) -> None:
        if self._closed:
            return
        self._abandon()
        self.fact = ""
        self._started_at = self._clock()
        future = Future()
        worker = threading.Thread(
            target=_run_provider, args=(self.provider, future),
            name="fun-fact", daemon=True,
        )
        self._pending = future
        worker.start()

    def poll(self) -> str:
        future = self._pending
        if future is None:
            return self.fact

        if future.done():
            self._pending = None
            self.fact = self._resolve(future)
        elif self._clock() - self._started_at >= self.timeout:
            self._give_up()
        return self.fact

    def fetch_now(self) -> str:
        self.request()
        future = self._pending
        if future is None:
            return self.fact
        wait([future], timeout=self.timeout)
        if future.done():
            self._pending = None
            self.fact = self._resolve(future)
        else:
            self._give_up()
        return self.fact

    def shutdown(self) -> None:
        self._closed = True
        self._abandon()

    def _abandon(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _give_up(self) -> None:
        logger.warning("Fun fact source timed out after %.1fs", self.timeout)
        self._abandon()
        self.fact = self.fallback

    def _resolve(self, future: Future) -> str:
        if future.cancelled():
            return self.fallback
        error = future.exception()
        if error is not None:
            logger.error("Error fetching fun fact", exc_info=error)
            return self.fallback
        text = future.result()
        if not text or not str(text).strip():
            logger.warning("Fun fact source returned nothing")
            return self.fallback
        return str(text).strip()


def _run_provider(provider: Callable[[], str], future: Future) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = provider()
    except Exception as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)
