from __future__ import annotations

import logging
import threading
from typing import Optional

from .core import EVENT_LEVEL, FallingBlockGame


logger = logging.getLogger(__name__)


class TickScheduler:
    """Drives `FallingBlockGame.on_tick` from a background thread.

    The thread lives from `start()` to `stop()`. While the game is Playing it
    ticks every `tick_interval_ms`, re-read after each tick and restarted as
    soon as the level changes. Otherwise it idles until the next `init_game`
    wakes it. Once `stop()` returns, no further tick reaches the game.
    """

    def __init__(self, game: FallingBlockGame) -> None:
        self.game = game
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._gate = threading.RLock()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("scheduler already running")
        self._stop.clear()
        self._wake.clear()
        self.game.remove_listener(self._on_event)
        self.game.add_listener(self._on_event)
        self._thread = threading.Thread(target=self._run, name="tick-scheduler", daemon=True)
        self._thread.start()
        logger.debug("Tick scheduler started (%d ms)", self.game.tick_interval_ms)

    def stop(self, timeout: Optional[float] = None) -> None:
        # Holding the gate means no tick is in flight once the flag is set.
        with self._gate:
            self._stop.set()
        self._wake.set()
        self.game.remove_listener(self._on_event)
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    def _on_event(self, game: FallingBlockGame, event: str) -> None:
        # init_game also emits a level event, so a restart wakes an idle thread.
        if event == EVENT_LEVEL:
            self._wake.set()

    def _run(self) -> None:
        while not self._stop.is_set():
            if not self.game.is_playing:
                self._wake.wait()
                self._wake.clear()
                continue
            if self._wake.wait(self.game.tick_interval_ms / 1000.0):
                self._wake.clear()
                continue
            with self._gate:
                if self._stop.is_set():
                    break
                if self.game.is_playing:
                    self.game.on_tick()
                    self.ticks += 1
        logger.debug("Tick scheduler exited after %d ticks", self.ticks)
