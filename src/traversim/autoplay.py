"""AutoPlayer - Steps the engine on a fixed interval until it finishes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from traversim.engine import EngineSnapshot, TraversalEngine

logger = logging.getLogger(__name__)


class AutoPlayer:
    """Calls ``engine.step()`` every ``interval`` seconds.

    At most one ``threading.Timer`` is pending at any time: the next timer
    is armed only after the previous one fired and its step completed.
    There is no catch-up; a pause simply cancels the pending timer.

    The driver stops itself when the engine reports ``is_finished()``.
    Whoever resets the engine or edits its graph must ``stop()`` the driver
    first, since the engine assumes a static graph during a run.

    Example::

        player = AutoPlayer(engine, interval=0.5, on_step=render)
        player.start()
        player.wait()
    """

    def __init__(
        self,
        engine: TraversalEngine,
        interval: float = 1.0,
        on_step: Callable[[EngineSnapshot], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.engine = engine
        self.interval = interval
        self.on_step = on_step
        self.error: BaseException | None = None
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._active = False
        self._stopped = threading.Event()
        self._stopped.set()
        self._steps = 0
        self._generation = 0

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def has_pending_trigger(self) -> bool:
        return self._timer is not None

    @property
    def steps_taken(self) -> int:
        """Steps performed since the last ``start()``."""
        return self._steps

    def start(self) -> bool:
        """Begin auto-play. Returns False if already active or the engine is finished."""
        with self._lock:
            if self._active or self.engine.is_finished():
                return False
            self._active = True
            self.error = None
            self._steps = 0
            self._stopped.clear()
            self._generation += 1
            self._arm()
        logger.debug("Auto-play started (interval=%.3fs)", self.interval)
        return True

    def pause(self) -> None:
        """Cancel the pending trigger. ``start()`` resumes from the current engine state."""
        self._halt("paused")

    def stop(self) -> None:
        self._halt("stopped")

    def toggle(self) -> bool:
        """Start if idle, pause if active. Returns the new ``is_active``."""
        if self._active:
            self.pause()
        else:
            self.start()
        return self._active

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the driver stops. Returns False on timeout."""
        return self._stopped.wait(timeout)

    def _arm(self) -> None:
        timer = threading.Timer(self.interval, self._fire, args=(self._generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        # a timer armed by an earlier start() must not step or re-arm
        with self._lock:
            if not self._active or generation != self._generation:
                return
            self._timer = None
            try:
                snapshot = self.engine.step()
            except Exception as e:
                logger.exception("Auto-play step failed")
                self.error = e
                self._active = False
                self._stopped.set()
                return
            self._steps += 1

        if self.on_step is not None:
            try:
                self.on_step(snapshot)
            except Exception as e:
                logger.exception("Auto-play callback failed")
                with self._lock:
                    if generation != self._generation:
                        return
                    self.error = e
                    self._active = False
                    self._generation += 1
                    self._stopped.set()
                return

        with self._lock:
            if not self._active or generation != self._generation:
                return
            if snapshot.is_finished:
                self._active = False
                self._stopped.set()
                logger.debug("Auto-play finished after %d steps", self._steps)
                return
            self._arm()

    def _halt(self, reason: str) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
            was_active = self._active
            self._active = False
            self._generation += 1
            self._stopped.set()
        if timer is not None:
            timer.cancel()
        if was_active:
            logger.debug("Auto-play %s", reason)


__all__ = ["AutoPlayer"]
