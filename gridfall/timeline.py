"""Game clock: frame delta time, time scale and pausing."""

from __future__ import annotations

import threading
import time
from typing import Optional


class Timeline:
    """Measures time between frames and scales it; may follow an anchor timeline."""

    SCALE_HALF = 0.5
    SCALE_REAL = 1.0
    SCALE_DOUBLE = 2.0

    def __init__(self, anchor: Optional["Timeline"] = None) -> None:
        self._anchor = anchor
        self._paused = False
        self._tic_size = self.SCALE_REAL
        self._dt = 0.0
        now = time.monotonic()
        self._start = now
        self._last = now
        self._lock = threading.Lock()

    @property
    def timestamp(self) -> float:
        """Seconds elapsed since the timeline was created."""
        return time.monotonic() - self._start

    def pause(self) -> bool:
        """Toggle the paused state and return the new state."""
        with self._lock:
            self._paused = not self._paused
            return self._paused

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def dt(self) -> float:
        """Seconds between the last two updates, taken from the anchor if there is one."""
        if self._anchor is not None:
            return self._anchor.dt
        return self._dt

    @property
    def tic_size(self) -> float:
        """The time scale; zero while paused."""
        if self._paused:
            return 0.0
        return self._tic_size

    def edit_tic_size(self, size: float) -> None:
        with self._lock:
            self._tic_size = size

    def update_delta_time(self) -> None:
        """Record the time since the previous update (on the anchor, if any)."""
        if self._anchor is not None:
            self._anchor.update_delta_time()
            return
        with self._lock:
            now = time.monotonic()
            self._dt = now - self._last
            self._last = now