# ============================================================
# core/timing.py — EMA smoothing for FPS / latency readouts
# ============================================================

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Optional

import config


class Ema:
    """avg = alpha * avg + (1 - alpha) * sample; the first sample seeds it."""

    def __init__(self, alpha: float = config.FPS_EMA_ALPHA):
        if not 0.0 <= alpha < 1.0:
            raise ValueError(f"alpha must be in [0, 1), got {alpha}")
        self.alpha = alpha
        self.value: Optional[float] = None

    def update(self, sample: float) -> float:
        if self.value is None:
            self.value = float(sample)
        else:
            self.value = self.alpha * self.value + (1.0 - self.alpha) * float(sample)
        return self.value

    def reset(self):
        self.value = None


class FrameTimer:
    """
    Smoothed frame rate and per-stage latency.

    Usage
    -----
    timer = FrameTimer()
    while running:
        with timer.measure():
            detect(frame)
        timer.tick()
        print(timer.fps, timer.latency_ms)
    """

    def __init__(self, alpha: float = config.FPS_EMA_ALPHA, clock=time.perf_counter):
        self._clock = clock
        self._interval = Ema(alpha)
        self._latency = Ema(alpha)
        self._last_tick: Optional[float] = None

    def tick(self) -> float:
        """Mark the end of a frame; returns the smoothed FPS."""
        now = self._clock()
        if self._last_tick is not None:
            dt = now - self._last_tick
            if dt > 0:
                self._interval.update(dt)
        self._last_tick = now
        return self.fps

    @contextmanager
    def measure(self):
        start = self._clock()
        try:
            yield
        finally:
            self._latency.update((self._clock() - start) * 1000.0)

    @property
    def fps(self) -> float:
        if not self._interval.value:
            return 0.0
        return 1.0 / self._interval.value

    @property
    def latency_ms(self) -> float:
        return self._latency.value or 0.0
