# ============================================================
# core/session.py — Detection session lifecycle
#
# Owns everything the detect loop must give back on exit:
#   camera handle, SIGINT/SIGTERM handlers, terminal mode, windows.
# ============================================================

from __future__ import annotations

import signal
from typing import Optional

import cv2

import config
from core.camera import open_camera
from core.terminal import RawTerminal


class DetectSession:
    """
    Context object for one run of the detection loop.

    Signals only set ``stop_requested``; the loop checks it between
    frames and leaves through the normal ``__exit__`` path.
    """

    HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(
        self,
        camera_index: int = config.CAMERA_INDEX,
        width: int = config.FRAME_WIDTH,
        height: int = config.FRAME_HEIGHT,
        headless: bool = False,
        capture=None,
    ):
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.headless = headless
        self.capture = capture
        self.terminal: Optional[RawTerminal] = None
        self.stop_requested = False
        self._previous_handlers = {}

    def __enter__(self):
        if self.capture is None:
            self.capture = open_camera(self.camera_index, self.width, self.height)
        try:
            for sig in self.HANDLED_SIGNALS:
                self._previous_handlers[sig] = signal.signal(sig, self._on_signal)
            if self.headless:
                self.terminal = RawTerminal().__enter__()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self):
        if self.terminal is not None:
            self.terminal.restore()
            self.terminal = None
        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler)
        self._previous_handlers = {}
        if self.capture is not None:
            self.capture.release()
            self.capture = None
        if not self.headless:
            cv2.destroyAllWindows()

    def _on_signal(self, signum, frame):
        print(f"\n[INFO] Signal {signum} received, stopping...")
        self.stop_requested = True

    def read(self):
        return self.capture.read()

    def poll_key(self) -> Optional[int]:
        """
        Next key as a waitKeyEx-style code, else None.

        Window keys keep their extended codes; terminal escape
        sequences (arrows etc.) are dropped rather than read as ESC.
        """
        if self.headless:
            key = self.terminal.read_key() if self.terminal else None
            if key is None or len(key) != 1:
                return None
            return ord(key)
        code = cv2.waitKeyEx(1)
        if code < 0:
            return None
        return code
