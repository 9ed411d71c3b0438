# ============================================================
# core/terminal.py — Raw-mode terminal for headless key reads
# ============================================================

import os
import select
import sys
from typing import Optional

try:
    import termios
    import tty
    HAS_TERMIOS = True
except ImportError:
    # Windows: no POSIX terminal control, headless keys unavailable
    HAS_TERMIOS = False


ESC = "\x1b"
ESC_SEQUENCE_WAIT = 0.02    # s; arrow keys arrive as ESC [ A..D


def _ready(fd: int, timeout: float) -> bool:
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def read_key_from(fd: int) -> Optional[str]:
    """
    Read one key from ``fd`` without blocking.

    A lone ESC comes back as ``"\\x1b"``; an escape sequence (arrow,
    function key) comes back whole, e.g. ``"\\x1b[D"``, so it is never
    mistaken for ESC.
    """
    if not _ready(fd, 0):
        return None
    data = os.read(fd, 1)
    if data == ESC.encode() and _ready(fd, ESC_SEQUENCE_WAIT):
        while _ready(fd, 0):
            data += os.read(fd, 1)
    return data.decode(errors="ignore") or None


class RawTerminal:
    """
    Puts stdin into cbreak mode for the lifetime of a ``with`` block.

    Keys become readable one at a time without Enter, and
    ``read_key`` never blocks. The saved terminal attributes are
    restored on exit, even if the block raises.
    """

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        self._saved = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def __enter__(self):
        if HAS_TERMIOS and self._isatty():
            fd = self.stream.fileno()
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.restore()
        return False

    def restore(self):
        if self._saved is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved)
            self._saved = None

    def read_key(self) -> Optional[str]:
        """One pending key, or None when nothing was typed."""
        if not self.active:
            return None
        return read_key_from(self.stream.fileno())

    def _isatty(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False
