# ============================================================
# tests/test_detect.py — Detection, session lifecycle, timing
# ============================================================

import io
import os
import signal

import cv2
import numpy as np
import pytest

from core import keys
from core.detection import MarkerDetector
from core.generator import make_state
from core.session import DetectSession
from core.terminal import RawTerminal, read_key_from
from core.timing import Ema, FrameTimer
from modes.detect import run_detect
from ui.overlays import render_marker


class FakeCapture:
    """Serves a fixed list of frames, then reports end of stream."""

    def __init__(self, frames):
        self.frames = list(frames)
        self.released = False

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


def _marker_frame(marker_id=7):
    gray = render_marker(make_state(marker_id=marker_id))
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


# ── Detection ─────────────────────────────────────────────────

def test_detects_generated_marker():
    corners, ids, raw_ids = MarkerDetector("DICT_6X6_50").detect(_marker_frame(7))
    assert ids == [7]
    assert raw_ids.flatten().tolist() == [7]
    assert np.asarray(corners[0]).reshape(-1, 2).shape == (4, 2)


def test_blank_frame_has_no_ids():
    _, ids, _ = MarkerDetector().detect(np.full((240, 320, 3), 255, np.uint8))
    assert ids == []


def test_unknown_dictionary():
    with pytest.raises(KeyError):
        MarkerDetector("DICT_9X9_1")


# ── Keys ──────────────────────────────────────────────────────

def test_key_decoding():
    assert keys.char_of(ord("a")) == "a"
    assert keys.char_of(65361) is None
    assert keys.arrow_of(65361) == keys.LEFT
    assert keys.arrow_of(2621440) == keys.DOWN
    assert keys.is_quit(27)
    assert not keys.is_quit(65361)


# ── Timing ────────────────────────────────────────────────────

def test_ema_update():
    ema = Ema(0.9)
    assert ema.update(10) == 10
    assert ema.update(20) == pytest.approx(11.0)
    ema.reset()
    assert ema.value is None


def test_ema_rejects_bad_alpha():
    with pytest.raises(ValueError):
        Ema(1.0)


def test_frame_timer():
    ticks = iter([0.0, 0.1, 0.2, 0.3, 0.305])
    timer = FrameTimer(alpha=0.5, clock=lambda: next(ticks))
    assert timer.fps == 0.0
    timer.tick()
    timer.tick()
    assert timer.fps == pytest.approx(10.0)
    timer.tick()
    assert timer.fps == pytest.approx(10.0)
    with timer.measure():
        pass
    assert timer.latency_ms == pytest.approx(5.0)


# ── Terminal & session ────────────────────────────────────────

def test_raw_terminal_without_tty():
    with RawTerminal(io.StringIO()) as term:
        assert not term.active
        assert term.read_key() is None


def test_session_restores_signal_handlers():
    before = signal.getsignal(signal.SIGINT)
    cap = FakeCapture([])
    with DetectSession(headless=True, capture=cap) as session:
        assert signal.getsignal(signal.SIGINT) == session._on_signal
        session._on_signal(signal.SIGINT, None)
        assert session.stop_requested
    assert signal.getsignal(signal.SIGINT) == before
    assert cap.released


def test_run_detect_headless(capsys):
    cap = FakeCapture([_marker_frame(7)] * 3)
    assert run_detect(dict_name="DICT_6X6_50", headless=True, capture=cap) == 0
    out = capsys.readouterr().out
    assert "[DETECT] IDs: [7]" in out
    assert out.count("[DETECT]") == 1
    assert cap.released


def test_run_detect_bad_dictionary():
    assert run_detect(dict_name="NOPE", headless=True, capture=FakeCapture([])) == 1


# ── Arrow keys never quit ─────────────────────────────────────

class FakeTerminal:
    """Hands out queued terminal keys, one per poll."""

    def __init__(self, queued):
        self.queued = list(queued)

    def __enter__(self):
        return self

    def read_key(self):
        return self.queued.pop(0) if self.queued else None

    def restore(self):
        pass


def test_window_left_arrow_does_not_quit(monkeypatch, capsys):
    monkeypatch.setattr(cv2, "imshow", lambda *a, **k: None)
    monkeypatch.setattr(cv2, "destroyAllWindows", lambda *a, **k: None)
    # 0xFF51: low byte is 'Q'
    monkeypatch.setattr(cv2, "waitKeyEx", lambda delay=0: 65361)
    cap = FakeCapture([_marker_frame(7)] * 5)
    assert run_detect(headless=False, capture=cap) == 0
    assert "Session ended after 5 frames" in capsys.readouterr().out


def test_window_quit_key_stops(monkeypatch, capsys):
    monkeypatch.setattr(cv2, "imshow", lambda *a, **k: None)
    monkeypatch.setattr(cv2, "destroyAllWindows", lambda *a, **k: None)
    monkeypatch.setattr(cv2, "waitKeyEx", lambda delay=0: 27)
    assert run_detect(headless=False, capture=FakeCapture([_marker_frame(7)] * 5)) == 0
    assert "Session ended after 1 frames" in capsys.readouterr().out


def test_terminal_arrow_sequence_does_not_quit(monkeypatch, capsys):
    monkeypatch.setattr("core.session.RawTerminal", lambda: FakeTerminal(["\x1b[D"] * 4 + ["q"]))
    cap = FakeCapture([_marker_frame(7)] * 8)
    assert run_detect(headless=True, capture=cap) == 0
    assert "Session ended after 5 frames" in capsys.readouterr().out


def test_read_key_keeps_escape_sequences_whole():
    r, w = os.pipe()
    try:
        assert read_key_from(r) is None
        os.write(w, b"\x1b[D")
        assert read_key_from(r) == "\x1b[D"
        os.write(w, b"\x1b")
        assert read_key_from(r) == "\x1b"
        os.write(w, b"q")
        assert read_key_from(r) == "q"
    finally:
        os.close(r)
        os.close(w)


# ── Session cleanup on failed setup ───────────────────────────

def test_session_releases_camera_when_setup_fails(monkeypatch):
    def refuse(sig, handler):
        raise ValueError("signal only works in main thread")

    monkeypatch.setattr(signal, "signal", refuse)
    cap = FakeCapture([])
    with pytest.raises(ValueError):
        DetectSession(headless=True, capture=cap).__enter__()
    assert cap.released
