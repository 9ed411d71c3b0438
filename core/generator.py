# ============================================================
# core/generator.py — Marker generator state & key dispatch
#
# GeneratorState is immutable: every key produces a Transition
# holding the next state plus what the event loop should do
# (nothing, redraw, save, quit). Only save_marker touches disk.
# ============================================================

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

import cv2

import config
from core import keys
from core.dictionaries import CATALOG, DictionaryCatalog


class Effect(Enum):
    NONE = "none"
    REDRAW = "redraw"
    SAVE = "save"
    QUIT = "quit"


@dataclass(frozen=True)
class GeneratorState:
    dict_index: int = config.DEFAULT_DICT_INDEX
    marker_id: int = config.DEFAULT_MARKER_ID
    marker_size: int = config.DEFAULT_MARKER_SIZE
    border_bits: int = config.DEFAULT_BORDER_BITS
    output_path: Optional[str] = None
    show_help: bool = config.DEFAULT_SHOW_HELP


class Transition(NamedTuple):
    state: GeneratorState
    effect: Effect


class SaveResult(NamedTuple):
    path: str
    ok: bool
    error: Optional[str] = None

    @property
    def notice(self) -> str:
        if self.ok:
            return f"Saved: {self.path}"
        return f"Save failed: {self.error}"


# ── Clamping ──────────────────────────────────────────────────

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def clamp_marker_id(marker_id: int, capacity: int) -> int:
    return _clamp(marker_id, 0, max(1, capacity) - 1)


def make_state(
    dict_index: int = config.DEFAULT_DICT_INDEX,
    marker_id: int = config.DEFAULT_MARKER_ID,
    marker_size: int = config.DEFAULT_MARKER_SIZE,
    border_bits: int = config.DEFAULT_BORDER_BITS,
    output_path: Optional[str] = None,
    show_help: bool = config.DEFAULT_SHOW_HELP,
    catalog: DictionaryCatalog = CATALOG,
) -> GeneratorState:
    """Build the initial state with every field clamped to its range."""
    dict_index = catalog.clamp_index(dict_index)
    return GeneratorState(
        dict_index=dict_index,
        marker_id=clamp_marker_id(marker_id, catalog.capacity(dict_index)),
        marker_size=_clamp(marker_size, config.MIN_MARKER_SIZE, config.MAX_MARKER_SIZE),
        border_bits=_clamp(border_bits, config.MIN_BORDER_BITS, config.MAX_BORDER_BITS),
        output_path=output_path or None,
        show_help=bool(show_help),
    )


# ── Transitions ───────────────────────────────────────────────

def _select_dictionary(state: GeneratorState, step: int, catalog: DictionaryCatalog) -> GeneratorState:
    n = len(catalog)
    dict_index = (state.dict_index + step + n) % n
    return replace(
        state,
        dict_index=dict_index,
        marker_id=clamp_marker_id(state.marker_id, catalog.capacity(dict_index)),
    )


def dispatch(
    state: GeneratorState,
    code: int,
    catalog: DictionaryCatalog = CATALOG,
    rng: Optional[random.Random] = None,
) -> Transition:
    """
    Map one cv2.waitKeyEx code onto the next state.

    Keys outside the table return the same state with Effect.NONE.
    """
    ch = keys.char_of(code)
    arrow = keys.arrow_of(code)

    if keys.is_quit(code):
        return Transition(state, Effect.QUIT)

    if ch in ("h", "H"):
        return Transition(replace(state, show_help=not state.show_help), Effect.REDRAW)

    # d = previous, D = next
    if ch == "d":
        return Transition(_select_dictionary(state, -1, catalog), Effect.REDRAW)
    if ch == "D":
        return Transition(_select_dictionary(state, +1, catalog), Effect.REDRAW)

    capacity = catalog.capacity(state.dict_index)

    if arrow == keys.LEFT or ch == ",":
        marker_id = state.marker_id - 1
        if marker_id < 0:
            marker_id = capacity - 1
        return Transition(replace(state, marker_id=marker_id), Effect.REDRAW)
    if arrow == keys.RIGHT or ch == ".":
        marker_id = (state.marker_id + 1) % max(1, capacity)
        return Transition(replace(state, marker_id=marker_id), Effect.REDRAW)

    if arrow == keys.UP:
        size = min(config.MAX_MARKER_SIZE, state.marker_size + config.MARKER_SIZE_STEP)
        return Transition(replace(state, marker_size=size), Effect.REDRAW)
    if arrow == keys.DOWN:
        size = max(config.MIN_MARKER_SIZE, state.marker_size - config.MARKER_SIZE_STEP)
        return Transition(replace(state, marker_size=size), Effect.REDRAW)

    if ch == "[":
        border = max(config.MIN_BORDER_BITS, state.border_bits - 1)
        return Transition(replace(state, border_bits=border), Effect.REDRAW)
    if ch == "]":
        border = min(config.MAX_BORDER_BITS, state.border_bits + 1)
        return Transition(replace(state, border_bits=border), Effect.REDRAW)

    if ch in ("r", "R"):
        rng = rng or random
        marker_id = rng.randrange(max(1, capacity))
        return Transition(replace(state, marker_id=marker_id), Effect.REDRAW)

    if ch in ("s", "S"):
        return Transition(state, Effect.SAVE)

    return Transition(state, Effect.NONE)


# ── Output ────────────────────────────────────────────────────

def _short_error(e: Exception) -> str:
    # cv2.error messages span several lines; the last one names the cause
    lines = str(e).strip().splitlines()
    return lines[-1].strip() if lines else type(e).__name__


def synthesize_filename(state: GeneratorState, catalog: DictionaryCatalog = CATALOG) -> str:
    return config.AUTO_NAME_TEMPLATE.format(
        dict=catalog.name(state.dict_index),
        id=state.marker_id,
        size=state.marker_size,
        border=state.border_bits,
    )


def resolve_output_path(state: GeneratorState, catalog: DictionaryCatalog = CATALOG) -> str:
    return state.output_path or synthesize_filename(state, catalog)


def save_marker(state: GeneratorState, catalog: DictionaryCatalog = CATALOG) -> SaveResult:
    """
    Write the padded marker (no status panel) as a PNG.

    Never raises: the event loop shows the result in the status panel.
    """
    from ui.overlays import render_marker

    path = resolve_output_path(state, catalog)
    try:
        parent = Path(path).parent
        parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(path, render_marker(state, catalog)):
            raise OSError(f"could not write {path}")
    except (OSError, cv2.error) as e:
        print(f"[ERROR] Save failed: {e}")
        return SaveResult(path, False, _short_error(e))

    print(f"[INFO] ✓ Saved marker: {path}")
    return SaveResult(path, True)
