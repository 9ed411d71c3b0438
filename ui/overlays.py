# ============================================================
# ui/overlays.py — Marker canvas, status panel & HUD overlays
# ============================================================

from typing import Optional, Sequence

import cv2
import numpy as np

import config
from core.dictionaries import CATALOG, DictionaryCatalog
from core.generator import GeneratorState, clamp_marker_id


# ── Text helpers ───────────────────────────────────────────────

def _put_outlined(img: np.ndarray, text: str, org, scale: float, color, thickness: int = 1):
    """Black outline first, then the colored text on top."""
    cv2.putText(img, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale,
                config.COLOR_OUTLINE, thickness + 2, cv2.LINE_AA)
    cv2.putText(img, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale,
                color, thickness, cv2.LINE_AA)


# ── Marker Canvas ──────────────────────────────────────────────

def marker_margin(size: int) -> int:
    return max(config.MIN_MARGIN, size // config.MARGIN_DIVISOR)


def render_marker(state: GeneratorState, catalog: DictionaryCatalog = CATALOG) -> np.ndarray:
    """Single-channel marker on a white canvas with a margin on every side."""
    capacity = catalog.capacity(state.dict_index)
    marker_id = clamp_marker_id(state.marker_id, capacity)
    size = max(config.MIN_MARKER_SIZE, min(config.MAX_MARKER_SIZE, state.marker_size))
    border = max(config.MIN_BORDER_BITS, min(config.MAX_BORDER_BITS, state.border_bits))

    marker = catalog.draw(state.dict_index, marker_id, size, border)

    margin = marker_margin(size)
    h, w = marker.shape[:2]
    canvas = np.full((h + 2 * margin, w + 2 * margin), 255, dtype=np.uint8)
    canvas[margin:margin + h, margin:margin + w] = marker
    return canvas


# ── Status Panel ───────────────────────────────────────────────

def panel_height(show_help: bool) -> int:
    lines = config.PANEL_BASE_LINES + (config.PANEL_HELP_LINES if show_help else 0)
    return config.PANEL_PADDING + lines * config.PANEL_LINE_HEIGHT + config.PANEL_PADDING


def render_status_panel(
    state: GeneratorState,
    width: int,
    catalog: DictionaryCatalog = CATALOG,
) -> np.ndarray:
    """White BGR text block describing the current parameters."""
    panel = np.full((panel_height(state.show_help), width, 3), 255, dtype=np.uint8)
    lh = config.PANEL_LINE_HEIGHT
    y = lh

    def put(text, color=config.COLOR_INFO):
        nonlocal y
        _put_outlined(panel, text, (10, y), config.PANEL_FONT_SCALE, color)
        y += lh

    max_id = max(1, catalog.capacity(state.dict_index)) - 1
    put("ArUco Marker Generator (GUI)", config.COLOR_TITLE)
    put(f"Dict: {catalog.name(state.dict_index)}  (d/D prev/next)")
    put(f"ID: {clamp_marker_id(state.marker_id, max_id + 1)} / {max_id}  (Left/Right; r=random)")
    put(f"Size: {state.marker_size} px  (Up/Down)")
    put(f"Border: {state.border_bits}  ([/])")
    if state.output_path:
        put(f"Save: s -> {state.output_path}")
    else:
        put("Save: s -> auto name in CWD")

    if state.show_help:
        y += lh // 2
        put("Keys: Left/Right ID  | Up/Down Size  | [/ ] Border", config.COLOR_HELP)
        put("      d/D Prev/Next Dict | r Random ID | s Save PNG", config.COLOR_HELP)
        put("      h Toggle Help | q/ESC Quit", config.COLOR_HELP)

    return panel


def compose_view(
    state: GeneratorState,
    notice: Optional[str] = None,
    notice_ok: bool = True,
    catalog: DictionaryCatalog = CATALOG,
) -> np.ndarray:
    """Marker canvas above the status panel, plus an optional bottom notice."""
    marker_bgr = cv2.cvtColor(render_marker(state, catalog), cv2.COLOR_GRAY2BGR)
    panel = render_status_panel(state, marker_bgr.shape[1], catalog)
    view = np.vstack([marker_bgr, panel])

    if notice:
        color = config.COLOR_SAVED if notice_ok else config.COLOR_ERROR
        _put_outlined(view, notice, (10, view.shape[0] - 10),
                      config.NOTICE_FONT_SCALE, color, thickness=2)
    return view


# ── Detection HUD ──────────────────────────────────────────────

def draw_detections(frame: np.ndarray, corners, ids) -> None:
    if ids is not None and len(ids) > 0:
        cv2.aruco.drawDetectedMarkers(frame, corners, ids, borderColor=config.COLOR_MARKER)


def draw_fps(frame: np.ndarray, fps: float, latency_ms: float) -> None:
    """FPS and detection latency in the top-left corner."""
    cv2.rectangle(frame, (0, 0), (220, 28), config.COLOR_PANEL_BG, -1)
    cv2.putText(frame, f"FPS {fps:5.1f}  det {latency_ms:5.1f} ms",
                (6, 19), cv2.FONT_HERSHEY_SIMPLEX, 0.5,
                config.COLOR_FPS, 1, cv2.LINE_AA)


def draw_ids(frame: np.ndarray, ids: Sequence[int]) -> None:
    """Detected id list along the bottom edge."""
    h, w = frame.shape[:2]
    text = "IDs: " + (", ".join(str(i) for i in ids) if ids else "-")
    cv2.rectangle(frame, (0, h - 30), (w, h), config.COLOR_PANEL_BG, -1)
    cv2.putText(frame, text, (8, h - 10),
                cv2.FONT_HERSHEY_SIMPLEX, 0.48,
                config.COLOR_FPS, 1, cv2.LINE_AA)


def draw_controls_hint(frame: np.ndarray, hints: Sequence[str]) -> None:
    """Draw control hints in top-right corner."""
    h, w = frame.shape[:2]
    for i, hint in enumerate(hints):
        cv2.putText(frame, hint,
                    (w - 110, 20 + i * 18),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4,
                    (160, 160, 160), 1, cv2.LINE_AA)
