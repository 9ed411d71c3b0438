# ============================================================
# modes/generator.py — Interactive Marker Generator
# ============================================================

import random
from typing import Optional

import cv2

import config
from core.dictionaries import CATALOG, DictionaryCatalog
from core.generator import Effect, GeneratorState, dispatch, make_state, save_marker
from ui.overlays import compose_view


def run_generator(
    state: Optional[GeneratorState] = None,
    catalog: DictionaryCatalog = CATALOG,
    window_name: str = config.GENERATOR_WINDOW,
    rng: Optional[random.Random] = None,
) -> GeneratorState:
    """
    Blocking key-driven generator window.

    Redraws only after a key changed something; a save leaves the
    state alone and redraws with the save notice. Returns the final
    state once a quit key is pressed.
    """
    state = state or make_state(catalog=catalog)
    rng = rng or random.Random()

    print(f"[INFO] Marker generator: {catalog.name(state.dict_index)} id {state.marker_id}")
    print("[INFO] Arrows/,. change id & size, d/D dictionary, [ ] border, s save, q/ESC quit")

    cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    notice = None
    notice_ok = True
    need_redraw = True
    try:
        while True:
            if need_redraw:
                cv2.imshow(window_name, compose_view(state, notice, notice_ok, catalog))
                need_redraw = False

            # waitKeyEx keeps arrow codes intact
            code = cv2.waitKeyEx(0)
            if code < 0:
                # window closed by the user: show it again, only a quit key exits
                if cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1:
                    need_redraw = True
                continue

            step = dispatch(state, code, catalog, rng)

            if step.effect is Effect.QUIT:
                break
            if step.effect is Effect.SAVE:
                result = save_marker(state, catalog)
                notice, notice_ok = result.notice, result.ok
                need_redraw = True
            elif step.effect is Effect.REDRAW:
                state = step.state
                notice = None
                need_redraw = True
    finally:
        cv2.destroyWindow(window_name)

    print("[INFO] Generator closed.")
    return state
