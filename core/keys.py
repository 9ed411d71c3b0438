# ============================================================
# core/keys.py — Key code decoding for cv2.waitKeyEx
# ============================================================

from typing import Optional

import config


LEFT = "left"
RIGHT = "right"
UP = "up"
DOWN = "down"

_ARROWS = {}
for _name, _codes in ((LEFT, config.KEY_LEFT), (RIGHT, config.KEY_RIGHT),
                      (UP, config.KEY_UP), (DOWN, config.KEY_DOWN)):
    for _code in _codes:
        _ARROWS[_code] = _name


def char_of(code: int) -> Optional[str]:
    """
    Character for a plain key, or None for extended codes.

    Extended codes are never masked to 8 bits: Left on X11 is 0xFF51,
    whose low byte is 'Q'.
    """
    if 0 <= code <= 255:
        return chr(code)
    return None


def arrow_of(code: int) -> Optional[str]:
    return _ARROWS.get(code)


def is_quit(code: int) -> bool:
    return char_of(code) in ("\x1b", "q", "Q")
