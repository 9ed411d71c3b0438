# ============================================================
# core/dictionaries.py — Predefined ArUco dictionary catalog
# ============================================================

from __future__ import annotations

import math
from functools import lru_cache
from typing import NamedTuple, Tuple

import cv2
import numpy as np


DICTIONARY_NAMES: Tuple[str, ...] = (
    "DICT_4X4_50",
    "DICT_4X4_100",
    "DICT_4X4_250",
    "DICT_4X4_1000",
    "DICT_5X5_50",
    "DICT_5X5_100",
    "DICT_5X5_250",
    "DICT_5X5_1000",
    "DICT_6X6_50",
    "DICT_6X6_100",
    "DICT_6X6_250",
    "DICT_6X6_1000",
    "DICT_7X7_50",
    "DICT_7X7_100",
    "DICT_7X7_250",
    "DICT_7X7_1000",
    "DICT_ARUCO_ORIGINAL",
)


class DictionaryEntry(NamedTuple):
    name: str
    constant: int      # cv2.aruco.DICT_* value


@lru_cache(maxsize=None)
def _predefined(constant: int):
    return cv2.aruco.getPredefinedDictionary(constant)


class DictionaryCatalog:
    """
    Fixed, ordered list of named predefined dictionaries.

    Every lookup goes through an index clamped to the catalog, so a
    stale or out-of-range selector always resolves to a real entry.
    Capacities come from OpenCV (rows of ``bytesList``) rather than
    being hard-coded, since they depend on the dictionary.
    """

    def __init__(self, names=DICTIONARY_NAMES):
        self._entries: Tuple[DictionaryEntry, ...] = tuple(
            DictionaryEntry(n, getattr(cv2.aruco, n)) for n in names
        )
        self._by_name = {e.name: i for i, e in enumerate(self._entries)}

    def __len__(self) -> int:
        return len(self._entries)

    def clamp_index(self, index: int) -> int:
        return max(0, min(len(self._entries) - 1, int(index)))

    def index_of(self, name: str) -> int:
        """Catalog position of a dictionary name (KeyError if unknown)."""
        return self._by_name[name]

    def names(self) -> Tuple[str, ...]:
        return tuple(e.name for e in self._entries)

    def name(self, index: int) -> str:
        return self._entries[self.clamp_index(index)].name

    def handle(self, index: int):
        return _predefined(self._entries[self.clamp_index(index)].constant)

    def capacity(self, index: int) -> int:
        return int(self.handle(index).bytesList.shape[0])

    def draw(self, index: int, marker_id: int, size_px: int, border_bits: int) -> np.ndarray:
        """
        Single-channel marker bitmap of exactly ``size_px`` x ``size_px``.

        OpenCV refuses ``borderBits == 0``, so a border-less marker is
        drawn with a one-cell border and the border cells are cropped off.
        """
        dictionary = self.handle(index)
        if border_bits > 0:
            return cv2.aruco.generateImageMarker(dictionary, marker_id, size_px, borderBits=border_bits)

        cells = dictionary.markerSize
        cell_px = max(1, math.ceil(size_px / cells))
        full = cv2.aruco.generateImageMarker(
            dictionary, marker_id, (cells + 2) * cell_px, borderBits=1
        )
        inner = full[cell_px:-cell_px, cell_px:-cell_px]
        if inner.shape[0] == size_px:
            return np.ascontiguousarray(inner)
        return cv2.resize(inner, (size_px, size_px), interpolation=cv2.INTER_NEAREST)


CATALOG = DictionaryCatalog()
