# ============================================================
# core/detection.py — ArUco detection wrapper
# ============================================================

from __future__ import annotations

from typing import List, Tuple

import cv2
import numpy as np

import config
from core.dictionaries import CATALOG, DictionaryCatalog


class MarkerDetector:
    """Detects markers of one catalog dictionary with default parameters."""

    def __init__(self, dict_name: str = config.DETECT_DICT, catalog: DictionaryCatalog = CATALOG):
        self.dict_name = dict_name
        index = catalog.index_of(dict_name)
        params = cv2.aruco.DetectorParameters()
        self._detector = cv2.aruco.ArucoDetector(catalog.handle(index), params)

    def detect(self, frame: np.ndarray) -> Tuple[tuple, List[int], np.ndarray]:
        """
        Returns
        -------
        corners : tuple of (1, 4, 2) float32 arrays
        ids     : detected ids as plain ints (empty if none)
        raw_ids : OpenCV's (N, 1) id array, or None, for drawDetectedMarkers
        """
        if frame.ndim == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        else:
            gray = frame
        corners, raw_ids, _ = self._detector.detectMarkers(gray)
        ids = [] if raw_ids is None else [int(i) for i in raw_ids.flatten()]
        return corners, ids, raw_ids
