# ============================================================
# core/camera.py — Camera open & enumeration
# ============================================================

from typing import List

import cv2

import config


class CameraError(RuntimeError):
    """Raised when no usable camera can be opened."""


def probe_camera(index: int) -> bool:
    """True if the camera at ``index`` opens and delivers a frame."""
    cap = cv2.VideoCapture(index)
    try:
        if not cap.isOpened():
            return False
        ok, _ = cap.read()
        return bool(ok)
    finally:
        cap.release()


def list_cameras(max_index: int = config.MAX_CAMERA_PROBE) -> List[int]:
    return [i for i in range(max_index) if probe_camera(i)]


def open_camera(
    index: int = config.CAMERA_INDEX,
    width: int = config.FRAME_WIDTH,
    height: int = config.FRAME_HEIGHT,
) -> cv2.VideoCapture:
    """
    Open a camera and request a resolution.

    ``index < 0`` picks the first camera that delivers frames.
    The driver may ignore the requested size.
    """
    if index < 0:
        found = list_cameras()
        if not found:
            raise CameraError("No camera found")
        index = found[0]
        print(f"[INFO] Using first available camera: {index}")

    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise CameraError(f"Cannot open camera {index}")

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    actual_w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
    actual_h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    print(f"[INFO] Camera {index} opened at {actual_w}x{actual_h}")
    return cap
