# ============================================================
# modes/detect.py — Live ArUco Detection Demo
# ============================================================

import cv2

import config
from core import keys
from core.camera import CameraError
from core.detection import MarkerDetector
from core.session import DetectSession
from core.timing import FrameTimer
from ui.overlays import draw_controls_hint, draw_detections, draw_fps, draw_ids


def run_detect(
    camera_index: int = config.CAMERA_INDEX,
    dict_name: str = config.DETECT_DICT,
    width: int = config.FRAME_WIDTH,
    height: int = config.FRAME_HEIGHT,
    headless: bool = False,
    capture=None,
) -> int:
    """
    Camera → detect → draw → show, until ESC/q or SIGINT/SIGTERM.

    Returns a process exit status. In headless mode nothing is shown;
    detections are printed and keys are read from the terminal.
    """
    try:
        detector = MarkerDetector(dict_name)
    except (KeyError, cv2.error) as e:
        print(f"[ERROR] ArUco setup failed for {dict_name}: {e}")
        return 1

    timer = FrameTimer()
    last_ids = None
    frames = 0

    try:
        with DetectSession(camera_index, width, height, headless, capture) as session:
            print(f"[INFO] Detecting {dict_name}. ESC/q to exit"
                  + (" (keys read from terminal)" if headless else ""))

            while not session.stop_requested:
                ok, frame = session.read()
                if not ok or frame is None:
                    print("[WARN] Camera returned no frame, stopping.")
                    break
                frames += 1

                with timer.measure():
                    corners, ids, raw_ids = detector.detect(frame)
                timer.tick()

                if ids != last_ids:
                    if ids:
                        print(f"[DETECT] IDs: {ids}")
                    last_ids = ids

                if not headless:
                    draw_detections(frame, corners, raw_ids)
                    draw_fps(frame, timer.fps, timer.latency_ms)
                    draw_ids(frame, ids)
                    draw_controls_hint(frame, ["ESC/q: Exit"])
                    cv2.imshow(config.DETECT_WINDOW, frame)

                code = session.poll_key()
                if code is not None and keys.is_quit(code):
                    break
    except CameraError as e:
        print(f"[ERROR] {e}")
        return 1

    print(f"[INFO] Session ended after {frames} frames ({timer.fps:.1f} FPS avg).")
    return 0
