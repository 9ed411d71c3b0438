#!/usr/bin/env python3
# ============================================================
# main.py — ArUco Marker Console (Entry Point)
# ============================================================

import argparse
import sys

import config
from core.dictionaries import CATALOG


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Interactive ArUco marker generator and live detector",
    )
    sub = ap.add_subparsers(dest="mode")

    gen = sub.add_parser("generate", help="Interactive marker generator window")
    gen.add_argument("-o", "--output", default=None,
                     help="default output path for the 's' key (auto name if omitted)")
    gen.add_argument("-d", "--dict", type=int, default=config.DEFAULT_DICT_INDEX,
                     help=f"dictionary index (0..{len(CATALOG) - 1}): "
                          + ", ".join(f"{i}={n}" for i, n in enumerate(CATALOG.names())))
    gen.add_argument("--id", type=int, default=config.DEFAULT_MARKER_ID,
                     help="initial marker id")
    gen.add_argument("--ms", type=int, default=config.DEFAULT_MARKER_SIZE,
                     help="marker size (px)")
    gen.add_argument("--bb", type=int, default=config.DEFAULT_BORDER_BITS,
                     help="border bits (0..7)")

    det = sub.add_parser("detect", help="Live camera marker detection")
    det.add_argument("--camera", type=int, default=config.CAMERA_INDEX,
                     help="camera index (-1 = first available)")
    det.add_argument("--dict", default=config.DETECT_DICT, choices=CATALOG.names(),
                     help="dictionary to detect")
    det.add_argument("--width", type=int, default=config.FRAME_WIDTH)
    det.add_argument("--height", type=int, default=config.FRAME_HEIGHT)
    det.add_argument("--headless", action="store_true",
                     help="no window; print detections and read keys from the terminal")
    return ap


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    mode = args.mode
    if mode is None:
        from ui.dialogs import show_mode_dialog
        mode = show_mode_dialog()
        if not mode:
            print("No mode selected. Exiting.")
            return 0
        # Dialog picks only the mode; options take their defaults
        args = build_parser().parse_args([mode])

    if mode == "generate":
        from core.generator import make_state
        from modes.generator import run_generator

        state = make_state(
            dict_index=args.dict,
            marker_id=args.id,
            marker_size=args.ms,
            border_bits=args.bb,
            output_path=args.output,
        )
        run_generator(state)
        return 0

    from modes.detect import run_detect
    return run_detect(
        camera_index=args.camera,
        dict_name=args.dict,
        width=args.width,
        height=args.height,
        headless=args.headless,
    )


if __name__ == "__main__":
    sys.exit(main())
