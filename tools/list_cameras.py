#!/usr/bin/env python3
# ============================================================
# tools/list_cameras.py — Find cameras OpenCV can open
# ============================================================

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from core.camera import list_cameras


def main(argv=None):
    ap = argparse.ArgumentParser(description="List camera indices that deliver frames")
    ap.add_argument("--max-index", type=int, default=config.MAX_CAMERA_PROBE,
                    help="probe indices 0..N-1")
    args = ap.parse_args(argv)

    found = list_cameras(args.max_index)
    if not found:
        print("  ⚠️  No cameras found")
        return 1

    print(f"✓ {len(found)} camera(s): {', '.join(str(i) for i in found)}")
    print(f"  Use: python main.py detect --camera {found[0]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
