#!/usr/bin/env python3
# ============================================================
# tools/generate_marker.py — Batch-export ArUco markers
# ============================================================

import argparse
import sys
from pathlib import Path
from typing import List

import cv2

sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from core.dictionaries import CATALOG
from core.generator import make_state, synthesize_filename
from ui.overlays import render_marker


def parse_ids(text: str) -> List[int]:
    """
    Parse an id list such as ``"0-4,7,10-12"``.

    Ranges are inclusive; duplicates are removed and the result sorted.
    """
    ids = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = (int(p) for p in part.split("-", 1))
            if end < start:
                raise ValueError(f"Bad id range: {part}")
            ids.update(range(start, end + 1))
        else:
            ids.add(int(part))
    return sorted(ids)


def export_markers(dict_name: str, ids: List[int], size: int, border: int, out_dir: str) -> List[Path]:
    """Write one padded PNG per id; ids beyond the dictionary are skipped."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    dict_index = CATALOG.index_of(dict_name)
    capacity = CATALOG.capacity(dict_index)
    written = []

    for marker_id in ids:
        if not 0 <= marker_id < capacity:
            print(f"⚠️  ID {marker_id} outside {dict_name} (0..{capacity - 1}), skipped")
            continue
        state = make_state(dict_index, marker_id, size, border)
        path = out / synthesize_filename(state)
        if not cv2.imwrite(str(path), render_marker(state)):
            print(f"[ERROR] Could not write {path}")
            continue
        written.append(path)
    return written


def main(argv=None):
    ap = argparse.ArgumentParser(description="Export ArUco marker PNGs")
    ap.add_argument("--dict", default=CATALOG.name(config.DEFAULT_DICT_INDEX),
                    choices=CATALOG.names())
    ap.add_argument("--ids", default="0", help="ids to export, e.g. '0-9,12'")
    ap.add_argument("--size", type=int, default=config.DEFAULT_MARKER_SIZE, help="marker size (px)")
    ap.add_argument("--border", type=int, default=config.DEFAULT_BORDER_BITS, help="border bits (0..7)")
    ap.add_argument("--out-dir", default=config.EXPORT_DIR)
    args = ap.parse_args(argv)

    print("=" * 60)
    print("ArUco Marker Export")
    print("=" * 60)

    try:
        ids = parse_ids(args.ids)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    written = export_markers(args.dict, ids, args.size, args.border, args.out_dir)
    used = make_state(CATALOG.index_of(args.dict), 0, args.size, args.border)

    print(f"\n✓ {len(written)} marker(s) written to {args.out_dir}/")
    print(f"  Dict: {args.dict}")
    print(f"  Size: {used.marker_size}x{used.marker_size} pixels (+ white margin)")
    print(f"  Border: {used.border_bits}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
