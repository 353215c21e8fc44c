#!/usr/bin/env python3
"""Accuracy checks: md5engine against hashlib over random inputs and chunkings."""
from __future__ import annotations

import argparse
import hashlib
import random
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5engine.md5 import finalize, md5
from md5engine.pipeline import new_context, update


def check_random_lengths(samples: int, max_len: int, rng: random.Random) -> bool:
    ok = True
    for _ in range(samples):
        msg = rng.randbytes(rng.randrange(max_len + 1))
        if md5(msg) != hashlib.md5(msg).digest():
            print(f"mismatch: len={len(msg)}")
            ok = False
    print(f"random_lengths: samples={samples} {'PASS' if ok else 'FAIL'}")
    return ok


def check_chunked(samples: int, max_len: int, rng: random.Random) -> bool:
    ok = True
    for _ in range(samples):
        msg = rng.randbytes(rng.randrange(max_len + 1))
        view = memoryview(msg)
        ctx = new_context()
        i = 0
        while i < len(msg):
            step = rng.randrange(1, 150)
            update(ctx, view[i : i + step])
            i += step
        if finalize(ctx) != hashlib.md5(msg).digest():
            print(f"chunked mismatch: len={len(msg)}")
            ok = False
    print(f"chunked_updates: samples={samples} {'PASS' if ok else 'FAIL'}")
    return ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--samples", type=int, default=200)
    ap.add_argument("--max-len", type=int, default=4096)
    ap.add_argument("--seed", type=int, default=1321)
    args = ap.parse_args()

    rng = random.Random(args.seed)
    ok = check_random_lengths(args.samples, args.max_len, rng)
    ok = check_chunked(args.samples, args.max_len, rng) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
