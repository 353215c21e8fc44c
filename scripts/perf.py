#!/usr/bin/env python3
"""Throughput of the pure-Python compressor compared with hashlib."""
from __future__ import annotations

import argparse
import hashlib
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5engine.core import BLOCK_SIZE, MD5_IV, compress_block
from md5engine.md5 import md5


def bench_compress(blocks: int) -> None:
    block = bytes(range(BLOCK_SIZE))
    state = MD5_IV
    start = time.time()
    for _ in range(blocks):
        state = compress_block(state, block)
    elapsed = time.time() - start
    rate = blocks / elapsed if elapsed else 0.0
    print(f"compress_block: blocks={blocks} time={elapsed:.3f}s rate={rate:.2f} blocks/s")


def bench_md5(size: int) -> None:
    data = b"a" * size
    start = time.time()
    ours = md5(data)
    elapsed = time.time() - start
    start = time.time()
    ref = hashlib.md5(data).digest()
    ref_elapsed = time.time() - start
    mb = size / (1 << 20)
    print(
        f"md5: size={size} time={elapsed:.3f}s ({mb / elapsed if elapsed else 0.0:.2f} MiB/s) "
        f"hashlib={ref_elapsed:.4f}s match={ours == ref}"
    )


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--blocks", type=int, default=20000)
    ap.add_argument("--size", type=int, default=1000000)
    args = ap.parse_args()

    bench_compress(args.blocks)
    bench_md5(args.size)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
