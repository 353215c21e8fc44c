from __future__ import annotations

import argparse
import base64
import hashlib
import logging
import os
import sys
from pathlib import Path
from typing import List

from .md5 import md5, md5_hex

LOG_LEVEL_ENV = "MD5ENGINE_LOG_LEVEL"

VERIFY_VECTORS = [
    b"",
    b"a",
    b"abc",
    b"message digest",
    b"abcdefghijklmnopqrstuvwxyz",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    b"1234567890" * 8,
    b"The quick brown fox jumps over the lazy dog",
    b"a" * 56,
    b"a" * 64,
    b"a" * 66,
    b"a" * 1000000,
]


def _configure_logging(verbose: bool) -> None:
    name = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _render(digest: bytes, fmt: str) -> str:
    if fmt == "base64":
        return base64.b64encode(digest).decode("ascii")
    return digest.hex()


def cmd_verify_core(_: argparse.Namespace) -> int:
    ok_all = True
    for m in VERIFY_VECTORS:
        ours = md5_hex(m)
        ref = hashlib.md5(m).hexdigest()
        status = "OK" if ours == ref else "FAIL"
        print(f"MD5('{m[:20] + (b'...' if len(m) > 20 else b'')}') -> {status}")
        if ours != ref:
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_hash(ns: argparse.Namespace) -> int:
    if ns.text is not None and ns.files:
        print("hash: --text cannot be combined with files", file=sys.stderr)
        return 1
    if ns.text is not None:
        print(f"{_render(md5(ns.text), ns.format)}  \"{ns.text}\"")
        return 0

    rc = 0
    for name in ns.files or ["-"]:
        if name == "-":
            data = sys.stdin.buffer.read()
        else:
            path = Path(name)
            if not path.is_file():
                print(f"hash: file not found: {path}", file=sys.stderr)
                rc = 1
                continue
            data = path.read_bytes()
        print(f"{_render(md5(data), ns.format)}  {name}")
    return rc


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="md5engine")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", help="check the MD5 implementation against hashlib")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("hash", help="print the MD5 digest of files, stdin or text")
    s2.add_argument("files", nargs="*", help="files to hash, '-' for stdin")
    s2.add_argument("--text", help="hash this string (UTF-8) instead of files")
    s2.add_argument("--format", choices=["hex", "base64"], default="hex")
    s2.set_defaults(func=cmd_hash)

    args = p.parse_args(argv)
    _configure_logging(args.verbose)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
