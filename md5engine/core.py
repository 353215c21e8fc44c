from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

MASK32 = 0xFFFFFFFF

BLOCK_SIZE = 64
DIGEST_SIZE = 16

State = Tuple[int, int, int, int]

# MD5 initial value (A, B, C, D)
MD5_IV: State = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


# Rotation constants per step, RFC 1321 A.3
RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


def _mk_AC() -> List[int]:
    # AC_t = floor(2^32 * abs(sin(t+1)))
    return [int(abs(math.sin(i + 1)) * (1 << 32)) & MASK32 for i in range(64)]


AC: List[int] = _mk_AC()


def F(b: int, c: int, d: int) -> int:
    return ((b & c) | (~b & d)) & MASK32


def G(b: int, c: int, d: int) -> int:
    return ((b & d) | (c & ~d)) & MASK32


def H(b: int, c: int, d: int) -> int:
    return b ^ c ^ d


def I(b: int, c: int, d: int) -> int:  # noqa: E743
    return (c ^ (b | (~d & MASK32))) & MASK32


_ROUND_FUNCS = (F, G, H, I)


def ft(t: int, b: int, c: int, d: int) -> int:
    """Round function for step t: F, G, H, I for steps 0-15, 16-31, 32-47, 48-63."""
    if not 0 <= t < 64:
        raise ValueError("t out of range")
    return _ROUND_FUNCS[t >> 4](u32(b), u32(c), u32(d))


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")


# message word index per step, flattened once
_W_INDEX: List[int] = [wt_index(t) for t in range(64)]


def bytes_to_words_le(block) -> List[int]:
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return np.frombuffer(block, dtype="<u4").tolist()


def words_to_bytes_le(words: Sequence[int]) -> bytes:
    return np.asarray([u32(w) for w in words], dtype="<u4").tobytes()


def compress_block(state: State, block) -> State:
    """
    MD5 compression function.
    Inputs:
      - state: (A, B, C, D) chaining value
      - block: 64 bytes (any bytes-like object), read as 16 little-endian words
    Returns:
      - the new chaining value; the input state is left untouched
    """
    X = bytes_to_words_le(block)

    A, B, C, D = state
    a, b, c, d = A, B, C, D
    funcs = _ROUND_FUNCS

    for t in range(64):
        f = funcs[t >> 4](b, c, d)
        Tt = (a + f + AC[t] + X[_W_INDEX[t]]) & MASK32
        a, b, c, d = d, (b + rl(Tt, RC[t])) & MASK32, b, c

    return (u32(A + a), u32(B + b), u32(C + c), u32(D + d))
