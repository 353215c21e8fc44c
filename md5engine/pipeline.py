"""
Block buffering in front of the compression function.

A HashContext is owned by exactly one computation. `update` takes it by
reference, compresses every complete 64-byte block it can and keeps the
unprocessed tail in `ctx.block[:ctx.pos]`. The byte count is kept as two
32-bit words (n0 low, n1 high) and only turned into a bit count when the
padding is built.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

from .core import BLOCK_SIZE, MASK32, MD5_IV, State, compress_block

logger = logging.getLogger(__name__)


@dataclass
class HashContext:
    state: State = MD5_IV
    block: bytearray = field(default_factory=lambda: bytearray(BLOCK_SIZE))
    pos: int = 0
    n0: int = 0
    n1: int = 0
    finalized: bool = False


def new_context() -> HashContext:
    return HashContext()


def add_length(n0: int, n1: int, length: int) -> Tuple[int, int]:
    n0 += length
    # carry may exceed one for chunks of 2^32 bytes or more
    return n0 & MASK32, (n1 + (n0 >> 32)) & MASK32


def bit_length_words(n0: int, n1: int) -> Tuple[int, int]:
    """Byte count (n0, n1) times 8, as (low, high) 32-bit words of the bit count."""
    return (n0 << 3) & MASK32, ((n1 << 3) | (n0 >> 29)) & MASK32


def update(ctx: HashContext, data: memoryview) -> HashContext:
    """Feed `data` into `ctx`.

    `data` must be a byte-format memoryview (see md5.as_message). Returns the
    same context for chaining.
    """
    if ctx.finalized:
        raise ValueError("context already finalized")

    n = len(data)
    pos = ctx.pos
    free = BLOCK_SIZE - pos

    if n < free:
        ctx.block[pos : pos + n] = data
        ctx.pos = pos + n
    else:
        block = ctx.block
        block[pos:] = data[:free]
        state = compress_block(ctx.state, block)
        compressed = 1

        # full blocks straight from the input
        i = free
        while i + BLOCK_SIZE <= n:
            state = compress_block(state, data[i : i + BLOCK_SIZE])
            i += BLOCK_SIZE
            compressed += 1

        rest = n - i
        block[:rest] = data[i:]
        ctx.state = state
        ctx.pos = rest
        logger.debug("update: %d bytes, %d blocks compressed, %d buffered", n, compressed, rest)

    ctx.n0, ctx.n1 = add_length(ctx.n0, ctx.n1, n)
    return ctx
