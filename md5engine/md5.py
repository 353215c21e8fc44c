"""
One-shot MD5 (RFC 1321).

`md5(data)` returns the raw 16-byte digest of `data`, which may be text
(hashed as UTF-8) or any object supporting the buffer protocol. Only the
bytes visible through the object's buffer are read, so a memoryview slice
of a larger allocation hashes just that slice.

Size limit: the byte count is carried in two 32-bit words, so the encoded
bit length is exact for inputs below 2^61 bytes. Beyond that the length
field wraps modulo 2^64 as RFC 1321 specifies. No cap below that is
enforced.
"""
from __future__ import annotations

import base64
import logging

from .core import BLOCK_SIZE, words_to_bytes_le
from .pipeline import HashContext, bit_length_words, new_context, update

logger = logging.getLogger(__name__)


def as_message(data) -> memoryview:
    if isinstance(data, str):
        return memoryview(data.encode("utf-8"))
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(
            f"md5 expects str or a bytes-like object, got {type(data).__name__}"
        ) from None
    if view.format == "B" and view.ndim == 1 and view.c_contiguous:
        return view
    if view.ndim == 1 and view.c_contiguous and view.format in ("b", "c"):
        return view.cast("B")
    # raw bytes of strided, multi-dimensional or multi-byte views
    return memoryview(view.tobytes())


def md5_padding(pos: int, n0: int, n1: int) -> bytes:
    # room for 0x80 plus the 8 length bytes, otherwise spill into a second block
    pad_len = BLOCK_SIZE - pos
    if pad_len < 9:
        pad_len += BLOCK_SIZE
    lo, hi = bit_length_words(n0, n1)
    return (
        b"\x80"
        + b"\x00" * (pad_len - 9)
        + lo.to_bytes(4, "little")
        + hi.to_bytes(4, "little")
    )


def finalize(ctx: HashContext) -> bytes:
    """Pad, compress the last block(s) and serialize the state. Consumes ctx."""
    pad = md5_padding(ctx.pos, ctx.n0, ctx.n1)
    logger.debug("finalize: pos=%d padding=%d", ctx.pos, len(pad))
    # the padding must not count towards the message length
    n0, n1 = ctx.n0, ctx.n1
    update(ctx, memoryview(pad))
    ctx.n0, ctx.n1 = n0, n1
    if ctx.pos:
        raise RuntimeError(f"padding left {ctx.pos} bytes buffered")
    ctx.finalized = True
    # digest is little-endian of the state words in order (A, B, C, D)
    return words_to_bytes_le(ctx.state)


def md5(data) -> bytes:
    msg = as_message(data)
    logger.debug("md5: %d bytes", len(msg))
    ctx = new_context()
    update(ctx, msg)
    return finalize(ctx)


def md5_hex(data) -> str:
    return md5(data).hex()


def md5_base64(data) -> str:
    return base64.b64encode(md5(data)).decode("ascii")
