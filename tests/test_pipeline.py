import hashlib
import random
import unittest

from md5engine.core import BLOCK_SIZE, MD5_IV
from md5engine.md5 import finalize
from md5engine.pipeline import HashContext, add_length, bit_length_words, new_context, update


def feed(chunks) -> bytes:
    ctx = new_context()
    for chunk in chunks:
        update(ctx, memoryview(chunk))
    return finalize(ctx)


class TestUpdate(unittest.TestCase):
    def test_short_chunk_is_buffered(self) -> None:
        ctx = new_context()
        update(ctx, memoryview(b"abc"))
        self.assertEqual(ctx.state, MD5_IV)
        self.assertEqual(ctx.pos, 3)
        self.assertEqual(bytes(ctx.block[:3]), b"abc")
        self.assertEqual((ctx.n0, ctx.n1), (3, 0))

    def test_empty_chunk_is_noop(self) -> None:
        ctx = new_context()
        update(ctx, memoryview(b"x" * 10))
        state, pos, block = ctx.state, ctx.pos, bytes(ctx.block)
        update(ctx, memoryview(b""))
        self.assertEqual((ctx.state, ctx.pos, bytes(ctx.block)), (state, pos, block))
        self.assertEqual(ctx.n0, 10)

    def test_exact_block_compresses(self) -> None:
        ctx = new_context()
        update(ctx, memoryview(b"a" * BLOCK_SIZE))
        self.assertNotEqual(ctx.state, MD5_IV)
        self.assertEqual(ctx.pos, 0)

    def test_fill_then_stream_then_buffer(self) -> None:
        ctx = new_context()
        update(ctx, memoryview(b"a" * 60))
        update(ctx, memoryview(b"b" * (4 + 3 * BLOCK_SIZE + 5)))
        self.assertEqual(ctx.pos, 5)
        self.assertEqual(bytes(ctx.block[:5]), b"bbbbb")
        self.assertEqual(ctx.n0, 60 + 4 + 3 * BLOCK_SIZE + 5)

    def test_pos_stays_below_block_size(self) -> None:
        rng = random.Random(1321)
        ctx = new_context()
        total = 0
        for _ in range(200):
            n = rng.randrange(0, 200)
            update(ctx, memoryview(bytes(n)))
            total += n
            self.assertTrue(0 <= ctx.pos < BLOCK_SIZE)
            self.assertEqual(ctx.pos, total % BLOCK_SIZE)
        self.assertEqual(ctx.n0, total)

    def test_input_not_mutated(self) -> None:
        data = bytearray(b"0123456789" * 20)
        before = bytes(data)
        update(new_context(), memoryview(data))
        self.assertEqual(bytes(data), before)

    def test_finalize_drains_buffer(self) -> None:
        for n in (0, 55, 56, 63, 64, 120):
            ctx = new_context()
            update(ctx, memoryview(b"q" * n))
            digest = finalize(ctx)
            self.assertEqual(ctx.pos, 0)
            self.assertEqual((ctx.n0, ctx.n1), (n, 0))
            self.assertEqual(digest, hashlib.md5(b"q" * n).digest())

    def test_rejects_finalized_context(self) -> None:
        ctx = HashContext()
        update(ctx, memoryview(b"abc"))
        finalize(ctx)
        with self.assertRaises(ValueError):
            update(ctx, memoryview(b"more"))
        with self.assertRaises(ValueError):
            finalize(ctx)


class TestLengthCounter(unittest.TestCase):
    def test_add_length_carries(self) -> None:
        self.assertEqual(add_length(0, 0, 5), (5, 0))
        self.assertEqual(add_length(0xFFFFFFFF, 0, 1), (0, 1))
        self.assertEqual(add_length(0xFFFFFFF0, 2, 0x20), (0x10, 3))
        self.assertEqual(add_length(0, 0, 1 << 33), (0, 2))

    def test_bit_length_shift_carries_into_high_word(self) -> None:
        self.assertEqual(bit_length_words(3, 0), (24, 0))
        self.assertEqual(bit_length_words(0x20000000, 0), (0, 1))
        self.assertEqual(bit_length_words(0xFFFFFFFF, 0), (0xFFFFFFF8, 7))
        self.assertEqual(bit_length_words(0, 1), (0, 8))
        n = 0x1_2345_6789
        lo, hi = bit_length_words(n & 0xFFFFFFFF, n >> 32)
        self.assertEqual((hi << 32) | lo, n * 8)


class TestIncrementalEquivalence(unittest.TestCase):
    def test_random_partitions(self) -> None:
        rng = random.Random(42)
        for length in (0, 1, 55, 56, 63, 64, 65, 127, 128, 1000):
            data = bytes(rng.randrange(256) for _ in range(length))
            expected = hashlib.md5(data).digest()
            for _ in range(10):
                cuts = sorted(rng.randrange(length + 1) for _ in range(rng.randrange(6)))
                bounds = [0] + cuts + [length]
                chunks = [data[a:b] for a, b in zip(bounds, bounds[1:])]
                self.assertEqual(feed(chunks), expected)

    def test_byte_at_a_time(self) -> None:
        data = b"The quick brown fox jumps over the lazy dog" * 5
        self.assertEqual(feed(data[i : i + 1] for i in range(len(data))), hashlib.md5(data).digest())


if __name__ == "__main__":
    unittest.main()
