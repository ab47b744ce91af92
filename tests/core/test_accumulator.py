"""Tests for the streaming Nilsimsa accumulator."""
from __future__ import annotations

import array

import pytest

from nilsimsa_lite.core.accumulator import (
    Nilsimsa,
    _tran3,
    expected_total,
    nilsimsa_digest,
    nilsimsa_hexdigest,
    trigram_bins,
)
from nilsimsa_lite.core.tables import DIGEST_SIZE, NUM_BINS, TRAN

from tests.conftest import KNOWN_DIGESTS, ZERO_DIGEST, random_bytes


class TestTransformTable:
    def test_table_is_a_permutation(self):
        assert len(TRAN) == 256
        assert sorted(TRAN) == list(range(256))

    def test_tran3_known_value(self):
        # (TRAN[0] ^ TRAN[0]) + TRAN[0 ^ TRAN[0]] = 0 + TRAN[2]
        assert _tran3(0, 0, 0, 0) == 0x9E

    def test_trigram_bins_for_abcde(self):
        # window after "abcd" is d, c, b, a (newest first)
        bins = trigram_bins(ord("e"), ord("d"), ord("c"), ord("b"), ord("a"))
        assert bins == (33, 81, 36, 4, 231, 84, 101, 6)

    def test_trigram_bins_in_range(self):
        data = random_bytes(64)
        for i in range(4, len(data)):
            bins = trigram_bins(data[i], data[i - 1], data[i - 2], data[i - 3], data[i - 4])
            assert len(bins) == 8
            assert all(0 <= b < NUM_BINS for b in bins)


class TestKnownDigests:
    @pytest.mark.parametrize("data,expected", KNOWN_DIGESTS)
    def test_hexdigest(self, data, expected):
        h = Nilsimsa()
        h.update(data)
        assert h.hexdigest() == expected

    def test_digest_is_hexdigest_bytes(self):
        h = Nilsimsa()
        h.update(b"test string")
        assert h.digest() == bytes.fromhex(h.hexdigest())

    def test_one_shot_helpers(self):
        data, expected = KNOWN_DIGESTS[0]
        assert nilsimsa_hexdigest(data) == expected
        assert nilsimsa_digest(data) == bytes.fromhex(expected)

    def test_bin_layout(self):
        """Bin i lands in byte 31 - i // 8 at bit i % 8."""
        h = Nilsimsa()
        h.update(b"abcde")
        digest = h.digest()
        for b in (33, 81, 36, 4, 231, 84, 101, 6):
            assert digest[DIGEST_SIZE - 1 - (b >> 3)] & (1 << (b & 7))
        assert sum(bin(x).count("1") for x in digest) == 8


class TestWarmUp:
    @pytest.mark.parametrize("data", [b"", b"a", b"ab", b"abc", b"abcd"])
    def test_short_inputs_give_zero_digest(self, data):
        h = Nilsimsa()
        h.update(data)
        assert h.digest() == ZERO_DIGEST
        assert h.total_count == 0

    def test_fresh_accumulator(self):
        h = Nilsimsa()
        assert h.num_bytes == 0
        assert h.digest() == ZERO_DIGEST
        assert h.histogram() == (0,) * NUM_BINS

    def test_fifth_byte_adds_eight(self):
        h = Nilsimsa()
        h.update(b"abcd")
        assert h.total_count == 0
        h.update(b"e")
        assert h.total_count == 8

    @pytest.mark.parametrize("n", [0, 3, 4, 5, 17, 1000])
    def test_total_count_invariant(self, n):
        h = Nilsimsa()
        h.update(random_bytes(n))
        assert h.num_bytes == n
        assert h.total_count == expected_total(n) == 8 * max(0, n - 4)
        assert sum(h.histogram()) == h.total_count


class TestStreaming:
    def test_split_equals_whole(self):
        data = random_bytes(3000)
        whole = Nilsimsa()
        whole.update(data)
        for split in (0, 1, 2, 3, 4, 5, 1499, 2999, 3000):
            parts = Nilsimsa()
            parts.update(data[:split])
            parts.update(data[split:])
            assert parts.digest() == whole.digest(), f"split at {split}"
            assert parts.histogram() == whole.histogram()

    def test_byte_at_a_time(self):
        data = b"The quick brown fox jumps over the lazy dog"
        h = Nilsimsa()
        for i in range(len(data)):
            h.update(data[i:i + 1])
        assert h.digest() == nilsimsa_digest(data)

    def test_empty_update_is_noop(self):
        h = Nilsimsa()
        h.update(b"hello world")
        before = h.digest()
        h.update(b"")
        assert h.digest() == before
        assert h.num_bytes == 11

    def test_digest_does_not_mutate(self):
        h = Nilsimsa()
        h.update(b"first half of the stream ")
        h.digest()
        h.digest()
        h.update(b"second half of the stream")
        assert h.digest() == nilsimsa_digest(
            b"first half of the stream second half of the stream"
        )

    def test_repeated_digest_is_deterministic(self):
        h = Nilsimsa()
        h.update(random_bytes(500))
        assert h.digest() == h.digest() == h.digest()

    def test_digest_snapshot_reflects_current_state(self):
        h = Nilsimsa()
        h.update(b"test string")
        snap = h.digest()
        h.update(b" and more")
        assert snap == bytes.fromhex(KNOWN_DIGESTS[0][1])
        assert h.digest() != snap


class TestInputTypes:
    def test_str_is_utf8(self):
        text = "héllo wörld, 日本"
        assert nilsimsa_digest(text) == nilsimsa_digest(text.encode("utf-8"))

    def test_bytearray_and_memoryview(self):
        data = random_bytes(200)
        expected = nilsimsa_digest(data)
        assert nilsimsa_digest(bytearray(data)) == expected
        assert nilsimsa_digest(memoryview(data)) == expected

    def test_non_byte_buffer_is_read_as_raw_bytes(self):
        arr = array.array("I", range(50))
        assert nilsimsa_digest(arr) == nilsimsa_digest(arr.tobytes())

    def test_every_byte_value_accepted(self):
        h = Nilsimsa()
        h.update(bytes(range(256)) * 4)
        assert len(h.digest()) == DIGEST_SIZE

    @pytest.mark.parametrize("bad", [12345, 1.5, None, ["a", "b"]])
    def test_rejects_non_bytes(self, bad):
        with pytest.raises(TypeError):
            Nilsimsa().update(bad)


class TestCopy:
    def test_copy_is_independent(self):
        h = Nilsimsa()
        h.update(b"shared prefix ")
        fork = h.copy()
        h.update(b"branch one")
        fork.update(b"branch two")
        assert h.digest() == nilsimsa_digest(b"shared prefix branch one")
        assert fork.digest() == nilsimsa_digest(b"shared prefix branch two")

    def test_copy_preserves_window(self):
        h = Nilsimsa()
        h.update(b"ab")
        fork = h.copy()
        fork.update(b"cde")
        assert fork.hexdigest() == KNOWN_DIGESTS[2][1]


class TestCounterOverflow:
    def test_overflow_raises_instead_of_wrapping(self):
        h = Nilsimsa()
        for i in range(NUM_BINS):
            h._counts[i] = 2**64 - 1
        with pytest.raises(OverflowError):
            h.update(b"abcde")


class TestDigestWidth:
    @pytest.mark.parametrize("n", [0, 1, 4, 5, 64, 4097])
    def test_always_32_bytes(self, n):
        h = Nilsimsa()
        h.update(random_bytes(n))
        assert len(h.digest()) == DIGEST_SIZE
        assert len(h.hexdigest()) == 2 * DIGEST_SIZE

    def test_repr(self):
        h = Nilsimsa()
        h.update(b"abcdef")
        assert repr(h) == "Nilsimsa(num_bytes=6, total_count=16)"
