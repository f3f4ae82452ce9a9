"""Tests for digest primitives and combine strategies."""

import pytest

from merkleproof_core.crypto import (
    DEFAULT_HASHER,
    ConcatHasher,
    DigestHasher,
    compute_digest,
    hasher_for,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("A", "559AEAD08264D5795D3909718CDD05ABD49572E84FE55590EEF31A88A08FDFFD"),
        ("B", "DF7E70E5021544F4834BBEE64A9E3789FEBC4BE81470DF629CAD6DDB03320A5C"),
        ("C", "6B23C0D5F35D1B11F9B683F0B0A617355DEB11277D91AE091D399C655B87940D"),
        ("D", "3F39D5C348E5B79D06E842C114E6CC571583BBF44E4B0EBFDA1A01EC05745D43"),
    ],
)
def test_compute_digest_known_values(value, expected):
    assert compute_digest(value.encode()) == expected


def test_compute_digest_empty_input():
    assert compute_digest(b"") == (
        "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"
    )


def test_compute_digest_uppercase_fixed_width():
    for data in (b"", b"x", b"x" * 1000):
        d = compute_digest(data)
        assert len(d) == 64
        assert d == d.upper()
        assert all(c in "0123456789ABCDEF" for c in d)


def test_compute_digest_other_algorithms():
    assert len(compute_digest(b"A", "sha512")) == 128
    assert len(compute_digest(b"A", "sha3_256")) == 64
    assert len(compute_digest(b"A", "blake2b")) == 128


def test_compute_digest_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        compute_digest(b"A", "md4")


def test_digest_hasher_combines_hex_strings():
    hasher = DigestHasher()
    left, right = hasher.leaf(b"A"), hasher.leaf(b"B")
    assert hasher.combine(left, right) == compute_digest((left + right).encode())
    assert hasher.combine(left, right) != hasher.combine(right, left)


def test_digest_hasher_rejects_unknown_algorithm():
    with pytest.raises(ValueError):
        DigestHasher("crc32")


def test_concat_hasher():
    hasher = ConcatHasher()
    assert hasher.leaf(b"A") == "A"
    assert hasher.combine("AB", "C") == "ABC"


def test_concat_hasher_undecodable_bytes():
    assert ConcatHasher().leaf(b"\xff") == "\\xff"


def test_hasher_for_modes():
    assert hasher_for() is DEFAULT_HASHER
    assert isinstance(hasher_for(hashing_enabled=False), ConcatHasher)
    assert hasher_for(True, "sha512").algorithm == "sha512"
