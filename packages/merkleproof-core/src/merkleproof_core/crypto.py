"""Digest primitives and the combine strategies used to build trees."""

from __future__ import annotations

import hashlib
from typing import Protocol

SUPPORTED_ALGORITHMS = ("sha256", "sha512", "sha3_256", "blake2b")


def compute_digest(data: bytes, algorithm: str = "sha256") -> str:
    """Hash *data* and return the digest as uppercase hex."""
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algorithm}")
    return hashlib.new(algorithm, data).hexdigest().upper()


class Hasher(Protocol):
    """How leaf values are hashed and how two child hashes become a parent."""

    def leaf(self, value: bytes) -> str: ...

    def combine(self, left: str, right: str) -> str: ...


class DigestHasher:
    """Hashes leaves and the concatenation of child hashes with *algorithm*."""

    def __init__(self, algorithm: str = "sha256") -> None:
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        self.algorithm = algorithm

    def leaf(self, value: bytes) -> str:
        return compute_digest(value, self.algorithm)

    def combine(self, left: str, right: str) -> str:
        return compute_digest(f"{left}{right}".encode(), self.algorithm)

    def __repr__(self) -> str:
        return f"DigestHasher({self.algorithm!r})"


class ConcatHasher:
    """Passthrough mode: parents are the literal concatenation of child hashes.

    Not cryptographic. Useful for asserting tree shape by eye, e.g. the
    leaves ``A..E`` produce the root ``"ABCDE"``.
    """

    def leaf(self, value: bytes) -> str:
        return value.decode("utf-8", errors="backslashreplace")

    def combine(self, left: str, right: str) -> str:
        return f"{left}{right}"

    def __repr__(self) -> str:
        return "ConcatHasher()"


DEFAULT_HASHER = DigestHasher()


def hasher_for(hashing_enabled: bool = True, algorithm: str = "sha256") -> Hasher:
    """Pick the combine strategy for the given mode switch."""
    if not hashing_enabled:
        return ConcatHasher()
    if algorithm == "sha256":
        return DEFAULT_HASHER
    return DigestHasher(algorithm)


__all__ = [
    "ConcatHasher",
    "DEFAULT_HASHER",
    "DigestHasher",
    "Hasher",
    "SUPPORTED_ALGORITHMS",
    "compute_digest",
    "hasher_for",
]
