"""Merkle tree construction, sibling lookup, and inclusion verification."""

from collections.abc import Iterable

from merkleproof_core.merkle.builder import (
    build,
    build_from_digests,
    build_from_values,
    leaf_from,
)
from merkleproof_core.merkle.models import (
    AtRoot,
    EmptyInputError,
    LocatedSibling,
    MerkleNode,
    SiblingOnLeft,
    SiblingOnRight,
)
from merkleproof_core.merkle.tree import MerkleTree, locate, verify


def build_tree(values: Iterable[bytes], *args, **kwargs) -> MerkleTree:
    """Convenience wrapper around MerkleTree.from_values()."""
    return MerkleTree.from_values(values, *args, **kwargs)


__all__ = [
    "AtRoot",
    "EmptyInputError",
    "LocatedSibling",
    "MerkleNode",
    "MerkleTree",
    "SiblingOnLeft",
    "SiblingOnRight",
    "build",
    "build_from_digests",
    "build_from_values",
    "build_tree",
    "leaf_from",
    "locate",
    "verify",
]
