"""Builder for constructing Merkle trees from ordered leaf values."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from merkleproof_core.crypto import DEFAULT_HASHER, Hasher
from merkleproof_core.merkle.models import EmptyInputError, MerkleNode

logger = logging.getLogger(__name__)


def leaf_from(value: bytes, hasher: Hasher = DEFAULT_HASHER) -> MerkleNode:
    """Make a leaf whose hash is the hasher's leaf hash of *value*."""
    return MerkleNode(hash=hasher.leaf(value))


def _reduce_level(level: Sequence[MerkleNode], hasher: Hasher) -> list[MerkleNode]:
    """Pair nodes left to right into parents.

    An unpaired last node moves up as-is: no rehash, no duplication.
    """
    parents: list[MerkleNode] = []
    for i in range(0, len(level), 2):
        curr = level[i]
        if i + 1 >= len(level):
            parents.append(curr)
            break
        nxt = level[i + 1]
        parents.append(
            MerkleNode(
                hash=hasher.combine(curr.hash, nxt.hash),
                left=curr,
                right=nxt,
            )
        )
    return parents


def build(leaves: Sequence[MerkleNode], hasher: Hasher = DEFAULT_HASHER) -> MerkleNode:
    """Reduce *leaves* level by level until one node remains, and return it.

    A single leaf is returned unchanged as the root.
    """
    if not leaves:
        raise EmptyInputError("build")

    level = list(leaves)
    depth = 0
    while len(level) > 1:
        level = _reduce_level(level, hasher)
        depth += 1
        logger.debug("Level %d reduced to %d node(s)", depth, len(level))

    root = level[0]
    logger.debug("Built tree from %d leaves, root %s", len(leaves), root.hash)
    return root


def build_from_values(
    values: Iterable[bytes], hasher: Hasher = DEFAULT_HASHER
) -> MerkleNode:
    """Hash each raw value into a leaf, then build."""
    leaves = [leaf_from(v, hasher) for v in values]
    if not leaves:
        raise EmptyInputError("build_from_values")
    return build(leaves, hasher)


def build_from_digests(
    digests: Iterable[str], hasher: Hasher = DEFAULT_HASHER
) -> MerkleNode:
    """Build from leaf hashes the caller has already computed."""
    leaves = [MerkleNode(hash=d) for d in digests]
    if not leaves:
        raise EmptyInputError("build_from_digests")
    return build(leaves, hasher)
