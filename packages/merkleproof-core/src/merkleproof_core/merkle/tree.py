"""Immutable Merkle tree with sibling lookup and root-reconstruction checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from merkleproof_core.config.models import MerkleConfig
from merkleproof_core.crypto import DEFAULT_HASHER, Hasher, hasher_for
from merkleproof_core.merkle.builder import build_from_digests, build_from_values
from merkleproof_core.merkle.models import (
    AtRoot,
    LocatedSibling,
    MerkleNode,
    SiblingOnLeft,
    SiblingOnRight,
)

logger = logging.getLogger(__name__)


def _locate_in(node: MerkleNode, target_hash: str) -> LocatedSibling | None:
    """Depth-first search for *target_hash* below (or at) *node*."""
    if node.hash == target_hash:
        return AtRoot(node)

    left, right = node.left, node.right
    if left is None:
        return None
    if right is None:
        # Single child: nothing was paired here, so search straight through.
        return _locate_in(left, target_hash)

    if left.hash == target_hash:
        return SiblingOnRight(right)
    if right.hash == target_hash:
        return SiblingOnLeft(left)

    found = _locate_in(left, target_hash)
    if found is not None:
        return found
    return _locate_in(right, target_hash)


class MerkleTree:
    """A built tree plus the hasher that built it.

    The tree never changes after construction; to add leaves, build a new one.
    """

    def __init__(self, root: MerkleNode, hasher: Hasher = DEFAULT_HASHER) -> None:
        self._root = root
        self._hasher = hasher

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_values(
        cls,
        values: Iterable[bytes],
        hashing_enabled: bool = True,
        algorithm: str = "sha256",
    ) -> MerkleTree:
        """Build a tree from raw leaf values."""
        hasher = hasher_for(hashing_enabled, algorithm)
        return cls(build_from_values(values, hasher), hasher)

    @classmethod
    def from_digests(
        cls,
        digests: Iterable[str],
        hashing_enabled: bool = True,
        algorithm: str = "sha256",
    ) -> MerkleTree:
        """Build a tree from leaf hashes computed elsewhere."""
        hasher = hasher_for(hashing_enabled, algorithm)
        return cls(build_from_digests(digests, hasher), hasher)

    @classmethod
    def from_config(cls, values: Iterable[bytes], config: MerkleConfig) -> MerkleTree:
        return cls.from_values(values, config.hashing_enabled, config.algorithm)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def root(self) -> MerkleNode:
        return self._root

    @property
    def root_hash(self) -> str:
        return self._root.hash

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def leaves(self) -> list[MerkleNode]:
        """Leaves in their original left-to-right order."""
        return list(self._root.iter_leaves())

    @property
    def size(self) -> int:
        return sum(1 for _ in self._root.iter_leaves())

    @property
    def height(self) -> int:
        """Edges on the longest root-to-leaf path; 0 for a single leaf."""
        height = 0
        level = [self._root]
        while True:
            level = [c for n in level for c in n.children()]
            if not level:
                return height
            height += 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def locate(self, target_hash: str) -> LocatedSibling | None:
        """Find the sibling of *target_hash*, or the root if it matches."""
        return _locate_in(self._root, target_hash)

    def audit_path(self, candidate_hash: str) -> list[LocatedSibling] | None:
        """Walk from *candidate_hash* up to the root.

        Returns every located sibling in order, ending with the ``AtRoot``
        entry, or ``None`` if the walk cannot reach the root.
        """
        current = candidate_hash
        path: list[LocatedSibling] = []
        seen: set[str] = set()

        while current not in seen:
            seen.add(current)
            found = self.locate(current)
            if found is None:
                return None
            path.append(found)
            if isinstance(found, AtRoot):
                return path if found.hash == current else None
            if isinstance(found, SiblingOnLeft):
                current = self._hasher.combine(found.hash, current)
            else:
                current = self._hasher.combine(current, found.hash)

        # Only reachable in passthrough mode, where combining with an empty
        # hash can reproduce the same string.
        return None

    def verify(self, candidate_hash: str) -> bool:
        """True if *candidate_hash* recombines up to this tree's root."""
        ok = self.audit_path(candidate_hash) is not None
        logger.debug("verify %s -> %s", candidate_hash, ok)
        return ok

    def contains_value(self, value: bytes) -> bool:
        """Hash *value* as a leaf and verify it."""
        return self.verify(self._hasher.leaf(value))

    def __repr__(self) -> str:
        return f"MerkleTree(root_hash={self.root_hash!r}, hasher={self._hasher!r})"


def locate(tree: MerkleTree, target_hash: str) -> LocatedSibling | None:
    return tree.locate(target_hash)


def verify(tree: MerkleTree, candidate_hash: str) -> bool:
    return tree.verify(candidate_hash)
