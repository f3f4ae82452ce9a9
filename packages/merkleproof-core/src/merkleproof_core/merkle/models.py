"""Data models for the Merkle tree subsystem."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union


class EmptyInputError(ValueError):
    """Raised when a tree is requested from zero leaves."""

    def __init__(self, operation: str = "build") -> None:
        self.operation = operation
        super().__init__(f"{operation} requires at least one leaf")


@dataclass(frozen=True)
class MerkleNode:
    """A node in the Merkle tree: a leaf, or a parent owning its children.

    Carried-forward nodes (the unpaired tail of an odd level) are the same
    object at every level they pass through.
    """

    hash: str
    left: MerkleNode | None = None
    right: MerkleNode | None = None

    def __repr__(self) -> str:
        return f"MerkleNode(hash={self.hash!r}, children={len(self.children())})"

    def __post_init__(self) -> None:
        if self.right is not None and self.left is None:
            raise ValueError("internal node must have a left child")

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def children(self) -> tuple[MerkleNode, ...]:
        return tuple(c for c in (self.left, self.right) if c is not None)

    def iter_leaves(self) -> Iterator[MerkleNode]:
        """Yield leaves left to right without recursing."""
        stack: list[MerkleNode] = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
                continue
            # push right first so left is visited first
            stack.extend(reversed(node.children()))


@dataclass(frozen=True)
class AtRoot:
    """The searched hash is the root itself."""

    node: MerkleNode

    @property
    def hash(self) -> str:
        return self.node.hash


@dataclass(frozen=True)
class SiblingOnLeft:
    """The sibling is concatenated before the searched hash."""

    node: MerkleNode

    @property
    def hash(self) -> str:
        return self.node.hash


@dataclass(frozen=True)
class SiblingOnRight:
    """The sibling is concatenated after the searched hash."""

    node: MerkleNode

    @property
    def hash(self) -> str:
        return self.node.hash


LocatedSibling = Union[AtRoot, SiblingOnLeft, SiblingOnRight]
