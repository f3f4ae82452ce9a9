"""Merkleproof Core - Merkle tree construction and proof-free inclusion checks."""

from merkleproof_core.config import MerkleproofConfig, load_config
from merkleproof_core.crypto import compute_digest, hasher_for
from merkleproof_core.merkle import (
    EmptyInputError,
    MerkleNode,
    MerkleTree,
    build_tree,
    locate,
    verify,
)

__version__ = "0.1.0"

__all__ = [
    "EmptyInputError",
    "MerkleNode",
    "MerkleTree",
    "MerkleproofConfig",
    "build_tree",
    "compute_digest",
    "hasher_for",
    "load_config",
    "locate",
    "verify",
]
