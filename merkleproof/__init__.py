"""Merkleproof command line interface."""
