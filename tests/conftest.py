"""Shared test fixtures for Merkleproof."""

import pytest

from merkleproof_core.config.loader import ENV_OVERRIDES
from merkleproof_core.config.models import MerkleproofConfig
from merkleproof_core.merkle import MerkleTree

EVEN_CASE = ["A", "B", "C", "D", "E", "F", "G", "H"]
ODD_CASE = ["A", "B", "C", "D", "E"]


@pytest.fixture
def even_values():
    return [v.encode() for v in EVEN_CASE]


@pytest.fixture
def odd_values():
    return [v.encode() for v in ODD_CASE]


@pytest.fixture
def even_tree(even_values):
    return MerkleTree.from_values(even_values)


@pytest.fixture
def odd_tree(odd_values):
    return MerkleTree.from_values(odd_values)


@pytest.fixture
def sample_config():
    return MerkleproofConfig()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep a real ~/.merkleproof/config.yaml and MERKLEPROOF_* vars out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    return home
