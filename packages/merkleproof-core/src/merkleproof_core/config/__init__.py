from .loader import load_config
from .models import MerkleConfig, MerkleproofConfig

__all__ = [
    "MerkleConfig",
    "MerkleproofConfig",
    "load_config",
]
