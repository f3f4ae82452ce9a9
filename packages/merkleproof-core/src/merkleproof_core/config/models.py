from pydantic import BaseModel, Field, field_validator
from typing import Literal

from merkleproof_core.crypto import SUPPORTED_ALGORITHMS


class MerkleConfig(BaseModel):
    hashing_enabled: bool = True
    algorithm: str = "sha256"

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"algorithm must be one of {', '.join(SUPPORTED_ALGORITHMS)}, got {v!r}"
            )
        return v


class MerkleproofConfig(BaseModel):
    merkle: MerkleConfig = Field(default_factory=MerkleConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
