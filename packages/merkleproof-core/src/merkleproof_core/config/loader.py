"""Config loading: YAML file, ${VAR} expansion, then MERKLEPROOF_* overrides."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import MerkleproofConfig

logger = logging.getLogger(__name__)

# Environment variable -> (section, key); section None means top level.
ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "MERKLEPROOF_HASHING": ("merkle", "hashing_enabled"),
    "MERKLEPROOF_ALGORITHM": ("merkle", "algorithm"),
    "MERKLEPROOF_LOG_LEVEL": (None, "log_level"),
    "MERKLEPROOF_LOG_FORMAT": (None, "log_format"),
}


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """CLI > project-local > user-global."""
    paths = [Path("./merkleproof.yaml"), Path.home() / ".merkleproof" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def _read_yaml(path: Path) -> dict | None:
    """Parse *path*; None for an empty file."""
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
    return raw


def _apply_env_overrides(raw: dict) -> list[str]:
    """Write set MERKLEPROOF_* variables into *raw*; return the names applied."""
    applied: list[str] = []
    for var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value is None or value == "":
            continue
        target = raw
        if section:
            if raw.get(section) is None:
                raw[section] = {}
            target = raw[section]
        if not isinstance(target, dict):
            raise ValueError(f"Cannot apply {var}: '{section}' is not a mapping")
        target[key] = value
        applied.append(var)
    return applied


def load_config(cli_path: str | None = None) -> MerkleproofConfig:
    """Resolve the first non-empty config file, then apply env overrides."""
    raw: dict = {}
    source = "defaults"
    for path in _candidate_paths(cli_path):
        if not path.exists():
            continue
        loaded = _read_yaml(path)
        if loaded is None:
            continue
        raw = _expand_env_vars(loaded)
        source = str(path)
        break

    applied = _apply_env_overrides(raw)
    if applied:
        source = f"{source} + {', '.join(applied)}"

    try:
        config = MerkleproofConfig(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {source}: {e}") from e

    logger.debug("Loaded config from %s", source)
    return config


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `merkleproof config init`
DEFAULT_CONFIG_TEMPLATE = """\
# merkleproof.yaml
# Every value can be overridden with MERKLEPROOF_HASHING, MERKLEPROOF_ALGORITHM,
# MERKLEPROOF_LOG_LEVEL or MERKLEPROOF_LOG_FORMAT.

# Tree construction
merkle:
  hashing_enabled: true        # false = concatenate child hashes (shape testing only)
  algorithm: "sha256"          # sha256 | sha512 | sha3_256 | blake2b

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
