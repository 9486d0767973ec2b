"""
API Dependencies

Dependency injection for the API. The deployment is built once from the
runtime configuration and shared by every request; tests install their own
with set_deployment().
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from core.config.runtime import RuntimeConfig
from offchain.generator import load_distribution
from orchestrator.deployment import AirdropDeployment, build_deployment

from api.errors import NotConfiguredError

logger = logging.getLogger(__name__)

_deployment: Optional[AirdropDeployment] = None
_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./airdrop.json
      2. ./.airdrop.json
      3. ~/.config/airdrop/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "airdrop.json",
        Path.cwd() / ".airdrop.json",
        Path.home() / ".config" / "airdrop" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def _build_from_config(config: RuntimeConfig) -> AirdropDeployment:
    if config.claims.merkle_root:
        return build_deployment(config)

    path = Path(config.claims.distribution_path)
    if not path.exists():
        raise NotConfiguredError(
            f"No merkle_root configured and distribution file not found: {path}"
        )
    distribution = load_distribution(path)
    logger.info(f"Serving distribution {path} with {len(distribution.claims)} claimant(s)")
    return build_deployment(config, merkle_root=distribution.root_bytes)


def get_deployment() -> AirdropDeployment:
    """Return the shared deployment, building it on first use."""
    global _deployment
    with _lock:
        if _deployment is None:
            _deployment = _build_from_config(_load_runtime_config())
        return _deployment


def set_deployment(deployment: Optional[AirdropDeployment]) -> None:
    """Install (or with None, reset) the shared deployment."""
    global _deployment
    with _lock:
        _deployment = deployment


def has_deployment() -> bool:
    """Whether a deployment is loaded, without building one."""
    with _lock:
        return _deployment is not None
