"""
CLI Configuration

Locates and loads the RuntimeConfig used by every command. Environment
variables (AIRDROP_* prefix, .env honoured) override file settings.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig


DEFAULT_CONFIG_PATHS = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path.home() / ".config" / "airdrop" / "config.json",
)


def find_config_file() -> Path | None:
    for candidate in DEFAULT_CONFIG_PATHS:
        path = candidate if candidate.is_absolute() else Path.cwd() / candidate
        if path.exists():
            return path
    return None


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a .json/.yaml config file. When None,
            ./airdrop.json, ./.airdrop.json and ~/.config/airdrop/config.json
            are tried in order.

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given and does not exist
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file. The signing key belongs in .env."""
    template = {
        "domain": {
            "name": "SignatureAirdrop",
            "version": "1",
            "chain_id": 31337,
            "verifying_contract": "0x0000000000000000000000000000000000000000",
        },
        "claims": {
            "max_proof_depth": 32,
            "distribution_path": "dist/airdrop-data.json",
            "merkle_root": None,
            "trusted_forwarder": None,
        },
        "generator": {
            "output_dir": "dist",
            "output_file": "airdrop-data.json",
            "max_reported_errors": 10,
        },
        "log_level": "INFO",
        "log_file": None,
    }
    return json.dumps(template, indent=2) + "\n"
