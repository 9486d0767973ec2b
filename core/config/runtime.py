"""
Runtime Configuration

Central configuration for the claim deployment, the offline generator and
the voucher signer.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.typed_data import DEFAULT_DOMAIN_NAME, DEFAULT_DOMAIN_VERSION, EIP712Domain
from core.merkle.merkle_tree import DEFAULT_MAX_PROOF_DEPTH
from core.schemas.allocation import ZERO_ADDRESS

load_dotenv()


ENV_PREFIX = "AIRDROP_"


@dataclass
class DomainConfig:
    """EIP-712 domain the signature module verifies against."""
    name: str = DEFAULT_DOMAIN_NAME
    version: str = DEFAULT_DOMAIN_VERSION
    chain_id: int = 31337  # localhost/hardhat/anvil
    verifying_contract: str = ZERO_ADDRESS

    def to_domain(self) -> EIP712Domain:
        return EIP712Domain(
            chain_id=self.chain_id,
            verifying_contract=self.verifying_contract,
            name=self.name,
            version=self.version,
        )


@dataclass
class ClaimsConfig:
    """Configuration for the claim orchestrators."""
    max_proof_depth: int = DEFAULT_MAX_PROOF_DEPTH
    distribution_path: str = "dist/airdrop-data.json"
    merkle_root: Optional[str] = None  # overrides the root read from distribution_path
    trusted_forwarder: Optional[str] = None


@dataclass
class GeneratorConfig:
    """Configuration for the offline distribution generator."""
    output_dir: str = "dist"
    output_file: str = "airdrop-data.json"
    max_reported_errors: int = 10

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_file


@dataclass
class SignerConfig:
    """Voucher signing key (hex). Keep it in .env, never in a config file."""
    private_key: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (AIRDROP_* prefix, .env honoured)
    - JSON or YAML file
    - Programmatic construction
    """
    domain: DomainConfig = field(default_factory=DomainConfig)
    claims: ClaimsConfig = field(default_factory=ClaimsConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_CHAIN_ID: EIP-712 chain id
        - AIRDROP_VERIFYING_CONTRACT: EIP-712 verifying contract
        - AIRDROP_DOMAIN_NAME / AIRDROP_DOMAIN_VERSION
        - AIRDROP_MAX_PROOF_DEPTH: Maximum accepted proof length
        - AIRDROP_DISTRIBUTION_PATH: Generator output read by the claim service
        - AIRDROP_MERKLE_ROOT: Explicit commitment root
        - AIRDROP_TRUSTED_FORWARDER: Relayer allowed to forward a sender
        - AIRDROP_OUTPUT_DIR: Generator output directory
        - AIRDROP_SIGNER_KEY: Voucher signing key
        - AIRDROP_LOG_LEVEL / AIRDROP_LOG_FILE
        """
        overrides: dict[str, Any] = {}

        # Domain
        if os.getenv(f"{ENV_PREFIX}CHAIN_ID"):
            overrides.setdefault("domain", {})["chain_id"] = int(os.getenv(f"{ENV_PREFIX}CHAIN_ID", "0"))
        if os.getenv(f"{ENV_PREFIX}VERIFYING_CONTRACT"):
            overrides.setdefault("domain", {})["verifying_contract"] = os.getenv(f"{ENV_PREFIX}VERIFYING_CONTRACT")
        if os.getenv(f"{ENV_PREFIX}DOMAIN_NAME"):
            overrides.setdefault("domain", {})["name"] = os.getenv(f"{ENV_PREFIX}DOMAIN_NAME")
        if os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION"):
            overrides.setdefault("domain", {})["version"] = os.getenv(f"{ENV_PREFIX}DOMAIN_VERSION")

        # Claims
        if os.getenv(f"{ENV_PREFIX}MAX_PROOF_DEPTH"):
            overrides.setdefault("claims", {})["max_proof_depth"] = int(os.getenv(f"{ENV_PREFIX}MAX_PROOF_DEPTH", "32"))
        if os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH"):
            overrides.setdefault("claims", {})["distribution_path"] = os.getenv(f"{ENV_PREFIX}DISTRIBUTION_PATH")
        if os.getenv(f"{ENV_PREFIX}MERKLE_ROOT"):
            overrides.setdefault("claims", {})["merkle_root"] = os.getenv(f"{ENV_PREFIX}MERKLE_ROOT")
        if os.getenv(f"{ENV_PREFIX}TRUSTED_FORWARDER"):
            overrides.setdefault("claims", {})["trusted_forwarder"] = os.getenv(f"{ENV_PREFIX}TRUSTED_FORWARDER")

        # Generator
        if os.getenv(f"{ENV_PREFIX}OUTPUT_DIR"):
            overrides.setdefault("generator", {})["output_dir"] = os.getenv(f"{ENV_PREFIX}OUTPUT_DIR")

        # Signer
        if os.getenv(f"{ENV_PREFIX}SIGNER_KEY"):
            overrides.setdefault("signer", {})["private_key"] = os.getenv(f"{ENV_PREFIX}SIGNER_KEY")

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        domain_data = data.get("domain", {})
        claims_data = data.get("claims", {})
        generator_data = data.get("generator", {})
        signer_data = data.get("signer", {})

        domain = DomainConfig(**domain_data) if domain_data else DomainConfig()
        claims = ClaimsConfig(**claims_data) if claims_data else ClaimsConfig()
        generator = GeneratorConfig(**generator_data) if generator_data else GeneratorConfig()
        signer = SignerConfig(**signer_data) if signer_data else SignerConfig()

        return cls(
            domain=domain,
            claims=claims,
            generator=generator,
            signer=signer,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for section in ("domain", "claims", "generator", "signer"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary. The signing key is never exported."""
        return {
            "domain": {
                "name": self.domain.name,
                "version": self.domain.version,
                "chain_id": self.domain.chain_id,
                "verifying_contract": self.domain.verifying_contract,
            },
            "claims": {
                "max_proof_depth": self.claims.max_proof_depth,
                "distribution_path": self.claims.distribution_path,
                "merkle_root": self.claims.merkle_root,
                "trusted_forwarder": self.claims.trusted_forwarder,
            },
            "generator": {
                "output_dir": self.generator.output_dir,
                "output_file": self.generator.output_file,
                "max_reported_errors": self.generator.max_reported_errors,
            },
            "signer": {
                "configured": self.signer.private_key is not None,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
