"""
Runtime Configuration Module

Provides configuration loading and management for the claim service and
the offline tooling.
"""

from .runtime import (
    ClaimsConfig,
    DomainConfig,
    GeneratorConfig,
    RuntimeConfig,
    SignerConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ClaimsConfig",
    "DomainConfig",
    "GeneratorConfig",
    "RuntimeConfig",
    "SignerConfig",
    "get_default_config",
    "set_default_config",
]
