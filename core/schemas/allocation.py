"""
Allocation Schemas

Purpose: Data model for allocation records, claim vouchers, assets and the
claim records emitted after settlement.

Wire names follow the off-chain tooling (tokenContract, tokenId); Python
attributes use asset_contract / asset_id.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidAllocationError


UINT256_MAX = 2**256 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(value: Any) -> str:
    """
    Validate an address and return its EIP-55 checksum form.

    Accepts checksummed, all-lowercase or all-uppercase hex strings. A
    mixed-case string with a wrong checksum is rejected.

    Raises:
        ValueError: If the value is not a well-formed address
    """
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"Invalid address: {value!r}")
    return to_checksum_address(value)


def coerce_uint256(value: Any) -> int:
    """
    Coerce an int or decimal string to an unsigned 256-bit integer.

    Raises:
        ValueError: If the value is negative, too large, boolean or not numeric
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid uint256")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(f"Not a non-negative integer: {value!r}")
        value = int(text)
    if not isinstance(value, int):
        raise ValueError(f"Not an integer: {value!r}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value out of uint256 range: {value}")
    return value


# =============================================================================
# Assets (tagged union over asset kind)
# =============================================================================

@dataclass(frozen=True)
class FungibleAsset:
    """An amount of a fungible token."""
    contract: str
    amount: int


@dataclass(frozen=True)
class NonFungibleAsset:
    """A single non-fungible token identified by id."""
    contract: str
    token_id: int


Asset = Union[FungibleAsset, NonFungibleAsset]


def asset_from_fields(asset_contract: str, asset_id: int, amount: int) -> Asset:
    """
    Build the asset described by an allocation's fields.

    asset_id == 0 designates a fungible asset, which must carry a positive
    amount. Any other id designates a non-fungible token and the amount is
    ignored.

    Raises:
        InvalidAllocationError: For a fungible asset with a zero amount
    """
    if asset_id == 0:
        if amount == 0:
            raise InvalidAllocationError(details={"asset_contract": asset_contract})
        return FungibleAsset(contract=asset_contract, amount=amount)
    return NonFungibleAsset(contract=asset_contract, token_id=asset_id)


# =============================================================================
# Records
# =============================================================================

class _AssetFields(BaseModel):
    """Fields shared by allocations and vouchers."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    claimant: str = Field(..., description="Recipient address")
    asset_contract: str = Field(..., alias="tokenContract", description="Token contract address")
    asset_id: int = Field(default=0, alias="tokenId", description="0 for fungible, token id otherwise")
    amount: int = Field(default=0, description="Fungible amount, ignored for non-fungible")

    @field_validator("claimant", "asset_contract", mode="before")
    @classmethod
    def _check_address(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("asset_id", "amount", mode="before")
    @classmethod
    def _check_uint(cls, v: Any) -> int:
        return coerce_uint256(v)

    @property
    def is_fungible(self) -> bool:
        return self.asset_id == 0

    def to_asset(self) -> Asset:
        """Resolve the asset; raises InvalidAllocationError for zero fungible amounts."""
        return asset_from_fields(self.asset_contract, self.asset_id, self.amount)


class Allocation(_AssetFields):
    """One recipient's entitlement in a committed distribution."""

    index: int = Field(..., description="Zero-based allocation index (bitmap position)")

    @field_validator("index", mode="before")
    @classmethod
    def _check_index(cls, v: Any) -> int:
        return coerce_uint256(v)


class ClaimVoucher(_AssetFields):
    """A claim authorized by the claimant's signature rather than a proof."""

    nonce: int = Field(..., description="Must equal the claimant's current nonce")

    @field_validator("nonce", mode="before")
    @classmethod
    def _check_nonce(cls, v: Any) -> int:
        return coerce_uint256(v)


class ClaimModule(str, Enum):
    """Which authorization path settled a claim."""
    MERKLE = "Merkle"
    SIGNATURE = "Signature"


class ClaimRecord(BaseModel):
    """Event emitted once per settled claim."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    module: ClaimModule
    claim_index: int = Field(..., description="Allocation index (Merkle) or nonce (Signature)")
    claimant: str
    asset_contract: str
    asset_id: int
    amount: int

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with uint256 fields as decimal strings."""
        return {
            "module": self.module.value,
            "claimIndex": str(self.claim_index),
            "claimant": self.claimant,
            "tokenContract": self.asset_contract,
            "tokenId": str(self.asset_id),
            "amount": str(self.amount),
        }


__all__ = [
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "normalize_address",
    "coerce_uint256",
    "FungibleAsset",
    "NonFungibleAsset",
    "Asset",
    "asset_from_fields",
    "Allocation",
    "ClaimVoucher",
    "ClaimModule",
    "ClaimRecord",
]
