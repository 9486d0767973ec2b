"""
EIP-712 Structured Data
Domain separator and Claim struct hashing for signed vouchers.

digest = keccak256(0x19 0x01 || domainSeparator || hashStruct(Claim))

The domain binds a voucher to one deployment: name, version, chain id and
verifying contract address. A voucher signed for another chain or another
contract produces a different digest and recovers a different address.
"""
from __future__ import annotations

from dataclasses import dataclass

from eth_abi import encode

from core.crypto.hashing import DIGEST_SIZE, keccak256, to_hex
from core.schemas.allocation import ClaimVoucher, normalize_address


EIP712_DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
CLAIM_TYPE = (
    "Claim(address claimant,address tokenContract,uint256 tokenId,uint256 amount,uint256 nonce)"
)

EIP712_DOMAIN_TYPEHASH = keccak256(EIP712_DOMAIN_TYPE.encode("utf-8"))
CLAIM_TYPEHASH = keccak256(CLAIM_TYPE.encode("utf-8"))

DEFAULT_DOMAIN_NAME = "SignatureAirdrop"
DEFAULT_DOMAIN_VERSION = "1"


@dataclass(frozen=True)
class EIP712Domain:
    """The deployment a voucher is valid for."""
    chain_id: int
    verifying_contract: str
    name: str = DEFAULT_DOMAIN_NAME
    version: str = DEFAULT_DOMAIN_VERSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "verifying_contract", normalize_address(self.verifying_contract))
        if self.chain_id < 0:
            raise ValueError(f"chain_id must be non-negative, got {self.chain_id}")

    def separator(self) -> bytes:
        return keccak256(
            encode(
                ["bytes32", "bytes32", "bytes32", "uint256", "address"],
                [
                    EIP712_DOMAIN_TYPEHASH,
                    keccak256(self.name.encode("utf-8")),
                    keccak256(self.version.encode("utf-8")),
                    self.chain_id,
                    self.verifying_contract,
                ],
            )
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
            "separator": to_hex(self.separator()),
        }


def hash_claim(voucher: ClaimVoucher) -> bytes:
    """hashStruct(Claim) for a voucher."""
    return keccak256(
        encode(
            ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
            [
                CLAIM_TYPEHASH,
                voucher.claimant,
                voucher.asset_contract,
                voucher.asset_id,
                voucher.amount,
                voucher.nonce,
            ],
        )
    )


def typed_data_digest(domain_separator: bytes, struct_hash: bytes) -> bytes:
    """Frame a struct hash with the EIP-191 0x1901 prefix and the domain separator."""
    if len(domain_separator) != DIGEST_SIZE or len(struct_hash) != DIGEST_SIZE:
        raise ValueError("Domain separator and struct hash must be 32 bytes each")
    return keccak256(b"\x19\x01" + domain_separator + struct_hash)


def voucher_digest(domain_separator: bytes, voucher: ClaimVoucher) -> bytes:
    return typed_data_digest(domain_separator, hash_claim(voucher))


__all__ = [
    "EIP712_DOMAIN_TYPE",
    "CLAIM_TYPE",
    "EIP712_DOMAIN_TYPEHASH",
    "CLAIM_TYPEHASH",
    "DEFAULT_DOMAIN_NAME",
    "DEFAULT_DOMAIN_VERSION",
    "EIP712Domain",
    "hash_claim",
    "typed_data_digest",
    "voucher_digest",
]
