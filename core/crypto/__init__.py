"""
Core cryptographic utilities.

Keccak hashing, secp256k1 signatures, EIP-712 typed data and voucher
verification.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    to_hex,
    from_hex,
    digest_from_hex,
    hash_concat,
    hash_sorted_pair,
)
from .signatures import (
    Signature,
    SignatureFormatError,
    private_key_to_address,
    parse_private_key,
    sign_digest,
    recover_signer,
)
from .typed_data import (
    CLAIM_TYPE,
    CLAIM_TYPEHASH,
    EIP712_DOMAIN_TYPEHASH,
    EIP712Domain,
    hash_claim,
    typed_data_digest,
    voucher_digest,
)
from .vouchers import VoucherVerifier

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "hash_concat",
    "hash_sorted_pair",
    "Signature",
    "SignatureFormatError",
    "private_key_to_address",
    "parse_private_key",
    "sign_digest",
    "recover_signer",
    "CLAIM_TYPE",
    "CLAIM_TYPEHASH",
    "EIP712_DOMAIN_TYPEHASH",
    "EIP712Domain",
    "hash_claim",
    "typed_data_digest",
    "voucher_digest",
    "VoucherVerifier",
]
