"""
Signature Unit Tests
Tests for core/crypto/signatures.py

Known answers use the Hardhat development accounts and the signature from
the EIP-712 Mail example.
"""
import pytest

from core.crypto.hashing import keccak256
from core.crypto.signatures import (
    SECP256K1_N,
    Signature,
    SignatureFormatError,
    parse_private_key,
    private_key_to_address,
    recover_signer,
    sign_digest,
)

from fixtures.common import ALICE, ALICE_KEY, BOB, BOB_KEY, CAROL, CAROL_KEY


EIP712_MAIL_DIGEST = bytes.fromhex(
    "be609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2"
)
EIP712_MAIL_SIGNATURE = Signature(
    r=0x4355C47D63924E8A72E509B65029052EB6C299D53A04E167C5775FD466751C9D,
    s=0x07299936D304C153F6443DFA05F40FF007D72911B6F72307F996231605B91562,
    v=28,
)
COW = "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"


class TestKeys:
    """Address derivation."""

    @pytest.mark.parametrize(
        "key,address",
        [
            (ALICE_KEY, ALICE),
            (BOB_KEY, BOB),
            (CAROL_KEY, CAROL),
            ((1).to_bytes(32, "big"), "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"),
        ],
    )
    def test_known_addresses(self, key, address):
        assert private_key_to_address(parse_private_key(key)) == address

    def test_cow_key(self):
        assert private_key_to_address(keccak256(b"cow")) == COW

    def test_parse_without_prefix(self):
        assert parse_private_key(ALICE_KEY[2:]) == parse_private_key(ALICE_KEY)

    def test_parse_rejects_short_key(self):
        with pytest.raises(ValueError, match="32 bytes"):
            parse_private_key("0x1234")


class TestSignRecover:
    """Round trips and the EIP-712 reference signature."""

    def test_reference_signature_recovers(self):
        assert recover_signer(EIP712_MAIL_DIGEST, EIP712_MAIL_SIGNATURE) == COW

    def test_round_trip(self):
        digest = keccak256(b"voucher")
        signature = sign_digest(digest, parse_private_key(BOB_KEY))
        assert signature.v in (27, 28)
        assert recover_signer(digest, signature) == BOB

    def test_different_digest_recovers_other_address(self):
        signature = sign_digest(keccak256(b"one"), parse_private_key(BOB_KEY))
        assert recover_signer(keccak256(b"two"), signature) != BOB

    def test_signatures_are_low_s(self):
        for i in range(8):
            signature = sign_digest(keccak256(bytes([i])), parse_private_key(ALICE_KEY))
            assert signature.s <= SECP256K1_N // 2

    def test_digest_must_be_32_bytes(self):
        with pytest.raises(ValueError):
            sign_digest(b"short", parse_private_key(ALICE_KEY))


class TestEncoding:
    """65-byte r || s || v wire format."""

    def test_bytes_round_trip(self):
        raw = EIP712_MAIL_SIGNATURE.to_bytes()
        assert len(raw) == 65
        assert raw[64] == 28
        assert Signature.from_bytes(raw) == EIP712_MAIL_SIGNATURE

    def test_hex_round_trip(self):
        assert Signature.from_hex(EIP712_MAIL_SIGNATURE.to_hex()) == EIP712_MAIL_SIGNATURE

    def test_recovery_id_normalized(self):
        raw = EIP712_MAIL_SIGNATURE.to_bytes()[:64] + bytes([1])
        assert Signature.from_bytes(raw).v == 28

    @pytest.mark.parametrize("length", [0, 64, 66])
    def test_bad_length(self, length):
        with pytest.raises(SignatureFormatError):
            Signature.from_bytes(b"\x01" * length)

    def test_bad_hex(self):
        with pytest.raises(SignatureFormatError):
            Signature.from_hex("not hex")


class TestMalleability:
    """Rejections beyond plain ecrecover."""

    def test_high_s_rejected(self):
        flipped = Signature(
            r=EIP712_MAIL_SIGNATURE.r,
            s=SECP256K1_N - EIP712_MAIL_SIGNATURE.s,
            v=27,
        )
        with pytest.raises(SignatureFormatError, match="upper half"):
            recover_signer(EIP712_MAIL_DIGEST, flipped)

    @pytest.mark.parametrize("v", [0, 26, 29])
    def test_bad_v_rejected(self, v):
        signature = Signature(r=EIP712_MAIL_SIGNATURE.r, s=EIP712_MAIL_SIGNATURE.s, v=v)
        with pytest.raises(SignatureFormatError, match="v="):
            recover_signer(EIP712_MAIL_DIGEST, signature)

    @pytest.mark.parametrize("r", [0, SECP256K1_N])
    def test_r_out_of_range(self, r):
        signature = Signature(r=r, s=EIP712_MAIL_SIGNATURE.s, v=27)
        with pytest.raises(SignatureFormatError, match="r out of range"):
            recover_signer(EIP712_MAIL_DIGEST, signature)

    def test_zero_s_rejected(self):
        signature = Signature(r=EIP712_MAIL_SIGNATURE.r, s=0, v=27)
        with pytest.raises(SignatureFormatError):
            recover_signer(EIP712_MAIL_DIGEST, signature)
