"""
Proof-Based Claim Tests
Tests for orchestrator/merkle_airdrop.py

1. Three-record distribution: every claimant claims exactly their own record
2. Second attempt fails with AlreadyClaimed
3. Tampering any field of the record fails with InvalidProof
4. Over-long proofs fail with ProofTooLong before any hashing
5. Zero-amount fungible allocation fails with InvalidAllocation before dispatch
6. Dispatch failure and hostile receivers leave no state behind
"""
import pytest

import core.merkle.merkle_tree as merkle_tree
import orchestrator.merkle_airdrop as merkle_airdrop_module
from core.schemas.allocation import ClaimModule
from core.schemas.errors import (
    AirdropException,
    AlreadyClaimedError,
    InvalidAllocationError,
    InvalidProofError,
    NotClaimantError,
    ProofTooLongError,
    ReentrantCallError,
    TransferFailedError,
)
from core.crypto.hashing import keccak256
from offchain.generator import build_distribution
from orchestrator.callers import CallContext, TrustedForwarderResolver
from orchestrator.merkle_airdrop import MerkleAirdrop

from fixtures.common import (
    ALICE,
    BOB,
    CAROL,
    CUSTODIAN,
    FORWARDER,
    NFT,
    ONE_TOKEN,
    TOKEN,
    make_allocation,
    make_bulk_allocations,
    make_merkle_airdrop,
)


class RecordingDispatcher:
    """Dispatcher that only records calls."""

    def __init__(self):
        self.calls = []

    def transfer_fungible(self, contract, recipient, amount):
        self.calls.append(("fungible", contract, recipient, amount))
        return True

    def transfer_non_fungible(self, contract, recipient, token_id):
        self.calls.append(("non_fungible", contract, recipient, token_id))


class TestScenario:
    """Three-record end-to-end distribution."""

    def test_each_claimant_claims_own_record(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup

        for claimant in (ALICE, BOB, CAROL):
            allocation, proof = distribution.allocation_for(claimant)
            record = airdrop.claim(allocation, proof, claimant)
            assert record.claimant == claimant
            assert record.module == ClaimModule.MERKLE
            assert airdrop.is_claimed(allocation.index)

        assert vault.balance_of(TOKEN, ALICE) == 100 * ONE_TOKEN
        assert vault.balance_of(TOKEN, CAROL) == 50 * ONE_TOKEN
        assert vault.owner_of(NFT, 42) == BOB
        assert vault.balance_of(TOKEN, CUSTODIAN) == 850 * ONE_TOKEN
        assert [r.claim_index for r in airdrop.events.records()] == [0, 1, 2]

    def test_record_fields(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(BOB)
        record = airdrop.claim(allocation, proof, BOB)
        assert record.to_json_dict() == {
            "module": "Merkle",
            "claimIndex": "1",
            "claimant": BOB,
            "tokenContract": NFT,
            "tokenId": "42",
            "amount": "1",
        }

    def test_second_attempt_already_claimed(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        airdrop.claim(allocation, proof, ALICE)

        with pytest.raises(AlreadyClaimedError) as exc_info:
            airdrop.claim(allocation, proof, ALICE)

        assert exc_info.value.index == 0
        assert vault.balance_of(TOKEN, ALICE) == 100 * ONE_TOKEN
        assert len(airdrop.events) == 1

    def test_cross_claim_with_own_address_is_invalid_proof(self, merkle_setup):
        """Alice reusing Bob's record and proof under her own address."""
        airdrop, _, distribution = merkle_setup
        bob_allocation, bob_proof = distribution.allocation_for(BOB)
        forged = bob_allocation.model_copy(update={"claimant": ALICE})

        with pytest.raises(InvalidProofError):
            airdrop.claim(forged, bob_proof, ALICE)
        assert not airdrop.is_claimed(1)

    def test_cross_claim_of_other_record_is_not_claimant(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        bob_allocation, bob_proof = distribution.allocation_for(BOB)

        with pytest.raises(NotClaimantError) as exc_info:
            airdrop.claim(bob_allocation, bob_proof, ALICE)
        assert exc_info.value.expected == BOB
        assert exc_info.value.actual == ALICE

    def test_bulk_distribution(self):
        allocations = make_bulk_allocations(21)
        airdrop, vault, distribution = make_merkle_airdrop(allocations, fungible=10_000 * ONE_TOKEN)
        for allocation in allocations:
            stored, proof = distribution.allocation_for(allocation.claimant)
            airdrop.claim(stored, proof, allocation.claimant)
        assert airdrop.bitmap.claimed_count() == 21
        assert vault.balance_of(TOKEN, allocations[20].claimant) == 21 * ONE_TOKEN


class TestTampering:
    """Proofs are record-specific, not index-specific."""

    @pytest.mark.parametrize(
        "changes",
        [
            {"index": 7},
            {"claimant": BOB},
            {"asset_contract": NFT},
            {"asset_id": 42},
            {"amount": 101 * ONE_TOKEN},
        ],
    )
    def test_any_field_tampered(self, merkle_setup, changes):
        airdrop, vault, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        tampered = allocation.model_copy(update=changes)

        with pytest.raises(InvalidProofError):
            airdrop.claim(tampered, proof, tampered.claimant)

        assert airdrop.bitmap.claimed_count() == 0
        assert vault.balance_of(TOKEN, ALICE) == 0

    def test_tampered_sibling(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        proof[0] = keccak256(b"forged")
        with pytest.raises(InvalidProofError):
            airdrop.claim(allocation, proof, ALICE)

    def test_hex_proof_accepted(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        entry = distribution.entry_for(CAROL)
        allocation, _ = distribution.allocation_for(CAROL)
        airdrop.claim(allocation, entry.proof, CAROL)
        assert airdrop.is_claimed(2)

    @pytest.mark.parametrize("element", ["0x1234", "nothex", b"\x00" * 31])
    def test_malformed_proof_element(self, merkle_setup, element):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        with pytest.raises(InvalidProofError):
            airdrop.claim(allocation, [element] + proof[1:], ALICE)


class TestProofLength:
    """Depth bound is checked before any hashing."""

    def test_too_long_without_hashing(self, merkle_setup, monkeypatch):
        airdrop, _, distribution = merkle_setup
        calls = []
        monkeypatch.setattr(
            merkle_tree, "merkle_parent", lambda a, b: calls.append("parent") or b"\x00" * 32
        )
        monkeypatch.setattr(
            merkle_airdrop_module, "hash_leaf", lambda a: calls.append("leaf") or b"\x00" * 32
        )
        allocation, _ = distribution.allocation_for(ALICE)
        proof = [keccak256(bytes([i])) for i in range(33)]

        with pytest.raises(ProofTooLongError) as exc_info:
            airdrop.claim(allocation, proof, ALICE)

        assert exc_info.value.length == 33
        assert exc_info.value.max_depth == 32
        assert calls == []

    def test_configured_bound(self, scenario_allocations):
        airdrop, _, distribution = make_merkle_airdrop(scenario_allocations, max_proof_depth=1)
        allocation, proof = distribution.allocation_for(ALICE)
        assert len(proof) == 2
        with pytest.raises(ProofTooLongError):
            airdrop.claim(allocation, proof, ALICE)

    def test_already_claimed_checked_before_length(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        airdrop.claim(allocation, proof, ALICE)
        with pytest.raises(AlreadyClaimedError):
            airdrop.claim(allocation, [b"\x00" * 32] * 40, ALICE)


class TestInvalidAllocation:
    """Zero-valued fungible allocations never reach dispatch."""

    def test_zero_amount_fungible(self):
        allocations = [
            make_allocation(0, ALICE, TOKEN, 0, 0),
            make_allocation(1, BOB, TOKEN, 0, 5),
        ]
        distribution = build_distribution(allocations)
        dispatcher = RecordingDispatcher()
        airdrop = MerkleAirdrop(distribution.root_bytes, dispatcher)
        allocation, proof = distribution.allocation_for(ALICE)

        with pytest.raises(InvalidAllocationError):
            airdrop.claim(allocation, proof, ALICE)

        assert dispatcher.calls == []
        assert not airdrop.is_claimed(0)
        assert len(airdrop.events) == 0

    def test_non_fungible_ignores_amount(self):
        allocations = [make_allocation(0, ALICE, NFT, 9, 0)]
        distribution = build_distribution(allocations)
        dispatcher = RecordingDispatcher()
        airdrop = MerkleAirdrop(distribution.root_bytes, dispatcher)
        allocation, proof = distribution.allocation_for(ALICE)

        airdrop.claim(allocation, proof, ALICE)
        assert dispatcher.calls == [("non_fungible", NFT, ALICE, 9)]


class TestCallers:
    """Effective caller resolution."""

    def test_trusted_forwarder(self, scenario_allocations):
        airdrop, vault, distribution = make_merkle_airdrop(
            scenario_allocations, caller_resolver=TrustedForwarderResolver(FORWARDER)
        )
        allocation, proof = distribution.allocation_for(ALICE)
        context = CallContext(submitter=FORWARDER, forwarded_sender=ALICE)

        airdrop.claim(allocation, proof, context)
        assert vault.balance_of(TOKEN, ALICE) == 100 * ONE_TOKEN
        assert vault.balance_of(TOKEN, FORWARDER) == 0

    def test_untrusted_forwarder_ignored(self, scenario_allocations):
        airdrop, _, distribution = make_merkle_airdrop(
            scenario_allocations, caller_resolver=TrustedForwarderResolver(FORWARDER)
        )
        allocation, proof = distribution.allocation_for(ALICE)
        context = CallContext(submitter=BOB, forwarded_sender=ALICE)

        with pytest.raises(NotClaimantError) as exc_info:
            airdrop.claim(allocation, proof, context)
        assert exc_info.value.actual == BOB

    def test_direct_resolver_ignores_forwarded_sender(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        with pytest.raises(NotClaimantError):
            airdrop.claim(allocation, proof, CallContext(submitter=FORWARDER, forwarded_sender=ALICE))

    def test_lowercase_caller(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(ALICE)
        airdrop.claim(allocation, proof, ALICE.lower())
        assert airdrop.is_claimed(0)


class TestAtomicity:
    """Failed attempts leave no state behind."""

    def test_transfer_failure_rolls_back(self, scenario_allocations):
        airdrop, vault, distribution = make_merkle_airdrop(scenario_allocations, fungible=10 * ONE_TOKEN)
        allocation, proof = distribution.allocation_for(ALICE)

        with pytest.raises(TransferFailedError):
            airdrop.claim(allocation, proof, ALICE)

        assert not airdrop.is_claimed(0)
        assert len(airdrop.events) == 0
        assert vault.balance_of(TOKEN, CUSTODIAN) == 10 * ONE_TOKEN

        vault.fund(TOKEN, 100 * ONE_TOKEN)
        airdrop.claim(allocation, proof, ALICE)
        assert vault.balance_of(TOKEN, ALICE) == 100 * ONE_TOKEN

    def test_receiver_rejection_rolls_back(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup
        vault.register_receiver(BOB, lambda contract, token_id, recipient: False)
        allocation, proof = distribution.allocation_for(BOB)

        with pytest.raises(TransferFailedError):
            airdrop.claim(allocation, proof, BOB)

        assert not airdrop.is_claimed(1)
        assert vault.owner_of(NFT, 42) == CUSTODIAN

    def test_subscriber_failure_rolls_back(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup

        def failing_subscriber(record):
            raise RuntimeError("indexer down")

        airdrop.events.subscribe(failing_subscriber)
        allocation, proof = distribution.allocation_for(ALICE)

        with pytest.raises(RuntimeError):
            airdrop.claim(allocation, proof, ALICE)

        assert not airdrop.is_claimed(0)
        assert vault.balance_of(TOKEN, ALICE) == 0
        assert len(airdrop.events) == 0


class TestReentrancy:
    """A hostile receiver re-entering during dispatch."""

    def test_reentry_observes_marked_state_and_is_rejected(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(BOB)
        observed = {}

        def hostile_hook(contract, token_id, recipient):
            observed["claimed_during_dispatch"] = airdrop.is_claimed(allocation.index)
            try:
                airdrop.claim(allocation, proof, BOB)
            except AirdropException as e:
                observed["error"] = e
            return True

        vault.register_receiver(BOB, hostile_hook)
        airdrop.claim(allocation, proof, BOB)

        assert observed["claimed_during_dispatch"] is True
        assert isinstance(observed["error"], ReentrantCallError)
        assert vault.owner_of(NFT, 42) == BOB
        assert len(airdrop.events) == 1

    def test_reentry_error_propagates_and_reverts(self, merkle_setup):
        airdrop, vault, distribution = merkle_setup
        allocation, proof = distribution.allocation_for(BOB)

        def hostile_hook(contract, token_id, recipient):
            airdrop.claim(allocation, proof, BOB)
            return True

        vault.register_receiver(BOB, hostile_hook)

        with pytest.raises(ReentrantCallError):
            airdrop.claim(allocation, proof, BOB)

        assert not airdrop.is_claimed(1)
        assert vault.owner_of(NFT, 42) == CUSTODIAN
        assert not airdrop.journal.in_transaction


class TestConstruction:
    """Root is fixed at construction."""

    def test_root_length_checked(self):
        with pytest.raises(ValueError):
            MerkleAirdrop(b"\x00" * 31, RecordingDispatcher())

    def test_root_read_only(self, merkle_setup):
        airdrop, _, distribution = merkle_setup
        assert airdrop.merkle_root == distribution.root_bytes
        with pytest.raises(AttributeError):
            airdrop.merkle_root = b"\x00" * 32
