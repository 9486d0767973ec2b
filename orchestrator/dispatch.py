"""
Asset Dispatch

The claim engine does not move tokens itself. It hands a resolved Asset to
an AssetDispatcher and treats the transfer as succeeded or failed.

InMemoryVault is the dispatcher used by the HTTP service and the tests: it
keeps fungible balances and non-fungible ownership for the distribution's
custodian, journals every change so a failed claim leaves no trace, and runs
recipient "on received" hooks for non-fungible transfers. Those hooks are
arbitrary code and may call back into the claim engine.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

from core.schemas.allocation import Asset, FungibleAsset, NonFungibleAsset, normalize_address
from core.schemas.errors import AirdropException, TransferFailedError
from core.state.journal import StateJournal


logger = logging.getLogger(__name__)

# (asset_contract, token_id, recipient) -> accepted
ReceiverHook = Callable[[str, int, str], bool]


class AssetDispatcher(Protocol):
    def transfer_fungible(self, contract: str, recipient: str, amount: int) -> bool:
        """Move amount to recipient; False when the transfer did not happen."""
        ...

    def transfer_non_fungible(self, contract: str, recipient: str, token_id: int) -> None:
        """Move token_id to recipient; raise when the transfer did not happen."""
        ...


def dispatch_asset(dispatcher: AssetDispatcher, asset: Asset, recipient: str) -> None:
    """
    Deliver an asset to the recipient.

    Raises:
        TransferFailedError: If the dispatcher reports or raises a failure.
            Claim engine errors raised by re-entrant hooks propagate as is.
    """
    if isinstance(asset, FungibleAsset):
        try:
            ok = dispatcher.transfer_fungible(asset.contract, recipient, asset.amount)
        except AirdropException:
            raise
        except Exception as e:
            raise TransferFailedError(
                f"Fungible transfer raised: {e}",
                asset_contract=asset.contract,
                recipient=recipient,
            ) from e
        if not ok:
            raise TransferFailedError(
                "Fungible transfer returned false",
                asset_contract=asset.contract,
                recipient=recipient,
            )
    elif isinstance(asset, NonFungibleAsset):
        try:
            dispatcher.transfer_non_fungible(asset.contract, recipient, asset.token_id)
        except AirdropException:
            raise
        except Exception as e:
            raise TransferFailedError(
                f"Non-fungible transfer raised: {e}",
                asset_contract=asset.contract,
                recipient=recipient,
                details={"token_id": str(asset.token_id)},
            ) from e
    else:
        raise TypeError(f"Unknown asset kind: {type(asset).__name__}")


class InMemoryVault:
    """Custodian holding the distributed tokens."""

    def __init__(self, custodian: str, journal: Optional[StateJournal] = None) -> None:
        self.custodian = normalize_address(custodian)
        self._journal = journal
        self._balances: dict[tuple[str, str], int] = {}
        self._owners: dict[tuple[str, int], str] = {}
        self._hooks: dict[str, ReceiverHook] = {}
        self._lock = threading.RLock()

    # -- setup -----------------------------------------------------------------

    def fund(self, contract: str, amount: int) -> None:
        """Credit the custodian with fungible tokens."""
        key = (normalize_address(contract), self.custodian)
        with self._lock:
            self._balances[key] = self._balances.get(key, 0) + amount

    def mint(self, contract: str, token_id: int, owner: Optional[str] = None) -> None:
        """Assign a non-fungible token, to the custodian by default."""
        holder = normalize_address(owner) if owner else self.custodian
        with self._lock:
            self._owners[(normalize_address(contract), token_id)] = holder

    def register_receiver(self, address: str, hook: ReceiverHook) -> None:
        """Install an "on received" hook run after a non-fungible transfer to address."""
        self._hooks[normalize_address(address)] = hook

    # -- queries ---------------------------------------------------------------

    def balance_of(self, contract: str, holder: str) -> int:
        return self._balances.get((normalize_address(contract), normalize_address(holder)), 0)

    def owner_of(self, contract: str, token_id: int) -> Optional[str]:
        return self._owners.get((normalize_address(contract), token_id))

    # -- AssetDispatcher -------------------------------------------------------

    def transfer_fungible(self, contract: str, recipient: str, amount: int) -> bool:
        contract = normalize_address(contract)
        recipient = normalize_address(recipient)
        with self._lock:
            source = (contract, self.custodian)
            available = self._balances.get(source, 0)
            if available < amount:
                logger.warning(
                    f"Insufficient balance of {contract}: have {available}, need {amount}"
                )
                return False
            self._move_balance(source, -amount)
            self._move_balance((contract, recipient), amount)
        return True

    def transfer_non_fungible(self, contract: str, recipient: str, token_id: int) -> None:
        contract = normalize_address(contract)
        recipient = normalize_address(recipient)
        key = (contract, token_id)
        with self._lock:
            owner = self._owners.get(key)
            if owner != self.custodian:
                raise TransferFailedError(
                    f"Token {token_id} is not held by the custodian",
                    asset_contract=contract,
                    recipient=recipient,
                    details={"owner": owner},
                )
            self._owners[key] = recipient
            if self._journal is not None:
                self._journal.record(lambda: self._owners.__setitem__(key, owner))

        hook = self._hooks.get(recipient)
        if hook is not None and not hook(contract, token_id, recipient):
            raise TransferFailedError(
                "Recipient rejected the token",
                asset_contract=contract,
                recipient=recipient,
                details={"token_id": str(token_id)},
            )

    def _move_balance(self, key: tuple[str, str], delta: int) -> None:
        self._balances[key] = self._balances.get(key, 0) + delta
        if self._journal is not None:
            self._journal.record(lambda: self._balances.__setitem__(key, self._balances[key] - delta))


__all__ = [
    "AssetDispatcher",
    "InMemoryVault",
    "ReceiverHook",
    "dispatch_asset",
]
