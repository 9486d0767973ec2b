"""
Effective Caller Resolution

A claim may be submitted directly by the claimant or relayed by a trusted
forwarder that vouches for the original sender (ERC-2771 style). The
orchestrator asks a CallerResolver once per attempt and never looks at
forwarding details itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from core.schemas.allocation import normalize_address


@dataclass(frozen=True)
class CallContext:
    """Who submitted a claim, and who the submitter says it is acting for."""
    submitter: str
    forwarded_sender: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "submitter", normalize_address(self.submitter))
        if self.forwarded_sender is not None:
            object.__setattr__(self, "forwarded_sender", normalize_address(self.forwarded_sender))


class CallerResolver(Protocol):
    def resolve(self, context: CallContext) -> str:
        ...


class DirectCallerResolver:
    """Trusts nobody: the effective caller is always the submitter."""

    def resolve(self, context: CallContext) -> str:
        return context.submitter


class TrustedForwarderResolver:
    """Honours forwarded_sender only when the submitter is the trusted forwarder."""

    def __init__(self, trusted_forwarder: str) -> None:
        self.trusted_forwarder = normalize_address(trusted_forwarder)

    def resolve(self, context: CallContext) -> str:
        if context.submitter == self.trusted_forwarder and context.forwarded_sender:
            return context.forwarded_sender
        return context.submitter


__all__ = [
    "CallContext",
    "CallerResolver",
    "DirectCallerResolver",
    "TrustedForwarderResolver",
]
