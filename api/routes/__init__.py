"""API route handlers."""

from api.routes import health, claims, nonces, events

__all__ = ["health", "claims", "nonces", "events"]
