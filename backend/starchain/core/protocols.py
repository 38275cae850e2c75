"""Boundary Protocols — contracts between the ledger core and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Hashing, signature checks and wall-clock reads accessed through Protocol types
    - Implementations provided by the shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Synchronous methods: the ledger is a synchronous engine; the shell decides
      whether to offload to a thread
"""

from typing import Protocol

from starchain.core.domain_types import UnixSeconds, WalletAddress


class HashProvider(Protocol):
    """Deterministic digest — 256-bit output rendered as 64 hex characters."""
    def digest(self, data: bytes) -> str: ...


class SignatureVerifier(Protocol):
    """True iff `signature` over `message` was made by the key behind `address`."""
    def verify(self, message: str, address: WalletAddress, signature: str) -> bool: ...


class Clock(Protocol):
    """Source of 'now' in integer Unix seconds."""
    def now(self) -> UnixSeconds: ...
