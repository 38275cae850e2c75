"""Ownership Challenge — build, parse and time-check the message a wallet must sign.

Invariants:
    - Challenge shape is "{address}:{unix_seconds}:{suffix}"
    - The challenge carries its own issue time, so the ledger keeps no challenge state
    - A challenge is expired when elapsed >= window (boundary is expired)
    - The issue time is ASCII digits only; anything int() would reject is malformed

Design Decisions:
    - Pure functions that raise typed errors: the ledger calls them in order and
      each raise is the early exit for that failure path
"""

from starchain.core.domain_types import (
    CHALLENGE_SUFFIX, CHALLENGE_WINDOW_SECONDS, UnixSeconds, WalletAddress,
)
from starchain.core.errors import ChallengeExpiredError, ErrorContext, MalformedChallengeError


def build_challenge(
    address: WalletAddress, now: UnixSeconds, suffix: str = CHALLENGE_SUFFIX,
) -> str:
    return f"{address}:{now}:{suffix}"


def parse_issue_time(message: str) -> UnixSeconds:
    """Extract the embedded issue time from a challenge message."""
    parts = message.split(":")
    if len(parts) != 3 or not (parts[1].isascii() and parts[1].isdigit()):
        raise MalformedChallengeError(message)
    return UnixSeconds(int(parts[1]))


def ensure_within_window(
    issued_at: UnixSeconds, now: UnixSeconds, window_seconds: int = CHALLENGE_WINDOW_SECONDS,
    address: WalletAddress | None = None,
) -> int:
    """Return elapsed seconds, or raise ChallengeExpiredError once the window has passed."""
    elapsed = now - issued_at
    if elapsed >= window_seconds:
        raise ChallengeExpiredError(
            elapsed, window_seconds, ErrorContext(address=address),
        )
    return elapsed
