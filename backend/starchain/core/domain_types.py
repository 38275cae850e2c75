"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - WalletAddress, RecordHash, Height, UnixSeconds wrap primitives in every core
      signature (Record fields, Ledger operations, challenge helpers, Clock)
    - HASH_HEX_LENGTH (64) is the single source of truth for sealed hash width
    - CHALLENGE_WINDOW_SECONDS (300) is the default ownership window

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Payload kept as Any-valued JSON: record bodies are opaque to the ledger
"""

from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

WalletAddress = NewType("WalletAddress", str)
RecordHash = NewType("RecordHash", str)       # 64 lowercase hex chars
Height = NewType("Height", int)               # 0 = genesis, -1 = empty ledger


# ─── Value Types ─────────────────────────────────────────────────

Payload = Any                                 # JSON-serializable value
UnixSeconds = NewType("UnixSeconds", int)


# ─── Constants ───────────────────────────────────────────────────

HASH_HEX_LENGTH: int = 64
EMPTY_HEIGHT: int = -1
CHALLENGE_WINDOW_SECONDS: int = 5 * 60
CHALLENGE_SUFFIX: str = "starRegistry"
GENESIS_DATA: str = "Genesis Block"
