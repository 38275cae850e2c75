"""Record — one sealed unit of the ledger (a "block").

Invariants:
    - hash is None until seal(); seal() runs once, after height/previous_hash/timestamp are set
    - is_valid() is READ-ONLY: it recomputes and compares, it never rewrites the stored hash
    - The sealed content is every field except hash, which is hashed as null
    - decoded_body() refuses height 0 — the genesis payload is a sentinel
    - decoded_body() raises UndecodableRecordError, never a bare codec error, when
      the stored body was tampered into something that is not hex of UTF-8 JSON

Design Decisions:
    - Plain mutable dataclass, not frozen: tampering is an out-of-band mutation that
      validation must DETECT, so the fields stay writable
    - HashProvider passed per call rather than stored: records stay plain data and
      serialize without carrying collaborators
"""

from dataclasses import dataclass

from starchain.core.domain_types import Height, Payload, RecordHash, UnixSeconds, WalletAddress
from starchain.core.encoding import canonicalize, decode_body, encode_body
from starchain.core.errors import GenesisAccessError, UndecodableRecordError
from starchain.core.protocols import HashProvider


@dataclass
class Record:
    """Ledger record — payload, linkage and integrity hash."""

    body: str
    owner: WalletAddress | None = None
    hash: RecordHash | None = None
    height: Height = Height(0)
    timestamp: UnixSeconds | None = None
    previous_hash: RecordHash | None = None

    @classmethod
    def from_payload(cls, payload: Payload, owner: WalletAddress | None = None) -> "Record":
        """Build an unsealed record, encoding the payload into body."""
        return cls(body=encode_body(payload), owner=owner)

    # --- Sealing ------------------------------------------------------------

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def content(self) -> dict:
        """Sealed content: every field, with hash cleared."""
        return {
            "body": self.body,
            "hash": None,
            "height": self.height,
            "owner": self.owner,
            "previous_hash": self.previous_hash,
            "timestamp": self.timestamp,
        }

    def recompute_hash(self, hash_provider: HashProvider) -> RecordHash:
        """Digest over current content. Diagnostic; does not touch self.hash."""
        return RecordHash(hash_provider.digest(canonicalize(self.content())))

    def seal(self, hash_provider: HashProvider) -> RecordHash:
        """Compute and store the integrity hash."""
        self.hash = self.recompute_hash(hash_provider)
        return self.hash

    def is_valid(self, hash_provider: HashProvider) -> bool:
        """True iff the stored hash matches the recomputed one."""
        return self.hash is not None and self.recompute_hash(hash_provider) == self.hash

    # --- Payload --------------------------------------------------------------

    def decoded_body(self) -> Payload:
        """Decode body back to structured data. Genesis is never decoded."""
        if self.height == 0:
            raise GenesisAccessError()
        try:
            return decode_body(self.body)
        except (TypeError, ValueError) as exc:
            raise UndecodableRecordError(self.height, self.hash) from exc

    def to_dict(self) -> dict:
        data = self.content()
        data["hash"] = self.hash
        return data
