"""Ledger — owned, append-only, hash-linked sequence of records.

Invariants:
    - records[i].height == i; height == len(records) - 1 (-1 before genesis)
    - records[h].previous_hash == records[h - 1].hash for every h > 0; a link only
      holds while the predecessor itself is intact
    - Append is the ONLY mutation; it is private and reached through initialize()
      and submit_star() only
    - Append is all-or-nothing: structural failure after sealing commits nothing
    - submit_star checks, in order: message shape, challenge window, signature.
      Each failure raises before any later step runs
    - validate_chain reports findings, never raises them
    - Owner lookups never fail on a tampered body: undecodable records are skipped

Design Decisions:
    - threading.Lock around the whole append critical section: two appends can
      never derive the same (height, previous_hash) pair
    - Reads copy a tuple snapshot under the lock and work on the copy
    - Collaborators (hash, signature, clock) injected: expiry is testable without
      real elapsed time
    - Name-mangled __append: the strongest privacy Python offers on a type
"""

import logging
import re
import threading

from starchain.core.challenge import build_challenge, ensure_within_window, parse_issue_time
from starchain.core.domain_types import (
    CHALLENGE_SUFFIX, CHALLENGE_WINDOW_SECONDS, EMPTY_HEIGHT, GENESIS_DATA,
    HASH_HEX_LENGTH, Height, Payload, RecordHash, WalletAddress,
)
from starchain.core.errors import (
    BrokenLinkError, ChainValidationError, ErrorContext, InvalidRecordError,
    InvalidSignatureError, NotFoundError, StarChainError, TamperedRecordError,
    UndecodableRecordError,
)
from starchain.core.protocols import Clock, HashProvider, SignatureVerifier
from starchain.core.record import Record

logger = logging.getLogger(__name__)

_HEX_HASH = re.compile(rf"^[0-9a-f]{{{HASH_HEX_LENGTH}}}$")


class Ledger:
    """Single-node star registry chain."""

    def __init__(
        self,
        hash_provider: HashProvider,
        signature_verifier: SignatureVerifier,
        clock: Clock,
        *,
        challenge_window_seconds: int = CHALLENGE_WINDOW_SECONDS,
        challenge_suffix: str = CHALLENGE_SUFFIX,
        genesis_data: str = GENESIS_DATA,
    ):
        self._hash_provider = hash_provider
        self._signature_verifier = signature_verifier
        self._clock = clock
        self._challenge_window_seconds = challenge_window_seconds
        self._challenge_suffix = challenge_suffix
        self._genesis_data = genesis_data
        self._records: list[Record] = []
        self._lock = threading.Lock()
        self.initialize()

    # --- Lifecycle ----------------------------------------------------------

    def initialize(self) -> None:
        """Create the genesis record if the chain is empty. Idempotent."""
        with self._lock:
            if len(self._records) - 1 > EMPTY_HEIGHT:
                return
            genesis = self.__append(Record.from_payload({"data": self._genesis_data}))
        logger.info(
            "Genesis block created",
            extra={"height": genesis.height, "record_hash": genesis.hash},
        )

    def current_height(self) -> Height:
        with self._lock:
            return Height(len(self._records) - 1)

    def records(self) -> tuple[Record, ...]:
        """Snapshot of the chain. Never aliases internal storage."""
        with self._lock:
            return tuple(self._records)

    # --- Append (private) -----------------------------------------------------

    def __append(self, candidate: Record) -> Record:
        """Link, stamp, seal, check and commit. Caller MUST hold self._lock."""
        height = Height(len(self._records))
        candidate.previous_hash = self._records[-1].hash if self._records else None
        candidate.height = height
        candidate.timestamp = self._clock.now()
        candidate.seal(self._hash_provider)

        reason = self._structural_problem(candidate, height)
        if reason:
            raise InvalidRecordError(
                reason, ErrorContext(height=height, record_hash=candidate.hash),
            )

        self._records.append(candidate)
        return candidate

    @staticmethod
    def _structural_problem(record: Record, expected_height: Height) -> str | None:
        if not record.is_sealed or not _HEX_HASH.match(record.hash):
            return f"hash must be {HASH_HEX_LENGTH} hex characters"
        if record.height != expected_height:
            return f"height {record.height} != chain length {expected_height}"
        if record.timestamp is None:
            return "timestamp missing"
        return None

    # --- Ownership flow -------------------------------------------------------

    def request_ownership_challenge(self, address: WalletAddress) -> str:
        """Message the wallet must sign. Stateless — embeds its own issue time."""
        return build_challenge(address, self._clock.now(), self._challenge_suffix)

    def submit_star(
        self, address: WalletAddress, message: str, signature: str, payload: Payload,
    ) -> Record:
        """Guarded append: fresh challenge + valid signature, then commit."""
        try:
            issued_at = parse_issue_time(message)
            ensure_within_window(
                issued_at, self._clock.now(), self._challenge_window_seconds, address,
            )
            if not self._signature_verifier.verify(message, address, signature):
                raise InvalidSignatureError(address)
        except StarChainError as exc:
            logger.warning(
                f"Star submission rejected: {exc.message}",
                extra={"address": address, "error_code": exc.code},
            )
            raise

        candidate = Record.from_payload(payload, owner=address)
        with self._lock:
            record = self.__append(candidate)
        logger.info(
            "Star registered",
            extra={
                "height": record.height, "address": address,
                "record_hash": record.hash,
            },
        )
        return record

    # --- Lookups --------------------------------------------------------------

    def get_by_hash(self, record_hash: RecordHash) -> Record:
        for record in self.records():
            if record.hash == record_hash:
                return record
        raise NotFoundError("Block", record_hash)

    def get_by_height(self, height: Height) -> Record:
        snapshot = self.records()
        if not 0 <= height < len(snapshot):
            raise NotFoundError("Block", str(height))
        return snapshot[height]

    def get_records_by_owner(
        self, address: WalletAddress, validate: bool = True,
    ) -> list[Payload]:
        """Decoded payloads owned by address.

        With validate=True (the default) a full chain validation runs first and its
        outcome is logged. Findings do not block the read: a record whose body
        no longer decodes is skipped with a WARNING and the rest are returned.
        """
        if validate:
            self._log_validation(self.validate_chain())

        owned = [r for r in self.records() if r.height > 0 and r.owner == address]
        if not owned:
            raise NotFoundError("Address", address, ErrorContext(address=address))

        payloads: list[Payload] = []
        for record in owned:
            try:
                payloads.append(record.decoded_body())
            except UndecodableRecordError as exc:
                logger.warning(
                    f"Skipping record: {exc.message}",
                    extra={
                        "height": exc.height, "address": address,
                        "record_hash": record.hash, "error_code": exc.code,
                    },
                )
        return payloads

    # --- Validation -----------------------------------------------------------

    def validate_chain(self) -> list[ChainValidationError]:
        """Check every record's hash and link. Empty list means the chain is valid."""
        snapshot = self.records()
        errors: list[ChainValidationError] = []
        for height, record in enumerate(snapshot):
            if not record.is_valid(self._hash_provider):
                errors.append(TamperedRecordError(height, record.hash))
            elif height > 0 and not self._linked(record, snapshot[height - 1]):
                errors.append(BrokenLinkError(height))
        return errors

    def _linked(self, record: Record, prior: Record) -> bool:
        """previous_hash must match the predecessor's stored hash AND its current content."""
        return record.previous_hash == prior.hash and prior.is_valid(self._hash_provider)

    @staticmethod
    def _log_validation(errors: list[ChainValidationError]) -> None:
        if not errors:
            logger.info("Chain validation: no errors detected")
            return
        for error in errors:
            logger.warning(
                f"Chain validation: {error.message}",
                extra={"height": error.height, "error_code": error.code},
            )
