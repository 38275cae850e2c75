"""Error Hierarchy — typed, categorized exceptions for every StarChain failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Lookup misses are 404; ownership failures are 4xx; integrity failures on append are 500
    - ChainValidationError subclasses are REPORTED by validate_chain, never raised by it
    - to_response() produces the REST envelope; no internal details in user-facing messages

Design Decisions:
    - Single hierarchy with StarChainError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    INTEGRITY = "integrity"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    height: int | None = None
    address: str | None = None
    record_hash: str | None = None
    debug_info: dict[str, Any] | None = None


class StarChainError(Exception):
    """Base exception for all StarChain errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "height": self.context.height,
                    "address": self.context.address,
                    "record_hash": self.context.record_hash,
                },
            }
        }


# ─── Lookup Errors (404) ────────────────────────────────────────

class NotFoundError(StarChainError):
    """Requested record (or owner's records) does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Ownership Errors (4xx) ─────────────────────────────────────

class MalformedChallengeError(StarChainError):
    """Signed message does not follow the '{address}:{seconds}:{suffix}' shape."""
    def __init__(self, challenge: str, context: ErrorContext | None = None):
        super().__init__(
            "Ownership message is malformed. Request a new challenge.",
            "MALFORMED_CHALLENGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.challenge = challenge


class ChallengeExpiredError(StarChainError):
    """Ownership challenge was signed too long ago."""
    def __init__(
        self, elapsed_seconds: int, window_seconds: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Star submission request timed out ({elapsed_seconds}s elapsed, "
            f"window is {window_seconds}s).",
            "CHALLENGE_EXPIRED", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context, 403,
        )
        self.elapsed_seconds = elapsed_seconds
        self.window_seconds = window_seconds


class InvalidSignatureError(StarChainError):
    """Signature does not prove control of the address."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.address = address
        super().__init__(
            "Invalid message signature for address.",
            "INVALID_SIGNATURE", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )
        self.address = address


class GenesisAccessError(StarChainError):
    """Genesis payload is a sentinel and is never decoded as application data."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.height = 0
        super().__init__(
            "Genesis Block has no decodable payload.",
            "GENESIS_ACCESS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


# ─── Integrity Errors ───────────────────────────────────────────

class InvalidRecordError(StarChainError):
    """Sealed record failed structural checks during append."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot add an invalid block: {reason}",
            "INVALID_RECORD", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.reason = reason


class ChainValidationError(StarChainError):
    """Base for findings reported by Ledger.validate_chain."""

    def __init__(self, message: str, code: str, height: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.height = height
        super().__init__(
            message, code, ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, ctx, 409,
        )
        self.height = height


class TamperedRecordError(ChainValidationError):
    """Stored hash no longer matches the record's content."""
    def __init__(self, height: int, record_hash: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_hash = record_hash
        super().__init__(
            f"Invalid block #{height}: {record_hash}",
            "TAMPERED_RECORD", height, ctx,
        )
        self.hash = record_hash


class BrokenLinkError(ChainValidationError):
    """Record's previous_hash does not match its predecessor's hash."""
    def __init__(self, height: int, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid link: Block #{height} not linked to the hash of block #{height - 1}.",
            "BROKEN_LINK", height, context,
        )


class UndecodableRecordError(ChainValidationError):
    """Stored body is no longer hex of UTF-8 JSON, so its payload cannot be read."""
    def __init__(self, height: int, record_hash: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_hash = record_hash
        super().__init__(
            f"Block #{height} body cannot be decoded.",
            "UNDECODABLE_RECORD", height, ctx,
        )


# ─── Infrastructure Errors (5xx) ────────────────────────────────

class SignatureBackendError(StarChainError):
    """Signature verification cannot run on this platform."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Signature backend unavailable: {message}",
            "SIGNATURE_BACKEND_UNAVAILABLE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )
