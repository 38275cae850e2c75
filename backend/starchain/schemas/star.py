"""Star Registry Schemas — Pydantic models for ownership, submission and lookups.

Invariants:
    - address, message, signature: non-empty, stripped
    - star must be a non-empty JSON object
    - RecordResponse mirrors Record.to_dict() field for field

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class OwnershipRequest(BaseModel):
    """Body of POST /requestOwnership."""
    address: str = Field(min_length=1, max_length=128)

    @field_validator("address")
    @classmethod
    def strip_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address cannot be empty or whitespace")
        return v


class StarSubmission(BaseModel):
    """Body of POST /submitstar — signed challenge plus the star to register."""
    address: str = Field(min_length=1, max_length=128)
    message: str = Field(min_length=1, max_length=512)
    signature: str = Field(min_length=1, max_length=256)
    star: dict[str, Any]

    @field_validator("address", "message", "signature")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v

    @field_validator("star")
    @classmethod
    def star_not_empty(cls, v: dict[str, Any]) -> dict[str, Any]:
        if not v:
            raise ValueError("star cannot be empty")
        return v


class RecordResponse(BaseModel):
    """Public view of a sealed record."""
    hash: str | None
    height: int
    body: str
    timestamp: int | None
    previous_hash: str | None
    owner: str | None = None


class ValidationFinding(BaseModel):
    code: str
    height: int
    message: str


class ValidationReport(BaseModel):
    """Result of a full chain validation. valid == (errors == [])."""
    valid: bool
    message: str
    errors: list[ValidationFinding] = Field(default_factory=list)
