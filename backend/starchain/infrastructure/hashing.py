"""SHA-256 Hash Provider — the digest behind record sealing."""

import hashlib


class Sha256HashProvider:
    """HashProvider backed by hashlib.sha256; 64 lowercase hex chars."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()
