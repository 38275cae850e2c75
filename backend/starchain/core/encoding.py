"""Body Encoding — payload ⇄ hex-of-UTF-8-JSON and canonical sealing bytes.

Invariants:
    - decode_body(encode_body(p)) == p for every JSON-serializable payload
    - canonicalize() output depends only on content: sorted keys, compact separators, UTF-8
"""

import json
from typing import Any

from starchain.core.domain_types import Payload


def encode_body(payload: Payload) -> str:
    """Encode payload as hex of its UTF-8 JSON text."""
    return json.dumps(payload, ensure_ascii=False).encode("utf-8").hex()


def decode_body(body: str) -> Payload:
    """Reverse of encode_body."""
    return json.loads(bytes.fromhex(body).decode("utf-8"))


def canonicalize(content: dict[str, Any]) -> bytes:
    """Deterministic JSON bytes for hashing."""
    serialized = json.dumps(
        content,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return serialized.encode("utf-8")
