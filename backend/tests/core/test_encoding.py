"""Body encoding tests — hex-of-UTF-8-JSON codec and canonical bytes.

Tests cover:
    - encode_body output is lowercase hex of the JSON text
    - decode_body reverses it, including non-ASCII text
    - canonicalize is independent of key insertion order
"""

import json

from starchain.core.encoding import canonicalize, decode_body, encode_body


def test_encode_body_is_hex_of_utf8_json():
    body = encode_body({"data": "Genesis Block"})
    assert bytes.fromhex(body).decode("utf-8") == json.dumps({"data": "Genesis Block"})


def test_decode_reverses_encode_for_unicode():
    payload = {"star": {"story": "Südlicher Stern ✨", "mag": 4.5, "tags": ["a", None]}}
    assert decode_body(encode_body(payload)) == payload


def test_canonicalize_sorts_keys():
    assert canonicalize({"b": 1, "a": 2}) == canonicalize({"a": 2, "b": 1})
    assert canonicalize({"b": 1, "a": 2}) == b'{"a":2,"b":1}'
