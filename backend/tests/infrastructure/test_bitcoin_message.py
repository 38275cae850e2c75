"""Bitcoin message verifier tests — signed-message ownership proofs.

Tests cover:
    - Base58Check encode/decode against the genesis-block address vector
    - Signatures from the key behind the address verify (compressed, uncompressed,
      testnet, P2SH-P2WPKH)
    - Wrong message, wrong address, garbage and unsupported headers verify False

Design Decisions:
    - Signatures produced in-test with python-ecdsa so no wallet is needed
    - RIPEMD-160 is an optional OpenSSL algorithm; tests needing it skip when absent
"""

import base64
import hashlib

import pytest
from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.util import sigdecode_string, sigencode_string

from starchain.infrastructure.bitcoin_message import (
    BitcoinMessageVerifier, address_from_public_key, b58check_decode,
    b58check_encode, hash160, message_digest,
)


def _ripemd_available() -> bool:
    try:
        hashlib.new("ripemd160")
    except ValueError:
        return False
    return True


needs_ripemd = pytest.mark.skipif(
    not _ripemd_available(), reason="hashlib lacks ripemd160",
)

GENESIS_ADDRESS = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
GENESIS_HASH160 = bytes.fromhex("62e907b15cbf27d5425399ebf6f0fb50ebb88f18")


def _signing_key(secret: int = 0xC0FFEE) -> SigningKey:
    return SigningKey.from_secret_exponent(secret, curve=SECP256k1, hashfunc=hashlib.sha256)


def _sign(sk: SigningKey, message: str, header_base: int = 31) -> str:
    """Compact recoverable signature in the wallet 'signmessage' format."""
    digest = message_digest(message)
    sig = sk.sign_digest_deterministic(
        digest, hashfunc=hashlib.sha256, sigencode=sigencode_string,
    )
    candidates = VerifyingKey.from_public_key_recovery_with_digest(
        sig, digest, SECP256k1, hashfunc=hashlib.sha256, sigdecode=sigdecode_string,
    )
    target = sk.get_verifying_key().to_string()
    index = next(i for i, vk in enumerate(candidates) if vk.to_string() == target)
    return base64.b64encode(bytes([header_base + index]) + sig).decode("ascii")


@pytest.fixture
def verifier():
    return BitcoinMessageVerifier()


# --- Base58Check ----------------------------------------------------------------

def test_b58check_encode_genesis_vector():
    assert b58check_encode(0x00, GENESIS_HASH160) == GENESIS_ADDRESS


def test_b58check_decode_genesis_vector():
    assert b58check_decode(GENESIS_ADDRESS) == (0x00, GENESIS_HASH160)


@pytest.mark.parametrize("address", [
    "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNb",   # checksum
    "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfN0",   # '0' not in alphabet
    "1A1zP1",                               # length
    "",
])
def test_b58check_decode_rejects_malformed(address):
    with pytest.raises(ValueError):
        b58check_decode(address)


def test_message_digest_depends_on_message():
    assert message_digest("a") != message_digest("b")
    assert len(message_digest("x" * 300)) == 32


# --- Verification -------------------------------------------------------------

@needs_ripemd
def test_compressed_p2pkh_signature_verifies(verifier):
    sk = _signing_key()
    address = address_from_public_key(sk.get_verifying_key())
    message = f"{address}:1000:starRegistry"
    assert address.startswith("1")
    assert verifier.verify(message, address, _sign(sk, message))


@needs_ripemd
def test_uncompressed_p2pkh_signature_verifies(verifier):
    sk = _signing_key(0xBEEF)
    address = address_from_public_key(sk.get_verifying_key(), compressed=False)
    message = f"{address}:1000:starRegistry"
    assert verifier.verify(message, address, _sign(sk, message, header_base=27))


@needs_ripemd
def test_testnet_address_verifies(verifier):
    sk = _signing_key()
    address = address_from_public_key(sk.get_verifying_key(), testnet=True)
    message = f"{address}:1000:starRegistry"
    assert address[0] in "mn"
    assert verifier.verify(message, address, _sign(sk, message))


@needs_ripemd
def test_p2sh_p2wpkh_signature_verifies(verifier):
    sk = _signing_key()
    key_hash = hash160(sk.get_verifying_key().to_string("compressed"))
    address = b58check_encode(0x05, hash160(b"\x00\x14" + key_hash))
    message = f"{address}:1000:starRegistry"
    assert address.startswith("3")
    assert verifier.verify(message, address, _sign(sk, message, header_base=35))


@needs_ripemd
def test_compression_flag_must_match_address(verifier):
    sk = _signing_key()
    address = address_from_public_key(sk.get_verifying_key(), compressed=True)
    message = f"{address}:1000:starRegistry"
    assert not verifier.verify(message, address, _sign(sk, message, header_base=27))


@needs_ripemd
def test_different_message_fails(verifier):
    sk = _signing_key()
    address = address_from_public_key(sk.get_verifying_key())
    signature = _sign(sk, f"{address}:1000:starRegistry")
    assert not verifier.verify(f"{address}:1001:starRegistry", address, signature)


@needs_ripemd
def test_other_wallet_address_fails(verifier):
    sk = _signing_key()
    other = address_from_public_key(_signing_key(0xDEAD).get_verifying_key())
    message = f"{other}:1000:starRegistry"
    assert not verifier.verify(message, other, _sign(sk, message))


@needs_ripemd
def test_p2pkh_header_against_p2sh_address_fails(verifier):
    sk = _signing_key()
    message = "3Whatever:1000:starRegistry"
    key_hash = hash160(sk.get_verifying_key().to_string("compressed"))
    address = b58check_encode(0x05, key_hash)
    assert not verifier.verify(message, address, _sign(sk, message))


@pytest.mark.parametrize("signature", [
    "not base64!!",
    base64.b64encode(b"\x1f" + b"\x01" * 10).decode(),
    base64.b64encode(b"\x27" + b"\x01" * 64).decode(),   # bech32 header 39
    base64.b64encode(b"\x10" + b"\x01" * 64).decode(),   # header below 27
])
def test_garbage_signature_fails(verifier, signature):
    assert not verifier.verify(f"{GENESIS_ADDRESS}:1000:starRegistry", GENESIS_ADDRESS, signature)


def test_malformed_address_fails(verifier):
    sk = _signing_key()
    message = "bogus:1000:starRegistry"
    assert not verifier.verify(message, "bogus-address", _sign(sk, message))
