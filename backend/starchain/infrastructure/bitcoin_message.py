"""Bitcoin Message Verifier — proves control of a wallet address by signed message.

Invariants:
    - Signature is base64 of 65 bytes: header || r || s (compact, recoverable)
    - Header 27-30 uncompressed P2PKH, 31-34 compressed P2PKH, 35-38 P2SH-P2WPKH
    - Message digest is double-SHA256 over "\\x18Bitcoin Signed Message:\\n" + varint(len) + msg
    - verify() returns False for any malformed address or signature; it raises only
      when the platform cannot compute RIPEMD-160 (SignatureBackendError)

Design Decisions:
    - secp256k1 public-key recovery via python-ecdsa: the recovered key is checked
      against the address hash, so no public key needs to be registered up front
    - Legacy Base58Check addresses only (mainnet and testnet); bech32 headers 39-42
      are rejected rather than half-supported
"""

import base64
import binascii
import hashlib
import logging

from ecdsa import SECP256k1, VerifyingKey
from ecdsa.numbertheory import Error as NumberTheoryError
from ecdsa.util import sigdecode_string

from starchain.core.domain_types import WalletAddress
from starchain.core.errors import SignatureBackendError

logger = logging.getLogger(__name__)

MESSAGE_MAGIC = b"\x18Bitcoin Signed Message:\n"
B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

P2PKH_VERSIONS = frozenset({0x00, 0x6F})
P2SH_VERSIONS = frozenset({0x05, 0xC4})

SIGNATURE_LENGTH = 65
HEADER_MIN = 27
HEADER_COMPRESSED = 31
HEADER_P2SH_P2WPKH = 35
HEADER_MAX = 38


# ─── Hash helpers ────────────────────────────────────────────────

def _double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256."""
    try:
        ripemd = hashlib.new("ripemd160")
    except ValueError as exc:
        raise SignatureBackendError("ripemd160 not provided by hashlib") from exc
    ripemd.update(hashlib.sha256(data).digest())
    return ripemd.digest()


def _varint(n: int) -> bytes:
    if n < 0xFD:
        return bytes([n])
    if n <= 0xFFFF:
        return b"\xfd" + n.to_bytes(2, "little")
    if n <= 0xFFFFFFFF:
        return b"\xfe" + n.to_bytes(4, "little")
    return b"\xff" + n.to_bytes(8, "little")


def message_digest(message: str) -> bytes:
    data = message.encode("utf-8")
    return _double_sha256(MESSAGE_MAGIC + _varint(len(data)) + data)


# ─── Base58Check ─────────────────────────────────────────────────

def b58check_encode(version: int, payload: bytes) -> str:
    raw = bytes([version]) + payload
    raw += _double_sha256(raw)[:4]
    number = int.from_bytes(raw, "big")
    chars = []
    while number:
        number, remainder = divmod(number, 58)
        chars.append(B58_ALPHABET[remainder])
    leading_zeros = len(raw) - len(raw.lstrip(b"\x00"))
    return "1" * leading_zeros + "".join(reversed(chars))


def b58check_decode(address: str) -> tuple[int, bytes]:
    """Return (version, 20-byte hash). Raises ValueError on any malformation."""
    number = 0
    for char in address:
        index = B58_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"invalid base58 character {char!r}")
        number = number * 58 + index
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    raw = b"\x00" * (len(address) - len(address.lstrip("1"))) + body
    if len(raw) != 25:
        raise ValueError("address must decode to 25 bytes")
    payload, checksum = raw[:-4], raw[-4:]
    if _double_sha256(payload)[:4] != checksum:
        raise ValueError("address checksum mismatch")
    return payload[0], payload[1:]


def address_from_public_key(
    verifying_key: VerifyingKey, compressed: bool = True, testnet: bool = False,
) -> str:
    """Legacy P2PKH address for a secp256k1 public key."""
    encoding = "compressed" if compressed else "uncompressed"
    version = 0x6F if testnet else 0x00
    return b58check_encode(version, hash160(verifying_key.to_string(encoding)))


# ─── Verifier ────────────────────────────────────────────────────

class BitcoinMessageVerifier:
    """SignatureVerifier for Electrum / Bitcoin Core 'signmessage' output."""

    def verify(self, message: str, address: WalletAddress, signature: str) -> bool:
        try:
            version, key_hash = b58check_decode(address)
            raw = base64.b64decode(signature, validate=True)
        except (ValueError, binascii.Error):
            logger.debug("Malformed address or signature", extra={"address": address})
            return False

        if len(raw) != SIGNATURE_LENGTH or not HEADER_MIN <= raw[0] <= HEADER_MAX:
            return False
        header = raw[0]
        compressed = header >= HEADER_COMPRESSED
        wrapped_segwit = header >= HEADER_P2SH_P2WPKH

        if wrapped_segwit and version not in P2SH_VERSIONS:
            return False
        if not wrapped_segwit and version not in P2PKH_VERSIONS:
            return False

        try:
            candidates = VerifyingKey.from_public_key_recovery_with_digest(
                raw[1:], message_digest(message), SECP256k1,
                hashfunc=hashlib.sha256, sigdecode=sigdecode_string,
            )
        except (ValueError, AssertionError, ZeroDivisionError, NumberTheoryError):
            return False

        encoding = "compressed" if compressed else "uncompressed"
        for candidate in candidates:
            candidate_hash = hash160(candidate.to_string(encoding))
            if wrapped_segwit:
                candidate_hash = hash160(b"\x00\x14" + candidate_hash)
            if candidate_hash == key_hash:
                return True
        return False
