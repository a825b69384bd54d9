"""
Digests and signatures over canonical JSON: blake3 / sha256 + ed25519
"""

from typing import Tuple
import hashlib

import blake3
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from .canonical import serialize_bytes
from .values import JsonValue

DIGEST_ALGORITHMS = ("blake3", "sha256")


def hash(data: bytes) -> str:
    """Compute blake3 hash of data, return hex string."""
    return blake3.blake3(data).hexdigest()


def sha256(data: bytes) -> str:
    """Compute SHA-256 hash of data, return hex string."""
    return hashlib.sha256(data).hexdigest()


def digest(value: JsonValue, algorithm: str = "blake3") -> str:
    """Hex digest of the canonical bytes of value."""
    if algorithm == "blake3":
        return hash(serialize_bytes(value))
    if algorithm == "sha256":
        return sha256(serialize_bytes(value))
    raise ValueError(f"Unsupported digest algorithm: {algorithm!r}, expected one of {DIGEST_ALGORITHMS}")


def generate_keypair() -> Tuple[str, str]:
    """Generate ed25519 keypair, return (private_key_hex, public_key_hex)."""
    signing_key = SigningKey.generate()
    return signing_key.encode().hex(), signing_key.verify_key.encode().hex()


def sign(message_hash: str, private_key_hex: str) -> str:
    """Sign a hex message hash with an ed25519 private key, return signature hex."""
    signing_key = SigningKey(bytes.fromhex(private_key_hex))
    # PyNaCl returns message + signature, we just want signature
    return signing_key.sign(bytes.fromhex(message_hash)).signature.hex()


def verify(message_hash: str, signature_hex: str, public_key_hex: str) -> bool:
    """Verify ed25519 signature, return True if valid."""
    try:
        verify_key = VerifyKey(bytes.fromhex(public_key_hex))
        verify_key.verify(bytes.fromhex(message_hash), bytes.fromhex(signature_hex))
    except (BadSignatureError, ValueError, TypeError):
        return False
    return True


def sign_value(value: JsonValue, private_key_hex: str) -> str:
    """Sign the blake3 digest of the canonical form of value."""
    return sign(digest(value), private_key_hex)


def verify_value(value: JsonValue, signature_hex: str, public_key_hex: str) -> bool:
    """
    Verify a signature made by sign_value.

    Key order and other non-canonical differences in value do not matter.
    Serialization errors propagate; only signature problems return False.
    """
    return verify(digest(value), signature_hex, public_key_hex)
