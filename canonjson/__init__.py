"""
canonjson v0.1
Canonical JSON for hashing and signing

Canonical: serialize, serialize_bytes
Digests & signatures: digest, sign_value, verify_value
"""

from .canonical import (
    serialize,
    serialize_bytes,
    canonicalize,
    canonicalize_bytes,
    encode_string,
    encode_number,
    escape_string,
    is_well_formed,
    sort_keys,
)
from .crypto import (
    hash,
    sha256,
    digest,
    sign,
    verify,
    sign_value,
    verify_value,
    generate_keypair,
)
from .errors import CanonicalizationError, InvalidNumber, InvalidString, InvalidType
from .values import UNDEFINED, CanonicalValue, JsonValue

__version__ = "0.1.0"
__all__ = [
    # Canonical
    "serialize",
    "serialize_bytes",
    "canonicalize",
    "canonicalize_bytes",
    "encode_string",
    "encode_number",
    "escape_string",
    "is_well_formed",
    "sort_keys",
    # Values
    "UNDEFINED",
    "CanonicalValue",
    "JsonValue",
    # Errors
    "CanonicalizationError",
    "InvalidNumber",
    "InvalidString",
    "InvalidType",
    # Digests & signatures
    "hash",
    "sha256",
    "digest",
    "sign",
    "verify",
    "sign_value",
    "verify_value",
    "generate_keypair",
]
