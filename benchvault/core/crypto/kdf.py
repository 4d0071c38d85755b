"""
Key Derivation Functions
========================

Argon2id key derivation and master password verification.

The same derivation produces both the AES-256 vault key and the stored
verification hash (the hash is the key, base64-encoded). Anyone who reads
``master_hash`` from the local store therefore holds the vault key. This is
kept for compatibility with existing installations; changing it requires a
migration of every encrypted field.

Parameters are part of the storage format: changing any constant below
invalidates every stored hash and every encrypted blob.

References:
- RFC 9106: Argon2 Memory-Hard Function
"""

from __future__ import annotations

import base64
import binascii
import hmac
import secrets
from typing import Final

from argon2.low_level import Type, hash_secret_raw

from benchvault.core.crypto.errors import CorruptVaultStateError, RandomSourceError
from benchvault.core.memory.zeroization import ZeroizeContext

# Argon2id parameters (storage format, do not change)
ARGON2_TIME_COST: Final[int] = 1
ARGON2_MEMORY_COST: Final[int] = 64 * 1024  # 64 MiB in KiB
ARGON2_PARALLELISM: Final[int] = 4
KEY_LENGTH: Final[int] = 32  # AES-256
SALT_LENGTH: Final[int] = 16


def generate_salt() -> bytes:
    """
    Generate a random salt for key derivation.

    Returns:
        16 bytes from the OS CSPRNG

    Raises:
        RandomSourceError: If the entropy source is unavailable
    """
    try:
        return secrets.token_bytes(SALT_LENGTH)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError("entropy source unavailable while generating salt") from e


def derive_key(password: str, salt: bytes) -> bytes:
    """
    Derive the 32-byte vault key from a password using Argon2id.

    Deterministic: the same password and salt always give the same key.
    Empty passwords are accepted; whether they are allowed is the caller's
    decision.

    Args:
        password: Master password
        salt: Installation salt

    Returns:
        Derived key bytes
    """
    secret = bytearray(password.encode("utf-8"))

    with ZeroizeContext(secret):
        return hash_secret_raw(
            secret=bytes(secret),
            salt=salt,
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST,
            parallelism=ARGON2_PARALLELISM,
            hash_len=KEY_LENGTH,
            type=Type.ID,
        )


def encode_key_hash(key: bytes) -> str:
    """Verification hash for an already-derived key (base64 of the key)."""
    return base64.b64encode(key).decode("ascii")


def hash_password(password: str, salt: bytes) -> str:
    """
    Create the verification hash of the master password.

    Stored so the password can be verified on later launches without
    decrypting anything.

    Returns:
        Base64-encoded derivation output
    """
    return encode_key_hash(derive_key(password, salt))


def verify_key(key: bytes, stored_hash: str) -> bool:
    """
    Check an already-derived key against a stored verification hash.

    Lets callers derive once and reuse the key for the vault on success.
    An undecodable stored hash is reported as a mismatch.

    Security:
        Uses hmac.compare_digest (constant-time)
    """
    try:
        decoded = base64.b64decode(stored_hash, validate=True)
    except (binascii.Error, ValueError):
        return False

    return hmac.compare_digest(key, decoded)


def verify_password(password: str, salt: bytes, stored_hash: str) -> bool:
    """
    Check a password against a stored verification hash.

    Args:
        password: Candidate password
        salt: Installation salt
        stored_hash: Base64 hash written by hash_password

    Returns:
        True if the password matches. An undecodable stored hash is
        reported as a mismatch.
    """
    return verify_key(derive_key(password, salt), stored_hash)


def encode_salt(salt: bytes) -> str:
    """Encode a salt for the configuration store."""
    return base64.b64encode(salt).decode("ascii")


def decode_salt(encoded: str) -> bytes:
    """
    Decode a salt read from the configuration store.

    Raises:
        CorruptVaultStateError: If the value is not base64 or has the wrong length
    """
    try:
        salt = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CorruptVaultStateError("stored master salt is not valid base64") from e

    if len(salt) != SALT_LENGTH:
        raise CorruptVaultStateError(
            f"stored master salt must be {SALT_LENGTH} bytes, got {len(salt)}"
        )
    return salt
