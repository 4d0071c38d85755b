"""
BenchVault Cryptographic Core
=============================

Master-password key derivation and authenticated encryption of stored
connection secrets.

Architecture:
    1. Argon2id: password + salt -> 32-byte key and verification hash
    2. AES-256-GCM: per-secret authenticated encryption under that key

Security Properties:
    - All encryption is authenticated (AEAD)
    - Keys never touch disk (memory-only)
    - Constant-time comparisons for verification
    - Secure RNG for all salts and nonces

WARNING: This module handles sensitive cryptographic material.
"""

from benchvault.core.crypto.aes_gcm import AesGcmCipher
from benchvault.core.crypto.errors import (
    VaultError,
    RandomSourceError,
    MalformedBlobError,
    DecryptionFailedError,
    VaultLockedError,
    MasterPasswordAlreadySetError,
    MasterPasswordNotSetError,
    CorruptVaultStateError,
)
from benchvault.core.crypto.kdf import (
    generate_salt,
    derive_key,
    encode_key_hash,
    hash_password,
    verify_key,
    verify_password,
    encode_salt,
    decode_salt,
)

__all__ = [
    "AesGcmCipher",
    "VaultError",
    "RandomSourceError",
    "MalformedBlobError",
    "DecryptionFailedError",
    "VaultLockedError",
    "MasterPasswordAlreadySetError",
    "MasterPasswordNotSetError",
    "CorruptVaultStateError",
    "generate_salt",
    "derive_key",
    "encode_key_hash",
    "hash_password",
    "verify_key",
    "verify_password",
    "encode_salt",
    "decode_salt",
]
