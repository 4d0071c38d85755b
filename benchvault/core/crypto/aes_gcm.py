"""
AES-256-GCM Authenticated Encryption
====================================

Encrypts individual secret strings (database and SSH passwords) under the
vault key.

Blob format (base64, standard alphabet, padded):

    nonce (12 bytes) || ciphertext || tag (16 bytes)

Security Properties:
    - 256-bit key
    - 96-bit random nonce, fresh for every encryption
    - 128-bit authentication tag, no additional authenticated data

WARNING:
    - Never reuse (key, nonce) pairs
    - Nonces always come from the OS CSPRNG, never a counter
"""

from __future__ import annotations

import base64
import binascii
import secrets
from typing import Final

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from benchvault.core.crypto.errors import (
    DecryptionFailedError,
    MalformedBlobError,
    RandomSourceError,
)

AES_KEY_SIZE: Final[int] = 32  # 256 bits
AES_NONCE_SIZE: Final[int] = 12  # 96 bits (NIST recommended for GCM)
AES_TAG_SIZE: Final[int] = 16  # 128 bits


class AesGcmCipher:
    """
    AES-256-GCM cipher bound to a single key.

    Usage:
        cipher = AesGcmCipher(key)
        blob = cipher.encrypt("db-secret-123")
        assert cipher.decrypt(blob) == "db-secret-123"

    Empty strings are never encrypted: ``encrypt("")`` and ``decrypt("")``
    both return ``""`` so an unset field always round-trips to unset.

    Instances hold no mutable state and may be shared between threads.
    """

    __slots__ = ("_aesgcm",)

    def __init__(self, key: bytes) -> None:
        """
        Args:
            key: 32-byte AES key

        Raises:
            ValueError: If the key is the wrong size
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        self._aesgcm = AESGCM(bytes(key))

    def __repr__(self) -> str:
        return "AesGcmCipher(key=<hidden>)"

    @staticmethod
    def generate_nonce() -> bytes:
        """
        Generate a cryptographically secure random nonce.

        Raises:
            RandomSourceError: If the entropy source is unavailable
        """
        try:
            return secrets.token_bytes(AES_NONCE_SIZE)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError("entropy source unavailable while generating nonce") from e

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a secret string.

        Args:
            plaintext: Secret to encrypt

        Returns:
            Base64 blob with the nonce prepended, or "" for empty input
        """
        if not plaintext:
            return ""

        nonce = self.generate_nonce()
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, blob: str) -> str:
        """
        Decrypt a blob produced by encrypt().

        Args:
            blob: Base64 blob, or "" for an unset field

        Returns:
            The plaintext secret

        Raises:
            MalformedBlobError: If the blob is not base64 or shorter than a nonce
            DecryptionFailedError: If authentication fails (wrong key or
                corrupted/tampered data, never distinguished)
        """
        if not blob:
            return ""

        try:
            data = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedBlobError("encrypted value is not valid base64") from e

        if len(data) < AES_NONCE_SIZE:
            raise MalformedBlobError("ciphertext too short")

        nonce, sealed = data[:AES_NONCE_SIZE], data[AES_NONCE_SIZE:]
        if len(sealed) < AES_TAG_SIZE:
            raise DecryptionFailedError()

        try:
            plaintext = self._aesgcm.decrypt(nonce, sealed, None)
        except InvalidTag:
            raise DecryptionFailedError() from None

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedBlobError("decrypted value is not valid UTF-8") from e
