"""
Vault
=====

In-memory holder of the derived vault key for an unlocked session.

A Vault persists nothing. The salt and verification hash are written by
MasterPasswordManager, ciphertext blobs by the profile store.
"""

from __future__ import annotations

from typing import Optional

from benchvault.core.crypto.aes_gcm import AES_KEY_SIZE, AesGcmCipher
from benchvault.core.crypto.errors import VaultLockedError
from benchvault.core.crypto.kdf import derive_key, encode_key_hash, encode_salt, generate_salt
from benchvault.core.memory.zeroization import secure_zero


class Vault:
    """
    Unlocked vault session.

    Encrypt/decrypt calls may run concurrently from several threads; the
    key never changes after construction. ``lock()`` wipes the key and
    every later call raises VaultLockedError.

    Usage:
        with Vault.from_password(password, salt) as vault:
            blob = vault.encrypt("db-secret-123")
            secret = vault.decrypt(blob)
        # vault is locked here
    """

    __slots__ = ("_key", "_cipher")

    def __init__(self, key: bytes) -> None:
        """
        Args:
            key: 32-byte derived key

        Raises:
            ValueError: If the key is the wrong size
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        self._key = bytearray(key)
        self._cipher: Optional[AesGcmCipher] = AesGcmCipher(self._key)

    @classmethod
    def from_password(cls, password: str, salt: bytes) -> Vault:
        """Derive the key from the master password and salt (Argon2id, blocking)."""
        return cls(derive_key(password, salt))

    @property
    def is_unlocked(self) -> bool:
        return self._cipher is not None

    def _require_cipher(self) -> AesGcmCipher:
        cipher = self._cipher
        if cipher is None:
            raise VaultLockedError()
        return cipher

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a secret. See AesGcmCipher.encrypt."""
        return self._require_cipher().encrypt(plaintext)

    def decrypt(self, blob: str) -> str:
        """Decrypt a stored blob. See AesGcmCipher.decrypt."""
        return self._require_cipher().decrypt(blob)

    def lock(self) -> None:
        """Drop the cipher and zeroize the key. Idempotent."""
        self._cipher = None
        secure_zero(self._key)

    def __enter__(self) -> Vault:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.lock()

    def __repr__(self) -> str:
        """Safe representation without key material."""
        state = "unlocked" if self.is_unlocked else "locked"
        return f"Vault(state={state})"


def create_vault(password: str) -> tuple[Vault, str, str]:
    """
    First-run transition: build a vault for a new master password.

    Generates the installation salt and derives the key once; the
    verification hash is computed from that key.
    Nothing is persisted here, and an existing master password is not
    checked for; both are the caller's job.

    Returns:
        (vault, base64 salt, base64 verification hash)

    Raises:
        RandomSourceError: If no salt can be generated
    """
    salt = generate_salt()
    key = derive_key(password, salt)
    vault = Vault(key)
    return vault, encode_salt(salt), encode_key_hash(key)
