"""
Vault Error Types
=================

Every failure the vault can report derives from ``VaultError``.

A wrong master password is NOT an error: ``verify_password`` and
``MasterPasswordManager.unlock`` return ``False`` for it.
"""

from __future__ import annotations

from typing import Final


DECRYPTION_FAILED_MESSAGE: Final[str] = (
    "decryption failed: wrong master password or corrupted data"
)


class VaultError(Exception):
    """Base exception for credential vault errors."""
    pass


class RandomSourceError(VaultError):
    """Raised when the OS entropy source cannot supply random bytes."""
    pass


class MalformedBlobError(VaultError):
    """Raised when a stored blob is not valid base64 or is too short."""
    pass


class DecryptionFailedError(VaultError):
    """
    Raised when AES-GCM authentication fails.

    Wrong key, corrupted ciphertext and tampered data are deliberately
    reported identically.
    """

    def __init__(self, message: str = DECRYPTION_FAILED_MESSAGE) -> None:
        super().__init__(message)


class VaultLockedError(VaultError):
    """Raised when a locked vault is asked to encrypt or decrypt."""

    def __init__(self, message: str = "vault is locked") -> None:
        super().__init__(message)


class MasterPasswordAlreadySetError(VaultError):
    """Raised when a master password is set on an installation that has one."""
    pass


class MasterPasswordNotSetError(VaultError):
    """Raised when unlocking an installation that has no master password."""
    pass


class CorruptVaultStateError(VaultError):
    """Raised when the persisted salt or hash cannot be used."""
    pass
