"""
Connection Profile Service
==========================

Applies the vault to saved connection profiles: secret fields are
encrypted before a profile is written and decrypted after it is read.

A field that fails to decrypt (legacy plaintext, corruption, a blob from
another installation) keeps its stored value instead of failing the whole
load. That tolerance lives here, not in the vault, which always reports
failures.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Final, List

from benchvault.core.crypto.errors import DecryptionFailedError, MalformedBlobError
from benchvault.core.vault.master_password import MasterPasswordManager
from benchvault.db.store import ConnectionProfile, LocalStore

SECRET_FIELDS: Final[tuple[str, ...]] = ("password", "ssh_password")


class ConnectionService:
    """
    Profile CRUD with transparent secret encryption.

    Profiles returned by this service carry plaintext secrets; profiles in
    the store carry encrypted blobs.
    """

    def __init__(
        self,
        store: LocalStore,
        vault_manager: MasterPasswordManager,
        fallback_to_stored_value: bool = True,
    ) -> None:
        """
        Args:
            store: Local profile store
            vault_manager: Source of the unlocked vault
            fallback_to_stored_value: Keep the stored value when a secret
                field fails to decrypt (otherwise the error propagates)
        """
        self._store = store
        self._vault_manager = vault_manager
        self._fallback = fallback_to_stored_value
        self._log = logging.getLogger("benchvault.connections")

    def _seal(self, profile: ConnectionProfile) -> ConnectionProfile:
        vault = self._vault_manager.vault
        return dataclasses.replace(
            profile,
            **{name: vault.encrypt(getattr(profile, name)) for name in SECRET_FIELDS},
        )

    def _open(self, profile: ConnectionProfile) -> ConnectionProfile:
        if not self._vault_manager.is_unlocked:
            return profile

        vault = self._vault_manager.vault
        for name in SECRET_FIELDS:
            stored = getattr(profile, name)
            try:
                setattr(profile, name, vault.decrypt(stored))
            except (MalformedBlobError, DecryptionFailedError) as e:
                if not self._fallback:
                    raise
                self._log.warning(
                    "Could not decrypt field %s of profile %s (%s); keeping stored value",
                    name, profile.id, type(e).__name__,
                )
        return profile

    def list_connections(self) -> List[ConnectionProfile]:
        """All saved profiles with secrets decrypted."""
        return [self._open(profile) for profile in self._store.list_connections()]

    def get_connection(self, profile_id: str) -> ConnectionProfile:
        """
        Raises:
            ProfileNotFoundError: If no profile has this id
        """
        return self._open(self._store.get_connection(profile_id))

    def save_connection(self, profile: ConnectionProfile) -> str:
        """
        Encrypt the secret fields and save the profile.

        The caller's object keeps its plaintext secrets; its id and
        timestamps are updated to match the stored row.

        Returns:
            The profile id

        Raises:
            VaultLockedError: If the vault is locked
        """
        sealed = self._seal(profile)
        profile_id = self._store.save_connection(sealed)

        profile.id = sealed.id
        profile.created_at = sealed.created_at
        profile.updated_at = sealed.updated_at
        self._log.info("Saved connection profile %s", profile_id)
        return profile_id

    def delete_connection(self, profile_id: str) -> None:
        self._store.delete_connection(profile_id)
        self._log.info("Deleted connection profile %s", profile_id)
