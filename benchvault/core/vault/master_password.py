"""
Master Password Lifecycle
=========================

Locked/Unlocked state machine of the credential vault.

    Locked --set_master_password--> Unlocked   (first run only)
    Locked --unlock(ok)-----------> Unlocked
    Locked --unlock(mismatch)-----> Locked
    Unlocked --lock---------------> Locked

The salt and verification hash live in an injected configuration store
under ``master_salt`` and ``master_hash``. Store errors propagate unchanged.

Argon2id derivation is deliberately slow; UI code should use the
``submit_*`` variants, which run on a worker thread and return a Future.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Final, Optional, Protocol

from benchvault.core.crypto.errors import (
    MasterPasswordAlreadySetError,
    MasterPasswordNotSetError,
    VaultLockedError,
)
from benchvault.core.crypto.kdf import decode_salt, derive_key, verify_key
from benchvault.core.vault.vault import Vault, create_vault

CONFIG_KEY_SALT: Final[str] = "master_salt"
CONFIG_KEY_HASH: Final[str] = "master_hash"


class ConfigStore(Protocol):
    """Key/value configuration store. Missing keys read as ""."""

    def get_config(self, key: str) -> str: ...

    def set_config(self, key: str, value: str) -> None: ...


class MasterPasswordManager:
    """
    Owns the vault session for one installation.

    The manager is an ordinary object passed to whatever needs encryption;
    several managers (e.g. in tests) never share state.

    Usage:
        manager = MasterPasswordManager(store)
        if not manager.has_master_password():
            manager.set_master_password(password)
        elif not manager.unlock(password):
            show_error("wrong master password")
        blob = manager.vault.encrypt(secret)
    """

    def __init__(self, store: ConfigStore, worker_threads: int = 1) -> None:
        """
        Args:
            store: Configuration store holding master_salt/master_hash
            worker_threads: Threads used by the submit_* methods
        """
        self._store = store
        self._vault: Optional[Vault] = None
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=worker_threads,
            thread_name_prefix="benchvault-kdf",
        )
        self._log = logging.getLogger("benchvault.vault")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def has_master_password(self) -> bool:
        """True once a verification hash has been stored."""
        return self._store.get_config(CONFIG_KEY_HASH) != ""

    @property
    def is_unlocked(self) -> bool:
        with self._lock:
            return self._vault is not None and self._vault.is_unlocked

    @property
    def vault(self) -> Vault:
        """
        The unlocked vault.

        Raises:
            VaultLockedError: If no vault is unlocked
        """
        with self._lock:
            vault = self._vault
        if vault is None or not vault.is_unlocked:
            raise VaultLockedError()
        return vault

    def _install(self, vault: Vault) -> None:
        with self._lock:
            previous, self._vault = self._vault, vault
        if previous is not None and previous is not vault:
            previous.lock()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_master_password(self, password: str) -> Vault:
        """
        Set the master password for the first time and unlock.

        Raises:
            MasterPasswordAlreadySetError: If a master password exists
            RandomSourceError: If no salt can be generated
        """
        if self.has_master_password():
            raise MasterPasswordAlreadySetError("a master password is already set")

        vault, salt_b64, hash_b64 = create_vault(password)
        try:
            self._store.set_config(CONFIG_KEY_SALT, salt_b64)
            self._store.set_config(CONFIG_KEY_HASH, hash_b64)
        except Exception:
            vault.lock()
            raise

        self._install(vault)
        self._log.info("Master password set; vault unlocked")
        return vault

    def unlock(self, password: str) -> bool:
        """
        Verify the master password and unlock the vault.

        Returns:
            True on success, False if the password does not match

        Raises:
            MasterPasswordNotSetError: If no master password was ever set
            CorruptVaultStateError: If the stored salt is unusable
        """
        stored_hash = self._store.get_config(CONFIG_KEY_HASH)
        if not stored_hash:
            raise MasterPasswordNotSetError("no master password has been set")

        salt = decode_salt(self._store.get_config(CONFIG_KEY_SALT))

        key = derive_key(password, salt)
        if not verify_key(key, stored_hash):
            self._log.warning("Vault unlock rejected: master password mismatch")
            return False

        self._install(Vault(key))
        self._log.info("Vault unlocked")
        return True

    def lock(self) -> None:
        """Wipe the key and return to Locked. Idempotent."""
        with self._lock:
            vault, self._vault = self._vault, None
        if vault is not None:
            vault.lock()
            self._log.info("Vault locked")

    # ------------------------------------------------------------------
    # Background derivation
    # ------------------------------------------------------------------

    def submit_set_master_password(self, password: str) -> Future[Vault]:
        """Run set_master_password on the worker thread."""
        return self._executor.submit(self.set_master_password, password)

    def submit_unlock(self, password: str) -> Future[bool]:
        """Run unlock on the worker thread."""
        return self._executor.submit(self.unlock, password)

    def close(self) -> None:
        """Lock the vault and stop the worker thread."""
        self.lock()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> MasterPasswordManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "unlocked" if self.is_unlocked else "locked"
        return f"MasterPasswordManager(state={state})"
