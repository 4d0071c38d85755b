"""
Application Facade
==================

Startup/shutdown wiring and the operations the desktop front end binds to.

Usage:
    with VaultApplication() as app:
        if not app.has_master_password():
            app.set_master_password(password)
        elif not app.unlock_vault(password):
            ...
        profiles = app.list_connections()
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import List, Optional

from benchvault.core.config import SecureConfig
from benchvault.core.connections import ConnectionService
from benchvault.core.logging import configure_root_logger
from benchvault.core.vault.master_password import MasterPasswordManager
from benchvault.core.vault.vault import Vault
from benchvault.db.store import ConnectionProfile, LocalStore


class VaultApplication:
    """Owns the store, the vault session and the connection service."""

    def __init__(self, config: Optional[SecureConfig] = None) -> None:
        self._config = config or SecureConfig.get_instance()
        self._store: Optional[LocalStore] = None
        self._vault_manager: Optional[MasterPasswordManager] = None
        self._connections: Optional[ConnectionService] = None
        self._log = logging.getLogger("benchvault.app")

    @property
    def config(self) -> SecureConfig:
        return self._config

    @property
    def started(self) -> bool:
        return self._store is not None

    def startup(self) -> None:
        """Create directories, configure logging and open the local store."""
        if self.started:
            return

        config = self._config
        config.ensure_directories()
        configure_root_logger(log_dir=config.paths.log_dir, config=config.logging)

        self._store = LocalStore(config.db_path)
        self._vault_manager = MasterPasswordManager(
            self._store,
            worker_threads=config.vault.kdf_worker_threads,
        )
        self._connections = ConnectionService(
            self._store,
            self._vault_manager,
            fallback_to_stored_value=config.vault.fallback_to_stored_value,
        )
        self._log.info("%s %s started", config.app.app_name, config.app.version)

    def shutdown(self) -> None:
        """Lock the vault and release resources. Safe to call twice."""
        if self._vault_manager is not None:
            self._vault_manager.close()
        self._store = None
        self._vault_manager = None
        self._connections = None

    def __enter__(self) -> VaultApplication:
        self.startup()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _require_manager(self) -> MasterPasswordManager:
        if self._vault_manager is None:
            raise RuntimeError("VaultApplication.startup() has not been called")
        return self._vault_manager

    def _require_connections(self) -> ConnectionService:
        if self._connections is None:
            raise RuntimeError("VaultApplication.startup() has not been called")
        return self._connections

    # --- Master password ---

    def has_master_password(self) -> bool:
        return self._require_manager().has_master_password()

    def set_master_password(self, password: str) -> None:
        self._require_manager().set_master_password(password)

    def set_master_password_async(self, password: str) -> Future[Vault]:
        """First-run setup on the key-derivation worker thread."""
        return self._require_manager().submit_set_master_password(password)

    def unlock_vault(self, password: str) -> bool:
        return self._require_manager().unlock(password)

    def unlock_vault_async(self, password: str) -> Future[bool]:
        """Unlock on the key-derivation worker thread."""
        return self._require_manager().submit_unlock(password)

    def is_unlocked(self) -> bool:
        return self._vault_manager is not None and self._vault_manager.is_unlocked

    def lock_vault(self) -> None:
        self._require_manager().lock()

    # --- Connection profiles ---

    def list_connections(self) -> List[ConnectionProfile]:
        return self._require_connections().list_connections()

    def get_connection(self, profile_id: str) -> ConnectionProfile:
        return self._require_connections().get_connection(profile_id)

    def save_connection(self, profile: ConnectionProfile) -> str:
        return self._require_connections().save_connection(profile)

    def delete_connection(self, profile_id: str) -> None:
        self._require_connections().delete_connection(profile_id)
