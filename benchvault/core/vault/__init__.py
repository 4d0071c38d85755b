"""
BenchVault Vault Module
=======================

Session-level credential vault:
- Vault: in-memory derived key with encrypt/decrypt
- MasterPasswordManager: first-run setup, unlock and lock
"""

from benchvault.core.vault.vault import Vault, create_vault
from benchvault.core.vault.master_password import (
    CONFIG_KEY_HASH,
    CONFIG_KEY_SALT,
    ConfigStore,
    MasterPasswordManager,
)

__all__ = [
    "Vault",
    "create_vault",
    "CONFIG_KEY_HASH",
    "CONFIG_KEY_SALT",
    "ConfigStore",
    "MasterPasswordManager",
]
