"""
Shared pytest fixtures for the BenchVault test suite.

Argon2id derivation costs 64 MiB and tens of milliseconds per call, so the
fixed-salt keys used by many tests are derived once per session.
"""

import logging

import pytest

from benchvault.core.config import LoggingConfig, PathConfig, SecureConfig
from benchvault.core.logging import SecureLogFilter
from benchvault.core.crypto.kdf import SALT_LENGTH, derive_key
from benchvault.core.vault.master_password import MasterPasswordManager
from benchvault.db.store import LocalStore

CORRECT_PASSWORD = "correct horse"
WRONG_PASSWORD = "wrong horse"


@pytest.fixture(scope="session")
def zero_salt():
    """Test-fixed salt: 16 zero bytes."""
    return bytes(SALT_LENGTH)


@pytest.fixture(scope="session")
def correct_key(zero_salt):
    return derive_key(CORRECT_PASSWORD, zero_salt)


@pytest.fixture(scope="session")
def wrong_key(zero_salt):
    return derive_key(WRONG_PASSWORD, zero_salt)


@pytest.fixture
def store(tmp_path):
    """LocalStore backed by a temp database."""
    return LocalStore(tmp_path / "benchvault.db")


@pytest.fixture
def manager(store):
    """Locked MasterPasswordManager over the temp store."""
    mgr = MasterPasswordManager(store)
    yield mgr
    mgr.close()


@pytest.fixture
def unlocked_manager(manager):
    """Manager after first-run setup with CORRECT_PASSWORD."""
    manager.set_master_password(CORRECT_PASSWORD)
    return manager


@pytest.fixture
def app_config(tmp_path):
    """Configuration confined to the temp directory, no console output."""
    return SecureConfig(
        paths=PathConfig(
            data_dir=tmp_path / "data",
            config_dir=tmp_path / "config",
            log_dir=tmp_path / "logs",
        ),
        logging=LoggingConfig(enable_console=False),
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Remove handlers installed by configure_root_logger() during a test."""
    root = logging.getLogger()
    saved_level = root.level

    yield

    for handler in list(root.handlers):
        if any(isinstance(f, SecureLogFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    yield
    SecureConfig.reset_instance()
