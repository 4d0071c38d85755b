"""
BenchVault - Credential Vault for a Desktop Database Client
===========================================================

Derives an encryption key from a master password and keeps saved
connection secrets (database and SSH passwords) encrypted at rest.

Security Notice:
- The master password is never stored or logged
- Secrets are encrypted with AES-256-GCM under an Argon2id-derived key
- No secrets are logged
"""

from benchvault.core.config import SecureConfig
from benchvault.core.logging import get_secure_logger

__version__ = "0.1.0"
__author__ = "BenchVault Team"

__all__ = ["SecureConfig", "get_secure_logger", "__version__"]
