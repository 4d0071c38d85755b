"""
Core module - Contains configuration, logging, and the credential vault.
"""

from benchvault.core.config import SecureConfig
from benchvault.core.logging import get_secure_logger, SecureLogFilter

__all__ = ["SecureConfig", "get_secure_logger", "SecureLogFilter"]
