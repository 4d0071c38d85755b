"""
Database module - Local persistence for BenchVault.

Security Considerations:
- Connection secrets are stored only as encrypted blobs
- The master password itself is never stored
"""

from benchvault.db.store import ConnectionProfile, LocalStore, ProfileNotFoundError

__all__ = ["ConnectionProfile", "LocalStore", "ProfileNotFoundError"]
