"""
BenchVault Memory Security Module
=================================

Explicit zeroization of derived keys and password buffers.

WARNING:
- Python's memory model doesn't guarantee secure erasure
- These are best-effort mitigations
"""

from benchvault.core.memory.zeroization import (
    secure_zero,
    is_zeroed,
    ZeroizeContext,
)

__all__ = [
    "secure_zero",
    "is_zeroed",
    "ZeroizeContext",
]
