"""
Memory Zeroization Utilities
============================

Best-effort wiping of key material and encoded passwords.

Python may keep copies of data (immutable ``bytes``/``str`` objects,
interpreter buffers), so this only clears the mutable buffers we own.
"""

from __future__ import annotations

import ctypes
from contextlib import contextmanager
from typing import Iterator


def secure_zero(data: bytearray) -> None:
    """
    Securely zero a byte buffer.

    Args:
        data: Mutable byte buffer to zero

    Security Notes:
        - Buffer must be mutable (bytearray, not bytes)
        - Call immediately after use, before GC
    """
    if len(data) == 0:
        return

    addr = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
    ctypes.memset(addr, 0, len(data))


def is_zeroed(data: bytearray) -> bool:
    """Return True if every byte of the buffer is zero."""
    return not any(data)


@contextmanager
def ZeroizeContext(*buffers: bytearray) -> Iterator[None]:
    """
    Context manager that zeroizes buffers on exit.

    Always zeroizes, whether exit is normal or exceptional.

    Usage:
        secret = bytearray(password.encode("utf-8"))
        with ZeroizeContext(secret):
            key = derive(bytes(secret))
        # secret is now zeroed
    """
    try:
        yield
    finally:
        for buf in buffers:
            secure_zero(buf)
