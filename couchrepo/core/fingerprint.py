"""
Content fingerprinting for view definition sources.

Hashes the raw bytes of a definition file so that any change to the file,
including formatting, is detected as a change in the stored design document.

Dependencies: hashlib
System role: Change detection for design document synchronization
"""

import hashlib

FINGERPRINT_LENGTH = 32


def fingerprint(raw: bytes | str) -> str:
    """
    Compute the fingerprint of a view definition payload.

    Args:
        raw: Definition source exactly as read; str input is UTF-8 encoded

    Returns:
        str: Lowercase hexadecimal MD5 digest (32 characters)
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return hashlib.md5(raw, usedforsecurity=False).hexdigest()
