from __future__ import annotations

"""
Hashing Utilities.

Deterministic short digests used to derive suite and test identities.
"""

import hashlib

from testreader.domain.constants import SHORT_HASH_LENGTH


def get_md5(value: str) -> str:
    """Return the hex MD5 digest of a UTF-8 string."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def get_short_md5(value: str, length: int = SHORT_HASH_LENGTH) -> str:
    """
    Return a truncated MD5 digest.

    Args:
        value: Input string (a file path, a test title...).
        length: Number of leading hex characters to keep.

    Returns:
        str: The shortened digest, identical for identical input.
    """
    return get_md5(value)[:length]
