from __future__ import annotations

"""
Unit tests for hashing helpers.
"""

import hashlib

from testreader.utils.crypto import get_md5, get_short_md5


def test_md5_matches_hashlib() -> None:
    assert get_md5("abc") == hashlib.md5(b"abc").hexdigest()


def test_short_md5_length() -> None:
    assert len(get_short_md5("abc")) == 7
    assert get_short_md5("abc", length=16) == get_md5("abc")[:16]
    assert get_short_md5("abc") == get_short_md5("abc")
