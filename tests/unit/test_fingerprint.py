"""Tests for definition source fingerprinting."""

import hashlib

from couchrepo.core.fingerprint import FINGERPRINT_LENGTH, fingerprint


class TestFingerprint:
    """Tests for fingerprint()."""

    def test_same_bytes_give_same_fingerprint(self) -> None:
        payload = b'{"views": {"all": {"map": "function(doc) {}"}}}'
        assert fingerprint(payload) == fingerprint(payload)

    def test_any_byte_change_flips_fingerprint(self) -> None:
        """Whitespace-only edits still count as changes."""
        compact = b'{"views":{}}'
        spaced = b'{"views": {}}'
        assert fingerprint(compact) != fingerprint(spaced)

    def test_is_lowercase_hex_of_fixed_length(self) -> None:
        digest = fingerprint(b"anything")
        assert len(digest) == FINGERPRINT_LENGTH
        assert digest == digest.lower()
        int(digest, 16)

    def test_matches_md5(self) -> None:
        assert fingerprint(b"abc") == hashlib.md5(b"abc").hexdigest()

    def test_str_input_is_utf8_encoded(self) -> None:
        assert fingerprint("naïve") == fingerprint("naïve".encode("utf-8"))

    def test_empty_input(self) -> None:
        assert fingerprint(b"") == "d41d8cd98f00b204e9800998ecf8427e"
