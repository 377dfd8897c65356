"""Tests for the IT600 encryptor."""

from __future__ import annotations

import hashlib

import pytest

from salus_it600.encryptor import IT600Encryptor, derive_key


class TestDeriveKey:
    """Test EUID → AES key derivation."""

    def test_key_is_16_bytes(self):
        assert len(derive_key("001E5E0D32906128")) == 16

    def test_key_is_md5_of_prefixed_lowercase_euid(self):
        expected = hashlib.md5(b"Salus-001e5e0d32906128").digest()
        assert derive_key("001E5E0D32906128") == expected

    def test_case_insensitive(self):
        assert derive_key("ABCD1234") == derive_key("abcd1234")

    def test_different_euids_differ(self):
        assert derive_key("ABCD1234") != derive_key("ABCD1235")


class TestIT600Encryptor:
    """Test AES-CBC encrypt/decrypt logic."""

    EUID = "001E5E0D32906128"

    def test_encrypt_returns_bytes(self):
        enc = IT600Encryptor(self.EUID)
        assert isinstance(enc.encrypt("hello"), bytes)

    def test_roundtrip_messages(self):
        enc = IT600Encryptor(self.EUID)
        for msg in (
            "",
            "a",
            '{"requestAttr":"readall"}',
            "Température 21.5 °C ✓",
            "x" * 1024,
        ):
            assert enc.decrypt(enc.encrypt(msg)) == msg

    def test_euid_case_insensitive(self):
        enc_lower = IT600Encryptor("001e5e0d32906128")
        enc_upper = IT600Encryptor("001E5E0D32906128")
        msg = "test message"
        assert enc_lower.encrypt(msg) == enc_upper.encrypt(msg)

    def test_different_euids_produce_different_ciphertext(self):
        enc1 = IT600Encryptor("001E5E0D32906128")
        enc2 = IT600Encryptor("AAAAAAAAAAAAAAAA")
        msg = "same payload"
        assert enc1.encrypt(msg) != enc2.encrypt(msg)

    def test_encryption_is_deterministic(self):
        """The IV is a protocol constant, so equal input gives equal output."""
        enc = IT600Encryptor(self.EUID)
        assert enc.encrypt("payload") == enc.encrypt("payload")

    def test_ciphertext_is_block_aligned(self):
        """AES block size is 16 bytes; output must be a multiple of 16."""
        enc = IT600Encryptor(self.EUID)
        for length in (0, 1, 15, 16, 17, 31, 32, 33):
            ct = enc.encrypt("a" * length)
            assert len(ct) % 16 == 0
            assert len(ct) > length

    def test_cross_instance_roundtrip(self):
        """Encrypt with one instance, decrypt with a fresh one (same EUID)."""
        ct = IT600Encryptor(self.EUID).encrypt("cross-instance")
        pt = IT600Encryptor(self.EUID).decrypt(ct)
        assert pt == "cross-instance"

    def test_wrong_euid_cannot_decrypt(self):
        """Decrypting with a different EUID fails or returns garbage."""
        ct = IT600Encryptor(self.EUID).encrypt('{"status": "success"}')
        other = IT600Encryptor("AAAAAAAAAAAAAAAA")
        try:
            result = other.decrypt(ct)
        except ValueError:
            return
        assert result != '{"status": "success"}'

    def test_truncated_ciphertext_raises(self):
        ct = IT600Encryptor(self.EUID).encrypt("hello world")
        with pytest.raises(ValueError):
            IT600Encryptor(self.EUID).decrypt(ct[:-3])

    def test_plain_http_body_raises(self):
        """An HTML page is not valid ciphertext."""
        with pytest.raises(ValueError):
            IT600Encryptor(self.EUID).decrypt(b"<html>hello</html>")
