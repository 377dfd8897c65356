"""AES-CBC encryptor for Salus iT600 local gateway communication."""

from __future__ import annotations

import hashlib

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .const import ENCRYPTION_IV, KEY_PREFIX

_KEY_MATERIAL_LENGTH = 32
_AES_KEY_LENGTH = 16


def derive_key(euid: str) -> bytes:
    """Derive the AES-128 key for a gateway from its EUID.

    The MD5 digest of ``"Salus-" + euid.lower()`` is zero-extended to 32
    bytes; the gateway only uses the first 16 of them.
    """
    digest = hashlib.md5(f"{KEY_PREFIX}{euid.lower()}".encode()).digest()
    material = digest.ljust(_KEY_MATERIAL_LENGTH, b"\x00")[:_KEY_MATERIAL_LENGTH]
    return material[:_AES_KEY_LENGTH]


class IT600Encryptor:
    """Encrypt/decrypt JSON payloads for the iT600 gateway."""

    def __init__(self, euid: str) -> None:
        self._cipher = Cipher(algorithms.AES(derive_key(euid)), modes.CBC(ENCRYPTION_IV))

    def encrypt(self, plain: str) -> bytes:
        """Encrypt a UTF-8 string with AES-CBC + PKCS7 padding."""
        encryptor = self._cipher.encryptor()
        padder = padding.PKCS7(128).padder()
        padded: bytes = padder.update(plain.encode()) + padder.finalize()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, cipher_bytes: bytes) -> str:
        """Decrypt AES-CBC cipher bytes, strip PKCS7 padding, return UTF-8.

        A payload encrypted under another key fails here with ``ValueError``
        (bad padding or block length) or ``UnicodeDecodeError``.
        """
        decryptor = self._cipher.decryptor()
        padded: bytes = decryptor.update(cipher_bytes) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        plain: bytes = unpadder.update(padded) + unpadder.finalize()
        return plain.decode()
