"""AES encryption of strings in CFB mode, keyed by a text key."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

__all__ = ["AesEncrypt"]

_MIN_KEY_LEN = 16
_BLOCK_SIZE = 16


class AesEncrypt:
    """Encrypts and decrypts strings with AES-CFB.

    The key's UTF-8 bytes are cut to 32, 24 or 16 bytes (the largest that
    fits), and the initialisation vector is the first block of that key.
    """

    def __init__(self, key: str) -> None:
        if len(key.encode("utf-8")) < _MIN_KEY_LEN:
            raise ValueError("The length of res key shall not be less than 16")
        self.key = key

    def _key_bytes(self) -> bytes:
        raw = self.key.encode("utf-8")
        for size in (32, 24, 16):
            if len(raw) >= size:
                return raw[:size]
        raise ValueError("The length of res key shall not be less than 16")

    def _cipher(self) -> Cipher:
        key = self._key_bytes()
        return Cipher(algorithms.AES(key), modes.CFB(key[:_BLOCK_SIZE]))

    def encrypt(self, message: str) -> bytes:
        """Encrypt ``message``; the result has as many bytes as its UTF-8 form."""
        encryptor = self._cipher().encryptor()
        return encryptor.update(message.encode("utf-8")) + encryptor.finalize()

    def decrypt(self, data: bytes) -> str:
        """Decrypt ``data`` back to a string.

        Bytes that are not valid UTF-8 are kept as surrogate escapes.
        """
        decryptor = self._cipher().decryptor()
        plain = decryptor.update(bytes(data)) + decryptor.finalize()
        return plain.decode("utf-8", errors="surrogateescape")