"""Fernet-based value encryption for cached data at rest.

Cached targets reveal a user's current health readings, so values written
through :class:`~vitalspan.core.storage.kv_store.EncryptedKeyValueStore` are
encrypted before they reach SQLite. Keys stay in plaintext for lookup.
"""

from __future__ import annotations

import logging

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""


class FieldEncryptor:
    """Encrypts and decrypts byte payloads using Fernet symmetric encryption.

    Usage::

        encryptor = FieldEncryptor(key=FieldEncryptor.generate_key())
        token = encryptor.encrypt(b'{"target_value": 8750}')
        encryptor.decrypt(token)  # b'{"target_value": 8750}'
    """

    def __init__(self, key: str) -> None:
        """Initialize with a Fernet key.

        Args:
            key: A valid Fernet key string. Generate with
                 :meth:`generate_key`.

        Raises:
            EncryptionError: If the key is empty or invalid.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt raw bytes to a Fernet token.

        Raises:
            EncryptionError: If ``plaintext`` is not bytes.
        """
        if not isinstance(plaintext, (bytes, bytearray)):
            raise EncryptionError(f"Expected bytes, got {type(plaintext).__name__}")
        return self._fernet.encrypt(bytes(plaintext))

    def decrypt(self, token: bytes) -> bytes:
        """Decrypt a Fernet token back to the original bytes.

        Raises:
            EncryptionError: If the token is invalid or was made with another key.
        """
        try:
            return self._fernet.decrypt(token)
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        except TypeError as exc:
            raise EncryptionError(f"Decryption failed: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new Fernet key.

        Returns:
            A URL-safe base64-encoded 32-byte key as a string.
        """
        return Fernet.generate_key().decode("utf-8")
