"""Key-value stores backing the daily target cache.

The cache only needs get/set/delete on opaque bytes with last-write-wins
semantics. Every implementation reports failures as :class:`StorageError`
so callers have a single exception to treat as a cache miss.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Protocol, runtime_checkable

from vitalspan.core.storage.database import CacheDatabase, DatabaseError
from vitalspan.core.storage.encryption import EncryptionError, FieldEncryptor

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a key-value store cannot complete an operation."""


class UnreadableValueError(StorageError):
    """A stored value exists but cannot be decrypted, e.g. after a key rotation.

    The store itself is healthy; overwriting the key recovers it.
    """


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persistent store interface."""

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is not an error."""
        ...


class InMemoryKeyValueStore:
    """Dict-backed store. Used in tests and when persistence is disabled."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)


class SQLiteKeyValueStore:
    """Store persisted in the ``kv_store`` table of a :class:`CacheDatabase`."""

    def __init__(self, db: CacheDatabase) -> None:
        self._db = db

    def get(self, key: str) -> bytes | None:
        try:
            row = self._db.connection.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except (sqlite3.Error, DatabaseError) as exc:
            raise StorageError(f"Failed to read {key!r}: {exc}") from exc
        return bytes(row["value"]) if row is not None else None

    def set(self, key: str, value: bytes) -> None:
        try:
            conn = self._db.connection
            conn.execute(
                "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now')) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = excluded.updated_at",
                (key, sqlite3.Binary(value)),
            )
            conn.commit()
        except (sqlite3.Error, DatabaseError) as exc:
            raise StorageError(f"Failed to write {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            conn = self._db.connection
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except (sqlite3.Error, DatabaseError) as exc:
            raise StorageError(f"Failed to delete {key!r}: {exc}") from exc

    def count(self) -> int:
        try:
            row = self._db.connection.execute("SELECT COUNT(*) FROM kv_store").fetchone()
        except (sqlite3.Error, DatabaseError) as exc:
            raise StorageError(f"Failed to count entries: {exc}") from exc
        return int(row[0])


class EncryptedKeyValueStore:
    """Wraps another store, encrypting values with Fernet.

    Usage::

        store = EncryptedKeyValueStore(SQLiteKeyValueStore(db), FieldEncryptor(key))
        store.set("daily_target:steps:day", b"{...}")
    """

    def __init__(self, inner: KeyValueStore, encryptor: FieldEncryptor) -> None:
        self._inner = inner
        self._encryptor = encryptor

    def get(self, key: str) -> bytes | None:
        token = self._inner.get(key)
        if token is None:
            return None
        try:
            return self._encryptor.decrypt(token)
        except EncryptionError as exc:
            raise UnreadableValueError(f"Failed to decrypt {key!r}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        try:
            token = self._encryptor.encrypt(value)
        except EncryptionError as exc:
            raise StorageError(f"Failed to encrypt {key!r}: {exc}") from exc
        self._inner.set(key, token)

    def delete(self, key: str) -> None:
        self._inner.delete(key)
