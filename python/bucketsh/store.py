"""Hierarchical bucket store kept in a single SQLite file.

The shell only needs a small capability surface from its store: read-only and
read-write transactions, ordered iteration over buckets and their key/value
pairs, nested bucket lookup and per-bucket statistics.  This module provides
that surface on top of :mod:`sqlite3`.  Names, keys and values are raw bytes and
iterate in byte order.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple

LOGGER = logging.getLogger("bucketsh.store")

_BATCH = 256

SCHEMA = """
CREATE TABLE IF NOT EXISTS buckets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    parent INTEGER REFERENCES buckets(id) ON DELETE CASCADE,
    name BLOB NOT NULL
);
CREATE UNIQUE INDEX IF NOT EXISTS buckets_parent_name ON buckets (IFNULL(parent, 0), name);
CREATE TABLE IF NOT EXISTS entries (
    bucket INTEGER NOT NULL REFERENCES buckets(id) ON DELETE CASCADE,
    key BLOB NOT NULL,
    value BLOB NOT NULL,
    PRIMARY KEY (bucket, key)
) WITHOUT ROWID;
"""
SCHEMA_TABLES = frozenset({"buckets", "entries"})


class StoreError(Exception):
    """Raised for store and transaction failures."""


class BucketNotFoundError(StoreError):
    def __init__(self, name: bytes) -> None:
        super().__init__("bucket not found")
        self.name = name


class TxNotWritableError(StoreError):
    def __init__(self) -> None:
        super().__init__("tx not writable")


@dataclass(frozen=True)
class BucketStats:
    key_n: int
    bucket_n: int
    depth: int


class _Node:
    """Bucket container shared by transactions (root) and buckets (nested)."""

    def __init__(self, tx: "Transaction", bucket_id: Optional[int]) -> None:
        self._tx = tx
        self._id = bucket_id

    def _parent_clause(self) -> Tuple[str, tuple]:
        if self._id is None:
            return "parent IS NULL", ()
        return "parent = ?", (self._id,)

    def bucket(self, name: bytes) -> Optional["Bucket"]:
        clause, params = self._parent_clause()
        row = self._tx._query(
            f"SELECT id FROM buckets WHERE {clause} AND name = ?", params + (bytes(name),)
        ).fetchone()
        if row is None:
            return None
        return Bucket(self._tx, row[0], bytes(name))

    def buckets(self) -> Iterator[Tuple[bytes, "Bucket"]]:
        clause, params = self._parent_clause()
        last: Optional[bytes] = None
        while True:
            if last is None:
                rows = self._tx._query(
                    f"SELECT id, name FROM buckets WHERE {clause} ORDER BY name LIMIT ?",
                    params + (_BATCH,),
                ).fetchall()
            else:
                rows = self._tx._query(
                    f"SELECT id, name FROM buckets WHERE {clause} AND name > ? ORDER BY name LIMIT ?",
                    params + (last, _BATCH),
                ).fetchall()
            for bucket_id, name in rows:
                yield bytes(name), Bucket(self._tx, bucket_id, bytes(name))
            if len(rows) < _BATCH:
                return
            last = bytes(rows[-1][1])

    def create_bucket_if_not_exists(self, name: bytes) -> "Bucket":
        self._tx._require_writable()
        if not name:
            raise StoreError("bucket name required")
        existing = self.bucket(name)
        if existing is not None:
            return existing
        cursor = self._tx._query(
            "INSERT INTO buckets (parent, name) VALUES (?, ?)", (self._id, bytes(name))
        )
        LOGGER.debug("created bucket %r (parent=%s)", name, self._id)
        return Bucket(self._tx, cursor.lastrowid, bytes(name))

    def delete_bucket(self, name: bytes) -> None:
        self._tx._require_writable()
        target = self.bucket(name)
        if target is None:
            raise BucketNotFoundError(bytes(name))
        # nested buckets and entries go with it (ON DELETE CASCADE)
        self._tx._query("DELETE FROM buckets WHERE id = ?", (target._id,))
        LOGGER.debug("deleted bucket %r", name)


class Bucket(_Node):
    """A named bucket holding key/value entries and nested buckets."""

    def __init__(self, tx: "Transaction", bucket_id: int, name: bytes) -> None:
        super().__init__(tx, bucket_id)
        self.name = name

    def __repr__(self) -> str:
        return f"Bucket({self.name!r})"

    def get(self, key: bytes) -> Optional[bytes]:
        row = self._tx._query(
            "SELECT value FROM entries WHERE bucket = ? AND key = ?", (self._id, bytes(key))
        ).fetchone()
        return bytes(row[0]) if row is not None else None

    def put(self, key: bytes, value: bytes) -> None:
        self._tx._require_writable()
        if not key:
            raise StoreError("key required")
        self._tx._query(
            "INSERT OR REPLACE INTO entries (bucket, key, value) VALUES (?, ?, ?)",
            (self._id, bytes(key), bytes(value)),
        )

    def delete(self, key: bytes) -> None:
        self._tx._require_writable()
        self._tx._query("DELETE FROM entries WHERE bucket = ? AND key = ?", (self._id, bytes(key)))

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        last: Optional[bytes] = None
        while True:
            if last is None:
                rows = self._tx._query(
                    "SELECT key, value FROM entries WHERE bucket = ? ORDER BY key LIMIT ?",
                    (self._id, _BATCH),
                ).fetchall()
            else:
                rows = self._tx._query(
                    "SELECT key, value FROM entries WHERE bucket = ? AND key > ? ORDER BY key LIMIT ?",
                    (self._id, last, _BATCH),
                ).fetchall()
            for key, value in rows:
                yield bytes(key), bytes(value)
            if len(rows) < _BATCH:
                return
            last = bytes(rows[-1][0])

    def stats(self) -> BucketStats:
        tree = (
            "WITH RECURSIVE tree(id, level) AS ("
            " SELECT id, 1 FROM buckets WHERE id = ?"
            " UNION ALL"
            " SELECT b.id, t.level + 1 FROM buckets b JOIN tree t ON b.parent = t.id)"
        )
        count, depth = self._tx._query(f"{tree} SELECT COUNT(*), MAX(level) FROM tree", (self._id,)).fetchone()
        (key_n,) = self._tx._query(
            f"{tree} SELECT COUNT(*) FROM entries WHERE bucket IN (SELECT id FROM tree)", (self._id,)
        ).fetchone()
        return BucketStats(key_n=int(key_n), bucket_n=int(count) - 1, depth=int(depth or 1))


class Transaction(_Node):
    """Read-only or read-write scope over the top-level buckets."""

    def __init__(self, conn: sqlite3.Connection, *, writable: bool) -> None:
        super().__init__(self, None)
        self._conn = conn
        self.writable = writable
        self.closed = False

    def _require_writable(self) -> None:
        if not self.writable:
            raise TxNotWritableError()

    def _query(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if self.closed:
            raise StoreError("tx closed")
        return self._conn.execute(sql, params)


class BucketStore:
    """Owns the SQLite connection backing one database file."""

    def __init__(self, path: Path, conn: sqlite3.Connection) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = conn

    @classmethod
    def open(cls, path: str | Path, *, create: bool = False, timeout: float = 1.0) -> "BucketStore":
        target = Path(path)
        if not create and not target.exists():
            raise StoreError(f"{target}: no such file or directory")
        if target.is_dir():
            raise StoreError(f"{target}: is a directory")
        try:
            conn = sqlite3.connect(str(target), timeout=timeout, isolation_level=None)
        except sqlite3.Error as exc:
            raise StoreError(f"{target}: {exc}") from exc
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
            if not SCHEMA_TABLES <= tables:
                if not create:
                    raise StoreError(f"{target}: not a bucket database")
                conn.executescript(SCHEMA)
                LOGGER.info("created bucket schema in %s", target)
        except sqlite3.Error as exc:
            conn.close()
            raise StoreError(f"{target}: {exc}") from exc
        except StoreError:
            conn.close()
            raise
        LOGGER.debug("opened %s", target)
        return cls(target, conn)

    def __enter__(self) -> "BucketStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        conn = self._conn
        if conn is None:
            return
        self._conn = None
        conn.close()
        LOGGER.debug("closed %s", self.path)

    def _require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("database not open")
        return self._conn

    @contextlib.contextmanager
    def view(self) -> Iterator[Transaction]:
        with self._transaction(writable=False) as tx:
            yield tx

    @contextlib.contextmanager
    def update(self) -> Iterator[Transaction]:
        with self._transaction(writable=True) as tx:
            yield tx

    @contextlib.contextmanager
    def _transaction(self, *, writable: bool) -> Iterator[Transaction]:
        conn = self._require_open()
        try:
            conn.execute("BEGIN IMMEDIATE" if writable else "BEGIN")
        except sqlite3.Error as exc:
            raise StoreError(f"begin transaction: {exc}") from exc
        tx = Transaction(conn, writable=writable)
        try:
            yield tx
        except sqlite3.Error as exc:
            tx.closed = True
            _rollback(conn)
            raise StoreError(str(exc)) from exc
        except BaseException:
            tx.closed = True
            _rollback(conn)
            raise
        tx.closed = True
        try:
            # a read-only scope never has anything to commit
            conn.execute("COMMIT" if writable else "ROLLBACK")
        except sqlite3.Error as exc:
            _rollback(conn)
            raise StoreError(f"commit transaction: {exc}") from exc


def _rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        conn.execute("ROLLBACK")


__all__ = [
    "Bucket",
    "BucketNotFoundError",
    "BucketStats",
    "BucketStore",
    "StoreError",
    "Transaction",
    "TxNotWritableError",
]
