"""
Local Store
===========

SQLite database holding application configuration and saved connection
profiles.

Secret profile fields (``password``, ``ssh_password``) are stored exactly
as given; callers encrypt them first (see benchvault.core.connections).
"""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import closing, contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Final, Iterator, List


class ProfileNotFoundError(LookupError):
    """Raised when a connection profile id does not exist."""
    pass


@dataclass
class ConnectionProfile:
    """
    A saved database connection.

    Note: password and ssh_password are never exposed in repr.
    """
    name: str
    host: str
    username: str
    port: int = 3306
    password: str = ""
    default_db: str = ""
    use_ssl: bool = False
    ssh_enabled: bool = False
    ssh_host: str = ""
    ssh_port: int = 22
    ssh_user: str = ""
    ssh_auth: str = "key"  # "key" or "password"
    ssh_key_path: str = ""
    ssh_password: str = ""
    sort_order: int = 0
    id: str = ""
    created_at: str = ""
    updated_at: str = ""

    def __repr__(self) -> str:
        """Safe representation without secrets."""
        return (
            f"ConnectionProfile(id={self.id!r}, name={self.name!r}, "
            f"host={self.host!r}, port={self.port}, username={self.username!r})"
        )


_PROFILE_COLUMNS: Final[tuple[str, ...]] = (
    "id", "name", "host", "port", "username", "password", "default_db", "use_ssl",
    "ssh_enabled", "ssh_host", "ssh_port", "ssh_user", "ssh_auth", "ssh_key_path",
    "ssh_password", "sort_order", "created_at", "updated_at",
)

_BOOL_COLUMNS: Final[frozenset[str]] = frozenset({"use_ssl", "ssh_enabled"})


class LocalStore:
    """
    SQLite-backed configuration and connection profile store.

    Each operation opens its own connection, so one store can be shared
    between the UI thread and the key-derivation worker.

    Usage:
        store = LocalStore(db_path)
        store.set_config("master_salt", salt_b64)
        profile_id = store.save_connection(profile)
    """

    __slots__ = ("_db_path",)

    _SCHEMA: Final[str] = """
    CREATE TABLE IF NOT EXISTS app_config (
        key   TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS connections (
        id            TEXT PRIMARY KEY,
        name          TEXT NOT NULL,
        host          TEXT NOT NULL,
        port          INTEGER NOT NULL DEFAULT 3306,
        username      TEXT NOT NULL,
        password      TEXT NOT NULL DEFAULT '',
        default_db    TEXT NOT NULL DEFAULT '',
        use_ssl       INTEGER NOT NULL DEFAULT 0,
        ssh_enabled   INTEGER NOT NULL DEFAULT 0,
        ssh_host      TEXT NOT NULL DEFAULT '',
        ssh_port      INTEGER NOT NULL DEFAULT 22,
        ssh_user      TEXT NOT NULL DEFAULT '',
        ssh_auth      TEXT NOT NULL DEFAULT 'key',
        ssh_key_path  TEXT NOT NULL DEFAULT '',
        ssh_password  TEXT NOT NULL DEFAULT '',
        sort_order    INTEGER NOT NULL DEFAULT 0,
        created_at    TEXT NOT NULL,
        updated_at    TEXT NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_connections_order ON connections(sort_order, name);
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Open or create the store.

        Args:
            db_path: Path to the SQLite database file
        """
        self._db_path = Path(db_path)
        self.initialize_db()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success, always close."""
        with closing(sqlite3.connect(self._db_path)) as conn:
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn

    def initialize_db(self) -> None:
        """Create the database file and schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connection() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(self._SCHEMA)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_config(self, key: str) -> str:
        """Return a config value, or "" if the key is not set."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT value FROM app_config WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else ""

    def set_config(self, key: str, value: str) -> None:
        """Insert or replace a config value."""
        with self._connection() as conn:
            conn.execute("""
                INSERT INTO app_config (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """, (key, value))

    # ------------------------------------------------------------------
    # Connection profiles
    # ------------------------------------------------------------------

    def list_connections(self) -> List[ConnectionProfile]:
        """Return all profiles ordered by sort_order, then name."""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT {', '.join(_PROFILE_COLUMNS)} FROM connections "
                "ORDER BY sort_order, name"
            ).fetchall()
        return [self._row_to_profile(row) for row in rows]

    def get_connection(self, profile_id: str) -> ConnectionProfile:
        """
        Raises:
            ProfileNotFoundError: If no profile has this id
        """
        with self._connection() as conn:
            row = conn.execute(
                f"SELECT {', '.join(_PROFILE_COLUMNS)} FROM connections WHERE id = ?",
                (profile_id,),
            ).fetchone()

        if row is None:
            raise ProfileNotFoundError(f"connection profile not found: {profile_id}")
        return self._row_to_profile(row)

    def save_connection(self, profile: ConnectionProfile) -> str:
        """
        Create or update a profile.

        A profile without an id gets a new UUID and creation time. The
        profile object is updated in place.

        Returns:
            The profile id
        """
        now = datetime.now(timezone.utc).isoformat()
        if not profile.id:
            profile.id = str(uuid.uuid4())
            profile.created_at = now
        elif not profile.created_at:
            profile.created_at = now
        profile.updated_at = now

        values = [getattr(profile, column) for column in _PROFILE_COLUMNS]
        values = [int(v) if isinstance(v, bool) else v for v in values]
        updates = ", ".join(
            f"{column}=excluded.{column}"
            for column in _PROFILE_COLUMNS
            if column not in ("id", "created_at")
        )

        with self._connection() as conn:
            conn.execute(
                f"INSERT INTO connections ({', '.join(_PROFILE_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in _PROFILE_COLUMNS)}) "
                f"ON CONFLICT(id) DO UPDATE SET {updates}",
                values,
            )

        return profile.id

    def delete_connection(self, profile_id: str) -> None:
        """Remove a profile. Unknown ids are ignored."""
        with self._connection() as conn:
            conn.execute("DELETE FROM connections WHERE id = ?", (profile_id,))

    @staticmethod
    def _row_to_profile(row: sqlite3.Row) -> ConnectionProfile:
        data = {column: row[column] for column in _PROFILE_COLUMNS}
        for column in _BOOL_COLUMNS:
            data[column] = bool(data[column])
        return ConnectionProfile(**data)

    def __repr__(self) -> str:
        return f"LocalStore(db_path={str(self._db_path)!r})"
