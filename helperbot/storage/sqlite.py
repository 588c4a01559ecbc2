"""SQLite storage backend for tags, aliases and tag history."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from helperbot.models import Tag, TagHistory
from helperbot.storage.base import TagStorageConflictError


class SQLiteTagStorage:
    """SQLite-backed tag persistence; history rows are append-only."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode = WAL")
            conn.execute("PRAGMA synchronous = NORMAL")
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS tags (
                  name TEXT PRIMARY KEY,
                  created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS tag_history (
                  id INTEGER PRIMARY KEY AUTOINCREMENT,
                  tag_name TEXT NOT NULL,
                  content TEXT NOT NULL,
                  aliases_json TEXT NOT NULL,
                  author_id INTEGER NOT NULL,
                  timestamp TEXT NOT NULL,
                  FOREIGN KEY (tag_name) REFERENCES tags(name) ON DELETE CASCADE
                );

                CREATE TABLE IF NOT EXISTS tag_aliases (
                  alias TEXT PRIMARY KEY,
                  tag_name TEXT NOT NULL,
                  FOREIGN KEY (tag_name) REFERENCES tags(name) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_tag_history_name ON tag_history(tag_name, id);
                CREATE INDEX IF NOT EXISTS idx_tag_aliases_name ON tag_aliases(tag_name);
                """
            )

    def resolve_name(self, name_or_alias: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute("SELECT name FROM tags WHERE name = ?", (name_or_alias,)).fetchone()
            if row is not None:
                return str(row["name"])
            row = conn.execute("SELECT tag_name FROM tag_aliases WHERE alias = ?", (name_or_alias,)).fetchone()
        if row is None:
            return None
        return str(row["tag_name"])

    def load_tag(self, name: str) -> Tag | None:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT content, aliases_json, author_id, timestamp
                FROM tag_history
                WHERE tag_name = ?
                ORDER BY id ASC
                """,
                (name,),
            ).fetchall()
        if not rows:
            return None
        history = [
            TagHistory(
                content=row["content"],
                aliases=json.loads(row["aliases_json"]),
                author_id=int(row["author_id"]),
                timestamp=datetime.fromisoformat(row["timestamp"]),
            )
            for row in rows
        ]
        return Tag(name=name, history=history)

    def list_tag_names(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name FROM tags ORDER BY name ASC").fetchall()
        return [str(row["name"]) for row in rows]

    def save_tag_version(self, name: str, entry: TagHistory, *, create: bool = False) -> None:
        """Append ``entry`` to the tag's history and make its aliases current.

        Raises ``TagStorageConflictError`` if the name or an alias is taken.
        """
        try:
            with self._connect() as conn:
                if create:
                    conn.execute(
                        "INSERT INTO tags (name, created_at) VALUES (?, ?)",
                        (name, entry.timestamp.isoformat()),
                    )
                conn.execute(
                    """
                    INSERT INTO tag_history (tag_name, content, aliases_json, author_id, timestamp)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (name, entry.content, json.dumps(entry.aliases), entry.author_id, entry.timestamp.isoformat()),
                )
                conn.execute("DELETE FROM tag_aliases WHERE tag_name = ?", (name,))
                conn.executemany(
                    "INSERT INTO tag_aliases (alias, tag_name) VALUES (?, ?)",
                    [(alias, name) for alias in entry.aliases],
                )
        except sqlite3.IntegrityError as exc:
            raise TagStorageConflictError(f"tag {name!r} or one of its aliases already exists") from exc

    def delete_tag(self, name: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM tags WHERE name = ?", (name,))
        return cursor.rowcount > 0
