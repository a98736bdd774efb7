"""SQLite-backed catalogue storing source messages and their translations."""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing
from pathlib import Path
from threading import Lock
from typing import Iterator

from polymsg.localization.locale import Locale, LocaleLike

from .base import MessageCatalogue, MessageTable


class SQLiteMessageCatalogue(MessageCatalogue):
    """Read translations from a ``source_message``/``message`` table pair.

    A locale without any translated row for a category counts as a missing
    storage unit, mirroring how file catalogues treat an absent file. Reads
    open the database read-only; a missing file or schema is a load miss.
    The schema is created on the first :meth:`add_translation`.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        source_language: LocaleLike | None = None,
        force_translation: bool = False,
    ) -> None:
        super().__init__(
            source_language=source_language,
            force_translation=force_translation,
        )
        self.path = Path(path)
        self._write_lock = Lock()
        self._initialised = False

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self.path, check_same_thread=False)
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA foreign_keys=ON")
        return connection

    def _connect_readonly(self) -> sqlite3.Connection | None:
        if not self.path.is_file():
            return None
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        connection = sqlite3.connect(uri, uri=True, check_same_thread=False)
        found = connection.execute(
            "SELECT COUNT(*) FROM sqlite_master"
            " WHERE type = 'table' AND name IN ('source_message', 'message')"
        ).fetchone()[0]
        if found < 2:
            connection.close()
            return None
        return connection

    def _initialise(self, connection: sqlite3.Connection) -> None:
        connection.execute(
            """
            CREATE TABLE IF NOT EXISTS source_message (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                category TEXT NOT NULL,
                message TEXT NOT NULL,
                UNIQUE (category, message)
            )
            """
        )
        connection.execute(
            """
            CREATE TABLE IF NOT EXISTS message (
                id INTEGER NOT NULL REFERENCES source_message (id) ON DELETE CASCADE,
                language TEXT NOT NULL,
                translation TEXT,
                PRIMARY KEY (id, language)
            )
            """
        )
        self._initialised = True

    def add_translation(
        self,
        category: str,
        message: str,
        locale: LocaleLike,
        translation: str,
    ) -> None:
        """Insert or replace the translation of ``message`` for ``locale``."""

        language = str(Locale.parse(locale))
        with self._write_lock:
            with closing(self._connect()) as connection, connection:
                if not self._initialised:
                    self._initialise(connection)
                connection.execute(
                    "INSERT OR IGNORE INTO source_message (category, message) VALUES (?, ?)",
                    (category, message),
                )
                source_id = connection.execute(
                    "SELECT id FROM source_message WHERE category = ? AND message = ?",
                    (category, message),
                ).fetchone()[0]
                connection.execute(
                    "INSERT OR REPLACE INTO message (id, language, translation)"
                    " VALUES (?, ?, ?)",
                    (source_id, language, translation),
                )

    def load_messages(self, category: str, locale: Locale) -> MessageTable | None:
        connection = self._connect_readonly()
        if connection is None:
            return None
        with closing(connection):
            rows = connection.execute(
                "SELECT s.message, m.translation FROM source_message AS s"
                " JOIN message AS m ON m.id = s.id"
                " WHERE s.category = ? AND m.language = ?",
                (category, str(locale)),
            ).fetchall()

        if not rows:
            return None
        return {message: translation or "" for message, translation in rows}

    def storage_units(self) -> Iterator[tuple[str, Locale]]:
        connection = self._connect_readonly()
        if connection is None:
            return
        with closing(connection):
            rows = connection.execute(
                "SELECT DISTINCT s.category, m.language FROM source_message AS s"
                " JOIN message AS m ON m.id = s.id ORDER BY s.category, m.language"
            ).fetchall()
        for category, language in rows:
            yield category, Locale.parse(language)


__all__ = ["SQLiteMessageCatalogue"]
