"""Unit tests for catalogue loading, caching and in-catalogue fallback."""

from __future__ import annotations

import json
import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from pathlib import Path
from threading import Lock
from time import sleep

import pytest

from polymsg.catalogues import (
    InMemoryMessageCatalogue,
    JsonMessageCatalogue,
    MessageTable,
    SQLiteMessageCatalogue,
    YamlMessageCatalogue,
)
from polymsg.config.schema import ConfigurationError
from polymsg.localization.locale import Locale


class CountingCatalogue(InMemoryMessageCatalogue):
    """In-memory catalogue recording how often each table is loaded."""

    def __init__(self, *args, delay: float = 0.0, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.loads: list[tuple[str, str]] = []
        self._delay = delay
        self._loads_lock = Lock()

    def load_messages(self, category: str, locale: Locale) -> MessageTable | None:
        with self._loads_lock:
            self.loads.append((category, str(locale)))
        if self._delay:
            sleep(self._delay)
        return super().load_messages(category, locale)


def test_json_catalogue_reads_locale_directories(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(messages_dir)

    assert catalogue.get_message("test", "The dog runs fast.", "de-DE") == "Der Hund rennt schnell."
    assert catalogue.get_message("test", "The dog runs fast.", "ru") == "Собака бегает быстро."
    assert catalogue.get_message("test", "The dog runs fast.", "fr") is None
    assert catalogue.get_message("other", "The dog runs fast.", "de-DE") is None


def test_keys_are_exact_and_case_sensitive(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(messages_dir)

    assert catalogue.get_message("test", "the dog runs fast.", "de-DE") is None
    assert catalogue.get_message("test", "The dog runs fast. ", "de-DE") is None


def test_empty_translations_count_as_missing(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(messages_dir)

    assert catalogue.get_message("test", "Hello world!", "de-DE") is None
    assert catalogue.get_message("test", "Hello world!", "de") == "Hallo Welt!"


def test_file_map_redirects_categories(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(messages_dir, file_map={"foo": "test.json"})

    assert catalogue.get_message("foo", "Hello world!", "de") == "Hallo Welt!"
    assert catalogue.file_name("bar") == "bar.json"


def test_source_language_table_is_consulted_for_less_specific_locale(
    messages_dir: Path,
) -> None:
    catalogue = JsonMessageCatalogue(messages_dir, source_language="de-DE")

    assert catalogue.get_message("test", "The dog runs fast.", "de") == "Der Hund rennt schnell."
    assert catalogue.get_message("test", "Hello world!", "de") == "Hallo Welt!"
    # The source language itself is never translated unless forced.
    assert catalogue.get_message("test", "The dog runs fast.", "de-DE") is None


def test_force_translation_reads_source_language_table(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(
        messages_dir,
        source_language="de-DE",
        force_translation=True,
    )

    assert catalogue.get_message("test", "The dog runs fast.", "de-DE") == "Der Hund rennt schnell."


def test_tables_are_loaded_once_per_pair() -> None:
    catalogue = CountingCatalogue({"de": {"app": {"Yes": "Ja"}}})

    for _ in range(3):
        assert catalogue.get_message("app", "Yes", "de") == "Ja"
        assert catalogue.get_message("app", "No", "de") is None
        assert catalogue.get_message("app", "Yes", "fr") is None

    assert catalogue.loads == [("app", "de"), ("app", "fr")]

    catalogue.clear_cache()
    catalogue.get_message("app", "Yes", "de")
    assert catalogue.loads[-1] == ("app", "de")


def test_concurrent_first_access_sees_complete_table() -> None:
    table = {f"message {index}": f"Nachricht {index}" for index in range(200)}
    catalogue = CountingCatalogue({"de": {"app": table}}, delay=0.01)

    def worker(index: int) -> str | None:
        return catalogue.get_message("app", f"message {index % 200}", "de")

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(worker, range(64)))

    assert results == [f"Nachricht {index % 200}" for index in range(64)]
    assert 1 <= len(catalogue.loads) <= 8


def test_yaml_catalogue(tmp_path: Path) -> None:
    directory = tmp_path / "fr"
    directory.mkdir()
    (directory / "app.yaml").write_text(
        "Yes: Oui\nNo: Non\nOn: 'off'\nnull: nul\nCancel: No\n1.0: un\nMaybe: ~\nLater:\n"
        "'{n} files': '{n} fichiers'\n",
        encoding="utf-8",
    )
    catalogue = YamlMessageCatalogue(tmp_path)

    assert catalogue.get_message("app", "Yes", "fr") == "Oui"
    assert catalogue.get_message("app", "No", "fr") == "Non"
    assert catalogue.get_message("app", "On", "fr") == "off"
    assert catalogue.get_message("app", "null", "fr") == "nul"
    assert catalogue.get_message("app", "Cancel", "fr") == "No"
    assert catalogue.get_message("app", "1.0", "fr") == "un"
    assert catalogue.get_message("app", "Maybe", "fr") is None
    assert catalogue.get_message("app", "Later", "fr") is None
    assert catalogue.get_message("app", "{n} files", "fr") == "{n} fichiers"
    assert list(catalogue.storage_units()) == [("app", Locale("fr"))]


def test_underscore_directories_are_supported(tmp_path: Path) -> None:
    directory = tmp_path / "pt_BR"
    directory.mkdir()
    (directory / "app.json").write_text(json.dumps({"Yes": "Sim"}), encoding="utf-8")

    catalogue = JsonMessageCatalogue(tmp_path)

    assert catalogue.get_message("app", "Yes", "pt-BR") == "Sim"


def test_non_mapping_files_are_rejected(tmp_path: Path) -> None:
    directory = tmp_path / "fr"
    directory.mkdir()
    (directory / "app.json").write_text(json.dumps(["Oui"]), encoding="utf-8")
    (directory / "broken.json").write_text("{not json", encoding="utf-8")

    catalogue = JsonMessageCatalogue(tmp_path)

    with pytest.raises(ConfigurationError):
        catalogue.get_message("app", "Yes", "fr")
    with pytest.raises(ConfigurationError):
        catalogue.get_message("broken", "Yes", "fr")


def test_storage_units_follow_file_map(messages_dir: Path) -> None:
    catalogue = JsonMessageCatalogue(messages_dir, file_map={"foo": "test.json"})

    units = {(category, str(locale)) for category, locale in catalogue.storage_units()}

    assert units == {("foo", "de"), ("foo", "de-DE"), ("foo", "ru")}


def test_sqlite_catalogue_round_trip(tmp_path: Path) -> None:
    catalogue = SQLiteMessageCatalogue(tmp_path / "messages.db")
    catalogue.add_translation("app", "Yes", "de-DE", "Ja")
    catalogue.add_translation("app", "No", "de-DE", "")
    catalogue.add_translation("app", "Yes", "fr", "Oui")

    assert catalogue.get_message("app", "Yes", "de-DE") == "Ja"
    assert catalogue.get_message("app", "No", "de-DE") is None
    assert catalogue.get_message("app", "Yes", "ru") is None
    assert sorted((category, str(locale)) for category, locale in catalogue.storage_units()) == [
        ("app", "de-DE"),
        ("app", "fr"),
    ]

    # A fresh instance reads the persisted rows.
    fresh = SQLiteMessageCatalogue(tmp_path / "messages.db")
    assert fresh.get_message("app", "Yes", "fr") == "Oui"


def test_sqlite_reads_never_create_the_database(tmp_path: Path) -> None:
    path = tmp_path / "missing.db"
    catalogue = SQLiteMessageCatalogue(path)

    assert catalogue.get_message("app", "Yes", "de") is None
    assert list(catalogue.storage_units()) == []
    assert not path.exists()

    catalogue.add_translation("app", "Yes", "de", "Ja")
    catalogue.clear_cache()

    assert path.exists()
    assert catalogue.get_message("app", "Yes", "de") == "Ja"


def test_sqlite_database_without_schema_is_a_miss(tmp_path: Path) -> None:
    path = tmp_path / "foreign.db"
    with closing(sqlite3.connect(path)) as connection, connection:
        connection.execute("CREATE TABLE unrelated (id INTEGER)")

    catalogue = SQLiteMessageCatalogue(path)

    assert catalogue.get_message("app", "Yes", "de") is None
    assert list(catalogue.storage_units()) == []


def test_missing_tables_in_source_language_family_are_not_reported(
    messages_dir: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    catalogue = JsonMessageCatalogue(messages_dir, source_language="en-US")

    with caplog.at_level(logging.WARNING, logger="polymsg.catalogues.base"):
        for locale in ("en-GB", "en", "en-CA"):
            assert catalogue.get_message("test", "Hello world!", locale) is None

    assert caplog.records == []


def test_missing_tables_in_other_languages_are_reported_once(
    messages_dir: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    catalogue = JsonMessageCatalogue(messages_dir, source_language="en-US")

    with caplog.at_level(logging.WARNING, logger="polymsg.catalogues.base"):
        assert catalogue.get_message("test", "Hello world!", "hz-HZ") is None
        assert [record.levelno for record in caplog.records] == [logging.WARNING]
        assert "hz-HZ" in caplog.records[0].getMessage()

        caplog.clear()
        assert catalogue.get_message("test", "Hello world!", "hz") is None
        assert catalogue.get_message("test", "Hello world!", "hz") is None
        assert len(caplog.records) == 1


def test_caller_source_locale_silences_its_own_family(
    messages_dir: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    catalogue = JsonMessageCatalogue(messages_dir)

    with caplog.at_level(logging.WARNING, logger="polymsg.catalogues.base"):
        assert catalogue.get_message("test", "Hello world!", "fr-CA", default_source="fr") is None

    assert caplog.records == []
    assert catalogue.source_language is None
