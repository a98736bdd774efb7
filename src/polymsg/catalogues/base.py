"""Base class for message catalogues with lazy, per-locale table caching."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import Lock
from types import MappingProxyType
from typing import Iterator, Mapping

from polymsg.localization.locale import Locale, LocaleLike

_LOGGER = logging.getLogger(__name__)

MessageTable = Mapping[str, str]


class MessageCatalogue(ABC):
    """Source of translated messages for ``(category, locale)`` pairs.

    Subclasses implement :meth:`load_messages`, which reads one complete table
    in a single pass. Tables are cached per instance for its whole lifetime.
    Concurrent first access may load the same table twice; only the first
    complete table is kept and readers never observe a partial one.
    """

    def __init__(
        self,
        *,
        source_language: LocaleLike | None = None,
        force_translation: bool = False,
    ) -> None:
        self._source_language = (
            Locale.parse(source_language) if source_language is not None else None
        )
        self.force_translation = force_translation
        self._tables: dict[tuple[str, Locale], MessageTable | None] = {}
        self._lock = Lock()

    @property
    def source_language(self) -> Locale | None:
        return self._source_language

    def effective_source(self, default: LocaleLike | None = None) -> Locale | None:
        """Return ``source_language``, or ``default`` when none is configured."""

        if self._source_language is not None:
            return self._source_language
        return Locale.parse(default) if default is not None else None

    @abstractmethod
    def load_messages(self, category: str, locale: Locale) -> MessageTable | None:
        """Return the full table for ``category`` in ``locale``.

        ``None`` signals that no storage unit exists for the pair, which is an
        ordinary miss rather than an error.
        """

    def storage_units(self) -> Iterator[tuple[str, Locale]]:
        """Yield every ``(category, locale)`` pair the backend currently stores.

        Used by tooling; lookups never depend on it.
        """

        return iter(())

    def get_message(
        self,
        category: str,
        message: str,
        locale: LocaleLike,
        default_source: LocaleLike | None = None,
    ) -> str | None:
        """Return the translation of ``message`` or ``None`` when unavailable.

        ``default_source`` is the caller's source locale. It only applies when
        the catalogue has no ``source_language`` of its own.
        """

        target = Locale.parse(locale)
        source = self.effective_source(default_source)
        if source is not None and target == source and not self.force_translation:
            return None

        translation = _lookup(self._table(category, target, source), message)
        if translation is not None:
            return translation

        if (
            source is not None
            and source != target
            and source.language == target.language
            and source.specificity >= target.specificity
        ):
            return _lookup(self._table(category, source, source), message)

        return None

    def clear_cache(self) -> None:
        with self._lock:
            self._tables.clear()

    def _table(
        self,
        category: str,
        locale: Locale,
        source: Locale | None,
    ) -> MessageTable | None:
        key = (category, locale)
        with self._lock:
            if key in self._tables:
                return self._tables[key]

        loaded = self.load_messages(category, locale)
        if loaded is None:
            self._report_missing(category, locale, source)
            table = None
        else:
            table = MappingProxyType(dict(loaded))
            _LOGGER.debug(
                "Loaded %d message(s) for category '%s' in locale '%s'",
                len(table),
                category,
                locale,
            )

        with self._lock:
            return self._tables.setdefault(key, table)

    def _report_missing(self, category: str, locale: Locale, source: Locale | None) -> None:
        if source is not None and source.language == locale.language:
            return
        _LOGGER.warning(
            "No messages stored for category '%s' in locale '%s' (%s)",
            category,
            locale,
            type(self).__name__,
        )


def _lookup(table: MessageTable | None, message: str) -> str | None:
    if table is None:
        return None
    translation = table.get(message)
    # Empty strings mark messages that have not been translated yet.
    if not translation:
        return None
    return translation


__all__ = ["MessageCatalogue", "MessageTable"]
