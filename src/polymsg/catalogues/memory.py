"""Catalogue backed by an in-process mapping."""

from __future__ import annotations

from typing import Iterator, Mapping

from polymsg.localization.locale import Locale, LocaleLike

from .base import MessageCatalogue, MessageTable


class InMemoryMessageCatalogue(MessageCatalogue):
    """Serve messages from ``{locale: {category: {source: translation}}}``."""

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, Mapping[str, str]]] | None = None,
        *,
        source_language: LocaleLike | None = None,
        force_translation: bool = False,
    ) -> None:
        super().__init__(
            source_language=source_language,
            force_translation=force_translation,
        )
        self._messages: dict[Locale, dict[str, dict[str, str]]] = {}
        for locale, categories in (messages or {}).items():
            bucket = self._messages.setdefault(Locale.parse(locale), {})
            for category, table in categories.items():
                bucket[category] = {str(key): str(value) for key, value in table.items()}

    def load_messages(self, category: str, locale: Locale) -> MessageTable | None:
        return self._messages.get(locale, {}).get(category)

    def storage_units(self) -> Iterator[tuple[str, Locale]]:
        for locale, categories in self._messages.items():
            for category in categories:
                yield category, locale


__all__ = ["InMemoryMessageCatalogue"]
