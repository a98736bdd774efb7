"""Translate and format messages through the configured catalogues."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from polymsg.catalogues.base import MessageCatalogue
from polymsg.catalogues.registry import CatalogueRegistry
from polymsg.formatting.formatter import MessageFormatter

from .events import MissingTranslationEvent, TranslationObservers
from .locale import Locale, LocaleLike, resolve_candidates

_LOGGER = logging.getLogger(__name__)

DEFAULT_SOURCE_LOCALE = "en-US"


def normalise_params(params: Any) -> Mapping[str, Any]:
    """Return a keyed view of the permissive ``params`` argument.

    ``None`` and empty sequences mean no parameters, mappings are used as is
    (keys stringified), non-empty lists and tuples become positional
    arguments ``{0}``, ``{1}``... and any other value is argument ``{0}``.
    """

    if params is None:
        return {}
    if isinstance(params, Mapping):
        return {str(key): value for key, value in params.items()}
    if isinstance(params, Sequence) and not isinstance(params, (str, bytes)):
        return {str(index): value for index, value in enumerate(params)}
    return {"0": params}


@dataclass(frozen=True)
class TranslationRequest:
    """Immutable input of a single :meth:`Translator.translate` call."""

    category: str
    message: str
    params: Mapping[str, Any]
    target_locale: Locale
    source_locale: Locale


class Translator:
    """Look up translations across locale candidates and format the result."""

    def __init__(
        self,
        catalogues: CatalogueRegistry | Mapping[str, MessageCatalogue] | None = None,
        *,
        source_locale: LocaleLike = DEFAULT_SOURCE_LOCALE,
        locale: LocaleLike | None = None,
        formatter: MessageFormatter | None = None,
        observers: TranslationObservers | None = None,
    ) -> None:
        if isinstance(catalogues, CatalogueRegistry):
            self.registry = catalogues
        else:
            self.registry = CatalogueRegistry(catalogues)
        self.source_locale = Locale.parse(source_locale)
        self.locale = Locale.parse(locale) if locale is not None else self.source_locale
        self.formatter = formatter or MessageFormatter()
        self.observers = observers or TranslationObservers()

    def add_catalogue(self, category: str, catalogue: MessageCatalogue) -> None:
        self.registry.register(category, catalogue)

    def get_catalogue(self, category: str) -> MessageCatalogue:
        return self.registry.get_catalogue(category)

    def translate(
        self,
        category: str,
        message: str,
        params: Any = None,
        locale: LocaleLike | None = None,
    ) -> str:
        """Return ``message`` translated into ``locale`` and formatted with ``params``.

        Missing translations never raise: the original message is formatted
        with the source locale instead. An unbound ``category`` raises
        :class:`~polymsg.config.schema.ConfigurationError`.
        """

        catalogue = self.get_catalogue(category)
        request = TranslationRequest(
            category=category,
            message=message,
            params=MappingProxyType(dict(normalise_params(params))),
            target_locale=Locale.parse(locale) if locale is not None else self.locale,
            source_locale=catalogue.source_language or self.source_locale,
        )

        translated, format_locale = self._resolve(request, catalogue)
        return self.formatter.format(translated, request.params, format_locale)

    def format(self, message: str, params: Any, locale: LocaleLike) -> str:
        """Format ``message`` without looking up a translation."""

        return self.formatter.format(message, normalise_params(params), locale)

    def _resolve(
        self,
        request: TranslationRequest,
        catalogue: MessageCatalogue,
    ) -> tuple[str, Locale]:
        target = request.target_locale
        source = request.source_locale

        if target == source and not catalogue.force_translation:
            return request.message, target

        for candidate in resolve_candidates(target, source):
            translation = catalogue.get_message(
                request.category,
                request.message,
                candidate,
                default_source=source,
            )
            if translation is not None:
                return translation, target

        event = self.observers.dispatch(
            MissingTranslationEvent(
                category=request.category,
                message=request.message,
                locale=target,
                source_locale=source,
                catalogue=catalogue,
            )
        )
        _LOGGER.debug(
            "Missing translation for '%s' in category '%s' (%s)",
            request.message,
            request.category,
            target,
        )

        if event.translated_message is not None:
            return event.translated_message, target
        # The untranslated text is in the source language, so use its rules.
        return request.message, source


__all__ = [
    "DEFAULT_SOURCE_LOCALE",
    "TranslationRequest",
    "Translator",
    "normalise_params",
]
