"""Mapping of message categories to the catalogues serving them."""

from __future__ import annotations

from threading import Lock
from typing import Mapping

from polymsg.config.schema import ConfigurationError

from .base import MessageCatalogue

WILDCARD = "*"


class CatalogueRegistry:
    """Resolve a category to its catalogue, falling back to the ``*`` binding."""

    def __init__(self, catalogues: Mapping[str, MessageCatalogue] | None = None) -> None:
        self._catalogues: dict[str, MessageCatalogue] = dict(catalogues or {})
        self._lock = Lock()

    def register(self, category: str, catalogue: MessageCatalogue) -> None:
        with self._lock:
            self._catalogues[category] = catalogue

    def get_catalogue(self, category: str) -> MessageCatalogue:
        """Return the catalogue bound to ``category``.

        Raises :class:`ConfigurationError` when neither the category nor the
        wildcard has a binding.
        """

        catalogue = self._catalogues.get(category)
        if catalogue is None:
            catalogue = self._catalogues.get(WILDCARD)
        if catalogue is None:
            raise ConfigurationError(
                f"No message catalogue configured for category '{category}'"
            )
        return catalogue

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._catalogues)

    def catalogues(self) -> tuple[MessageCatalogue, ...]:
        return tuple(self._catalogues.values())


__all__ = ["CatalogueRegistry", "WILDCARD"]
