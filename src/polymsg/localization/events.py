"""Missing-translation notifications and the observers that receive them."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import TYPE_CHECKING, Callable, Hashable, Iterable

from .locale import Locale

if TYPE_CHECKING:  # pragma: no cover - only for static type checkers
    from polymsg.catalogues.base import MessageCatalogue


@dataclass
class MissingTranslationEvent:
    """Raised when no candidate locale produced a translation.

    Observers may assign ``translated_message``; the last assignment wins. When
    it stays ``None`` the original message is used.
    """

    category: str
    message: str
    locale: Locale
    source_locale: Locale
    catalogue: MessageCatalogue | None = field(default=None, repr=False)
    translated_message: str | None = None


MissingTranslationHandler = Callable[[MissingTranslationEvent], None]


class TranslationObservers:
    """Ordered registry of missing-translation handlers keyed by scope.

    A scope is either a catalogue class, which observes misses of that class
    and its subclasses, or a category name.
    """

    def __init__(self) -> None:
        self._handlers: dict[Hashable, list[MissingTranslationHandler]] = {}
        self._lock = Lock()

    def subscribe(self, scope: Hashable, handler: MissingTranslationHandler) -> None:
        with self._lock:
            self._handlers.setdefault(scope, []).append(handler)

    def unsubscribe(
        self,
        scope: Hashable,
        handler: MissingTranslationHandler | None = None,
    ) -> bool:
        """Remove ``handler`` (or every handler) from ``scope``.

        Returns ``True`` when something was removed.
        """

        with self._lock:
            handlers = self._handlers.get(scope)
            if not handlers:
                return False
            if handler is None:
                del self._handlers[scope]
                return True
            try:
                handlers.remove(handler)
            except ValueError:
                return False
            if not handlers:
                del self._handlers[scope]
            return True

    def handlers_for(self, scopes: Iterable[Hashable]) -> list[MissingTranslationHandler]:
        with self._lock:
            return [
                handler
                for scope in scopes
                for handler in self._handlers.get(scope, ())
            ]

    def dispatch(self, event: MissingTranslationEvent) -> MissingTranslationEvent:
        """Invoke the handlers interested in ``event`` in registration order."""

        for handler in self.handlers_for(event_scopes(event)):
            handler(event)
        return event


def event_scopes(event: MissingTranslationEvent) -> list[Hashable]:
    """Return the scopes notified for ``event``: catalogue classes, then category."""

    scopes: list[Hashable] = []
    if event.catalogue is not None:
        scopes.extend(
            cls for cls in type(event.catalogue).__mro__ if cls is not object
        )
    scopes.append(event.category)
    return scopes


__all__ = [
    "MissingTranslationEvent",
    "MissingTranslationHandler",
    "TranslationObservers",
    "event_scopes",
]
