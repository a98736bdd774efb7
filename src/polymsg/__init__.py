"""Message translation with locale fallback, pluggable catalogues and ICU-style formatting."""

from .localization import (
    Locale,
    MissingTranslationEvent,
    TranslationObservers,
    Translator,
    normalise_locale,
    resolve_candidates,
)
from .catalogues import (
    CatalogueRegistry,
    InMemoryMessageCatalogue,
    JsonMessageCatalogue,
    MessageCatalogue,
    SQLiteMessageCatalogue,
    YamlMessageCatalogue,
)
from .config import ConfigurationError
from .formatting import MessageFormatter, plural_category
from .version import get_project_version

__version__ = get_project_version()

__all__ = [
    "__version__",
    "CatalogueRegistry",
    "ConfigurationError",
    "InMemoryMessageCatalogue",
    "JsonMessageCatalogue",
    "Locale",
    "MessageCatalogue",
    "MessageFormatter",
    "MissingTranslationEvent",
    "SQLiteMessageCatalogue",
    "TranslationObservers",
    "Translator",
    "YamlMessageCatalogue",
    "normalise_locale",
    "plural_category",
    "resolve_candidates",
]
