"""Message catalogue implementations and the category registry."""

from .base import MessageCatalogue, MessageTable
from .files import FileMessageCatalogue, JsonMessageCatalogue, YamlMessageCatalogue
from .memory import InMemoryMessageCatalogue
from .registry import WILDCARD, CatalogueRegistry
from .sqlite import SQLiteMessageCatalogue

__all__ = [
    "CatalogueRegistry",
    "FileMessageCatalogue",
    "InMemoryMessageCatalogue",
    "JsonMessageCatalogue",
    "MessageCatalogue",
    "MessageTable",
    "SQLiteMessageCatalogue",
    "WILDCARD",
    "YamlMessageCatalogue",
]
