"""Configuration schema for translators and their catalogues.

The YAML loader lives in :mod:`polymsg.config.loader` and the catalogue
validator in :mod:`polymsg.config.validator`.
"""

from .schema import CatalogueConfig, ConfigurationError, ImmutableModel, TranslatorConfig

__all__ = ["CatalogueConfig", "ConfigurationError", "ImmutableModel", "TranslatorConfig"]
