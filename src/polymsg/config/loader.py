"""Load translator configuration from YAML and build the runtime objects."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from polymsg.catalogues import (
    CatalogueRegistry,
    InMemoryMessageCatalogue,
    JsonMessageCatalogue,
    MessageCatalogue,
    SQLiteMessageCatalogue,
    YamlMessageCatalogue,
)
from polymsg.localization.translator import Translator

from .schema import CatalogueConfig, ConfigurationError, TranslatorConfig

CONFIG_ENV_VAR = "POLYMSG_CONFIG"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_config_path(path: str | os.PathLike[str] | None = None) -> Path:
    """Return the configuration file path, consulting ``POLYMSG_CONFIG`` when unset."""

    raw = path if path is not None else os.getenv(CONFIG_ENV_VAR)
    if not raw:
        raise ConfigurationError(
            f"No configuration path given and {CONFIG_ENV_VAR} is not set"
        )
    return Path(raw)


def load_translator_config(path: str | os.PathLike[str] | None = None) -> TranslatorConfig:
    """Load and validate a translator configuration file."""

    config_file = resolve_config_path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Translator configuration not found: {config_file}")

    raw_config = _load_yaml(config_file)
    try:
        return TranslatorConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(
            f"Configuration validation failed for {config_file.name}: {error}"
        ) from error


def _resolve_relative(value: str, root: Path | None) -> Path:
    candidate = Path(value).expanduser()
    if root is not None and not candidate.is_absolute():
        return root / candidate
    return candidate


def build_catalogue(config: CatalogueConfig, root: Path | None = None) -> MessageCatalogue:
    """Instantiate the catalogue described by ``config``.

    Relative paths are resolved against ``root``, usually the directory of the
    configuration file.
    """

    options: dict[str, Any] = {
        "source_language": config.source_language,
        "force_translation": config.force_translation,
    }

    if config.type == "memory":
        return InMemoryMessageCatalogue(config.messages, **options)
    if config.type == "sqlite":
        if not config.path:
            raise ConfigurationError("'sqlite' catalogues require a database path")
        return SQLiteMessageCatalogue(_resolve_relative(config.path, root), **options)

    if not config.base_path:
        raise ConfigurationError(f"'{config.type}' catalogues require a base_path")
    catalogue_class = JsonMessageCatalogue if config.type == "json" else YamlMessageCatalogue
    return catalogue_class(
        _resolve_relative(config.base_path, root),
        file_map=config.file_map,
        **options,
    )


def build_translator(config: TranslatorConfig, root: Path | None = None) -> Translator:
    """Create a :class:`Translator` with every configured catalogue bound."""

    registry = CatalogueRegistry(
        {
            category: build_catalogue(catalogue_config, root)
            for category, catalogue_config in config.catalogues.items()
        }
    )
    return Translator(
        registry,
        source_locale=config.source_locale,
        locale=config.locale,
    )


def create_translator(path: str | os.PathLike[str] | None = None) -> Translator:
    """Load the configuration at ``path`` and return a ready translator."""

    config_file = resolve_config_path(path)
    config = load_translator_config(config_file)
    return build_translator(config, config_file.resolve().parent)


__all__ = [
    "CONFIG_ENV_VAR",
    "build_catalogue",
    "build_translator",
    "create_translator",
    "load_translator_config",
    "resolve_config_path",
]
