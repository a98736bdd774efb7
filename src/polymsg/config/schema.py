"""Pydantic models describing translator configuration files."""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from polymsg.localization.locale import normalise_locale


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _canonical_locale(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"Locale identifiers must be strings, got {value!r}")
    try:
        return normalise_locale(value)
    except ValueError as error:
        raise ConfigurationError(str(error)) from error


CatalogueType = Literal["json", "yaml", "memory", "sqlite"]


class CatalogueConfig(ImmutableModel):
    """Binding of one category (or ``*``) to a catalogue implementation."""

    type: CatalogueType = "json"
    base_path: str | None = None
    path: str | None = None
    file_map: Mapping[str, str] = Field(default_factory=dict)
    source_language: str | None = None
    force_translation: bool = False
    messages: Mapping[str, Mapping[str, Mapping[str, str]]] = Field(default_factory=dict)

    @field_validator("source_language", mode="before")
    @classmethod
    def _normalise_source_language(cls, value: Any) -> str | None:
        if value is None:
            return None
        return _canonical_locale(value)

    @field_validator("messages", mode="before")
    @classmethod
    def _coerce_messages(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("Inline messages must be a mapping of locales")
        return {_canonical_locale(locale): tables for locale, tables in value.items()}

    @model_validator(mode="after")
    def _validate_storage(self) -> Self:
        if self.type in ("json", "yaml") and not self.base_path:
            raise ConfigurationError(f"'{self.type}' catalogues require a base_path")
        if self.type == "sqlite" and not self.path:
            raise ConfigurationError("'sqlite' catalogues require a database path")
        if self.file_map and self.type not in ("json", "yaml"):
            raise ConfigurationError("file_map is only supported by file catalogues")
        return self


class TranslatorConfig(ImmutableModel):
    """Top-level translator configuration."""

    source_locale: str = "en-US"
    locale: str | None = None
    catalogues: Mapping[str, CatalogueConfig] = Field(default_factory=dict)

    @field_validator("source_locale", "locale", mode="before")
    @classmethod
    def _normalise_locales(cls, value: Any) -> str | None:
        if value is None:
            return None
        return _canonical_locale(value)

    @model_validator(mode="after")
    def _validate_catalogues(self) -> Self:
        for category in self.catalogues:
            if not category.strip():
                raise ConfigurationError("Catalogue categories must be non-empty strings")
        return self


__all__ = [
    "CatalogueConfig",
    "CatalogueType",
    "ConfigurationError",
    "ImmutableModel",
    "TranslatorConfig",
    "ValidationError",
]
