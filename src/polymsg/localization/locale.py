"""Locale values and the fallback chain used when looking up translations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_SUBTAG_SPLIT = re.compile(r"[-_]")
_LANGUAGE_PATTERN = re.compile(r"^[a-zA-Z]{2,8}$")
_SCRIPT_PATTERN = re.compile(r"^[a-zA-Z]{4}$")
_REGION_PATTERN = re.compile(r"^(?:[a-zA-Z]{2}|[0-9]{3})$")


@dataclass(frozen=True)
class Locale:
    """Language identifier optionally qualified by script and region."""

    language: str
    region: str | None = None
    script: str | None = None

    @classmethod
    def parse(cls, value: LocaleLike) -> Locale:
        """Build a locale from ``de-DE``, ``de_de`` or ``sr-Latn-RS`` strings."""

        if isinstance(value, Locale):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid locale identifier: {value!r}")

        # Drop encoding/modifier suffixes such as ``de_DE.UTF-8`` or ``sr@latin``.
        cleaned = value.strip().split(".")[0].split("@")[0]
        parts = _SUBTAG_SPLIT.split(cleaned)
        if not _LANGUAGE_PATTERN.match(parts[0]):
            raise ValueError(f"Invalid locale identifier: {value!r}")

        language = parts[0].lower()
        script: str | None = None
        region: str | None = None

        for part in parts[1:]:
            if script is None and region is None and _SCRIPT_PATTERN.match(part):
                script = part.title()
            elif region is None and _REGION_PATTERN.match(part):
                region = part.upper()
            else:
                # Variants and extensions are not significant for lookups.
                break

        return cls(language=language, region=region, script=script)

    @property
    def specificity(self) -> int:
        """Return the number of subtags carried by the locale."""

        return 1 + (self.script is not None) + (self.region is not None)

    def language_only(self) -> Locale:
        return Locale(language=self.language)

    def __str__(self) -> str:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        return "-".join(parts)


LocaleLike = Union[Locale, str]


def normalise_locale(locale: LocaleLike) -> str:
    """Return the canonical ``language[-Script][-REGION]`` form of ``locale``."""

    return str(Locale.parse(locale))


def resolve_candidates(target: LocaleLike, source: LocaleLike) -> tuple[Locale, ...]:
    """Return the ordered locales to try when translating into ``target``.

    The chain is the exact target, the bare target language, the source locale
    and finally the bare source language, without duplicates.
    """

    target_locale = Locale.parse(target)
    source_locale = Locale.parse(source)

    candidates: list[Locale] = []
    for candidate in (
        target_locale,
        target_locale.language_only(),
        source_locale,
        source_locale.language_only(),
    ):
        if candidate not in candidates:
            candidates.append(candidate)

    return tuple(candidates)


__all__ = ["Locale", "LocaleLike", "normalise_locale", "resolve_candidates"]
