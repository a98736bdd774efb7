"""Locale handling, missing-translation events and the translator."""

from .locale import Locale, LocaleLike, normalise_locale, resolve_candidates
from .events import MissingTranslationEvent, TranslationObservers
from .translator import TranslationRequest, Translator, normalise_params

__all__ = [
    "Locale",
    "LocaleLike",
    "MissingTranslationEvent",
    "TranslationObservers",
    "TranslationRequest",
    "Translator",
    "normalise_locale",
    "normalise_params",
    "resolve_candidates",
]
