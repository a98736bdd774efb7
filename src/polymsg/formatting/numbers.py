"""Locale-aware number formatting backed by Babel."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from numbers import Number
from typing import Any

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel.numbers import format_decimal, format_percent

from polymsg.localization.locale import Locale, LocaleLike

_ROOT_LOCALE = "en"


class UnsupportedNumberStyle(ValueError):
    """Raised when a ``{name, number, style}`` style cannot be applied."""


@lru_cache(maxsize=64)
def _find_babel_locale(identifier: str) -> BabelLocale | None:
    for candidate in (identifier, Locale.parse(identifier).language):
        try:
            return BabelLocale.parse(candidate, sep="-")
        except (UnknownLocaleError, ValueError):
            continue
    return None


def find_babel_locale(locale: LocaleLike) -> BabelLocale | None:
    """Return the Babel locale for ``locale`` or its language, if CLDR has one."""

    try:
        identifier = str(Locale.parse(locale))
    except ValueError:
        return None
    return _find_babel_locale(identifier)


def babel_locale(locale: LocaleLike) -> BabelLocale:
    """Return the Babel locale for ``locale``, degrading to the root locale."""

    found = find_babel_locale(locale)
    return found if found is not None else BabelLocale.parse(_ROOT_LOCALE)


def coerce_number(value: Any) -> int | float | Decimal | None:
    """Return ``value`` as a number, or ``None`` when it is not numeric."""

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, Number):
        try:
            number = float(value)  # type: ignore[arg-type]
        except TypeError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str) and value.strip():
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def _is_pattern(style: str) -> bool:
    return any(symbol in style for symbol in "#0")


def format_number(value: Any, locale: LocaleLike, style: str | None = None) -> str:
    """Format ``value`` using the number conventions of ``locale``.

    Non-numeric values are returned as plain strings. Unknown styles raise
    :class:`UnsupportedNumberStyle` so callers can decide how to degrade.
    """

    number = coerce_number(value)
    if number is None:
        return str(value)

    target = babel_locale(locale)
    if style is None or style == "decimal":
        return format_decimal(number, locale=target)
    if style == "integer":
        return format_decimal(number, format="#,##0", locale=target)
    if style == "percent":
        return format_percent(number, locale=target)
    if _is_pattern(style):
        return format_decimal(number, format=style, locale=target)
    raise UnsupportedNumberStyle(style)


__all__ = [
    "UnsupportedNumberStyle",
    "babel_locale",
    "find_babel_locale",
    "coerce_number",
    "format_number",
]
