"""CLDR plural category selection backed by Babel's locale data."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from numbers import Number

from polymsg.localization.locale import LocaleLike

from .numbers import find_babel_locale

ZERO = "zero"
ONE = "one"
TWO = "two"
FEW = "few"
MANY = "many"
OTHER = "other"

PLURAL_CATEGORIES = (ZERO, ONE, TWO, FEW, MANY, OTHER)


def plural_operand(number: Number | str) -> Decimal:
    """Return ``number`` as a finite ``Decimal`` keeping its visible fraction digits.

    ``1.0`` and ``1`` differ for CLDR rules, so floats go through ``repr``
    and strings are parsed as written.
    """

    try:
        if isinstance(number, float):
            value = Decimal(repr(number))
        else:
            value = Decimal(str(number))
    except InvalidOperation as error:
        raise ValueError(f"Not a number: {number!r}") from error

    if not value.is_finite():
        raise ValueError(f"Not a finite number: {number!r}")
    return value


def plural_category(locale: LocaleLike, number: Number | str) -> str:
    """Return the CLDR plural category of ``number`` in ``locale``.

    Locales unknown to CLDR use the single ``other`` category.
    """

    value = plural_operand(number)
    babel_locale = find_babel_locale(locale)
    if babel_locale is None:
        return OTHER
    return babel_locale.plural_form(value)


__all__ = [
    "FEW",
    "MANY",
    "ONE",
    "OTHER",
    "PLURAL_CATEGORIES",
    "TWO",
    "ZERO",
    "plural_category",
    "plural_operand",
]
