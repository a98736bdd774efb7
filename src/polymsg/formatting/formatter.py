"""Render parsed message patterns against a set of parameters."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from polymsg.localization.locale import LocaleLike

from .numbers import coerce_number, format_number
from .parser import (
    ArgumentNode,
    Message,
    NumberNode,
    PluralNode,
    PoundNode,
    SelectNode,
    TextNode,
    parse_pattern,
)
from .plurals import OTHER, plural_category


def _placeholder(name: str) -> str:
    return "{" + name + "}"


class MessageFormatter:
    """Format messages written in the ICU placeholder/plural/select subset.

    Formatting is best effort: missing parameters are rendered as ``{name}``
    and malformed placeholders are emitted verbatim.
    """

    def format(
        self,
        pattern: str,
        params: Mapping[str, Any] | None,
        locale: LocaleLike,
    ) -> str:
        if "{" not in pattern:
            return pattern
        return self._render(parse_pattern(pattern), params or {}, locale, None)

    def _render(
        self,
        message: Message,
        params: Mapping[str, Any],
        locale: LocaleLike,
        pound: str | None,
    ) -> str:
        chunks: list[str] = []
        for node in message:
            if isinstance(node, TextNode):
                chunks.append(node.text)
            elif isinstance(node, PoundNode):
                chunks.append("#" if pound is None else pound)
            elif isinstance(node, ArgumentNode):
                chunks.append(self._render_argument(node, params))
            elif isinstance(node, NumberNode):
                chunks.append(self._render_number(node, params, locale))
            elif isinstance(node, PluralNode):
                chunks.append(self._render_plural(node, params, locale))
            elif isinstance(node, SelectNode):
                chunks.append(self._render_select(node, params, locale, pound))
        return "".join(chunks)

    def _render_argument(self, node: ArgumentNode, params: Mapping[str, Any]) -> str:
        value = params.get(node.name)
        if value is None:
            return _placeholder(node.name)
        return str(value)

    def _render_number(
        self,
        node: NumberNode,
        params: Mapping[str, Any],
        locale: LocaleLike,
    ) -> str:
        value = params.get(node.name)
        if value is None:
            return _placeholder(node.name)
        try:
            return format_number(value, locale, node.style)
        except ValueError:
            # Unknown style or a pattern Babel cannot parse.
            return node.source

    def _render_plural(
        self,
        node: PluralNode,
        params: Mapping[str, Any],
        locale: LocaleLike,
    ) -> str:
        value = params.get(node.name)
        if value is None:
            return _placeholder(node.name)

        number = coerce_number(value)
        if number is None:
            return node.source

        branch = node.exact.get(Decimal(str(number)))
        adjusted = number - node.offset if node.offset else number
        if branch is None:
            category = plural_category(locale, adjusted)
            branch = node.branches.get(category, node.branches[OTHER])

        return self._render(branch, params, locale, format_number(adjusted, locale))

    def _render_select(
        self,
        node: SelectNode,
        params: Mapping[str, Any],
        locale: LocaleLike,
        pound: str | None,
    ) -> str:
        value = params.get(node.name)
        if value is None:
            return _placeholder(node.name)

        branch = node.branches.get(str(value), node.branches[OTHER])
        return self._render(branch, params, locale, pound)


__all__ = ["MessageFormatter"]
